"""
Double-or-nothing gamble for Video-Poker-over-SSH.

After a winning hand the player may guess the colour of the "next card". The
card is a fair coin flip, not a draw from the deck: each round is independent
of the ones before it.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from videopoker.random_source import RandomSource


RED = 'red'
BLACK = 'black'

# Termination outcomes
CASHED_OUT = 'cashed-out'
LOST = 'lost'
MAX_ROUNDS = 'max-rounds'

COLLECT_ANSWERS = ('c', 'collect')


def parse_colour(text: str) -> Optional[str]:
    """Map player input to a colour, or None when it is neither."""
    answer = text.strip().lower()
    if answer in ('r', RED):
        return RED
    if answer in ('b', BLACK):
        return BLACK
    return None


def is_collect(text: str) -> bool:
    return text.strip().lower() in COLLECT_ANSWERS


@dataclass
class GambleState:
    current_win: int
    round: int = 0
    history: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class GambleRound:
    guess: str
    drawn: str
    correct: bool
    win: int


class GambleEngine:
    """Bounded sequence of red/black guesses on a pending win."""

    def __init__(self, win: int, max_rounds: int, rng: RandomSource):
        if win <= 0:
            raise ValueError(f"Gamble needs a positive win, got {win}")
        if max_rounds < 1:
            raise ValueError(f"Gamble needs at least one round, got {max_rounds}")
        self.state = GambleState(current_win=win)
        self.max_rounds = max_rounds
        self.outcome: Optional[str] = None
        self._rng = rng

    @property
    def current_win(self) -> int:
        return self.state.current_win

    @property
    def round(self) -> int:
        return self.state.round

    @property
    def finished(self) -> bool:
        return self.outcome is not None

    def _check_active(self):
        if self.finished:
            raise RuntimeError(f"Gamble already finished ({self.outcome})")

    def guess(self, colour: str) -> GambleRound:
        """Play one round against a fresh coin flip."""
        self._check_active()
        if colour not in (RED, BLACK):
            raise ValueError(f"Unknown colour: {colour!r}")

        drawn = RED if self._rng.coin_flip() else BLACK
        self.state.history.append(drawn)
        correct = drawn == colour
        if correct:
            self.state.current_win *= 2
            self.state.round += 1
            if self.state.round >= self.max_rounds:
                self.outcome = MAX_ROUNDS
        else:
            self.state.current_win = 0
            self.outcome = LOST
        return GambleRound(guess=colour, drawn=drawn, correct=correct, win=self.state.current_win)

    def cash_out(self) -> int:
        """Stop gambling and keep the current win."""
        self._check_active()
        self.outcome = CASHED_OUT
        return self.state.current_win
