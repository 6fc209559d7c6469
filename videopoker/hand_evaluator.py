"""
Hand evaluation for Video-Poker-over-SSH.

Classifies a five-card video poker hand against the Jacks or Better pay table
and reports which positions made the win so the UI can highlight them.
"""

from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Optional, Sequence

from videopoker.deck import Card
from videopoker.messages import Messages, Msg
from videopoker.paytable import (
    FLUSH,
    FOUR_OF_A_KIND,
    FULL_HOUSE,
    JACKS_OR_BETTER,
    NO_WIN,
    ROYAL_FLUSH,
    STRAIGHT,
    STRAIGHT_FLUSH,
    THREE_OF_A_KIND,
    TWO_PAIR,
    multiplier_for,
)

HAND_SIZE = 5
ALL_POSITIONS = frozenset(range(HAND_SIZE))
WHEEL = [2, 3, 4, 5, 14]


@dataclass(frozen=True)
class EvaluationResult:
    classification: str
    multiplier: int
    winning_indices: FrozenSet[int]

    @property
    def is_win(self) -> bool:
        return self.multiplier > 0


def _result(classification: str, indices) -> EvaluationResult:
    return EvaluationResult(classification, multiplier_for(classification), frozenset(indices))


def _is_straight(values: List[int]) -> bool:
    # values sorted ascending
    if all(values[i] == values[i - 1] + 1 for i in range(1, len(values))):
        return True
    return values == WHEEL


def evaluate(hand: Sequence[Card]) -> EvaluationResult:
    """Evaluate exactly 5 cards; categories are checked best first."""
    if len(hand) != HAND_SIZE:
        raise ValueError(f"A hand has exactly {HAND_SIZE} cards, got {len(hand)}")

    values = sorted(card.value for card in hand)
    suits = [card.suit for card in hand]
    is_flush = len(set(suits)) == 1
    is_straight = _is_straight(values)

    # rank value -> positions holding that rank
    positions: Dict[int, List[int]] = {}
    for i, card in enumerate(hand):
        positions.setdefault(card.value, []).append(i)

    if is_flush and is_straight and values[0] == 10:
        return _result(ROYAL_FLUSH, ALL_POSITIONS)
    if is_flush and is_straight:
        return _result(STRAIGHT_FLUSH, ALL_POSITIONS)

    for indices in positions.values():
        if len(indices) == 4:
            return _result(FOUR_OF_A_KIND, indices)

    counts = [len(indices) for indices in positions.values()]
    if 3 in counts and 2 in counts:
        return _result(FULL_HOUSE, ALL_POSITIONS)
    if is_flush:
        return _result(FLUSH, ALL_POSITIONS)
    if is_straight:
        return _result(STRAIGHT, ALL_POSITIONS)

    for indices in positions.values():
        if len(indices) == 3:
            return _result(THREE_OF_A_KIND, indices)

    pair_indices: List[int] = []
    for indices in positions.values():
        if len(indices) == 2:
            pair_indices.extend(indices)
    if len(pair_indices) == 4:
        return _result(TWO_PAIR, pair_indices)

    for value, indices in positions.items():
        if len(indices) == 2 and value >= 11:
            return _result(JACKS_OR_BETTER, indices)

    return _result(NO_WIN, ())


def describe(result: EvaluationResult, messages: Optional[Messages] = None) -> str:
    """Human-readable line for the final hand."""
    messages = messages or Messages()
    if result.is_win:
        return messages.get(Msg.FINAL_HAND_WIN, classification=result.classification)
    return messages.get(Msg.FINAL_HAND_NO_WIN)
