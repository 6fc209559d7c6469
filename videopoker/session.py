"""
Video poker session state machine.

One SessionStateMachine drives one player's table from the first bet to game
over. The step methods (`select_bet`, `deal`, `hold`, `draw_and_evaluate`,
`start_gamble`/`finish_gamble`, `settle`) enforce the legal phase order and the
credit rules; `run()` strings them together with prompts on a LineChannel.

Phase order:

    bet-selection -> awaiting-deal -> hold-selection -> evaluating
        -> [gamble-decision -> [gambling]] -> settlement
        -> awaiting-deal | game-over

A player may also leave from any phase (exit sentinel or disconnect), which
goes straight to game-over.
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, FrozenSet, Iterable, List, Optional

from videopoker.channel import ChannelClosed, LineChannel
from videopoker.config import CLASSIC, GameConfig
from videopoker.deck import Card, Deck
from videopoker.gamble import MAX_ROUNDS, GambleEngine, is_collect, parse_colour
from videopoker.hand_evaluator import HAND_SIZE, EvaluationResult, describe, evaluate
from videopoker.messages import Messages, Msg, is_exit
from videopoker.random_source import RandomSource
from videopoker.scoreboard import Scoreboard
from videopoker.table_view import TableView
from videopoker.terminal_ui import TerminalUI


BET_SELECTION = 'bet-selection'
AWAITING_DEAL = 'awaiting-deal'
HOLD_SELECTION = 'hold-selection'
EVALUATING = 'evaluating'
GAMBLE_DECISION = 'gamble-decision'
GAMBLING = 'gambling'
SETTLEMENT = 'settlement'
GAME_OVER = 'game-over'

TRANSITIONS = {
    BET_SELECTION: {AWAITING_DEAL, GAME_OVER},
    AWAITING_DEAL: {HOLD_SELECTION, BET_SELECTION, GAME_OVER},
    HOLD_SELECTION: {EVALUATING, GAME_OVER},
    EVALUATING: {GAMBLE_DECISION, SETTLEMENT, GAME_OVER},
    GAMBLE_DECISION: {GAMBLING, SETTLEMENT, GAME_OVER},
    GAMBLING: {SETTLEMENT, GAME_OVER},
    SETTLEMENT: {AWAITING_DEAL, GAME_OVER},
    GAME_OVER: set(),
}


class PlayerExit(Exception):
    """The player typed the exit sentinel."""


def parse_bet(raw: str, config: GameConfig) -> int:
    """Bet from player input; anything outside the allowed tiers is the default."""
    try:
        bet = int(raw.strip())
    except ValueError:
        return config.default_bet
    if bet not in config.allowed_bets:
        return config.default_bet
    return bet


def parse_holds(raw: str) -> FrozenSet[int]:
    """0-based positions to hold, from the digits 1-5 anywhere in the input."""
    positions = set()
    for digit in re.findall(r"\d", raw):
        number = int(digit)
        if 1 <= number <= HAND_SIZE:
            positions.add(number - 1)
    return frozenset(positions)


@dataclass
class SessionState:
    credits: int
    current_bet: int
    hands_played: int = 0
    pending_win: int = 0


class SessionStateMachine:
    """Runs one player's video poker session over a line channel."""

    def __init__(
        self,
        channel: LineChannel,
        config: GameConfig = CLASSIC,
        rng: Optional[RandomSource] = None,
        ui: Optional[TerminalUI] = None,
        messages: Optional[Messages] = None,
        scoreboard: Optional[Scoreboard] = None,
        deck_factory: Callable[[], Deck] = Deck,
        motd: Optional[str] = None,
    ):
        self.channel = channel
        self.config = config
        self.rng = rng or RandomSource()
        self.messages = messages or Messages()
        self.ui = ui or TerminalUI(self.messages)
        self.scoreboard = scoreboard if config.scoreboard_enabled else None
        self.deck_factory = deck_factory
        self.motd = motd
        self.player_name = channel.username or "guest"

        self.state = SessionState(credits=config.starting_credits, current_bet=config.default_bet)
        self.phase = BET_SELECTION
        self.deck: Optional[Deck] = None
        self.hand: List[Card] = []
        self.held: FrozenSet[int] = frozenset()
        self.result: Optional[EvaluationResult] = None
        self.gamble: Optional[GambleEngine] = None

    # ------------------------------------------------------------------
    # Phase bookkeeping
    # ------------------------------------------------------------------

    def _enter(self, phase: str) -> None:
        if phase not in TRANSITIONS[self.phase]:
            raise RuntimeError(f"Illegal session transition {self.phase} -> {phase}")
        logging.debug(f"Session {self.player_name}: {self.phase} -> {phase}")
        self.phase = phase

    def _require(self, *phases: str) -> None:
        if self.phase not in phases:
            raise RuntimeError(f"Expected phase {' or '.join(phases)}, session is in {self.phase}")

    @property
    def is_over(self) -> bool:
        return self.phase == GAME_OVER

    def can_afford(self) -> bool:
        return self.state.credits >= self.state.current_bet

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def select_bet(self, raw: str) -> int:
        self._require(BET_SELECTION)
        self.state.current_bet = parse_bet(raw, self.config)
        self._enter(AWAITING_DEAL)
        return self.state.current_bet

    def request_bet_change(self) -> None:
        self._require(AWAITING_DEAL)
        if not self.config.allow_bet_change:
            raise RuntimeError(f"The {self.config.name} table does not allow changing the bet")
        self._enter(BET_SELECTION)

    def end(self) -> None:
        """Jump to game over from whatever phase the session is in."""
        if self.phase != GAME_OVER:
            self._enter(GAME_OVER)

    def deal(self) -> Optional[List[Card]]:
        """Debit the bet and deal five cards from a fresh deck.

        Returns None (and ends the game) when the player cannot cover the bet.
        """
        self._require(AWAITING_DEAL)
        if not self.can_afford():
            self._enter(GAME_OVER)
            return None

        self.state.credits -= self.state.current_bet
        self.state.pending_win = 0
        self.deck = self.deck_factory()
        self.deck.shuffle(self.rng)
        self.hand = self.deck.draw(HAND_SIZE)
        self.held = frozenset()
        self.result = None
        self._enter(HOLD_SELECTION)
        logging.debug(f"Session {self.player_name}: dealt {', '.join(str(c) for c in self.hand)}")
        return list(self.hand)

    def hold(self, positions: Iterable[int]) -> FrozenSet[int]:
        """Record the 0-based positions to keep through the draw."""
        self._require(HOLD_SELECTION)
        self.held = frozenset(p for p in positions if 0 <= p < HAND_SIZE)
        self._enter(EVALUATING)
        return self.held

    def draw_and_evaluate(self) -> EvaluationResult:
        """Replace the non-held cards from the same deck and score the hand once."""
        self._require(EVALUATING)
        if self.result is not None:
            raise RuntimeError("Hand has already been evaluated")

        for i in range(HAND_SIZE):
            if i not in self.held:
                self.hand[i] = self.deck.draw(1)[0]
        # the deck is not used again after the draw
        self.deck = None

        self.result = evaluate(self.hand)
        self.state.pending_win = self.state.current_bet * self.result.multiplier
        logging.info(
            f"Session {self.player_name}: {self.result.classification} "
            f"(bet {self.state.current_bet}, win {self.state.pending_win})"
        )
        self._enter(GAMBLE_DECISION if self.state.pending_win > 0 else SETTLEMENT)
        return self.result

    def decline_gamble(self) -> None:
        self._require(GAMBLE_DECISION)
        self._enter(SETTLEMENT)

    def start_gamble(self) -> GambleEngine:
        self._require(GAMBLE_DECISION)
        self.gamble = GambleEngine(self.state.pending_win, self.config.max_gamble_rounds, self.rng)
        self._enter(GAMBLING)
        return self.gamble

    def finish_gamble(self) -> int:
        """Carry the gamble's final win into settlement."""
        self._require(GAMBLING)
        if self.gamble is None or not self.gamble.finished:
            raise RuntimeError("Gamble is still in progress")
        logging.info(
            f"Session {self.player_name}: gamble {self.gamble.outcome} after "
            f"{len(self.gamble.state.history)} flips, win {self.gamble.current_win}"
        )
        self.state.pending_win = self.gamble.current_win
        self.gamble = None
        self._enter(SETTLEMENT)
        return self.state.pending_win

    def settle(self) -> int:
        """Credit the pending win and decide whether another hand can be dealt."""
        self._require(SETTLEMENT)
        won = self.state.pending_win
        self.state.credits += won
        self.state.pending_win = 0
        self.state.hands_played += 1
        self._enter(AWAITING_DEAL if self.can_afford() else GAME_OVER)
        return won

    # ------------------------------------------------------------------
    # Channel I/O
    # ------------------------------------------------------------------

    async def _prompt(self, text: str) -> str:
        answer = await self.channel.read_line(text)
        if is_exit(answer):
            raise PlayerExit()
        return answer

    async def _say(self, key: Msg, **kwargs) -> None:
        await self.channel.write_line(self.messages.get(key, **kwargs))

    async def _show(self, **kwargs) -> None:
        view = TableView(
            credits=self.state.credits,
            bet=self.state.current_bet,
            scoreboard=self.scoreboard.snapshot() if self.scoreboard else None,
            **kwargs,
        )
        await self.channel.write(self.ui.render(view))

    def _bet_prompt(self) -> str:
        bets = ", ".join(str(bet) for bet in self.config.allowed_bets)
        return self.messages.get(Msg.BET_PROMPT, bets=bets, default=self.config.default_bet)

    async def run(self) -> SessionState:
        """Play until game over, exit or disconnect; always releases the session."""
        logging.info(f"Session started for {self.player_name} on the {self.config.name} table")
        try:
            await self.channel.write(self.ui.header(self.motd))
            await self._play()
        except PlayerExit:
            logging.info(f"Session {self.player_name}: player exited")
            try:
                await self._say(Msg.GOODBYE)
            except ChannelClosed:
                pass
        except ChannelClosed as e:
            logging.info(f"Session {self.player_name}: channel closed ({e})")
        except Exception:
            logging.exception(f"Session {self.player_name}: unexpected error")
            try:
                await self._say(Msg.INTERNAL_ERROR)
            except ChannelClosed:
                pass
        finally:
            self._release()
            await self.channel.close()
        logging.info(
            f"Session ended for {self.player_name}: {self.state.hands_played} hands, "
            f"{self.state.credits} credits"
        )
        return self.state

    def _release(self) -> None:
        self.deck = None
        self.gamble = None
        if self.phase != GAME_OVER:
            self.phase = GAME_OVER

    async def _play(self) -> None:
        self.select_bet(await self._prompt(self._bet_prompt()))

        while True:
            if not self.can_afford():
                self.end()
                break

            await self._show(message=self.messages.get(Msg.BET_SUMMARY, bet=self.state.current_bet))
            if self.config.allow_bet_change:
                answer = await self._prompt(self.messages.get(Msg.DEAL_OR_CHANGE_PROMPT))
                if answer.lower() == 'bet':
                    self.request_bet_change()
                    await self._change_bet()
                    continue
            else:
                await self._prompt(self.messages.get(Msg.DEAL_PROMPT))

            if self.deal() is None:
                break
            won = await self._play_hand()

            if self.scoreboard is not None:
                await self.scoreboard.record_hand(self.player_name, won)
            if self.is_over:
                break

        await self._game_over()

    async def _change_bet(self) -> None:
        """Ask for a new bet until the player picks one they can cover."""
        while True:
            raw = await self._prompt(self._bet_prompt())
            if parse_bet(raw, self.config) <= self.state.credits:
                break
            await self._say(Msg.BET_TOO_HIGH, credits=self.state.credits)
        self.select_bet(raw)

    async def _play_hand(self) -> int:
        await self._show(hand=self.hand, message=self.messages.get(Msg.HOLD_INSTRUCTIONS), show_indices=True)
        raw = await self._prompt(self.messages.get(Msg.HOLD_PROMPT))
        holds = parse_holds(raw)
        if not raw:
            await self._say(Msg.HOLD_NONE)
            await self._prompt(self.messages.get(Msg.DRAW_PROMPT))
        self.hold(holds)

        result = self.draw_and_evaluate()
        await self._show(
            hand=self.hand,
            message=describe(result, self.messages),
            win=self.state.pending_win,
            highlight_name=result.classification if result.is_win else "",
            highlighted_indices=result.winning_indices,
        )
        await self._prompt(self.messages.get(Msg.CONTINUE_PROMPT))

        if self.phase == GAMBLE_DECISION:
            answer = await self._prompt(self.messages.get(Msg.GAMBLE_OFFER))
            if answer.lower().startswith('y'):
                await self._play_gamble()
            else:
                self.decline_gamble()

        return self.settle()

    async def _play_gamble(self) -> None:
        engine = self.start_gamble()
        multi_round = engine.max_rounds > 1

        while not engine.finished:
            if multi_round:
                prompt = self.messages.get(
                    Msg.GAMBLE_GUESS_OR_COLLECT, round=engine.round + 1, max_rounds=engine.max_rounds
                )
            else:
                prompt = self.messages.get(Msg.GAMBLE_GUESS)
            answer = await self._prompt(prompt)

            if multi_round and is_collect(answer):
                engine.cash_out()
                await self._say(Msg.GAMBLE_COLLECTED, win=engine.current_win)
                break

            colour = parse_colour(answer)
            if colour is None:
                await self._say(Msg.GAMBLE_INVALID)
                continue

            flip = engine.guess(colour)
            if flip.correct:
                await self._show(
                    hand=self.hand,
                    message=self.messages.get(Msg.GAMBLE_WON, colour=flip.drawn, win=flip.win),
                    win=flip.win,
                    highlight_name=self.result.classification,
                )
            else:
                await self._show(hand=self.hand, message=self.messages.get(Msg.GAMBLE_LOST, colour=flip.drawn))

        if engine.outcome == MAX_ROUNDS and multi_round:
            await self._say(Msg.GAMBLE_MAXED, win=engine.current_win)
        self.finish_gamble()
        await self._prompt(self.messages.get(Msg.CONTINUE_PROMPT))

    async def _game_over(self) -> None:
        await self._show(hand=self.hand or None, message=self.messages.get(Msg.NOT_ENOUGH_CREDITS))
        await self._say(Msg.YOU_LOSE)
        await self._say(Msg.FINAL_TALLY, hands=self.state.hands_played, credits=self.state.credits)
        await self._say(Msg.GAME_OVER)
