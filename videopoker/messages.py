"""
Player-facing text for Video-Poker-over-SSH.

Every prompt and status line a session prints is looked up here by key. The
table is built once when the server starts; deployments can swap individual
templates without touching the session logic.
"""

from enum import Enum
from typing import Dict, Mapping, Optional


EXIT_SENTINEL = "exit"


class Msg(Enum):
    BET_PROMPT = "bet_prompt"
    BET_SUMMARY = "bet_summary"
    BET_TOO_HIGH = "bet_too_high"
    DEAL_PROMPT = "deal_prompt"
    DEAL_OR_CHANGE_PROMPT = "deal_or_change_prompt"
    HOLD_INSTRUCTIONS = "hold_instructions"
    HOLD_PROMPT = "hold_prompt"
    HOLD_NONE = "hold_none"
    DRAW_PROMPT = "draw_prompt"
    CONTINUE_PROMPT = "continue_prompt"
    FINAL_HAND_WIN = "final_hand_win"
    FINAL_HAND_NO_WIN = "final_hand_no_win"
    WIN_AMOUNT = "win_amount"
    GAMBLE_OFFER = "gamble_offer"
    GAMBLE_GUESS = "gamble_guess"
    GAMBLE_GUESS_OR_COLLECT = "gamble_guess_or_collect"
    GAMBLE_INVALID = "gamble_invalid"
    GAMBLE_WON = "gamble_won"
    GAMBLE_LOST = "gamble_lost"
    GAMBLE_COLLECTED = "gamble_collected"
    GAMBLE_MAXED = "gamble_maxed"
    NOT_ENOUGH_CREDITS = "not_enough_credits"
    YOU_LOSE = "you_lose"
    FINAL_TALLY = "final_tally"
    GAME_OVER = "game_over"
    GOODBYE = "goodbye"
    INTERNAL_ERROR = "internal_error"


DEFAULT_MESSAGES: Dict[Msg, str] = {
    Msg.BET_PROMPT: "Select your bet ({bets}) [default {default}]: ",
    Msg.BET_SUMMARY: "Bet: {bet} credits per hand",
    Msg.BET_TOO_HIGH: "You only have {credits} credits. Choose a smaller bet.",
    Msg.DEAL_PROMPT: "Press Enter to deal a hand: ",
    Msg.DEAL_OR_CHANGE_PROMPT: "Press Enter to deal a hand (or type 'bet' to change your bet): ",
    Msg.HOLD_INSTRUCTIONS: (
        "Select cards to hold by entering their numbers (e.g. 134 for cards 1, 3, and 4).\n"
        "Press Enter to hold none."
    ),
    Msg.HOLD_PROMPT: "Enter card numbers to hold: ",
    Msg.HOLD_NONE: "No cards selected to hold. All cards will be replaced.",
    Msg.DRAW_PROMPT: "Press Enter to continue drawing new cards: ",
    Msg.CONTINUE_PROMPT: "Press Enter to continue: ",
    Msg.FINAL_HAND_WIN: "Final Hand: {classification}!",
    Msg.FINAL_HAND_NO_WIN: "Final Hand: No winning combination.",
    Msg.WIN_AMOUNT: "Win for this hand: {win} credits.",
    Msg.GAMBLE_OFFER: "Gamble: Do you want to gamble your win to double it? (Y/N): ",
    Msg.GAMBLE_GUESS: "Enter your guess (R for red, B for black): ",
    Msg.GAMBLE_GUESS_OR_COLLECT: "Round {round} of {max_rounds} - enter your guess (R for red, B for black, C to collect): ",
    Msg.GAMBLE_INVALID: "Please answer R for red or B for black.",
    Msg.GAMBLE_WON: "Gamble successful! The card was {colour}. Your win is now {win} credits.",
    Msg.GAMBLE_LOST: "Gamble failed! The card was {colour}. You lose your win for this hand.",
    Msg.GAMBLE_COLLECTED: "You collect {win} credits.",
    Msg.GAMBLE_MAXED: "Maximum gamble rounds reached. You collect {win} credits.",
    Msg.NOT_ENOUGH_CREDITS: "Not enough credits to play. Game over!",
    Msg.YOU_LOSE: "*** YOU LOSE! ***",
    Msg.FINAL_TALLY: "Hands played: {hands}. Final credits: {credits}.",
    Msg.GAME_OVER: "Game Over. Thanks for playing!",
    Msg.GOODBYE: "Exiting game. Goodbye!",
    Msg.INTERNAL_ERROR: "Something went wrong on the server. Closing your session.",
}


class Messages:
    """Resolved key -> template table."""

    def __init__(self, overrides: Optional[Mapping[Msg, str]] = None):
        self._templates = dict(DEFAULT_MESSAGES)
        if overrides:
            for key, template in overrides.items():
                self._templates[Msg(key)] = template

    def get(self, key: Msg, **kwargs) -> str:
        template = self._templates[key]
        return template.format(**kwargs) if kwargs else template


def is_exit(text: str) -> bool:
    """True when the player typed the exit sentinel (any case)."""
    return text.strip().lower() == EXIT_SENTINEL
