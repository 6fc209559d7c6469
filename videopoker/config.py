"""
Game variants for Video-Poker-over-SSH.

The classic table mirrors the first server: four bet tiers and a single
double-or-nothing guess. The deluxe table adds higher stakes, a five-round
gamble, a bet change between hands and the shared scoreboard.
"""

from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class GameConfig:
    name: str
    allowed_bets: Tuple[int, ...]
    default_bet: int = 5
    starting_credits: int = 100
    max_gamble_rounds: int = 1
    scoreboard_enabled: bool = False
    allow_bet_change: bool = False

    def __post_init__(self):
        if not self.allowed_bets or any(bet <= 0 for bet in self.allowed_bets):
            raise ValueError("allowed_bets must be a non-empty set of positive integers")
        if self.default_bet not in self.allowed_bets:
            raise ValueError(f"default_bet {self.default_bet} is not one of {self.allowed_bets}")
        if self.starting_credits < 0:
            raise ValueError("starting_credits cannot be negative")
        if self.max_gamble_rounds < 1:
            raise ValueError("max_gamble_rounds must be at least 1")


CLASSIC = GameConfig(
    name='classic',
    allowed_bets=(5, 10, 20, 30),
)

DELUXE = GameConfig(
    name='deluxe',
    allowed_bets=(5, 10, 20, 50, 100),
    max_gamble_rounds=5,
    scoreboard_enabled=True,
    allow_bet_change=True,
)

VARIANTS: Dict[str, GameConfig] = {
    CLASSIC.name: CLASSIC,
    DELUXE.name: DELUXE,
}


def get_variant(name: str) -> GameConfig:
    """Look up a variant by name (case-insensitive)."""
    key = (name or CLASSIC.name).strip().lower()
    try:
        return VARIANTS[key]
    except KeyError:
        raise ValueError(f"Unknown game variant {name!r}; choose one of {', '.join(VARIANTS)}")
