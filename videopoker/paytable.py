"""
Payout table for Jacks or Better.

Rows are listed best hand first; the terminal UI prints them in this order.
"""

from typing import Dict, List, Tuple


ROYAL_FLUSH = 'Royal Flush'
STRAIGHT_FLUSH = 'Straight Flush'
FOUR_OF_A_KIND = 'Four of a Kind'
FULL_HOUSE = 'Full House'
FLUSH = 'Flush'
STRAIGHT = 'Straight'
THREE_OF_A_KIND = 'Three of a Kind'
TWO_PAIR = 'Two Pair'
JACKS_OR_BETTER = 'Jacks or Better'
NO_WIN = 'No Win'

PAYOUT_TABLE: List[Tuple[str, int]] = [
    (ROYAL_FLUSH, 250),
    (STRAIGHT_FLUSH, 50),
    (FOUR_OF_A_KIND, 25),
    (FULL_HOUSE, 9),
    (FLUSH, 6),
    (STRAIGHT, 4),
    (THREE_OF_A_KIND, 3),
    (TWO_PAIR, 2),
    (JACKS_OR_BETTER, 1),
]

MULTIPLIERS: Dict[str, int] = dict(PAYOUT_TABLE)

CLASSIFICATIONS = tuple(name for name, _ in PAYOUT_TABLE) + (NO_WIN,)


def multiplier_for(classification: str) -> int:
    """Multiplier for a classification; 0 for "No Win"."""
    if classification == NO_WIN:
        return 0
    try:
        return MULTIPLIERS[classification]
    except KeyError:
        raise ValueError(f"Unknown hand classification: {classification!r}")
