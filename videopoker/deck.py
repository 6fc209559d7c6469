"""
Cards and deck operations for Video-Poker-over-SSH.

A fresh Deck is built and shuffled for every hand; the five dealt cards and
every replacement come off the same deck.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from videopoker.random_source import RandomSource


SUITS = ('Hearts', 'Diamonds', 'Clubs', 'Spades')
RANKS = ('2', '3', '4', '5', '6', '7', '8', '9', '10', 'J', 'Q', 'K', 'A')

# 2..10 map to themselves, J=11, Q=12, K=13, A=14
RANK_VALUES = {rank: value for value, rank in enumerate(RANKS, start=2)}


@dataclass(frozen=True)
class Card:
    suit: str
    rank: str

    def __post_init__(self):
        if self.suit not in SUITS:
            raise ValueError(f"Unknown suit: {self.suit!r}")
        if self.rank not in RANK_VALUES:
            raise ValueError(f"Unknown rank: {self.rank!r}")

    @property
    def value(self) -> int:
        return RANK_VALUES[self.rank]

    def __str__(self) -> str:
        return f"{self.rank} of {self.suit}"


def make_cards() -> List[Card]:
    """Create the 52 cards in suit-major, rank-minor order."""
    return [Card(suit, rank) for suit in SUITS for rank in RANKS]


class Deck:
    """Ordered 52-card deck that deals from the top without replacement."""

    def __init__(self, cards: Optional[Sequence[Card]] = None):
        self.cards: List[Card] = list(cards) if cards is not None else make_cards()
        self.dealt: List[Card] = []

    def __len__(self) -> int:
        return len(self.cards)

    @property
    def remaining(self) -> List[Card]:
        return list(self.cards)

    def shuffle(self, rng: RandomSource) -> None:
        """Fisher-Yates shuffle in place, last index down to 1."""
        cards = self.cards
        for i in range(len(cards) - 1, 0, -1):
            j = rng.randbelow(i + 1)
            cards[i], cards[j] = cards[j], cards[i]

    def draw(self, n: int = 1) -> List[Card]:
        """Remove and return the first n remaining cards."""
        if n < 0:
            raise ValueError(f"Cannot draw a negative number of cards: {n}")
        if n > len(self.cards):
            raise ValueError(f"Cannot draw {n} cards from deck of {len(self.cards)}")
        drawn = self.cards[:n]
        del self.cards[:n]
        self.dealt.extend(drawn)
        return drawn


def create_shuffled_deck(rng: RandomSource) -> Deck:
    """Create and return a freshly shuffled deck."""
    deck = Deck()
    deck.shuffle(rng)
    return deck
