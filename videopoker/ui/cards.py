"""
Card rendering utilities for Video-Poker-over-SSH terminal UI.
Handles ASCII art card visualization and layout.
"""

from typing import Iterable, List, Sequence

from videopoker.deck import Card
from .colors import Colors


CARD_WIDTH = 5
CARD_HEIGHT = 5

# Card suit symbols
SUIT_SYMBOLS = {
    'Hearts': '♥',
    'Diamonds': '♦',
    'Clubs': '♣',
    'Spades': '♠',
}

# Hearts and diamonds bright red, clubs and spades bright blue
SUIT_COLORS = {
    'Hearts': Colors.BRIGHT_RED,
    'Diamonds': Colors.BRIGHT_RED,
    'Clubs': Colors.BRIGHT_BLUE,
    'Spades': Colors.BRIGHT_BLUE,
}

WIN_HIGHLIGHT = f"{Colors.BG_GREEN}{Colors.BLACK}"


def card_lines(card: Card, highlight: bool = False) -> List[str]:
    """Format a single card as five lines of ASCII art."""
    symbol = SUIT_SYMBOLS[card.suit]
    if highlight:
        style = f"{Colors.BOLD}{WIN_HIGHLIGHT}"
    else:
        style = f"{Colors.BOLD}{Colors.BG_WHITE}{SUIT_COLORS[card.suit]}"

    # rank is 1 or 2 characters wide
    rank_left = f"{card.rank:<2}"
    rank_right = f"{card.rank:>2}"

    top = f"{style}╭───╮{Colors.RESET}"
    mid1 = f"{style}│{rank_left}{symbol}│{Colors.RESET}"
    mid2 = f"{style}│   │{Colors.RESET}"
    mid3 = f"{style}│{symbol}{rank_right}│{Colors.RESET}"
    bot = f"{style}╰───╯{Colors.RESET}"

    return [top, mid1, mid2, mid3, bot]


def cards_horizontal(cards: Sequence[Card], highlighted: Iterable[int] = ()) -> str:
    """Render multiple cards side-by-side, highlighting the given positions."""
    if not cards:
        return ""

    highlighted = set(highlighted)
    rendered = [card_lines(card, i in highlighted) for i, card in enumerate(cards)]

    result_lines = []
    for line_idx in range(CARD_HEIGHT):
        result_lines.append(" ".join(lines[line_idx] for lines in rendered))
    return "\n".join(result_lines)


def index_line(count: int) -> str:
    """Position numbers (1), (2), ... centred under each card."""
    return " ".join(f"{'(' + str(i + 1) + ')':^{CARD_WIDTH}}" for i in range(count))
