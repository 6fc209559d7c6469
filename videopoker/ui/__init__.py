"""
UI module for Video-Poker-over-SSH.
Provides terminal UI components for consistent presentation.
"""

from .colors import Colors
from .cards import card_lines, cards_horizontal, index_line, SUIT_SYMBOLS, SUIT_COLORS

__all__ = ['Colors', 'card_lines', 'cards_horizontal', 'index_line', 'SUIT_SYMBOLS', 'SUIT_COLORS']
