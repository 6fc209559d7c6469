"""
What a session asks the renderer to show after each step.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional

from videopoker.deck import Card
from videopoker.scoreboard import ScoreboardSnapshot


@dataclass
class TableView:
    credits: int
    bet: int
    hand: Optional[List[Card]] = None
    message: str = ""
    win: int = 0
    highlight_name: str = ""
    highlighted_indices: FrozenSet[int] = field(default_factory=frozenset)
    show_indices: bool = False
    scoreboard: Optional[ScoreboardSnapshot] = None
