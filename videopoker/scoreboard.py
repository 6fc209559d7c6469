"""
Server-wide scoreboard for Video-Poker-over-SSH.

One Scoreboard is created by the server and handed to every session; sessions
never keep their own copy of the totals.
"""

import asyncio
import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ScoreboardSnapshot:
    hands_played: int = 0
    winning_hands: int = 0
    total_paid: int = 0
    highest_win: int = 0
    highest_win_player: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class Scoreboard:
    """Aggregates settled hands from all sessions."""

    def __init__(self):
        self._lock = asyncio.Lock()
        self._snapshot = ScoreboardSnapshot()

    async def record_hand(self, player: Optional[str], win: int) -> ScoreboardSnapshot:
        """Record one settled hand and return the updated totals."""
        if win < 0:
            raise ValueError(f"Settled win cannot be negative: {win}")
        async with self._lock:
            s = self._snapshot
            highest_win, holder = s.highest_win, s.highest_win_player
            if win > highest_win:
                highest_win, holder = win, player
                logging.info(f"New highest win on the scoreboard: {win} by {player}")
            self._snapshot = ScoreboardSnapshot(
                hands_played=s.hands_played + 1,
                winning_hands=s.winning_hands + (1 if win > 0 else 0),
                total_paid=s.total_paid + win,
                highest_win=highest_win,
                highest_win_player=holder,
            )
            return self._snapshot

    def snapshot(self) -> ScoreboardSnapshot:
        return self._snapshot
