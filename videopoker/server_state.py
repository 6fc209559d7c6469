"""
Shared server state for Video-Poker-over-SSH.

Both listeners hand every accepted connection to the same ServerState, which
builds an independent SessionStateMachine for it. The only thing sessions
share is the Scoreboard.
"""

import itertools
import logging
from typing import Optional, Set

from videopoker.channel import LineChannel
from videopoker.config import CLASSIC, GameConfig
from videopoker.messages import Messages
from videopoker.random_source import RandomSource
from videopoker.scoreboard import Scoreboard
from videopoker.session import SessionStateMachine
from videopoker.terminal_ui import TerminalUI


class ServerState:
    """Game settings and the live session registry for one server process."""

    def __init__(
        self,
        config: GameConfig = CLASSIC,
        messages: Optional[Messages] = None,
        scoreboard: Optional[Scoreboard] = None,
        seed: Optional[int] = None,
        motd: Optional[str] = None,
    ):
        self.config = config
        self.messages = messages or Messages()
        self.scoreboard = scoreboard or Scoreboard()
        self.ui = TerminalUI(self.messages)
        self.seed = seed
        self.motd = motd
        self.sessions: Set[SessionStateMachine] = set()
        self._counter = itertools.count(1)

    def new_session(self, channel: LineChannel) -> SessionStateMachine:
        number = next(self._counter)
        # a fixed seed still gives each session its own sequence
        rng = RandomSource(self.seed + number) if self.seed is not None else RandomSource()
        return SessionStateMachine(
            channel,
            config=self.config,
            rng=rng,
            ui=self.ui,
            messages=self.messages,
            scoreboard=self.scoreboard,
            motd=self.motd,
        )

    async def run_session(self, channel: LineChannel) -> None:
        """Run one connection's session to completion and forget it."""
        session = self.new_session(channel)
        self.sessions.add(session)
        logging.debug(f"Active sessions: {len(self.sessions)}")
        try:
            await session.run()
        finally:
            self.sessions.discard(session)
            logging.debug(f"Active sessions: {len(self.sessions)}")
