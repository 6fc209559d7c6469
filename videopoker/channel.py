"""
Line channel abstraction for Video-Poker-over-SSH.

A session only ever talks to a LineChannel: it writes text and awaits one line
of input per prompt. The SSH and TCP transports each provide an implementation.
"""

import asyncio
from typing import Optional


class ChannelClosed(ConnectionError):
    """The client went away (EOF, Ctrl+D, dropped connection or idle timeout)."""


class LineChannel:
    """Duplex, line-oriented text channel to one player."""

    def __init__(self, idle_timeout: Optional[float] = None):
        # None or 0 disables the idle timeout
        self.idle_timeout = idle_timeout or None
        self.username: Optional[str] = None

    async def write(self, text: str) -> None:
        raise NotImplementedError

    async def write_line(self, text: str = "") -> None:
        await self.write(text + "\n")

    async def _read_line(self) -> str:
        raise NotImplementedError

    async def read_line(self, prompt: str = "") -> str:
        """Show a prompt and wait for one line of input (stripped)."""
        if prompt:
            await self.write(prompt)
        if self.idle_timeout is None:
            line = await self._read_line()
        else:
            try:
                line = await asyncio.wait_for(self._read_line(), timeout=self.idle_timeout)
            except asyncio.TimeoutError:
                raise ChannelClosed(f"idle for more than {self.idle_timeout}s")
        return line.strip()

    async def close(self) -> None:
        raise NotImplementedError
