"""
SSH line channel for Video-Poker-over-SSH.

Turns the raw character stream of an asyncssh session into whole lines for a
SessionStateMachine, and CRLF-terminates everything written back.
"""

import asyncio
import logging
from typing import Optional

import asyncssh

from videopoker.channel import ChannelClosed, LineChannel


class SSHLineChannel(LineChannel):
    """LineChannel over asyncssh stdin/stdout streams."""

    def __init__(self, stdin, stdout, idle_timeout: Optional[float] = None):
        super().__init__(idle_timeout=idle_timeout)
        self._stdin = stdin
        self._stdout = stdout
        self._input_buffer = ""
        self._last_char = ""
        self._prompt = ""
        self._closed = False
        try:
            self.username = stdout.get_extra_info('username')
        except Exception:
            self.username = None

    async def write(self, text: str) -> None:
        if self._closed:
            raise ChannelClosed("channel already closed")
        text = text.replace("\r\n", "\n").replace("\n", "\r\n")
        try:
            self._stdout.write(text)
            await self._stdout.drain()
        except (asyncssh.Error, OSError) as e:
            raise ChannelClosed(f"write failed: {e}")

    async def read_line(self, prompt: str = "") -> str:
        self._prompt = prompt
        return await super().read_line(prompt)

    async def _read_line(self) -> str:
        while True:
            try:
                data = await self._stdin.read(1)
            except asyncssh.TerminalSizeChanged as e:
                logging.debug(f"Window change: {e.width}x{e.height}")
                continue
            except asyncssh.BreakReceived as e:
                logging.debug(f"Break received: {e.msec}ms")
                continue
            except asyncssh.SignalReceived as e:
                logging.debug(f"Signal received: {e.signal}")
                if e.signal in ("INT", "SIGINT"):
                    await self._interrupt()
                continue
            except (asyncssh.Error, OSError) as e:
                raise ChannelClosed(f"read failed: {e}")

            if not data:
                raise ChannelClosed("client closed the connection")
            if isinstance(data, bytes):
                data = data.decode('utf-8', errors='ignore')

            line = await self._handle_char(data)
            if line is not None:
                return line

    async def _interrupt(self) -> None:
        self._input_buffer = ""
        await self.write("^C\n" + self._prompt)

    async def _handle_char(self, char: str) -> Optional[str]:
        """Feed one character; returns a finished line on Enter."""
        last_char, self._last_char = self._last_char, char

        if char == '\x1b':  # ESC - start of escape sequence
            try:
                next_chars = await asyncio.wait_for(self._stdin.read(10), timeout=0.1)
            except asyncio.TimeoutError:
                return None
            except (asyncssh.Error, OSError):
                return None
            if isinstance(next_chars, bytes):
                next_chars = next_chars.decode('utf-8', errors='ignore')
            # mouse events, cursor keys and function keys are never game input
            logging.debug(f"Discarding escape sequence: {repr(char + next_chars)}")
            return None

        if char == '\n' and last_char == '\r':
            return None
        if char in ('\r', '\n'):
            line = self._input_buffer
            self._input_buffer = ""
            return line
        if char in ('\x7f', '\x08'):  # Backspace
            self._input_buffer = self._input_buffer[:-1]
            return None
        if char == '\x03':  # Ctrl+C
            await self._interrupt()
            return None
        if char == '\x04':  # Ctrl+D
            raise ChannelClosed("client sent EOF (Ctrl+D)")
        if char.isprintable():
            self._input_buffer += char
        return None

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self._stdout.close()
        except Exception as e:
            logging.debug(f"Error closing SSH channel: {e}")
