"""
Plain TCP server for Video-Poker-over-SSH.

For clients without SSH (`nc host 8080`, telnet): same tables, newline
terminated lines, no line editing beyond what the client terminal does.
"""

import asyncio
import logging
from typing import Optional

from videopoker.channel import ChannelClosed, LineChannel
from videopoker.server_state import ServerState


class TCPLineChannel(LineChannel):
    """LineChannel over an asyncio stream pair."""

    def __init__(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter,
                 idle_timeout: Optional[float] = None):
        super().__init__(idle_timeout=idle_timeout)
        self._reader = reader
        self._writer = writer
        self._closed = False
        peer = writer.get_extra_info('peername')
        self.peer = f"{peer[0]}:{peer[1]}" if peer else "unknown"

    async def write(self, text: str) -> None:
        if self._closed or self._writer.is_closing():
            raise ChannelClosed("channel already closed")
        try:
            self._writer.write(text.encode('utf-8'))
            await self._writer.drain()
        except (ConnectionError, OSError) as e:
            raise ChannelClosed(f"write failed: {e}")

    async def _read_line(self) -> str:
        try:
            data = await self._reader.readline()
        except (ConnectionError, OSError, asyncio.LimitOverrunError, ValueError) as e:
            raise ChannelClosed(f"read failed: {e}")
        if not data:
            raise ChannelClosed("client closed the connection")
        if data.startswith(b'\x04'):
            raise ChannelClosed("client sent EOF (Ctrl+D)")
        return data.decode('utf-8', errors='ignore').rstrip("\r\n")

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self._writer.close()
            await self._writer.wait_closed()
        except (ConnectionError, OSError) as e:
            logging.debug(f"Error closing TCP connection {self.peer}: {e}")


class TCPServer:
    """Video poker over raw TCP."""

    def __init__(self, server_state: ServerState, host: str = "0.0.0.0", port: int = 8080,
                 idle_timeout: Optional[float] = None):
        self.server_state = server_state
        self.host = host
        self.port = port
        self.idle_timeout = idle_timeout
        self._server: Optional[asyncio.AbstractServer] = None

    async def _handle_client(self, reader, writer):
        channel = TCPLineChannel(reader, writer, idle_timeout=self.idle_timeout)
        logging.info(f"TCP connection from {channel.peer}")
        await self.server_state.run_session(channel)

    async def start(self) -> None:
        self._server = await asyncio.start_server(self._handle_client, self.host, self.port, reuse_address=True)
        sockets = self._server.sockets or []
        if sockets:
            # port 0 binds an ephemeral port
            self.port = sockets[0].getsockname()[1]
        logging.info(f"TCP server listening on {self.host}:{self.port}")

    async def stop(self) -> None:
        if self._server is not None:
            self._server.close()
            await self._server.wait_closed()
            self._server = None

    async def serve_forever(self) -> None:
        await self.start()
        try:
            await asyncio.Event().wait()
        except asyncio.CancelledError:
            pass
        finally:
            await self.stop()
