"""
SSH server for Video-Poker-over-SSH.

Every SSH session (any username, no password or key needed) gets its own
video poker table.
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional

import asyncssh

from videopoker.server_state import ServerState
from videopoker.ssh_session import SSHLineChannel


DEFAULT_HOST_KEY = Path(__file__).resolve().parent.parent / "videopoker_host_key"


class _VideoPokerSSHServer(asyncssh.SSHServer):
    def connection_made(self, conn):
        """Called when a new SSH connection is established."""
        self._conn = conn
        peer = conn.get_extra_info('peername')
        logging.info(f"SSH connection from {peer[0] if peer else 'unknown'}")

    def connection_lost(self, exc):
        if exc:
            logging.info(f"SSH connection lost: {exc}")
        else:
            logging.debug("SSH connection closed cleanly")

    def begin_auth(self, username):
        # Tables are anonymous: no authentication is required
        logging.debug(f"SSH auth skipped for {username}")
        return False


def ensure_host_key(path: Path) -> Path:
    """Load or generate the persistent SSH host key."""
    if path.exists():
        return path
    try:
        key = asyncssh.generate_private_key("ssh-ed25519")
        key.write_private_key(str(path))
        path.chmod(0o600)
    except (OSError, asyncssh.Error) as e:
        raise RuntimeError(f"Failed to generate host key at {path}: {e}")
    logging.info(f"Generated new SSH host key at {path}")
    return path


class SSHServer:
    """Video poker over SSH."""

    def __init__(
        self,
        server_state: ServerState,
        host: str = "0.0.0.0",
        port: int = 22222,
        host_key_path: Optional[Path] = None,
        idle_timeout: Optional[float] = None,
    ):
        self.server_state = server_state
        self.host = host
        self.port = port
        self.host_key_path = Path(host_key_path) if host_key_path else DEFAULT_HOST_KEY
        self.idle_timeout = idle_timeout
        self._server = None

    async def _handle_session(self, stdin, stdout, stderr):
        channel = SSHLineChannel(stdin, stdout, idle_timeout=self.idle_timeout)
        await self.server_state.run_session(channel)

    async def start(self) -> None:
        """Start the SSH server."""
        host_key = ensure_host_key(self.host_key_path)
        self._server = await asyncssh.create_server(
            _VideoPokerSSHServer,
            self.host,
            self.port,
            server_host_keys=[str(host_key)],
            session_factory=self._handle_session,
            reuse_address=True,
        )
        logging.info(f"SSH server listening on {self.host}:{self.port}")

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
