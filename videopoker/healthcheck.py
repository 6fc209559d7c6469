"""Healthcheck service for Video-Poker-over-SSH

Runs a small HTTP server on HEALTHCHECK_PORT. `/health` returns JSON status for
a periodic connect probe of the game listener at SERVER_HOST:SERVER_PORT;
`/scoreboard` returns the shared table totals.
Interval is configurable via HEALTHCHECK_INTERVAL (seconds).
"""
import asyncio
import logging
import time
from typing import Any, Dict, Optional

import asyncssh
from aiohttp import web

from .server_info import get_server_info
from .server_state import ServerState


class SSHProbe:
    def __init__(self, host: str, port: int, timeout: float = 5.0, check_ssh: bool = True):
        self.host = host
        self.port = port
        self.timeout = timeout
        self.check_ssh = check_ssh

    async def probe(self) -> Dict[str, Any]:
        """Attempt to open a TCP connection (and SSH transport) and return status info."""
        result: Dict[str, Any] = {
            'host': self.host,
            'port': self.port,
            'tcp_connect': False,
            'ssh_ok': False,
            'error': None,
        }

        try:
            reader, writer = await asyncio.wait_for(asyncio.open_connection(self.host, self.port), timeout=self.timeout)
            result['tcp_connect'] = True
            writer.close()
            try:
                await writer.wait_closed()
            except (ConnectionError, OSError):
                pass
        except (OSError, asyncio.TimeoutError) as e:
            result['error'] = f'tcp_connect_failed: {e}'
            return result

        if not self.check_ssh:
            return result

        try:
            conn = await asyncio.wait_for(
                asyncssh.connect(self.host, port=self.port, username='healthcheck', known_hosts=None),
                timeout=self.timeout,
            )
            result['ssh_ok'] = True
            conn.close()
            await conn.wait_closed()
        except (OSError, asyncssh.Error, asyncio.TimeoutError) as e:
            # SSH-level error - report but keep tcp_connect True
            result['error'] = str(e)

        return result


class HealthcheckService:
    def __init__(self, server_state: ServerState, host: str = '0.0.0.0', check_ssh: bool = True,
                 probe_port: Optional[int] = None):
        info = get_server_info()
        self.server_state = server_state
        self.server_host = info['server_host']
        self.server_port = probe_port or int(info['server_port'])
        self.port = int(info['healthcheck_port'])
        self.interval = int(info['healthcheck_interval'])
        self.host = host
        self.check_ssh = check_ssh
        self._latest: Dict[str, Any] = {
            'status': 'unknown',
            'last_probe': None,
            'probe': None,
        }
        self._probe = SSHProbe(self.server_host, self.server_port, check_ssh=check_ssh)
        self._task: Optional[asyncio.Task] = None
        self._runner: Optional[web.AppRunner] = None

    def _status_from(self, res: Dict[str, Any]) -> str:
        tcp_ok = bool(res.get('tcp_connect'))
        ssh_ok = bool(res.get('ssh_ok'))
        if tcp_ok and (ssh_ok or not self.check_ssh):
            return 'ok'
        if tcp_ok:
            # Reachable on TCP but the SSH handshake failed
            return 'warn'
        return 'fail'

    async def probe_once(self) -> Dict[str, Any]:
        try:
            res = await self._probe.probe()
            self._latest['probe'] = res
            self._latest['status'] = self._status_from(res)
        except Exception as e:
            logging.exception('Healthcheck probe failed')
            self._latest['status'] = 'error'
            self._latest['probe'] = {'error': str(e)}
        self._latest['last_probe'] = int(time.time())
        return self._latest

    async def _background_probe(self):
        while True:
            await self.probe_once()
            await asyncio.sleep(self.interval)

    async def status_handler(self, request):
        return web.json_response({
            **self._latest,
            'active_sessions': len(self.server_state.sessions),
            'variant': self.server_state.config.name,
        })

    async def scoreboard_handler(self, request):
        return web.json_response(self.server_state.scoreboard.snapshot().to_dict())

    def make_app(self) -> web.Application:
        app = web.Application()
        app.router.add_get('/health', self.status_handler)
        app.router.add_get('/scoreboard', self.scoreboard_handler)
        return app

    async def start(self):
        self._task = asyncio.create_task(self._background_probe())

        self._runner = web.AppRunner(self.make_app())
        await self._runner.setup()
        site = web.TCPSite(self._runner, host=self.host, port=self.port)
        await site.start()
        logging.info(f'Healthcheck HTTP server listening on {self.host}:{self.port}, probing {self.server_host}:{self.server_port} every {self.interval}s')

    async def stop(self):
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        if self._runner is not None:
            await self._runner.cleanup()
            self._runner = None
