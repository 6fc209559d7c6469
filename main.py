"""
Entry point for Video-Poker-over-SSH
Starts the SSH (and optionally plain TCP) listeners and the healthcheck service.
"""

import argparse
import asyncio
import logging
from pathlib import Path

from videopoker.config import get_variant
from videopoker.healthcheck import HealthcheckService
from videopoker.server_info import format_motd, get_server_info
from videopoker.server_state import ServerState
from videopoker.ssh_server import SSHServer
from videopoker.tcp_server import TCPServer


async def main(args, server_info):
    print("🎰 Starting Video-Poker-over-SSH server")
    print("=" * 50)

    config = get_variant(args.variant)
    seed = server_info['random_seed']
    state = ServerState(
        config=config,
        seed=int(seed) if seed else None,
        motd=format_motd({**server_info, 'game_variant': config.name}),
    )
    idle_timeout = float(server_info['idle_timeout']) or None

    servers = []
    if args.transport in ('ssh', 'both'):
        host_key = server_info['ssh_host_key']
        servers.append(SSHServer(state, host=args.host, port=args.port,
                                 host_key_path=Path(host_key) if host_key else None,
                                 idle_timeout=idle_timeout))
    if args.transport in ('tcp', 'both'):
        servers.append(TCPServer(state, host=args.host, port=args.tcp_port, idle_timeout=idle_timeout))

    if not args.no_healthcheck:
        # best-effort, keep serving games if the healthcheck cannot start
        check_ssh = args.transport != 'tcp'
        healthcheck = HealthcheckService(state, check_ssh=check_ssh,
                                         probe_port=args.port if check_ssh else args.tcp_port)
        try:
            await healthcheck.start()
        except OSError as e:
            logging.warning(f"Healthcheck failed to start: {e}")

    await asyncio.gather(*(server.serve_forever() for server in servers))


if __name__ == "__main__":
    server_info = get_server_info()

    parser = argparse.ArgumentParser(description="Run a Video-Poker-over-SSH server")
    parser.add_argument("--host", default="0.0.0.0", help="Host to bind to")
    parser.add_argument("--port", default=int(server_info['server_port']), type=int, help="SSH port to bind to")
    parser.add_argument("--tcp-port", default=int(server_info['tcp_port']), type=int, help="Plain TCP port to bind to")
    parser.add_argument("--transport", choices=("ssh", "tcp", "both"), default="ssh", help="Which listeners to start")
    parser.add_argument("--variant", default=server_info['game_variant'], help="Game variant: classic or deluxe")
    parser.add_argument("--no-healthcheck", action="store_true", help="Do not start the HTTP healthcheck")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.debug:
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(level=logging.INFO)

    # Suppress AsyncSSH's verbose connection messages
    logging.getLogger('asyncssh').setLevel(logging.WARNING)

    try:
        asyncio.run(main(args, server_info))
    except KeyboardInterrupt:
        print("\n👋 Server shutting down...")
    except (RuntimeError, ValueError) as e:
        print(f"❌ Error: {e}")
