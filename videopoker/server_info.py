"""
Server information module for Video-Poker-over-SSH
Handles loading of environment configuration and version information.
"""

import os
from typing import Any, Dict, Optional

from dotenv import dotenv_values

from .version import get_version_info


DEFAULTS = {
    'SERVER_ENV': 'Development',
    'SERVER_HOST': 'localhost',
    'SERVER_PORT': '22222',
    'SERVER_NAME': 'Video-Poker-over-SSH Server',
    'TCP_PORT': '8080',
    'GAME_VARIANT': 'classic',
    'IDLE_TIMEOUT': '0',
    'SSH_HOST_KEY': '',
    'RANDOM_SEED': '',
    'HEALTHCHECK_PORT': '22223',
    'HEALTHCHECK_INTERVAL': '60',
}


def load_env_file(filepath: str = ".env") -> Dict[str, str]:
    """Load variables from a .env file; a missing file yields nothing."""
    if not os.path.exists(filepath):
        return {}
    return {key: value for key, value in dotenv_values(filepath).items() if value is not None}


def get_setting(name: str, env_vars: Optional[Dict[str, str]] = None) -> str:
    """Real environment first, then the .env file, then the built-in default."""
    if env_vars is None:
        env_vars = load_env_file()
    return os.getenv(name) or env_vars.get(name) or DEFAULTS.get(name, '')


def get_server_info() -> Dict[str, Any]:
    """Get complete server information including version and environment details"""
    env_vars = load_env_file()
    settings = {name.lower(): get_setting(name, env_vars) for name in DEFAULTS}

    server_host = settings['server_host']
    server_port = settings['server_port']

    return {
        **settings,
        'ssh_connection_string': f"{server_host} -p {server_port}" if server_port != "22" else server_host,
        **get_version_info(),
    }


def format_motd(server_info: Dict[str, Any]) -> str:
    """Format the Message of the Day with server information"""
    from .terminal_ui import Colors

    motd_lines = [
        f"🖥️ Server: {Colors.CYAN}{server_info['server_name']}{Colors.RESET}",
        f"🌐 Environment: {Colors.GREEN if server_info['server_env'] == 'Public Stable' else Colors.YELLOW}{server_info['server_env']}{Colors.RESET}",
        f"📍 Connect: {Colors.BOLD}ssh <username>@{server_info['ssh_connection_string']}{Colors.RESET}",
        f"🎰 Table: {Colors.BOLD}{server_info['game_variant']}{Colors.RESET}",
    ]

    # Add version info if not dev build
    if server_info['version'] != 'dev':
        motd_lines.append(f"📦 Version: {Colors.DIM}{server_info['version']} ({server_info['build_date']}){Colors.RESET}")

    return "\n".join(motd_lines)
