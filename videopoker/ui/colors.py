"""
ANSI color codes for terminal output in Video-Poker-over-SSH.
Provides consistent color theming across the application.
"""


class Colors:
    """ANSI color codes for terminal formatting."""
    RED = '\033[31m'
    BLACK = '\033[30m'
    GREEN = '\033[32m'
    YELLOW = '\033[33m'
    BLUE = '\033[34m'
    MAGENTA = '\033[35m'
    CYAN = '\033[36m'
    WHITE = '\033[37m'
    BRIGHT_RED = '\033[91m'
    BRIGHT_BLUE = '\033[94m'
    BOLD = '\033[1m'
    DIM = '\033[2m'
    RESET = '\033[0m'
    BG_WHITE = '\033[47m'
    BG_GREEN = '\033[42m'
    CLEAR_SCREEN = '\033[2J\033[H'
