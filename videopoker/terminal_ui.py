"""
Terminal UI renderer for Video-Poker-over-SSH with colours and cards.

This keeps presentation logic out of the session so it can call
`TerminalUI.render(view)` to get a colorized string to send to the player.
"""

from typing import Optional

from videopoker.messages import Messages, Msg
from videopoker.paytable import PAYOUT_TABLE
from videopoker.scoreboard import ScoreboardSnapshot
from videopoker.table_view import TableView

# Import from the modular UI components
from .ui.colors import Colors
from .ui.cards import cards_horizontal, index_line


WELCOME_BANNER = r"""
  ____   ___  _  _______ ____     ____ _     ___
 |  _ \ / _ \| |/ / ____|  _ \   / ___| |   |_ _|
 | |_) | | | | ' /|  _| | |_) | | |   | |    | |
 |  __/| |_| | . \| |___|  _ <  | |___| |___ | |
 |_|    \___/|_|\_\_____|_| \_\  \____|_____|___|
"""

INSTRUCTIONS = """
Welcome to POKER CLI!

Please ensure your terminal supports UTF-8 and ANSI escape codes.
For Windows: Run 'chcp 65001' in your command prompt.
For Linux: Ensure your locale is set to UTF-8 (e.g., export LANG=en_US.UTF-8).

Type 'exit' at any prompt to leave the table.
Enjoy the game!
"""

SEPARATOR = "-" * 51


class TerminalUI:
    def __init__(self, messages: Optional[Messages] = None):
        self.messages = messages or Messages()

    def header(self, motd: Optional[str] = None) -> str:
        """Banner and instructions, printed once on connect."""
        out = [Colors.CLEAR_SCREEN, f"{Colors.BOLD}{Colors.YELLOW}{WELCOME_BANNER}{Colors.RESET}"]
        if motd:
            out.append(motd)
        out.append(INSTRUCTIONS)
        return "\n".join(out)

    def payout_table(self, highlight_name: str = "") -> str:
        out = [f"{Colors.BOLD}Payout Table (Multiplier x Bet):{Colors.RESET}"]
        for name, multiplier in PAYOUT_TABLE:
            line = f"{name:<18} : {multiplier}"
            if name == highlight_name:
                line = f"{Colors.GREEN}{line}{Colors.RESET}"
            out.append(line)
        out.append(SEPARATOR)
        return "\n".join(out)

    def scoreboard_line(self, snapshot: ScoreboardSnapshot) -> str:
        holder = f" by {snapshot.highest_win_player}" if snapshot.highest_win_player else ""
        return (
            f"{Colors.DIM}🏆 Table: {snapshot.hands_played} hands, "
            f"{snapshot.winning_hands} winners, highest win {snapshot.highest_win}{holder}{Colors.RESET}"
        )

    def render(self, view: TableView) -> str:
        """Render one full screen: banner, credits, pay table, hand and message."""
        out = []

        # Clear screen and show banner (instructions only appear on connect)
        out.append(Colors.CLEAR_SCREEN)
        out.append(f"{Colors.BOLD}{Colors.YELLOW}{WELCOME_BANNER}{Colors.RESET}")
        out.append(f"{Colors.BOLD}{Colors.GREEN}💰 Credits: {view.credits}{Colors.RESET}   {Colors.DIM}Bet: {view.bet}{Colors.RESET}")
        if view.scoreboard is not None:
            out.append(self.scoreboard_line(view.scoreboard))
        out.append("")

        out.append(self.payout_table(view.highlight_name))
        out.append("")

        if view.hand:
            out.append(f"{Colors.BOLD}{Colors.CYAN}🎴 Your Hand:{Colors.RESET}")
            out.append(cards_horizontal(view.hand, view.highlighted_indices))
            if view.show_indices:
                out.append(index_line(len(view.hand)))
            out.append("")

        if view.message:
            out.append(view.message)
            out.append("")

        if view.win > 0:
            out.append(f"{Colors.BOLD}{Colors.YELLOW}{self.messages.get(Msg.WIN_AMOUNT, win=view.win)}{Colors.RESET}")
            out.append("")

        return "\n".join(out)
