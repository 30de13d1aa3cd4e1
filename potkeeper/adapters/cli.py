"""
Command-line interface adapter for the table engine.

This module renders the table as text and parses the short commands a
scorekeeper types between hands.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, List, Optional, Union
import asyncio
from enum import Enum

from potkeeper.adapters.base import PlatformAdapter
from potkeeper.common.io_interface import ConsoleIOInterface, IOInterface
from potkeeper.ledger.constants import HandOutcome
from potkeeper.ledger.money import format_amount

HELP_TEXT = """Commands:
  start                      collect the ante and open the round
  win [player] <amount>      the challenger wins <amount> from the pot
  lose [player] <amount>     the challenger pays <amount> into the pot
  close                      the dealer collects the pot and passes the bank
  log                        show the full log
  report                     show each player's net result
  help                       show this help
  quit                       leave the table (the session is lost)

<player> is a name or a seat number and defaults to the suggested challenger.
<amount> is a number, or one of: ante, pot-ante, all."""

COMMAND_ALIASES = {
    "start": "start",
    "ante": "start",
    "win": "win",
    "w": "win",
    "lose": "lose",
    "l": "lose",
    "close": "close",
    "log": "log",
    "report": "report",
    "help": "help",
    "?": "help",
    "quit": "quit",
    "exit": "quit",
    "q": "quit",
}

QUICK_BET_WORDS = {"ante": "ante", "pot-ante": "pot_minus_ante", "all": "all_in"}


class CommandError(ValueError):
    """A line typed at the prompt could not be understood."""

    pass


@dataclass(frozen=True)
class Command:
    """A parsed scorekeeper command."""

    name: str
    challenger_id: Optional[str] = None
    amount: Optional[Union[Decimal, str]] = None

    @property
    def outcome(self) -> Optional[HandOutcome]:
        if self.name == "win":
            return HandOutcome.CHALLENGER_WINS
        if self.name == "lose":
            return HandOutcome.DEALER_WINS
        return None


def _resolve_player(token: str, view: Dict[str, Any]) -> str:
    challengers = view.get("challengers", [])

    if token.isdigit():
        seat = int(token)
        if 1 <= seat <= len(challengers):
            return challengers[seat - 1]["id"]
        raise CommandError(f"No challenger in seat {seat}")

    matches = [c for c in challengers if c["name"].lower() == token.lower()]
    if len(matches) == 1:
        return matches[0]["id"]
    if not matches:
        raise CommandError(f"{token!r} is not a challenger right now")
    raise CommandError(f"{token!r} matches more than one player; use the seat number")


def _resolve_amount(token: str, view: Dict[str, Any]) -> Union[Decimal, str]:
    kind = QUICK_BET_WORDS.get(token.lower())
    if kind is None:
        # Validated by the ledger
        return token.replace(",", ".")

    for bet in view.get("quick_bets", []):
        if bet["kind"] == kind:
            if not bet["enabled"]:
                raise CommandError(f"'{token}' is not available: {bet['reason']}")
            return bet["amount"]
    raise CommandError(f"'{token}' is not available right now")


def parse_command(line: str, view: Dict[str, Any]) -> Command:
    """
    Parse a line typed at the prompt.

    Args:
        line: Raw input
        view: The engine's current view, used to resolve names and quick bets

    Returns:
        The parsed command

    Raises:
        CommandError: If the line is not a valid command
    """
    tokens = line.split()
    if not tokens:
        raise CommandError("Type a command, or 'help'")

    name = COMMAND_ALIASES.get(tokens[0].lower())
    if name is None:
        raise CommandError(f"Unknown command {tokens[0]!r}; type 'help'")

    if name not in ("win", "lose"):
        if len(tokens) > 1:
            raise CommandError(f"'{name}' takes no arguments")
        return Command(name)

    args = tokens[1:]
    if len(args) == 1:
        challenger_id = view.get("suggested_challenger_id")
        if challenger_id is None:
            raise CommandError("No suggested challenger; name the player")
    elif len(args) == 2:
        challenger_id = _resolve_player(args[0], view)
    else:
        raise CommandError(f"Usage: {name} [player] <amount>")

    return Command(name, challenger_id, _resolve_amount(args[-1], view))


class CLIAdapter(PlatformAdapter):
    """
    Command-line interface adapter.

    This adapter writes the table to an IOInterface as plain text and reads
    commands from it.
    """

    def __init__(self, io_interface: Optional[IOInterface] = None, log_lines: int = 5):
        """
        Initialize the CLI adapter.

        Args:
            io_interface: IOInterface to use; defaults to the console
            log_lines: How many recent log entries to show with each render
        """
        self.io_interface = io_interface or ConsoleIOInterface()
        self.log_lines = log_lines

    async def _write(self, message: str) -> None:
        output_async = getattr(self.io_interface, "output_async", None)
        if output_async is not None:
            await output_async(message)
        else:
            self.io_interface.output(message)

    async def request_command(self, prompt: str = "> ") -> str:
        """Read one line of input without blocking the event loop."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.io_interface.input, prompt)

    async def render_game_state(self, state: Dict[str, Any]) -> None:
        """
        Render the table to the console.

        Args:
            state: The engine's view of the table
        """
        if not state.get("active"):
            await self._write("No game in progress.")
            return

        lines = [
            "",
            "=== Table ===",
            f"Pot: {format_amount(state['pot'])}   Ante: {format_amount(state['ante'])}"
            f"   Dealer orbit: {state['dealer_round']}",
            f"Dealer (bank): {state['dealer']}",
        ]

        if state["round_active"]:
            suggested = state.get("suggested_challenger_id")
            for seat, challenger in enumerate(state["challengers"], start=1):
                marker = "*" if challenger["id"] == suggested else " "
                played = " (played)" if challenger["played"] else ""
                lines.append(f" {marker}{seat}. {challenger['name']}{played}")

            bets = [
                f"{bet['kind']} {format_amount(bet['amount'])}"
                for bet in state.get("quick_bets", [])
                if bet["enabled"]
            ]
            if bets:
                lines.append("Quick bets: " + ", ".join(bets))
        else:
            lines.append(
                f"Round not started. 'start' collects {format_amount(state['total_ante'])}."
            )

        lines.extend(self.format_log(state["logs"][: self.log_lines]))
        lines.append("=============")

        for line in lines:
            await self._write(line)

    async def show_full_log(self, state: Dict[str, Any]) -> None:
        for line in self.format_log(state.get("logs", [])):
            await self._write(line)

    async def show_lines(self, lines: List[str]) -> None:
        for line in lines:
            await self._write(line)

    @staticmethod
    def format_log(logs: List[Dict[str, Any]]) -> List[str]:
        """Format adapter-format log entries, most recent first."""
        formatted = []
        for entry in logs:
            amount = f"  {entry['amount']}" if entry.get("amount") else ""
            formatted.append(f"  [{entry['kind']}] {entry['message']}{amount}")
        return formatted

    async def notify_game_event(
        self, event_type: Union[str, Enum], data: Dict[str, Any]
    ) -> None:
        """
        Tell the user about events that need attention.

        Args:
            event_type: The type of event that occurred
            data: Data associated with the event
        """
        if isinstance(event_type, Enum):
            event_type = event_type.name

        message = self._format_event_message(event_type, data)
        if message:
            await self._write(message)

    def _format_event_message(
        self, event_type: str, data: Dict[str, Any]
    ) -> Optional[str]:
        if event_type == "ERROR":
            return f"! {data.get('message', 'Operation rejected')}"
        elif event_type == "BANK_BUSTED":
            return f"*** {data.get('challenger_name')} busts the bank! ***"
        elif event_type == "DEALER_ROTATED":
            return f"The bank passes to {data.get('dealer_name')}."
        elif event_type == "ORBIT_COMPLETED":
            return f"Orbit {data.get('dealer_round')} begins."

        return None
