"""
Interactive command-line scorekeeper.

Collects the roster and ante, then reads one command per hand until the
table is abandoned. Run with ``python -m potkeeper.play`` or the
``potkeeper`` console script.
"""

import argparse
import asyncio
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from potkeeper.adapters.cli import HELP_TEXT, CLIAdapter, CommandError, parse_command
from potkeeper.common.io_interface import ConsoleIOInterface, IOInterface, LoggingIOInterface
from potkeeper.engine import TableEngine
from potkeeper.ledger import InvalidSetup, LedgerError
from potkeeper.ledger.constants import MIN_PLAYERS
from potkeeper.ledger.messages import supported_locales
from potkeeper.ledger.money import round2
from potkeeper.ledger.report import player_balances

DEFAULT_ANTE = "0.20"


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Keep the pot for a card game with a rotating bank."
    )
    parser.add_argument(
        "-n",
        "--names",
        nargs="+",
        default=None,
        help="player names in turn order; the first player deals first",
    )
    parser.add_argument(
        "-a",
        "--ante",
        default=None,
        help=f"ante per player (default: {DEFAULT_ANTE})",
    )
    parser.add_argument(
        "--locale",
        choices=supported_locales(),
        default="en",
        help="language of the log messages (default: en)",
    )
    parser.add_argument(
        "--allow-all-in",
        action="store_true",
        help="offer the all-in quick bet on the dealer's first orbit",
    )
    parser.add_argument(
        "--log-file", default=None, help="also write everything shown to this file"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser.parse_args(argv)


def engine_config(args: argparse.Namespace) -> Dict[str, Any]:
    """Engine configuration from the parsed command line."""
    return {"locale": args.locale, "allow_all_in_first_orbit": args.allow_all_in}


def collect_setup(
    io_interface: IOInterface, names: Optional[List[str]], ante: Optional[str]
) -> Tuple[List[str], str]:
    """
    Ask for whatever part of the setup was not given on the command line.

    Args:
        io_interface: Where to prompt
        names: Names from the command line, if any
        ante: Ante from the command line, if any

    Returns:
        The roster and the ante as typed
    """
    while not names or len(names) < MIN_PLAYERS:
        line = io_interface.input("Players, in turn order (comma separated): ")
        names = [name.strip() for name in line.split(",") if name.strip()]
        if len(names) < MIN_PLAYERS:
            io_interface.output(f"At least {MIN_PLAYERS} players are needed.")

    while ante is None:
        line = io_interface.input(f"Ante per player [{DEFAULT_ANTE}]: ").strip()
        candidate = line.replace(",", ".") or DEFAULT_ANTE
        try:
            if round2(candidate) > 0:
                ante = candidate
                continue
        except ValueError:
            pass
        io_interface.output("The ante must be a positive amount.")

    return names, ante


async def _dispatch(engine: TableEngine, adapter: CLIAdapter, command) -> None:
    if command.name == "start":
        await engine.start_round()
    elif command.outcome is not None:
        await engine.record_hand(command.challenger_id, command.amount, command.outcome)
    elif command.name == "close":
        await engine.close_bank()
    elif command.name == "log":
        await adapter.show_full_log(engine.view())
    elif command.name == "report":
        balances = player_balances(engine.state)
        await adapter.show_lines(
            [f"  {row.name}: {row.net:+.2f}" for row in balances.itertuples()]
        )
    elif command.name == "help":
        await adapter.show_lines(HELP_TEXT.splitlines())


async def run_session(
    engine: TableEngine, adapter: CLIAdapter, names: Sequence[str], ante: str
) -> None:
    """
    Run one table until the user quits or input ends.

    Args:
        engine: Engine wired to ``adapter``
        adapter: CLI adapter used for input and output
        names: Player names in turn order
        ante: Ante per player
    """
    await engine.initialize()
    try:
        await engine.start_game(names, ante)

        while True:
            try:
                line = await adapter.request_command()
            except EOFError:
                break

            try:
                command = parse_command(line, engine.view())
            except CommandError as exc:
                await adapter.show_lines([f"! {exc}"])
                continue

            if command.name == "quit":
                break

            try:
                await _dispatch(engine, adapter, command)
            except LedgerError:
                # Already reported through the adapter; wait for a corrected command
                continue
    finally:
        await engine.exit()
        await engine.shutdown()


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    io_interface: IOInterface = ConsoleIOInterface()
    if args.log_file:
        io_interface = LoggingIOInterface(io_interface, args.log_file)

    try:
        names, ante = collect_setup(io_interface, args.names, args.ante)
    except (EOFError, KeyboardInterrupt):
        return 1

    adapter = CLIAdapter(io_interface)
    engine = TableEngine(adapter, engine_config(args))

    try:
        asyncio.run(run_session(engine, adapter, names, ante))
    except InvalidSetup as exc:
        io_interface.output(f"Cannot start: {exc}")
        return 2
    except KeyboardInterrupt:
        return 130
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
