"""
Tests for the command-line adapter.

This module covers command parsing against the engine's view and the text
the adapter writes for states and events.
"""

from decimal import Decimal

import pytest

from potkeeper.adapters import DummyAdapter
from potkeeper.adapters.cli import CLIAdapter, CommandError, parse_command
from potkeeper.common.io_interface import TestIOInterface
from potkeeper.engine import TableEngine
from potkeeper.ledger import HandOutcome


async def started_engine(names=("Anna", "Bruno", "Carla"), ante="0.20", config=None):
    engine = TableEngine(DummyAdapter(), config)
    await engine.start_game(list(names), ante)
    await engine.start_round()
    return engine


@pytest.mark.asyncio
async def test_parse_uses_suggested_challenger():
    engine = await started_engine()
    view = engine.view()

    command = parse_command("lose 0,50", view)

    assert command.name == "lose"
    assert command.challenger_id == engine.state.players[1].id
    assert command.amount == "0.50"
    assert command.outcome == HandOutcome.DEALER_WINS


@pytest.mark.asyncio
async def test_parse_player_by_seat_and_name():
    engine = await started_engine()
    view = engine.view()
    carla = engine.state.players[2].id

    assert parse_command("win 2 0.10", view).challenger_id == carla
    assert parse_command("W carla 0.10", view).challenger_id == carla
    assert parse_command("win carla 0.10", view).outcome == HandOutcome.CHALLENGER_WINS


@pytest.mark.asyncio
async def test_parse_quick_bet_words():
    engine = await started_engine()
    view = engine.view()

    assert parse_command("win ante", view).amount == Decimal("0.20")
    assert parse_command("win Bruno pot-ante", view).amount == Decimal("0.40")

    with pytest.raises(CommandError, match="first orbit"):
        parse_command("win all", view)


@pytest.mark.asyncio
async def test_parse_all_in_with_house_rule():
    engine = await started_engine(config={"allow_all_in_first_orbit": True})

    assert parse_command("win all", engine.view()).amount == Decimal("0.60")


@pytest.mark.asyncio
async def test_parse_errors():
    engine = await started_engine()
    view = engine.view()

    for line in ["", "dance", "start now", "win", "win a b c", "win 9 1", "win Zoe 1"]:
        with pytest.raises(CommandError):
            parse_command(line, view)


def test_parse_simple_commands():
    view = {"active": False}

    assert parse_command("START", view).name == "start"
    assert parse_command("q", view).name == "quit"
    assert parse_command("?", view).name == "help"
    assert parse_command("close", view).outcome is None


def test_parse_needs_player_without_suggestion():
    with pytest.raises(CommandError, match="name the player"):
        parse_command("win 1", {"active": True, "suggested_challenger_id": None})


def test_parse_ambiguous_name():
    view = {
        "challengers": [{"id": "1", "name": "Bo"}, {"id": "2", "name": "bo"}],
    }
    with pytest.raises(CommandError, match="seat number"):
        parse_command("lose bo 1", view)


@pytest.mark.asyncio
async def test_render_active_round():
    engine = await started_engine()
    io = TestIOInterface()
    adapter = CLIAdapter(io)

    await adapter.render_game_state(engine.view())

    output = io.sent_messages
    assert "=== Table ===" in output
    assert "Dealer (bank): Anna" in output
    assert any(line.startswith("Pot: €0.60") for line in output)
    assert " *1. Bruno" in output
    assert "  2. Carla" in output
    assert "Quick bets: ante €0.20, pot_minus_ante €0.40" in output
    assert any("Everyone pays the ante" in line for line in output)


@pytest.mark.asyncio
async def test_render_before_round_and_without_game():
    engine = TableEngine(DummyAdapter())
    await engine.start_game(["Anna", "Bruno"], 1)
    io = TestIOInterface()
    adapter = CLIAdapter(io)

    await adapter.render_game_state(engine.view())
    assert "Round not started. 'start' collects €2.00." in io.sent_messages

    await engine.exit()
    await adapter.render_game_state(engine.view())
    assert io.sent_messages[-1] == "No game in progress."


@pytest.mark.asyncio
async def test_render_limits_log_lines():
    engine = await started_engine()
    bruno = engine.state.players[1].id
    await engine.record_hand(bruno, "0.10", HandOutcome.DEALER_WINS)
    io = TestIOInterface()

    await CLIAdapter(io, log_lines=1).render_game_state(engine.view())

    log_lines = [line for line in io.sent_messages if line.startswith("  [")]
    assert len(log_lines) == 1
    assert "Bruno loses" in log_lines[0]


@pytest.mark.asyncio
async def test_notify_events():
    io = TestIOInterface()
    adapter = CLIAdapter(io)

    await adapter.notify_game_event("ERROR", {"message": "Not enough in the pot"})
    await adapter.notify_game_event("BANK_BUSTED", {"challenger_name": "Carla"})
    await adapter.notify_game_event("DEALER_ROTATED", {"dealer_name": "Bruno"})
    await adapter.notify_game_event("ORBIT_COMPLETED", {"dealer_round": 2})
    await adapter.notify_game_event("HAND_RESULT", {"amount": 1})

    assert io.sent_messages == [
        "! Not enough in the pot",
        "*** Carla busts the bank! ***",
        "The bank passes to Bruno.",
        "Orbit 2 begins.",
    ]


@pytest.mark.asyncio
async def test_request_command_reads_input():
    io = TestIOInterface(["start"])
    adapter = CLIAdapter(io)

    assert await adapter.request_command() == "start"
    assert io.prompts == ["> "]

    with pytest.raises(EOFError):
        await adapter.request_command()


def test_format_log():
    logs = [
        {"kind": "loss", "message": "Bruno wins", "amount": "-€0.10", "timestamp": 1.0},
        {"kind": "info", "message": "Orbit 2", "amount": None, "timestamp": 2.0},
    ]
    assert CLIAdapter.format_log(logs) == [
        "  [loss] Bruno wins  -€0.10",
        "  [info] Orbit 2",
    ]
