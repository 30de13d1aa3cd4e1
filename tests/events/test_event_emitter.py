"""
Tests for the event system.

This module contains tests for the EventEmitter and EventBus classes and the
ledger event payload contract.
"""

import logging
from unittest.mock import MagicMock

import pytest

from potkeeper.events import (
    PAYLOAD_KEYS,
    EventBus,
    EventEmitter,
    LedgerEvent,
    LedgerEventType,
)
from potkeeper.ledger import HandOutcome, StateTransitionEngine as T


def test_on_with_string_event_type():
    """Test subscribing to an event with a string event type."""
    emitter = EventEmitter()
    callback = MagicMock()

    unsubscribe = emitter.on("test_event", callback)

    test_data = {"value": "test"}
    emitter.emit("test_event", test_data)
    callback.assert_called_once_with(test_data)

    unsubscribe()
    emitter.emit("test_event", {"value": "test2"})
    assert callback.call_count == 1


def test_on_with_enum_event_type():
    """Enum and name subscriptions refer to the same event."""
    emitter = EventEmitter()
    callback = MagicMock()
    payload = {
        "game_id": "g",
        "dealer_id": "d",
        "challenger_id": "c",
        "challenger_name": "C",
        "amount": 1,
    }

    emitter.on(LedgerEventType.BANK_BUSTED, callback)
    emitter.emit("BANK_BUSTED", payload)
    emitter.emit(LedgerEventType.BANK_BUSTED, payload)

    assert callback.call_count == 2


def test_on_any_receives_ledger_events():
    """Test subscribing to all events."""
    emitter = EventEmitter()
    callback = MagicMock()

    unsubscribe = emitter.on_any(callback)
    emitter.emit("event1", {"id": 1})
    emitter.emit(LedgerEventType.ENGINE_SHUTDOWN, {"timestamp": 2.0})

    assert callback.call_count == 2
    event = callback.call_args_list[1][0][0]
    assert isinstance(event, LedgerEvent)
    assert event.event_type == "ENGINE_SHUTDOWN"
    event_type, data = event
    assert data == {"timestamp": 2.0}

    unsubscribe()
    emitter.emit("event3", {"id": 3})
    assert callback.call_count == 2


def test_handlers_run_in_subscription_order():
    emitter = EventEmitter()
    call_order = []

    emitter.on("test_event", lambda data: call_order.append("first"))
    emitter.on_any(lambda event: call_order.append("any"))
    emitter.on("test_event", lambda data: call_order.append("second"))

    emitter.emit("test_event", {})

    assert call_order == ["first", "second", "any"]


def test_failing_handler_does_not_stop_others(caplog):
    """A handler that raises is logged and the remaining handlers still run."""
    emitter = EventEmitter()
    callback = MagicMock()

    def broken(data):
        raise RuntimeError("boom")

    emitter.on("test_event", broken)
    emitter.on("test_event", callback)

    with caplog.at_level(logging.ERROR, logger="potkeeper.events"):
        emitter.emit("test_event", {"id": 1})

    callback.assert_called_once()
    assert "Event handler failed for test_event" in caplog.text
    assert caplog.records[0].exc_info is not None


def test_ledger_payload_must_match_contract():
    emitter = EventEmitter()
    callback = MagicMock()
    emitter.on_any(callback)

    with pytest.raises(ValueError, match="dealer_round"):
        emitter.emit(LedgerEventType.ORBIT_COMPLETED, {"game_id": "g", "dealer_id": "d"})

    callback.assert_not_called()


def test_transitions_honour_payload_contract(recorded_events):
    state = T.initialize(["A", "B", "C"], "0.20")
    b, c = state.players[1].id, state.players[2].id
    state = T.start_round(state)
    state = T.record_hand(state, b, "0.20", HandOutcome.DEALER_WINS)
    state = T.record_hand(state, c, "0.10", HandOutcome.DEALER_WINS)
    state = T.record_hand(state, b, "0.90", HandOutcome.CHALLENGER_WINS)
    state = T.close_bank(state)
    T.exit(state)

    seen = {event.event_type for event in recorded_events}
    for event_type, data in recorded_events:
        assert PAYLOAD_KEYS[LedgerEventType[event_type]].issubset(data)
    assert seen == {
        "GAME_CREATED",
        "ROUND_STARTED",
        "HAND_RESULT",
        "ORBIT_COMPLETED",
        "BANK_BUSTED",
        "DEALER_ROTATED",
        "BANK_CLOSED",
        "GAME_ENDED",
    }


def test_event_bus_is_a_singleton():
    first = EventBus.get_instance()
    assert EventBus.get_instance() is first
    assert isinstance(first, EventEmitter)
