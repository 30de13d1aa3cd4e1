"""
Ledger event contract.

Every event the ledger or the table engine publishes is listed here together
with the payload keys a subscriber can rely on. Payloads may carry more keys
than these.
"""

from typing import Any, Dict, FrozenSet, NamedTuple
from enum import Enum


class LedgerEventType(Enum):
    """Event types published by the ledger and the table engine."""

    # Engine lifecycle
    ENGINE_INIT = "engine_init"
    ENGINE_SHUTDOWN = "engine_shutdown"

    # Game lifecycle
    GAME_CREATED = "game_created"
    GAME_ENDED = "game_ended"
    ROUND_STARTED = "round_started"

    # Money
    HAND_RESULT = "hand_result"
    BANK_BUSTED = "bank_busted"
    BANK_CLOSED = "bank_closed"

    # Turn order
    ORBIT_COMPLETED = "orbit_completed"
    DEALER_ROTATED = "dealer_rotated"

    # Errors
    ERROR = "error"


PAYLOAD_KEYS: Dict[LedgerEventType, FrozenSet[str]] = {
    LedgerEventType.ENGINE_INIT: frozenset({"engine_type", "config", "timestamp"}),
    LedgerEventType.ENGINE_SHUTDOWN: frozenset({"timestamp"}),
    LedgerEventType.GAME_CREATED: frozenset(
        {"game_id", "players", "ante", "dealer_id", "timestamp"}
    ),
    LedgerEventType.GAME_ENDED: frozenset({"game_id", "pot", "timestamp"}),
    LedgerEventType.ROUND_STARTED: frozenset(
        {"game_id", "dealer_id", "total_ante", "pot", "first_challenger_id"}
    ),
    LedgerEventType.HAND_RESULT: frozenset(
        {
            "game_id",
            "dealer_id",
            "challenger_id",
            "challenger_name",
            "outcome",
            "amount",
            "pot",
        }
    ),
    LedgerEventType.BANK_BUSTED: frozenset(
        {"game_id", "dealer_id", "challenger_id", "challenger_name", "amount"}
    ),
    LedgerEventType.BANK_CLOSED: frozenset(
        {"game_id", "dealer_id", "dealer_name", "amount"}
    ),
    LedgerEventType.ORBIT_COMPLETED: frozenset({"game_id", "dealer_id", "dealer_round"}),
    LedgerEventType.DEALER_ROTATED: frozenset(
        {"game_id", "previous_dealer_id", "dealer_id", "dealer_name", "reason"}
    ),
    LedgerEventType.ERROR: frozenset({"operation", "error", "message"}),
}


class LedgerEvent(NamedTuple):
    """An event as delivered to catch-all subscribers."""

    event_type: str
    data: Dict[str, Any]

    @property
    def game_id(self):
        return self.data.get("game_id")


def missing_keys(event_type: LedgerEventType, data: Dict[str, Any]) -> FrozenSet[str]:
    """Return the contract keys absent from ``data``."""
    return PAYLOAD_KEYS[event_type].difference(data)
