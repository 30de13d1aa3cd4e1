"""
Event system for potkeeper.

This package provides the event bus the ledger publishes on and the payload
contract of each ledger event.
"""

from potkeeper.events.emitter import EventBus, EventEmitter
from potkeeper.events.types import PAYLOAD_KEYS, LedgerEvent, LedgerEventType

__all__ = ["EventEmitter", "EventBus", "LedgerEvent", "LedgerEventType", "PAYLOAD_KEYS"]
