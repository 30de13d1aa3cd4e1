"""
Event bus for the table ledger.

Transitions announce what happened on a process-wide bus so that adapters,
reports and tests can observe the ledger without being wired into it.
"""

from typing import Any, Callable, Dict, List, Optional, Union
import logging
import threading

from potkeeper.events.types import LedgerEvent, LedgerEventType, missing_keys

logger = logging.getLogger("potkeeper.events")

EventName = Union[str, LedgerEventType]


def _event_name(event_type: EventName) -> str:
    if isinstance(event_type, LedgerEventType):
        return event_type.name
    return event_type


class EventEmitter:
    """
    Synchronous publish/subscribe hub.

    Handlers registered with ``on`` receive the payload dict; handlers
    registered with ``on_any`` receive a ``LedgerEvent``. Handlers run in
    subscription order, and one that raises is logged without stopping the
    rest.
    """

    def __init__(self):
        # None holds the catch-all subscribers
        self._subscribers: Dict[Optional[str], List[Callable]] = {None: []}
        self._lock = threading.RLock()

    def _subscribe(self, key: Optional[str], callback: Callable) -> Callable:
        with self._lock:
            self._subscribers.setdefault(key, []).append(callback)

        def unsubscribe():
            with self._lock:
                callbacks = self._subscribers.get(key, [])
                if callback in callbacks:
                    callbacks.remove(callback)

        return unsubscribe

    def on(self, event_type: EventName, callback: Callable) -> Callable:
        """
        Subscribe to one event type.

        Args:
            event_type: A ``LedgerEventType`` or its name
            callback: Called with the event payload

        Returns:
            A function that removes the subscription
        """
        return self._subscribe(_event_name(event_type), callback)

    def on_any(self, callback: Callable) -> Callable:
        """Subscribe to every event; ``callback`` receives a ``LedgerEvent``."""
        return self._subscribe(None, callback)

    def emit(self, event_type: EventName, data: Dict[str, Any]) -> None:
        """
        Publish an event.

        Args:
            event_type: A ``LedgerEventType`` or any other event name
            data: Event payload

        Raises:
            ValueError: If a ledger event's payload lacks a contract key
        """
        name = _event_name(event_type)
        if name in LedgerEventType.__members__:
            absent = missing_keys(LedgerEventType[name], data)
            if absent:
                raise ValueError(f"{name} payload is missing {sorted(absent)}")

        with self._lock:
            direct = list(self._subscribers.get(name, ()))
            catch_all = list(self._subscribers[None])

        event = LedgerEvent(name, data)
        calls = [(callback, data) for callback in direct]
        calls += [(callback, event) for callback in catch_all]

        for callback, argument in calls:
            try:
                callback(argument)
            except Exception:
                logger.exception("Event handler failed for %s", name)


class EventBus:
    """Process-wide ``EventEmitter`` singleton."""

    _instance = None
    _lock = threading.Lock()

    @classmethod
    def get_instance(cls) -> EventEmitter:
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = EventEmitter()
        return cls._instance
