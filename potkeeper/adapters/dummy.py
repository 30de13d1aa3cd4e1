"""
Dummy adapter for the table engine, used for testing and scripted sessions.

This module provides a non-interactive adapter that stores everything it is
given so tests can inspect it afterwards.
"""

from typing import Any, Dict, List, Union
from enum import Enum

from potkeeper.adapters.base import PlatformAdapter


class DummyAdapter(PlatformAdapter):
    """
    Dummy adapter for testing.

    This adapter doesn't interact with any real platform. It records rendered
    states and events, and can print them for debugging.
    """

    def __init__(self, verbose: bool = False):
        """
        Initialize the dummy adapter.

        Args:
            verbose: Whether to print states and events to stdout
        """
        self.verbose = verbose
        self.events = []
        self.rendered_states = []
        self.initialized = False

    async def initialize(self) -> None:
        self.initialized = True

    async def shutdown(self) -> None:
        self.initialized = False

    async def render_game_state(self, state: Dict[str, Any]) -> None:
        """Store the state for later inspection."""
        self.rendered_states.append(state)

        if self.verbose:
            print(f"Pot: {state.get('pot')}  Dealer: {state.get('dealer')}")

    async def notify_game_event(
        self, event_type: Union[str, Enum], data: Dict[str, Any]
    ) -> None:
        """Store the event for later inspection."""
        event_type_str = event_type.name if isinstance(event_type, Enum) else event_type
        self.events.append((event_type_str, data))

        if self.verbose:
            print(f"Event: {event_type_str} {data}")

    @property
    def last_state(self) -> Dict[str, Any]:
        return self.rendered_states[-1] if self.rendered_states else {}

    def get_events_by_type(self, event_type: Union[str, Enum]) -> List[Dict[str, Any]]:
        """
        Get all events of a specific type.

        Args:
            event_type: The type of events to retrieve

        Returns:
            A list of event data dictionaries
        """
        event_type_str = event_type.name if isinstance(event_type, Enum) else event_type
        return [data for typ, data in self.events if typ == event_type_str]

    def clear(self) -> None:
        """Clear all stored events and states."""
        self.events.clear()
        self.rendered_states.clear()
