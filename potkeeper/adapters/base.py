"""
Base adapter interface for the table engine.

This module defines the interface that platform-specific adapters must
implement to present the ledger to a scorekeeper.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Union
from enum import Enum


class PlatformAdapter(ABC):
    """
    Base interface for platform-specific adapters.

    An adapter is the presentation layer: it receives the full table state
    after every operation and is told about ledger events and rejected
    operations. Implementations bridge the platform-agnostic engine and a
    concrete surface such as a console or a web page.
    """

    @abstractmethod
    async def render_game_state(self, state: Dict[str, Any]) -> None:
        """
        Render the current table state.

        Args:
            state: Adapter-format state (pot, dealer, challengers, log, quick bets)
        """
        pass

    @abstractmethod
    async def notify_game_event(
        self, event_type: Union[str, Enum], data: Dict[str, Any]
    ) -> None:
        """
        Notify the platform of a ledger event or a rejected operation.

        Args:
            event_type: The type of event that occurred
            data: Data associated with the event
        """
        pass

    # The following methods have default implementations but can be overridden

    async def initialize(self) -> None:
        """Set up resources when the adapter is connected to the engine."""
        pass

    async def shutdown(self) -> None:
        """Release resources when the engine shuts down."""
        pass
