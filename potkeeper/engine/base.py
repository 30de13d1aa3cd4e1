"""
Base engine class for potkeeper.

This module provides the abstract base class for engines that own a ledger
state and connect it to a platform adapter.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from potkeeper.adapters import PlatformAdapter
from potkeeper.events import EventBus


class LedgerEngine(ABC):
    """
    Abstract base class for ledger engines.

    An engine holds the current state, applies operations to it and tells its
    adapter to render the result.
    """

    def __init__(self, adapter: PlatformAdapter, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the engine.

        Args:
            adapter: Platform adapter to use for rendering
            config: Configuration options
        """
        self.adapter = adapter
        self.config = config or {}
        self.event_bus = EventBus.get_instance()
        self.state = None

    @abstractmethod
    async def initialize(self) -> None:
        """Initialize the engine and its adapter."""
        await self.adapter.initialize()

    @abstractmethod
    async def shutdown(self) -> None:
        """Shut down the engine and clean up resources."""
        await self.adapter.shutdown()

    @abstractmethod
    async def render_state(self) -> None:
        """Render the current state through the adapter."""
        pass
