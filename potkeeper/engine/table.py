"""
Table engine implementation.

This module provides the TableEngine class, which owns a single TableState,
serializes every operation on it and keeps the platform adapter up to date.
"""

from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union
import asyncio
import logging
import time

from potkeeper.adapters import PlatformAdapter
from potkeeper.engine.base import LedgerEngine
from potkeeper.events import LedgerEvent, LedgerEventType
from potkeeper.ledger import (
    GameNotActive,
    HandOutcome,
    LedgerError,
    StateTransitionEngine,
    TableState,
)
from potkeeper.ledger.advisory import HouseRules, available_actions, quick_bets
from potkeeper.ledger.constants import DEFAULT_LOCALE
from potkeeper.ledger.money import AmountLike

logger = logging.getLogger("potkeeper.engine")


class TableEngine(LedgerEngine):
    """
    Engine for one scorekeeping session.

    Operations run one at a time under an asyncio lock; each reads the
    current state once and replaces it only when the transition succeeds.
    Rejected operations leave the state untouched, are reported to the
    adapter and re-raised to the caller.
    """

    def __init__(self, adapter: PlatformAdapter, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the table engine.

        Args:
            adapter: Platform adapter to use for rendering
            config: Configuration options (``locale``, ``allow_all_in_first_orbit``)
        """
        super().__init__(adapter, config)
        self.state: Optional[TableState] = None
        self.locale = self.config.get("locale", DEFAULT_LOCALE)
        self.house_rules = HouseRules.from_config(self.config)
        self.suggested_challenger_id: Optional[str] = None

        self.forwarding = False
        self._lock: Optional[asyncio.Lock] = None

    async def initialize(self) -> None:
        """Initialize the adapter and start forwarding ledger events to it."""
        await super().initialize()
        self.forwarding = True

        self.event_bus.emit(
            LedgerEventType.ENGINE_INIT,
            {"engine_type": "table", "config": self.config, "timestamp": time.time()},
        )

    async def shutdown(self) -> None:
        """Stop forwarding events and shut the adapter down."""
        self.event_bus.emit(LedgerEventType.ENGINE_SHUTDOWN, {"timestamp": time.time()})
        self.forwarding = False

        await super().shutdown()

    async def start_game(self, names: Sequence[str], ante: AmountLike) -> TableState:
        """
        Seat the players and open a new table.

        Args:
            names: Player names in turn order
            ante: Ante per player

        Returns:
            The new table state
        """
        return await self._apply(
            "start_game",
            lambda state: StateTransitionEngine.initialize(names, ante),
            requires_game=False,
        )

    async def start_round(self) -> TableState:
        """Collect the ante for the current dealer."""
        return await self._apply("start_round", StateTransitionEngine.start_round)

    async def record_hand(
        self,
        challenger_id: str,
        amount: AmountLike,
        outcome: Union[HandOutcome, str],
    ) -> TableState:
        """
        Settle a hand between the bank and a challenger.

        Args:
            challenger_id: ID of the challenger
            amount: Amount that changed hands
            outcome: Who won

        Returns:
            The new table state
        """
        return await self._apply(
            "record_hand",
            lambda state: StateTransitionEngine.record_hand(
                state, challenger_id, amount, outcome
            ),
            played_id=challenger_id,
        )

    async def close_bank(self) -> TableState:
        """Let the dealer collect the pot and pass the bank on."""
        return await self._apply("close_bank", StateTransitionEngine.close_bank)

    async def exit(self) -> None:
        """Discard the current table."""
        async with self._operation_lock():
            if self.state is not None:
                _, events = self._capture(StateTransitionEngine.exit, self.state)
                await self._forward(events, self.state.id)
            self.state = None
            self.suggested_challenger_id = None
            await self.render_state()

    def view(self) -> Dict[str, Any]:
        """
        Everything a presentation layer needs to draw the table.

        Returns:
            The adapter-format state plus the challenger suggestion, quick bets
            and which actions are available
        """
        if self.state is None:
            return {"active": False, "actions": available_actions(None)}

        view = self.state.to_adapter_format(self.locale)
        view["active"] = True
        view["suggested_challenger_id"] = self.suggested_challenger_id
        view["quick_bets"] = [
            {
                "kind": bet.kind.value,
                "amount": bet.amount,
                "enabled": bet.enabled,
                "reason": bet.reason,
            }
            for bet in quick_bets(self.state, self.house_rules)
        ]
        view["actions"] = available_actions(self.state)
        return view

    async def render_state(self) -> None:
        """Render the current table through the adapter."""
        await self.adapter.render_game_state(self.view())

    def _operation_lock(self) -> asyncio.Lock:
        # Created on first use so it belongs to the loop running the operations
        if self._lock is None:
            self._lock = asyncio.Lock()
        return self._lock

    async def _apply(
        self,
        operation: str,
        transition: Callable[[Optional[TableState]], TableState],
        requires_game: bool = True,
        played_id: Optional[str] = None,
    ) -> TableState:
        async with self._operation_lock():
            state = self.state
            try:
                if requires_game and state is None:
                    raise GameNotActive()
                new_state, events = self._capture(transition, state)
            except LedgerError as exc:
                logger.info("Rejected %s: %s", operation, exc)
                await self._report_error(operation, exc)
                raise

            self.state = new_state
            self.suggested_challenger_id = self._suggest(state, new_state, played_id)

            await self._forward(events, new_state.id)
            await self.render_state()
            return new_state

    def _capture(
        self, transition: Callable, state: Optional[TableState]
    ) -> Tuple[Any, List[LedgerEvent]]:
        """Run a transition and collect the events published while it ran."""
        events: List[LedgerEvent] = []
        unsubscribe = self.event_bus.on_any(events.append)
        try:
            return transition(state), events
        finally:
            unsubscribe()

    def _suggest(
        self,
        old_state: Optional[TableState],
        new_state: TableState,
        played_id: Optional[str],
    ) -> Optional[str]:
        if not new_state.round_active:
            return None
        if old_state is not None and not old_state.round_active:
            return StateTransitionEngine.next_challenger_id(new_state)
        return StateTransitionEngine.next_challenger_id(new_state, played_id)

    async def _report_error(self, operation: str, exc: LedgerError) -> None:
        data = {
            "operation": operation,
            "error": type(exc).__name__,
            "message": str(exc),
        }
        self.event_bus.emit(LedgerEventType.ERROR, data)
        await self.adapter.notify_game_event(LedgerEventType.ERROR, data)

    async def _forward(self, events: List[LedgerEvent], game_id: str) -> None:
        # Other threads may publish on the shared bus while a transition runs
        if not self.forwarding:
            return
        for event in events:
            if event.game_id == game_id:
                await self.adapter.notify_game_event(event.event_type, event.data)
