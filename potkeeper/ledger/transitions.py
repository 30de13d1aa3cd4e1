"""
State transition functions for the table ledger.

This module provides pure functions for moving a table from one state to the
next without modifying the original state objects. Every function either
returns a complete new state or raises a ``LedgerError``; events are only
published once a transition has fully succeeded.
"""

from dataclasses import replace
from decimal import Decimal
from typing import Any, Dict, Optional, Sequence, Tuple, Union
import logging
import time

from potkeeper.events import EventBus, LedgerEventType
from potkeeper.ledger.constants import (
    FIRST_ORBIT,
    MIN_PLAYERS,
    EntryType,
    HandOutcome,
    LogKind,
    RotationReason,
)
from potkeeper.ledger.exceptions import (
    InsufficientPot,
    InvalidAmount,
    InvalidChallenger,
    InvalidSetup,
    LedgerError,
    NoActiveRound,
    RoundAlreadyActive,
)
from potkeeper.ledger.messages import render_entry
from potkeeper.ledger.money import ZERO, AmountLike, exceeds, is_zero, round2
from potkeeper.ledger.state import LogEntry, PlayerState, TableState

logger = logging.getLogger("potkeeper.ledger")


def _emit(event_type: LedgerEventType, data: Dict[str, Any]) -> None:
    EventBus.get_instance().emit(event_type, data)


def _add_to_pot(pot: Decimal, amount: Decimal, offending: Any) -> Decimal:
    try:
        return round2(pot + amount)
    except ValueError as exc:
        raise InvalidAmount(offending, "the pot would exceed the largest amount") from exc


def _append_entry(
    state: TableState, logs: Tuple[LogEntry, ...], **fields
) -> Tuple[LogEntry, ...]:
    """Return ``logs`` with a new entry appended, stamped no earlier than the last one."""
    timestamp = time.time()
    if logs and logs[-1].timestamp > timestamp:
        timestamp = logs[-1].timestamp

    entry = LogEntry(timestamp=timestamp, **fields)
    entry = replace(entry, message=render_entry(entry, state))
    return logs + (entry,)


class StateTransitionEngine:
    """
    Pure functions for state transitions of the table ledger.

    This class contains static methods that implement the ledger operations.
    Each method takes a state and returns a new state, without modifying the
    original.
    """

    @staticmethod
    def initialize(names: Sequence[str], ante: AmountLike) -> TableState:
        """
        Seat the players and create a fresh table.

        Args:
            names: Player names in turn order; the first player deals first
            ante: Amount each player pays when a dealer's round starts

        Returns:
            New table state with the first player holding the bank

        Raises:
            InvalidSetup: If fewer than two names, a blank name or a non-positive ante is given
        """
        if isinstance(names, str) or names is None:
            raise InvalidSetup("Player names must be given as a list")

        cleaned = []
        for name in names:
            if not isinstance(name, str) or not name.strip():
                raise InvalidSetup(f"Player names must be non-empty, got {name!r}")
            cleaned.append(name.strip())

        if len(cleaned) < MIN_PLAYERS:
            raise InvalidSetup(
                f"At least {MIN_PLAYERS} players are required, got {len(cleaned)}"
            )

        try:
            ante_amount = round2(ante)
        except ValueError as exc:
            raise InvalidSetup(str(exc)) from exc

        if ante_amount <= ZERO:
            raise InvalidSetup(f"Ante must be positive, got {ante!r}")

        players = tuple(
            PlayerState(name=name, is_dealer=(i == 0)) for i, name in enumerate(cleaned)
        )

        state = TableState(
            players=players,
            ante=ante_amount,
            current_dealer_id=players[0].id,
        )

        logger.debug(
            "Table %s created with %d players, ante %s", state.id, len(players), ante_amount
        )
        _emit(
            LedgerEventType.GAME_CREATED,
            {
                "game_id": state.id,
                "players": [{"id": p.id, "name": p.name} for p in players],
                "ante": ante_amount,
                "dealer_id": state.current_dealer_id,
                "timestamp": state.timestamp,
            },
        )

        return state

    @staticmethod
    def start_round(state: TableState) -> TableState:
        """
        Collect the ante from every player and open the round.

        Args:
            state: Current table state

        Returns:
            New table state with the ante in the pot and the round active

        Raises:
            RoundAlreadyActive: If the ante was already collected for this dealer
            InvalidAmount: If collecting the ante would overflow the pot
        """
        if state.round_active:
            raise RoundAlreadyActive()

        total_ante = _add_to_pot(ZERO, len(state.players) * state.ante, state.ante)
        new_pot = _add_to_pot(state.pot, total_ante, state.ante)

        logs = _append_entry(
            state,
            state.logs,
            kind=LogKind.ANTE,
            entry_type=EntryType.ANTE_COLLECTED,
            amount=total_ante,
            dealer_id=state.current_dealer_id,
            pot_after=new_pot,
        )

        new_state = replace(state, pot=new_pot, round_active=True, logs=logs)

        logger.debug("Round started for dealer %s, pot %s", state.current_dealer_id, new_pot)
        _emit(
            LedgerEventType.ROUND_STARTED,
            {
                "game_id": state.id,
                "dealer_id": state.current_dealer_id,
                "total_ante": total_ante,
                "pot": new_pot,
                "first_challenger_id": StateTransitionEngine.next_challenger_id(
                    new_state
                ),
            },
        )

        return new_state

    @staticmethod
    def record_hand(
        state: TableState,
        challenger_id: str,
        amount: AmountLike,
        outcome: Union[HandOutcome, str],
    ) -> TableState:
        """
        Settle one hand between the bank and a challenger.

        A challenger win that empties the pot busts the bank: the round ends
        and the bank passes to the next player straight away.

        Args:
            state: Current table state
            challenger_id: ID of the player who played against the bank
            amount: Amount that changed hands
            outcome: Who won the hand

        Returns:
            New table state

        Raises:
            NoActiveRound: If the ante has not been collected
            InvalidChallenger: If the ID is unknown or belongs to the dealer
            InvalidAmount: If the amount is not a positive finite number,
                or a bank win would overflow the pot
            InsufficientPot: If a challenger win is larger than the pot
        """
        if not state.round_active:
            raise NoActiveRound()

        challenger = state.get_player(challenger_id)
        if challenger is None:
            raise InvalidChallenger(challenger_id)
        if challenger.id == state.current_dealer_id:
            raise InvalidChallenger(challenger_id, "the dealer cannot challenge the bank")

        try:
            outcome = HandOutcome(outcome)
        except ValueError as exc:
            raise LedgerError(f"Unknown hand outcome: {outcome!r}") from exc

        try:
            stake = round2(amount)
        except ValueError as exc:
            raise InvalidAmount(amount) from exc
        if stake <= ZERO:
            raise InvalidAmount(amount)

        if outcome == HandOutcome.CHALLENGER_WINS:
            if exceeds(stake, state.pot):
                raise InsufficientPot(stake, state.pot)

            remaining = round2(state.pot - stake)
            if is_zero(remaining):
                return StateTransitionEngine._bust(state, challenger, stake)

            logs = _append_entry(
                state,
                state.logs,
                kind=LogKind.LOSS,
                entry_type=EntryType.CHALLENGER_WON,
                amount=-stake,
                dealer_id=state.current_dealer_id,
                challenger_id=challenger.id,
                pot_after=remaining,
            )
        else:
            remaining = _add_to_pot(state.pot, stake, amount)
            logs = _append_entry(
                state,
                state.logs,
                kind=LogKind.WIN,
                entry_type=EntryType.DEALER_WON,
                amount=stake,
                dealer_id=state.current_dealer_id,
                challenger_id=challenger.id,
                pot_after=remaining,
            )

        _emit(
            LedgerEventType.HAND_RESULT,
            {
                "game_id": state.id,
                "dealer_id": state.current_dealer_id,
                "challenger_id": challenger.id,
                "challenger_name": challenger.name,
                "outcome": outcome.value,
                "amount": stake,
                "pot": remaining,
            },
        )

        return StateTransitionEngine._track_orbit(
            replace(state, pot=remaining, logs=logs), challenger.id
        )

    @staticmethod
    def close_bank(state: TableState) -> TableState:
        """
        Let the dealer keep whatever is left in the pot and pass the bank on.

        Args:
            state: Current table state

        Returns:
            New table state with the next player holding an empty bank
        """
        collected = state.pot
        dealer = state.dealer
        next_dealer = StateTransitionEngine._next_dealer(state)

        logs = _append_entry(
            state,
            state.logs,
            kind=LogKind.COLLECT,
            entry_type=EntryType.BANK_CLOSED,
            amount=collected,
            dealer_id=state.current_dealer_id,
            next_dealer_id=next_dealer.id,
            pot_after=ZERO,
        )

        _emit(
            LedgerEventType.BANK_CLOSED,
            {
                "game_id": state.id,
                "dealer_id": state.current_dealer_id,
                "dealer_name": dealer.name if dealer else None,
                "amount": collected,
            },
        )

        return StateTransitionEngine.rotate_dealer(
            replace(state, logs=logs), RotationReason.COLLECT
        )

    @staticmethod
    def rotate_dealer(state: TableState, reason: RotationReason) -> TableState:
        """
        Pass the bank to the next seat and reset the per-dealer counters.

        The reason only changes what is announced, never the resulting state.

        Args:
            state: Current table state
            reason: Why the bank is moving

        Returns:
            New table state with an empty pot and no active round
        """
        next_dealer = StateTransitionEngine._next_dealer(state)

        new_players = tuple(
            replace(player, is_dealer=(player.id == next_dealer.id))
            for player in state.players
        )

        new_state = replace(
            state,
            players=new_players,
            current_dealer_id=next_dealer.id,
            pot=ZERO,
            round_active=False,
            dealer_round=FIRST_ORBIT,
            players_played_this_round=(),
        )

        logger.debug(
            "Bank passes from %s to %s (%s)",
            state.current_dealer_id,
            next_dealer.id,
            reason.value,
        )
        _emit(
            LedgerEventType.DEALER_ROTATED,
            {
                "game_id": state.id,
                "previous_dealer_id": state.current_dealer_id,
                "dealer_id": next_dealer.id,
                "dealer_name": next_dealer.name,
                "reason": reason.value,
            },
        )

        return new_state

    @staticmethod
    def exit(state: TableState) -> None:
        """
        Discard the table.

        Args:
            state: Table state being abandoned
        """
        logger.debug("Table %s discarded", state.id)
        _emit(
            LedgerEventType.GAME_ENDED,
            {"game_id": state.id, "pot": state.pot, "timestamp": time.time()},
        )

    @staticmethod
    def next_challenger_id(
        state: TableState, reference_id: Optional[str] = None
    ) -> Optional[str]:
        """
        Suggest who should face the bank next.

        Scans forward from the seat after ``reference_id`` (or after the dealer
        when no reference is given), wrapping around, and returns the first
        player who is not the dealer. The suggestion is advisory only.

        Args:
            state: Current table state
            reference_id: Player who just played, if any

        Returns:
            ID of the suggested challenger, or None
        """
        if len(state.players) < MIN_PLAYERS or state.current_dealer_id is None:
            return None

        start = state.index_of(reference_id or state.current_dealer_id)
        if start == -1:
            return None

        count = len(state.players)
        for offset in range(1, count):
            candidate = state.players[(start + offset) % count]
            if candidate.id != state.current_dealer_id:
                return candidate.id

        return None

    @staticmethod
    def _next_dealer(state: TableState) -> PlayerState:
        index = state.index_of(state.current_dealer_id)
        if index == -1:
            raise LedgerError(
                f"Dealer {state.current_dealer_id!r} is not seated at this table"
            )
        return state.players[(index + 1) % len(state.players)]

    @staticmethod
    def _bust(state: TableState, challenger: PlayerState, stake: Decimal) -> TableState:
        next_dealer = StateTransitionEngine._next_dealer(state)

        logs = _append_entry(
            state,
            state.logs,
            kind=LogKind.LOSS,
            entry_type=EntryType.CHALLENGER_WON,
            amount=-stake,
            dealer_id=state.current_dealer_id,
            challenger_id=challenger.id,
            pot_after=ZERO,
        )
        logs = _append_entry(
            state,
            logs,
            kind=LogKind.LOSS,
            entry_type=EntryType.BANK_BUSTED,
            amount=-stake,
            dealer_id=state.current_dealer_id,
            challenger_id=challenger.id,
            next_dealer_id=next_dealer.id,
            pot_after=ZERO,
        )

        logger.debug("Bank %s busted by %s", state.current_dealer_id, challenger.id)
        _emit(
            LedgerEventType.HAND_RESULT,
            {
                "game_id": state.id,
                "dealer_id": state.current_dealer_id,
                "challenger_id": challenger.id,
                "challenger_name": challenger.name,
                "outcome": HandOutcome.CHALLENGER_WINS.value,
                "amount": stake,
                "pot": ZERO,
            },
        )
        _emit(
            LedgerEventType.BANK_BUSTED,
            {
                "game_id": state.id,
                "dealer_id": state.current_dealer_id,
                "challenger_id": challenger.id,
                "challenger_name": challenger.name,
                "amount": stake,
            },
        )

        return StateTransitionEngine.rotate_dealer(
            replace(state, pot=ZERO, logs=logs), RotationReason.BUST
        )

    @staticmethod
    def _track_orbit(state: TableState, challenger_id: str) -> TableState:
        played = state.players_played_this_round
        if challenger_id not in played:
            played = played + (challenger_id,)

        if len(played) < len(state.players) - 1:
            return replace(state, players_played_this_round=played)

        new_orbit = state.dealer_round + 1
        logs = _append_entry(
            state,
            state.logs,
            kind=LogKind.INFO,
            entry_type=EntryType.ORBIT_COMPLETED,
            dealer_id=state.current_dealer_id,
            orbit=new_orbit,
            pot_after=state.pot,
        )

        _emit(
            LedgerEventType.ORBIT_COMPLETED,
            {
                "game_id": state.id,
                "dealer_id": state.current_dealer_id,
                "dealer_round": new_orbit,
            },
        )

        return replace(
            state,
            dealer_round=new_orbit,
            players_played_this_round=(),
            logs=logs,
        )
