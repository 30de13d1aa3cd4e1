"""
Immutable state models for the table ledger.

This module provides dataclasses for representing a scorekeeping session in
an immutable manner. These classes are designed to be used with the pure
transition functions in ``potkeeper.ledger.transitions``, which create new
state instances rather than modifying existing ones.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Iterator, List, Optional, Tuple
import time
import uuid

from potkeeper.ledger.constants import DEFAULT_LOCALE, FIRST_ORBIT, EntryType, LogKind
from potkeeper.ledger.messages import format_entry_amount, render_entry
from potkeeper.ledger.money import ZERO


def _new_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class PlayerState:
    """
    Immutable representation of a player at the table.

    Attributes:
        id: Unique identifier, stable for the whole session
        name: Display name of the player
        is_dealer: Whether this player currently holds the bank
        rounds_played: Per-player counter kept for future use
    """

    id: str = field(default_factory=_new_id)
    name: str = "Player"
    is_dealer: bool = False
    rounds_played: int = 0


@dataclass(frozen=True)
class LogEntry:
    """
    A single structured entry in the transaction log.

    Attributes:
        id: Unique identifier for this entry
        timestamp: Creation time in epoch seconds, never earlier than the previous entry
        kind: Coarse category (ante, win, loss, collect, info)
        entry_type: The ledger event recorded
        amount: Signed amount; negative when money left the pot
        dealer_id: Dealer at the time of the entry
        challenger_id: Challenger involved, if any
        next_dealer_id: New dealer for entries that rotate the bank
        orbit: Orbit number for orbit announcements
        pot_after: Pot once the operation that produced the entry completed
        message: English rendering of the entry
    """

    kind: LogKind
    entry_type: EntryType
    id: str = field(default_factory=_new_id)
    timestamp: float = field(default_factory=time.time)
    amount: Optional[Decimal] = None
    dealer_id: Optional[str] = None
    challenger_id: Optional[str] = None
    next_dealer_id: Optional[str] = None
    orbit: Optional[int] = None
    pot_after: Decimal = ZERO
    message: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "kind": self.kind.value,
            "entry_type": self.entry_type.name,
            "amount": str(self.amount) if self.amount is not None else None,
            "dealer_id": self.dealer_id,
            "challenger_id": self.challenger_id,
            "next_dealer_id": self.next_dealer_id,
            "orbit": self.orbit,
            "pot_after": str(self.pot_after),
            "message": self.message,
        }


@dataclass(frozen=True)
class TableState:
    """
    Immutable representation of the whole table.

    Attributes:
        id: Unique identifier for this game
        players: Players in turn order, fixed for the life of the game
        pot: Money currently in the bank
        ante: Amount each player pays when a dealer's round starts
        current_dealer_id: ID of the player holding the bank
        round_active: Whether the ante has been collected for the current dealer
        logs: Log entries in creation order
        dealer_round: Orbit counter for the current dealer, starting at 1
        players_played_this_round: Challengers who played since the last orbit reset
        timestamp: Time when this state was created
    """

    id: str = field(default_factory=_new_id)
    players: Tuple[PlayerState, ...] = ()
    pot: Decimal = ZERO
    ante: Decimal = ZERO
    current_dealer_id: Optional[str] = None
    round_active: bool = False
    logs: Tuple[LogEntry, ...] = ()
    dealer_round: int = FIRST_ORBIT
    players_played_this_round: Tuple[str, ...] = ()
    timestamp: float = field(default_factory=time.time)

    def get_player(self, player_id: Optional[str]) -> Optional[PlayerState]:
        """Return the player with the given ID, or None."""
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def index_of(self, player_id: Optional[str]) -> int:
        """Return the seat index of a player, or -1 if unknown."""
        for i, player in enumerate(self.players):
            if player.id == player_id:
                return i
        return -1

    @property
    def dealer(self) -> Optional[PlayerState]:
        return self.get_player(self.current_dealer_id)

    @property
    def challengers(self) -> List[PlayerState]:
        """Every player except the dealer, in seat order."""
        return [p for p in self.players if p.id != self.current_dealer_id]

    @property
    def total_ante(self) -> Decimal:
        return self.ante * len(self.players)

    def recent_logs(self) -> Iterator[LogEntry]:
        """Iterate over the log most-recent-first, as it is displayed."""
        return reversed(self.logs)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the table state to a dictionary suitable for serialization.

        Amounts are serialized as strings to keep them exact.

        Returns:
            Dictionary representation of the table state
        """
        return {
            "id": self.id,
            "pot": str(self.pot),
            "ante": str(self.ante),
            "current_dealer_id": self.current_dealer_id,
            "round_active": self.round_active,
            "dealer_round": self.dealer_round,
            "players_played_this_round": list(self.players_played_this_round),
            "timestamp": self.timestamp,
            "players": [
                {
                    "id": player.id,
                    "name": player.name,
                    "is_dealer": player.is_dealer,
                    "rounds_played": player.rounds_played,
                }
                for player in self.players
            ],
            "logs": [entry.to_dict() for entry in self.logs],
        }

    def to_adapter_format(self, locale: str = DEFAULT_LOCALE) -> Dict[str, Any]:
        """
        Convert the table state to a format suitable for platform adapters.

        Args:
            locale: Locale used to render log messages

        Returns:
            Dictionary in adapter-friendly format
        """
        dealer = self.dealer
        return {
            "pot": self.pot,
            "ante": self.ante,
            "total_ante": self.total_ante,
            "dealer": dealer.name if dealer else None,
            "dealer_id": self.current_dealer_id,
            "round_active": self.round_active,
            "dealer_round": self.dealer_round,
            "challengers": [
                {
                    "id": player.id,
                    "name": player.name,
                    "played": player.id in self.players_played_this_round,
                }
                for player in self.challengers
            ],
            "logs": [
                {
                    "kind": entry.kind.value,
                    "message": render_entry(entry, self, locale),
                    "amount": format_entry_amount(entry),
                    "timestamp": entry.timestamp,
                }
                for entry in self.recent_logs()
            ],
        }
