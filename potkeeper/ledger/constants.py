"""Enumerations shared by the ledger state, transitions and log rendering."""

from enum import Enum


class LogKind(Enum):
    """Coarse category of a log entry, used for colouring and sign display."""

    ANTE = "ante"
    WIN = "win"
    LOSS = "loss"
    COLLECT = "collect"
    INFO = "info"


class EntryType(Enum):
    """The ledger event a log entry records."""

    ANTE_COLLECTED = "ante_collected"
    CHALLENGER_WON = "challenger_won"
    DEALER_WON = "dealer_won"
    BANK_BUSTED = "bank_busted"
    ORBIT_COMPLETED = "orbit_completed"
    BANK_CLOSED = "bank_closed"


class HandOutcome(Enum):
    """Who took the money in a single hand against the bank."""

    CHALLENGER_WINS = "challenger_wins"
    DEALER_WINS = "dealer_wins"


class RotationReason(Enum):
    """Why the bank moved to the next player."""

    COLLECT = "collect"
    BUST = "bust"


MIN_PLAYERS = 2
FIRST_ORBIT = 1
DEFAULT_LOCALE = "en"
