"""
Exceptions raised by the table ledger.

Every ledger operation either returns a new state or raises one of these,
leaving the state it was given untouched.
"""

from decimal import Decimal
from typing import Any, Optional

from potkeeper.ledger.money import MAX_AMOUNT


class LedgerError(ValueError):
    """Base class for all recoverable ledger errors."""

    pass


class InvalidSetup(LedgerError):
    """Fewer than two players, a blank name or a non-positive ante."""

    pass


class NoActiveRound(LedgerError):
    """A hand was recorded before the ante was collected for the current dealer."""

    def __init__(self, message: str = "No round is active; collect the ante first"):
        super().__init__(message)


class RoundAlreadyActive(LedgerError):
    """The ante was requested again while a round is still running."""

    def __init__(self, message: str = "A round is already active for this dealer"):
        super().__init__(message)


class InvalidChallenger(LedgerError):
    """The challenger is unknown or is the current dealer."""

    def __init__(self, challenger_id: Optional[str], reason: str = "unknown player"):
        self.challenger_id = challenger_id
        self.reason = reason
        super().__init__(f"Invalid challenger {challenger_id!r}: {reason}")


class InvalidAmount(LedgerError):
    """The amount is not a positive, finite currency value, or overflows the pot."""

    def __init__(self, amount: Any, reason: Optional[str] = None):
        self.amount = amount
        self.reason = reason
        if reason is None:
            super().__init__(
                f"Amount must be a positive number up to {MAX_AMOUNT}, got {amount!r}"
            )
        else:
            super().__init__(f"Invalid amount {amount!r}: {reason}")


class InsufficientPot(LedgerError):
    """A challenger win larger than what is left in the pot."""

    def __init__(self, amount: Decimal, pot: Decimal):
        self.amount = amount
        self.pot = pot
        super().__init__(f"Cannot pay {amount:.2f} from a pot of {pot:.2f}")


class GameNotActive(LedgerError):
    """An operation was requested with no game in progress."""

    def __init__(self, message: str = "No game is in progress"):
        super().__init__(message)
