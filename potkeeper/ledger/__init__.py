"""
Table ledger: pot, ante, hands and dealer rotation for a rotating-bank card game.
"""

from potkeeper.ledger.constants import EntryType, HandOutcome, LogKind, RotationReason
from potkeeper.ledger.exceptions import (
    GameNotActive,
    InsufficientPot,
    InvalidAmount,
    InvalidChallenger,
    InvalidSetup,
    LedgerError,
    NoActiveRound,
    RoundAlreadyActive,
)
from potkeeper.ledger.state import LogEntry, PlayerState, TableState
from potkeeper.ledger.transitions import StateTransitionEngine

__all__ = [
    "EntryType",
    "HandOutcome",
    "LogKind",
    "RotationReason",
    "GameNotActive",
    "InsufficientPot",
    "InvalidAmount",
    "InvalidChallenger",
    "InvalidSetup",
    "LedgerError",
    "NoActiveRound",
    "RoundAlreadyActive",
    "LogEntry",
    "PlayerState",
    "TableState",
    "StateTransitionEngine",
]
