"""
Engines for potkeeper.

This package connects the pure ledger to platform adapters.
"""

from potkeeper.engine.base import LedgerEngine
from potkeeper.engine.table import TableEngine

__all__ = ["LedgerEngine", "TableEngine"]
