"""
Platform adapters for potkeeper.

This package provides adapters that translate between the table engine and
concrete surfaces (console, tests).
"""

from potkeeper.adapters.base import PlatformAdapter
from potkeeper.adapters.cli import CLIAdapter
from potkeeper.adapters.dummy import DummyAdapter

__all__ = ["PlatformAdapter", "CLIAdapter", "DummyAdapter"]
