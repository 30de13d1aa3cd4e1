"""
Pytest configuration for tests at the root level.

This module contains pytest fixtures shared by all test packages.
"""

import pytest

from potkeeper.events import EventBus
from potkeeper.ledger import StateTransitionEngine


# Reset event bus before each test
@pytest.fixture(scope="function", autouse=True)
def reset_event_bus():
    """Reset the event bus singleton before each test."""
    EventBus._instance = None
    yield
    EventBus._instance = None


@pytest.fixture
def recorded_events():
    """Collect every (event_type, data) pair published on the bus."""
    events = []
    EventBus.get_instance().on_any(events.append)
    return events


@pytest.fixture
def table():
    """A fresh three-player table: A deals first, ante 0.20."""
    return StateTransitionEngine.initialize(["A", "B", "C"], "0.20")


@pytest.fixture
def active_table(table):
    """The three-player table with the ante collected (pot 0.60)."""
    return StateTransitionEngine.start_round(table)
