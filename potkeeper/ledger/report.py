"""
Session reporting for the table ledger.

Turns the structured log into pandas frames (the raw log, per-player net
results and the pot over time) and draws the pot history with matplotlib.
"""

from collections import OrderedDict
from decimal import Decimal
from typing import Dict, Optional

import matplotlib.pyplot as plt
import pandas as pd

from potkeeper.ledger.constants import DEFAULT_LOCALE, EntryType
from potkeeper.ledger.messages import render_entry
from potkeeper.ledger.money import ZERO
from potkeeper.ledger.state import TableState

LOG_COLUMNS = [
    "timestamp",
    "kind",
    "entry_type",
    "amount",
    "pot_after",
    "dealer",
    "challenger",
    "next_dealer",
    "orbit",
    "message",
]


def _player_name(state: TableState, player_id: Optional[str]) -> Optional[str]:
    player = state.get_player(player_id)
    return player.name if player else None


def log_frame(state: TableState, locale: str = DEFAULT_LOCALE) -> pd.DataFrame:
    """
    Build a DataFrame of the log in creation order.

    Args:
        state: Table state whose log should be exported
        locale: Locale used for the message column

    Returns:
        One row per log entry, amounts as floats
    """
    rows = [
        {
            "timestamp": entry.timestamp,
            "kind": entry.kind.value,
            "entry_type": entry.entry_type.name,
            "amount": float(entry.amount) if entry.amount is not None else None,
            "pot_after": float(entry.pot_after),
            "dealer": _player_name(state, entry.dealer_id),
            "challenger": _player_name(state, entry.challenger_id),
            "next_dealer": _player_name(state, entry.next_dealer_id),
            "orbit": entry.orbit,
            "message": render_entry(entry, state, locale),
        }
        for entry in state.logs
    ]

    frame = pd.DataFrame(rows, columns=LOG_COLUMNS)
    frame["timestamp"] = pd.to_datetime(frame["timestamp"], unit="s")
    return frame


def player_balances(state: TableState) -> pd.DataFrame:
    """
    Compute each player's net result for the session so far.

    Every player pays the ante, challengers win from or pay into the pot and
    a closing dealer collects what is left, so the nets plus the current pot
    always sum to zero.

    Args:
        state: Current table state

    Returns:
        Frame with ``id``, ``name`` and ``net`` columns in seat order
    """
    net: Dict[str, Decimal] = OrderedDict((p.id, ZERO) for p in state.players)

    for entry in state.logs:
        if entry.entry_type == EntryType.ANTE_COLLECTED:
            for player_id in net:
                net[player_id] -= state.ante
        elif entry.entry_type == EntryType.CHALLENGER_WON:
            net[entry.challenger_id] += abs(entry.amount)
        elif entry.entry_type == EntryType.DEALER_WON:
            net[entry.challenger_id] -= entry.amount
        elif entry.entry_type == EntryType.BANK_CLOSED:
            net[entry.dealer_id] += entry.amount

    return pd.DataFrame(
        {
            "id": list(net),
            "name": [_player_name(state, player_id) for player_id in net],
            "net": [float(value) for value in net.values()],
        }
    )


def pot_history(state: TableState) -> pd.DataFrame:
    """Pot size after each log entry, with the entry type that produced it."""
    return pd.DataFrame(
        {
            "step": range(1, len(state.logs) + 1),
            "entry_type": [entry.entry_type.name for entry in state.logs],
            "pot": [float(entry.pot_after) for entry in state.logs],
        }
    )


def export_csv(state: TableState, path: str, locale: str = DEFAULT_LOCALE) -> None:
    """Write the log to a CSV file."""
    log_frame(state, locale).to_csv(path, index=False)


def plot_pot_history(state: TableState, ax=None):
    """
    Draw the pot over the course of the session.

    Args:
        state: Current table state
        ax: Optional matplotlib axes to draw on

    Returns:
        The matplotlib figure
    """
    history = pot_history(state)

    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 4))
    else:
        fig = ax.figure

    ax.step(history["step"], history["pot"], where="post")
    ax.set_xlabel("Log entry")
    ax.set_ylabel("Pot")
    ax.set_title("Pot over time")
    ax.grid(True)

    return fig
