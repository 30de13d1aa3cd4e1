"""
Human-readable rendering of ledger log entries.

The ledger only records structured entries; this module turns them into
text for a given locale. Rendering never changes the ledger.
"""

from typing import TYPE_CHECKING, Dict, Optional

from potkeeper.ledger.constants import DEFAULT_LOCALE, EntryType, LogKind
from potkeeper.ledger.money import format_amount

if TYPE_CHECKING:
    from potkeeper.ledger.state import LogEntry, TableState


CATALOGS: Dict[str, Dict[EntryType, str]] = {
    "en": {
        EntryType.ANTE_COLLECTED: "Everyone pays the ante ({ante})",
        EntryType.CHALLENGER_WON: "{challenger} wins the hand against the bank",
        EntryType.DEALER_WON: "{challenger} loses and pays into the pot",
        EntryType.BANK_BUSTED: (
            "Bank busted! {challenger} empties the pot. "
            "The bank passes to {next_dealer}."
        ),
        EntryType.ORBIT_COMPLETED: (
            "Everyone has played. Orbit {orbit} begins for this dealer."
        ),
        EntryType.BANK_CLOSED: "End of turn! {dealer} collects the remaining pot",
    },
    "it": {
        EntryType.ANTE_COLLECTED: "Tutti pagano la puntata iniziale ({ante})",
        EntryType.CHALLENGER_WON: "{challenger} vince la mano contro il banco",
        EntryType.DEALER_WON: "{challenger} perde. Paga al piatto",
        EntryType.BANK_BUSTED: (
            "SBANCATO! {challenger} svuota il piatto. "
            "Il turno passa a {next_dealer}."
        ),
        EntryType.ORBIT_COMPLETED: (
            "Tutti i giocatori hanno giocato. "
            "Inizia il Giro {orbit} per questo mazziere."
        ),
        EntryType.BANK_CLOSED: "Fine turno! {dealer} incassa il piatto rimanente",
    },
}


def supported_locales():
    """Return the locale codes that have a message catalog."""
    return sorted(CATALOGS)


def _name(state: "TableState", player_id: Optional[str]) -> str:
    if player_id is None:
        return "?"
    player = state.get_player(player_id)
    return player.name if player else "?"


def render_entry(
    entry: "LogEntry", state: "TableState", locale: str = DEFAULT_LOCALE
) -> str:
    """
    Render a log entry as a sentence.

    Args:
        entry: The structured log entry
        state: Any state of the same game, used to resolve player names
        locale: Catalog to use; unknown locales fall back to English

    Returns:
        The rendered message
    """
    catalog = CATALOGS.get(locale, CATALOGS[DEFAULT_LOCALE])
    template = catalog[entry.entry_type]

    return template.format(
        ante=format_amount(state.ante),
        challenger=_name(state, entry.challenger_id),
        dealer=_name(state, entry.dealer_id),
        next_dealer=_name(state, entry.next_dealer_id),
        orbit=entry.orbit,
    )


def format_entry_amount(entry: "LogEntry") -> Optional[str]:
    """
    Format the amount of an entry with an explicit sign.

    Losses show a minus sign, everything else a plus sign.
    """
    if entry.amount is None:
        return None
    sign = "-" if entry.kind == LogKind.LOSS else "+"
    return f"{sign}{format_amount(abs(entry.amount))}"
