from decimal import Decimal

from potkeeper.ledger import HandOutcome, StateTransitionEngine
from potkeeper.ledger.messages import format_entry_amount, render_entry, supported_locales
from potkeeper.ledger.state import PlayerState, TableState


def test_player_state_defaults():
    first, second = PlayerState(name="A"), PlayerState(name="B")
    assert first.id != second.id
    assert first.is_dealer is False
    assert first.rounds_played == 0


def test_table_state_lookups(table):
    a, b, c = table.players
    assert table.get_player(b.id) == b
    assert table.get_player("missing") is None
    assert table.index_of(c.id) == 2
    assert table.index_of("missing") == -1
    assert table.dealer == a
    assert table.challengers == [b, c]
    assert table.total_ante == Decimal("0.60")


def test_empty_table_state():
    state = TableState()
    assert state.dealer is None
    assert state.challengers == []
    assert list(state.recent_logs()) == []


def test_to_dict_serializes_amounts_as_strings(active_table):
    data = active_table.to_dict()
    assert data["pot"] == "0.60"
    assert data["ante"] == "0.20"
    assert data["round_active"] is True
    assert [p["name"] for p in data["players"]] == ["A", "B", "C"]
    assert data["players"][0]["is_dealer"] is True
    assert data["logs"][0]["kind"] == "ante"
    assert data["logs"][0]["entry_type"] == "ANTE_COLLECTED"
    assert data["logs"][0]["amount"] == "0.60"


def test_adapter_format(active_table):
    b = active_table.players[1]
    state = StateTransitionEngine.record_hand(
        active_table, b.id, "0.20", HandOutcome.DEALER_WINS
    )
    view = state.to_adapter_format()

    assert view["pot"] == Decimal("0.80")
    assert view["dealer"] == "A"
    assert view["round_active"] is True
    assert view["dealer_round"] == 1
    assert [c["name"] for c in view["challengers"]] == ["B", "C"]
    assert [c["played"] for c in view["challengers"]] == [True, False]

    latest, first = view["logs"]
    assert latest["kind"] == "win"
    assert latest["amount"] == "+€0.20"
    assert first["message"] == "Everyone pays the ante (€0.20)"


def test_adapter_format_in_italian(active_table):
    view = active_table.to_adapter_format(locale="it")
    assert view["logs"][0]["message"] == "Tutti pagano la puntata iniziale (€0.20)"


def test_bust_messages(active_table):
    _, b, c = active_table.players
    state = StateTransitionEngine.record_hand(
        active_table, c.id, "0.60", HandOutcome.CHALLENGER_WINS
    )
    hand, bust = state.logs[-2:]

    assert render_entry(hand, state) == "C wins the hand against the bank"
    assert render_entry(bust, state) == (
        "Bank busted! C empties the pot. The bank passes to B."
    )
    assert render_entry(bust, state, "it") == (
        "SBANCATO! C svuota il piatto. Il turno passa a B."
    )
    assert format_entry_amount(bust) == "-€0.60"


def test_orbit_and_close_messages():
    state = StateTransitionEngine.start_round(
        StateTransitionEngine.initialize(["A", "B"], 1)
    )
    state = StateTransitionEngine.record_hand(
        state, state.players[1].id, 1, HandOutcome.DEALER_WINS
    )
    orbit = state.logs[-1]
    assert orbit.message == "Everyone has played. Orbit 2 begins for this dealer."
    assert format_entry_amount(orbit) is None

    state = StateTransitionEngine.close_bank(state)
    closed = state.logs[-1]
    assert closed.message == "End of turn! A collects the remaining pot"
    assert format_entry_amount(closed) == "+€3.00"


def test_unknown_locale_falls_back_to_english(active_table):
    entry = active_table.logs[0]
    assert render_entry(entry, active_table, "xx") == render_entry(entry, active_table)


def test_supported_locales():
    assert supported_locales() == ["en", "it"]
