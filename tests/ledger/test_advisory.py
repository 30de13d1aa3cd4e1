from decimal import Decimal

from potkeeper.ledger import HandOutcome, InsufficientPot, InvalidAmount
from potkeeper.ledger import StateTransitionEngine as T
from potkeeper.ledger.advisory import (
    HouseRules,
    QuickBetKind,
    available_actions,
    check_bet,
    quick_bets,
)


def bets_by_kind(state, rules=None):
    return {bet.kind: bet for bet in quick_bets(state, rules)}


def test_quick_bets_on_first_orbit(active_table):
    bets = bets_by_kind(active_table)

    assert bets[QuickBetKind.ANTE].amount == Decimal("0.20")
    assert bets[QuickBetKind.ANTE].enabled
    assert bets[QuickBetKind.POT_MINUS_ANTE].amount == Decimal("0.40")
    assert bets[QuickBetKind.POT_MINUS_ANTE].enabled
    assert bets[QuickBetKind.ALL_IN].amount == Decimal("0.60")
    assert not bets[QuickBetKind.ALL_IN].enabled
    assert bets[QuickBetKind.ALL_IN].reason


def test_all_in_unlocked_after_first_orbit(active_table):
    _, b, c = active_table.players
    state = T.record_hand(active_table, b.id, "0.10", HandOutcome.DEALER_WINS)
    state = T.record_hand(state, c.id, "0.10", HandOutcome.DEALER_WINS)
    assert state.dealer_round == 2

    assert bets_by_kind(state)[QuickBetKind.ALL_IN].enabled


def test_house_rule_allows_all_in_on_first_orbit(active_table):
    rules = HouseRules.from_config({"allow_all_in_first_orbit": True})
    assert bets_by_kind(active_table, rules)[QuickBetKind.ALL_IN].enabled


def test_house_rules_defaults():
    assert HouseRules.from_config(None) == HouseRules()
    assert HouseRules.from_config({"unrelated": 1}).allow_all_in_first_orbit is False


def test_ante_bets_disabled_when_pot_is_short(active_table):
    _, b, _ = active_table.players
    state = T.record_hand(active_table, b.id, "0.45", HandOutcome.CHALLENGER_WINS)
    assert state.pot == Decimal("0.15")

    bets = bets_by_kind(state)
    assert not bets[QuickBetKind.ANTE].enabled
    assert not bets[QuickBetKind.POT_MINUS_ANTE].enabled
    assert bets[QuickBetKind.POT_MINUS_ANTE].amount == Decimal("0")


def test_check_bet(active_table):
    assert check_bet(active_table, "0.60") is None
    assert check_bet(active_table, "0.604") is None
    assert isinstance(check_bet(active_table, "0.61"), InsufficientPot)
    assert isinstance(check_bet(active_table, "0"), InvalidAmount)
    assert isinstance(check_bet(active_table, "x"), InvalidAmount)


def test_available_actions(table, active_table):
    assert available_actions(None) == {
        "start_round": False,
        "record_hand": False,
        "close_bank": False,
    }
    assert available_actions(table) == {
        "start_round": True,
        "record_hand": False,
        "close_bank": False,
    }
    assert available_actions(active_table) == {
        "start_round": False,
        "record_hand": True,
        "close_bank": True,
    }
