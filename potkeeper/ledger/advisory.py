"""
Advisory helpers for a presentation layer.

Nothing here is enforced by the ledger. These helpers only suggest bets and
tell a user interface which actions make sense to offer right now.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from potkeeper.ledger.constants import FIRST_ORBIT
from potkeeper.ledger.exceptions import InsufficientPot, InvalidAmount, LedgerError
from potkeeper.ledger.money import ZERO, AmountLike, exceeds, round2
from potkeeper.ledger.state import TableState


class QuickBetKind(Enum):
    ANTE = "ante"
    POT_MINUS_ANTE = "pot_minus_ante"
    ALL_IN = "all_in"


@dataclass(frozen=True)
class HouseRules:
    """
    Table conventions the ledger itself does not enforce.

    Attributes:
        allow_all_in_first_orbit: Offer the all-in quick bet before anyone
            has played a full orbit against the current dealer
    """

    allow_all_in_first_orbit: bool = False

    @classmethod
    def from_config(cls, config: Optional[Mapping[str, Any]]) -> "HouseRules":
        config = config or {}
        return cls(
            allow_all_in_first_orbit=bool(config.get("allow_all_in_first_orbit", False))
        )


@dataclass(frozen=True)
class QuickBet:
    """A one-click bet amount offered to the scorekeeper."""

    kind: QuickBetKind
    amount: Decimal
    enabled: bool
    reason: Optional[str] = None


def quick_bets(state: TableState, rules: Optional[HouseRules] = None) -> List[QuickBet]:
    """
    Build the quick-bet buttons for the current state.

    Args:
        state: Current table state
        rules: House rules; defaults to ``HouseRules()``

    Returns:
        Ante, pot minus ante and all-in suggestions
    """
    rules = rules or HouseRules()
    short_pot = state.pot < state.ante
    first_orbit = state.dealer_round == FIRST_ORBIT

    all_in_blocked = first_orbit and not rules.allow_all_in_first_orbit

    return [
        QuickBet(
            kind=QuickBetKind.ANTE,
            amount=state.ante,
            enabled=not short_pot,
            reason="pot is smaller than the ante" if short_pot else None,
        ),
        QuickBet(
            kind=QuickBetKind.POT_MINUS_ANTE,
            amount=max(ZERO, round2(state.pot - state.ante)),
            enabled=not short_pot,
            reason="pot is smaller than the ante" if short_pot else None,
        ),
        QuickBet(
            kind=QuickBetKind.ALL_IN,
            amount=state.pot,
            enabled=not all_in_blocked,
            reason="not available on the dealer's first orbit" if all_in_blocked else None,
        ),
    ]


def check_bet(state: TableState, amount: AmountLike) -> Optional[LedgerError]:
    """
    Check a typed bet before the hand is settled.

    Args:
        state: Current table state
        amount: Amount as entered by the user

    Returns:
        The error a challenger win of this amount would raise, or None
    """
    try:
        stake = round2(amount)
    except ValueError:
        return InvalidAmount(amount)

    if stake <= ZERO:
        return InvalidAmount(amount)
    if exceeds(stake, state.pot):
        return InsufficientPot(stake, state.pot)
    return None


def available_actions(state: Optional[TableState]) -> Dict[str, bool]:
    """Which ledger operations a user interface should offer for this state."""
    if state is None:
        return {"start_round": False, "record_hand": False, "close_bank": False}

    return {
        "start_round": not state.round_active,
        "record_hand": state.round_active,
        "close_bank": state.round_active,
    }
