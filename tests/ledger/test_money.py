from decimal import Decimal

import pytest

from potkeeper.ledger.money import MAX_AMOUNT, exceeds, format_amount, is_zero, round2


@pytest.mark.parametrize(
    "value, expected",
    [
        ("0.2", Decimal("0.20")),
        (0.1, Decimal("0.10")),
        (3, Decimal("3.00")),
        (Decimal("1.005"), Decimal("1.01")),
        (" 2.5 ", Decimal("2.50")),
        (0.1 + 0.2, Decimal("0.30")),
    ],
)
def test_round2(value, expected):
    assert round2(value) == expected


@pytest.mark.parametrize(
    "value", ["abc", "", None, True, float("nan"), float("inf"), "1e40"]
)
def test_round2_rejects_non_amounts(value):
    with pytest.raises(ValueError):
        round2(value)


def test_float_noise_is_absorbed():
    pot = round2(3 * 0.2)
    assert pot == Decimal("0.60")
    assert is_zero(round2(pot - round2(0.6)))


def test_exceeds_is_strict_at_cent_precision():
    assert exceeds(Decimal("0.61"), Decimal("0.60"))
    assert not exceeds(Decimal("0.60"), Decimal("0.60"))
    assert not exceeds(Decimal("0.604"), Decimal("0.60"))


def test_format_amount():
    assert format_amount(Decimal("0.6")) == "€0.60"
    assert format_amount(Decimal("12"), symbol="$") == "$12.00"


def test_round2_caps_magnitude():
    assert round2(MAX_AMOUNT) == MAX_AMOUNT
    assert round2(-MAX_AMOUNT) == -MAX_AMOUNT
    with pytest.raises(ValueError, match="out of range"):
        round2(MAX_AMOUNT + Decimal("0.01"))
    with pytest.raises(ValueError):
        round2("9e25")
