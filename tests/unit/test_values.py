"""Tests for the Decimal helpers (penalty_kernel/domain/values.py)."""

from decimal import ROUND_DOWN, Decimal

import pytest

from penalty_kernel.domain.values import (
    MAX_AMOUNT,
    money_context,
    non_negative_amount,
    round_to_unit,
    to_decimal,
)
from penalty_kernel.exceptions import InvalidAmountError


class TestToDecimal:

    def test_float_goes_through_str(self):
        assert to_decimal(0.1) == Decimal("0.1")

    def test_string_with_whitespace(self):
        assert to_decimal(" 50000 ") == Decimal("50000")

    @pytest.mark.parametrize("value", [True, None, "NaN", "-Infinity", "1,000", object()])
    def test_rejected(self, value):
        with pytest.raises(InvalidAmountError):
            to_decimal(value, "tax_amount")


class TestNonNegativeAmount:

    def test_zero_allowed(self):
        assert non_negative_amount("0") == Decimal("0")

    @pytest.mark.parametrize("value", ["-0", "-0.00", Decimal("-0E+3"), -0.0])
    def test_negative_zero_loses_sign(self, value):
        result = non_negative_amount(value)

        assert result == 0
        assert not result.is_signed()
        assert not str(result).startswith("-")

    def test_negative_rejected(self):
        with pytest.raises(InvalidAmountError, match="negative"):
            non_negative_amount("-0.01", "tax_amount")

    def test_ceiling_allowed(self):
        assert non_negative_amount(MAX_AMOUNT) == MAX_AMOUNT

    @pytest.mark.parametrize("value", ["1e30", MAX_AMOUNT + 1, "1E+999999"])
    def test_above_ceiling_rejected(self, value):
        with pytest.raises(InvalidAmountError) as exc_info:
            non_negative_amount(value, "tax_amount")

        assert exc_info.value.field == "tax_amount"
        assert "exceed" in exc_info.value.reason


class TestRoundToUnit:

    @pytest.mark.parametrize("amount,expected", [
        ("2.5", "3"),
        ("2.49", "2"),
        ("1454.79", "1455"),
        ("0", "0"),
    ])
    def test_half_up(self, amount, expected):
        assert round_to_unit(Decimal(amount)) == Decimal(expected)

    def test_round_down(self):
        assert round_to_unit(Decimal("1234.50"), ROUND_DOWN) == Decimal("1234")

    def test_values_beyond_default_precision(self):
        """Forty-digit results quantize without InvalidOperation."""
        big = Decimal("9" * 38 + ".5")

        assert round_to_unit(big) == Decimal("1" + "0" * 38)

    def test_money_context_keeps_products_exact(self):
        with money_context():
            product = MAX_AMOUNT * MAX_AMOUNT * Decimal("3650000")

        assert product == Decimal("3.65E+36")
        assert round_to_unit(product) == product
