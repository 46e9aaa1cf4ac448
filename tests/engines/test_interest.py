"""Tests for the interest calculator."""

from decimal import Decimal

import pytest

from penalty_engines.interest import compute_interest
from penalty_kernel.exceptions import InvalidAmountError, InvalidDateError


class TestComputeInterest:
    """Daily-prorated simple interest."""

    def test_late_gst_payment(self):
        """50,000 at 18% for 59 days is 1,454.79, rounded to 1,455."""
        assert compute_interest(Decimal("50000"), Decimal("18"), 59) == Decimal("1455")

    def test_hundred_days(self):
        """1,00,000 at 18% for 100 days is 4,931.51, rounded to 4,932."""
        assert compute_interest(Decimal("100000"), Decimal("18"), 100) == Decimal("4932")

    def test_exact_result_not_rounded(self):
        """36,500 at 1% for 5 days is exactly 5."""
        assert compute_interest(Decimal("36500"), Decimal("1"), 5) == Decimal("5")

    def test_half_rupee_rounds_up(self):
        """250 at 1% for a full year is exactly 2.50."""
        assert compute_interest(Decimal("250"), Decimal("1"), 365) == Decimal("3")

    def test_below_half_rounds_down(self):
        """1 at 18% for a full year is 0.18."""
        assert compute_interest(Decimal("1"), Decimal("18"), 365) == Decimal("0")

    def test_zero_days(self):
        assert compute_interest(Decimal("50000"), Decimal("18"), 0) == Decimal("0")

    def test_not_applicable(self):
        assert compute_interest(Decimal("50000"), Decimal("18"), 59, applies=False) == Decimal("0")

    def test_zero_amount(self):
        assert compute_interest(Decimal("0"), Decimal("18"), 59) == Decimal("0")

    def test_string_amount(self):
        assert compute_interest("50000", "18", 59) == Decimal("1455")

    def test_negative_amount(self):
        with pytest.raises(InvalidAmountError) as exc_info:
            compute_interest(Decimal("-1"), Decimal("18"), 10)

        assert exc_info.value.field == "tax_amount"

    def test_negative_rate(self):
        with pytest.raises(InvalidAmountError):
            compute_interest(Decimal("100"), Decimal("-18"), 10)

    def test_non_numeric_amount(self):
        with pytest.raises(InvalidAmountError):
            compute_interest("lots", Decimal("18"), 10)

    def test_negative_days(self):
        with pytest.raises(InvalidDateError):
            compute_interest(Decimal("100"), Decimal("18"), -1)
