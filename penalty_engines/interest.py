"""
Module: penalty_engines.interest
Responsibility:
    Simple interest, prorated daily, on tax that was itself paid late.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - interest = amount * (rate / 100) * (days / 365), ROUND_HALF_UP to
      whole rupees; the product is formed before dividing so no
      intermediate rounding occurs.
    - Zero when days_late is 0 or interest does not apply.
    - Non-decreasing in amount and in days.

Failure modes:
    - InvalidAmountError for a negative or non-numeric amount or rate.
    - InvalidDateError for a negative day count.

Usage:
    compute_interest(Decimal("50000"), Decimal("18"), 59)  # Decimal("1455")
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from penalty_kernel.domain.values import (
    DAYS_PER_YEAR,
    PERCENT,
    ZERO,
    money_context,
    non_negative_amount,
    round_to_unit,
)
from penalty_kernel.exceptions import InvalidDateError


def compute_interest(
    amount: Any,
    annual_rate_percent: Any,
    days_late: int,
    applies: bool = True,
) -> Decimal:
    """Interest on ``amount`` at ``annual_rate_percent`` for ``days_late`` days."""
    principal = non_negative_amount(amount, "tax_amount")
    rate = non_negative_amount(annual_rate_percent, "annual_rate_percent")
    if isinstance(days_late, bool) or not isinstance(days_late, int) or days_late < 0:
        raise InvalidDateError("days_late", days_late, "must be a non-negative integer")

    if not applies or days_late == 0:
        return ZERO

    with money_context():
        raw = (principal * rate * days_late) / (PERCENT * DAYS_PER_YEAR)
    return round_to_unit(raw)
