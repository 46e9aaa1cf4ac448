"""
Module: penalty_engines.fees
Responsibility:
    Apply a ``RulePolicy`` to a days-late count to produce the late fee.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - days_late <= grace_days  =>  fee is zero and the filing is in grace.
    - The fee is a non-negative multiple of the daily rate until a cap
      applies; it never exceeds ``fee_cap`` when one is defined.
    - Decimal-only arithmetic; the fee is rounded half-up to whole rupees,
      except that a fee capped at the tax amount is rounded down so it
      never exceeds the tax deducted.

Failure modes:
    - InvalidDateError for a negative days_late.
    - InvalidAmountError for a negative tax amount passed for capping.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_DOWN, ROUND_HALF_UP, Decimal
from typing import Any

from penalty_engines.rules import FeeBasis, RulePolicy
from penalty_kernel.domain.values import ZERO, money_context, non_negative_amount, round_to_unit
from penalty_kernel.exceptions import InvalidDateError
from penalty_kernel.logging_config import get_logger

logger = get_logger("engines.fees")


@dataclass(frozen=True)
class FeeOutcome:
    """Late fee and whether the filing fell inside the grace period."""

    late_fee: Decimal
    is_within_grace_period: bool
    rated_days: int = 0
    capped: bool = False


def rated_days(policy: RulePolicy, days_late: int) -> int:
    """Days that attract the per-day fee under the policy's fee basis."""
    if days_late <= policy.grace_days:
        return 0
    if policy.fee_basis == FeeBasis.DAYS_BEYOND_GRACE:
        return days_late - policy.grace_days
    return days_late


def compute_fee(
    policy: RulePolicy,
    days_late: int,
    tax_amount: Any = None,
) -> FeeOutcome:
    """
    Late fee for ``days_late`` under ``policy``.

    The grace period is a threshold: once it is exceeded, the default
    ``FeeBasis.ELAPSED_DAYS`` rates every day since the due date.

    Args:
        policy: Policy of the return or deduction type.
        days_late: Whole days since the due date (>= 0).
        tax_amount: Tax amount, used only when the policy caps the fee at
            the tax amount.

    Returns:
        FeeOutcome with the rounded fee.
    """
    if days_late < 0:
        raise InvalidDateError("days_late", days_late, "cannot be negative")

    if days_late <= policy.grace_days:
        return FeeOutcome(late_fee=ZERO, is_within_grace_period=True)

    days = rated_days(policy, days_late)
    rounding = ROUND_HALF_UP
    capped = False
    with money_context():
        fee = policy.daily_rate * days

        if policy.fee_cap is not None and fee > policy.fee_cap:
            fee = policy.fee_cap
            capped = True

        if policy.cap_at_tax_amount and tax_amount is not None:
            tax = non_negative_amount(tax_amount, "tax_amount")
            if fee > tax:
                # never above the tax deducted, not even by half a rupee
                fee = tax
                capped = True
                rounding = ROUND_DOWN

    late_fee = round_to_unit(fee, rounding)
    logger.debug("late_fee_computed", extra={
        "rule_key": policy.rule_key.value,
        "days_late": days_late,
        "rated_days": days,
        "late_fee": late_fee,
        "capped": capped,
    })
    return FeeOutcome(
        late_fee=late_fee,
        is_within_grace_period=False,
        rated_days=days,
        capped=capped,
    )
