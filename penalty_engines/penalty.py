"""
Module: penalty_engines.penalty
Responsibility:
    Compose the calendar, rule table, fee and interest calculators into
    the GST and TDS penalty results returned to the HTTP handler and the
    PDF-summary renderer.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    Entry points: ``compute_gst_penalty`` and ``compute_tds_penalty``.

Invariants enforced:
    - Inputs are validated on construction: amount first (before any
      date logic), then the rule key against its closed enum, then dates.
    - days_late >= 0; a filing date before the due date is rejected,
      never clamped.
    - total_penalty == late_fee + interest_amount exactly.
    - Deterministic: identical inputs give identical results.

Failure modes:
    - InvalidAmountError, UnknownRuleKeyError, InvalidDateError, each
      raised to the caller unchanged.

Usage:
    from penalty_engines.penalty import GSTPenaltyInput, compute_gst_penalty

    result = compute_gst_penalty(GSTPenaltyInput(
        return_type="GSTR3B",
        tax_amount="50000",
        due_date="2025-01-31",
        filing_date="2025-03-31",
        tax_paid_late=True,
    ))
    result.interest_amount  # Decimal("1455")
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any

from penalty_engines.calendar import days_between, parse_calendar_date
from penalty_engines.fees import compute_fee
from penalty_engines.interest import compute_interest
from penalty_engines.rules import (
    GSTReturnType,
    RuleDomain,
    RuleKey,
    RulePolicy,
    RuleTable,
    TDSDeductionType,
    coerce_rule_key,
    lookup_policy,
)
from penalty_engines.tracer import traced_engine
from penalty_kernel.domain.values import non_negative_amount
from penalty_kernel.exceptions import InvalidDateError
from penalty_kernel.logging_config import get_logger

logger = get_logger("engines.penalty")


class StatusLabel(str, Enum):
    """Three-way classification shown next to the figures."""

    ON_TIME = "on time"
    GRACE_PERIOD = "grace period"
    LATE = "late"


def classify_status(days_late: int, grace_days: int) -> StatusLabel:
    """on time at 0 days, grace period up to grace_days, late beyond."""
    if days_late <= 0:
        return StatusLabel.ON_TIME
    if days_late <= grace_days:
        return StatusLabel.GRACE_PERIOD
    return StatusLabel.LATE


def _ordered_dates(due_date: Any, filing_date: Any) -> tuple[date, date]:
    due = parse_calendar_date(due_date, "due_date")
    filing = parse_calendar_date(filing_date, "filing_date")
    if filing < due:
        raise InvalidDateError(
            "filing_date", filing_date, "must be on or after the due date"
        )
    return due, filing


@dataclass(frozen=True)
class GSTPenaltyInput:
    """
    A GST late-filing question.

    Contract:
        Frozen; fields are normalized on construction (Decimal amount,
        ``GSTReturnType``, ``date``).
    Guarantees:
        - tax_amount >= 0 (zero for NIL returns).
        - filing_date >= due_date.
    """

    return_type: GSTReturnType
    tax_amount: Decimal
    due_date: date
    filing_date: date
    tax_paid_late: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "tax_amount", non_negative_amount(self.tax_amount, "tax_amount")
        )
        object.__setattr__(
            self, "return_type", coerce_rule_key(self.return_type, RuleDomain.GST)
        )
        due, filing = _ordered_dates(self.due_date, self.filing_date)
        object.__setattr__(self, "due_date", due)
        object.__setattr__(self, "filing_date", filing)
        object.__setattr__(self, "tax_paid_late", bool(self.tax_paid_late))

    @property
    def rule_key(self) -> GSTReturnType:
        return self.return_type


@dataclass(frozen=True)
class TDSPenaltyInput:
    """
    A TDS late-filing question.

    ``deposit_date`` is when the deducted tax actually reached the
    government. When it is later than ``due_date``, interest accrues for
    that gap. Without a deposit date, ``deposited_late`` makes interest
    accrue over the same days as the late fee.
    """

    deduction_type: TDSDeductionType
    tax_amount: Decimal
    due_date: date
    filing_date: date
    deposit_date: date | None = None
    deposited_late: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "tax_amount", non_negative_amount(self.tax_amount, "tax_amount")
        )
        object.__setattr__(
            self, "deduction_type", coerce_rule_key(self.deduction_type, RuleDomain.TDS)
        )
        due, filing = _ordered_dates(self.due_date, self.filing_date)
        object.__setattr__(self, "due_date", due)
        object.__setattr__(self, "filing_date", filing)
        if self.deposit_date is not None:
            object.__setattr__(
                self, "deposit_date", parse_calendar_date(self.deposit_date, "deposit_date")
            )
        object.__setattr__(self, "deposited_late", bool(self.deposited_late))

    @property
    def rule_key(self) -> TDSDeductionType:
        return self.deduction_type

    @property
    def interest_days(self) -> int:
        """Days over which interest on late deposit accrues (0 if none)."""
        if self.deposit_date is not None:
            if self.deposit_date <= self.due_date:
                return 0
            return days_between(self.due_date, self.deposit_date)
        if self.deposited_late:
            return days_between(self.due_date, self.filing_date)
        return 0


@dataclass(frozen=True)
class PenaltyResult:
    """
    Breakdown of late fee, interest and total liability.

    Contract:
        Frozen value object; amounts are whole-rupee Decimals.
    Guarantees:
        - total_penalty == late_fee + interest_amount.
        - status_label agrees with days_late and the policy's grace days.
    """

    rule_key: RuleKey
    days_late: int
    is_within_grace_period: bool
    late_fee: Decimal
    interest_amount: Decimal
    total_penalty: Decimal
    status_label: StatusLabel
    interest_days: int
    policy: RulePolicy

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready mapping for wire formats; amounts as strings."""
        return {
            "ruleKey": self.rule_key.value,
            "daysLate": self.days_late,
            "isWithinGracePeriod": self.is_within_grace_period,
            "lateFee": str(self.late_fee),
            "interestAmount": str(self.interest_amount),
            "totalPenalty": str(self.total_penalty),
            "statusLabel": self.status_label.value,
            "interestDays": self.interest_days,
            "policy": {
                "graceDays": self.policy.grace_days,
                "dailyRate": str(self.policy.daily_rate),
                "feeCap": str(self.policy.fee_cap) if self.policy.fee_cap is not None else None,
                "interestAnnualRatePercent": str(self.policy.interest_annual_rate_percent),
                "feeBasis": self.policy.fee_basis.value,
            },
        }


def _assemble(
    policy: RulePolicy,
    days_late: int,
    tax_amount: Decimal,
    interest_days: int,
    interest_applies: bool,
) -> PenaltyResult:
    fee = compute_fee(policy, days_late, tax_amount)
    interest = compute_interest(
        tax_amount,
        policy.interest_annual_rate_percent,
        interest_days,
        applies=interest_applies,
    )
    return PenaltyResult(
        rule_key=policy.rule_key,
        days_late=days_late,
        is_within_grace_period=fee.is_within_grace_period,
        late_fee=fee.late_fee,
        interest_amount=interest,
        total_penalty=fee.late_fee + interest,
        status_label=classify_status(days_late, policy.grace_days),
        interest_days=interest_days if interest_applies else 0,
        policy=policy,
    )


@traced_engine("gst_penalty", "1.0", fingerprint_fields=("penalty_input",))
def compute_gst_penalty(
    penalty_input: GSTPenaltyInput,
    rule_table: RuleTable | None = None,
) -> PenaltyResult:
    """
    Late fee and interest for a GST return.

    Interest applies only when the tax itself was paid late, and accrues
    over the same days as the filing delay.
    """
    days_late = days_between(penalty_input.due_date, penalty_input.filing_date)
    policy = lookup_policy(penalty_input.return_type, rule_table, RuleDomain.GST)

    result = _assemble(
        policy,
        days_late,
        penalty_input.tax_amount,
        interest_days=days_late,
        interest_applies=penalty_input.tax_paid_late,
    )

    logger.info("gst_penalty_computed", extra={
        "rule_key": result.rule_key.value,
        "days_late": result.days_late,
        "status_label": result.status_label.value,
        "late_fee": result.late_fee,
        "interest_amount": result.interest_amount,
        "total_penalty": result.total_penalty,
    })
    return result


@traced_engine("tds_penalty", "1.0", fingerprint_fields=("penalty_input",))
def compute_tds_penalty(
    penalty_input: TDSPenaltyInput,
    rule_table: RuleTable | None = None,
) -> PenaltyResult:
    """
    Late fee and interest for a TDS return.

    The fee follows s.234E (capped, and never above the tax deducted).
    Interest follows the deposit delay, not the filing delay.
    """
    days_late = days_between(penalty_input.due_date, penalty_input.filing_date)
    policy = lookup_policy(penalty_input.deduction_type, rule_table, RuleDomain.TDS)

    interest_days = penalty_input.interest_days
    result = _assemble(
        policy,
        days_late,
        penalty_input.tax_amount,
        interest_days=interest_days,
        interest_applies=interest_days > 0,
    )

    logger.info("tds_penalty_computed", extra={
        "rule_key": result.rule_key.value,
        "days_late": result.days_late,
        "interest_days": result.interest_days,
        "status_label": result.status_label.value,
        "late_fee": result.late_fee,
        "interest_amount": result.interest_amount,
        "total_penalty": result.total_penalty,
    })
    return result
