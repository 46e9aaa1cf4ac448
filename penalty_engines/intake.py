"""
Module: penalty_engines.intake
Responsibility:
    Turn the calculator request bodies (camelCase JSON from the GST and
    TDS pages) into validated ``GSTPenaltyInput`` / ``TDSPenaltyInput``.
    This is the input boundary: unknown rule keys, malformed dates and
    bad amounts stop here, before any computation.

Architecture position:
    Engines -- pure mapping, zero I/O. The HTTP layer parses JSON and
    hands the resulting dict to these functions.

Failure modes:
    - InvalidAmountError when the amount is missing or not a number.
    - UnknownRuleKeyError when the return/deduction type is missing or
      outside the closed set.
    - InvalidDateError when a date is missing, malformed, or the filing
      date precedes the due date.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from penalty_engines.penalty import GSTPenaltyInput, TDSPenaltyInput
from penalty_kernel.exceptions import InvalidAmountError, InvalidDateError, UnknownRuleKeyError

_TRUE_STRINGS = frozenset({"true", "1", "yes", "on"})


def parse_flag(value: Any) -> bool:
    """Checkbox values arrive as booleans or as the strings "true"/"false"."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    return False


def _required(payload: Mapping[str, Any], *names: str) -> Any:
    for name in names:
        value = payload.get(name)
        if value is not None and value != "":
            return value
    return None


def _flag(payload: Mapping[str, Any], *names: str) -> bool:
    """First of ``names`` present in the body decides; absent means False."""
    for name in names:
        if name in payload:
            return parse_flag(payload[name])
    return False


def gst_input_from_payload(payload: Mapping[str, Any]) -> GSTPenaltyInput:
    """Build a ``GSTPenaltyInput`` from a GST calculator request body."""
    tax_amount = _required(payload, "taxAmount", "tax_amount")
    if tax_amount is None:
        raise InvalidAmountError("tax_amount", None, "is required (enter 0 for a NIL return)")
    return_type = _required(payload, "returnType", "return_type")
    if return_type is None:
        raise UnknownRuleKeyError(None, "gst")

    due_date = _required(payload, "dueDate", "due_date")
    if due_date is None:
        raise InvalidDateError("due_date", None, "is required")
    filing_date = _required(payload, "filingDate", "filing_date")
    if filing_date is None:
        raise InvalidDateError("filing_date", None, "is required")

    return GSTPenaltyInput(
        return_type=return_type,
        tax_amount=tax_amount,
        due_date=due_date,
        filing_date=filing_date,
        tax_paid_late=_flag(payload, "taxPaidLate", "tax_paid_late"),
    )


def tds_input_from_payload(payload: Mapping[str, Any]) -> TDSPenaltyInput:
    """
    Build a ``TDSPenaltyInput`` from a TDS calculator request body.

    ``tdsSection`` is accepted as an alias for ``deductionType`` but only
    when it carries a deduction category; section numbers such as "194J"
    are not rule keys. ``tdsDepositedLate`` is read as ``depositedLate``.
    """
    tax_amount = _required(payload, "tdsAmount", "taxAmount", "tax_amount")
    if tax_amount is None:
        raise InvalidAmountError("tax_amount", None, "is required")
    deduction_type = _required(payload, "deductionType", "deduction_type", "tdsSection")
    if deduction_type is None:
        raise UnknownRuleKeyError(None, "tds")

    due_date = _required(payload, "dueDate", "due_date")
    if due_date is None:
        raise InvalidDateError("due_date", None, "is required")
    filing_date = _required(payload, "filingDate", "filing_date")
    if filing_date is None:
        raise InvalidDateError("filing_date", None, "is required")

    return TDSPenaltyInput(
        deduction_type=deduction_type,
        tax_amount=tax_amount,
        due_date=due_date,
        filing_date=filing_date,
        deposit_date=_required(payload, "depositDate", "deposit_date"),
        deposited_late=_flag(payload, "depositedLate", "tdsDepositedLate", "deposited_late"),
    )
