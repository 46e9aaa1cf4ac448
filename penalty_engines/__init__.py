"""
Module: penalty_engines
Responsibility:
    Package entrypoint that re-exports the public symbols of the pure
    penalty calculators. This is the import surface for the HTTP handlers,
    the PDF-summary renderer and ``penalty_config``.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import penalty_kernel (and sibling engine modules).
    MUST NOT import penalty_config.

Invariants enforced:
    - Purity: engines never call ``date.today()``; every date is passed in.
    - Decimal-only arithmetic for every rupee amount.
    - Determinism: identical inputs always produce identical outputs.
    - The default rule table is built once at import and is read-only.

Usage:
    from penalty_engines import GSTPenaltyInput, compute_gst_penalty
    from penalty_engines import tds_input_from_payload, compute_tds_penalty
"""

from penalty_engines.calendar import days_between, parse_calendar_date
from penalty_engines.fees import FeeOutcome, compute_fee
from penalty_engines.intake import gst_input_from_payload, tds_input_from_payload
from penalty_engines.interest import compute_interest
from penalty_engines.penalty import (
    GSTPenaltyInput,
    PenaltyResult,
    StatusLabel,
    TDSPenaltyInput,
    classify_status,
    compute_gst_penalty,
    compute_tds_penalty,
)
from penalty_engines.rules import (
    DEFAULT_RULE_TABLE,
    FeeBasis,
    GSTReturnType,
    RuleDomain,
    RulePolicy,
    RuleTable,
    TDSDeductionType,
    coerce_rule_key,
    lookup_policy,
)

__all__ = [
    "DEFAULT_RULE_TABLE",
    "FeeBasis",
    "FeeOutcome",
    "GSTPenaltyInput",
    "GSTReturnType",
    "PenaltyResult",
    "RuleDomain",
    "RulePolicy",
    "RuleTable",
    "StatusLabel",
    "TDSDeductionType",
    "TDSPenaltyInput",
    "classify_status",
    "coerce_rule_key",
    "compute_fee",
    "compute_gst_penalty",
    "compute_interest",
    "compute_tds_penalty",
    "days_between",
    "gst_input_from_payload",
    "lookup_policy",
    "parse_calendar_date",
    "tds_input_from_payload",
]
