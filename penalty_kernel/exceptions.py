"""
Typed Exception Hierarchy for the Penalty Engine.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

The calculators sit behind an HTTP handler and a PDF-summary renderer.
Both translate engine failures into user-facing messages, so they must be
able to tell a bad date from a bad amount without parsing message text:

Example - WRONG way to handle errors:
    try:
        compute_gst_penalty(penalty_input)
    except Exception as e:
        if "date" in str(e):  # FRAGILE - message might change
            show_date_error()

Example - RIGHT way (what this module enables):
    try:
        compute_gst_penalty(penalty_input)
    except InvalidDateError as e:  # Typed catch
        api_response(code=e.code, field=e.field)

Every exception:
  1. Has a TYPED class (catch by type, not message)
  2. Has a CODE class attribute (machine-readable, API-safe)
  3. Carries structured DATA as attributes (not just a message string)

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    PenaltyEngineError (base)
    |
    +-- InputError
    |   +-- InvalidDateError
    |   +-- InvalidAmountError
    |   +-- UnknownRuleKeyError
    |
    +-- ConfigurationError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category        | Code                        | When Raised
----------------|-----------------------------|-----------------------------------------
Input           | INVALID_DATE                | Malformed date, or filing before due date
                | INVALID_AMOUNT              | Negative or non-numeric amount or rate
                | UNKNOWN_RULE_KEY            | Return/deduction type not in rule table
----------------|-----------------------------|-----------------------------------------
Configuration   | INVALID_CONFIGURATION       | YAML rule set missing fields or malformed

None of these are transient. Callers never retry; they report.
"""

from typing import Any


class PenaltyEngineError(Exception):
    """
    Base exception for all penalty engine errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "PENALTY_ENGINE_ERROR"


class InputError(PenaltyEngineError):
    """Base exception for rejected calculator input."""

    code: str = "INPUT_ERROR"


class InvalidDateError(InputError):
    """A date is malformed, not a calendar date, or out of order."""

    code: str = "INVALID_DATE"

    def __init__(self, field: str, value: Any, reason: str = "not a valid calendar date"):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {field} {value!r}: {reason}")


class InvalidAmountError(InputError):
    """An amount or rate is negative or not a finite number."""

    code: str = "INVALID_AMOUNT"

    def __init__(self, field: str, value: Any, reason: str = "must be a non-negative number"):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {field} {value!r}: {reason}")


class UnknownRuleKeyError(InputError):
    """The return or deduction type has no entry in the rule table."""

    code: str = "UNKNOWN_RULE_KEY"

    def __init__(self, rule_key: Any, domain: str | None = None):
        self.rule_key = rule_key
        self.domain = domain
        scope = f" for {domain}" if domain else ""
        super().__init__(f"Unknown rule key{scope}: {rule_key!r}")


class ConfigurationError(PenaltyEngineError):
    """A rule-set configuration file could not be turned into a rule table."""

    code: str = "INVALID_CONFIGURATION"

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Invalid penalty configuration {source}: {reason}")
