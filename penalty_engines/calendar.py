"""
Module: penalty_engines.calendar
Responsibility:
    Whole-day arithmetic between two calendar dates.

Architecture position:
    Engines -- pure calculation layer, zero I/O, no clock access.

Invariants enforced:
    - Dates are local calendar dates; time-of-day and tzinfo are dropped,
      never shifted.
    - ``days_between`` never returns a negative value and never clamps:
      a filing date before the due date is an error.

Failure modes:
    - InvalidDateError for anything that is not a calendar date, and for
      an out-of-order pair passed to ``days_between``.

Usage:
    from datetime import date
    from penalty_engines.calendar import days_between

    days_between(date(2025, 1, 31), date(2025, 3, 31))  # 59
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from penalty_kernel.exceptions import InvalidDateError


def parse_calendar_date(value: Any, field_name: str = "date") -> date:
    """
    Coerce a value to a ``date``.

    Accepts ``date``, ``datetime`` (its calendar date is kept as-is) and
    ISO ``YYYY-MM-DD`` strings.

    Raises:
        InvalidDateError: For any other value, or a string that does not
            name a real day (e.g. ``2025-02-30``).
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        # fromisoformat also takes "20250131" and week dates; keep to YYYY-MM-DD
        if len(text) != 10 or text[4] != "-" or text[7] != "-":
            raise InvalidDateError(field_name, value, "expected YYYY-MM-DD")
        try:
            return date.fromisoformat(text)
        except ValueError as exc:
            raise InvalidDateError(field_name, value) from exc
    raise InvalidDateError(field_name, value)


def days_between(due: Any, filing: Any) -> int:
    """
    Whole calendar days from ``due`` to ``filing``.

    Preconditions:
        - ``filing`` is on or after ``due``; the input boundary rejects
          the reverse order before the engines run.
    Postconditions:
        - Returns an integer >= 0.
    Raises:
        InvalidDateError: If either value is not a calendar date, or
            ``filing`` precedes ``due``.
    """
    due_date = parse_calendar_date(due, "due_date")
    filing_date = parse_calendar_date(filing, "filing_date")
    if filing_date < due_date:
        raise InvalidDateError(
            "filing_date", filing, f"precedes due date {due_date.isoformat()}"
        )
    return (filing_date - due_date).days
