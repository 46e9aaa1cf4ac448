"""
Values -- Decimal helpers for rupee amounts and rates.

Responsibility:
    Converts untrusted numeric input into ``Decimal`` and rounds computed
    amounts to whole rupees. Every monetary figure in the engines passes
    through here, so float never reaches the arithmetic.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Invariants enforced:
    - All monetary amounts are Decimal (never float).
    - Output rounding is ROUND_HALF_UP to the currency's whole unit, and
      happens only at the output boundary.
    - Validated amounts lie in [0, MAX_AMOUNT] and carry no negative sign.
    - Arithmetic inside ``money_context()`` is exact for bounded inputs,
      so quantizing never overflows the context precision.

Failure modes:
    - InvalidAmountError for negative, oversized, NaN, infinite, boolean
      or non-numeric values.
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from decimal import ROUND_HALF_UP, Context, Decimal, InvalidOperation, localcontext
from typing import Any

from penalty_kernel.exceptions import InvalidAmountError

ZERO = Decimal("0")
WHOLE_UNIT = Decimal("1")
DAYS_PER_YEAR = Decimal("365")
PERCENT = Decimal("100")

# Rs 1,000 trillion; any amount or rate above this is a data-entry error
MAX_AMOUNT = Decimal("1E15")

_MONEY_CONTEXT = Context(prec=60, rounding=ROUND_HALF_UP)


def to_decimal(value: Any, field_name: str = "amount") -> Decimal:
    """
    Convert a numeric value to Decimal.

    Floats go through ``str()`` so ``0.1`` becomes ``Decimal("0.1")``
    rather than its binary expansion.

    Raises:
        InvalidAmountError: If the value is not a finite number.
    """
    if isinstance(value, bool) or value is None:
        raise InvalidAmountError(field_name, value, "must be a number")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float, str)):
        text = str(value).strip() if isinstance(value, str) else str(value)
        try:
            result = Decimal(text)
        except (InvalidOperation, ValueError) as exc:
            raise InvalidAmountError(field_name, value, "must be a number") from exc
    else:
        raise InvalidAmountError(field_name, value, "must be a number")

    if not result.is_finite():
        raise InvalidAmountError(field_name, value, "must be a finite number")
    return result


def non_negative_amount(value: Any, field_name: str = "amount") -> Decimal:
    """
    Convert to Decimal, rejecting negatives and values above ``MAX_AMOUNT``.

    A negative zero comes back as ``Decimal("0")`` so it never surfaces
    as ``"-0"`` in results.
    """
    result = to_decimal(value, field_name)
    if result < ZERO:
        raise InvalidAmountError(field_name, value, "cannot be negative")
    if result > MAX_AMOUNT:
        raise InvalidAmountError(field_name, value, f"cannot exceed {MAX_AMOUNT:,f}")
    if result == ZERO:
        result = result.copy_abs()
    return result


def money_context() -> AbstractContextManager[Context]:
    """Decimal context for engine arithmetic; wide enough that no product of
    bounded inputs is rounded before the final quantize."""
    return localcontext(_MONEY_CONTEXT)


def round_to_unit(amount: Decimal, rounding: str = ROUND_HALF_UP) -> Decimal:
    """Round to the nearest whole rupee (half-up unless told otherwise)."""
    with money_context():
        return amount.quantize(WHOLE_UNIT, rounding=rounding)
