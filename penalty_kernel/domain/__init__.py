"""Pure domain helpers shared by the penalty engines."""

from penalty_kernel.domain.values import (
    DAYS_PER_YEAR,
    PERCENT,
    ZERO,
    non_negative_amount,
    round_to_unit,
    to_decimal,
)

__all__ = [
    "DAYS_PER_YEAR",
    "PERCENT",
    "ZERO",
    "non_negative_amount",
    "round_to_unit",
    "to_decimal",
]
