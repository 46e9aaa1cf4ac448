"""
Module: penalty_kernel
Responsibility:
    Foundation shared by every other package: the typed exception
    hierarchy, structured logging, and Decimal value helpers.

Architecture position:
    Kernel -- imports nothing outside the standard library.
    MUST NOT import penalty_engines or penalty_config.
"""

from penalty_kernel.exceptions import (
    ConfigurationError,
    InputError,
    InvalidAmountError,
    InvalidDateError,
    PenaltyEngineError,
    UnknownRuleKeyError,
)
from penalty_kernel.logging_config import (
    LogContext,
    configure_logging,
    get_logger,
    reset_logging,
)

__all__ = [
    "ConfigurationError",
    "InputError",
    "InvalidAmountError",
    "InvalidDateError",
    "LogContext",
    "PenaltyEngineError",
    "UnknownRuleKeyError",
    "configure_logging",
    "get_logger",
    "reset_logging",
]
