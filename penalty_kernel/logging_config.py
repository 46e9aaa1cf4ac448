"""
Structured JSON logging for the penalty engine.

Every record emitted under the ``penalty_kernel`` logger tree is written
as one JSON object per line:

    {"ts": ..., "level": ..., "logger": ..., "message": ...,
     <bound request context>, <extra fields>, <exception fields>}

Rupee amounts passed in ``extra`` stay exact (Decimal is written as its
string form), dates are ISO strings and enums are their values. A
``PenaltyEngineError`` attached to a record contributes its ``code`` and
its structured attributes (``exc_field``, ``exc_rule_key``, ...), so a
rejected request can be found by error code without parsing messages.
"""

__all__ = [
    "StructuredFormatter",
    "LogContext",
    "get_logger",
    "configure_logging",
    "reset_logging",
]

import json
import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from penalty_kernel.exceptions import PenaltyEngineError

LOGGER_NAMESPACE = "penalty_kernel"

# ---------------------------------------------------------------------------
# Request context
# ---------------------------------------------------------------------------

_CONTEXT_FIELDS: dict[str, ContextVar[str | None]] = {
    "request_id": ContextVar("penalty_log_request_id", default=None),
    "calculator": ContextVar("penalty_log_calculator", default=None),
}


def _context_var(name: str) -> ContextVar[str | None]:
    try:
        return _CONTEXT_FIELDS[name]
    except KeyError:
        raise ValueError(f"Unknown log context field {name!r}") from None


class LogContext:
    """
    Fields stamped on every record for the current request.

    ``request_id`` is set by the HTTP handler; ``calculator`` ("gst" or
    "tds") by whichever entry point runs a computation. Backed by
    contextvars, so concurrent requests never see each other's fields.
    """

    @staticmethod
    def set(**fields: str | None) -> None:
        """Set the given fields; None values are ignored."""
        for name, value in fields.items():
            if value is not None:
                _context_var(name).set(value)

    @staticmethod
    def get_all() -> dict[str, str]:
        values = {name: var.get() for name, var in _CONTEXT_FIELDS.items()}
        return {name: value for name, value in values.items() if value is not None}

    @staticmethod
    def clear() -> None:
        for var in _CONTEXT_FIELDS.values():
            var.set(None)

    @staticmethod
    @contextmanager
    def bind(**fields: str | None) -> Iterator[None]:
        """Set fields for the duration of a ``with`` block, then restore them."""
        tokens = [
            (_context_var(name), _context_var(name).set(value))
            for name, value in fields.items()
            if value is not None
        ]
        try:
            yield
        finally:
            for var, token in reversed(tokens):
                var.reset(token)


# ---------------------------------------------------------------------------
# JSON formatter
# ---------------------------------------------------------------------------

_RECORD_ATTRIBUTES: frozenset[str] = frozenset(vars(logging.makeLogRecord({}))) | {
    "message",
    "asctime",
    "taskName",
}


def _json_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, date):  # datetime included
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    return repr(value)


def _exception_fields(exc: BaseException) -> dict[str, Any]:
    fields: dict[str, Any] = {
        "exc_type": type(exc).__name__,
        "exc_message": str(exc),
    }
    if isinstance(exc, PenaltyEngineError):
        fields["exc_code"] = exc.code
        for name, value in vars(exc).items():
            if not name.startswith("_"):
                fields[f"exc_{name}"] = value
    return fields


class StructuredFormatter(logging.Formatter):
    """Formats each log record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(LogContext.get_all())

        for key, value in vars(record).items():
            if key not in _RECORD_ATTRIBUTES and key not in payload:
                payload[key] = value

        if record.exc_info and record.exc_info[1] is not None:
            payload.update(_exception_fields(record.exc_info[1]))
            payload["traceback"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=_json_default)


# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------


def get_logger(name: str) -> logging.Logger:
    """Logger for ``name`` under the penalty_kernel namespace."""
    return logging.getLogger(f"{LOGGER_NAMESPACE}.{name}")


_configured = False


def configure_logging(
    *,
    level: int | str = logging.INFO,
    json_logs: bool = True,
    handler: logging.Handler | None = None,
    stream: Any = None,
) -> None:
    """
    Attach one handler to the penalty_kernel logger (first call only).

    Called once at process start with the active configuration's
    ``EngineSettings``; later calls are no-ops. Records stop propagating
    to the root logger so a host application's handlers do not print
    them twice.
    """
    global _configured
    if _configured:
        return
    _configured = True

    if handler is None:
        handler = logging.StreamHandler(stream or sys.stderr)
    if json_logs:
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
        )

    logger = logging.getLogger(LOGGER_NAMESPACE)
    logger.setLevel(level)
    logger.propagate = False
    logger.addHandler(handler)


def reset_logging() -> None:
    """Undo ``configure_logging``. Tests only."""
    global _configured
    _configured = False
    logger = logging.getLogger(LOGGER_NAMESPACE)
    logger.handlers.clear()
    logger.setLevel(logging.WARNING)
    logger.propagate = True
