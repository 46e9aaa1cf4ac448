"""
Pytest fixtures for the penalty engine test suite.

Provides:
- Logging reset between tests (configure_logging detaches the package
  logger from the root logger, which hides records from caplog)
- A log capture fixture yielding parsed JSON records
- The packaged baseline configuration
"""

import json
import logging
from io import StringIO

import pytest

from penalty_config import DEFAULT_CONFIG_PATH, get_active_config
from penalty_kernel.logging_config import LogContext, StructuredFormatter, reset_logging


@pytest.fixture(autouse=True)
def _reset_logging():
    """Leave the package logger propagating to root with empty context."""
    reset_logging()
    LogContext.clear()
    yield
    reset_logging()
    LogContext.clear()


@pytest.fixture
def json_log_records():
    """
    Attach a StructuredFormatter handler to the package logger.

    Yields a callable returning the records emitted so far, parsed
    from JSON.
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    logger = logging.getLogger("penalty_kernel")
    previous_level = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)

    def records() -> list[dict]:
        return [json.loads(line) for line in stream.getvalue().splitlines() if line.strip()]

    yield records

    logger.removeHandler(handler)
    logger.setLevel(previous_level)


@pytest.fixture
def baseline_config():
    """The packaged rule schedule, loaded through the public entrypoint."""
    return get_active_config(DEFAULT_CONFIG_PATH)
