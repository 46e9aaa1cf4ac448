"""
penalty_config -- single public entrypoint for the penalty rule schedule.

Responsibility:
    Provides the ONLY way to obtain configuration at runtime through
    ``get_active_config()``. No other component reads configuration
    files or environment variables. Returns an ``ActivePenaltyConfig``
    holding the runtime ``RuleTable`` and the ambient ``EngineSettings``.

Architecture position:
    Configuration -- YAML-driven, sits above ``penalty_engines``. The
    engines MUST NEVER import from ``penalty_config``; ``bridges``
    translates authored schedules into engine rule tables.

Resolution order for the schedule file:
    1. the ``config_path`` argument,
    2. the ``PENALTY_ENGINE_CONFIG`` environment variable,
    3. the packaged baseline ``sets/in_2025.yaml``.

Audit relevance:
    Every successful ``get_active_config()`` call emits a
    ``PENALTY_CONFIG_TRACE`` log entry with config_id, version, checksum
    and policy count, tying each computed figure to the schedule that
    governed it.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from penalty_config.bridges import build_rule_table
from penalty_config.loader import load_configuration_set
from penalty_config.schema import EngineSettings, PenaltyConfigurationSet
from penalty_engines.rules import RuleTable
from penalty_kernel.logging_config import get_logger

_logger = get_logger("config")

CONFIG_ENV_VAR = "PENALTY_ENGINE_CONFIG"
DEFAULT_CONFIG_PATH = Path(__file__).parent / "sets" / "in_2025.yaml"


@dataclass(frozen=True)
class ActivePenaltyConfig:
    """The runtime configuration: a rule table plus ambient settings."""

    config_set: PenaltyConfigurationSet
    rule_table: RuleTable
    source: Path

    @property
    def settings(self) -> EngineSettings:
        return self.config_set.settings

    @property
    def checksum(self) -> str:
        return self.config_set.checksum


def resolve_config_path(config_path: Path | str | None = None) -> Path:
    """Schedule file to load, following the documented resolution order."""
    if config_path is not None:
        return Path(config_path)
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_PATH


def get_active_config(config_path: Path | str | None = None) -> ActivePenaltyConfig:
    """The ONLY public configuration entrypoint.

    Guarantees:
        - The returned rule table has passed policy validation.
        - A ``PENALTY_CONFIG_TRACE`` log entry is emitted on every
          successful call.

    Non-goals:
        - Does not cache; callers load once at process start and hold
          the result.

    Raises:
        FileNotFoundError: If the resolved file does not exist.
        ConfigurationError: If the file cannot be parsed into a rule table.
    """
    path = resolve_config_path(config_path)
    config_set = load_configuration_set(path)
    rule_table = build_rule_table(config_set)

    _logger.info("PENALTY_CONFIG_TRACE", extra={
        "trace_type": "PENALTY_CONFIG_TRACE",
        "config_id": config_set.config_id,
        "config_version": config_set.version,
        "checksum": config_set.checksum,
        "policy_count": len(rule_table),
        "source": str(path),
    })

    return ActivePenaltyConfig(config_set=config_set, rule_table=rule_table, source=path)


__all__ = [
    "CONFIG_ENV_VAR",
    "DEFAULT_CONFIG_PATH",
    "ActivePenaltyConfig",
    "get_active_config",
    "resolve_config_path",
]
