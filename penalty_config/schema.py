"""
PenaltyConfigurationSet schema.

Defines the human-authored, reviewable source artifact for the penalty
rule schedule. YAML files are parsed into these types by the loader and
turned into a runtime ``RuleTable`` by the bridge.

Key distinction:
  PenaltyConfigurationSet = source artifact (human-authored, versioned)
  RuleTable               = runtime artifact (validated, read-only)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date


@dataclass(frozen=True)
class EngineSettings:
    """Ambient settings applied when the configuration is activated."""

    log_level: str = "INFO"
    json_logs: bool = True


@dataclass(frozen=True)
class RulePolicyDef:
    """
    One policy as written in YAML.

    Amounts stay as strings here so the bridge converts them to Decimal
    without passing through float.
    """

    rule_key: str
    grace_days: int
    daily_rate: str
    interest_annual_rate_percent: str
    fee_cap: str | None = None
    fee_basis: str = "elapsed_days"
    cap_at_tax_amount: bool = False
    description: str = ""


@dataclass(frozen=True)
class PenaltyConfigurationSet:
    """A complete, versioned late-fee schedule."""

    config_id: str
    version: int
    currency: str
    effective_from: date
    policies: tuple[RulePolicyDef, ...]
    settings: EngineSettings = field(default_factory=EngineSettings)
    effective_to: date | None = None
    checksum: str = ""
