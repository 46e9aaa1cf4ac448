"""
Configuration Loader (``penalty_config.loader``).

Responsibility
--------------
Loads a YAML rule-schedule file and parses it into typed
``penalty_config.schema`` dataclass instances. Runtime callers go through
``penalty_config.get_active_config()`` instead of calling this directly.

Invariants enforced
-------------------
* Every parse error raises ``ConfigurationError`` naming the source file;
  no silent defaults for required fields.
* Every parsed object is a frozen dataclass from ``schema.py``.
* ``compute_checksum`` produces a deterministic SHA-256 hash for
  configuration identity and change detection.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML or missing keys  -> ``ConfigurationError``.
"""

from __future__ import annotations

import hashlib
import json
from datetime import date
from pathlib import Path
from typing import Any

import yaml

from penalty_config.schema import EngineSettings, PenaltyConfigurationSet, RulePolicyDef
from penalty_kernel.exceptions import ConfigurationError


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        ConfigurationError: if the file is not valid YAML or not a mapping.
    """
    with open(path, encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ConfigurationError(str(path), f"malformed YAML: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(str(path), "top level must be a mapping")
    return data


def parse_date(value: Any) -> date:
    """Parse a date from YAML (string or date object)."""
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value)
    raise ValueError(f"Cannot parse date from {value!r}")


def _amount_text(value: Any) -> str:
    # YAML gives ints for "100" and floats for "0.5"; keep the written form
    if isinstance(value, bool):
        raise ValueError(f"expected a number, got {value!r}")
    return str(value)


def parse_policy(data: dict[str, Any]) -> RulePolicyDef:
    """Parse a ``RulePolicyDef`` from a dict."""
    fee_cap = data.get("fee_cap")
    return RulePolicyDef(
        rule_key=str(data["rule_key"]),
        grace_days=int(data["grace_days"]),
        daily_rate=_amount_text(data["daily_rate"]),
        interest_annual_rate_percent=_amount_text(data["interest_annual_rate_percent"]),
        fee_cap=_amount_text(fee_cap) if fee_cap is not None else None,
        fee_basis=str(data.get("fee_basis", "elapsed_days")),
        cap_at_tax_amount=bool(data.get("cap_at_tax_amount", False)),
        description=str(data.get("description", "")),
    )


def parse_settings(data: dict[str, Any]) -> EngineSettings:
    """Parse ``EngineSettings``; every key is optional."""
    return EngineSettings(
        log_level=str(data.get("log_level", "INFO")).upper(),
        json_logs=bool(data.get("json_logs", True)),
    )


def parse_configuration_set(
    data: dict[str, Any],
    source: str = "<memory>",
) -> PenaltyConfigurationSet:
    """
    Parse a complete configuration set.

    Raises:
        ConfigurationError: if a required key is missing or a value has
            the wrong shape.
    """
    try:
        policies = tuple(parse_policy(p) for p in data["policies"])
        effective_to = data.get("effective_to")
        return PenaltyConfigurationSet(
            config_id=str(data["config_id"]),
            version=int(data.get("version", 1)),
            currency=str(data.get("currency", "INR")),
            effective_from=parse_date(data["effective_from"]),
            effective_to=parse_date(effective_to) if effective_to else None,
            policies=policies,
            settings=parse_settings(data.get("settings") or {}),
            checksum=compute_checksum(data),
        )
    except KeyError as exc:
        raise ConfigurationError(source, f"missing required key {exc.args[0]!r}") from exc
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(source, str(exc)) from exc


def load_configuration_set(path: Path) -> PenaltyConfigurationSet:
    """Load and parse a configuration set from a YAML file."""
    return parse_configuration_set(load_yaml_file(path), source=str(path))


def compute_checksum(data: dict[str, Any]) -> str:
    """
    Compute SHA-256 checksum of canonical JSON serialization.

    Identical ``data`` always produces identical checksums.
    """
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()
