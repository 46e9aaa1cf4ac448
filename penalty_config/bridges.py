"""
Bridges from configuration artifacts to engine inputs.

``penalty_engines`` never imports this package; the translation from the
authored schedule to a runtime ``RuleTable`` happens here.
"""

from __future__ import annotations

from decimal import Decimal

from penalty_config.schema import PenaltyConfigurationSet, RulePolicyDef
from penalty_engines.rules import FeeBasis, RulePolicy, RuleTable, coerce_rule_key
from penalty_kernel.exceptions import ConfigurationError, PenaltyEngineError


def policy_from_def(definition: RulePolicyDef) -> RulePolicy:
    """Convert one authored policy into an engine ``RulePolicy``."""
    return RulePolicy(
        rule_key=coerce_rule_key(definition.rule_key),
        grace_days=definition.grace_days,
        daily_rate=Decimal(definition.daily_rate),
        fee_cap=Decimal(definition.fee_cap) if definition.fee_cap is not None else None,
        interest_annual_rate_percent=Decimal(definition.interest_annual_rate_percent),
        fee_basis=FeeBasis(definition.fee_basis),
        cap_at_tax_amount=definition.cap_at_tax_amount,
        description=definition.description,
    )


def build_rule_table(config_set: PenaltyConfigurationSet) -> RuleTable:
    """
    Build the runtime rule table for a configuration set.

    Raises:
        ConfigurationError: if any policy names an unknown rule key, has
            invalid values, or repeats a key.
    """
    try:
        policies = [policy_from_def(d) for d in config_set.policies]
        return RuleTable(policies, name=f"{config_set.config_id}@v{config_set.version}")
    except (PenaltyEngineError, ValueError, ArithmeticError) as exc:
        raise ConfigurationError(config_set.config_id, str(exc)) from exc
