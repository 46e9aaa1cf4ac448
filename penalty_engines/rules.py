"""
Module: penalty_engines.rules
Responsibility:
    The rule table: one immutable ``RulePolicy`` per return or deduction
    type, holding its grace period, per-day fee, fee cap and interest rate.
    Keeping these as data rather than branches makes the per-type
    differences auditable and testable on their own.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    ``DEFAULT_RULE_TABLE`` is built once at import and never refreshed.
    ``penalty_config.bridges`` can build alternative tables from YAML.

Invariants enforced:
    - Rule keys form a closed set (``GSTReturnType`` / ``TDSDeductionType``).
    - Policies are frozen; the table is exposed through a read-only mapping.
    - grace_days >= 0; rates and caps are non-negative Decimals.

Failure modes:
    - UnknownRuleKeyError for keys outside the closed set or absent from
      the table being consulted.
    - InvalidAmountError / ValueError when a policy is constructed with
      negative or inconsistent values.

Statutory basis of the default table:
    GST  -- CGST Act s.47 (late fee), s.50 (18% p.a. interest on late tax).
    TDS  -- Income Tax Act s.234E (Rs 200/day, not exceeding the TDS
            amount), s.201(1A) (1.5% per month on late deposit).
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from types import MappingProxyType

from penalty_kernel.domain.values import non_negative_amount
from penalty_kernel.exceptions import UnknownRuleKeyError
from penalty_kernel.logging_config import get_logger

logger = get_logger("engines.rules")


class RuleDomain(str, Enum):
    """Which calculator a rule key belongs to."""

    GST = "gst"
    TDS = "tds"


class GSTReturnType(str, Enum):
    """GST return forms with a late-filing fee."""

    GSTR1 = "GSTR1"  # Monthly/quarterly outward supplies
    GSTR3B = "GSTR3B"  # Monthly summary return with tax payment
    GSTR9 = "GSTR9"  # Annual return


class TDSDeductionType(str, Enum):
    """TDS deduction categories. They share one fee policy but stay distinct keys."""

    SALARY = "salary"  # s.192
    CONTRACTOR = "contractor"  # s.194C
    RENT = "rent"  # s.194I
    PROFESSIONAL = "professional"  # s.194J
    COMMISSION = "commission"  # s.194H
    OTHER = "other"


RuleKey = GSTReturnType | TDSDeductionType

_DOMAIN_KEYS: dict[RuleDomain, type[Enum]] = {
    RuleDomain.GST: GSTReturnType,
    RuleDomain.TDS: TDSDeductionType,
}


class FeeBasis(str, Enum):
    """Which days are charged once the grace period is exceeded."""

    ELAPSED_DAYS = "elapsed_days"  # every day since the due date
    DAYS_BEYOND_GRACE = "days_beyond_grace"  # only days after the grace period


def rule_domain(rule_key: RuleKey) -> RuleDomain:
    """Domain of an already-coerced rule key."""
    if isinstance(rule_key, GSTReturnType):
        return RuleDomain.GST
    return RuleDomain.TDS


def coerce_rule_key(raw: object, domain: RuleDomain | None = None) -> RuleKey:
    """
    Map a raw identifier onto the closed set of rule keys.

    Enum members pass through. Strings match the member value exactly
    (``"GSTR3B"``, ``"salary"``). When ``domain`` is given, keys of the
    other domain are rejected as unknown.

    Raises:
        UnknownRuleKeyError: If ``raw`` names no rule key in scope.
    """
    domains = (domain,) if domain is not None else tuple(_DOMAIN_KEYS)
    for candidate in domains:
        enum_cls = _DOMAIN_KEYS[candidate]
        if isinstance(raw, enum_cls):
            return raw  # type: ignore[return-value]
        if isinstance(raw, str) and not isinstance(raw, Enum):
            try:
                return enum_cls(raw)  # type: ignore[return-value]
            except ValueError:
                continue
    raise UnknownRuleKeyError(raw, domain.value if domain is not None else None)


@dataclass(frozen=True)
class RulePolicy:
    """
    Late-filing policy for one rule key.

    Contract:
        Frozen value object. Amounts are Decimal rupees.
    Guarantees:
        - grace_days >= 0.
        - daily_rate, fee_cap and interest_annual_rate_percent are
          non-negative Decimals.
        - fee_cap None means the fee is uncapped.
    Non-goals:
        - Does not compute anything; see ``penalty_engines.fees`` and
          ``penalty_engines.interest``.
    """

    rule_key: RuleKey
    grace_days: int
    daily_rate: Decimal
    fee_cap: Decimal | None
    interest_annual_rate_percent: Decimal
    fee_basis: FeeBasis = FeeBasis.ELAPSED_DAYS

    # s.234E: the fee can never exceed the tax that was deducted
    cap_at_tax_amount: bool = False

    description: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "rule_key", coerce_rule_key(self.rule_key))
        if isinstance(self.grace_days, bool) or not isinstance(self.grace_days, int):
            raise ValueError(f"grace_days must be an integer, got {self.grace_days!r}")
        if self.grace_days < 0:
            raise ValueError("grace_days cannot be negative")
        object.__setattr__(
            self, "daily_rate", non_negative_amount(self.daily_rate, "daily_rate")
        )
        if self.fee_cap is not None:
            object.__setattr__(
                self, "fee_cap", non_negative_amount(self.fee_cap, "fee_cap")
            )
        object.__setattr__(
            self,
            "interest_annual_rate_percent",
            non_negative_amount(
                self.interest_annual_rate_percent, "interest_annual_rate_percent"
            ),
        )
        object.__setattr__(self, "fee_basis", FeeBasis(self.fee_basis))

    @property
    def domain(self) -> RuleDomain:
        return rule_domain(self.rule_key)

    @property
    def is_capped(self) -> bool:
        """True if the fee has a fixed upper limit."""
        return self.fee_cap is not None


class RuleTable(Mapping[RuleKey, RulePolicy]):
    """
    Read-only mapping from rule key to policy.

    Built once from an iterable of policies; duplicate keys are rejected
    so no policy silently shadows another.
    """

    def __init__(self, policies: Iterable[RulePolicy], name: str = "default"):
        entries: dict[RuleKey, RulePolicy] = {}
        for policy in policies:
            if policy.rule_key in entries:
                raise ValueError(f"Duplicate policy for rule key {policy.rule_key.value}")
            entries[policy.rule_key] = policy
        self._entries = MappingProxyType(entries)
        self.name = name

    def __getitem__(self, key: RuleKey) -> RulePolicy:
        return self._entries[key]

    def __iter__(self) -> Iterator[RuleKey]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"RuleTable({self.name!r}, {len(self)} policies)"

    def for_domain(self, domain: RuleDomain) -> tuple[RulePolicy, ...]:
        """Policies belonging to one calculator, in table order."""
        return tuple(p for p in self._entries.values() if p.domain == domain)

    def lookup(self, rule_key: object, domain: RuleDomain | None = None) -> RulePolicy:
        """
        Policy for ``rule_key``.

        Raises:
            UnknownRuleKeyError: If the key is outside the closed set, in
                the wrong domain, or absent from this table.
        """
        key = coerce_rule_key(rule_key, domain)
        try:
            return self._entries[key]
        except KeyError:
            logger.warning("rule_key_not_in_table", extra={
                "rule_key": key.value,
                "table": self.name,
            })
            raise UnknownRuleKeyError(rule_key, domain.value if domain else None) from None


def _gst_policy(
    rule_key: GSTReturnType,
    grace_days: int,
    daily_rate: str,
    fee_cap: str | None,
    description: str,
) -> RulePolicy:
    return RulePolicy(
        rule_key=rule_key,
        grace_days=grace_days,
        daily_rate=Decimal(daily_rate),
        fee_cap=Decimal(fee_cap) if fee_cap is not None else None,
        interest_annual_rate_percent=Decimal("18"),
        description=description,
    )


def _tds_policy(rule_key: TDSDeductionType, description: str) -> RulePolicy:
    return RulePolicy(
        rule_key=rule_key,
        grace_days=0,
        daily_rate=Decimal("200"),
        fee_cap=Decimal("5000"),
        interest_annual_rate_percent=Decimal("18"),
        cap_at_tax_amount=True,
        description=description,
    )


DEFAULT_RULE_TABLE = RuleTable(
    (
        _gst_policy(GSTReturnType.GSTR1, 30, "100", "5000", "GSTR-1 outward supplies"),
        _gst_policy(GSTReturnType.GSTR3B, 30, "100", "5000", "GSTR-3B summary return"),
        _gst_policy(GSTReturnType.GSTR9, 15, "200", None, "GSTR-9 annual return"),
        _tds_policy(TDSDeductionType.SALARY, "TDS on salary (s.192)"),
        _tds_policy(TDSDeductionType.CONTRACTOR, "TDS on contractor payments (s.194C)"),
        _tds_policy(TDSDeductionType.RENT, "TDS on rent (s.194I)"),
        _tds_policy(TDSDeductionType.PROFESSIONAL, "TDS on professional fees (s.194J)"),
        _tds_policy(TDSDeductionType.COMMISSION, "TDS on commission (s.194H)"),
        _tds_policy(TDSDeductionType.OTHER, "TDS, other sections"),
    ),
    name="default",
)


def lookup_policy(
    rule_key: object,
    table: RuleTable | None = None,
    domain: RuleDomain | None = None,
) -> RulePolicy:
    """Policy for ``rule_key`` from ``table`` (the default table when None)."""
    if table is None:
        table = DEFAULT_RULE_TABLE
    return table.lookup(rule_key, domain)
