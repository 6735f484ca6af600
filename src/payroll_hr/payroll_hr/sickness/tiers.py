"""Sickness scheme eligibility tiers (service length -> full/half pay allowance)."""
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence

from ..core.constants import DAYS_PER_SERVICE_MONTH, MONTHS_PER_YEAR, WEEKS_PER_YEAR
from ..core.enums import EntitlementUnit

_SERVICE_UNIT_DAYS = {
    EntitlementUnit.DAYS: 1,
    EntitlementUnit.WEEKS: 7,
    EntitlementUnit.MONTHS: DAYS_PER_SERVICE_MONTH,
    EntitlementUnit.YEARS: 365,
}


@dataclass(frozen=True)
class EligibilityRule:
    rule_id: str
    service_from: float
    service_from_unit: str
    service_to: Optional[float]
    service_to_unit: str
    full_pay_amount: float
    full_pay_unit: str
    half_pay_amount: float
    half_pay_unit: str


@dataclass(frozen=True)
class Entitlement:
    full_pay_days: int
    half_pay_days: int


def _unit(value: str) -> Optional[EntitlementUnit]:
    try:
        return EntitlementUnit(str(value).strip().lower())
    except ValueError:
        return None


def convert_to_days(amount: float, unit: str) -> float:
    """Service period length in days; unknown units are taken as days."""
    return amount * _SERVICE_UNIT_DAYS.get(_unit(unit), 1)


def convert_months_to_days(months: float, days_per_week: int) -> int:
    return math.floor(months * days_per_week * WEEKS_PER_YEAR / MONTHS_PER_YEAR)


def convert_entitlement_to_days(amount: float, unit: str, days_per_week: int) -> int:
    u = _unit(unit)
    if u == EntitlementUnit.WEEKS:
        return int(amount * days_per_week)
    if u == EntitlementUnit.MONTHS:
        return convert_months_to_days(amount, days_per_week)
    return int(amount)


def calculate_service_months(hire_date: date, reference: date) -> int:
    if reference < hire_date:
        return 0
    months = (reference.year - hire_date.year) * 12 + (reference.month - hire_date.month)
    return max(0, months)


def find_applicable_rule(service_months: int, rules: Sequence[EligibilityRule]) -> Optional[EligibilityRule]:
    """Tier whose ``[from, to)`` service band contains the employee; the lowest tier otherwise."""
    if not rules:
        return None

    ordered = sorted(rules, key=lambda r: convert_to_days(r.service_from, r.service_from_unit))
    service_days = service_months * DAYS_PER_SERVICE_MONTH

    for rule in ordered:
        lower = convert_to_days(rule.service_from, rule.service_from_unit)
        upper = convert_to_days(rule.service_to, rule.service_to_unit) if rule.service_to else math.inf
        if lower <= service_days < upper:
            return rule
    return ordered[0]


def calculate_entitlement(rule: Optional[EligibilityRule], days_per_week: int) -> Entitlement:
    if rule is None:
        return Entitlement(full_pay_days=0, half_pay_days=0)
    return Entitlement(
        full_pay_days=convert_entitlement_to_days(rule.full_pay_amount, rule.full_pay_unit, days_per_week),
        half_pay_days=convert_entitlement_to_days(rule.half_pay_amount, rule.half_pay_unit, days_per_week),
    )


def format_entitlement_tier(full_pay_days: float, half_pay_days: float) -> str:
    if not full_pay_days and not half_pay_days:
        return "No tier"
    return f"{full_pay_days:g} days full / {half_pay_days:g} days half"
