from datetime import date

import pytest

from src.payroll_hr.payroll_hr.sickness.tiers import (
    EligibilityRule,
    calculate_entitlement,
    calculate_service_months,
    convert_entitlement_to_days,
    convert_months_to_days,
    convert_to_days,
    find_applicable_rule,
    format_entitlement_tier,
)


def _rule(rule_id, service_from, from_unit, service_to, to_unit, full, full_unit, half, half_unit):
    return EligibilityRule(
        rule_id=rule_id,
        service_from=service_from,
        service_from_unit=from_unit,
        service_to=service_to,
        service_to_unit=to_unit,
        full_pay_amount=full,
        full_pay_unit=full_unit,
        half_pay_amount=half,
        half_pay_unit=half_unit,
    )


RULES = [
    _rule("year-2", 1, "years", None, "years", 2, "months", 2, "months"),
    _rule("year-1", 0, "months", 12, "months", 4, "weeks", 4, "weeks"),
]


@pytest.mark.parametrize(
    "amount, unit, expected",
    [(10, "days", 10), (2, "weeks", 14), (3, "months", 90), (1, "years", 365), (5, "fortnights", 5)],
)
def test_convert_to_days(amount, unit, expected):
    assert convert_to_days(amount, unit) == expected


def test_month_entitlement_uses_weeks_per_year():
    assert convert_months_to_days(1, 5) == 21
    assert convert_entitlement_to_days(2, "Months", 5) == 43


def test_week_and_day_entitlements():
    assert convert_entitlement_to_days(4, "weeks", 3) == 12
    assert convert_entitlement_to_days(10, "days", 3) == 10
    assert convert_entitlement_to_days(10, "bogus", 3) == 10


def test_service_months():
    assert calculate_service_months(date(2023, 1, 1), date(2024, 6, 30)) == 17
    assert calculate_service_months(date(2025, 1, 1), date(2024, 6, 30)) == 0


def test_rule_selected_by_service_band():
    assert find_applicable_rule(6, RULES).rule_id == "year-1"
    assert find_applicable_rule(13, RULES).rule_id == "year-2"
    assert find_applicable_rule(6, []) is None


def test_entitlement_for_rule():
    ent = calculate_entitlement(find_applicable_rule(6, RULES), 5)

    assert (ent.full_pay_days, ent.half_pay_days) == (20, 20)
    assert calculate_entitlement(None, 5).full_pay_days == 0


def test_format_tier():
    assert format_entitlement_tier(0, 0) == "No tier"
    assert format_entitlement_tier(20, 10.5) == "20 days full / 10.5 days half"
