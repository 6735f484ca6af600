from datetime import date, datetime

from src.payroll_hr.payroll_hr.sickness.working_days import (
    calculate_working_days_for_record,
    count_qualifying_days_between,
)
from src.payroll_hr.payroll_hr.work_patterns.resolver import default_work_pattern, resolve_qualifying_days


def test_single_day_counts_one_when_it_qualifies(full_time):
    assert count_qualifying_days_between(date(2024, 1, 15), date(2024, 1, 15), full_time) == 1
    assert count_qualifying_days_between(date(2024, 1, 20), date(2024, 1, 20), full_time) == 0


def test_reversed_range_counts_zero(full_time):
    assert count_qualifying_days_between(date(2024, 1, 19), date(2024, 1, 15), full_time) == 0


def test_range_is_inclusive_and_skips_weekends(full_time):
    # Mon 15 Jan to Sun 28 Jan 2024
    assert count_qualifying_days_between(date(2024, 1, 15), date(2024, 1, 28), full_time) == 10


def test_part_time_pattern(mon_wed_fri):
    assert count_qualifying_days_between(date(2024, 1, 15), date(2024, 1, 21), mon_wed_fri) == 3


def test_empty_pattern_counts_zero():
    assert count_qualifying_days_between(date(2024, 1, 15), date(2024, 1, 19), resolve_qualifying_days([])) == 0


def test_time_of_day_is_ignored(full_time):
    assert count_qualifying_days_between(datetime(2024, 1, 15, 23, 59), "2024-01-16T00:30:00", full_time) == 2


def test_record_days_for_closed_range():
    assert calculate_working_days_for_record("2024-01-15", "2024-01-19", default_work_pattern()) == 5


def test_record_days_for_ongoing_absence():
    pattern = default_work_pattern()

    assert calculate_working_days_for_record(date(2024, 1, 15), None, pattern) == 1
    assert calculate_working_days_for_record(date(2024, 1, 20), None, pattern) == 0


def test_record_days_without_start():
    assert calculate_working_days_for_record(None, "2024-01-19", default_work_pattern()) == 0
    assert calculate_working_days_for_record("", None, default_work_pattern()) == 0
