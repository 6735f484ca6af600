from __future__ import annotations

import itertools
from dataclasses import replace
from datetime import date
from typing import Optional

import pytest

from src.payroll_hr.payroll_hr.core.enums import Weekday
from src.payroll_hr.payroll_hr.core.exceptions import DataFetchError
from src.payroll_hr.payroll_hr.employees.model import Employee
from src.payroll_hr.payroll_hr.sickness.model import EntitlementUsage, SicknessRecord
from src.payroll_hr.payroll_hr.sickness.service import SicknessService
from src.payroll_hr.payroll_hr.work_patterns.model import WorkDay
from src.payroll_hr.payroll_hr.work_patterns.resolver import default_work_pattern, resolve_qualifying_days
from src.payroll_hr.payroll_hr.work_patterns.service import WorkPatternService

_ids = itertools.count(1)


def _make_record(
    start: date,
    end: Optional[date],
    total_days: float = 0,
    *,
    employee_id: str = "e1",
    record_id: Optional[str] = None,
) -> SicknessRecord:
    return SicknessRecord(
        record_id=record_id or f"r{next(_ids)}",
        employee_id=employee_id,
        start_date=start,
        end_date=end,
        total_days=total_days,
    )


@pytest.fixture
def make_record():
    return _make_record


@pytest.fixture
def full_time():
    return resolve_qualifying_days(default_work_pattern())


@pytest.fixture
def mon_wed_fri():
    working = {Weekday.MONDAY, Weekday.WEDNESDAY, Weekday.FRIDAY}
    return resolve_qualifying_days([WorkDay(day=d, is_working=d in working) for d in Weekday])


class InMemorySicknessRecords:
    def __init__(self, records=(), *, fail=False):
        self.records = {r.record_id: r for r in records}
        self.fail = fail
        self._id = 0

    def list_for_employee(self, employee_id: str):
        if isinstance(self.fail, Exception):
            raise self.fail
        if self.fail:
            raise DataFetchError("sickness records unavailable")
        return [r for r in self.records.values() if r.employee_id == employee_id]

    def get_by_id(self, record_id: str):
        return self.records.get(record_id)

    def create(self, *, employee_id, start_date, end_date, total_days, reason=None, is_certified=False, notes=None):
        self._id += 1
        rec = SicknessRecord(
            record_id=f"new-{self._id}",
            employee_id=employee_id,
            start_date=start_date,
            end_date=end_date,
            total_days=total_days,
            reason=reason,
            is_certified=is_certified,
            notes=notes,
        )
        self.records[rec.record_id] = rec
        return rec

    def update(self, *, record_id, start_date, end_date, total_days, reason=None, is_certified=False, notes=None):
        existing = self.records.get(record_id)
        if not existing:
            return None
        rec = replace(
            existing,
            start_date=start_date,
            end_date=end_date,
            total_days=total_days,
            reason=reason,
            is_certified=is_certified,
            notes=notes,
        )
        self.records[record_id] = rec
        return rec

    def delete(self, record_id: str) -> bool:
        return self.records.pop(record_id, None) is not None


class InMemoryEntitlementUsage:
    def __init__(self, usages=(), *, fail: bool = False):
        self.usages = {(u.employee_id, u.entitlement_period_start): u for u in usages}
        self.fail = fail

    def get_for_employee(self, employee_id: str, *, period_start: date):
        if self.fail:
            raise DataFetchError("entitlement store unavailable")
        return self.usages.get((employee_id, period_start))

    def upsert(self, usage: EntitlementUsage) -> EntitlementUsage:
        self.usages[(usage.employee_id, usage.entitlement_period_start)] = usage
        return usage

    def set_opening_balance(self, *, employee_id, period_start, full_pay_days, half_pay_days, reference_date, notes=None):
        existing = self.usages.get((employee_id, period_start))
        if not existing:
            return None
        updated = replace(
            existing,
            opening_balance_full_pay=full_pay_days,
            opening_balance_half_pay=half_pay_days,
            opening_balance_date=reference_date,
            opening_balance_notes=notes,
        )
        self.usages[(employee_id, period_start)] = updated
        return updated


class InMemoryWorkPatterns:
    def __init__(self, patterns=None):
        self.patterns = dict(patterns or {})

    def fetch_work_patterns(self, employee_id: str):
        return self.patterns.get(employee_id, [])

    def replace_pattern(self, employee_id: str, days):
        self.patterns[employee_id] = list(days)


class InMemoryEmployees:
    def __init__(self, employees=()):
        self.employees = {e.employee_id: e for e in employees}

    def get_by_id(self, employee_id: str):
        return self.employees.get(employee_id)

    def list_active(self):
        return [e for e in self.employees.values() if e.is_active]


@pytest.fixture
def records_repo():
    return InMemorySicknessRecords()


@pytest.fixture
def usage_repo():
    return InMemoryEntitlementUsage()


@pytest.fixture
def patterns_repo():
    return InMemoryWorkPatterns()


@pytest.fixture
def sickness_service(records_repo, usage_repo, patterns_repo):
    return SicknessService(records_repo, usage_repo, WorkPatternService(patterns_repo))


@pytest.fixture
def employees_repo():
    return InMemoryEmployees(
        [
            Employee(employee_id="e1", first_name="Ada", last_name="Lovelace", department="Ops"),
            Employee(employee_id="e2", first_name="Alan", last_name="Turing", department="Research"),
        ]
    )
