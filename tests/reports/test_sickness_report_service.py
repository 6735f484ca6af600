from __future__ import annotations

import threading
from dataclasses import replace
from datetime import date

import pytest

from src.payroll_hr.payroll_hr.core.enums import ReportSortKey
from src.payroll_hr.payroll_hr.core.exceptions import ValidationError
from src.payroll_hr.payroll_hr.employees.model import Employee
from src.payroll_hr.payroll_hr.reports.service import (
    ReportFilters,
    SicknessReportRow,
    SicknessReportService,
    apply_filters,
    departments,
)
from src.payroll_hr.payroll_hr.sickness.model import Ok, SicknessEntitlementSummary, Unavailable

SUMMARY = SicknessEntitlementSummary(
    full_pay_remaining=10,
    half_pay_remaining=20,
    full_pay_used_rolling_12_months=0,
    half_pay_used_rolling_12_months=0,
    total_used_rolling_12_months=0,
    opening_balance_full_pay=0,
    opening_balance_half_pay=0,
    current_tier="No tier",
    service_months=12,
    rolling_period_start=date(2023, 7, 1),
    rolling_period_end=date(2024, 6, 30),
    ssp_entitled_days=140,
    ssp_used_rolling_12_months=0,
    ssp_remaining_days=140,
)


def _employee(i: int, **kw) -> Employee:
    return Employee(employee_id=f"e{i}", first_name=f"First{i:02d}", last_name="Test", **kw)


class RecordingSicknessService:
    """Tracks how many summaries were in flight at once."""

    def __init__(self, *, failing=(), unavailable=()):
        self.failing = set(failing)
        self.unavailable = set(unavailable)
        self._lock = threading.Lock()
        self.in_flight = 0
        self.max_in_flight = 0
        self.completed = 0
        self.completed_at_start: dict[str, int] = {}

    def calculate_entitlement_summary(self, employee, reference_date=None):
        with self._lock:
            self.in_flight += 1
            self.max_in_flight = max(self.max_in_flight, self.in_flight)
            self.completed_at_start[employee.employee_id] = self.completed
        try:
            if employee.employee_id in self.failing:
                raise RuntimeError("boom")
            if employee.employee_id in self.unavailable:
                return Unavailable(reason="no data")
            return Ok(SUMMARY)
        finally:
            with self._lock:
                self.in_flight -= 1
                self.completed += 1


def test_rows_follow_employee_order_and_tolerate_failures():
    employees = [_employee(i) for i in range(7)]
    svc = SicknessReportService(RecordingSicknessService(failing={"e2"}, unavailable={"e5"}), batch_size=3)

    rows = svc.build_rows(employees, reference_date=date(2024, 6, 30))

    assert [r.employee.employee_id for r in rows] == [e.employee_id for e in employees]
    assert rows[2].entitlement_summary is None
    assert rows[5].entitlement_summary is None
    assert rows[0].entitlement_summary == SUMMARY


def test_each_batch_finishes_before_the_next_starts():
    employees = [_employee(i) for i in range(45)]
    sickness = RecordingSicknessService()
    svc = SicknessReportService(sickness, batch_size=20)

    rows = svc.build_rows(employees)

    assert len(rows) == 45
    assert sickness.max_in_flight <= 20
    for i, e in enumerate(employees):
        assert sickness.completed_at_start[e.employee_id] >= (i // 20) * 20


def test_empty_employee_list():
    svc = SicknessReportService(RecordingSicknessService())

    assert svc.build_rows([]) == []


def test_batch_size_must_be_positive():
    with pytest.raises(ValueError):
        SicknessReportService(RecordingSicknessService(), batch_size=0)


def _rows():
    return [
        SicknessReportRow(_employee(1, department="Ops", payroll_id="P-100"), replace(SUMMARY, total_used_rolling_12_months=4)),
        SicknessReportRow(_employee(2, department="Finance"), replace(SUMMARY, total_used_rolling_12_months=9)),
        SicknessReportRow(_employee(3, department="Ops"), None),
    ]


def test_filters_by_search_and_department():
    assert [r.employee.employee_id for r in apply_filters(_rows(), ReportFilters(search_term="p-100"))] == ["e1"]
    assert [r.employee.employee_id for r in apply_filters(_rows(), ReportFilters(department="Ops"))] == ["e1", "e3"]


def test_sort_by_usage_descending_treats_missing_summary_as_zero():
    filters = ReportFilters.parse(sort_by="usage", sort_order="DESC")

    assert [r.employee.employee_id for r in apply_filters(_rows(), filters)] == ["e2", "e1", "e3"]


def test_build_report_applies_filters():
    employees = [_employee(3), _employee(1), _employee(2)]
    svc = SicknessReportService(RecordingSicknessService(), batch_size=2)

    rows = svc.build_report(employees, filters=ReportFilters(sort_by=ReportSortKey.NAME))

    assert [r.employee.employee_id for r in rows] == ["e1", "e2", "e3"]


def test_filter_parsing_rejects_unknown_values():
    with pytest.raises(ValidationError):
        ReportFilters.parse(sort_by="salary")
    with pytest.raises(ValidationError):
        ReportFilters.parse(sort_order="sideways")


def test_departments_are_unique_and_sorted():
    assert departments(_rows()) == ["Finance", "Ops"]
