from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional, Sequence

from ..common.datetime_utils import DateLike
from ..core.constants import DEFAULT_REPORT_BATCH_SIZE
from ..core.enums import ReportSortKey
from ..core.exceptions import ValidationError
from ..employees.model import Employee
from ..sickness.model import Ok, SicknessEntitlementSummary
from ..sickness.service import SicknessService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SicknessReportRow:
    employee: Employee
    entitlement_summary: Optional[SicknessEntitlementSummary]

    def as_dict(self) -> dict:
        return {
            "employee": self.employee.as_dict(),
            "entitlement_summary": self.entitlement_summary.as_dict() if self.entitlement_summary else None,
        }


@dataclass(frozen=True)
class ReportFilters:
    search_term: str = ""
    department: str = ""
    sort_by: ReportSortKey = ReportSortKey.NAME
    sort_order: str = "asc"

    @classmethod
    def parse(
        cls,
        *,
        search_term: Optional[str] = None,
        department: Optional[str] = None,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
    ) -> "ReportFilters":
        try:
            key = ReportSortKey((sort_by or ReportSortKey.NAME.value).lower())
        except ValueError:
            raise ValidationError(f"Unknown sort key {sort_by!r}")
        order = (sort_order or "asc").lower()
        if order not in {"asc", "desc"}:
            raise ValidationError("sort_order must be 'asc' or 'desc'")
        return cls(
            search_term=(search_term or "").strip(),
            department=(department or "").strip(),
            sort_by=key,
            sort_order=order,
        )


def _sort_value(row: SicknessReportRow, key: ReportSortKey):
    s = row.entitlement_summary
    if key == ReportSortKey.USAGE:
        return s.total_used_rolling_12_months if s else 0
    if key == ReportSortKey.REMAINING:
        return s.full_pay_remaining if s else 0
    if key == ReportSortKey.SERVICE:
        return s.service_months if s else 0
    return row.employee.full_name.lower()


def apply_filters(rows: Sequence[SicknessReportRow], filters: ReportFilters) -> list[SicknessReportRow]:
    out = list(rows)

    if filters.search_term:
        needle = filters.search_term.lower()
        out = [
            r
            for r in out
            if needle in r.employee.first_name.lower()
            or needle in r.employee.last_name.lower()
            or needle in (r.employee.payroll_id or "").lower()
        ]

    if filters.department:
        out = [r for r in out if r.employee.department == filters.department]

    out.sort(key=lambda r: _sort_value(r, filters.sort_by), reverse=filters.sort_order == "desc")
    return out


def departments(rows: Sequence[SicknessReportRow]) -> list[str]:
    return sorted({r.employee.department for r in rows if r.employee.department})


class SicknessReportService:
    """Entitlement summaries for many employees, fetched in bounded batches."""

    def __init__(self, sickness: SicknessService, *, batch_size: int = DEFAULT_REPORT_BATCH_SIZE):
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")
        self._sickness = sickness
        self._batch_size = int(batch_size)

    def _summary_for(self, employee: Employee, reference_date: Optional[DateLike]) -> SicknessReportRow:
        try:
            result = self._sickness.calculate_entitlement_summary(employee, reference_date)
        except Exception:
            logger.exception("Error fetching sickness data for employee %s", employee.employee_id)
            return SicknessReportRow(employee=employee, entitlement_summary=None)

        summary = result.summary if isinstance(result, Ok) else None
        return SicknessReportRow(employee=employee, entitlement_summary=summary)

    def build_rows(
        self,
        employees: Sequence[Employee],
        *,
        reference_date: Optional[DateLike] = None,
    ) -> list[SicknessReportRow]:
        rows: list[SicknessReportRow] = []
        if not employees:
            return rows

        with ThreadPoolExecutor(max_workers=min(self._batch_size, len(employees))) as pool:
            for i in range(0, len(employees), self._batch_size):
                batch = employees[i:i + self._batch_size]
                # map() preserves input order and waits for the whole batch.
                rows.extend(pool.map(lambda e: self._summary_for(e, reference_date), batch))
                logger.debug("Sickness report: %d/%d employees processed", len(rows), len(employees))

        missing = sum(1 for r in rows if r.entitlement_summary is None)
        logger.info("Sickness report built for %d employees (%d without summary)", len(rows), missing)
        return rows

    def build_report(
        self,
        employees: Sequence[Employee],
        *,
        reference_date: Optional[DateLike] = None,
        filters: Optional[ReportFilters] = None,
    ) -> list[SicknessReportRow]:
        rows = self.build_rows(employees, reference_date=reference_date)
        return apply_filters(rows, filters or ReportFilters())
