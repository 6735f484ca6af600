from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import (
    DateLike,
    calendar_year_period,
    rolling_12_month_period,
    to_date,
    to_optional_date,
    today_local,
)
from ..common.validators import require_date_order, require_non_negative
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.model import Employee
from ..work_patterns.model import QualifyingPattern
from ..work_patterns.service import WorkPatternService
from .chains import build_chains
from .import_validation import ImportDayCheck, validate_import_row
from .model import (
    EntitlementUsage,
    Ok,
    RecordPayment,
    SicknessEntitlementSummary,
    SicknessRecord,
    SspUsage,
    SummaryResult,
    Unavailable,
)
from .osp import actual_rolling_period, allocate_osp, allocate_record_payments, rolling_total_used
from .overlap import describe_overlaps, find_overlapping
from .repository import EntitlementUsageRepository, SicknessRecordRepository
from .ssp import count_ssp_days_in_range, ssp_entitled_days
from .tiers import (
    EligibilityRule,
    calculate_entitlement,
    calculate_service_months,
    find_applicable_rule,
    format_entitlement_tier,
)
from .working_days import count_qualifying_days_between

logger = logging.getLogger(__name__)


def compute_ssp_usage(
    records: Sequence[SicknessRecord],
    qualifying: QualifyingPattern,
    reference: date,
) -> SspUsage:
    """SSP usage for the calendar year and rolling 12 months ending on ``reference``."""
    days_per_week = qualifying.days_per_week
    chains = build_chains(records, qualifying)
    year = calendar_year_period(reference)
    rolling = rolling_12_month_period(reference)

    return SspUsage(
        qualifying_days_per_week=days_per_week,
        ssp_entitled_days=ssp_entitled_days(days_per_week),
        ssp_used_current_year=count_ssp_days_in_range(chains, qualifying, days_per_week, year.start, year.end),
        ssp_used_rolling_12=count_ssp_days_in_range(chains, qualifying, days_per_week, rolling.start, rolling.end),
    )


class SicknessService:
    """Sickness records, SSP usage and occupational sick pay entitlement."""

    def __init__(
        self,
        records: SicknessRecordRepository,
        usage: EntitlementUsageRepository,
        work_patterns: WorkPatternService,
    ):
        self._records = records
        self._usage = usage
        self._work_patterns = work_patterns

    # Records

    def get_records(self, employee_id: str) -> list[SicknessRecord]:
        records = list(self._records.list_for_employee(employee_id))
        records.sort(key=lambda r: r.start_date, reverse=True)
        return records

    def _default_total_days(self, employee_id: str, start: date, end: Optional[date]) -> float:
        qualifying = self._work_patterns.resolve_for_employee(employee_id)
        if end is None:
            return 1 if qualifying.is_qualifying(start) else 0
        return count_qualifying_days_between(start, end, qualifying)

    def _check_overlap(self, employee_id: str, start: date, end: Optional[date], exclude_id: Optional[str] = None) -> None:
        clashes = find_overlapping(self._records.list_for_employee(employee_id), start, end, exclude_id=exclude_id)
        if clashes:
            raise ValidationError(describe_overlaps(clashes))

    def record_absence(
        self,
        *,
        employee_id: str,
        start_date: DateLike,
        end_date: Optional[DateLike] = None,
        total_days: Optional[float] = None,
        reason: Optional[str] = None,
        is_certified: bool = False,
        notes: Optional[str] = None,
    ) -> SicknessRecord:
        start = to_date(start_date)
        end = to_optional_date(end_date)
        require_date_order(start, end)
        self._check_overlap(employee_id, start, end)

        if total_days is None:
            total_days = self._default_total_days(employee_id, start, end)
        require_non_negative(total_days, "total_days")

        record = self._records.create(
            employee_id=employee_id,
            start_date=start,
            end_date=end,
            total_days=float(total_days),
            reason=(reason or "").strip() or None,
            is_certified=bool(is_certified),
            notes=(notes or "").strip() or None,
        )
        logger.info("Recorded sickness %s for employee %s (%s to %s)", record.record_id, employee_id, start, end or "ongoing")
        return record

    def update_record(
        self,
        *,
        record_id: str,
        start_date: DateLike,
        end_date: Optional[DateLike] = None,
        total_days: Optional[float] = None,
        reason: Optional[str] = None,
        is_certified: bool = False,
        notes: Optional[str] = None,
    ) -> SicknessRecord:
        existing = self._records.get_by_id(record_id)
        if not existing:
            raise NotFoundError("Sickness record not found")

        start = to_date(start_date)
        end = to_optional_date(end_date)
        require_date_order(start, end)
        self._check_overlap(existing.employee_id, start, end, exclude_id=record_id)

        if total_days is None:
            total_days = self._default_total_days(existing.employee_id, start, end)
        require_non_negative(total_days, "total_days")

        updated = self._records.update(
            record_id=record_id,
            start_date=start,
            end_date=end,
            total_days=float(total_days),
            reason=(reason or "").strip() or None,
            is_certified=bool(is_certified),
            notes=(notes or "").strip() or None,
        )
        if not updated:
            raise NotFoundError("Sickness record not found")
        return updated

    def delete_record(self, record_id: str) -> None:
        if not self._records.delete(record_id):
            raise NotFoundError("Sickness record not found")

    # SSP

    def calculate_ssp_usage(self, employee_id: str, reference_date: Optional[DateLike] = None) -> SspUsage:
        """SSP usage that never fails: store errors count as "no sickness"."""
        reference = to_date(reference_date) if reference_date else today_local()
        qualifying = self._work_patterns.resolve_for_employee(employee_id)
        try:
            records = list(self._records.list_for_employee(employee_id))
        except Exception:
            logger.exception("Failed to fetch sickness records for employee %s", employee_id)
            records = []
        return compute_ssp_usage(records, qualifying, reference)

    # Occupational sick pay

    def calculate_entitlement_summary(
        self,
        employee: Employee,
        reference_date: Optional[DateLike] = None,
    ) -> SummaryResult:
        """Ok with the OSP and SSP position at ``reference_date``, or Unavailable.

        Never raises: any failure while loading or computing is logged and
        reported as Unavailable.
        """
        reference = to_date(reference_date) if reference_date else today_local()
        try:
            usage = self._usage.get_for_employee(
                employee.employee_id,
                period_start=calendar_year_period(reference).start,
            )
            if usage is None:
                return Unavailable(reason="No entitlement record for the current period")

            records = list(self._records.list_for_employee(employee.employee_id))
            qualifying = self._work_patterns.resolve_for_employee(employee.employee_id)
            return Ok(self._summarize(usage, records, qualifying, reference))
        except Exception as e:
            logger.exception("Error calculating entitlement summary for employee %s", employee.employee_id)
            return Unavailable(reason=str(e) or type(e).__name__)

    @staticmethod
    def _summarize(
        usage: EntitlementUsage,
        records: Sequence[SicknessRecord],
        qualifying: QualifyingPattern,
        reference: date,
    ) -> SicknessEntitlementSummary:
        ssp = compute_ssp_usage(records, qualifying, reference)
        rolling = rolling_12_month_period(reference)
        period = actual_rolling_period(records, reference)

        full_allowance = usage.full_pay_entitled_days + usage.opening_balance_full_pay
        half_allowance = usage.half_pay_entitled_days + usage.opening_balance_half_pay
        total_used = rolling_total_used(records, rolling)
        allocation = allocate_osp(full_allowance, half_allowance, total_used)

        return SicknessEntitlementSummary(
            full_pay_remaining=allocation.full_pay_remaining,
            half_pay_remaining=allocation.half_pay_remaining,
            full_pay_used_rolling_12_months=allocation.full_pay_used,
            half_pay_used_rolling_12_months=allocation.half_pay_used,
            total_used_rolling_12_months=total_used,
            opening_balance_full_pay=usage.opening_balance_full_pay,
            opening_balance_half_pay=usage.opening_balance_half_pay,
            current_tier=format_entitlement_tier(usage.full_pay_entitled_days, usage.half_pay_entitled_days),
            service_months=usage.current_service_months,
            rolling_period_start=period.start,
            rolling_period_end=period.end,
            ssp_entitled_days=ssp.ssp_entitled_days,
            ssp_used_rolling_12_months=ssp.ssp_used_rolling_12,
            ssp_remaining_days=max(0, ssp.ssp_entitled_days - ssp.ssp_used_rolling_12),
        )

    def calculate_record_payments(
        self,
        employee: Employee,
        reference_date: Optional[DateLike] = None,
    ) -> list[RecordPayment]:
        records = self.get_records(employee.employee_id)
        result = self.calculate_entitlement_summary(employee, reference_date)
        summary = result.summary if isinstance(result, Ok) else None
        return allocate_record_payments(records, summary)

    def set_opening_balance(
        self,
        *,
        employee_id: str,
        full_pay_days: float,
        half_pay_days: float,
        reference_date: Optional[DateLike] = None,
        notes: Optional[str] = None,
    ) -> EntitlementUsage:
        require_non_negative(full_pay_days, "full_pay_days")
        require_non_negative(half_pay_days, "half_pay_days")
        reference = to_date(reference_date) if reference_date else today_local()

        updated = self._usage.set_opening_balance(
            employee_id=employee_id,
            period_start=calendar_year_period(reference).start,
            full_pay_days=full_pay_days,
            half_pay_days=half_pay_days,
            reference_date=reference,
            notes=(notes or "").strip() or None,
        )
        if not updated:
            raise NotFoundError("No entitlement record for the current period")
        return updated

    def recalculate_entitlement(
        self,
        employee: Employee,
        rules: Sequence[EligibilityRule],
        *,
        scheme_id: Optional[str] = None,
        reference_date: Optional[DateLike] = None,
    ) -> EntitlementUsage:
        """Refresh the tier-driven allowances, keeping any opening balance."""
        reference = to_date(reference_date) if reference_date else today_local()
        period = calendar_year_period(reference)

        service_months = calculate_service_months(employee.hire_date, reference) if employee.hire_date else 0
        rule = find_applicable_rule(service_months, rules)
        qualifying = self._work_patterns.resolve_for_employee(employee.employee_id)
        entitlement = calculate_entitlement(rule, qualifying.days_per_week)

        existing = self._usage.get_for_employee(employee.employee_id, period_start=period.start)
        base = existing or EntitlementUsage(
            employee_id=employee.employee_id,
            entitlement_period_start=period.start,
            entitlement_period_end=period.end,
        )
        usage = replace(
            base,
            entitlement_period_end=period.end,
            full_pay_entitled_days=entitlement.full_pay_days,
            half_pay_entitled_days=entitlement.half_pay_days,
            current_service_months=service_months,
            current_rule_id=rule.rule_id if rule else None,
            sickness_scheme_id=scheme_id,
        )
        logger.info(
            "Entitlement for employee %s: %s full / %s half (rule=%s)",
            employee.employee_id,
            usage.full_pay_entitled_days,
            usage.half_pay_entitled_days,
            usage.current_rule_id,
        )
        return self._usage.upsert(usage)

    # Import

    def validate_import_rows(self, rows: Sequence[Mapping[str, Any]]) -> list[ImportDayCheck]:
        """Check imported day counts against each employee's work pattern."""
        patterns: dict[str, list] = {}
        checks: list[ImportDayCheck] = []
        for i, row in enumerate(rows, start=1):
            if not isinstance(row, Mapping):
                raise ValidationError(f"Row {i}: must be an object")
            employee_id = str(row.get("employee_id") or "")
            if employee_id not in patterns:
                patterns[employee_id] = self._work_patterns.get_pattern(employee_id) if employee_id else []

            supplied = row.get("total_days")
            try:
                checks.append(
                    validate_import_row(
                        None if supplied in (None, "") else float(supplied),
                        row.get("start_date") or None,
                        row.get("end_date") or None,
                        patterns[employee_id],
                    )
                )
            except (TypeError, ValueError) as e:
                raise ValidationError(f"Row {i}: {e}") from e
        return checks
