"""Occupational Sick Pay: full-pay then half-pay allocation."""
from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import DateRange, rolling_12_month_period
from .model import OspAllocation, RecordPayment, SicknessEntitlementSummary, SicknessRecord


def allocate_osp(full_allowance: float, half_allowance: float, rolling_total_used: float) -> OspAllocation:
    """Draw usage from the full-pay allowance first, then spill into half pay."""
    full_used = min(rolling_total_used, full_allowance)
    remaining_after_full = max(0, rolling_total_used - full_used)
    half_used = min(remaining_after_full, half_allowance)

    return OspAllocation(
        full_pay_used=full_used,
        half_pay_used=half_used,
        full_pay_remaining=max(0, full_allowance - full_used),
        half_pay_remaining=max(0, half_allowance - half_used),
    )


def rolling_total_used(records: Iterable[SicknessRecord], period: DateRange) -> float:
    """Sum of stored ``total_days`` for records overlapping ``period``."""
    return sum(r.total_days or 0 for r in records if period.overlaps(r.start_date, r.effective_end))


def actual_rolling_period(records: Iterable[SicknessRecord], reference: date) -> DateRange:
    """Rolling window ending on the latest sickness start within the window at ``reference``.

    Falls back to the window ending on ``reference`` when no sickness started in it.
    """
    generic = rolling_12_month_period(reference)
    starts = [r.start_date for r in records if generic.contains(r.start_date)]
    if not starts:
        return generic
    return rolling_12_month_period(max(starts))


def _plural(n: float) -> str:
    return f"{n:g} day{'s' if n > 1 else ''}"


def describe_payment(full: float, half: float, none: float, total: float) -> str:
    parts = []
    if full > 0:
        parts.append(f"{_plural(full)} Full")
    if half > 0:
        parts.append(f"{_plural(half)} Half")
    if none > 0:
        parts.append(f"{_plural(none)} No Pay")

    if not parts:
        return "No Days"
    if len(parts) > 1:
        return ", ".join(parts)
    if full == total:
        return "Full Pay"
    if half == total:
        return "Half Pay"
    if none == total:
        return "No Pay"
    return parts[0]


def allocate_record_payments(
    records: Sequence[SicknessRecord],
    summary: Optional[SicknessEntitlementSummary],
) -> list[RecordPayment]:
    """Split each record into full/half/no-pay days, oldest record first.

    Records outside the summary's rolling period are historical and unpaid.
    Results come back in the same order as ``records``.
    """
    if summary is None:
        return [
            RecordPayment(
                record_id=r.record_id,
                full_pay_days=0,
                half_pay_days=0,
                no_pay_days=r.total_days,
                is_historical=False,
                payment_description="Unknown",
            )
            for r in records
        ]

    period = DateRange(summary.rolling_period_start, summary.rolling_period_end)
    total_full = summary.full_pay_used_rolling_12_months + summary.full_pay_remaining
    total_half = summary.half_pay_used_rolling_12_months + summary.half_pay_remaining
    used_full = 0.0
    used_half = 0.0

    by_id: dict[str, RecordPayment] = {}
    for r in sorted(records, key=lambda x: x.start_date):
        if not period.overlaps(r.start_date, r.effective_end):
            by_id[r.record_id] = RecordPayment(
                record_id=r.record_id,
                full_pay_days=0,
                half_pay_days=0,
                no_pay_days=r.total_days,
                is_historical=True,
                payment_description="Historical",
            )
            continue

        remaining = r.total_days
        full = min(remaining, max(0, total_full - used_full)) if remaining > 0 else 0
        remaining -= full
        used_full += full

        half = min(remaining, max(0, total_half - used_half)) if remaining > 0 else 0
        remaining -= half
        used_half += half

        by_id[r.record_id] = RecordPayment(
            record_id=r.record_id,
            full_pay_days=full,
            half_pay_days=half,
            no_pay_days=remaining,
            is_historical=False,
            payment_description=describe_payment(full, half, remaining, r.total_days),
        )

    return [by_id[r.record_id] for r in records]
