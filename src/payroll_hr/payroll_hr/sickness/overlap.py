from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from .model import SicknessRecord


def ranges_overlap(start_a: date, end_a: date, start_b: date, end_b: date) -> bool:
    return start_a <= end_b and end_a >= start_b


def find_overlapping(
    records: Iterable[SicknessRecord],
    start: date,
    end: Optional[date] = None,
    *,
    exclude_id: Optional[str] = None,
) -> list[SicknessRecord]:
    """Existing records sharing at least one day with ``[start, end or start]``."""
    end = end or start
    return [
        r
        for r in records
        if r.record_id != exclude_id and ranges_overlap(start, end, r.start_date, r.effective_end)
    ]


def describe_overlaps(records: Iterable[SicknessRecord]) -> str:
    details = "; ".join(f"{r.start_date.isoformat()} to {r.effective_end.isoformat()}" for r in records)
    return f"Overlaps with existing record(s): {details}"


def find_duplicates(records: Iterable[SicknessRecord]) -> list[SicknessRecord]:
    """Every record that overlaps at least one other, in start-date order."""
    ordered = sorted(records, key=lambda r: r.start_date)
    flagged: dict[str, SicknessRecord] = {}
    for i, a in enumerate(ordered):
        for b in ordered[i + 1:]:
            if b.start_date > a.effective_end:
                break
            if ranges_overlap(a.start_date, a.effective_end, b.start_date, b.effective_end):
                flagged.setdefault(a.record_id, a)
                flagged.setdefault(b.record_id, b)
    return [r for r in ordered if r.record_id in flagged]
