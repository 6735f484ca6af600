from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Any, Mapping, Optional

from ..core.enums import Weekday


@dataclass(frozen=True)
class WorkDay:
    """Domain entity: one weekday of an employee's work pattern."""

    day: Weekday
    is_working: bool
    start_time: Optional[time] = None
    end_time: Optional[time] = None

    def as_dict(self) -> dict:
        return {
            "day": self.day.value if isinstance(self.day, Weekday) else str(self.day),
            "is_working": self.is_working,
            "start_time": self.start_time.strftime("%H:%M") if self.start_time else None,
            "end_time": self.end_time.strftime("%H:%M") if self.end_time else None,
        }


@dataclass(frozen=True)
class QualifyingPattern:
    """Resolved work pattern: which weekdays are qualifying days.

    ``table`` has exactly seven slots indexed by ``date.weekday()``.
    """

    table: tuple[bool, bool, bool, bool, bool, bool, bool]
    days_per_week: int

    @property
    def qualifying_set(self) -> frozenset[Weekday]:
        return frozenset(d for d in Weekday if self.table[d.position])

    @property
    def is_empty(self) -> bool:
        return not any(self.table)

    def is_qualifying(self, value: date) -> bool:
        return self.table[value.weekday()]


def work_day_from_row(row: Mapping[str, Any]) -> Optional[WorkDay]:
    """Build a WorkDay from a loosely-typed row; None when the day name is unknown."""
    day = Weekday.parse(row.get("day") or row.get("day_of_week"))
    if day is None:
        return None
    is_working = row.get("is_working", row.get("isWorking", False))
    return WorkDay(
        day=day,
        is_working=bool(is_working),
        start_time=row.get("start_time"),
        end_time=row.get("end_time"),
    )
