from __future__ import annotations

from typing import Iterable, Optional

from ..core.constants import DEFAULT_DAYS_PER_WEEK
from ..core.enums import Weekday
from .model import QualifyingPattern, WorkDay

_STANDARD_WEEK = (
    Weekday.MONDAY,
    Weekday.TUESDAY,
    Weekday.WEDNESDAY,
    Weekday.THURSDAY,
    Weekday.FRIDAY,
)


def default_work_pattern() -> list[WorkDay]:
    """Monday to Friday working, weekend off."""
    return [WorkDay(day=d, is_working=d in _STANDARD_WEEK) for d in Weekday]


def calculate_working_days_per_week(pattern: Optional[Iterable[WorkDay]]) -> int:
    days = list(pattern or [])
    if not days:
        return DEFAULT_DAYS_PER_WEEK
    return sum(1 for d in days if d.is_working)


def resolve_qualifying_days(pattern: Optional[Iterable[WorkDay]]) -> QualifyingPattern:
    """Turn a (possibly empty or partial) work pattern into qualifying days.

    Days missing from the pattern, or with an unrecognised name, are non-working.
    An empty pattern still reports a five-day week so entitlements never drop to zero.
    """
    days = list(pattern or [])
    table = [False] * 7
    for d in days:
        weekday = Weekday.parse(d.day)
        if d.is_working and weekday is not None:
            table[weekday.position] = True

    return QualifyingPattern(
        table=tuple(table),
        days_per_week=calculate_working_days_per_week(days),
    )
