from __future__ import annotations

from typing import Iterable, Optional

from ..common.datetime_utils import DateLike, iter_days, to_date
from ..work_patterns.model import QualifyingPattern, WorkDay
from ..work_patterns.resolver import resolve_qualifying_days


def count_qualifying_days_between(start: DateLike, end: DateLike, qualifying: QualifyingPattern) -> int:
    """Qualifying days in ``[start, end]`` inclusive; 0 when start is after end."""
    if qualifying.is_empty:
        return 0
    return sum(1 for d in iter_days(to_date(start), to_date(end)) if qualifying.is_qualifying(d))


def calculate_working_days_for_record(
    start: Optional[DateLike],
    end: Optional[DateLike],
    pattern: Optional[Iterable[WorkDay]],
) -> int:
    """Working days a sickness record should carry under ``pattern``.

    An ongoing absence (no end date) counts its start day only.
    """
    if not start:
        return 0

    qualifying = resolve_qualifying_days(pattern)
    start_d = to_date(start)
    if not end:
        return 1 if qualifying.is_qualifying(start_d) else 0
    return count_qualifying_days_between(start_d, end, qualifying)
