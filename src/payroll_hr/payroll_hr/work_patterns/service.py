from __future__ import annotations

import logging
from datetime import datetime, time
from typing import Any, Iterable, Mapping, Optional

from ..core.enums import Weekday
from ..core.exceptions import DataFetchError, ValidationError
from .model import QualifyingPattern, WorkDay
from .repository import WorkPatternRepository
from .resolver import default_work_pattern, resolve_qualifying_days

logger = logging.getLogger(__name__)


class WorkPatternService:
    def __init__(self, patterns: WorkPatternRepository):
        self._patterns = patterns

    def get_pattern(self, employee_id: str) -> list[WorkDay]:
        """Stored pattern, or an empty list when the store has none or fails."""
        try:
            return list(self._patterns.fetch_work_patterns(employee_id) or [])
        except DataFetchError:
            logger.exception("Failed to fetch work pattern for employee %s", employee_id)
            return []

    def resolve_for_employee(self, employee_id: str) -> QualifyingPattern:
        """Qualifying days for an employee; a Monday-Friday week when no pattern exists."""
        pattern = self.get_pattern(employee_id)
        if not pattern:
            logger.warning("No work pattern for employee %s, assuming a standard five-day week", employee_id)
            pattern = default_work_pattern()
        return resolve_qualifying_days(pattern)

    def replace_pattern(self, employee_id: str, days: Iterable[Mapping[str, Any] | WorkDay]) -> list[WorkDay]:
        parsed = [self._parse_day(d) for d in days]

        seen: set[Weekday] = set()
        for d in parsed:
            if d.day in seen:
                raise ValidationError(f"{d.day.value} appears more than once in the work pattern")
            seen.add(d.day)
            if d.start_time and d.end_time and d.start_time >= d.end_time:
                raise ValidationError(f"{d.day.value}: start time must be before end time")

        self._patterns.replace_pattern(employee_id, parsed)
        return parsed

    @staticmethod
    def _parse_time(value: Any) -> Optional[time]:
        if value is None or isinstance(value, time):
            return value
        v = str(value).strip()
        if not v:
            return None
        for fmt in ("%H:%M", "%H:%M:%S"):
            try:
                return datetime.strptime(v, fmt).time()
            except ValueError:
                continue
        raise ValidationError(f"Invalid time {v!r} (expected HH:MM)")

    def _parse_day(self, value: Mapping[str, Any] | WorkDay) -> WorkDay:
        if isinstance(value, WorkDay):
            return value
        if not isinstance(value, Mapping):
            raise ValidationError("Each work pattern day must be an object")

        day = Weekday.parse(value.get("day"))
        if day is None:
            raise ValidationError(f"Unknown weekday {value.get('day')!r}")
        return WorkDay(
            day=day,
            is_working=bool(value.get("is_working", False)),
            start_time=self._parse_time(value.get("start_time")),
            end_time=self._parse_time(value.get("end_time")),
        )

