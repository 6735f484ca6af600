from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Optional


class Weekday(str, Enum):
    """Day of the week as stored in work patterns.

    Declaration order matches ``date.weekday()`` (Monday == 0).
    """

    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"

    @property
    def position(self) -> int:
        return _WEEKDAY_ORDER.index(self)

    @classmethod
    def from_date(cls, value: date) -> "Weekday":
        return _WEEKDAY_ORDER[value.weekday()]

    @classmethod
    def parse(cls, value: object) -> Optional["Weekday"]:
        """Lenient lookup by name; returns None for anything unrecognised."""
        if isinstance(value, Weekday):
            return value
        if not isinstance(value, str):
            return None
        return _WEEKDAY_BY_NAME.get(value.strip().lower())


_WEEKDAY_ORDER: tuple[Weekday, ...] = tuple(Weekday)
_WEEKDAY_BY_NAME = {d.value.lower(): d for d in Weekday}


class EntitlementUnit(str, Enum):
    """Units used by sickness scheme eligibility rules."""

    DAYS = "days"
    WEEKS = "weeks"
    MONTHS = "months"
    YEARS = "years"


class ImportRowStatus(str, Enum):
    """Outcome of comparing an imported day count with the work pattern."""

    VALID = "valid"
    WARNING = "warning"
    ERROR = "error"


class ReportSortKey(str, Enum):
    NAME = "name"
    USAGE = "usage"
    REMAINING = "remaining"
    SERVICE = "service"
