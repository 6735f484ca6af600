from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterator, Optional, Union

DateLike = Union[date, datetime, str]


@dataclass(frozen=True)
class DateRange:
    """Inclusive calendar range ``[start, end]``."""

    start: date
    end: date

    def contains(self, value: date) -> bool:
        return self.start <= value <= self.end

    def overlaps(self, start: date, end: date) -> bool:
        return start <= self.end and end >= self.start

    def as_dict(self) -> dict:
        return {"start": self.start.isoformat(), "end": self.end.isoformat()}


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def to_date(value: DateLike) -> date:
    """Normalize to a plain date (midnight granularity).

    Accepts ``date``, ``datetime`` and ISO strings, with or without a time part.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return parse_iso_date(value.strip()[:10])
    raise TypeError(f"Unsupported date value: {value!r}")


def to_optional_date(value: Optional[DateLike]) -> Optional[date]:
    if value is None or value == "":
        return None
    return to_date(value)


def today_local() -> date:
    """Current local date.

    Note: Wrapped so tests can patch it easily.
    """
    return datetime.now().date()


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every date from start to end inclusive (nothing if start > end)."""
    current = start
    one_day = timedelta(days=1)
    while current <= end:
        yield current
        current += one_day


def days_between(earlier: date, later: date) -> int:
    """Whole calendar days from ``earlier`` to ``later`` (negative if reversed)."""
    return (later - earlier).days


def add_years(value: date, years: int) -> date:
    """Shift by whole years; 29 February rolls forward to 1 March in a non-leap year."""
    try:
        return value.replace(year=value.year + years)
    except ValueError:
        return date(value.year + years, 3, 1)


def rolling_12_month_period(reference: Optional[DateLike] = None) -> DateRange:
    """Rolling window ending on ``reference`` and starting one year minus one day earlier."""
    end = to_date(reference) if reference is not None else today_local()
    start = add_years(end, -1) + timedelta(days=1)
    return DateRange(start=start, end=end)


def calendar_year_period(reference: Optional[DateLike] = None) -> DateRange:
    ref = to_date(reference) if reference is not None else today_local()
    return DateRange(start=date(ref.year, 1, 1), end=date(ref.year, 12, 31))
