from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterable, Optional

from ..common.datetime_utils import DateLike
from ..core.constants import IMPORT_VALID_TOLERANCE, IMPORT_WARNING_TOLERANCE
from ..core.enums import ImportRowStatus
from ..work_patterns.model import WorkDay
from ..work_patterns.resolver import default_work_pattern
from .working_days import calculate_working_days_for_record


@dataclass(frozen=True)
class ImportDayCheck:
    supplied_days: float
    calculated_days: int
    difference: float
    status: ImportRowStatus
    corrected_days: float

    def as_dict(self) -> dict:
        return {
            "supplied_days": self.supplied_days,
            "calculated_days": self.calculated_days,
            "difference": round(self.difference, 1),
            "status": self.status.value,
            "corrected_days": self.corrected_days,
        }


def classify_difference(difference: float) -> ImportRowStatus:
    if difference <= IMPORT_VALID_TOLERANCE:
        return ImportRowStatus.VALID
    if difference <= IMPORT_WARNING_TOLERANCE:
        return ImportRowStatus.WARNING
    return ImportRowStatus.ERROR


def validate_import_row(
    supplied_days: Optional[float],
    start: Optional[DateLike],
    end: Optional[DateLike],
    pattern: Optional[Iterable[WorkDay]],
) -> ImportDayCheck:
    """Compare an imported day count with the pattern-derived one.

    Rows without a supplied count take the calculated value. Warnings are
    auto-corrected to the calculated count; errors keep the supplied value and
    must be recalculated by the caller.
    """
    pattern = list(pattern or []) or default_work_pattern()
    calculated = calculate_working_days_for_record(start, end, pattern)
    supplied = float(calculated if supplied_days is None else supplied_days)

    difference = abs(supplied - calculated)
    status = classify_difference(difference)
    corrected = float(calculated) if status == ImportRowStatus.WARNING else supplied

    return ImportDayCheck(
        supplied_days=supplied,
        calculated_days=calculated,
        difference=difference,
        status=status,
        corrected_days=corrected,
    )


def summarize_import(checks: Iterable[ImportDayCheck]) -> dict[str, int]:
    counts = Counter(c.status for c in checks)
    out = {s.value: counts.get(s, 0) for s in ImportRowStatus}
    out["total"] = sum(counts.values())
    return out
