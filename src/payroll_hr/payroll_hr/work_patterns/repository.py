from __future__ import annotations

from typing import Protocol, Sequence

from .model import WorkDay


class WorkPatternRepository(Protocol):
    """Store of per-employee weekly work patterns."""

    def fetch_work_patterns(self, employee_id: str) -> Sequence[WorkDay]:
        """Return the stored pattern; an empty sequence when none exists."""

        raise NotImplementedError

    def replace_pattern(self, employee_id: str, days: Sequence[WorkDay]) -> None:
        """Delete every stored day for the employee, then insert ``days``."""

        raise NotImplementedError
