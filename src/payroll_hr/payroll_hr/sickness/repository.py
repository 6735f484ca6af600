from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import EntitlementUsage, SicknessRecord


class SicknessRecordRepository(Protocol):
    def list_for_employee(self, employee_id: str) -> Sequence[SicknessRecord]:
        """All records for the employee, in no guaranteed order."""

        raise NotImplementedError

    def get_by_id(self, record_id: str) -> Optional[SicknessRecord]:
        raise NotImplementedError

    def create(
        self,
        *,
        employee_id: str,
        start_date: date,
        end_date: Optional[date],
        total_days: float,
        reason: Optional[str] = None,
        is_certified: bool = False,
        notes: Optional[str] = None,
    ) -> SicknessRecord:
        raise NotImplementedError

    def update(
        self,
        *,
        record_id: str,
        start_date: date,
        end_date: Optional[date],
        total_days: float,
        reason: Optional[str] = None,
        is_certified: bool = False,
        notes: Optional[str] = None,
    ) -> Optional[SicknessRecord]:
        raise NotImplementedError

    def delete(self, record_id: str) -> bool:
        raise NotImplementedError


class EntitlementUsageRepository(Protocol):
    def get_for_employee(self, employee_id: str, *, period_start: date) -> Optional[EntitlementUsage]:
        """Usage row for the entitlement period starting on ``period_start``."""

        raise NotImplementedError

    def upsert(self, usage: EntitlementUsage) -> EntitlementUsage:
        raise NotImplementedError

    def set_opening_balance(
        self,
        *,
        employee_id: str,
        period_start: date,
        full_pay_days: float,
        half_pay_days: float,
        reference_date: Optional[date],
        notes: Optional[str] = None,
    ) -> Optional[EntitlementUsage]:
        raise NotImplementedError
