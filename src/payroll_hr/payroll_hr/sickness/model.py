from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Optional, Union


@dataclass(frozen=True)
class SicknessRecord:
    """Domain entity: one continuous sickness absence (``end_date`` None = ongoing)."""

    record_id: str
    employee_id: str
    start_date: date
    end_date: Optional[date]
    total_days: float
    reason: Optional[str] = None
    is_certified: bool = False
    notes: Optional[str] = None

    @property
    def effective_end(self) -> date:
        return self.end_date or self.start_date

    def as_dict(self) -> dict:
        return {
            "id": self.record_id,
            "employee_id": self.employee_id,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat() if self.end_date else None,
            "total_days": self.total_days,
            "reason": self.reason,
            "is_certified": self.is_certified,
            "notes": self.notes,
        }


@dataclass(frozen=True)
class SicknessSpan:
    """A record's date range with its qualifying-day count."""

    start: date
    end: date
    qualifying_days: int


@dataclass(frozen=True)
class Chain:
    """Linked Periods of Incapacity for Work, sorted by start date."""

    spans: tuple[SicknessSpan, ...]

    @property
    def start(self) -> date:
        return self.spans[0].start

    @property
    def end(self) -> date:
        return self.spans[-1].end


@dataclass(frozen=True)
class SspUsage:
    qualifying_days_per_week: int
    ssp_entitled_days: int
    ssp_used_current_year: int
    ssp_used_rolling_12: int

    def as_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class EntitlementUsage:
    """Read-model: occupational sick pay allowances for one entitlement period."""

    employee_id: str
    entitlement_period_start: date
    entitlement_period_end: date
    full_pay_entitled_days: float = 0
    half_pay_entitled_days: float = 0
    opening_balance_full_pay: float = 0
    opening_balance_half_pay: float = 0
    opening_balance_date: Optional[date] = None
    opening_balance_notes: Optional[str] = None
    current_service_months: int = 0
    current_rule_id: Optional[str] = None
    sickness_scheme_id: Optional[str] = None


@dataclass(frozen=True)
class OspAllocation:
    full_pay_used: float
    half_pay_used: float
    full_pay_remaining: float
    half_pay_remaining: float


@dataclass(frozen=True)
class SicknessEntitlementSummary:
    full_pay_remaining: float
    half_pay_remaining: float
    full_pay_used_rolling_12_months: float
    half_pay_used_rolling_12_months: float
    total_used_rolling_12_months: float
    opening_balance_full_pay: float
    opening_balance_half_pay: float
    current_tier: str
    service_months: int
    rolling_period_start: date
    rolling_period_end: date
    ssp_entitled_days: int
    ssp_used_rolling_12_months: int
    ssp_remaining_days: int

    def as_dict(self) -> dict:
        out = asdict(self)
        out["rolling_period_start"] = self.rolling_period_start.isoformat()
        out["rolling_period_end"] = self.rolling_period_end.isoformat()
        return out


@dataclass(frozen=True)
class Ok:
    summary: SicknessEntitlementSummary
    available: bool = field(default=True, init=False)


@dataclass(frozen=True)
class Unavailable:
    reason: str
    available: bool = field(default=False, init=False)


SummaryResult = Union[Ok, Unavailable]


@dataclass(frozen=True)
class RecordPayment:
    record_id: str
    full_pay_days: float
    half_pay_days: float
    no_pay_days: float
    is_historical: bool
    payment_description: str
