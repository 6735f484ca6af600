from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee.

    Note: Plain data object (no database access code).
    """

    employee_id: str
    first_name: str
    last_name: str
    payroll_id: Optional[str] = None
    department: Optional[str] = None
    hire_date: Optional[date] = None
    is_active: bool = True

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def as_dict(self) -> dict:
        return {
            "id": self.employee_id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "payroll_id": self.payroll_id,
            "department": self.department,
            "hire_date": self.hire_date.isoformat() if self.hire_date else None,
        }
