from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_date
from .model import Employee
from .repository import EmployeeRepository


def _to_employee(row: Dict[str, Any]) -> Employee:
    return Employee(
        employee_id=str(row["id"]),
        first_name=row.get("first_name") or "",
        last_name=row.get("last_name") or "",
        payroll_id=row.get("payroll_id"),
        department=row.get("department"),
        hire_date=normalize_mysql_date(row.get("hire_date")),
        is_active=bool(row.get("is_active", True)),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, first_name, last_name, payroll_id, department, hire_date, is_active
                FROM employees
                WHERE id=%s
                """,
                (employee_id,),
            )
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def list_active(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, first_name, last_name, payroll_id, department, hire_date, is_active
                FROM employees
                WHERE is_active=1
                ORDER BY last_name ASC, first_name ASC
                """
            )
            return [_to_employee(r) for r in fetchall(cur)]
