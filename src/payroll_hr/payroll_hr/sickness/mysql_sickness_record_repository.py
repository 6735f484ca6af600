from __future__ import annotations

import uuid
from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_date
from .model import SicknessRecord
from .repository import SicknessRecordRepository

_COLUMNS = "id, employee_id, start_date, end_date, total_days, reason, is_certified, notes"


def _to_record(r: Dict[str, Any]) -> SicknessRecord:
    return SicknessRecord(
        record_id=str(r["id"]),
        employee_id=str(r["employee_id"]),
        start_date=normalize_mysql_date(r["start_date"]),
        end_date=normalize_mysql_date(r.get("end_date")),
        total_days=float(r.get("total_days") or 0),
        reason=r.get("reason"),
        is_certified=bool(r.get("is_certified")),
        notes=r.get("notes"),
    )


class MySQLSicknessRecordRepository(SicknessRecordRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_employee(self, employee_id: str) -> Sequence[SicknessRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM employee_sickness_records
                WHERE employee_id=%s
                ORDER BY start_date DESC
                """,
                (employee_id,),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def get_by_id(self, record_id: str) -> Optional[SicknessRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employee_sickness_records WHERE id=%s", (record_id,))
            r = fetchone(cur)
            return _to_record(r) if r else None

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
        record_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employee_sickness_records
                    (id, employee_id, start_date, end_date, total_days, reason, is_certified, notes)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (record_id, employee_id, start_date, end_date, total_days, reason, int(is_certified), notes),
            )

        return SicknessRecord(
            record_id=record_id,
            employee_id=employee_id,
            start_date=start_date,
            end_date=end_date,
            total_days=float(total_days),
            reason=reason,
            is_certified=is_certified,
            notes=notes,
        )

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE employee_sickness_records
                SET start_date=%s, end_date=%s, total_days=%s, reason=%s, is_certified=%s, notes=%s
                WHERE id=%s
                """,
                (start_date, end_date, total_days, reason, int(is_certified), notes, record_id),
            )
            # rowcount is 0 when nothing changed, so re-read instead of trusting it.
            cur.execute(f"SELECT {_COLUMNS} FROM employee_sickness_records WHERE id=%s", (record_id,))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def delete(self, record_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM employee_sickness_records WHERE id=%s", (record_id,))
            return cur.rowcount > 0
