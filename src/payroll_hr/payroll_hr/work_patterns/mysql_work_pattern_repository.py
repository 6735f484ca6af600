from __future__ import annotations

import logging
from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, normalize_mysql_time
from .model import WorkDay, work_day_from_row
from .repository import WorkPatternRepository

logger = logging.getLogger(__name__)


class MySQLWorkPatternRepository(WorkPatternRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def fetch_work_patterns(self, employee_id: str) -> Sequence[WorkDay]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT day, is_working, start_time, end_time
                FROM work_patterns
                WHERE employee_id=%s
                """,
                (employee_id,),
            )
            rows = fetchall(cur)

        out: list[WorkDay] = []
        for r in rows:
            day = work_day_from_row(
                {
                    "day": r.get("day"),
                    "is_working": r.get("is_working"),
                    "start_time": normalize_mysql_time(r.get("start_time")),
                    "end_time": normalize_mysql_time(r.get("end_time")),
                }
            )
            if day is None:
                logger.debug("Ignoring work pattern row with unknown day %r for %s", r.get("day"), employee_id)
                continue
            out.append(day)
        return out

    def replace_pattern(self, employee_id: str, days: Sequence[WorkDay]) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM work_patterns WHERE employee_id=%s", (employee_id,))
            for d in days:
                cur.execute(
                    """
                    INSERT INTO work_patterns(employee_id, day, is_working, start_time, end_time)
                    VALUES(%s,%s,%s,%s,%s)
                    """,
                    (employee_id, d.day.value, int(d.is_working), d.start_time, d.end_time),
                )
