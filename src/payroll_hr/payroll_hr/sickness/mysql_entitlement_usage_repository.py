from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, normalize_mysql_date
from .model import EntitlementUsage
from .repository import EntitlementUsageRepository

_COLUMNS = """
    employee_id, entitlement_period_start, entitlement_period_end,
    full_pay_entitled_days, half_pay_entitled_days,
    opening_balance_full_pay, opening_balance_half_pay,
    opening_balance_date, opening_balance_notes,
    current_service_months, current_rule_id, sickness_scheme_id
"""


def _to_usage(r: Dict[str, Any]) -> EntitlementUsage:
    return EntitlementUsage(
        employee_id=str(r["employee_id"]),
        entitlement_period_start=normalize_mysql_date(r["entitlement_period_start"]),
        entitlement_period_end=normalize_mysql_date(r["entitlement_period_end"]),
        full_pay_entitled_days=float(r.get("full_pay_entitled_days") or 0),
        half_pay_entitled_days=float(r.get("half_pay_entitled_days") or 0),
        opening_balance_full_pay=float(r.get("opening_balance_full_pay") or 0),
        opening_balance_half_pay=float(r.get("opening_balance_half_pay") or 0),
        opening_balance_date=normalize_mysql_date(r.get("opening_balance_date")),
        opening_balance_notes=r.get("opening_balance_notes"),
        current_service_months=int(r.get("current_service_months") or 0),
        current_rule_id=r.get("current_rule_id"),
        sickness_scheme_id=r.get("sickness_scheme_id"),
    )


class MySQLEntitlementUsageRepository(EntitlementUsageRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select(self, cur, employee_id: str, period_start: date) -> Optional[EntitlementUsage]:
        cur.execute(
            f"""
            SELECT {_COLUMNS}
            FROM employee_sickness_entitlement_usage
            WHERE employee_id=%s AND entitlement_period_start=%s
            """,
            (employee_id, period_start),
        )
        r = fetchone(cur)
        return _to_usage(r) if r else None

    def get_for_employee(self, employee_id: str, *, period_start: date) -> Optional[EntitlementUsage]:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._select(cur, employee_id, period_start)

    def upsert(self, usage: EntitlementUsage) -> EntitlementUsage:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employee_sickness_entitlement_usage(
                    employee_id, entitlement_period_start, entitlement_period_end,
                    full_pay_entitled_days, half_pay_entitled_days,
                    opening_balance_full_pay, opening_balance_half_pay,
                    opening_balance_date, opening_balance_notes,
                    current_service_months, current_rule_id, sickness_scheme_id
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    entitlement_period_end=VALUES(entitlement_period_end),
                    full_pay_entitled_days=VALUES(full_pay_entitled_days),
                    half_pay_entitled_days=VALUES(half_pay_entitled_days),
                    opening_balance_full_pay=VALUES(opening_balance_full_pay),
                    opening_balance_half_pay=VALUES(opening_balance_half_pay),
                    opening_balance_date=VALUES(opening_balance_date),
                    opening_balance_notes=VALUES(opening_balance_notes),
                    current_service_months=VALUES(current_service_months),
                    current_rule_id=VALUES(current_rule_id),
                    sickness_scheme_id=VALUES(sickness_scheme_id)
                """,
                (
                    usage.employee_id,
                    usage.entitlement_period_start,
                    usage.entitlement_period_end,
                    usage.full_pay_entitled_days,
                    usage.half_pay_entitled_days,
                    usage.opening_balance_full_pay,
                    usage.opening_balance_half_pay,
                    usage.opening_balance_date,
                    usage.opening_balance_notes,
                    usage.current_service_months,
                    usage.current_rule_id,
                    usage.sickness_scheme_id,
                ),
            )
        return usage

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE employee_sickness_entitlement_usage
                SET opening_balance_full_pay=%s, opening_balance_half_pay=%s,
                    opening_balance_date=%s, opening_balance_notes=%s
                WHERE employee_id=%s AND entitlement_period_start=%s
                """,
                (full_pay_days, half_pay_days, reference_date, notes, employee_id, period_start),
            )
            return self._select(cur, employee_id, period_start)
