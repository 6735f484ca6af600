from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from .core.constants import DEFAULT_REPORT_BATCH_SIZE
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .reports.service import SicknessReportService
from .sickness.mysql_entitlement_usage_repository import MySQLEntitlementUsageRepository
from .sickness.mysql_sickness_record_repository import MySQLSicknessRecordRepository
from .sickness.service import SicknessService
from .work_patterns.mysql_work_pattern_repository import MySQLWorkPatternRepository
from .work_patterns.service import WorkPatternService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    employees_repo: MySQLEmployeeRepository
    work_patterns_repo: MySQLWorkPatternRepository
    sickness_records_repo: MySQLSicknessRecordRepository
    entitlement_usage_repo: MySQLEntitlementUsageRepository

    work_pattern_service: WorkPatternService
    sickness_service: SicknessService
    sickness_report_service: SicknessReportService


def build_container(*, db_config: Mapping[str, Any], report_batch_size: int = DEFAULT_REPORT_BATCH_SIZE) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    employees_repo = MySQLEmployeeRepository(conn)
    work_patterns_repo = MySQLWorkPatternRepository(conn)
    sickness_records_repo = MySQLSicknessRecordRepository(conn)
    entitlement_usage_repo = MySQLEntitlementUsageRepository(conn)

    work_pattern_service = WorkPatternService(work_patterns_repo)
    sickness_service = SicknessService(sickness_records_repo, entitlement_usage_repo, work_pattern_service)
    sickness_report_service = SicknessReportService(sickness_service, batch_size=report_batch_size)

    return Container(
        conn=conn,
        employees_repo=employees_repo,
        work_patterns_repo=work_patterns_repo,
        sickness_records_repo=sickness_records_repo,
        entitlement_usage_repo=entitlement_usage_repo,
        work_pattern_service=work_pattern_service,
        sickness_service=sickness_service,
        sickness_report_service=sickness_report_service,
    )
