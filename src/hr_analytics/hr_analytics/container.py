from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from .activity.mysql_activity_repository import MySQLActivityLogRepository
from .activity.service import ActivityLogger
from .analytics.service import AnalyticsService
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .core.constants import DEFAULT_PAGE_SIZE
from .coverage.mysql_coverage_repository import MySQLCoverageRepository
from .coverage.service import CoverageService
from .database.connection import DBConfig, DatabaseConnection
from .employees.lifecycle import StatusLifecycleJob
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.service import EmployeeService
from .reconciliation.eligibility import EligibilityPolicy
from .reconciliation.service import ReconciliationEngine


@dataclass(frozen=True)
class Container:
    employee_service: EmployeeService
    lifecycle_job: StatusLifecycleJob
    coverage_service: CoverageService
    reconciliation_engine: ReconciliationEngine
    analytics_service: AnalyticsService


def build_container(
    *,
    db_config: dict,
    eligible_locations: Optional[Sequence[str]] = None,
    max_span_days: Optional[int] = None,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    employees_repo = MySQLEmployeeRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn, page_size=page_size)
    coverage_repo = MySQLCoverageRepository(conn)

    eligibility = EligibilityPolicy(eligible_locations)
    coverage_service = CoverageService(coverage_repo)

    return Container(
        employee_service=EmployeeService(employees_repo, activity=ActivityLogger(MySQLActivityLogRepository(conn))),
        lifecycle_job=StatusLifecycleJob(employees_repo),
        coverage_service=coverage_service,
        reconciliation_engine=ReconciliationEngine(
            employees_repo,
            attendance_repo,
            coverage_service,
            eligibility=eligibility,
            max_span_days=max_span_days,
        ),
        analytics_service=AnalyticsService(
            employees_repo,
            attendance_repo,
            coverage_repo,
            eligibility=eligibility,
        ),
    )


def build_container_from_settings(settings) -> Container:
    return build_container(
        db_config=dict(settings.DB_CONFIG),
        eligible_locations=getattr(settings, "ELIGIBLE_LOCATIONS", None),
        max_span_days=getattr(settings, "MAX_RECONCILIATION_SPAN_DAYS", None),
        page_size=int(getattr(settings, "RECONCILIATION_PAGE_SIZE", DEFAULT_PAGE_SIZE)),
    )
