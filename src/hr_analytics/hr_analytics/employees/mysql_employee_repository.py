from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..core.enums import LifecycleStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_date, placeholders
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)

_COLUMNS = """
    employee_id, employee_code, name, location, status,
    date_of_joining, date_of_exit, level, pod, gender
"""


def _to_employee(r: dict) -> Employee:
    status = LifecycleStatus.parse(r.get("status"))
    if status is None:
        # Imported free text; keep the row usable, lifecycle rules just skip it.
        logger.warning("Employee %s has unrecognised status %r", r.get("employee_code"), r.get("status"))
    return Employee(
        employee_id=int(r["employee_id"]),
        employee_code=str(r["employee_code"]),
        name=r["name"],
        location=r["location"] or "",
        status=status,
        date_of_joining=normalize_mysql_date(r.get("date_of_joining")),
        date_of_exit=normalize_mysql_date(r.get("date_of_exit")),
        level=r.get("level"),
        pod=r.get("pod"),
        gender=r.get("gender"),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (int(employee_id),))
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def get_by_code(self, employee_code: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_code=%s", (employee_code,))
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees ORDER BY name")
            return [_to_employee(r) for r in fetchall(cur)]

    def list_by_locations(self, locations: Sequence[str]) -> Sequence[Employee]:
        if not locations:
            return self.list_all()

        lowered = [loc.strip().lower() for loc in locations]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM employees
                WHERE LOWER(TRIM(location)) IN ({placeholders(len(lowered))})
                ORDER BY employee_code
                """,
                tuple(lowered),
            )
            return [_to_employee(r) for r in fetchall(cur)]

    def list_notice_period_due(self, as_of: date) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM employees
                WHERE status=%s AND date_of_exit IS NOT NULL AND date_of_exit <= %s
                ORDER BY employee_id
                """,
                (LifecycleStatus.SERVING_NOTICE.value, as_of),
            )
            return [_to_employee(r) for r in fetchall(cur)]

    def list_pending_onboard_due(self, as_of: date) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM employees
                WHERE status=%s AND date_of_joining IS NOT NULL AND date_of_joining <= %s
                ORDER BY employee_id
                """,
                (LifecycleStatus.PENDING_ONBOARD.value, as_of),
            )
            return [_to_employee(r) for r in fetchall(cur)]

    def set_status(self, employee_id: int, status: LifecycleStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE employees SET status=%s WHERE employee_id=%s",
                (status.value, int(employee_id)),
            )
            return cur.rowcount > 0

    def update_status(
        self,
        *,
        employee_id: int,
        status: LifecycleStatus,
        date_of_exit: Optional[date],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE employees SET status=%s, date_of_exit=%s WHERE employee_id=%s",
                (status.value, date_of_exit, int(employee_id)),
            )
            return cur.rowcount > 0
