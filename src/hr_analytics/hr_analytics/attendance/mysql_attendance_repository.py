from __future__ import annotations

from datetime import date
from typing import Sequence

from ..core.constants import DEFAULT_PAGE_SIZE
from ..database.connection import DatabaseConnection
from ..database.mysql_base import chunked, db_cursor, fetchall, normalize_mysql_date, placeholders
from .model import AttendanceObservation
from .repository import AttendanceRepository

_FILTER_COLUMNS = {"biometric_status", "status"}


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection, *, page_size: int = DEFAULT_PAGE_SIZE):
        self._conn_factory = conn_factory
        self._page_size = int(page_size)

    def list_by_biometric_status(
        self,
        *,
        employee_codes: Sequence[str],
        start_date: date,
        end_date: date,
        biometric_status: str,
    ) -> Sequence[AttendanceObservation]:
        return self._list("biometric_status", biometric_status, employee_codes, start_date, end_date)

    def list_by_status(
        self,
        *,
        employee_codes: Sequence[str],
        start_date: date,
        end_date: date,
        status: str,
    ) -> Sequence[AttendanceObservation]:
        return self._list("status", status, employee_codes, start_date, end_date)

    def _list(
        self,
        column: str,
        value: str,
        employee_codes: Sequence[str],
        start_date: date,
        end_date: date,
    ) -> list[AttendanceObservation]:
        if column not in _FILTER_COLUMNS:
            raise ValueError(f"Unsupported filter column: {column}")

        out: list[AttendanceObservation] = []
        for codes in chunked(list(employee_codes)):
            out.extend(self._list_chunk(column, value, codes, start_date, end_date))
        return out

    def _list_chunk(
        self,
        column: str,
        value: str,
        codes: Sequence[str],
        start_date: date,
        end_date: date,
    ) -> list[AttendanceObservation]:
        rows: list[AttendanceObservation] = []
        page = 0
        while True:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"""
                    SELECT attendance_id, employee_code, attendance_date, biometric_status, status
                    FROM attendance_records
                    WHERE employee_code IN ({placeholders(len(codes))})
                      AND {column}=%s
                      AND attendance_date BETWEEN %s AND %s
                    ORDER BY attendance_date ASC, attendance_id ASC
                    LIMIT %s OFFSET %s
                    """,
                    tuple(codes) + (value, start_date, end_date, self._page_size, page * self._page_size),
                )
                data = fetchall(cur)

            rows.extend(
                AttendanceObservation(
                    attendance_id=int(r["attendance_id"]),
                    employee_code=str(r["employee_code"]),
                    attendance_date=normalize_mysql_date(r["attendance_date"]),
                    biometric_status=r["biometric_status"],
                    status=r["status"],
                )
                for r in data
            )
            if len(data) < self._page_size:
                return rows
            page += 1

    def update_status(self, *, attendance_id: int, status: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE attendance_records SET status=%s WHERE attendance_id=%s",
                (status, int(attendance_id)),
            )
            return cur.rowcount > 0
