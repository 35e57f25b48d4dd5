from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import chunked, db_cursor, fetchall, normalize_mysql_date, placeholders
from .model import CoverageRecord, LeaveRecord, RegularizationRecord
from .repository import CoverageRepository


class MySQLCoverageRepository(CoverageRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select(self, sql: str, base_params: tuple, employee_codes: Optional[Sequence[str]], code_column: str):
        if employee_codes is None:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(sql.format(codes_clause=""), base_params)
                return fetchall(cur)

        rows: list[dict] = []
        for codes in chunked(list(employee_codes)):
            clause = f"AND {code_column} IN ({placeholders(len(codes))})"
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(sql.format(codes_clause=clause), base_params + tuple(codes))
                rows.extend(fetchall(cur))
        return rows

    def list_leave_records(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_codes: Optional[Sequence[str]] = None,
    ) -> Sequence[LeaveRecord]:
        if employee_codes is not None and not employee_codes:
            return []

        rows = self._select(
            """
            SELECT leave_id, employee_code, leave_type, from_date, to_date, approval_status
            FROM leave_records
            WHERE to_date >= %s AND from_date <= %s
            {codes_clause}
            ORDER BY from_date ASC, leave_id ASC
            """,
            (start_date, end_date),
            employee_codes,
            "employee_code",
        )
        return [
            LeaveRecord(
                leave_id=int(r["leave_id"]),
                employee_code=str(r["employee_code"]),
                leave_type=r.get("leave_type") or "",
                from_date=normalize_mysql_date(r["from_date"]),
                to_date=normalize_mysql_date(r["to_date"]),
                approval_status=r.get("approval_status") or "",
            )
            for r in rows
        ]

    def list_regularizations(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_codes: Optional[Sequence[str]] = None,
    ) -> Sequence[RegularizationRecord]:
        if employee_codes is not None and not employee_codes:
            return []

        rows = self._select(
            """
            SELECT regularization_id, employee_code, attendance_day, reason, approval_status
            FROM attendance_regularization
            WHERE attendance_day BETWEEN %s AND %s
            {codes_clause}
            ORDER BY attendance_day ASC, regularization_id ASC
            """,
            (start_date, end_date),
            employee_codes,
            "employee_code",
        )
        return [
            RegularizationRecord(
                regularization_id=int(r["regularization_id"]),
                employee_code=str(r["employee_code"]),
                attendance_day=normalize_mysql_date(r["attendance_day"]),
                reason=r.get("reason"),
                approval_status=r.get("approval_status") or "",
            )
            for r in rows
        ]

    def replace_cached_coverage(
        self,
        *,
        start_date: date,
        end_date: date,
        coverages: Sequence[CoverageRecord],
    ) -> int:
        # Single transaction: readers never see a half-built range.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM attendance_coverage WHERE coverage_date BETWEEN %s AND %s",
                (start_date, end_date),
            )
            if coverages:
                cur.executemany(
                    """
                    INSERT INTO attendance_coverage(
                        employee_code, coverage_date, coverage_type, coverage_reason,
                        approval_status, source_table, source_id
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s)
                    """,
                    [
                        (
                            c.employee_code,
                            c.coverage_date,
                            c.coverage_type.value,
                            c.label,
                            c.approval_status,
                            c.source_table,
                            int(c.source_id),
                        )
                        for c in coverages
                    ],
                )
            return len(coverages)
