from __future__ import annotations

import logging
from collections import Counter, defaultdict
from datetime import date
from typing import Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import iter_days, start_of_month
from ..common.validators import require_date_range
from ..core.constants import ABSENT_STATUS, DEFAULT_TOP_REQUESTERS
from ..core.exceptions import ValidationError
from ..coverage.expansion import (
    build_coverage_index,
    expand_coverage,
    expand_leave,
    leave_counts_as_coverage,
    regularization_counts_as_coverage,
)
from ..coverage.repository import CoverageRepository
from ..coverage.resolver import CoverageResolver
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..reconciliation.eligibility import EligibilityPolicy
from . import headcount

logger = logging.getLogger(__name__)


def _brief(e: Employee) -> dict:
    return {
        "employeeId": e.employee_id,
        "employeeCode": e.employee_code,
        "name": e.name,
        "pod": e.pod,
        "level": e.level,
    }


class AnalyticsService:
    """Read-only dashboard statistics.

    Coverage rules are shared with the reconciliation engine (same expansion
    and exclusion functions), and "unapproved absence" means a row the engine
    left as Absent.
    """

    def __init__(
        self,
        employees: EmployeeRepository,
        attendance: AttendanceRepository,
        coverage: CoverageRepository,
        *,
        eligibility: Optional[EligibilityPolicy] = None,
        resolver: Optional[CoverageResolver] = None,
    ):
        self._employees = employees
        self._attendance = attendance
        self._coverage = coverage
        self._eligibility = eligibility or EligibilityPolicy()
        self._resolver = resolver or CoverageResolver()

    def headcount_summary(self, as_of: date) -> dict:
        employees = list(self._employees.list_all())
        active = headcount.active_as_of(employees, as_of)
        return {
            "asOf": as_of.isoformat(),
            "total": len(active),
            "byLevel": headcount.level_headcount(employees, as_of),
            "genderSplit": headcount.gender_split(active),
            "medianTenureYears": round(headcount.median_tenure_years(active, as_of), 1),
        }

    def additions_and_exits(self, month: date, *, up_to: Optional[date] = None) -> dict:
        employees = list(self._employees.list_all())
        if up_to is None:
            additions = headcount.additions_in_month(employees, month)
            exits = headcount.exits_in_month(employees, month)
        else:
            additions = headcount.additions_up_to(employees, month, up_to)
            exits = headcount.exits_up_to(employees, month, up_to)
        return {
            "additions": [_brief(e) for e in additions],
            "exits": [_brief(e) for e in exits],
        }

    def headcount_trend(self, on: date, *, today: date, levels: Optional[Sequence[str]] = None) -> dict:
        fy = headcount.financial_year_range(on)
        points = headcount.headcount_trend(list(self._employees.list_all()), fy, today=today, levels=levels)
        return {"label": fy.label, "points": [p.to_dict() for p in points]}

    def leave_distribution(self, start: date, end: date, *, leave_type: Optional[str] = None) -> dict:
        require_date_range(start, end)
        names = {e.employee_code: e.name for e in self._employees.list_all()}
        leaves = self._coverage.list_leave_records(start_date=start, end_date=end)

        daily: dict[date, list[dict]] = defaultdict(list)
        by_type: Counter = Counter()
        for leave in leaves:
            if leave_type and leave.leave_type != leave_type:
                continue
            for row in expand_leave(leave, start, end):
                daily[row.coverage_date].append(
                    {"name": names.get(row.employee_code, "Unknown"), "leaveType": row.label}
                )
                by_type[row.label] += 1

        return {
            "daily": [
                {"date": d.isoformat(), "count": len(emps), "employees": emps}
                for d, emps in sorted(daily.items())
            ],
            "byType": dict(by_type.most_common()),
            "selectedLeaveType": leave_type or "All Leave Types",
        }

    def regularization_top_requesters(
        self,
        start: date,
        end: date,
        *,
        reason: Optional[str] = None,
        limit: int = DEFAULT_TOP_REQUESTERS,
    ) -> list[dict]:
        require_date_range(start, end)
        if int(limit) < 1:
            raise ValidationError("limit must be at least 1")
        names = {e.employee_code: e.name for e in self._employees.list_all()}
        regs = self._coverage.list_regularizations(start_date=start, end_date=end)

        counts: Counter = Counter(
            r.employee_code
            for r in regs
            if regularization_counts_as_coverage(r) and (not reason or r.reason == reason)
        )
        ranked = sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))[: int(limit)]
        return [
            {"rank": i + 1, "employeeCode": code, "name": names.get(code, "Unknown"), "count": n}
            for i, (code, n) in enumerate(ranked)
        ]

    def unapproved_absences(self, start: date, end: date) -> dict:
        require_date_range(start, end)
        population = [e for e in self._employees.list_all() if self._eligibility.includes(e)]
        by_code = {e.employee_code: e for e in population}

        rows = []
        if by_code:
            rows = [
                r
                for r in self._attendance.list_by_status(
                    employee_codes=sorted(by_code),
                    start_date=start,
                    end_date=end,
                    status=ABSENT_STATUS,
                )
                if r.biometric_status == ABSENT_STATUS
            ]

        grouped: dict[str, list] = defaultdict(list)
        for r in rows:
            grouped[r.employee_code].append(r)

        summary = [
            {
                "employeeCode": code,
                "name": by_code[code].name,
                "count": len(items),
                "dates": sorted(i.attendance_date.isoformat() for i in items),
            }
            for code, items in grouped.items()
        ]
        summary.sort(key=lambda s: (-s["count"], s["employeeCode"]))
        logger.debug("Unapproved absences %s..%s: %d days", start, end, len(rows))
        return {
            "employees": summary,
            "totalEmployees": len(summary),
            "totalUnapprovedDays": len(rows),
            "eligiblePopulationCount": len(population),
        }

    def _absence_labels(
        self,
        start: date,
        end: date,
        *,
        employee_codes: Optional[Sequence[str]] = None,
        types: Optional[Sequence[str]] = None,
    ) -> dict[tuple[str, date], str]:
        """Covered (employee, day) -> winning label, restricted to ``types`` before precedence."""
        leaves = self._coverage.list_leave_records(start_date=start, end_date=end, employee_codes=employee_codes)
        regs = self._coverage.list_regularizations(start_date=start, end_date=end, employee_codes=employee_codes)

        wanted = None if types is None else set(types)
        rows = [c for c in expand_coverage(leaves, regs, start, end) if wanted is None or c.label in wanted]
        return {
            key: self._resolver.resolve(key[0], key[1], items).label
            for key, items in build_coverage_index(rows).items()
        }

    def org_absence_trend(self, start: date, end: date, *, types: Optional[Sequence[str]] = None) -> list[dict]:
        """Every day of the range with who was on leave or regularized.

        ``types`` filters by leave type / regularization reason; None means all,
        an empty selection gives an empty result.
        """
        require_date_range(start, end)
        if types is not None and not types:
            return []

        names = {e.employee_code: e.name for e in self._employees.list_all()}
        by_day: dict[date, list[dict]] = defaultdict(list)
        for (code, day), label in sorted(self._absence_labels(start, end, types=types).items()):
            by_day[day].append({"name": names.get(code, code), "leaveType": label})

        return [
            {"date": day.isoformat(), "count": len(by_day.get(day, [])), "employees": by_day.get(day, [])}
            for day in iter_days(start, end)
        ]

    def employee_absence_calendar(
        self,
        employee_code: str,
        start: date,
        end: date,
        *,
        types: Optional[Sequence[str]] = None,
    ) -> list[dict]:
        require_date_range(start, end)
        if types is not None and not types:
            return []

        labels = self._absence_labels(start, end, employee_codes=[employee_code], types=types)
        return [
            {"date": day.isoformat(), "absenceType": label}
            for (_, day), label in sorted(labels.items())
        ]

    def employee_leave_regularization(self, employee_code: str, start: date, end: date) -> dict:
        """Monthly leave and regularization counts for one employee.

        Counts records, not days; a leave is bucketed by the month it starts in.
        """
        require_date_range(start, end)
        leaves = [
            leave
            for leave in self._coverage.list_leave_records(
                start_date=start, end_date=end, employee_codes=[employee_code]
            )
            if leave_counts_as_coverage(leave)
        ]
        regs = [
            reg
            for reg in self._coverage.list_regularizations(
                start_date=start, end_date=end, employee_codes=[employee_code]
            )
            if regularization_counts_as_coverage(reg)
        ]

        months: dict[date, dict] = {}

        def bucket(day: date) -> dict:
            key = start_of_month(day)
            if key not in months:
                months[key] = {
                    "leaveCount": 0,
                    "regularizationCount": 0,
                    "leaveTypes": Counter(),
                    "regularizationReasons": Counter(),
                }
            return months[key]

        for leave in leaves:
            b = bucket(leave.from_date)
            b["leaveCount"] += 1
            b["leaveTypes"][leave.leave_type or "Unknown"] += 1
        for reg in regs:
            b = bucket(reg.attendance_day)
            b["regularizationCount"] += 1
            b["regularizationReasons"][reg.reason or "Unknown"] += 1

        return {
            "employeeCode": employee_code,
            "monthlyTrends": [
                {
                    "month": key.strftime("%b %Y"),
                    "monthStart": key.isoformat(),
                    "leaveCount": b["leaveCount"],
                    "regularizationCount": b["regularizationCount"],
                    "leaveTypes": dict(b["leaveTypes"]),
                    "regularizationReasons": dict(b["regularizationReasons"]),
                }
                for key, b in sorted(months.items())
            ],
            "totalLeaves": len(leaves),
            "totalRegularizations": len(regs),
        }
