from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional

import pytest

from src.hr_analytics.hr_analytics.attendance.model import AttendanceObservation
from src.hr_analytics.hr_analytics.core.enums import LifecycleStatus
from src.hr_analytics.hr_analytics.coverage.model import LeaveRecord, RegularizationRecord
from src.hr_analytics.hr_analytics.employees.model import Employee


class InMemoryEmployees:
    def __init__(self, employees=()):
        self.by_id: dict[int, Employee] = {e.employee_id: e for e in employees}
        self.fail_load = False
        self.fail_update_ids: set[int] = set()
        self.status_updates: list[tuple[int, LifecycleStatus]] = []

    def add(self, emp: Employee) -> Employee:
        self.by_id[emp.employee_id] = emp
        return emp

    def _check(self):
        if self.fail_load:
            raise RuntimeError("employees table unavailable")

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self.by_id.get(int(employee_id))

    def get_by_code(self, employee_code: str) -> Optional[Employee]:
        self._check()
        return next((e for e in self.by_id.values() if e.employee_code == employee_code), None)

    def list_all(self):
        self._check()
        return sorted(self.by_id.values(), key=lambda e: e.name)

    def list_by_locations(self, locations):
        self._check()
        wanted = {loc.lower() for loc in locations}
        return [e for e in self.by_id.values() if e.location.lower() in wanted]

    def list_notice_period_due(self, as_of: date):
        self._check()
        return [
            e for e in self.by_id.values()
            if e.status == LifecycleStatus.SERVING_NOTICE and e.date_of_exit and e.date_of_exit <= as_of
        ]

    def list_pending_onboard_due(self, as_of: date):
        self._check()
        return [
            e for e in self.by_id.values()
            if e.status == LifecycleStatus.PENDING_ONBOARD and e.date_of_joining and e.date_of_joining <= as_of
        ]

    def set_status(self, employee_id: int, status: LifecycleStatus) -> bool:
        if employee_id in self.fail_update_ids:
            raise RuntimeError("write timeout")
        emp = self.by_id.get(employee_id)
        if not emp:
            return False
        self.by_id[employee_id] = replace(emp, status=status)
        self.status_updates.append((employee_id, status))
        return True

    def update_status(self, *, employee_id: int, status: LifecycleStatus, date_of_exit) -> bool:
        emp = self.by_id.get(employee_id)
        if not emp:
            return False
        self.by_id[employee_id] = replace(emp, status=status, date_of_exit=date_of_exit)
        return True


class InMemoryAttendance:
    def __init__(self):
        self.rows: dict[int, AttendanceObservation] = {}
        self._id = 0
        self.queried_codes: list[str] = []
        self.writes: list[tuple[int, str]] = []
        self.fail_load = False
        self.fail_update_ids: set[int] = set()

    def add(self, employee_code: str, day: date, biometric_status: str = "Absent", status: Optional[str] = None) -> int:
        self._id += 1
        self.rows[self._id] = AttendanceObservation(
            attendance_id=self._id,
            employee_code=employee_code,
            attendance_date=day,
            biometric_status=biometric_status,
            status=status if status is not None else biometric_status,
        )
        return self._id

    def status_of(self, employee_code: str, day: date) -> Optional[str]:
        for r in self.rows.values():
            if r.employee_code == employee_code and r.attendance_date == day:
                return r.status
        return None

    def _filter(self, employee_codes, start_date, end_date, pred):
        if self.fail_load:
            raise RuntimeError("attendance table unavailable")
        self.queried_codes.extend(employee_codes)
        codes = set(employee_codes)
        out = [
            r for r in self.rows.values()
            if r.employee_code in codes and start_date <= r.attendance_date <= end_date and pred(r)
        ]
        return sorted(out, key=lambda r: (r.attendance_date, r.attendance_id))

    def list_by_biometric_status(self, *, employee_codes, start_date, end_date, biometric_status):
        return self._filter(employee_codes, start_date, end_date, lambda r: r.biometric_status == biometric_status)

    def list_by_status(self, *, employee_codes, start_date, end_date, status):
        return self._filter(employee_codes, start_date, end_date, lambda r: r.status == status)

    def update_status(self, *, attendance_id: int, status: str) -> bool:
        if attendance_id in self.fail_update_ids:
            raise RuntimeError("deadlock detected")
        row = self.rows.get(attendance_id)
        if not row:
            return False
        self.rows[attendance_id] = replace(row, status=status)
        self.writes.append((attendance_id, status))
        return True


class InMemoryCoverage:
    def __init__(self):
        self.leaves: list[LeaveRecord] = []
        self.regularizations: list[RegularizationRecord] = []
        self.cache: list = []
        self.fail_load = False
        self.queried_codes: list[str] = []

    def add_leave(self, employee_code, from_date, to_date, leave_type="Sick Leave", approval_status="Approved"):
        rec = LeaveRecord(
            leave_id=len(self.leaves) + 1,
            employee_code=employee_code,
            leave_type=leave_type,
            from_date=from_date,
            to_date=to_date,
            approval_status=approval_status,
        )
        self.leaves.append(rec)
        return rec

    def add_regularization(self, employee_code, day, reason="Forgot to Punch", approval_status="Approved"):
        rec = RegularizationRecord(
            regularization_id=len(self.regularizations) + 1,
            employee_code=employee_code,
            attendance_day=day,
            reason=reason,
            approval_status=approval_status,
        )
        self.regularizations.append(rec)
        return rec

    def list_leave_records(self, *, start_date, end_date, employee_codes=None):
        if self.fail_load:
            raise RuntimeError("leave_records unavailable")
        self.queried_codes.extend(employee_codes or [])
        return [
            r for r in self.leaves
            if r.to_date >= start_date and r.from_date <= end_date
            and (employee_codes is None or r.employee_code in employee_codes)
        ]

    def list_regularizations(self, *, start_date, end_date, employee_codes=None):
        if self.fail_load:
            raise RuntimeError("attendance_regularization unavailable")
        self.queried_codes.extend(employee_codes or [])
        return [
            r for r in self.regularizations
            if start_date <= r.attendance_day <= end_date
            and (employee_codes is None or r.employee_code in employee_codes)
        ]

    def replace_cached_coverage(self, *, start_date, end_date, coverages):
        self.cache = [c for c in self.cache if not (start_date <= c.coverage_date <= end_date)]
        self.cache.extend(coverages)
        return len(coverages)


class InMemoryActivityLog:
    def __init__(self):
        self.entries: list = []
        self.fail = False

    def record(self, entry) -> int:
        if self.fail:
            raise RuntimeError("activity_logs unavailable")
        self.entries.append(entry)
        return len(self.entries)


@pytest.fixture
def make_employee():
    counter = {"id": 0}

    def _make(
        code: str,
        *,
        name: Optional[str] = None,
        location: str = "Delhi",
        status: LifecycleStatus = LifecycleStatus.ACTIVE,
        date_of_joining: Optional[date] = date(2022, 4, 1),
        date_of_exit: Optional[date] = None,
        level: Optional[str] = "N",
        pod: Optional[str] = "Platform",
        gender: Optional[str] = None,
    ) -> Employee:
        counter["id"] += 1
        return Employee(
            employee_id=counter["id"],
            employee_code=code,
            name=name or f"Employee {code}",
            location=location,
            status=status,
            date_of_joining=date_of_joining,
            date_of_exit=date_of_exit,
            level=level,
            pod=pod,
            gender=gender,
        )

    return _make


@pytest.fixture
def employees_repo():
    return InMemoryEmployees()


@pytest.fixture
def attendance_repo():
    return InMemoryAttendance()


@pytest.fixture
def coverage_repo():
    return InMemoryCoverage()


@pytest.fixture
def activity_repo():
    return InMemoryActivityLog()


@pytest.fixture
def fixed_now():
    return datetime(2024, 2, 1, 9, 30, 0)
