from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import CoverageType


@dataclass(frozen=True)
class LeaveRecord:
    leave_id: int
    employee_code: str
    leave_type: str
    from_date: date
    to_date: date
    approval_status: str


@dataclass(frozen=True)
class RegularizationRecord:
    regularization_id: int
    employee_code: str
    attendance_day: date
    reason: Optional[str]
    approval_status: str


@dataclass(frozen=True)
class CoverageRecord:
    """One covered (employee, day), derived from a leave or regularization row."""

    employee_code: str
    coverage_date: date
    coverage_type: CoverageType
    label: str
    approval_status: str
    source_id: int

    @property
    def key(self) -> tuple[str, date]:
        return (self.employee_code, self.coverage_date)

    @property
    def source_table(self) -> str:
        if self.coverage_type == CoverageType.LEAVE:
            return "leave_records"
        return "attendance_regularization"
