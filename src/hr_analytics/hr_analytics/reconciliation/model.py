from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime


@dataclass(frozen=True)
class UpdateFailure:
    employee_code: str
    attendance_date: date
    error: str

    def to_dict(self) -> dict:
        return {
            "employeeCode": self.employee_code,
            "attendanceDate": self.attendance_date.isoformat(),
            "error": self.error,
        }


@dataclass(frozen=True)
class ReconciliationResult:
    """Summary of one run, for display only; the attendance table is the state."""

    total_processed: int
    unapproved_count: int
    updated_at: datetime
    eligible_population_count: int
    updated_count: int = 0
    unchanged_count: int = 0
    failures: list[UpdateFailure] = field(default_factory=list)

    @property
    def failure_count(self) -> int:
        return len(self.failures)

    def to_dict(self) -> dict:
        return {
            "totalProcessed": self.total_processed,
            "unapprovedCount": self.unapproved_count,
            "updatedAt": self.updated_at.isoformat(),
            "eligiblePopulationCount": self.eligible_population_count,
            "updatedCount": self.updated_count,
            "failureCount": self.failure_count,
            "failures": [f.to_dict() for f in self.failures],
        }
