from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import LifecycleStatus


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee.

    Note: ``status`` is only brought in line with the date fields by the
    lifecycle job, so it may be stale between runs. It is None when the
    stored value is not a known lifecycle status.
    """

    employee_id: int
    employee_code: str
    name: str
    location: str
    status: Optional[LifecycleStatus]
    date_of_joining: Optional[date]
    date_of_exit: Optional[date] = None
    level: Optional[str] = None
    pod: Optional[str] = None
    gender: Optional[str] = None


@dataclass(frozen=True)
class StatusTransition:
    """Outcome of one lifecycle update attempt."""

    employee_id: int
    employee_name: str
    new_status: LifecycleStatus
    success: bool
    error: Optional[str] = None

    def to_dict(self) -> dict:
        out = {
            "employeeId": self.employee_id,
            "employeeName": self.employee_name,
            "success": self.success,
            "newStatus": self.new_status.value,
        }
        if self.error is not None:
            out["error"] = self.error
        return out
