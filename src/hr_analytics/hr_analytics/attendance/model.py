from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class AttendanceObservation:
    """Domain entity: one attendance row per (employee, day).

    ``biometric_status`` is what the device import recorded and is never
    rewritten; ``status`` is the reconciled label shown in reports.
    """

    attendance_id: int
    employee_code: str
    attendance_date: date
    biometric_status: str
    status: str
