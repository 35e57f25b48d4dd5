from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import AttendanceObservation


class AttendanceRepository(Protocol):
    def list_by_biometric_status(
        self,
        *,
        employee_codes: Sequence[str],
        start_date: date,
        end_date: date,
        biometric_status: str,
    ) -> Sequence[AttendanceObservation]:
        """Rows for the given employees in the inclusive range, by raw device status."""

        raise NotImplementedError

    def list_by_status(
        self,
        *,
        employee_codes: Sequence[str],
        start_date: date,
        end_date: date,
        status: str,
    ) -> Sequence[AttendanceObservation]:
        """Rows for the given employees in the inclusive range, by reconciled status."""

        raise NotImplementedError

    def update_status(self, *, attendance_id: int, status: str) -> bool:
        raise NotImplementedError
