from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import CoverageRecord, LeaveRecord, RegularizationRecord


class CoverageRepository(Protocol):
    def list_leave_records(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_codes: Optional[Sequence[str]] = None,
    ) -> Sequence[LeaveRecord]:
        """Leave rows overlapping [start_date, end_date], any approval status.

        ``employee_codes=None`` means every employee.
        """

        raise NotImplementedError

    def list_regularizations(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_codes: Optional[Sequence[str]] = None,
    ) -> Sequence[RegularizationRecord]:
        raise NotImplementedError

    def replace_cached_coverage(
        self,
        *,
        start_date: date,
        end_date: date,
        coverages: Sequence[CoverageRecord],
    ) -> int:
        """Swap the cached coverage rows in the range for ``coverages``."""

        raise NotImplementedError
