from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import LifecycleStatus
from .model import Employee


class EmployeeRepository(Protocol):
    """Repository interface for Employee.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_code(self, employee_code: str) -> Optional[Employee]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Employee]:
        raise NotImplementedError

    def list_by_locations(self, locations: Sequence[str]) -> Sequence[Employee]:
        """Employees whose location matches one of ``locations`` (case-insensitive)."""

        raise NotImplementedError

    def list_notice_period_due(self, as_of: date) -> Sequence[Employee]:
        """Serving-notice employees with an exit date on or before ``as_of``."""

        raise NotImplementedError

    def list_pending_onboard_due(self, as_of: date) -> Sequence[Employee]:
        """Pending-onboard employees with a join date on or before ``as_of``."""

        raise NotImplementedError

    def set_status(self, employee_id: int, status: LifecycleStatus) -> bool:
        raise NotImplementedError

    def update_status(
        self,
        *,
        employee_id: int,
        status: LifecycleStatus,
        date_of_exit: Optional[date],
    ) -> bool:
        raise NotImplementedError
