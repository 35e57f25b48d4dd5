from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Sequence

from ..core.enums import LifecycleStatus
from ..core.exceptions import DataLoadError
from .model import Employee, StatusTransition
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


class StatusLifecycleJob:
    """Flip lifecycle status once the relevant date has been reached.

    - Serving Notice Period -> Inactive when ``date_of_exit <= as_of``
    - Pending Onboard -> Active when ``date_of_joining <= as_of``

    The as-of date is always passed in; callers that want "today" resolve it
    themselves. Each employee is updated independently and every attempt is
    reported, successful or not.
    """

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def run(self, *, as_of: date) -> list[StatusTransition]:
        rules: list[tuple[Callable[[date], Sequence[Employee]], LifecycleStatus]] = [
            (self._employees.list_notice_period_due, LifecycleStatus.INACTIVE),
            (self._employees.list_pending_onboard_due, LifecycleStatus.ACTIVE),
        ]

        results: list[StatusTransition] = []
        for load, new_status in rules:
            try:
                candidates = list(load(as_of))
            except Exception as exc:
                raise DataLoadError(f"Failed to load employees due for {new_status.value}: {exc}") from exc

            logger.info("Found %d employees to move to %s (as of %s)", len(candidates), new_status.value, as_of)
            for emp in candidates:
                results.append(self._transition(emp, new_status))

        ok = sum(1 for r in results if r.success)
        logger.info("Updated %d of %d employees", ok, len(results))
        return results

    def _transition(self, emp: Employee, new_status: LifecycleStatus) -> StatusTransition:
        logger.info("Updating employee %s (id=%s) to %s", emp.name, emp.employee_id, new_status.value)
        try:
            ok = self._employees.set_status(emp.employee_id, new_status)
        except Exception as exc:
            logger.error("Error updating employee %s: %s", emp.employee_id, exc)
            return StatusTransition(emp.employee_id, emp.name, new_status, success=False, error=str(exc))

        if not ok:
            logger.error("Employee %s was not updated (no rows affected)", emp.employee_id)
            return StatusTransition(emp.employee_id, emp.name, new_status, success=False, error="No rows updated")

        return StatusTransition(emp.employee_id, emp.name, new_status, success=True)
