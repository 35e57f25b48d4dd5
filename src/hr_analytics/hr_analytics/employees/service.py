from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Optional

from ..activity.service import ActivityLogger
from ..core.enums import ActivityAction, ActivityEntity, LifecycleStatus
from ..core.exceptions import NotFoundError, ValidationError
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


class EmployeeService:
    def __init__(self, employees: EmployeeRepository, *, activity: Optional[ActivityLogger] = None):
        self._employees = employees
        self._activity = activity

    def get(self, employee_id: int) -> Employee:
        emp = self._employees.get_by_id(int(employee_id))
        if not emp:
            raise NotFoundError("Employee not found")
        return emp

    def update_status(
        self,
        *,
        employee_id: int,
        status: str,
        date_of_exit: Optional[date] = None,
        actor: Optional[str] = None,
    ) -> Employee:
        try:
            new_status = LifecycleStatus(status)
        except ValueError:
            raise ValidationError(f"Unknown status: {status!r}")

        emp = self.get(employee_id)

        if new_status == LifecycleStatus.SERVING_NOTICE and date_of_exit is None:
            raise ValidationError('Date of exit is required when status is "Serving Notice Period"')
        if date_of_exit and emp.date_of_joining and date_of_exit < emp.date_of_joining:
            raise ValidationError("Date of exit cannot be before date of joining")

        if emp.status == new_status and emp.date_of_exit == date_of_exit:
            return emp

        ok = self._employees.update_status(
            employee_id=emp.employee_id,
            status=new_status,
            date_of_exit=date_of_exit,
        )
        if not ok:
            raise ValidationError("Employee status update failed")

        old_status = emp.status.value if emp.status else None
        logger.info("Employee %s status %s -> %s", emp.employee_code, old_status, new_status.value)
        if self._activity is not None:
            self._activity.log(
                action_type=ActivityAction.UPDATE,
                entity_type=ActivityEntity.EMPLOYEE,
                entity_id=emp.employee_id,
                description=f"Updated status of {emp.name} to {new_status.value}",
                actor=actor,
                metadata={
                    "employeeCode": emp.employee_code,
                    "oldStatus": old_status,
                    "newStatus": new_status.value,
                    "dateOfExit": date_of_exit.isoformat() if date_of_exit else None,
                },
            )
        return replace(emp, status=new_status, date_of_exit=date_of_exit)
