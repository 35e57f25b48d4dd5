from __future__ import annotations

from datetime import date

import pytest

from src.hr_analytics.hr_analytics.activity.service import ActivityLogger
from src.hr_analytics.hr_analytics.core.enums import ActivityAction, ActivityEntity, LifecycleStatus
from src.hr_analytics.hr_analytics.core.exceptions import NotFoundError, ValidationError
from src.hr_analytics.hr_analytics.employees.service import EmployeeService


def test_get_missing_employee_raises(employees_repo):
    with pytest.raises(NotFoundError):
        EmployeeService(employees_repo).get(99)


def test_serving_notice_requires_exit_date(make_employee, employees_repo):
    emp = employees_repo.add(make_employee("E1"))

    with pytest.raises(ValidationError):
        EmployeeService(employees_repo).update_status(employee_id=emp.employee_id, status="Serving Notice Period")


def test_exit_before_joining_rejected(make_employee, employees_repo):
    emp = employees_repo.add(make_employee("E1", date_of_joining=date(2023, 1, 1)))

    with pytest.raises(ValidationError):
        EmployeeService(employees_repo).update_status(
            employee_id=emp.employee_id,
            status="Serving Notice Period",
            date_of_exit=date(2022, 12, 31),
        )


def test_unknown_status_rejected(make_employee, employees_repo):
    emp = employees_repo.add(make_employee("E1"))

    with pytest.raises(ValidationError):
        EmployeeService(employees_repo).update_status(employee_id=emp.employee_id, status="Retired")


def test_update_status_persists(make_employee, employees_repo):
    emp = employees_repo.add(make_employee("E1"))

    updated = EmployeeService(employees_repo).update_status(
        employee_id=emp.employee_id,
        status="Serving Notice Period",
        date_of_exit=date(2024, 6, 30),
    )

    assert updated.status == LifecycleStatus.SERVING_NOTICE
    assert employees_repo.by_id[emp.employee_id].date_of_exit == date(2024, 6, 30)


def test_status_change_is_written_to_activity_log(make_employee, employees_repo, activity_repo):
    emp = employees_repo.add(make_employee("E1", name="Meera"))
    svc = EmployeeService(employees_repo, activity=ActivityLogger(activity_repo))

    svc.update_status(
        employee_id=emp.employee_id,
        status="Serving Notice Period",
        date_of_exit=date(2024, 6, 30),
        actor="hr.admin",
    )

    entry = activity_repo.entries[0]
    assert entry.action_type == ActivityAction.UPDATE
    assert entry.entity_type == ActivityEntity.EMPLOYEE
    assert entry.entity_id == str(emp.employee_id)
    assert entry.actor == "hr.admin"
    assert entry.metadata == {
        "employeeCode": "E1",
        "oldStatus": "Active",
        "newStatus": "Serving Notice Period",
        "dateOfExit": "2024-06-30",
    }


def test_unchanged_status_writes_no_activity(make_employee, employees_repo, activity_repo):
    emp = employees_repo.add(make_employee("E1"))
    svc = EmployeeService(employees_repo, activity=ActivityLogger(activity_repo))

    svc.update_status(employee_id=emp.employee_id, status="Active")

    assert activity_repo.entries == []


def test_activity_log_failure_does_not_undo_update(make_employee, employees_repo, activity_repo):
    emp = employees_repo.add(make_employee("E1"))
    activity_repo.fail = True
    svc = EmployeeService(employees_repo, activity=ActivityLogger(activity_repo))

    updated = svc.update_status(employee_id=emp.employee_id, status="Inactive")

    assert updated.status == LifecycleStatus.INACTIVE
    assert employees_repo.by_id[emp.employee_id].status == LifecycleStatus.INACTIVE


def test_employee_with_unrecognised_status_can_be_corrected(make_employee, employees_repo, activity_repo):
    emp = employees_repo.add(make_employee("E1", status=None))
    svc = EmployeeService(employees_repo, activity=ActivityLogger(activity_repo))

    updated = svc.update_status(employee_id=emp.employee_id, status="Active")

    assert updated.status == LifecycleStatus.ACTIVE
    assert activity_repo.entries[0].metadata["oldStatus"] is None
