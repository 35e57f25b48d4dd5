from __future__ import annotations

import logging
from datetime import date

from src.hr_analytics.hr_analytics.core.enums import LifecycleStatus
from src.hr_analytics.hr_analytics.employees.mysql_employee_repository import _to_employee


def _row(status):
    return {
        "employee_id": 7,
        "employee_code": "E007",
        "name": "Kabir",
        "location": "Delhi",
        "status": status,
        "date_of_joining": date(2022, 4, 1),
        "date_of_exit": None,
        "level": "N+1",
        "pod": "Platform",
        "gender": "Male",
    }


def test_imported_status_is_matched_loosely():
    assert _to_employee(_row(" active ")).status == LifecycleStatus.ACTIVE
    assert _to_employee(_row("serving notice period")).status == LifecycleStatus.SERVING_NOTICE


def test_unknown_status_keeps_row_and_warns(caplog):
    with caplog.at_level(logging.WARNING):
        emp = _to_employee(_row("Resigned"))

    assert emp.status is None
    assert emp.employee_code == "E007"
    assert "Resigned" in caplog.text


def test_missing_status_is_unknown():
    assert _to_employee(_row(None)).status is None


def test_parse_rejects_unknown_values():
    assert LifecycleStatus.parse("Pending Onboard") == LifecycleStatus.PENDING_ONBOARD
    assert LifecycleStatus.parse("Retired") is None
    assert LifecycleStatus.parse("") is None
