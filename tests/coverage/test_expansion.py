from __future__ import annotations

from datetime import date

from src.hr_analytics.hr_analytics.core.enums import CoverageType
from src.hr_analytics.hr_analytics.coverage.expansion import (
    build_coverage_index,
    expand_coverage,
    expand_leave,
    expand_regularization,
)
from src.hr_analytics.hr_analytics.coverage.model import LeaveRecord, RegularizationRecord

JAN_1 = date(2024, 1, 1)
JAN_31 = date(2024, 1, 31)


def _leave(from_date, to_date, status="Approved", leave_type="Sick Leave", leave_id=1):
    return LeaveRecord(
        leave_id=leave_id,
        employee_code="E1",
        leave_type=leave_type,
        from_date=from_date,
        to_date=to_date,
        approval_status=status,
    )


def _reg(day, status="Approved", reason="Forgot to Punch"):
    return RegularizationRecord(
        regularization_id=1,
        employee_code="E1",
        attendance_day=day,
        reason=reason,
        approval_status=status,
    )


def test_five_day_leave_expands_to_five_rows():
    rows = expand_leave(_leave(date(2024, 1, 1), date(2024, 1, 5)), JAN_1, JAN_31)

    assert [r.coverage_date for r in rows] == [date(2024, 1, d) for d in range(1, 6)]
    assert all(r.coverage_type == CoverageType.LEAVE for r in rows)


def test_leave_is_clipped_to_requested_range():
    rows = expand_leave(_leave(date(2023, 12, 30), date(2024, 1, 2)), JAN_1, JAN_31)

    assert [r.coverage_date for r in rows] == [date(2024, 1, 1), date(2024, 1, 2)]


def test_rejected_leave_excluded():
    assert expand_leave(_leave(JAN_1, JAN_1, status="Rejected"), JAN_1, JAN_31) == []
    assert expand_leave(_leave(JAN_1, JAN_1, status=" rejected "), JAN_1, JAN_31) == []


def test_cancelled_leave_still_counts():
    rows = expand_leave(_leave(JAN_1, JAN_1, status="Cancelled"), JAN_1, JAN_31)

    assert [r.coverage_date for r in rows] == [JAN_1]


def test_pending_leave_counts():
    assert len(expand_leave(_leave(JAN_1, JAN_1, status="Pending"), JAN_1, JAN_31)) == 1


def test_leave_ending_before_it_starts_is_ignored():
    assert expand_leave(_leave(date(2024, 1, 5), date(2024, 1, 3)), JAN_1, JAN_31) == []


def test_cancelled_regularization_excluded_but_rejected_counts():
    assert expand_regularization(_reg(JAN_1, status="Cancelled"), JAN_1, JAN_31) is None
    assert expand_regularization(_reg(JAN_1, status="Rejected"), JAN_1, JAN_31) is not None


def test_blank_labels_get_defaults():
    leave_rows = expand_leave(_leave(JAN_1, JAN_1, leave_type="  "), JAN_1, JAN_31)
    reg_row = expand_regularization(_reg(JAN_1, reason=None), JAN_1, JAN_31)

    assert leave_rows[0].label == "Leave"
    assert reg_row.label == "Regularized"


def test_index_groups_by_employee_and_day():
    rows = expand_coverage(
        [_leave(date(2024, 1, 10), date(2024, 1, 11))],
        [_reg(date(2024, 1, 10))],
        JAN_1,
        JAN_31,
    )

    index = build_coverage_index(rows)

    assert len(index[("E1", date(2024, 1, 10))]) == 2
    assert len(index[("E1", date(2024, 1, 11))]) == 1
    assert ("E1", date(2024, 1, 12)) not in index
