"""Turn raw leave / regularization rows into per-day coverage rows.

Exclusion by approval status happens here, so everything downstream (the
resolver, the index, the analytics) only ever sees coverage that counts.
"""
from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date
from typing import Iterable, Optional

from ..common.datetime_utils import iter_days
from ..core.constants import (
    DEFAULT_LEAVE_LABEL,
    DEFAULT_REGULARIZATION_LABEL,
    EXCLUDED_LEAVE_STATUSES,
    EXCLUDED_REGULARIZATION_STATUSES,
)
from ..core.enums import CoverageType
from .model import CoverageRecord, LeaveRecord, RegularizationRecord

logger = logging.getLogger(__name__)

CoverageIndex = dict[tuple[str, date], list[CoverageRecord]]


def _normalized(status: Optional[str]) -> str:
    return (status or "").strip().lower()


def leave_counts_as_coverage(record: LeaveRecord) -> bool:
    return _normalized(record.approval_status) not in EXCLUDED_LEAVE_STATUSES


def regularization_counts_as_coverage(record: RegularizationRecord) -> bool:
    return _normalized(record.approval_status) not in EXCLUDED_REGULARIZATION_STATUSES


def expand_leave(record: LeaveRecord, start: date, end: date) -> list[CoverageRecord]:
    """One coverage row per calendar day of the leave, clipped to [start, end]."""
    if not leave_counts_as_coverage(record):
        return []
    if record.to_date < record.from_date:
        logger.warning(
            "Leave %s for %s ends (%s) before it starts (%s); ignored",
            record.leave_id, record.employee_code, record.to_date, record.from_date,
        )
        return []

    label = (record.leave_type or "").strip() or DEFAULT_LEAVE_LABEL
    first = max(record.from_date, start)
    last = min(record.to_date, end)
    return [
        CoverageRecord(
            employee_code=record.employee_code,
            coverage_date=day,
            coverage_type=CoverageType.LEAVE,
            label=label,
            approval_status=record.approval_status,
            source_id=record.leave_id,
        )
        for day in iter_days(first, last)
    ]


def expand_regularization(record: RegularizationRecord, start: date, end: date) -> Optional[CoverageRecord]:
    if not regularization_counts_as_coverage(record):
        return None
    if not (start <= record.attendance_day <= end):
        return None
    return CoverageRecord(
        employee_code=record.employee_code,
        coverage_date=record.attendance_day,
        coverage_type=CoverageType.REGULARIZATION,
        label=(record.reason or "").strip() or DEFAULT_REGULARIZATION_LABEL,
        approval_status=record.approval_status,
        source_id=record.regularization_id,
    )


def expand_coverage(
    leaves: Iterable[LeaveRecord],
    regularizations: Iterable[RegularizationRecord],
    start: date,
    end: date,
) -> list[CoverageRecord]:
    out: list[CoverageRecord] = []
    for leave in leaves:
        out.extend(expand_leave(leave, start, end))
    for reg in regularizations:
        row = expand_regularization(reg, start, end)
        if row is not None:
            out.append(row)
    return out


def build_coverage_index(coverages: Iterable[CoverageRecord]) -> CoverageIndex:
    index: CoverageIndex = defaultdict(list)
    for c in coverages:
        index[c.key].append(c)
    return dict(index)
