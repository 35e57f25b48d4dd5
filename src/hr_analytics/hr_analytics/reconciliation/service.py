from __future__ import annotations

import logging
import time
from datetime import date, datetime
from typing import Callable, Optional, Sequence

from ..attendance.model import AttendanceObservation
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_local
from ..common.validators import require_date_range
from ..core.constants import ABSENT_STATUS
from ..core.exceptions import DataLoadError
from ..coverage.expansion import CoverageIndex, build_coverage_index
from ..coverage.resolver import CoverageResolver
from ..coverage.service import CoverageService
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .eligibility import EligibilityPolicy
from .model import ReconciliationResult, UpdateFailure

logger = logging.getLogger(__name__)


class ReconciliationEngine:
    """Rewrite absent days into the leave/regularization that covers them.

    Pipeline per run: load the eligible population, load its device-absent
    rows in the range, load coverage for the same population and range, index
    coverage by (employee, day), resolve each row and write only labels that
    changed.

    Loading is all-or-nothing (``DataLoadError`` before any write). Writes are
    per row: a failed update is logged, recorded in the result and skipped.
    A re-run over unchanged data issues no writes.
    """

    def __init__(
        self,
        employees: EmployeeRepository,
        attendance: AttendanceRepository,
        coverage: CoverageService,
        *,
        eligibility: Optional[EligibilityPolicy] = None,
        resolver: Optional[CoverageResolver] = None,
        max_span_days: Optional[int] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._employees = employees
        self._attendance = attendance
        self._coverage = coverage
        self._eligibility = eligibility or EligibilityPolicy()
        self._resolver = resolver or CoverageResolver()
        self._max_span_days = max_span_days
        self._clock = clock

    def reconcile(self, *, start_date: date, end_date: date) -> ReconciliationResult:
        require_date_range(start_date, end_date, max_span_days=self._max_span_days)
        logger.info("Starting reconciliation for %s..%s", start_date, end_date)
        population = self._load_population()
        return self._run(population, start_date, end_date)

    def reconcile_employee(
        self,
        *,
        employee_code: str,
        start_date: date,
        end_date: date,
    ) -> Optional[ReconciliationResult]:
        """Re-run for one employee, e.g. after their leave was edited.

        Returns None when the employee is unknown or not eligible.
        """
        require_date_range(start_date, end_date, max_span_days=self._max_span_days)
        try:
            emp = self._employees.get_by_code(employee_code)
        except Exception as exc:
            raise DataLoadError(f"Failed to load employee {employee_code}: {exc}") from exc

        if emp is None or not self._eligibility.includes(emp):
            logger.info("Skipping reconciliation for %s: not in eligible population", employee_code)
            return None
        return self._run([emp], start_date, end_date)

    def _load_population(self) -> list[Employee]:
        try:
            if self._eligibility.all_locations:
                employees = self._employees.list_all()
            else:
                employees = self._employees.list_by_locations(self._eligibility.locations)
        except Exception as exc:
            raise DataLoadError(f"Failed to load eligible employees: {exc}") from exc

        # The query already filters; this keeps a loose repository from leaking others in.
        population = [e for e in employees if self._eligibility.includes(e)]
        logger.info("Found %d eligible employees", len(population))
        return population

    def _run(self, population: Sequence[Employee], start_date: date, end_date: date) -> ReconciliationResult:
        started = time.monotonic()
        if not population:
            return ReconciliationResult(
                total_processed=0,
                unapproved_count=0,
                updated_at=self._clock(),
                eligible_population_count=0,
            )

        codes = sorted({e.employee_code for e in population})
        try:
            absences = list(
                self._attendance.list_by_biometric_status(
                    employee_codes=codes,
                    start_date=start_date,
                    end_date=end_date,
                    biometric_status=ABSENT_STATUS,
                )
            )
        except Exception as exc:
            raise DataLoadError(f"Failed to load attendance records: {exc}") from exc
        logger.info("Found %d absence records", len(absences))

        index = build_coverage_index(
            self._coverage.load(start_date=start_date, end_date=end_date, employee_codes=codes)
        )

        total = unapproved = updated = unchanged = 0
        failures: list[UpdateFailure] = []
        for obs in absences:
            total += 1
            label, is_unapproved = self._resolve(obs, index)
            if is_unapproved:
                unapproved += 1

            if obs.status == label:
                unchanged += 1
                continue

            failure = self._write(obs, label)
            if failure:
                failures.append(failure)
            else:
                updated += 1

        logger.info(
            "Processed %d records: %d unapproved, %d updated, %d unchanged, %d failed (%.2fs)",
            total, unapproved, updated, unchanged, len(failures), time.monotonic() - started,
        )
        return ReconciliationResult(
            total_processed=total,
            unapproved_count=unapproved,
            updated_at=self._clock(),
            eligible_population_count=len(population),
            updated_count=updated,
            unchanged_count=unchanged,
            failures=failures,
        )

    def _resolve(self, obs: AttendanceObservation, index: CoverageIndex) -> tuple[str, bool]:
        resolution = self._resolver.resolve(
            obs.employee_code,
            obs.attendance_date,
            index.get((obs.employee_code, obs.attendance_date), []),
        )
        for warning in resolution.warnings:
            logger.warning("Data quality: %s", warning)
        return resolution.label, resolution.is_unapproved

    def _write(self, obs: AttendanceObservation, label: str) -> Optional[UpdateFailure]:
        try:
            ok = self._attendance.update_status(attendance_id=obs.attendance_id, status=label)
        except Exception as exc:
            logger.error(
                "Failed to update status for %s on %s to %r: %s",
                obs.employee_code, obs.attendance_date, label, exc,
            )
            return UpdateFailure(obs.employee_code, obs.attendance_date, str(exc))

        if not ok:
            logger.error("No attendance row updated for %s on %s", obs.employee_code, obs.attendance_date)
            return UpdateFailure(obs.employee_code, obs.attendance_date, "No rows updated")
        return None
