from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..common.validators import require_date_range
from ..core.exceptions import DataLoadError
from .expansion import expand_coverage
from .model import CoverageRecord
from .repository import CoverageRepository

logger = logging.getLogger(__name__)


class CoverageService:
    """Builds coverage straight from the leave and regularization tables.

    The ``attendance_coverage`` table is only a cache for reporting; nothing
    here reads it back.
    """

    def __init__(self, coverage: CoverageRepository):
        self._coverage = coverage

    def load(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_codes: Optional[Sequence[str]] = None,
    ) -> list[CoverageRecord]:
        try:
            leaves = self._coverage.list_leave_records(
                start_date=start_date, end_date=end_date, employee_codes=employee_codes
            )
            regs = self._coverage.list_regularizations(
                start_date=start_date, end_date=end_date, employee_codes=employee_codes
            )
        except Exception as exc:
            raise DataLoadError(f"Failed to load coverage records: {exc}") from exc

        rows = expand_coverage(leaves, regs, start_date, end_date)
        logger.info(
            "Loaded %d coverage days from %d leave and %d regularization records",
            len(rows), len(leaves), len(regs),
        )
        return rows

    def rebuild_cache(self, *, start_date: date, end_date: date) -> int:
        require_date_range(start_date, end_date)
        rows = self.load(start_date=start_date, end_date=end_date)
        count = self._coverage.replace_cached_coverage(start_date=start_date, end_date=end_date, coverages=rows)
        logger.info("Rebuilt coverage cache for %s..%s (%d rows)", start_date, end_date, count)
        return count
