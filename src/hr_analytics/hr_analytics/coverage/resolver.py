from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Sequence

from ..core.constants import ABSENT_STATUS
from ..core.enums import CoverageType
from .model import CoverageRecord


@dataclass(frozen=True)
class Resolution:
    label: str
    coverage_type: Optional[CoverageType]
    warnings: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_unapproved(self) -> bool:
        return self.coverage_type is None


class CoverageResolver:
    """Decide the attendance label for one absent (employee, day).

    Leave beats regularization, and either beats no coverage at all. Approval
    status is not looked at: callers pass only coverage that survived
    filtering.
    """

    def resolve(self, employee_code: str, on: date, coverages: Sequence[CoverageRecord]) -> Resolution:
        leaves = self._sorted(c for c in coverages if c.coverage_type == CoverageType.LEAVE)
        if leaves:
            warnings: tuple[str, ...] = ()
            if len(leaves) > 1:
                warnings = (
                    f"{len(leaves)} leave records cover {employee_code} on {on.isoformat()}; "
                    f"using {leaves[0].label!r} (source {leaves[0].source_id})",
                )
            return Resolution(label=leaves[0].label, coverage_type=CoverageType.LEAVE, warnings=warnings)

        regs = self._sorted(c for c in coverages if c.coverage_type == CoverageType.REGULARIZATION)
        if regs:
            return Resolution(label=regs[0].label, coverage_type=CoverageType.REGULARIZATION)

        return Resolution(label=ABSENT_STATUS, coverage_type=None)

    @staticmethod
    def _sorted(items) -> list[CoverageRecord]:
        return sorted(items, key=lambda c: (c.label, c.source_id))
