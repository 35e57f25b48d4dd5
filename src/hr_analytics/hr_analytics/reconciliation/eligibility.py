from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..core.constants import DEFAULT_ELIGIBLE_LOCATIONS
from ..employees.model import Employee


class EligibilityPolicy:
    """Which employees are in scope for reconciliation.

    Restricted by office location; an empty location list means every
    location is eligible.
    """

    def __init__(self, locations: Optional[Iterable[str]] = None):
        if locations is None:
            locations = DEFAULT_ELIGIBLE_LOCATIONS
        self._locations = tuple(loc.strip() for loc in locations if loc and loc.strip())
        self._lowered = frozenset(loc.lower() for loc in self._locations)

    @property
    def locations(self) -> Sequence[str]:
        return self._locations

    @property
    def all_locations(self) -> bool:
        return not self._locations

    def includes(self, employee: Employee) -> bool:
        if self.all_locations:
            return True
        return (employee.location or "").strip().lower() in self._lowered
