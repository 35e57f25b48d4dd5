from __future__ import annotations

from enum import Enum
from typing import Optional


class LifecycleStatus(str, Enum):
    """Coarse employment state stored in ``employees.status``."""

    ACTIVE = "Active"
    SERVING_NOTICE = "Serving Notice Period"
    INACTIVE = "Inactive"
    PENDING_ONBOARD = "Pending Onboard"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["LifecycleStatus"]:
        """Match an imported value ignoring case and surrounding spaces; None if unknown."""
        wanted = (value or "").strip().lower()
        for member in cls:
            if member.value.lower() == wanted:
                return member
        return None


class CoverageType(str, Enum):
    """Kind of record that can justify an absent day."""

    LEAVE = "Leave"
    REGULARIZATION = "Regularization"


class ActivityAction(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class ActivityEntity(str, Enum):
    EMPLOYEE = "employee"
    USER = "user"
