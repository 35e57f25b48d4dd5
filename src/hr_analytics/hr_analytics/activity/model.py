from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from ..core.enums import ActivityAction, ActivityEntity


@dataclass(frozen=True)
class ActivityEntry:
    """One audit line for a change made through the API."""

    action_type: ActivityAction
    entity_type: ActivityEntity
    entity_id: str
    description: str
    actor: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)
