from __future__ import annotations

import logging
from typing import Any, Optional

from ..core.enums import ActivityAction, ActivityEntity
from .model import ActivityEntry
from .repository import ActivityLogRepository

logger = logging.getLogger(__name__)


class ActivityLogger:
    """Best-effort audit trail.

    The change being audited is already committed when this runs, so a failed
    insert is logged and reported as False instead of failing the request.
    """

    def __init__(self, activity: ActivityLogRepository):
        self._activity = activity

    def log(
        self,
        *,
        action_type: ActivityAction,
        entity_type: ActivityEntity,
        entity_id: Any,
        description: str,
        actor: Optional[str] = None,
        metadata: Optional[dict] = None,
    ) -> bool:
        entry = ActivityEntry(
            action_type=action_type,
            entity_type=entity_type,
            entity_id=str(entity_id),
            description=description,
            actor=actor,
            metadata=dict(metadata or {}),
        )
        try:
            self._activity.record(entry)
        except Exception as exc:
            logger.error("Failed to log %s %s %s: %s", action_type.value, entity_type.value, entity_id, exc)
            return False
        return True
