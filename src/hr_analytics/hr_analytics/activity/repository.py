from __future__ import annotations

from typing import Protocol

from .model import ActivityEntry


class ActivityLogRepository(Protocol):
    def record(self, entry: ActivityEntry) -> int:
        raise NotImplementedError
