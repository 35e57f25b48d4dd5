from __future__ import annotations

import json

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor
from .model import ActivityEntry
from .repository import ActivityLogRepository


class MySQLActivityLogRepository(ActivityLogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def record(self, entry: ActivityEntry) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO activity_logs(actor, action_type, entity_type, entity_id, description, metadata)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (
                    entry.actor,
                    entry.action_type.value,
                    entry.entity_type.value,
                    entry.entity_id,
                    entry.description[:255],
                    json.dumps(entry.metadata, default=str),
                ),
            )
            return int(cur.lastrowid)
