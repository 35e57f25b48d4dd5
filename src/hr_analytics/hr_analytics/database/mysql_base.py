from __future__ import annotations

from contextlib import contextmanager
from datetime import date, datetime
from typing import Any, Dict, Iterator, List, Optional, Sequence, TypeVar

from ..core.constants import MAX_IN_CLAUSE_ITEMS
from .connection import DatabaseConnection

T = TypeVar("T")


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def placeholders(count: int) -> str:
    """Return ``%s,%s,...`` for an ``IN (...)`` clause."""
    if count <= 0:
        raise ValueError("IN clause needs at least one value")
    return ",".join(["%s"] * count)


def chunked(items: Sequence[T], size: int = MAX_IN_CLAUSE_ITEMS) -> Iterator[Sequence[T]]:
    for i in range(0, len(items), size):
        yield items[i:i + size]


def normalize_mysql_date(value: Any) -> Optional[date]:
    """Normalize DATE values across connector implementations.

    mysql-connector can return DATE as datetime.date, but values coming from
    string columns or views may arrive as datetime or 'YYYY-MM-DD' text.
    """

    if value is None:
        return None

    if isinstance(value, datetime):
        return value.date()

    if isinstance(value, date):
        return value

    if isinstance(value, str):
        v = value.strip()
        if not v:
            return None
        return datetime.strptime(v[:10], "%Y-%m-%d").date()

    raise TypeError(f"Unsupported MySQL DATE value type: {type(value)!r}")
