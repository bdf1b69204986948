from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterable, List, Optional, Sequence

from .connection import DatabaseConnection

KEYWORD_SEPARATOR = "|"


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


def join_keywords(keywords: Iterable[str]) -> str:
    """Search keywords are stored as one "|" separated TEXT column."""
    return KEYWORD_SEPARATOR.join(k for k in keywords if k)


def split_keywords(value: Optional[str]) -> tuple[str, ...]:
    return tuple(k for k in (value or "").split(KEYWORD_SEPARATOR) if k)


def build_where(clauses: Sequence[str]) -> str:
    return f"WHERE {' AND '.join(clauses)}" if clauses else ""
