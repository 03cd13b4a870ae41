"""
Lightweight SQLite log store for relay exchanges.

Creates the DB file at the configured path (default data/chat_logs.db, relative
to the working directory). Table: chat_logs (id, timestamp, query, response, context).
Optional: the relay only writes here when LOG_STORE_ENABLED is set, and writes are
best effort.
"""

import logging
import sqlite3
from pathlib import Path

from symptom_checker.schemas.relay import LogRecord

logger = logging.getLogger(__name__)

_TABLE = "chat_logs"


def _get_conn(db_path: str | Path) -> sqlite3.Connection:
    path = Path(db_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    return sqlite3.connect(str(path))


def init_db(db_path: str | Path) -> None:
    """Create the chat_logs table if it does not exist."""
    conn = _get_conn(db_path)
    try:
        conn.execute(
            f"""
            CREATE TABLE IF NOT EXISTS {_TABLE} (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                timestamp TEXT NOT NULL,
                query TEXT NOT NULL,
                response TEXT NOT NULL,
                context TEXT NOT NULL
            )
            """
        )
        conn.commit()
    finally:
        conn.close()


def insert_log(db_path: str | Path, record: LogRecord) -> None:
    """Insert one exchange. Raises on any SQLite error."""
    init_db(db_path)
    conn = _get_conn(db_path)
    try:
        conn.execute(
            f"INSERT INTO {_TABLE} (timestamp, query, response, context) VALUES (?, ?, ?, ?)",
            (record.timestamp, record.query, record.response, record.context),
        )
        conn.commit()
        logger.info("[log_store] logged exchange query_len=%d response_len=%d", len(record.query), len(record.response))
    finally:
        conn.close()


def write_log_safely(db_path: str | Path, record: LogRecord) -> None:
    """Best-effort insert for background tasks: errors are logged, never raised."""
    try:
        insert_log(db_path, record)
    except Exception as e:
        logger.error("[log_store] log write failed: %s", e)


def get_recent_logs(db_path: str | Path, limit: int = 20) -> list[LogRecord]:
    """Return up to `limit` logged exchanges, newest first."""
    init_db(db_path)
    conn = _get_conn(db_path)
    try:
        cur = conn.execute(
            f"SELECT timestamp, query, response, context FROM {_TABLE} ORDER BY id DESC LIMIT ?",
            (max(limit, 0),),
        )
        return [
            LogRecord(timestamp=row[0], query=row[1], response=row[2], context=row[3])
            for row in cur.fetchall()
        ]
    finally:
        conn.close()


def clear_all(db_path: str | Path) -> int:
    """Delete all rows. Returns the number removed."""
    init_db(db_path)
    conn = _get_conn(db_path)
    try:
        cur = conn.execute(f"DELETE FROM {_TABLE}")
        conn.commit()
        logger.info("[log_store] cleared %d rows", cur.rowcount)
        return cur.rowcount
    finally:
        conn.close()
