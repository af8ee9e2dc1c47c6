"""SQLite connection and schema management.

All entity tables live in one physical SQL table, partitioned by a fixed
namespace id, so several logical tables share one database file without
their keys ever colliding.
"""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

import structlog

logger = structlog.get_logger(__name__)


def init_db(db_path: Path) -> None:
    """Initialize database with schema.

    Creates the database file and the records table if they don't exist.

    Args:
        db_path: Path to database file
    """
    with get_db(db_path) as conn:
        _create_schema(conn)

    logger.info("database.initialized", path=str(db_path))


@contextmanager
def get_db(db_path: Path) -> Generator[sqlite3.Connection, None, None]:
    """Get database connection as context manager.

    Commits on clean exit, rolls back if the block raises.

    Example:
        with get_db(path) as conn:
            rows = conn.execute("SELECT * FROM stable_records").fetchall()
    """
    # Ensure directory exists
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row

    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def _create_schema(conn: sqlite3.Connection) -> None:
    """Create database schema.

    Uses IF NOT EXISTS for idempotency.
    """
    conn.executescript(
        """
        -- One row per record; namespace_id identifies the logical table
        CREATE TABLE IF NOT EXISTS stable_records (
            namespace_id INTEGER NOT NULL,
            record_key TEXT NOT NULL,
            record_value TEXT NOT NULL,
            PRIMARY KEY (namespace_id, record_key)
        );
        """
    )
