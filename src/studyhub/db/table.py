"""Durable key-value table for one entity kind.

Provides put/get/remove/values over the stable_records table,
restricted to a single namespace id.
"""

from __future__ import annotations

import json
import sqlite3
from pathlib import Path
from typing import Any, Generic, NoReturn, Protocol, TypeVar

import structlog

from studyhub.core.errors import StoreWriteError
from studyhub.db.database import get_db

logger = structlog.get_logger(__name__)


class Record(Protocol):
    """Shape every stored record type provides."""

    def to_dict(self) -> dict[str, Any]: ...

    @classmethod
    def from_dict(cls, data: Any) -> Any: ...


V = TypeVar("V", bound=Record)


class Table(Generic[V]):
    """A string-keyed durable mapping holding records of one type.

    Keys are limited to max_key_size bytes and encoded values to
    max_value_size bytes (UTF-8). Writes beyond either limit, or any
    SQLite failure during a write, raise StoreWriteError.
    """

    def __init__(
        self,
        db_path: Path,
        namespace_id: int,
        name: str,
        record_type: type[V],
        max_key_size: int = 44,
        max_value_size: int = 1024,
    ):
        self.db_path = db_path
        self.namespace_id = namespace_id
        self.name = name
        self.record_type = record_type
        self.max_key_size = max_key_size
        self.max_value_size = max_value_size

    def put(self, key: str, value: V) -> None:
        """Insert or overwrite the record stored at key."""
        key_size = len(key.encode("utf-8"))
        if key_size > self.max_key_size:
            self._write_failed(
                key, f"key is {key_size} bytes (max {self.max_key_size})"
            )

        try:
            encoded = json.dumps(value.to_dict(), ensure_ascii=False)
        except (TypeError, ValueError) as e:
            self._write_failed(key, f"value is not JSON encodable: {e}", cause=e)

        value_size = len(encoded.encode("utf-8"))
        if value_size > self.max_value_size:
            self._write_failed(
                key, f"value is {value_size} bytes (max {self.max_value_size})"
            )

        try:
            with get_db(self.db_path) as conn:
                conn.execute(
                    """
                    INSERT OR REPLACE INTO stable_records (
                        namespace_id, record_key, record_value
                    ) VALUES (?, ?, ?)
                    """,
                    (self.namespace_id, key, encoded),
                )
        except sqlite3.Error as e:
            self._write_failed(key, str(e), cause=e)

        logger.debug("table.put", table=self.name, key=key)

    def get(self, key: str) -> V | None:
        """Get record by key.

        Returns:
            The record if present, None otherwise
        """
        with get_db(self.db_path) as conn:
            row = conn.execute(
                "SELECT record_value FROM stable_records "
                "WHERE namespace_id = ? AND record_key = ?",
                (self.namespace_id, key),
            ).fetchone()

        if row is None:
            return None

        return self._decode(row["record_value"])

    def remove(self, key: str) -> bool:
        """Delete record by key.

        Returns:
            True if deleted, False if there was nothing to delete
        """
        try:
            with get_db(self.db_path) as conn:
                cursor = conn.execute(
                    "DELETE FROM stable_records "
                    "WHERE namespace_id = ? AND record_key = ?",
                    (self.namespace_id, key),
                )
        except sqlite3.Error as e:
            self._write_failed(key, str(e), cause=e)

        deleted = cursor.rowcount > 0
        if deleted:
            logger.debug("table.removed", table=self.name, key=key)

        return deleted

    def values(self) -> list[V]:
        """Get every record in the table.

        The rows come from a single SELECT, so the result is a consistent
        snapshot. Callers must not rely on the order.
        """
        with get_db(self.db_path) as conn:
            rows = conn.execute(
                "SELECT record_value FROM stable_records "
                "WHERE namespace_id = ? ORDER BY record_key",
                (self.namespace_id,),
            ).fetchall()

        return [self._decode(row["record_value"]) for row in rows]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None

    def _decode(self, raw: str) -> V:
        return self.record_type.from_dict(json.loads(raw))

    def _write_failed(
        self, key: str, reason: str, cause: Exception | None = None
    ) -> NoReturn:
        logger.error("table.write_failed", table=self.name, key=key, reason=reason)
        raise StoreWriteError(self.name, key, reason) from cause
