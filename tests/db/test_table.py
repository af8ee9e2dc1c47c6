"""Tests for the durable key-value table."""

import sqlite3

import pytest

from studyhub.core.errors import StoreWriteError
from studyhub.core.models import Course, Flashcard
from studyhub.db.database import get_db
from studyhub.db.store import Store
from studyhub.db.table import Table


def _course(course_id: str, name: str = "Spanish") -> Course:
    return Course(id=course_id, name=name, description="desc", created_at=10)


class TestPutAndGet:
    """Tests for Table.put / Table.get."""

    def test_get_returns_stored_record(self, store):
        """A stored record comes back equal to what was put."""
        course = _course("c1")
        store.courses.put("c1", course)

        assert store.courses.get("c1") == course

    def test_get_missing_returns_none(self, store):
        """Missing key is a normal outcome, not an error."""
        assert store.courses.get("nope") is None

    def test_put_overwrites_existing_key(self, store):
        """Second put on the same key replaces the record."""
        store.courses.put("c1", _course("c1", name="Old"))
        store.courses.put("c1", _course("c1", name="New"))

        assert store.courses.get("c1").name == "New"
        assert len(store.courses.values()) == 1

    def test_optional_field_round_trips_as_none(self, store):
        """updated_at=None is stored and read back as None."""
        store.courses.put("c1", _course("c1"))

        assert store.courses.get("c1").updated_at is None

    def test_data_survives_new_store_instance(self, db_path):
        """Records are durable across Store instances on the same file."""
        Store(db_path).courses.put("c1", _course("c1"))

        reopened = Store(db_path)
        assert reopened.courses.get("c1") == _course("c1")


class TestRemove:
    """Tests for Table.remove."""

    def test_remove_existing(self, store):
        """Remove deletes the record and reports it."""
        store.courses.put("c1", _course("c1"))

        assert store.courses.remove("c1") is True
        assert store.courses.get("c1") is None

    def test_remove_missing_is_noop(self, store):
        """Removing an absent key is not an error."""
        assert store.courses.remove("ghost") is False


class TestValues:
    """Tests for Table.values."""

    def test_values_empty_table(self, store):
        assert store.courses.values() == []

    def test_values_returns_every_record(self, store):
        """Every stored record is returned regardless of insertion order."""
        for key in ("c3", "c1", "c2"):
            store.courses.put(key, _course(key))

        ids = {course.id for course in store.courses.values()}
        assert ids == {"c1", "c2", "c3"}

    def test_values_excludes_removed(self, store):
        store.courses.put("c1", _course("c1"))
        store.courses.put("c2", _course("c2"))
        store.courses.remove("c1")

        assert [c.id for c in store.courses.values()] == ["c2"]

    def test_contains(self, store):
        store.courses.put("c1", _course("c1"))

        assert "c1" in store.courses
        assert "c2" not in store.courses


class TestNamespaces:
    """Tests that tables sharing a database never see each other's keys."""

    def test_same_key_in_two_tables(self, store):
        """One key can hold independent records in different tables."""
        store.courses.put("shared", _course("shared"))
        store.flashcards.put(
            "shared",
            Flashcard(
                id="shared",
                term="hola",
                definition="hello",
                course_id="shared",
                created_at=1,
                updated_at=1,
            ),
        )

        assert store.courses.get("shared").name == "Spanish"
        assert store.flashcards.get("shared").term == "hola"

    def test_remove_only_affects_own_table(self, store):
        store.courses.put("k", _course("k"))
        store.users.remove("k")

        assert store.courses.get("k") is not None

    def test_values_scoped_to_table(self, store):
        store.courses.put("c1", _course("c1"))

        assert store.quizzes.values() == []
        assert len(store.courses.values()) == 1


class TestWriteFailures:
    """Tests for StoreWriteError on capacity limits and backend errors."""

    def test_key_too_large(self, db_path):
        """Keys beyond max_key_size are rejected with StoreWriteError."""
        store = Store(db_path, max_key_size=8)
        long_key = "k" * 9

        with pytest.raises(StoreWriteError) as exc_info:
            store.courses.put(long_key, _course(long_key))

        assert exc_info.value.table == "courses"
        assert exc_info.value.key == long_key
        assert store.courses.get(long_key) is None

    def test_value_too_large(self, db_path):
        """Encoded values beyond max_value_size are rejected."""
        store = Store(db_path, max_value_size=128)
        course = Course(id="c1", name="x" * 200, description="d", created_at=1)

        with pytest.raises(StoreWriteError, match="max 128"):
            store.courses.put("c1", course)

        assert store.courses.get("c1") is None

    def test_default_limits_accept_uuid_keys(self, store):
        """A 36-character UUID key fits the default 44-byte limit."""
        key = "123e4567-e89b-12d3-a456-426614174000"
        store.courses.put(key, _course(key))

        assert store.courses.get(key) is not None

    def test_backend_error_surfaces_as_store_write_error(self, store, db_path):
        """A failing SQLite write becomes StoreWriteError, not a crash."""
        with get_db(db_path) as conn:
            conn.execute("DROP TABLE stable_records")

        with pytest.raises(StoreWriteError) as exc_info:
            store.courses.put("c1", _course("c1"))

        assert isinstance(exc_info.value.__cause__, sqlite3.Error)

    def test_unencodable_value_is_store_write_error(self, store):
        """A field JSON cannot encode fails the write instead of raising TypeError."""
        course = Course(id="c1", name=b"bytes", description="d", created_at=1)

        with pytest.raises(StoreWriteError, match="not JSON encodable") as exc_info:
            store.courses.put("c1", course)

        assert isinstance(exc_info.value.__cause__, TypeError)
        assert store.courses.get("c1") is None


class TestTableDirect:
    """Tests for constructing a Table outside a Store."""

    def test_custom_namespace(self, store, db_path):
        """A Table with a new namespace id is isolated from the store's tables."""
        extra = Table(db_path, 42, "extra", Course)
        extra.put("c1", _course("c1"))

        assert store.courses.get("c1") is None
        assert extra.get("c1") == _course("c1")
