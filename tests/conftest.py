"""Shared fixtures.

Every test gets a fresh Store in tmp_path, a deterministic id factory and a
manually driven clock, so results never depend on randomness or wall time.
"""

import itertools

import pytest
import structlog

from studyhub.config.app_config import clear_config_cache
from studyhub.core.service import StudyService
from studyhub.db.store import Store


class FakeClock:
    """Callable clock returning nanoseconds; moves only when told to."""

    def __init__(self, start: int = 1_700_000_000_000_000_000):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ns: int = 1_000) -> int:
        self.now += ns
        return self.now


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch):
    """Never let a developer's config, environment or log setup leak into tests."""
    monkeypatch.delenv("STUDYHUB_DB_PATH", raising=False)
    clear_config_cache()
    yield
    clear_config_cache()
    structlog.reset_defaults()


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "db" / "studyhub.db"


@pytest.fixture
def store(db_path) -> Store:
    return Store(db_path)


@pytest.fixture
def id_factory():
    """Ids id-001, id-002, ... in call order."""
    counter = itertools.count(1)
    return lambda: f"id-{next(counter):03d}"


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def service(store, id_factory, clock) -> StudyService:
    return StudyService(store, id_factory=id_factory, clock=clock)


@pytest.fixture
def course_payload():
    return {"name": "Spanish A1", "description": "Greetings and numbers"}


@pytest.fixture
def user_payload():
    return {
        "name": "Ana",
        "email": "a@x.com",
        "progress": "beginner",
        "goals": "A1",
    }
