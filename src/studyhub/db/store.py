"""Store: the four entity tables over one database file.

Construct one Store at process start and pass it to StudyService. Tests
build a fresh Store per test for isolation.
"""

from __future__ import annotations

import threading
from pathlib import Path

import structlog

from studyhub.config.app_config import AppConfig, load_app_config
from studyhub.core.models import Course, Flashcard, Quiz, User
from studyhub.db.database import init_db
from studyhub.db.table import Table

logger = structlog.get_logger(__name__)

# Fixed table identifiers; never renumber, stored rows depend on them
COURSES_NAMESPACE = 0
FLASHCARDS_NAMESPACE = 1
QUIZZES_NAMESPACE = 2
USERS_NAMESPACE = 3


class Store:
    """Holds the courses, flashcards, quizzes and users tables.

    lock serializes read-modify-write sequences so concurrent callers
    cannot lose each other's updates.
    """

    def __init__(
        self,
        db_path: Path,
        max_key_size: int = 44,
        max_value_size: int = 1024,
    ):
        self.db_path = Path(db_path)
        self.lock = threading.RLock()

        init_db(self.db_path)

        limits = {"max_key_size": max_key_size, "max_value_size": max_value_size}
        self.courses: Table[Course] = Table(
            self.db_path, COURSES_NAMESPACE, "courses", Course, **limits
        )
        self.flashcards: Table[Flashcard] = Table(
            self.db_path, FLASHCARDS_NAMESPACE, "flashcards", Flashcard, **limits
        )
        self.quizzes: Table[Quiz] = Table(
            self.db_path, QUIZZES_NAMESPACE, "quizzes", Quiz, **limits
        )
        self.users: Table[User] = Table(
            self.db_path, USERS_NAMESPACE, "users", User, **limits
        )

        logger.debug("store.opened", path=str(self.db_path))

    @classmethod
    def from_config(
        cls, config: AppConfig | None = None, db_path: Path | None = None
    ) -> Store:
        """Open the store described by the application config.

        Args:
            config: Loaded config. Defaults to load_app_config().
            db_path: Overrides config.storage.db_path when given.
        """
        config = config or load_app_config()
        storage = config.storage
        return cls(
            db_path or storage.db_path,
            max_key_size=storage.max_key_size,
            max_value_size=storage.max_value_size,
        )
