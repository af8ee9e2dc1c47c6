"""Entity lifecycle manager.

Responsibilities:
- Validate creation payloads before any write
- Generate ids and stamp created_at/updated_at
- Apply partial updates to courses
- Enforce the not-found contract for get/update/delete
- Answer "children of a course" queries via the filter layer

Timestamps: courses start with updated_at=None; flashcards, quizzes and
users start with updated_at equal to created_at. Setting a user's goal does
not touch updated_at.
"""

from __future__ import annotations

import time
import uuid
from typing import Any, Callable, Mapping, TypeVar

import structlog

from studyhub.core.errors import NotFoundError, StoreWriteError
from studyhub.core.filters import list_by_parent
from studyhub.core.models import (
    Course,
    Flashcard,
    Quiz,
    User,
    apply_course_update,
    apply_user_goals,
)
from studyhub.db.store import Store
from studyhub.db.table import Table
from studyhub.utils.validators import as_string_list, require_fields

logger = structlog.get_logger(__name__)

V = TypeVar("V")

# Required creation fields, checked in this order
COURSE_REQUIRED = ("name", "description")
FLASHCARD_REQUIRED = ("term", "definition", "courseId")
QUIZ_REQUIRED = ("question", "options", "correctAnswer", "courseId")
USER_REQUIRED = ("name", "email", "progress", "goals")

# Attempts before giving up on finding an unused id
MAX_ID_ATTEMPTS = 5


def _uuid4_str() -> str:
    return str(uuid.uuid4())


class StudyService:
    """Create/read/update/delete operations for all four entity kinds.

    Args:
        store: Open Store holding the entity tables
        id_factory: Returns a fresh id string. Defaults to random UUID4.
        clock: Returns the current time in nanoseconds. Defaults to time.time_ns.
    """

    def __init__(
        self,
        store: Store,
        id_factory: Callable[[], str] | None = None,
        clock: Callable[[], int] | None = None,
    ):
        self.store = store
        self.id_factory = id_factory or _uuid4_str
        self.clock = clock or time.time_ns

    # =========================================================================
    # COURSES
    # =========================================================================

    def create_course(self, payload: Mapping[str, Any]) -> Course:
        """Create a course from {name, description}."""
        require_fields("createCourse", payload, COURSE_REQUIRED)

        with self.store.lock:
            course = Course(
                id=self._new_id(self.store.courses),
                name=payload["name"],
                description=payload["description"],
                created_at=self.clock(),
                updated_at=None,
            )
            self.store.courses.put(course.id, course)

        logger.info("courses.created", course_id=course.id)
        return course

    def get_course(self, course_id: str) -> Course:
        return self._get(self.store.courses, "Course", course_id)

    def get_all_courses(self) -> list[Course]:
        return self.store.courses.values()

    def update_course(self, course_id: str, payload: Mapping[str, Any]) -> Course:
        """Overlay the supplied fields onto a course and refresh updated_at.

        Raises:
            NotFoundError: If no course has this id
        """
        with self.store.lock:
            existing = self._get(self.store.courses, "Course", course_id)
            updated = apply_course_update(
                existing, payload, self._next_update_time(existing)
            )
            self.store.courses.put(updated.id, updated)

        logger.debug("courses.updated", course_id=course_id)
        return updated

    def delete_course(self, course_id: str) -> Course:
        """Delete a course and return it as it was before removal.

        Flashcards and quizzes that refer to the course are left in place.

        Raises:
            NotFoundError: If no course has this id
        """
        with self.store.lock:
            existing = self._get(self.store.courses, "Course", course_id)
            self.store.courses.remove(course_id)

        logger.info("courses.deleted", course_id=course_id)
        return existing

    # =========================================================================
    # FLASHCARDS
    # =========================================================================

    def create_flashcard(self, payload: Mapping[str, Any]) -> Flashcard:
        """Create a flashcard from {term, definition, courseId}.

        courseId is stored as given; the course does not have to exist.
        """
        require_fields("createFlashcard", payload, FLASHCARD_REQUIRED)

        with self.store.lock:
            now = self.clock()
            flashcard = Flashcard(
                id=self._new_id(self.store.flashcards),
                term=payload["term"],
                definition=payload["definition"],
                course_id=payload["courseId"],
                created_at=now,
                updated_at=now,
            )
            self.store.flashcards.put(flashcard.id, flashcard)

        logger.info(
            "flashcards.created", flashcard_id=flashcard.id, course_id=flashcard.course_id
        )
        return flashcard

    def get_flashcard(self, flashcard_id: str) -> Flashcard:
        return self._get(self.store.flashcards, "Flashcard", flashcard_id)

    def get_flashcards_for_course(self, course_id: str) -> list[Flashcard]:
        return list_by_parent(self.store.flashcards, course_id)

    # =========================================================================
    # QUIZZES
    # =========================================================================

    def create_quiz(self, payload: Mapping[str, Any]) -> Quiz:
        """Create a quiz from {question, options, correctAnswer, courseId}.

        options may hold duplicates and need not contain correctAnswer.
        """
        require_fields("createQuiz", payload, QUIZ_REQUIRED)
        options = as_string_list("createQuiz", "options", payload["options"])

        with self.store.lock:
            now = self.clock()
            quiz = Quiz(
                id=self._new_id(self.store.quizzes),
                question=payload["question"],
                options=options,
                correct_answer=payload["correctAnswer"],
                course_id=payload["courseId"],
                created_at=now,
                updated_at=now,
            )
            self.store.quizzes.put(quiz.id, quiz)

        logger.info("quizzes.created", quiz_id=quiz.id, course_id=quiz.course_id)
        return quiz

    def get_quiz(self, quiz_id: str) -> Quiz:
        return self._get(self.store.quizzes, "Quiz", quiz_id)

    def get_quizzes_for_course(self, course_id: str) -> list[Quiz]:
        return list_by_parent(self.store.quizzes, course_id)

    # =========================================================================
    # USERS
    # =========================================================================

    def create_user(self, payload: Mapping[str, Any]) -> User:
        """Create a user from {name, email, progress, goals}.

        courses starts empty. email is not checked for format or uniqueness.
        """
        require_fields("createUser", payload, USER_REQUIRED)

        with self.store.lock:
            now = self.clock()
            user = User(
                id=self._new_id(self.store.users),
                name=payload["name"],
                email=payload["email"],
                progress=payload["progress"],
                goals=payload["goals"],
                courses=(),
                created_at=now,
                updated_at=now,
            )
            self.store.users.put(user.id, user)

        logger.info("users.created", user_id=user.id)
        return user

    def get_user(self, user_id: str) -> User:
        return self._get(self.store.users, "User", user_id)

    def get_all_users(self) -> list[User]:
        return self.store.users.values()

    def set_language_learning_goal(self, user_id: str, target: str) -> User:
        """Replace a user's goals with target.

        Only goals changes; updated_at keeps its previous value.

        Raises:
            NotFoundError: If no user has this id
        """
        with self.store.lock:
            user = apply_user_goals(self._get(self.store.users, "User", user_id), target)
            self.store.users.put(user_id, user)

        logger.debug("users.goal_set", user_id=user_id, goals=target)
        return user

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _get(self, table: Table[V], entity: str, entity_id: str) -> V:
        record = table.get(entity_id)
        if record is None:
            logger.warning("record.not_found", table=table.name, id=entity_id)
            raise NotFoundError(entity, entity_id)
        return record

    def _new_id(self, table: Table) -> str:
        for _ in range(MAX_ID_ATTEMPTS):
            candidate = self.id_factory()
            if candidate not in table:
                return candidate
            logger.warning("id.collision", table=table.name, id=candidate)

        raise StoreWriteError(table.name, candidate, "could not generate an unused id")

    def _next_update_time(self, record: Course) -> int:
        """Current time, never earlier than the record's last timestamp."""
        previous = record.updated_at if record.updated_at is not None else record.created_at
        return max(self.clock(), previous)
