"""Named operation surface.

Maps the public operation names (createCourse, getQuizzesForCourse, ...)
onto StudyService methods and wraps each call in an OperationResult, so a
caller that dispatches by name always gets an explicit success or failure
value back instead of an exception.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import structlog

from studyhub.core.errors import StudyHubError, UnknownOperationError
from studyhub.core.service import StudyService

logger = structlog.get_logger(__name__)

# operation name -> (StudyService method name, mutating)
OPERATIONS: dict[str, tuple[str, bool]] = {
    "createCourse": ("create_course", True),
    "getCourse": ("get_course", False),
    "getAllCourses": ("get_all_courses", False),
    "updateCourse": ("update_course", True),
    "deleteCourse": ("delete_course", True),
    "createFlashcard": ("create_flashcard", True),
    "getFlashcard": ("get_flashcard", False),
    "getFlashcardsForCourse": ("get_flashcards_for_course", False),
    "createQuiz": ("create_quiz", True),
    "getQuiz": ("get_quiz", False),
    "getQuizzesForCourse": ("get_quizzes_for_course", False),
    "createUser": ("create_user", True),
    "getUser": ("get_user", False),
    "getAllUsers": ("get_all_users", False),
    "setLanguageLearningGoal": ("set_language_learning_goal", True),
}


@dataclass
class OperationResult:
    """Outcome of one named operation."""

    success: bool
    value: Any = None
    error: StudyHubError | None = None

    @property
    def message(self) -> str:
        return str(self.error) if self.error else ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to {"Ok": value} or {"Err": message}."""
        if not self.success:
            return {"Err": self.message}
        return {"Ok": _serialize(self.value)}


def is_mutating(name: str) -> bool:
    """True if the named operation writes to a table."""
    if name not in OPERATIONS:
        raise UnknownOperationError(name)
    return OPERATIONS[name][1]


def execute(service: StudyService, name: str, *args: Any) -> OperationResult:
    """Run a named operation and capture its outcome.

    Expected failures (validation, not found, store write, unknown name)
    become an unsuccessful OperationResult. Anything else propagates.
    """
    try:
        mutating = is_mutating(name)
        method_name = OPERATIONS[name][0]
        value = getattr(service, method_name)(*args)
    except StudyHubError as e:
        logger.debug("operation.failed", operation=name, error=str(e))
        return OperationResult(success=False, error=e)

    logger.debug("operation.executed", operation=name, mutating=mutating)
    return OperationResult(success=True, value=value)


def _serialize(value: Any) -> Any:
    if isinstance(value, list):
        return [_serialize(item) for item in value]
    if hasattr(value, "to_dict"):
        return value.to_dict()
    return value
