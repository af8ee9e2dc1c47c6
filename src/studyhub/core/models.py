"""Entity records: Course, Flashcard, Quiz, User.

Records are persisted as JSON using the camelCase wire names
(courseId, correctAnswer, createdAt, updatedAt) while attributes are
snake_case. Timestamps are integer nanoseconds since the epoch; updated_at
is None until first set.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Mapping


# =============================================================================
# RECORDS
# =============================================================================


@dataclass(frozen=True)
class Course:
    """A course that flashcards and quizzes refer to by id."""

    id: str
    name: str
    description: str
    created_at: int
    updated_at: int | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Course:
        """Create from dictionary."""
        return cls(
            id=data["id"],
            name=data["name"],
            description=data["description"],
            created_at=data["createdAt"],
            updated_at=data.get("updatedAt"),
        )


@dataclass(frozen=True)
class Flashcard:
    """A term/definition pair belonging to a course."""

    id: str
    term: str
    definition: str
    course_id: str
    created_at: int
    updated_at: int | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "term": self.term,
            "definition": self.definition,
            "courseId": self.course_id,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Flashcard:
        """Create from dictionary."""
        return cls(
            id=data["id"],
            term=data["term"],
            definition=data["definition"],
            course_id=data["courseId"],
            created_at=data["createdAt"],
            updated_at=data.get("updatedAt"),
        )


@dataclass(frozen=True)
class Quiz:
    """A multiple-choice question belonging to a course.

    correct_answer is not required to be one of the options.
    """

    id: str
    question: str
    options: tuple[str, ...]
    correct_answer: str
    course_id: str
    created_at: int
    updated_at: int | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "question": self.question,
            "options": list(self.options),
            "correctAnswer": self.correct_answer,
            "courseId": self.course_id,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Quiz:
        """Create from dictionary."""
        return cls(
            id=data["id"],
            question=data["question"],
            options=tuple(data.get("options", [])),
            correct_answer=data["correctAnswer"],
            course_id=data["courseId"],
            created_at=data["createdAt"],
            updated_at=data.get("updatedAt"),
        )


@dataclass(frozen=True)
class User:
    """A learner with enrolled course ids, progress and goals."""

    id: str
    name: str
    email: str
    progress: str
    goals: str
    created_at: int
    courses: tuple[str, ...] = field(default_factory=tuple)
    updated_at: int | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "courses": list(self.courses),
            "progress": self.progress,
            "goals": self.goals,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> User:
        """Create from dictionary."""
        return cls(
            id=data["id"],
            name=data["name"],
            email=data["email"],
            courses=tuple(data.get("courses", [])),
            progress=data["progress"],
            goals=data["goals"],
            created_at=data["createdAt"],
            updated_at=data.get("updatedAt"),
        )


# =============================================================================
# PARTIAL UPDATES
# =============================================================================

COURSE_UPDATABLE_FIELDS = ("name", "description")


def apply_course_update(
    course: Course, payload: Mapping[str, Any], updated_at: int
) -> Course:
    """Overlay the payload's course fields onto an existing course.

    A field counts as supplied when its key is present with a non-None
    value; an empty string is a supplied value. id and created_at are
    never taken from the payload.
    """
    changes: dict[str, Any] = {
        name: payload[name]
        for name in COURSE_UPDATABLE_FIELDS
        if payload.get(name) is not None
    }
    return replace(course, updated_at=updated_at, **changes)


def apply_user_goals(user: User, goals: str) -> User:
    """Replace only the goals field; updated_at is left as it was."""
    return replace(user, goals=goals)
