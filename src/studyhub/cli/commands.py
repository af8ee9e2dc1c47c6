"""CLI commands for studyhub.

One command per store operation:
- Courses: create-course, get-course, list-courses, update-course, delete-course
- Flashcards: create-flashcard, get-flashcard, flashcards-for-course
- Quizzes: create-quiz, get-quiz, quizzes-for-course
- Users: create-user, get-user, list-users, set-goal

Records are printed as JSON on stdout. Failures print a message and exit 1.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Any

import structlog
import typer
from rich.console import Console

from studyhub.config.app_config import load_app_config
from studyhub.core.operations import execute
from studyhub.core.service import StudyService
from studyhub.db.store import Store

app = typer.Typer(
    name="studyhub",
    help="Courses, flashcards, quizzes and learners in a durable local store.",
    no_args_is_help=True,
)

console = Console()

DB_OPTION_HELP = "Database file (default: from data/config/studyhub_v1.yaml)"


def _configure_logging(verbose: bool) -> None:
    """Send log events to stderr so stdout carries only JSON records."""
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.DEBUG if verbose else logging.WARNING
        ),
        # Resolve stderr per call; test runners swap it between invocations
        logger_factory=lambda *args: structlog.PrintLogger(sys.stderr),
    )


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs"),
) -> None:
    """Courses, flashcards, quizzes and learners in a durable local store."""
    _configure_logging(verbose)


def _open_service(db: str | None) -> StudyService:
    """Open the configured store, or the one at --db."""
    db_path = Path(db).expanduser() if db else None
    return StudyService(Store.from_config(load_app_config(), db_path=db_path))


def _run(db: str | None, operation: str, *args: Any) -> None:
    """Execute a named operation and print its value, or exit 1 on failure."""
    result = execute(_open_service(db), operation, *args)

    if not result.success:
        console.print(f"[red]✗ {result.message}[/red]")
        raise typer.Exit(code=1)

    typer.echo(json.dumps(result.to_dict()["Ok"], indent=2, ensure_ascii=False))


# =============================================================================
# STORE
# =============================================================================


@app.command(name="init-db")
def init_db(
    db: str | None = typer.Option(None, "--db", help=DB_OPTION_HELP),
) -> None:
    """Create the database file and schema if missing."""
    service = _open_service(db)
    console.print(f"[green]✓ Store ready:[/green] {service.store.db_path}")


# =============================================================================
# COURSES
# =============================================================================


@app.command(name="create-course")
def create_course(
    name: str = typer.Argument(..., help="Course name"),
    description: str = typer.Argument(..., help="Course description"),
    db: str | None = typer.Option(None, "--db", help=DB_OPTION_HELP),
) -> None:
    """Create a course."""
    _run(db, "createCourse", {"name": name, "description": description})


@app.command(name="get-course")
def get_course(
    course_id: str = typer.Argument(..., help="Course ID"),
    db: str | None = typer.Option(None, "--db", help=DB_OPTION_HELP),
) -> None:
    """Show one course."""
    _run(db, "getCourse", course_id)


@app.command(name="list-courses")
def list_courses(
    db: str | None = typer.Option(None, "--db", help=DB_OPTION_HELP),
) -> None:
    """List all courses."""
    _run(db, "getAllCourses")


@app.command(name="update-course")
def update_course(
    course_id: str = typer.Argument(..., help="Course ID"),
    name: str | None = typer.Option(None, "--name", "-n", help="New name"),
    description: str | None = typer.Option(
        None, "--description", "-d", help="New description"
    ),
    db: str | None = typer.Option(None, "--db", help=DB_OPTION_HELP),
) -> None:
    """Update a course's name and/or description."""
    payload = {}
    if name is not None:
        payload["name"] = name
    if description is not None:
        payload["description"] = description
    _run(db, "updateCourse", course_id, payload)


@app.command(name="delete-course")
def delete_course(
    course_id: str = typer.Argument(..., help="Course ID"),
    db: str | None = typer.Option(None, "--db", help=DB_OPTION_HELP),
) -> None:
    """Delete a course. Its flashcards and quizzes are kept."""
    _run(db, "deleteCourse", course_id)


# =============================================================================
# FLASHCARDS
# =============================================================================


@app.command(name="create-flashcard")
def create_flashcard(
    term: str = typer.Argument(..., help="Term"),
    definition: str = typer.Argument(..., help="Definition"),
    course_id: str = typer.Argument(..., help="Course ID"),
    db: str | None = typer.Option(None, "--db", help=DB_OPTION_HELP),
) -> None:
    """Create a flashcard for a course."""
    _run(
        db,
        "createFlashcard",
        {"term": term, "definition": definition, "courseId": course_id},
    )


@app.command(name="get-flashcard")
def get_flashcard(
    flashcard_id: str = typer.Argument(..., help="Flashcard ID"),
    db: str | None = typer.Option(None, "--db", help=DB_OPTION_HELP),
) -> None:
    """Show one flashcard."""
    _run(db, "getFlashcard", flashcard_id)


@app.command(name="flashcards-for-course")
def flashcards_for_course(
    course_id: str = typer.Argument(..., help="Course ID"),
    db: str | None = typer.Option(None, "--db", help=DB_OPTION_HELP),
) -> None:
    """List the flashcards that refer to a course."""
    _run(db, "getFlashcardsForCourse", course_id)


# =============================================================================
# QUIZZES
# =============================================================================


@app.command(name="create-quiz")
def create_quiz(
    question: str = typer.Argument(..., help="Question text"),
    correct_answer: str = typer.Argument(..., help="Correct answer"),
    course_id: str = typer.Argument(..., help="Course ID"),
    option: list[str] | None = typer.Option(
        None, "--option", "-o", help="Answer option (repeat for each option)"
    ),
    db: str | None = typer.Option(None, "--db", help=DB_OPTION_HELP),
) -> None:
    """Create a quiz for a course."""
    _run(
        db,
        "createQuiz",
        {
            "question": question,
            "options": list(option or []),
            "correctAnswer": correct_answer,
            "courseId": course_id,
        },
    )


@app.command(name="get-quiz")
def get_quiz(
    quiz_id: str = typer.Argument(..., help="Quiz ID"),
    db: str | None = typer.Option(None, "--db", help=DB_OPTION_HELP),
) -> None:
    """Show one quiz."""
    _run(db, "getQuiz", quiz_id)


@app.command(name="quizzes-for-course")
def quizzes_for_course(
    course_id: str = typer.Argument(..., help="Course ID"),
    db: str | None = typer.Option(None, "--db", help=DB_OPTION_HELP),
) -> None:
    """List the quizzes that refer to a course."""
    _run(db, "getQuizzesForCourse", course_id)


# =============================================================================
# USERS
# =============================================================================


@app.command(name="create-user")
def create_user(
    name: str = typer.Argument(..., help="User name"),
    email: str = typer.Argument(..., help="Email address"),
    progress: str = typer.Argument(..., help="Progress note, e.g. 'beginner'"),
    goals: str = typer.Argument(..., help="Learning goal, e.g. 'A1'"),
    db: str | None = typer.Option(None, "--db", help=DB_OPTION_HELP),
) -> None:
    """Create a user."""
    _run(
        db,
        "createUser",
        {"name": name, "email": email, "progress": progress, "goals": goals},
    )


@app.command(name="get-user")
def get_user(
    user_id: str = typer.Argument(..., help="User ID"),
    db: str | None = typer.Option(None, "--db", help=DB_OPTION_HELP),
) -> None:
    """Show one user."""
    _run(db, "getUser", user_id)


@app.command(name="list-users")
def list_users(
    db: str | None = typer.Option(None, "--db", help=DB_OPTION_HELP),
) -> None:
    """List all users."""
    _run(db, "getAllUsers")


@app.command(name="set-goal")
def set_goal(
    user_id: str = typer.Argument(..., help="User ID"),
    target: str = typer.Argument(..., help="New goal, e.g. 'B2'"),
    db: str | None = typer.Option(None, "--db", help=DB_OPTION_HELP),
) -> None:
    """Set a user's language learning goal."""
    _run(db, "setLanguageLearningGoal", user_id, target)


if __name__ == "__main__":
    app()
