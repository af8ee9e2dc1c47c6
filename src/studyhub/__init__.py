"""studyhub: courses, flashcards, quizzes and learners in durable key-value tables."""

__version__ = "0.1.0"
