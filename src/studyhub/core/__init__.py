"""Core business logic module.

Modules:
- errors: Error taxonomy shared by store and lifecycle code
- models: Course, Flashcard, Quiz and User records
- filters: Child-of-course lookups by linear scan
- service: StudyService lifecycle manager
- operations: Named operation surface returning OperationResult
"""

__all__ = [
    "errors",
    "models",
    "filters",
    "service",
    "operations",
]
