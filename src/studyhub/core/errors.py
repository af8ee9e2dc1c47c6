"""Error taxonomy for store and lifecycle operations.

- ValidationError: creation payload rejected before any write
  - MissingFieldError: a required field is absent or empty
  - InvalidFieldError: a field has the wrong shape
- NotFoundError: target id is absent from its table
- StoreWriteError: the durable write failed (capacity or backing store)
- UnknownOperationError: operation name not in the operation surface
"""

from __future__ import annotations


class StudyHubError(Exception):
    """Base exception for all expected studyhub failures."""

    pass


class ValidationError(StudyHubError):
    """Raised when a creation payload is rejected before any write."""

    def __init__(self, operation: str, field: str, message: str):
        self.operation = operation
        self.field = field
        super().__init__(message)


class MissingFieldError(ValidationError):
    """Raised when a creation payload is missing a required field."""

    def __init__(self, operation: str, field: str):
        super().__init__(
            operation, field, f"{operation}: missing required field '{field}'."
        )


class InvalidFieldError(ValidationError):
    """Raised when a payload field has the wrong shape."""

    def __init__(self, operation: str, field: str, reason: str):
        self.reason = reason
        super().__init__(
            operation, field, f"{operation}: invalid field '{field}': {reason}."
        )


class NotFoundError(StudyHubError):
    """Raised when an id is not present in the entity's table."""

    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} with ID={entity_id} not found.")


class StoreWriteError(StudyHubError):
    """Raised when a table write cannot be completed."""

    def __init__(self, table: str, key: str, reason: str):
        self.table = table
        self.key = key
        self.reason = reason
        super().__init__(f"Write to table '{table}' failed for key '{key}': {reason}")


class UnknownOperationError(StudyHubError):
    """Raised when an operation name is not recognized."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown operation '{name}'.")
