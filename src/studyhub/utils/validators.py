"""Payload validation helpers.

A required field is missing when its key is absent or its value is falsy
(empty string, empty list, None).

Functions:
- require_fields(operation, payload, fields): Raise on first missing field
- as_string_list(operation, field, value) -> tuple[str, ...]: Check a list of strings
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from studyhub.core.errors import InvalidFieldError, MissingFieldError


def require_fields(
    operation: str, payload: Mapping[str, Any], fields: Iterable[str]
) -> None:
    """Check that every required field is present and truthy.

    Args:
        operation: Operation name used in the error message
        payload: Incoming field mapping
        fields: Names of the required fields, checked in order

    Raises:
        MissingFieldError: For the first field that is absent or falsy
    """
    for name in fields:
        if not payload.get(name):
            raise MissingFieldError(operation, name)


def as_string_list(operation: str, field: str, value: Any) -> tuple[str, ...]:
    """Return value as a tuple of strings.

    A bare string is rejected rather than split into characters.

    Raises:
        InvalidFieldError: If value is not a list or tuple of strings
    """
    if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
        raise InvalidFieldError(operation, field, "expected a list of strings")
    if not all(isinstance(item, str) for item in value):
        raise InvalidFieldError(operation, field, "every option must be a string")
    return tuple(value)
