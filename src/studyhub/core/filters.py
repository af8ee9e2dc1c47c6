"""Parent/child lookups over a table without secondary indexes.

Each call scans every record of the child table, so cost grows linearly
with table size.
"""

from __future__ import annotations

from typing import TypeVar

from studyhub.db.table import Table

V = TypeVar("V")


def list_by_parent(
    table: Table[V], course_id: str, field: str = "course_id"
) -> list[V]:
    """Get all records whose foreign-key field equals course_id.

    Matching is exact string equality. Unknown or dangling ids simply
    produce an empty list.
    """
    return [
        record for record in table.values() if getattr(record, field) == course_id
    ]
