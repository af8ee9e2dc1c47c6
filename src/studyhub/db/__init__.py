"""Database module for SQLite persistence.

Provides:
- Database connection management and schema initialization
- Table: durable key-value mapping for one entity kind
- Store: the four entity tables sharing one database file
"""

from studyhub.db.database import get_db, init_db
from studyhub.db.store import Store
from studyhub.db.table import Table

__all__ = ["get_db", "init_db", "Store", "Table"]
