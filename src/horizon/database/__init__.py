"""
SQLite storage for Horizon.

- **db_connection.py**: the single aiosqlite connection, serialised writes.
- **db_schema.py**: table and index creation.
- **database.py**: startup and shutdown coordination.
"""

from horizon.database.database import Database, database, get_db
from horizon.database.db_connection import ConnectionManager, db_connection

__all__ = ["Database", "database", "get_db", "ConnectionManager", "db_connection"]
