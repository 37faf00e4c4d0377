"""
Database initialization and shutdown.

The Database class owns the lifecycle of the shared SQLite connection and
the schema; repositories in :mod:`horizon.repositories` run their queries
through :data:`horizon.database.db_connection.db_connection`.
"""

from __future__ import annotations

from pathlib import Path

from horizon.database.db_connection import ConnectionManager, db_connection
from horizon.database.db_schema import SchemaManager
from horizon.util.logger import get_logger

logger = get_logger("database")

DB_PATH = Path("./data/app.db").resolve()


class Database:
    """
    Coordinates connection opening and schema creation.

    Lifecycle:
        1. ``await initialize()`` at startup
        2. repositories use the shared connection
        3. ``await shutdown()`` at exit
    """

    def __init__(self, db_path: Path = DB_PATH, connection: ConnectionManager = db_connection):
        self.db_path = db_path
        self.connection = connection
        self._initialized = False

    async def initialize(self) -> bool:
        """
        Open the connection and create the schema.

        Returns:
            True if the database is ready, False otherwise
        """
        if self._initialized:
            logger.debug("[DATABASE] Already initialized, skipping")
            return True

        try:
            await self.connection.open(self.db_path)
            await SchemaManager.initialize_schema(self.connection.connection)
        except Exception as e:
            logger.error("[DATABASE] Database initialization failed: %s", e)
            await self.connection.close()
            return False

        self._initialized = True
        logger.info("[DATABASE] Database initialized at %s", self.db_path)
        return True

    async def shutdown(self) -> None:
        if not self._initialized:
            return

        await self.connection.close()
        self._initialized = False
        logger.info("[DATABASE] Database shutdown complete")


# Global Database instance
database = Database()


def get_db() -> Database:
    """Return the global :class:`Database` instance."""
    return database
