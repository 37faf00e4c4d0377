"""
Database schema initialization.

Creates the tables and indexes backing flagged messages, reaction roles,
e-classes and per-guild configuration.
"""

import aiosqlite
from horizon.util.logger import get_logger

logger = get_logger("database_schema")

SCHEMA_VERSION = 1


class SchemaManager:
    """Creates the database schema and records its version."""

    @staticmethod
    async def initialize_schema(db: aiosqlite.Connection) -> None:
        """
        Create all tables and indexes if they do not exist yet.

        Args:
            db: Open database connection
        """
        await SchemaManager._create_tables(db)
        await SchemaManager._create_indexes(db)
        await db.execute(
            "INSERT OR IGNORE INTO schema_version (version) VALUES (?)",
            (SCHEMA_VERSION,),
        )
        await db.commit()
        logger.info("[SCHEMA] Database schema initialized (version %d)", SCHEMA_VERSION)

    @staticmethod
    async def _create_tables(db: aiosqlite.Connection) -> None:
        # Exactly one of swear / manual_moderator_id is set per row
        await db.execute("""
            CREATE TABLE IF NOT EXISTS flagged_messages (
                message_id INTEGER PRIMARY KEY,
                guild_id INTEGER NOT NULL,
                channel_id INTEGER NOT NULL,
                author_id INTEGER NOT NULL,
                swear TEXT,
                manual_moderator_id INTEGER,
                alert_message_id INTEGER,
                approved INTEGER NOT NULL DEFAULT 0,
                approved_date TEXT,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                CHECK ((swear IS NULL) != (manual_moderator_id IS NULL))
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS reaction_roles (
                message_id INTEGER PRIMARY KEY,
                guild_id INTEGER NOT NULL,
                channel_id INTEGER NOT NULL,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS reaction_role_pairs (
                message_id INTEGER NOT NULL,
                reaction TEXT NOT NULL,
                role_id INTEGER NOT NULL,
                PRIMARY KEY (message_id, reaction),
                FOREIGN KEY (message_id) REFERENCES reaction_roles(message_id) ON DELETE CASCADE
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS eclasses (
                announcement_message_id INTEGER PRIMARY KEY,
                guild_id INTEGER NOT NULL,
                role_id INTEGER NOT NULL,
                subject TEXT NOT NULL DEFAULT '',
                date TEXT NOT NULL DEFAULT ''
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS guild_config (
                guild_id INTEGER NOT NULL,
                key TEXT NOT NULL,
                value INTEGER NOT NULL,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                PRIMARY KEY (guild_id, key)
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS schema_version (
                version INTEGER PRIMARY KEY,
                applied_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

    @staticmethod
    async def _create_indexes(db: aiosqlite.Connection) -> None:
        await db.execute("CREATE INDEX IF NOT EXISTS idx_flagged_messages_pending ON flagged_messages(approved)")
        await db.execute("CREATE INDEX IF NOT EXISTS idx_flagged_messages_alert ON flagged_messages(alert_message_id)")
        await db.execute("CREATE INDEX IF NOT EXISTS idx_guild_config_guild ON guild_config(guild_id)")
