"""
Repository for the ``guild_config`` table (guild id, key) -> snowflake value.
"""

from __future__ import annotations

from typing import Dict, Tuple

from horizon.database.db_connection import ConnectionManager, db_connection


class GuildConfigRepository:
    def __init__(self, connection: ConnectionManager = db_connection) -> None:
        self._db = connection

    async def load_all(self) -> Dict[Tuple[int, str], int]:
        async with self._db.read() as conn:
            async with conn.execute("SELECT guild_id, key, value FROM guild_config") as cursor:
                rows = await cursor.fetchall()
        return {(guild_id, key): value for guild_id, key, value in rows}

    async def upsert(self, guild_id: int, key: str, value: int) -> None:
        async with self._db.transaction() as conn:
            await conn.execute(
                """
                INSERT INTO guild_config (guild_id, key, value)
                VALUES (?, ?, ?)
                ON CONFLICT(guild_id, key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = CURRENT_TIMESTAMP
                """,
                (guild_id, key, value),
            )

    async def delete(self, guild_id: int, key: str) -> None:
        async with self._db.transaction() as conn:
            await conn.execute(
                "DELETE FROM guild_config WHERE guild_id = ? AND key = ?",
                (guild_id, key),
            )
