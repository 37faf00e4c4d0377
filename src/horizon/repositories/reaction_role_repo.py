"""
Repository for the ``reaction_roles`` and ``reaction_role_pairs`` tables.
"""

from __future__ import annotations

from typing import Iterable, Optional, Set

from horizon.database.db_connection import ConnectionManager, db_connection
from horizon.datatypes.community_datatypes import ReactionRolePair, ReactionRoleRecord


class ReactionRoleRepository:
    """Lookup and registration of reaction-role messages."""

    def __init__(self, connection: ConnectionManager = db_connection) -> None:
        self._db = connection

    async def find_one(self, message_id: int) -> Optional[ReactionRoleRecord]:
        async with self._db.read() as conn:
            async with conn.execute(
                "SELECT message_id, guild_id, channel_id FROM reaction_roles WHERE message_id = ?",
                (message_id,),
            ) as cursor:
                row = await cursor.fetchone()
            if row is None:
                return None
            async with conn.execute(
                "SELECT reaction, role_id FROM reaction_role_pairs WHERE message_id = ?",
                (message_id,),
            ) as cursor:
                pairs = await cursor.fetchall()

        return ReactionRoleRecord(
            message_id=row[0],
            guild_id=row[1],
            channel_id=row[2],
            pairs=[ReactionRolePair(reaction=reaction, role_id=role_id) for reaction, role_id in pairs],
        )

    async def list_message_ids(self) -> Set[int]:
        async with self._db.read() as conn:
            async with conn.execute("SELECT message_id FROM reaction_roles") as cursor:
                rows = await cursor.fetchall()
        return {row[0] for row in rows}

    async def create(
        self,
        message_id: int,
        guild_id: int,
        channel_id: int,
        pairs: Iterable[ReactionRolePair],
    ) -> None:
        async with self._db.transaction() as conn:
            await conn.execute(
                "INSERT INTO reaction_roles (message_id, guild_id, channel_id) VALUES (?, ?, ?)",
                (message_id, guild_id, channel_id),
            )
            await conn.executemany(
                "INSERT INTO reaction_role_pairs (message_id, reaction, role_id) VALUES (?, ?, ?)",
                [(message_id, pair.reaction, pair.role_id) for pair in pairs],
            )
