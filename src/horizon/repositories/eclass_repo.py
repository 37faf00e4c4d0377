"""
Repository for the ``eclasses`` table.
"""

from __future__ import annotations

from typing import Optional, Set

from horizon.database.db_connection import ConnectionManager, db_connection
from horizon.datatypes.community_datatypes import EclassRecord


class EclassRepository:
    """Lookup of e-classes by the id of their announcement message."""

    def __init__(self, connection: ConnectionManager = db_connection) -> None:
        self._db = connection

    async def find_one(self, announcement_message_id: int) -> Optional[EclassRecord]:
        async with self._db.read() as conn:
            async with conn.execute(
                "SELECT announcement_message_id, guild_id, role_id, subject, date "
                "FROM eclasses WHERE announcement_message_id = ?",
                (announcement_message_id,),
            ) as cursor:
                row = await cursor.fetchone()
        if row is None:
            return None
        return EclassRecord(
            announcement_message_id=row[0],
            guild_id=row[1],
            role_id=row[2],
            subject=row[3],
            date=row[4],
        )

    async def list_message_ids(self) -> Set[int]:
        async with self._db.read() as conn:
            async with conn.execute("SELECT announcement_message_id FROM eclasses") as cursor:
                rows = await cursor.fetchall()
        return {row[0] for row in rows}

    async def create(self, record: EclassRecord) -> None:
        async with self._db.transaction() as conn:
            await conn.execute(
                "INSERT INTO eclasses (announcement_message_id, guild_id, role_id, subject, date) "
                "VALUES (?, ?, ?, ?, ?)",
                (record.announcement_message_id, record.guild_id, record.role_id, record.subject, record.date),
            )
