"""
Repository for the ``flagged_messages`` table.

Records are looked up by the id of the flagged message. Dates are stored
as ISO 8601 strings in UTC.
"""

from __future__ import annotations

import datetime
from typing import Any, List, Optional

from horizon.database.db_connection import ConnectionManager, db_connection
from horizon.datatypes.flag_datatypes import FlaggedMessageRecord
from horizon.util.logger import get_logger

logger = get_logger("flagged_message_repo")

_COLUMNS = (
    "message_id, guild_id, channel_id, author_id, swear, manual_moderator_id, "
    "alert_message_id, approved, approved_date"
)
_UPDATABLE = {"alert_message_id", "approved", "approved_date"}


def _to_column(value: Any) -> Any:
    if isinstance(value, datetime.datetime):
        return value.isoformat()
    if isinstance(value, bool):
        return int(value)
    return value


class FlaggedMessageRepository:
    """find / create / update / remove of flagged-message records."""

    def __init__(self, connection: ConnectionManager = db_connection) -> None:
        self._db = connection

    async def find_one(self, message_id: int) -> Optional[FlaggedMessageRecord]:
        async with self._db.read() as conn:
            async with conn.execute(
                f"SELECT {_COLUMNS} FROM flagged_messages WHERE message_id = ?",
                (message_id,),
            ) as cursor:
                row = await cursor.fetchone()
        return FlaggedMessageRecord.from_row(row) if row else None

    async def find_pending(self) -> List[FlaggedMessageRecord]:
        """Return every record still waiting for a moderator's approval."""
        async with self._db.read() as conn:
            async with conn.execute(
                f"SELECT {_COLUMNS} FROM flagged_messages WHERE approved = 0 ORDER BY created_at"
            ) as cursor:
                rows = await cursor.fetchall()
        return [FlaggedMessageRecord.from_row(row) for row in rows]

    async def create(self, record: FlaggedMessageRecord) -> FlaggedMessageRecord:
        async with self._db.transaction() as conn:
            await conn.execute(
                f"INSERT INTO flagged_messages ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    record.message_id,
                    record.guild_id,
                    record.channel_id,
                    record.author_id,
                    record.swear,
                    record.manual_moderator_id,
                    record.alert_message_id,
                    _to_column(record.approved),
                    _to_column(record.approved_date),
                ),
            )
        logger.debug("[FLAGGED MESSAGES] Created record for message %s", record.message_id)
        return record

    async def update_one(self, message_id: int, **fields: Any) -> None:
        """
        Update the given columns of a record.

        Raises:
            ValueError: If a field is not an updatable column.
        """
        if not fields:
            return
        unknown = set(fields) - _UPDATABLE
        if unknown:
            raise ValueError(f"Cannot update flagged message fields: {', '.join(sorted(unknown))}")

        assignments = ", ".join(f"{name} = ?" for name in fields)
        params = [_to_column(value) for value in fields.values()]
        async with self._db.transaction() as conn:
            await conn.execute(
                f"UPDATE flagged_messages SET {assignments} WHERE message_id = ?",
                (*params, message_id),
            )

    async def find_one_and_remove(self, message_id: int) -> Optional[FlaggedMessageRecord]:
        record = await self.find_one(message_id)
        if record is None:
            return None
        async with self._db.transaction() as conn:
            await conn.execute("DELETE FROM flagged_messages WHERE message_id = ?", (message_id,))
        logger.debug("[FLAGGED MESSAGES] Removed record for message %s", message_id)
        return record
