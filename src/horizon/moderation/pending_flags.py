"""
Registry of flagged messages waiting for a moderator's approval.

One registry lives on the bot session. Entries are keyed by the id of the
flagged message; every mutation is synchronous so it cannot interleave with
another task on the event loop.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Iterator, Optional

from horizon.util.logger import get_logger

if TYPE_CHECKING:
    from horizon.moderation.flagged_message import FlaggedMessage

logger = get_logger("pending_flags")


class PendingFlagRegistry:
    """Map of message id -> :class:`FlaggedMessage` awaiting approval."""

    def __init__(self) -> None:
        self._flags: Dict[int, "FlaggedMessage"] = {}

    def add(self, flag: "FlaggedMessage") -> None:
        message_id = flag.message.id
        if message_id in self._flags:
            logger.debug("[PENDING FLAGS] Message %s already pending, replacing entry", message_id)
        self._flags[message_id] = flag

    def claim(self, message_id: int) -> Optional["FlaggedMessage"]:
        """
        Remove and return the entry for ``message_id``.

        Only the first caller gets the entry, later callers get None.
        """
        return self._flags.pop(message_id, None)

    def discard(self, message_id: int) -> None:
        self._flags.pop(message_id, None)

    def get(self, message_id: int) -> Optional["FlaggedMessage"]:
        return self._flags.get(message_id)

    def find_by_alert(self, alert_message_id: int) -> Optional["FlaggedMessage"]:
        """Return the pending flag whose moderator alert has the given id."""
        for flag in self._flags.values():
            if flag.alert_message is not None and flag.alert_message.id == alert_message_id:
                return flag
        return None

    def __contains__(self, message_id: object) -> bool:
        return message_id in self._flags

    def __len__(self) -> int:
        return len(self._flags)

    def __iter__(self) -> Iterator["FlaggedMessage"]:
        return iter(list(self._flags.values()))
