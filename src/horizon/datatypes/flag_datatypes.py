"""
Data structures of the flagged-message workflow.

A flag has exactly one reason: an automatically detected swear
(:class:`AutoFlag`) or a staff member's manual flag (:class:`ManualFlag`).
:class:`FlaggedMessageRecord` is the persisted form, one row per flagged
message.
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

import discord


@dataclass(frozen=True, slots=True)
class AutoFlag:
    """Flag raised by the swear filter; needs moderator confirmation."""

    swear: str


@dataclass(frozen=True, slots=True)
class ManualFlag:
    """Flag raised by a staff member; approved on creation."""

    moderator: discord.Member


FlagReason = Union[AutoFlag, ManualFlag]


class FlagNotPendingError(LookupError):
    """Raised when approving a flag that is not (or no longer) awaiting approval."""


@dataclass(slots=True)
class FlaggedMessageRecord:
    """Row of the ``flagged_messages`` table."""

    message_id: int
    guild_id: int
    channel_id: int
    author_id: int
    swear: Optional[str] = None
    manual_moderator_id: Optional[int] = None
    alert_message_id: Optional[int] = None
    approved: bool = False
    approved_date: Optional[datetime.datetime] = None

    def __post_init__(self) -> None:
        if (self.swear is None) == (self.manual_moderator_id is None):
            raise ValueError("A flagged message record needs exactly one of swear or manual_moderator_id")

    @property
    def is_manual(self) -> bool:
        return self.manual_moderator_id is not None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "FlaggedMessageRecord":
        approved_date = row["approved_date"]
        return cls(
            message_id=int(row["message_id"]),
            guild_id=int(row["guild_id"]),
            channel_id=int(row["channel_id"]),
            author_id=int(row["author_id"]),
            swear=row["swear"],
            manual_moderator_id=row["manual_moderator_id"],
            alert_message_id=row["alert_message_id"],
            approved=bool(row["approved"]),
            approved_date=datetime.datetime.fromisoformat(approved_date) if approved_date else None,
        )
