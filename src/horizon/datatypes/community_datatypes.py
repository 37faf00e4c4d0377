"""Records for reaction roles and e-class announcements."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True, slots=True)
class ReactionRolePair:
    """One emoji of a reaction-role message and the role it grants."""

    reaction: str
    role_id: int


@dataclass(slots=True)
class ReactionRoleRecord:
    message_id: int
    guild_id: int
    channel_id: int
    pairs: List[ReactionRolePair] = field(default_factory=list)

    def role_for(self, reaction: str) -> Optional[int]:
        """Return the role id granted by ``reaction`` (``str(emoji)``), if any."""
        for pair in self.pairs:
            if pair.reaction == reaction:
                return pair.role_id
        return None


@dataclass(slots=True)
class EclassRecord:
    """A scheduled class whose announcement members react to for notifications."""

    announcement_message_id: int
    guild_id: int
    role_id: int
    subject: str = ""
    date: str = ""
