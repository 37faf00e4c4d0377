"""
State owned by one running bot session.

The session is created with the bot and handed to every cog and flagged
message: the pending-flag registry, the ids of tracked reaction-role and
e-class messages, the guild configuration and the repositories.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Set, Tuple

import discord

from horizon.configuration.guild_config import GuildConfigManager
from horizon.moderation.flagged_message import FlaggedMessage
from horizon.moderation.pending_flags import PendingFlagRegistry
from horizon.repositories import (
    EclassRepository,
    FlaggedMessageRepository,
    GuildConfigRepository,
    ReactionRoleRepository,
)
from horizon.util.logger import get_logger

logger = get_logger("bot_session")


@dataclass
class BotSession:
    bot: discord.Client
    guild_config: GuildConfigManager
    flagged_messages: FlaggedMessageRepository = field(default_factory=FlaggedMessageRepository)
    reaction_roles: ReactionRoleRepository = field(default_factory=ReactionRoleRepository)
    eclasses: EclassRepository = field(default_factory=EclassRepository)
    pending_flags: PendingFlagRegistry = field(default_factory=PendingFlagRegistry)
    reaction_role_message_ids: Set[int] = field(default_factory=set)
    eclass_message_ids: Set[int] = field(default_factory=set)

    @classmethod
    def create(cls, bot: discord.Client) -> "BotSession":
        """Build a session using the shared database connection."""
        return cls(bot=bot, guild_config=GuildConfigManager(bot, GuildConfigRepository()))

    async def load_tracked_messages(self) -> None:
        """Fill the reaction-role and e-class message id sets from the database."""
        self.reaction_role_message_ids = await self.reaction_roles.list_message_ids()
        self.eclass_message_ids = await self.eclasses.list_message_ids()
        logger.info(
            "[SESSION] Tracking %d reaction-role and %d e-class messages",
            len(self.reaction_role_message_ids),
            len(self.eclass_message_ids),
        )

    async def reconcile_pending_flags(self) -> Tuple[int, int]:
        """
        Restore pending flags persisted by a previous session.

        Records whose channel, member or message disappeared are deleted.
        Records failing for another reason (Discord outage...) are kept for
        the next start.

        Returns:
            ``(restored, dropped)`` counts.
        """
        restored = dropped = 0

        for record in await self.flagged_messages.find_pending():
            if record.message_id in self.pending_flags:
                continue
            try:
                flagged_message = await FlaggedMessage.from_document(record, self)
            except (discord.NotFound, discord.Forbidden, LookupError) as exc:
                logger.warning("[SESSION] Dropping stale flag on message %s: %s", record.message_id, exc)
                await self.flagged_messages.find_one_and_remove(record.message_id)
                dropped += 1
                continue
            except discord.HTTPException as exc:
                logger.error("[SESSION] Could not restore flag on message %s: %s", record.message_id, exc)
                continue

            self.pending_flags.add(flagged_message)
            restored += 1

        logger.info("[SESSION] Restored %d pending flags, dropped %d stale ones", restored, dropped)
        return restored, dropped
