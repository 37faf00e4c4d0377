"""
Per-guild configuration of channels used by the bot.

Values are snowflakes stored in the ``guild_config`` table and cached in
memory; :meth:`GuildConfigManager.get` resolves them to live channels.
"""

from __future__ import annotations

import enum
from typing import Dict, Optional, Tuple

import discord

from horizon.repositories.guild_config_repo import GuildConfigRepository
from horizon.util.logger import get_logger

logger = get_logger("guild_config")


class ConfigEntries(str, enum.Enum):
    MODERATOR_FEEDBACK = "moderator_feedback"


class GuildConfigManager:
    """Cache of guild channel settings backed by :class:`GuildConfigRepository`."""

    def __init__(self, bot: discord.Client, repository: Optional[GuildConfigRepository] = None) -> None:
        self.bot = bot
        self.repository = repository or GuildConfigRepository()
        self._values: Dict[Tuple[int, str], int] = {}

    async def load(self) -> None:
        """Fill the cache from the database."""
        self._values = await self.repository.load_all()
        logger.info("[GUILD CONFIG] Loaded %d configuration entries", len(self._values))

    def get_id(self, guild_id: int, key: ConfigEntries) -> Optional[int]:
        return self._values.get((guild_id, key.value))

    async def get(self, guild_id: int, key: ConfigEntries) -> Optional[discord.abc.Messageable]:
        """
        Return the channel configured for ``key`` in the guild.

        Returns None when nothing is configured or the channel no longer exists.
        """
        channel_id = self.get_id(guild_id, key)
        if channel_id is None:
            return None

        channel = self.bot.get_channel(channel_id)
        if channel is not None:
            return channel
        try:
            return await self.bot.fetch_channel(channel_id)
        except (discord.NotFound, discord.Forbidden) as exc:
            logger.warning(
                "[GUILD CONFIG] Channel %s configured as %s for guild %s is unavailable: %s",
                channel_id, key.value, guild_id, exc,
            )
            return None

    async def set(self, guild_id: int, key: ConfigEntries, channel: discord.abc.Snowflake) -> None:
        await self.repository.upsert(guild_id, key.value, channel.id)
        self._values[(guild_id, key.value)] = channel.id
        logger.info("[GUILD CONFIG] Set %s to %s for guild %s", key.value, channel.id, guild_id)
