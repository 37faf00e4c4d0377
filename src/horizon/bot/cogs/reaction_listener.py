"""Reaction listener Cog for Horizon.

Every reaction added in a guild goes through :meth:`ReactionListenerCog.dispatch`,
which runs four independent checks, in order:

1. a staff member reacted with the flag emoji: the message is flagged manually;
2. the message is a reaction-role message: the matching role is granted;
3. the message announces an e-class and the emoji is "yes": the member subscribes;
4. the message is a pending flag alert and the emoji is "yes": the flag is approved.

The checks do not exclude each other; in practice one message only ever
matches one of them.
"""

from __future__ import annotations

from typing import Optional, Union

import discord
from discord.ext import commands

from horizon.bot.session import BotSession
from horizon.configuration.app_configuration import app_config
from horizon.datatypes.flag_datatypes import FlagNotPendingError, ManualFlag
from horizon.moderation import eclass_manager
from horizon.moderation.flagged_message import FlaggedMessage
from horizon.util.discord_utils import emoji_identifier, emoji_name, has_role, safe_send
from horizon.util.logger import get_logger

logger = get_logger("reaction_listener_cog")

Emoji = Union[discord.PartialEmoji, discord.Emoji, str]


class ReactionListenerCog(commands.Cog):
    """Routes guild reactions to the flag, reaction-role and e-class workflows."""

    def __init__(self, discord_bot_instance, session: BotSession):
        self.bot = discord_bot_instance
        self.session = session
        logger.info("Reaction listener cog loaded")

    @commands.Cog.listener(name="on_raw_reaction_add")
    async def on_raw_reaction_add(self, payload: discord.RawReactionActionEvent) -> None:
        """Resolve the member and message of a reaction, then dispatch it."""
        if payload.guild_id is None:
            return

        member = payload.member
        if member is None:
            logger.warning("[REACTIONS] Aborting event on message %s, unresolved member", payload.message_id)
            return
        if member.bot:
            return

        if not self._may_apply(payload.emoji, member, payload.message_id):
            return

        message = await self._resolve_message(payload.channel_id, payload.message_id)
        if message is None:
            return

        await self.dispatch(payload.emoji, member, message)

    def _is_manual_flag(self, emoji: Emoji, member: discord.Member) -> bool:
        return emoji_identifier(emoji) == app_config.flag_reaction and has_role(member, app_config.staff_role_id)

    def _may_apply(self, emoji: Emoji, member: discord.Member, message_id: int) -> bool:
        """Whether any of the dispatcher checks can match, decided without fetching the message."""
        is_yes = emoji_name(emoji) == app_config.yes_emoji
        return (
            self._is_manual_flag(emoji, member)
            or message_id in self.session.reaction_role_message_ids
            or (is_yes and message_id in self.session.eclass_message_ids)
            or (is_yes and self.session.pending_flags.find_by_alert(message_id) is not None)
        )

    async def _resolve_message(self, channel_id: int, message_id: int) -> Optional[discord.Message]:
        message = self.bot.get_message(message_id)
        if message is not None:
            return message

        channel = self.bot.get_channel(channel_id)
        if channel is None:
            logger.warning("[REACTIONS] Aborting event, unknown channel %s", channel_id)
            return None

        try:
            return await channel.fetch_message(message_id)
        except (discord.NotFound, discord.Forbidden) as exc:
            logger.warning("[REACTIONS] Could not fetch message %s: %s", message_id, exc)
            return None

    async def dispatch(self, emoji: Emoji, member: discord.Member, message: discord.Message) -> None:
        yes = app_config.yes_emoji

        if self._is_manual_flag(emoji, member):
            await self._flag_message(member, message)

        if message.id in self.session.reaction_role_message_ids:
            await self._handle_reaction_role(emoji, member, message)

        if message.id in self.session.eclass_message_ids and emoji_name(emoji) == yes:
            await self._handle_eclass_role(member, message)

        if emoji_name(emoji) == yes and self.session.pending_flags.find_by_alert(message.id) is not None:
            await self._handle_moderator_flag(member, message)

    async def _flag_message(self, member: discord.Member, message: discord.Message) -> None:
        flagged_message = FlaggedMessage(message, ManualFlag(member), self.session)
        try:
            await flagged_message.start(is_manual=True)
        except Exception:
            logger.exception("[FLAG] Manual flag of message %s by %s failed", message.id, member.id)
            await safe_send(flagged_message.log_channel, app_config.messages.oops)

    async def _handle_reaction_role(self, emoji: Emoji, member: discord.Member, message: discord.Message) -> None:
        record = await self.session.reaction_roles.find_one(message.id)
        if record is None:
            self.session.reaction_role_message_ids.discard(message.id)
            logger.info("[REACTION ROLES] Message %s has no reaction roles anymore, untracked", message.id)
            return

        role_id = record.role_for(str(emoji))
        if role_id is None:
            return

        role = message.guild.get_role(role_id)
        if role is None:
            logger.warning("[REACTION ROLES] The role with id %s does not exist", role_id)
            return

        if has_role(member, role.id):
            return

        try:
            await member.add_roles(role, reason="Reaction role")
            logger.info("[REACTION ROLES] Gave role %s to member %s", role.id, member.id)
        except (discord.Forbidden, discord.HTTPException) as exc:
            logger.warning("[REACTION ROLES] Could not give role %s to member %s: %s", role.id, member.id, exc)

    async def _handle_eclass_role(self, member: discord.Member, message: discord.Message) -> None:
        record = await self.session.eclasses.find_one(message.id)
        if record is None:
            self.session.eclass_message_ids.discard(message.id)
            logger.info("[ECLASS] Message %s is not an e-class announcement anymore, untracked", message.id)
            return

        await eclass_manager.subscribe_member(member, record)

    async def _handle_moderator_flag(self, member: discord.Member, message: discord.Message) -> None:
        flagged_message = self.session.pending_flags.find_by_alert(message.id)
        if flagged_message is None:
            return

        try:
            await flagged_message.approve(member)
        except FlagNotPendingError:
            logger.info("[FLAG] Message %s was already approved, ignoring approval by %s",
                        flagged_message.message.id, member.id)
        except Exception:
            logger.exception("[FLAG] An error occurred while confirming flagged message %s",
                             flagged_message.message.id)
            await safe_send(message.channel, app_config.messages.oops)


def setup(discord_bot_instance, session: BotSession):
    """Register the ReactionListenerCog with the bot."""
    discord_bot_instance.add_cog(ReactionListenerCog(discord_bot_instance, session))
