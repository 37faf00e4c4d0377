"""
Lifecycle of a flagged message.

A message is flagged either automatically, when it contains a configured
swear, or manually, when a staff member reacts to it with the flag emoji.

Automatic flags are registered as pending, announced in the moderator
feedback channel with an approval reaction and persisted as not approved.
A moderator's reaction then calls :meth:`FlaggedMessage.approve`, which
updates the record and the alert and notifies the author.

Manual flags are already confirmed by a human: moderators get a log line,
the record is persisted as approved and the author is notified right away.

States::

    new -> pending (automatic) -> approved | removed
    new -> approved (manual)
"""

from __future__ import annotations

import datetime
from typing import TYPE_CHECKING, Iterable, Optional

import discord

from horizon.configuration.app_configuration import app_config
from horizon.configuration.guild_config import ConfigEntries
from horizon.datatypes.flag_datatypes import (
    AutoFlag,
    FlagNotPendingError,
    FlagReason,
    FlaggedMessageRecord,
    ManualFlag,
)
from horizon.util.logger import get_logger
from horizon.util.templating import render

if TYPE_CHECKING:
    from horizon.bot.session import BotSession

logger = get_logger("flagged_message")


class FlaggedMessage:
    """
    One flagged message and the moderation workflow around it.

    Attributes:
        message: The flagged guild message.
        reason: Why the message was flagged, :class:`AutoFlag` or :class:`ManualFlag`.
        alert_message: The bot's message in the moderator channel, once sent
            (automatic flags only).
        log_channel: The moderator feedback channel, resolved on first use.
        approved: Whether a moderator confirmed the flag.
        approved_date: When the flag was confirmed.
    """

    def __init__(self, message: discord.Message, reason: FlagReason, session: "BotSession") -> None:
        self.message = message
        self.reason = reason
        self.session = session
        self.alert_message: Optional[discord.Message] = None
        self.log_channel: Optional[discord.abc.Messageable] = None
        self.approved = False
        self.approved_date: Optional[datetime.datetime] = None

    def __repr__(self) -> str:
        return f"FlaggedMessage(message_id={self.message.id}, reason={self.reason!r}, approved={self.approved})"

    @property
    def swear(self) -> Optional[str]:
        return self.reason.swear if isinstance(self.reason, AutoFlag) else None

    @property
    def manual_moderator(self) -> Optional[discord.Member]:
        return self.reason.moderator if isinstance(self.reason, ManualFlag) else None

    # ------------------------------------------------------------------
    # Detection and reconstruction
    # ------------------------------------------------------------------

    @staticmethod
    def get_swear(message: discord.Message, swears: Optional[Iterable[str]] = None) -> Optional[str]:
        """
        Return the first denylisted swear among the message's space-separated words.

        Swears are checked in configured order and matched exactly.
        """
        words = message.clean_content.split(" ")
        denylist = app_config.swears if swears is None else swears
        return next((swear for swear in denylist if swear in words), None)

    @classmethod
    async def from_document(cls, record: FlaggedMessageRecord, session: "BotSession") -> "FlaggedMessage":
        """
        Rebuild a flagged message from its persisted record.

        Every referenced channel, member and message is fetched again from
        Discord.

        Raises:
            discord.NotFound: A channel, member or message no longer exists.
            discord.Forbidden: The bot lost access to one of them.
            LookupError: The record has an alert but the guild has no moderator channel.
        """
        bot = session.bot
        channel = bot.get_channel(record.channel_id) or await bot.fetch_channel(record.channel_id)
        guild = channel.guild

        await guild.fetch_member(record.author_id)
        if record.is_manual:
            moderator = await guild.fetch_member(record.manual_moderator_id)
            reason: FlagReason = ManualFlag(moderator)
        else:
            reason = AutoFlag(record.swear)  # type: ignore[arg-type]

        message = await channel.fetch_message(record.message_id)

        flagged_message = cls(message, reason, session)
        flagged_message.approved = record.approved
        flagged_message.approved_date = record.approved_date
        flagged_message.log_channel = await session.guild_config.get(guild.id, ConfigEntries.MODERATOR_FEEDBACK)

        if record.alert_message_id is not None:
            if flagged_message.log_channel is None:
                raise LookupError(f"No moderator channel configured for guild {guild.id}")
            flagged_message.alert_message = await flagged_message.log_channel.fetch_message(record.alert_message_id)

        return flagged_message

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self, is_manual: bool = False) -> None:
        """
        Flag the message, unless it was already flagged before.

        Raises:
            ValueError: If ``is_manual`` does not match the flag reason.
        """
        if is_manual != isinstance(self.reason, ManualFlag):
            raise ValueError(f"start(is_manual={is_manual}) called for {self.reason!r}")

        if await self._find_existing_record() is not None:
            logger.debug("[FLAG] Message %s is already flagged, ignoring", self.message.id)
            return

        if is_manual:
            await self._alert_moderators()
            await self._add_manual_to_database()
            await self.alert_user()
        else:
            # Registered before the alert exists so a fast reaction still finds it
            self.session.pending_flags.add(self)
            try:
                await self._confirm_moderators()
                await self._add_to_database()
            except Exception:
                self.session.pending_flags.discard(self.message.id)
                raise

        logger.info(
            "[FLAG] Flagged message %s from user %s (%s)",
            self.message.id,
            self.message.author.id,
            "manual" if is_manual else f"swear {self.swear!r}",
        )

    async def approve(self, moderator: discord.Member) -> None:
        """
        Confirm a pending flag on behalf of ``moderator``.

        Raises:
            FlagNotPendingError: The flag is not pending, for instance because
                another moderator approved it first.
        """
        if self.session.pending_flags.claim(self.message.id) is None:
            raise FlagNotPendingError(f"Message {self.message.id} is not awaiting approval")

        self.approved = True
        self.approved_date = discord.utils.utcnow()
        await self.session.flagged_messages.update_one(
            self.message.id,
            approved=True,
            approved_date=self.approved_date,
        )

        logger.info("[FLAG] Message %s approved by moderator %s", self.message.id, moderator.id)
        try:
            if self.alert_message is not None:
                await self.alert_message.clear_reactions()
                await self.alert_message.edit(
                    content=render(
                        app_config.messages.swear_mod_alert_update,
                        message=self.message,
                        swear=self.swear,
                        moderator=moderator,
                    )
                )
        finally:
            # The author is notified once the record is approved
            await self.alert_user()

    async def remove(self) -> None:
        """Cancel the flag: forget it, delete the moderator alert and the record."""
        self.session.pending_flags.discard(self.message.id)

        if self.alert_message is not None:
            try:
                await self.alert_message.delete()
            except discord.NotFound:
                logger.debug("[FLAG] Alert for message %s was already deleted", self.message.id)

        await self.session.flagged_messages.find_one_and_remove(self.message.id)
        logger.info("[FLAG] Removed flag on message %s", self.message.id)

    async def alert_user(self) -> None:
        """
        Tell the author their message was flagged.

        A direct message is tried first; if the author does not accept it the
        notice is posted in the channel of the flagged message instead.
        """
        templates = app_config.messages
        if self.swear is not None:
            private_template, public_template = templates.swear_user_alert, templates.swear_user_alert_public
        else:
            private_template, public_template = (
                templates.swear_manual_user_alert,
                templates.swear_manual_user_alert_public,
            )

        try:
            await self.message.author.send(render(private_template, message=self.message, swear=self.swear))
        except (discord.Forbidden, discord.HTTPException) as exc:
            logger.info(
                "[FLAG] Could not DM user %s (%s), notifying in channel instead",
                self.message.author.id,
                exc,
            )
            await self.message.channel.send(render(public_template, message=self.message, swear=self.swear))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _find_existing_record(self) -> Optional[FlaggedMessageRecord]:
        try:
            return await self.session.flagged_messages.find_one(self.message.id)
        except Exception as exc:
            logger.warning("[FLAG] Lookup of message %s failed, assuming no record: %s", self.message.id, exc)
            return None

    def _base_record(self) -> FlaggedMessageRecord:
        return FlaggedMessageRecord(
            message_id=self.message.id,
            guild_id=self.message.guild.id,
            channel_id=self.message.channel.id,
            author_id=self.message.author.id,
            swear=self.swear,
            manual_moderator_id=self.manual_moderator.id if self.manual_moderator else None,
        )

    async def _add_manual_to_database(self) -> None:
        self.approved = True
        self.approved_date = discord.utils.utcnow()
        record = self._base_record()
        record.approved = True
        record.approved_date = self.approved_date
        await self.session.flagged_messages.create(record)

    async def _add_to_database(self) -> None:
        record = self._base_record()
        record.alert_message_id = self.alert_message.id if self.alert_message else None
        await self.session.flagged_messages.create(record)

    async def _resolve_log_channel(self) -> Optional[discord.abc.Messageable]:
        if self.log_channel is None:
            self.log_channel = await self.session.guild_config.get(
                self.message.guild.id,
                ConfigEntries.MODERATOR_FEEDBACK,
            )
        if self.log_channel is None:
            logger.warning(
                "[FLAG] Message %s was flagged but guild %s has no moderator channel, "
                "unable to report. Set one up with /setup moderator",
                self.message.id,
                self.message.guild.id,
            )
        return self.log_channel

    async def _alert_moderators(self) -> None:
        log_channel = await self._resolve_log_channel()
        if log_channel is None:
            return
        await log_channel.send(
            render(
                app_config.messages.manual_swear_alert,
                message=self.message,
                manual_moderator=self.manual_moderator,
            )
        )

    async def _confirm_moderators(self) -> None:
        log_channel = await self._resolve_log_channel()
        if log_channel is None:
            return
        self.alert_message = await log_channel.send(
            render(app_config.messages.swear_mod_alert, message=self.message, swear=self.swear)
        )
        await self.alert_message.add_reaction(app_config.yes_emoji)
