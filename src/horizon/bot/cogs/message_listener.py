"""Message listener Cog for Horizon.

Checks every guild message against the swear denylist and starts an
automatic flag, which moderators confirm from the feedback channel.
"""

import discord
from discord.ext import commands

from horizon.bot.session import BotSession
from horizon.configuration.app_configuration import app_config
from horizon.datatypes.flag_datatypes import AutoFlag
from horizon.moderation.flagged_message import FlaggedMessage
from horizon.util.discord_utils import has_role, is_ignored_author, safe_send
from horizon.util.logger import get_logger

logger = get_logger("message_listener_cog")


class MessageListenerCog(commands.Cog):
    """Cog running the swear filter on incoming messages."""

    def __init__(self, discord_bot_instance, session: BotSession):
        self.bot = discord_bot_instance
        self.session = session
        logger.info("Message listener cog loaded")

    def _should_check(self, message: discord.Message) -> bool:
        if message.guild is None or is_ignored_author(message.author):
            return False
        return not has_role(message.author, app_config.staff_role_id)

    @commands.Cog.listener(name="on_message")
    async def on_message(self, message: discord.Message) -> None:
        if not self._should_check(message):
            return

        swear = FlaggedMessage.get_swear(message)
        if swear is None:
            return

        logger.debug("[SWEAR FILTER] Message %s contains %r", message.id, swear)
        flagged_message = FlaggedMessage(message, AutoFlag(swear), self.session)
        try:
            await flagged_message.start(is_manual=False)
        except Exception:
            logger.exception("[FLAG] Automatic flag of message %s failed", message.id)
            await safe_send(flagged_message.log_channel, app_config.messages.oops)


def setup(discord_bot_instance, session: BotSession):
    """Register the MessageListenerCog with the bot."""
    discord_bot_instance.add_cog(MessageListenerCog(discord_bot_instance, session))
