"""Event listener Cog for Horizon.

Handles the bot lifecycle (on_ready: guild config, tracked messages and
pending flags are restored) and application command errors.
"""

import discord
from discord.ext import commands

from horizon.bot.session import BotSession
from horizon.util.logger import get_logger

logger = get_logger("events_listener_cog")


class EventsListenerCog(commands.Cog):
    """Cog containing bot lifecycle and command error handlers."""

    def __init__(self, discord_bot_instance, session: BotSession):
        self.bot = discord_bot_instance
        self.session = session
        self._restored = False
        logger.info("Events listener cog loaded")

    @commands.Cog.listener(name="on_ready")
    async def on_ready(self):
        """
        Restore session state once the bot is connected.

        on_ready fires again after a reconnect; the state is only restored
        the first time.
        """
        if self.bot.user:
            logger.info(f"Bot connected as {self.bot.user} (ID: {self.bot.user.id})")
        else:
            logger.warning("Bot partially connected, but user information not yet available.")

        if self._restored:
            return
        self._restored = True

        await self.session.guild_config.load()
        await self.session.load_tracked_messages()
        await self.session.reconcile_pending_flags()

        await self.bot.change_presence(
            activity=discord.Activity(type=discord.ActivityType.watching, name="over the community")
        )

    @commands.Cog.listener(name="on_application_command_error")
    async def on_application_command_error(self, application_context: discord.ApplicationContext, error: Exception):
        """Log the failure with its traceback and tell the invoker something went wrong."""
        if isinstance(error, commands.CommandNotFound):
            return

        command_name = getattr(application_context.command, "name", "<unknown>")
        logger.error(f"Error in command '{command_name}': {error}", exc_info=error)

        error_message = "A :bug: showed up while running this command."
        try:
            await application_context.respond(error_message, ephemeral=True)
        except discord.InteractionResponded:
            await application_context.followup.send(error_message, ephemeral=True)


def setup(discord_bot_instance, session: BotSession):
    """Register the EventsListenerCog with the bot."""
    discord_bot_instance.add_cog(EventsListenerCog(discord_bot_instance, session))
