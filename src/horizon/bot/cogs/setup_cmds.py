"""
Setup cog: per-guild channel configuration.

- /setup moderator: choose the channel receiving flagged-message alerts
- /setup show: display the configured channels

Changes require the Manage Server permission and answers are ephemeral.
"""

import discord
from discord import Option
from discord.ext import commands

from horizon.bot.session import BotSession
from horizon.configuration.guild_config import ConfigEntries
from horizon.util.logger import get_logger

logger = get_logger("setup_cog")


class SetupCog(commands.Cog):
    """Guild channel configuration commands."""

    setup_group = discord.SlashCommandGroup("setup", "Configure the channels used by the bot.")

    def __init__(self, discord_bot_instance, session: BotSession):
        self.discord_bot_instance = discord_bot_instance
        self.session = session
        logger.info("Setup cog loaded")

    async def _ensure_manager(self, ctx: discord.ApplicationContext) -> bool:
        if not ctx.guild_id:
            await ctx.respond("This command can only be used in a server.", ephemeral=True)
            return False

        permissions = getattr(ctx.user, "guild_permissions", None)
        if not getattr(permissions, "manage_guild", False):
            await ctx.respond("You need the Manage Server permission to configure the bot.", ephemeral=True)
            return False
        return True

    @setup_group.command(name="moderator", description="Set the channel where moderators review flagged messages.")
    async def setup_moderator(
        self,
        application_context: discord.ApplicationContext,
        channel: Option(discord.TextChannel, "Moderator feedback channel"),  # type: ignore[valid-type]
    ):
        if not await self._ensure_manager(application_context):
            return

        await self.session.guild_config.set(application_context.guild_id, ConfigEntries.MODERATOR_FEEDBACK, channel)
        await application_context.respond(f"Flagged messages will be reported in {channel.mention}.", ephemeral=True)

    @setup_group.command(name="show", description="Show the channels configured for this server.")
    async def setup_show(self, application_context: discord.ApplicationContext):
        if not await self._ensure_manager(application_context):
            return

        lines = []
        for entry in ConfigEntries:
            channel_id = self.session.guild_config.get_id(application_context.guild_id, entry)
            lines.append(f"**{entry.value}**: {f'<#{channel_id}>' if channel_id else 'not set'}")
        await application_context.respond("\n".join(lines), ephemeral=True)


def setup(discord_bot_instance, session: BotSession):
    """Register the SetupCog with the bot."""
    discord_bot_instance.add_cog(SetupCog(discord_bot_instance, session))
