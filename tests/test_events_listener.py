from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

from horizon.bot.cogs import events_listener


@pytest.fixture
def cog(session):
    bot = SimpleNamespace(user=SimpleNamespace(id=1), change_presence=AsyncMock())
    return events_listener.EventsListenerCog(bot, session)


@pytest.mark.asyncio
async def test_on_ready_restores_state_once(cog, session):
    session.reconcile_pending_flags = AsyncMock(return_value=(0, 0))

    await cog.on_ready()
    await cog.on_ready()

    session.guild_config.load.assert_awaited_once()
    session.reaction_roles.list_message_ids.assert_awaited_once()
    session.reconcile_pending_flags.assert_awaited_once()
    cog.bot.change_presence.assert_awaited_once()


@pytest.mark.asyncio
async def test_command_error_is_reported(cog):
    ctx = MagicMock()
    ctx.command.name = "mergepdf"
    ctx.respond = AsyncMock()

    await cog.on_application_command_error(ctx, RuntimeError("boom"))

    ctx.respond.assert_awaited_once()
    assert ctx.respond.await_args.kwargs["ephemeral"] is True


@pytest.mark.asyncio
async def test_falls_back_to_followup(cog):
    ctx = MagicMock()
    ctx.respond = AsyncMock(side_effect=discord.InteractionResponded(SimpleNamespace()))
    ctx.followup.send = AsyncMock()

    await cog.on_application_command_error(ctx, RuntimeError("boom"))

    ctx.followup.send.assert_awaited_once()
