from types import SimpleNamespace
from unittest.mock import AsyncMock

import discord
import pytest

from conftest import http_error
from horizon.configuration.guild_config import ConfigEntries, GuildConfigManager


@pytest.fixture
def repository():
    return SimpleNamespace(
        load_all=AsyncMock(return_value={(1000, "moderator_feedback"): 50}),
        upsert=AsyncMock(),
    )


@pytest.mark.asyncio
async def test_get_returns_cached_channel(repository):
    channel = SimpleNamespace(id=50)
    bot = SimpleNamespace(get_channel=lambda channel_id: channel if channel_id == 50 else None)
    manager = GuildConfigManager(bot, repository)
    await manager.load()

    assert await manager.get(1000, ConfigEntries.MODERATOR_FEEDBACK) is channel
    assert await manager.get(2000, ConfigEntries.MODERATOR_FEEDBACK) is None


@pytest.mark.asyncio
async def test_deleted_channel_resolves_to_none(repository):
    bot = SimpleNamespace(
        get_channel=lambda channel_id: None,
        fetch_channel=AsyncMock(side_effect=http_error(discord.NotFound, 404, "Unknown Channel")),
    )
    manager = GuildConfigManager(bot, repository)
    await manager.load()

    assert await manager.get(1000, ConfigEntries.MODERATOR_FEEDBACK) is None


@pytest.mark.asyncio
async def test_set_persists_and_caches(repository):
    manager = GuildConfigManager(SimpleNamespace(), repository)

    await manager.set(1000, ConfigEntries.MODERATOR_FEEDBACK, SimpleNamespace(id=51))

    repository.upsert.assert_awaited_once_with(1000, "moderator_feedback", 51)
    assert manager.get_id(1000, ConfigEntries.MODERATOR_FEEDBACK) == 51
