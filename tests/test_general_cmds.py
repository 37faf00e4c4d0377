from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from horizon.bot.cogs import general_cmds


def attachment(filename, content_type="application/pdf"):
    return SimpleNamespace(filename=filename, content_type=content_type, read=AsyncMock(return_value=b""))


@pytest.fixture
def linked_message():
    return SimpleNamespace(attachments=[attachment("b.pdf"), attachment("photo.png", "image/png")])


@pytest.fixture
def cog(linked_message):
    channel = SimpleNamespace(fetch_message=AsyncMock(return_value=linked_message))
    bot = SimpleNamespace(get_channel=lambda channel_id: channel)
    return general_cmds.GeneralCog(bot)


@pytest.mark.asyncio
async def test_nothing_given(cog):
    assert await cog.collect_files(None, [None] * 10) is None


@pytest.mark.asyncio
async def test_attachments_come_before_linked_files(cog):
    first = attachment("a.pdf")

    files = await cog.collect_files("https://discord.com/channels/1/2/3", [first, None])

    assert [file.filename for file in files] == ["a.pdf", "b.pdf"]


@pytest.mark.asyncio
async def test_unresolvable_links_are_skipped(cog):
    first, second = attachment("a.pdf"), attachment("c.pdf")

    files = await cog.collect_files("not-a-link", [first, None, second])

    assert files == [first, second]


@pytest.mark.asyncio
async def test_linked_message_without_pdf(cog, linked_message):
    linked_message.attachments = [attachment("photo.png", "image/png")]

    assert await cog.collect_files("https://discord.com/channels/1/2/3", []) == []


def test_setup_registers_cog():
    added = []
    bot = SimpleNamespace(add_cog=added.append)

    general_cmds.setup(bot)

    assert isinstance(added[0], general_cmds.GeneralCog)
