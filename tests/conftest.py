"""
Pytest configuration and shared fakes for Horizon tests.

Discord objects are replaced by SimpleNamespace/AsyncMock fakes and the
flagged-message repository by an in-memory store.
"""

import sys
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

# Add src directory to path so imports work
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

import discord  # noqa: E402

from horizon.bot.session import BotSession  # noqa: E402
from horizon.configuration.app_configuration import app_config  # noqa: E402
from horizon.moderation.pending_flags import PendingFlagRegistry  # noqa: E402

STAFF_ROLE_ID = 42
YES = "✅"
FLAG = "🚩"


def http_error(error_type=discord.Forbidden, status=403, text="Cannot send messages to this user"):
    """Build a py-cord HTTP exception without a real aiohttp response."""
    return error_type(SimpleNamespace(status=status, reason="Error"), text)


class FakeFlaggedMessageRepository:
    """In-memory stand-in for FlaggedMessageRepository."""

    def __init__(self):
        self.records = {}
        self.find_one_error = None

    async def find_one(self, message_id):
        if self.find_one_error is not None:
            raise self.find_one_error
        return self.records.get(message_id)

    async def find_pending(self):
        return [record for record in self.records.values() if not record.approved]

    async def create(self, record):
        if record.message_id in self.records:
            raise ValueError(f"duplicate record {record.message_id}")
        self.records[record.message_id] = record
        return record

    async def update_one(self, message_id, **fields):
        record = self.records[message_id]
        for name, value in fields.items():
            setattr(record, name, value)

    async def find_one_and_remove(self, message_id):
        return self.records.pop(message_id, None)


def make_member(member_id=1, roles=(), bot=False):
    return SimpleNamespace(
        id=member_id,
        mention=f"<@{member_id}>",
        display_name=f"member{member_id}",
        bot=bot,
        roles=[SimpleNamespace(id=role_id) for role_id in roles],
        send=AsyncMock(),
        add_roles=AsyncMock(),
    )


def make_alert(alert_id=500, channel=None):
    return SimpleNamespace(
        id=alert_id,
        channel=channel,
        add_reaction=AsyncMock(),
        clear_reactions=AsyncMock(),
        edit=AsyncMock(),
        delete=AsyncMock(),
    )


def make_log_channel(alert_id=500):
    channel = SimpleNamespace(id=50, mention="<#50>", send=AsyncMock(), fetch_message=AsyncMock())
    alert = make_alert(alert_id, channel)
    channel.send.return_value = alert
    channel.fetch_message.return_value = alert
    return channel


def make_message(message_id=100, content="hello there", author=None, guild=None, channel=None):
    guild = guild or SimpleNamespace(id=1000, get_role=lambda role_id: None)
    channel = channel or SimpleNamespace(id=10, mention="<#10>", send=AsyncMock(), guild=guild)
    return SimpleNamespace(
        id=message_id,
        content=content,
        clean_content=content,
        author=author or make_member(1),
        channel=channel,
        guild=guild,
        jump_url=f"https://discord.com/channels/{guild.id}/{channel.id}/{message_id}",
    )


@pytest.fixture(autouse=True)
def test_app_config(monkeypatch):
    """Pin the application configuration used by every test."""
    monkeypatch.setattr(
        app_config,
        "_data",
        {
            "roles": {"staff": STAFF_ROLE_ID},
            "emojis": {"yes": YES},
            "moderation": {"flag_message_reaction": FLAG, "swears": ["badword", "worse"]},
            "messages": {
                "swear_mod_alert": "ALERT {message.author.mention} {swear}",
                "swear_mod_alert_update": "CONFIRMED {swear} by {moderator.mention}",
                "manual_swear_alert": "MANUAL {manual_moderator.mention} {message.jump_url}",
                "swear_user_alert": "DM swear {swear}",
                "swear_user_alert_public": "PUBLIC swear {message.author.mention} {swear}",
                "swear_manual_user_alert": "DM manual",
                "swear_manual_user_alert_public": "PUBLIC manual {message.author.mention}",
                "oops": "OOPS",
            },
        },
    )
    return app_config


@pytest.fixture
def log_channel():
    return make_log_channel()


@pytest.fixture
def session(log_channel):
    bot = SimpleNamespace(get_channel=lambda channel_id: None, fetch_channel=AsyncMock())
    return BotSession(
        bot=bot,
        guild_config=SimpleNamespace(get=AsyncMock(return_value=log_channel), load=AsyncMock()),
        flagged_messages=FakeFlaggedMessageRepository(),
        reaction_roles=SimpleNamespace(find_one=AsyncMock(return_value=None), list_message_ids=AsyncMock(return_value=set())),
        eclasses=SimpleNamespace(find_one=AsyncMock(return_value=None), list_message_ids=AsyncMock(return_value=set())),
        pending_flags=PendingFlagRegistry(),
    )
