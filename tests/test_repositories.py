"""Tests for the SQLite repositories, against a temporary database file."""

import datetime

import aiosqlite
import pytest
import pytest_asyncio

from horizon.database.database import Database
from horizon.database.db_connection import ConnectionManager
from horizon.datatypes.community_datatypes import EclassRecord, ReactionRolePair
from horizon.datatypes.flag_datatypes import FlaggedMessageRecord
from horizon.repositories import (
    EclassRepository,
    FlaggedMessageRepository,
    GuildConfigRepository,
    ReactionRoleRepository,
)


@pytest_asyncio.fixture
async def connection(tmp_path):
    manager = ConnectionManager()
    database = Database(db_path=tmp_path / "test.db", connection=manager)
    assert await database.initialize()
    yield manager
    await database.shutdown()


def auto_record(message_id=100, **overrides):
    values = dict(
        message_id=message_id,
        guild_id=1000,
        channel_id=10,
        author_id=1,
        swear="badword",
        alert_message_id=500,
    )
    values.update(overrides)
    return FlaggedMessageRecord(**values)


class TestFlaggedMessageRepository:
    @pytest.mark.asyncio
    async def test_create_and_find(self, connection):
        repo = FlaggedMessageRepository(connection)
        await repo.create(auto_record())

        record = await repo.find_one(100)

        assert record == auto_record()
        assert await repo.find_one(101) is None

    @pytest.mark.asyncio
    async def test_manual_record_round_trip(self, connection):
        repo = FlaggedMessageRepository(connection)
        approved_date = datetime.datetime(2024, 5, 1, 12, 30, tzinfo=datetime.timezone.utc)
        created = auto_record(
            swear=None, manual_moderator_id=7, alert_message_id=None, approved=True, approved_date=approved_date,
        )
        await repo.create(created)

        record = await repo.find_one(100)
        assert record == created
        assert record.is_manual

    @pytest.mark.asyncio
    async def test_update_one(self, connection):
        repo = FlaggedMessageRepository(connection)
        await repo.create(auto_record())
        now = datetime.datetime.now(datetime.timezone.utc)

        await repo.update_one(100, approved=True, approved_date=now)

        record = await repo.find_one(100)
        assert record.approved is True
        assert record.approved_date == now

    @pytest.mark.asyncio
    async def test_update_rejects_identity_columns(self, connection):
        repo = FlaggedMessageRepository(connection)

        with pytest.raises(ValueError):
            await repo.update_one(100, author_id=2)

    @pytest.mark.asyncio
    async def test_find_pending(self, connection):
        repo = FlaggedMessageRepository(connection)
        await repo.create(auto_record(100))
        await repo.create(auto_record(101, approved=True))

        assert [record.message_id for record in await repo.find_pending()] == [100]

    @pytest.mark.asyncio
    async def test_find_one_and_remove(self, connection):
        repo = FlaggedMessageRepository(connection)
        await repo.create(auto_record())

        removed = await repo.find_one_and_remove(100)

        assert removed.message_id == 100
        assert await repo.find_one(100) is None
        assert await repo.find_one_and_remove(100) is None

    @pytest.mark.asyncio
    async def test_duplicate_message_is_rejected(self, connection):
        repo = FlaggedMessageRepository(connection)
        await repo.create(auto_record())

        with pytest.raises(aiosqlite.IntegrityError):
            await repo.create(auto_record())


def test_record_requires_exactly_one_reason():
    with pytest.raises(ValueError):
        auto_record(manual_moderator_id=7)
    with pytest.raises(ValueError):
        auto_record(swear=None)


class TestReactionRoleRepository:
    @pytest.mark.asyncio
    async def test_create_find_and_list(self, connection):
        repo = ReactionRoleRepository(connection)
        await repo.create(300, 1000, 10, [ReactionRolePair("🎮", 77), ReactionRolePair("📚", 78)])

        record = await repo.find_one(300)

        assert record.role_for("📚") == 78
        assert record.role_for("🍕") is None
        assert await repo.find_one(301) is None
        assert await repo.list_message_ids() == {300}


class TestEclassRepository:
    @pytest.mark.asyncio
    async def test_create_find_and_list(self, connection):
        repo = EclassRepository(connection)
        eclass = EclassRecord(announcement_message_id=400, guild_id=1000, role_id=88, subject="Maths", date="Monday")
        await repo.create(eclass)

        assert await repo.find_one(400) == eclass
        assert await repo.find_one(401) is None
        assert await repo.list_message_ids() == {400}


class TestGuildConfigRepository:
    @pytest.mark.asyncio
    async def test_upsert_and_delete(self, connection):
        repo = GuildConfigRepository(connection)
        await repo.upsert(1000, "moderator_feedback", 50)
        await repo.upsert(1000, "moderator_feedback", 51)

        assert await repo.load_all() == {(1000, "moderator_feedback"): 51}

        await repo.delete(1000, "moderator_feedback")
        assert await repo.load_all() == {}
