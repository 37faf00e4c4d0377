from types import SimpleNamespace

import pytest

from conftest import http_error, make_member
from horizon.datatypes.community_datatypes import EclassRecord
from horizon.moderation import eclass_manager

ECLASS = EclassRecord(announcement_message_id=400, guild_id=1000, role_id=88, subject="Maths", date="Monday 10:00")


@pytest.fixture
def role():
    return SimpleNamespace(id=88)


def guild_member(role, roles=()):
    member = make_member(5, roles=roles)
    member.guild = SimpleNamespace(get_role=lambda role_id: role if role_id == role.id else None)
    return member


@pytest.mark.asyncio
async def test_subscribes_and_confirms(role, test_app_config):
    test_app_config._data["messages"]["eclass_subscribed"] = "Subscribed to {subject} on {date}"
    member = guild_member(role)

    assert await eclass_manager.subscribe_member(member, ECLASS)

    assert member.add_roles.await_args.args == (role,)
    member.send.assert_awaited_once_with("Subscribed to Maths on Monday 10:00")


@pytest.mark.asyncio
async def test_already_subscribed(role):
    member = guild_member(role, roles=[role.id])

    assert not await eclass_manager.subscribe_member(member, ECLASS)
    member.add_roles.assert_not_awaited()


@pytest.mark.asyncio
async def test_deleted_role(role):
    member = guild_member(role)
    member.guild.get_role = lambda role_id: None

    assert not await eclass_manager.subscribe_member(member, ECLASS)
    member.add_roles.assert_not_awaited()


@pytest.mark.asyncio
async def test_closed_dms_still_subscribe(role):
    member = guild_member(role)
    member.send.side_effect = http_error()

    assert await eclass_manager.subscribe_member(member, ECLASS)


@pytest.mark.asyncio
async def test_refused_role_grant_is_logged(role):
    member = guild_member(role)
    member.add_roles.side_effect = http_error(status=403, text="Missing Permissions")

    assert not await eclass_manager.subscribe_member(member, ECLASS)
    member.send.assert_not_awaited()
