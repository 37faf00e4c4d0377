"""Subscription of members to e-class notification roles."""

from __future__ import annotations

import discord

from horizon.configuration.app_configuration import app_config
from horizon.datatypes.community_datatypes import EclassRecord
from horizon.util.discord_utils import has_role, safe_send_dm
from horizon.util.logger import get_logger
from horizon.util.templating import render

logger = get_logger("eclass_manager")


async def subscribe_member(member: discord.Member, eclass: EclassRecord) -> bool:
    """
    Give ``member`` the notification role of ``eclass`` and confirm by DM.

    Returns True if the role was granted. A missing role, an existing
    subscription and a refused grant all return False. The DM confirmation is
    best effort.
    """
    role = member.guild.get_role(eclass.role_id)
    if role is None:
        logger.warning(
            "[ECLASS] Role %s of e-class %s does not exist",
            eclass.role_id,
            eclass.announcement_message_id,
        )
        return False

    if has_role(member, role.id):
        return False

    try:
        await member.add_roles(role, reason=f"Subscribed to e-class {eclass.subject}")
    except (discord.Forbidden, discord.HTTPException) as exc:
        logger.warning("[ECLASS] Could not give role %s to member %s: %s", role.id, member.id, exc)
        return False
    logger.info("[ECLASS] Subscribed member %s to e-class %s", member.id, eclass.announcement_message_id)

    await safe_send_dm(
        member,
        render(app_config.messages.eclass_subscribed, subject=eclass.subject, date=eclass.date),
    )
    return True
