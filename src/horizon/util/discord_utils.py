"""
discord_utils.py
================

Stateless Discord helpers shared by the cogs and the flagged-message
workflow: emoji identity, staff checks, message-link resolution and
best-effort delivery.
"""

from __future__ import annotations

import re
from typing import Optional, Union

import discord

from horizon.util.logger import get_logger

logger = get_logger("discord_utils")

MESSAGE_LINK_PATTERN = re.compile(
    r"https?://(?:(?:ptb|canary)\.)?discord(?:app)?\.com/channels/"
    r"(?P<guild_id>\d+|@me)/(?P<channel_id>\d+)/(?P<message_id>\d+)"
)


def emoji_identifier(emoji: Union[discord.PartialEmoji, discord.Emoji, str]) -> str:
    """
    Return the identifier used in configuration for an emoji.

    Custom emojis are configured by id, unicode emojis by their character.
    """
    if isinstance(emoji, str):
        return emoji
    emoji_id = getattr(emoji, "id", None)
    return str(emoji_id) if emoji_id else str(emoji.name)


def emoji_name(emoji: Union[discord.PartialEmoji, discord.Emoji, str]) -> str:
    """Return the emoji name, or the string itself for unicode emojis."""
    if isinstance(emoji, str):
        return emoji
    return str(emoji.name)


def has_role(member: discord.Member, role_id: Optional[int]) -> bool:
    """Check whether a guild member holds the role with the given id."""
    if role_id is None:
        return False
    return any(role.id == role_id for role in getattr(member, "roles", []))


def is_ignored_author(author: Union[discord.User, discord.Member]) -> bool:
    """Bots and users outside a guild are never moderated."""
    return author.bot or not isinstance(author, discord.Member)


def parse_message_link(link: str) -> Optional[tuple[int, int]]:
    """
    Extract ``(channel_id, message_id)`` from a Discord message link.

    Returns None when the text is not a message link.
    """
    match = MESSAGE_LINK_PATTERN.search(link.strip())
    if not match:
        return None
    return int(match.group("channel_id")), int(match.group("message_id"))


async def resolve_message_link(bot: discord.Client, link: str) -> Optional[discord.Message]:
    """
    Fetch the message a link points to.

    Unparseable links, unknown channels and inaccessible messages all resolve
    to None; callers treat them as absent input.
    """
    ids = parse_message_link(link)
    if ids is None:
        logger.debug("[MESSAGE LINK] Ignoring %r, not a message link", link)
        return None

    channel_id, message_id = ids
    channel = bot.get_channel(channel_id)
    try:
        if channel is None:
            channel = await bot.fetch_channel(channel_id)
        return await channel.fetch_message(message_id)  # type: ignore[union-attr]
    except (discord.NotFound, discord.Forbidden, discord.HTTPException, AttributeError) as exc:
        logger.warning("[MESSAGE LINK] Could not resolve %s: %s", link, exc)
        return None


async def safe_send(channel: Optional[discord.abc.Messageable], content: str) -> bool:
    """Post ``content`` in ``channel`` if there is one; delivery failures are logged."""
    if channel is None:
        return False
    try:
        await channel.send(content)
        return True
    except (discord.Forbidden, discord.HTTPException) as exc:
        logger.warning("[SEND] Could not post in channel %s: %s", getattr(channel, "id", "?"), exc)
        return False


async def safe_send_dm(user: Union[discord.User, discord.Member], content: str) -> bool:
    """
    Send a direct message, logging instead of raising when it is refused.

    Returns True if the message was delivered.
    """
    try:
        await user.send(content)
        return True
    except (discord.Forbidden, discord.HTTPException) as exc:
        logger.info("[DM] Could not message user %s: %s", getattr(user, "id", "?"), exc)
        return False
