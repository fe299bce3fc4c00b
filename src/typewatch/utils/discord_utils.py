"""Discord utility functions."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import discord


def get_display_name(user: discord.User | discord.Member) -> str:
    """Get user's display name with proper fallback hierarchy.

    Priority: server nickname > global display name > username

    Args:
        user: Discord user or member object

    Returns:
        The display name to use for this user
    """
    if getattr(user, "nick", None):
        return user.nick
    if getattr(user, "global_name", None):
        return user.global_name
    return user.name


def is_channel_admin(user: discord.User | discord.Member, channel: discord.abc.GuildChannel) -> bool:
    """Return True if ``user`` holds the administrator permission in ``channel``.

    Plain ``User`` objects (no guild membership resolved) are never admins.
    """
    permissions_for = getattr(channel, "permissions_for", None)
    if permissions_for is None or not hasattr(user, "guild_permissions"):
        return False
    return bool(permissions_for(user).administrator)
