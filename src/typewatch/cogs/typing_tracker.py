"""Narrate users' typing indicators in a status message."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

import discord
from discord.ext import commands

from typewatch import settings
from typewatch.events import MessagePosted, TypingStart
from typewatch.scope_gate import ScopeGate, apply_admin_command
from typewatch.sink import DiscordMessageSink, MessageSink
from typewatch.tracker import ActivityTracker
from typewatch.utils.discord_utils import get_display_name, is_channel_admin

__all__ = ["TypingTrackerCog"]

_LOG = logging.getLogger(__name__)


class TypingTrackerCog(commands.Cog):
    """Bridges discord.py events to the ActivityTracker.

    Typing and message events from enabled guilds drive the tracker.
    Administrators toggle a guild by mentioning the bot with "enable" or
    "disable".
    """

    def __init__(
        self,
        bot: commands.Bot,
        *,
        gate: Optional[ScopeGate] = None,
        sink: Optional[MessageSink] = None,
        tracker: Optional[ActivityTracker] = None,
    ) -> None:
        self.bot = bot
        self.sink = sink if sink is not None else DiscordMessageSink(bot)
        self.gate = gate if gate is not None else ScopeGate.load(settings.get_active_guilds_path())
        if tracker is None:
            tracker = ActivityTracker(
                self.sink,
                self.gate,
                stop_after=settings.get_stop_seconds(),
                stale_after=settings.get_stale_seconds(),
            )
        self.tracker = tracker
        _LOG.info(
            "Typing tracker ready (stop=%ss, stale=%ss, %d active guild(s))",
            self.tracker.stop_after,
            self.tracker.stale_after,
            len(self.gate.guild_ids),
        )

    @commands.Cog.listener()
    async def on_typing(
        self, channel: discord.abc.Messageable, user: discord.User | discord.Member, when: datetime
    ) -> None:
        guild = getattr(channel, "guild", None)
        event = TypingStart(
            user_id=user.id,
            guild_id=guild.id if guild is not None else None,
            channel_id=channel.id,
            is_bot=user.bot,
            mention=user.mention,
            display_name=get_display_name(user),
        )
        self.tracker.on_typing_start(event)

    @commands.Cog.listener()
    async def on_message(self, message: discord.Message) -> None:
        # Skip DMs
        if message.guild is None:
            return

        bot_user = self.bot.user
        mentions_self = bot_user is not None and any(u.id == bot_user.id for u in message.mentions)
        event = MessagePosted(
            author_id=message.author.id,
            guild_id=message.guild.id,
            channel_id=message.channel.id,
            mentions_self=mentions_self,
            author_is_admin=mentions_self and is_channel_admin(message.author, message.channel),
            text=message.content or "",
        )
        self.tracker.on_message_posted(event)

        emoji = apply_admin_command(self.gate, event)
        if emoji is None:
            return
        try:
            await self.sink.react(message, emoji)
        except discord.HTTPException as e:
            _LOG.warning("Failed to react to admin command %s: %s", message.id, e)


async def setup(bot: commands.Bot) -> None:
    await bot.add_cog(TypingTrackerCog(bot))
