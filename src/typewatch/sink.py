"""Outbound message operations and per-session ordering of them."""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from typing import Any, Deque, Optional, Protocol

import discord
from discord.ext import commands

__all__ = ["MessageSink", "DiscordMessageSink", "StatusOutbox"]

_LOG = logging.getLogger(__name__)

_SEND = "send"
_EDIT = "edit"
_DELETE = "delete"


class MessageSink(Protocol):
    """Where status messages go. Handles returned by ``send`` are opaque."""

    async def send(self, channel_id: int, text: str) -> Any:
        ...

    async def edit(self, handle: Any, text: str) -> None:
        ...

    async def delete(self, handle: Any) -> None:
        ...

    async def react(self, handle: Any, emoji: str) -> None:
        ...


class DiscordMessageSink:
    """MessageSink backed by a discord.py client."""

    def __init__(self, bot: commands.Bot) -> None:
        self.bot = bot

    async def _resolve_channel(self, channel_id: int) -> discord.abc.Messageable:
        channel = self.bot.get_channel(channel_id)
        if channel is None:
            channel = await self.bot.fetch_channel(channel_id)
        return channel

    async def send(self, channel_id: int, text: str) -> discord.Message:
        channel = await self._resolve_channel(channel_id)
        return await channel.send(text)

    async def edit(self, handle: discord.Message, text: str) -> None:
        await handle.edit(content=text)

    async def delete(self, handle: discord.Message) -> None:
        await handle.delete()

    async def react(self, handle: discord.Message, emoji: str) -> None:
        await handle.add_reaction(emoji)


class StatusOutbox:
    """Serialized send/edit/delete pipeline for one status message.

    Operations are queued synchronously and performed in order by a single
    background task, so an edit never overtakes the send that creates the
    message and nothing reaches the sink after delete. Failures are logged
    and the next operation still runs.

    ``tasks`` is a shared set the drain task registers itself in until it
    finishes, letting the owner await outstanding I/O.
    """

    def __init__(self, sink: MessageSink, channel_id: int, tasks: Optional[set[asyncio.Task]] = None) -> None:
        self._sink = sink
        self.channel_id = channel_id
        self.handle: Any = None
        self._pending: Deque[tuple[str, Optional[str]]] = deque()
        self._worker: Optional[asyncio.Task] = None
        self._tasks = tasks if tasks is not None else set()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def post(self, text: str) -> None:
        self._submit(_SEND, text)

    def edit(self, text: str) -> None:
        self._submit(_EDIT, text)

    def delete(self) -> None:
        self._submit(_DELETE, None)
        self._closed = True

    async def wait_idle(self) -> None:
        while self._worker is not None and not self._worker.done():
            await asyncio.shield(self._worker)

    def _submit(self, op: str, text: Optional[str]) -> None:
        if self._closed:
            _LOG.debug("Dropping %s for closed status message in channel %s", op, self.channel_id)
            return
        self._pending.append((op, text))
        if self._worker is None or self._worker.done():
            self._worker = asyncio.get_running_loop().create_task(self._drain())
            self._tasks.add(self._worker)
            self._worker.add_done_callback(self._tasks.discard)

    async def _drain(self) -> None:
        while self._pending:
            op, text = self._pending.popleft()
            await self._perform(op, text)

    async def _perform(self, op: str, text: Optional[str]) -> None:
        try:
            if op == _SEND:
                self.handle = await self._sink.send(self.channel_id, text)
            elif self.handle is None:
                _LOG.debug("Skipping %s in channel %s; status message was never sent", op, self.channel_id)
            elif op == _EDIT:
                await self._sink.edit(self.handle, text)
            else:
                await self._sink.delete(self.handle)
        except Exception:
            _LOG.exception("Status message %s failed in channel %s", op, self.channel_id)
