"""Typing-activity state machine.

Each (user, channel) pair gets a session that narrates the user's typing in
a single status message:

* first typing event sends a "started" line;
* the stop timer appends a "paused" line;
* typing again appends a "resumed" line;
* later stops strike the last line through and later resumes restore it;
* the stale timer, or the user actually posting, deletes the message.

Both timers are re-armed on every typing event. Callbacks carry the session
and generation they were armed for and do nothing once either has moved on.
"""

from __future__ import annotations

import asyncio
import functools
import logging
from typing import Optional

from typewatch.clock import Clock, LoopClock
from typewatch.events import MessagePosted, SessionKey, TypingStart
from typewatch.phrases import PhraseBank, PhraseCategory
from typewatch.registry import Session, SessionRegistry, TypingState
from typewatch.scope_gate import ScopeGate
from typewatch.settings import DEFAULT_STALE_SECONDS, DEFAULT_STOP_SECONDS
from typewatch.sink import MessageSink, StatusOutbox
from typewatch.status_text import StatusText

__all__ = ["ActivityTracker"]

_LOG = logging.getLogger(__name__)


class ActivityTracker:
    """Owns every typing session and reacts to events and timers."""

    def __init__(
        self,
        sink: MessageSink,
        gate: ScopeGate,
        *,
        clock: Optional[Clock] = None,
        registry: Optional[SessionRegistry] = None,
        phrases: Optional[PhraseBank] = None,
        stop_after: float = DEFAULT_STOP_SECONDS,
        stale_after: float = DEFAULT_STALE_SECONDS,
    ) -> None:
        self.sink = sink
        self.gate = gate
        self.clock = clock if clock is not None else LoopClock()
        self.registry = registry if registry is not None else SessionRegistry(self.clock)
        self.phrases = phrases if phrases is not None else PhraseBank()
        self.stop_after = stop_after
        self.stale_after = stale_after
        self._io_tasks: set[asyncio.Task] = set()

    # ==================== Inbound events ====================

    def on_typing_start(self, event: TypingStart) -> None:
        if event.is_bot:
            return
        if not self.gate.is_active(event.guild_id):
            return

        label = event.display_name or event.user_mention
        _LOG.info("Got typing info from %s in %s", label, event.channel_id)

        session = self.registry.get(event.key)
        if session is None:
            session = self._open_session(event, label)
        elif session.state is TypingState.FIRST_PAUSE:
            _LOG.info("    (resumed)")
            session.state = TypingState.RESUMED
            session.status.append(self.phrases.pick(PhraseCategory.RESUMED))
            session.outbox.edit(session.status.render())
        elif session.state is TypingState.OTHER_PAUSE:
            _LOG.info("    (second resume)")
            session.state = TypingState.RESUMED
            session.status.unstrike()
            session.outbox.edit(session.status.render())
        else:
            _LOG.info("    (continued)")

        self._arm_timers(session)

    def on_message_posted(self, event: MessagePosted) -> bool:
        """Close the author's session in this channel, if any.

        Returns True when a session was closed.
        """
        if not self.gate.is_active(event.guild_id):
            return False
        session = self.registry.get(event.key)
        if session is None:
            return False
        _LOG.info("Removing own message because %s posted in %s", session.label, event.channel_id)
        self._close(session)
        return True

    # ==================== Timers ====================

    def _arm_timers(self, session: Session) -> None:
        self.registry.cancel_timers(session)
        session.generation += 1
        generation = session.generation
        session.stop_timer = self.clock.after(
            self.stop_after, functools.partial(self._on_stop_timer, session, generation)
        )
        session.stale_timer = self.clock.after(
            self.stale_after, functools.partial(self._on_stale_timer, session, generation)
        )

    def _is_current(self, session: Session, generation: int) -> bool:
        return self.registry.get(session.key) is session and session.generation == generation

    def _on_stop_timer(self, session: Session, generation: int) -> None:
        if not self._is_current(session, generation):
            return
        session.stop_timer = None

        if session.state is TypingState.FIRST_TYPING:
            _LOG.info("First typing stop for %s in %s", session.label, session.key.channel_id)
            session.state = TypingState.FIRST_PAUSE
            session.status.append(self.phrases.pick(PhraseCategory.PAUSED))
            session.outbox.edit(session.status.render())
        elif session.state is TypingState.RESUMED:
            _LOG.info("Other typing stop for %s in %s", session.label, session.key.channel_id)
            session.state = TypingState.OTHER_PAUSE
            session.status.strike()
            session.outbox.edit(session.status.render())

    def _on_stale_timer(self, session: Session, generation: int) -> None:
        if not self._is_current(session, generation):
            return
        session.stale_timer = None
        _LOG.info("Stale message for %s in %s", session.label, session.key.channel_id)
        self._close(session)

    # ==================== Session lifecycle ====================

    def _open_session(self, event: TypingStart, label: str) -> Session:
        _LOG.info("    (first instance)")
        text = StatusText(self.phrases.pick(PhraseCategory.STARTED, event.user_mention))
        outbox = StatusOutbox(self.sink, event.channel_id, self._io_tasks)
        session = Session(key=event.key, status=text, outbox=outbox, label=label)
        self.registry.put(event.key, session)
        outbox.post(text.render())
        return session

    def _close(self, session: Session) -> None:
        session.outbox.delete()
        self.registry.remove(session.key)

    def get_session(self, key: SessionKey) -> Optional[Session]:
        return self.registry.get(key)

    async def drain(self) -> None:
        """Wait until every queued status message operation has finished."""
        while self._io_tasks:
            await asyncio.gather(*list(self._io_tasks))
