"""In-memory sessions keyed by (user, channel)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from typewatch.clock import Clock
from typewatch.events import SessionKey
from typewatch.sink import StatusOutbox
from typewatch.status_text import StatusText

__all__ = ["TypingState", "Session", "SessionRegistry"]

_LOG = logging.getLogger(__name__)


class TypingState(Enum):
    FIRST_TYPING = "first-typing"
    FIRST_PAUSE = "first-pause"
    RESUMED = "resumed"
    OTHER_PAUSE = "other-pause"


@dataclass(eq=False)
class Session:
    """One user's tracked typing activity in one channel."""

    key: SessionKey
    status: StatusText
    outbox: StatusOutbox
    state: TypingState = TypingState.FIRST_TYPING
    label: str = ""
    stop_timer: Any = None
    stale_timer: Any = None
    # Bumped on every re-arm; timer callbacks compare against it.
    generation: int = 0


class SessionRegistry:
    """Owns sessions and the timers attached to them."""

    def __init__(self, clock: Clock) -> None:
        self._clock = clock
        self._sessions: dict[SessionKey, Session] = {}

    def __contains__(self, key: object) -> bool:
        return key in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)

    def get(self, key: SessionKey) -> Optional[Session]:
        return self._sessions.get(key)

    def put(self, key: SessionKey, session: Session) -> None:
        if key in self._sessions:
            raise KeyError(f"Session already tracked for {key}")
        self._sessions[key] = session

    def cancel_timers(self, session: Session) -> None:
        self._clock.cancel(session.stop_timer)
        self._clock.cancel(session.stale_timer)
        session.stop_timer = None
        session.stale_timer = None

    def remove(self, key: SessionKey) -> Optional[Session]:
        """Cancel the session's timers and forget it. Unknown keys are a no-op."""
        session = self._sessions.get(key)
        if session is None:
            return None
        self.cancel_timers(session)
        del self._sessions[key]
        _LOG.debug("Removed session %s (%d left)", key, len(self._sessions))
        return session
