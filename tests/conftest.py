"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import tempfile
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from typewatch.phrases import PhraseBank
from typewatch.registry import SessionRegistry
from typewatch.scope_gate import ScopeGate
from typewatch.tracker import ActivityTracker

GUILD_ID = 555
OTHER_GUILD_ID = 556
CHANNEL_ID = 123456789
USER_ID = 111222333


class FakeTimer:
    def __init__(self, when: float, seq: int, callback):
        self.when = when
        self.seq = seq
        self.callback = callback
        self.cancelled = False
        self.fired = False


class FakeClock:
    """Virtual clock; timers only fire when the test advances time."""

    def __init__(self):
        self.now = 0.0
        self.timers: list[FakeTimer] = []
        self._seq = 0

    def after(self, delay, callback):
        self._seq += 1
        timer = FakeTimer(self.now + delay, self._seq, callback)
        self.timers.append(timer)
        return timer

    def cancel(self, token):
        if token is not None:
            token.cancelled = True

    def advance(self, seconds):
        target = self.now + seconds
        while True:
            due = [t for t in self.timers if not t.cancelled and not t.fired and t.when <= target]
            if not due:
                break
            timer = min(due, key=lambda t: (t.when, t.seq))
            self.now = timer.when
            timer.fired = True
            timer.callback()
        self.now = target

    def fire(self, token):
        """Run a timer's callback even if it was cancelled, as a late timer would."""
        token.fired = True
        token.callback()

    @property
    def pending(self) -> list[FakeTimer]:
        return [t for t in self.timers if not t.cancelled and not t.fired]


class FakeSink:
    """Records every sink call in order."""

    def __init__(self):
        self.calls: list[tuple] = []
        self.fail_on: set[str] = set()
        self._next_id = 1000

    def _maybe_fail(self, op):
        if op in self.fail_on:
            raise RuntimeError(f"{op} rejected")

    async def send(self, channel_id, text):
        self.calls.append(("send", channel_id, text))
        self._maybe_fail("send")
        self._next_id += 1
        return SimpleNamespace(id=self._next_id, channel_id=channel_id)

    async def edit(self, handle, text):
        self.calls.append(("edit", handle.id, text))
        self._maybe_fail("edit")

    async def delete(self, handle):
        self.calls.append(("delete", handle.id))
        self._maybe_fail("delete")

    async def react(self, handle, emoji):
        self.calls.append(("react", handle.id, emoji))
        self._maybe_fail("react")

    def ops(self) -> list[str]:
        return [call[0] for call in self.calls]


def first_choice(options):
    return options[0]


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sink():
    return FakeSink()


@pytest.fixture
def gate():
    return ScopeGate([GUILD_ID])


@pytest.fixture
def phrases():
    return PhraseBank(chooser=first_choice)


@pytest.fixture
def tracker(sink, gate, clock, phrases):
    return ActivityTracker(
        sink,
        gate,
        clock=clock,
        registry=SessionRegistry(clock),
        phrases=phrases,
        stop_after=12,
        stale_after=60,
    )


@pytest.fixture
def mock_bot():
    """Create a mock Discord bot."""
    bot = MagicMock()
    bot.user = MagicMock()
    bot.user.id = 999888777
    bot.user.name = "TestBot"
    bot.loop = MagicMock()
    return bot
