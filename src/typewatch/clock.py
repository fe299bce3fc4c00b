"""Timer scheduling on the running asyncio loop."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Optional, Protocol

__all__ = ["Clock", "LoopClock"]


class Clock(Protocol):
    """Schedule and cancel one-shot callbacks.

    ``cancel`` must accept a token that already fired or was already
    cancelled and do nothing.
    """

    def after(self, delay: float, callback: Callable[[], None]) -> Any:
        ...

    def cancel(self, token: Any) -> None:
        ...


class LoopClock:
    """Clock backed by ``loop.call_later``.

    The loop is looked up lazily so the clock can be built before the bot
    starts its event loop.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop

    def after(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)

    def cancel(self, token: Optional[asyncio.TimerHandle]) -> None:
        if token is not None:
            token.cancel()
