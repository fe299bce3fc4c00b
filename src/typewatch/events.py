"""Platform-neutral inbound events consumed by the tracker."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple, Optional

__all__ = ["SessionKey", "TypingStart", "MessagePosted"]


class SessionKey(NamedTuple):
    user_id: int
    channel_id: int


@dataclass(frozen=True)
class TypingStart:
    user_id: int
    guild_id: Optional[int]
    channel_id: int
    is_bot: bool = False
    mention: str = ""
    display_name: str = ""

    @property
    def key(self) -> SessionKey:
        return SessionKey(self.user_id, self.channel_id)

    @property
    def user_mention(self) -> str:
        return self.mention or f"<@{self.user_id}>"


@dataclass(frozen=True)
class MessagePosted:
    author_id: int
    guild_id: Optional[int]
    channel_id: int
    mentions_self: bool = False
    author_is_admin: bool = False
    text: str = ""

    @property
    def key(self) -> SessionKey:
        return SessionKey(self.author_id, self.channel_id)
