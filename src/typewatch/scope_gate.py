"""Per-guild enable list and the admin commands that toggle it."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable, Optional

from typewatch.events import MessagePosted

__all__ = ["ScopeGate", "apply_admin_command", "ENABLE_EMOJI", "DISABLE_EMOJI"]

_LOG = logging.getLogger(__name__)

ENABLE_KEYWORD = "enable"
DISABLE_KEYWORD = "disable"
ENABLE_EMOJI = "📈"
DISABLE_EMOJI = "📉"


class ScopeGate:
    """Ordered set of guild ids where typing is tracked.

    When ``path`` is set, every change rewrites the file as a JSON array of
    id strings before the mutating call returns.
    """

    def __init__(self, guild_ids: Iterable[int] = (), path: Optional[Path] = None) -> None:
        self._guild_ids: dict[int, None] = dict.fromkeys(guild_ids)
        self.path = path

    @classmethod
    def load(cls, path: Path) -> "ScopeGate":
        """Read the gate from ``path``; anything unusable yields an empty gate."""
        try:
            raw = json.loads(Path(path).read_text(encoding="utf-8"))
        except FileNotFoundError:
            _LOG.info("No active guild file at %s; starting with none enabled", path)
            return cls(path=path)
        except (OSError, ValueError) as exc:
            _LOG.warning("Could not read active guild file %s: %s", path, exc)
            return cls(path=path)
        if not isinstance(raw, list):
            _LOG.warning("Active guild file %s does not hold a list; ignoring it", path)
            return cls(path=path)

        guild_ids = []
        for entry in raw:
            try:
                guild_ids.append(int(entry))
            except (TypeError, ValueError):
                _LOG.warning("Skipping invalid guild id %r in %s", entry, path)
        _LOG.info("Loaded %d active guild(s) from %s", len(guild_ids), path)
        return cls(guild_ids, path=path)

    @property
    def guild_ids(self) -> list[int]:
        return list(self._guild_ids)

    def is_active(self, guild_id: Optional[int]) -> bool:
        return guild_id is not None and guild_id in self._guild_ids

    def activate(self, guild_id: int) -> bool:
        """Enable tracking in a guild. Returns False if it already was."""
        if guild_id in self._guild_ids:
            return False
        self._guild_ids[guild_id] = None
        _LOG.info("Starting in %s", guild_id)
        self._save()
        return True

    def deactivate(self, guild_id: int) -> bool:
        """Disable tracking in a guild. Returns False if it already was."""
        if guild_id not in self._guild_ids:
            return False
        del self._guild_ids[guild_id]
        _LOG.info("Stopping in %s", guild_id)
        self._save()
        return True

    def _save(self) -> None:
        if self.path is None:
            return
        payload = json.dumps([str(gid) for gid in self._guild_ids], indent=4)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(payload, encoding="utf-8")
        except OSError:
            _LOG.exception("Failed to write active guild file %s", self.path)


def apply_admin_command(gate: ScopeGate, event: MessagePosted) -> Optional[str]:
    """Toggle the event's guild if it is an admin command.

    Returns the emoji to react with, or None when the message was not a
    command or did not change anything.
    """
    if event.guild_id is None or not event.mentions_self or not event.author_is_admin:
        return None

    _LOG.info("Got message from admin %s in guild %s", event.author_id, event.guild_id)
    text = event.text.lower()
    # "disable" contains "enable", so it has to be checked first.
    if DISABLE_KEYWORD in text:
        return DISABLE_EMOJI if gate.deactivate(event.guild_id) else None
    if ENABLE_KEYWORD in text:
        return ENABLE_EMOJI if gate.activate(event.guild_id) else None
    return None
