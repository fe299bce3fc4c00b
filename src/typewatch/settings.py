"""Runtime settings read from the environment.

Secrets (the bot token) live in .env and are loaded by ``load_dotenv`` in
``__main__``. Everything else has a sensible default so the bot runs with an
empty environment apart from the token.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

_LOG = logging.getLogger(__name__)

DEFAULT_STOP_SECONDS: float = 12.0
DEFAULT_STALE_SECONDS: float = 60.0
DEFAULT_ACTIVE_GUILDS_FILE: str = "active.json"
DEFAULT_LOG_FILE: str = "logs/bot.log"


def _project_root() -> Path:
    """Return the repository root path.

    settings.py lives at src/typewatch/settings.py, so the repo root is two
    levels up from the package directory.
    """
    return Path(__file__).resolve().parents[2]


def _resolve_path(raw: str) -> Path:
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = _project_root() / path
    return path


def _positive_float_from_env(name: str, default: float) -> float:
    raw = (os.getenv(name, "") or "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        _LOG.warning("Ignoring non-numeric %s=%r; using %s", name, raw, default)
        return default
    if value <= 0:
        _LOG.warning("Ignoring non-positive %s=%r; using %s", name, raw, default)
        return default
    return value


def get_token() -> Optional[str]:
    """Return the Discord bot token, or None when it is not configured."""
    token = (os.getenv("DISCORD_TOKEN", "") or "").strip()
    return token or None


def get_stop_seconds() -> float:
    """Seconds without a typing event before the user counts as paused."""
    return _positive_float_from_env("TYPING_STOP_SECONDS", DEFAULT_STOP_SECONDS)


def get_stale_seconds() -> float:
    """Seconds without a typing event before the status message is dropped."""
    return _positive_float_from_env("TYPING_STALE_SECONDS", DEFAULT_STALE_SECONDS)


def get_active_guilds_path() -> Path:
    """Location of the JSON file holding the enabled guild ids.

    Relative values of ACTIVE_GUILDS_FILE are taken as repo-root-relative.
    """
    raw = (os.getenv("ACTIVE_GUILDS_FILE", "") or "").strip() or DEFAULT_ACTIVE_GUILDS_FILE
    return _resolve_path(raw)


def get_log_file() -> Optional[Path]:
    """Location of the log file, or None when LOG_FILE is set to an empty value."""
    raw = os.getenv("LOG_FILE")
    if raw is None:
        raw = DEFAULT_LOG_FILE
    raw = raw.strip()
    if not raw:
        return None
    return _resolve_path(raw)


def get_log_level() -> int:
    name = (os.getenv("LOG_LEVEL", "") or "INFO").strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO
