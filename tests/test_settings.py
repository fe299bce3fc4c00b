from __future__ import annotations

import logging
from pathlib import Path

from typewatch import settings


def test_defaults(monkeypatch):
    for name in ("DISCORD_TOKEN", "TYPING_STOP_SECONDS", "TYPING_STALE_SECONDS", "ACTIVE_GUILDS_FILE", "LOG_FILE", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    assert settings.get_token() is None
    assert settings.get_stop_seconds() == 12.0
    assert settings.get_stale_seconds() == 60.0
    assert settings.get_active_guilds_path() == settings._project_root() / "active.json"
    assert settings.get_log_file() == settings._project_root() / "logs" / "bot.log"
    assert settings.get_log_level() == logging.INFO


def test_overrides(monkeypatch, temp_dir):
    monkeypatch.setenv("DISCORD_TOKEN", " abc ")
    monkeypatch.setenv("TYPING_STOP_SECONDS", "3.5")
    monkeypatch.setenv("TYPING_STALE_SECONDS", "30")
    monkeypatch.setenv("ACTIVE_GUILDS_FILE", str(temp_dir / "guilds.json"))
    monkeypatch.setenv("LOG_FILE", "")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    assert settings.get_token() == "abc"
    assert settings.get_stop_seconds() == 3.5
    assert settings.get_stale_seconds() == 30.0
    assert settings.get_active_guilds_path() == Path(temp_dir / "guilds.json")
    assert settings.get_log_file() is None
    assert settings.get_log_level() == logging.DEBUG


def test_bad_numbers_fall_back(monkeypatch):
    monkeypatch.setenv("TYPING_STOP_SECONDS", "soon")
    monkeypatch.setenv("TYPING_STALE_SECONDS", "-1")
    monkeypatch.setenv("LOG_LEVEL", "chatty")

    assert settings.get_stop_seconds() == settings.DEFAULT_STOP_SECONDS
    assert settings.get_stale_seconds() == settings.DEFAULT_STALE_SECONDS
    assert settings.get_log_level() == logging.INFO
