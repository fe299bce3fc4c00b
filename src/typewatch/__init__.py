"""Narrate Discord typing indicators in a single evolving status message."""

from .events import MessagePosted, SessionKey, TypingStart
from .phrases import PhraseBank, PhraseCategory
from .registry import Session, SessionRegistry, TypingState
from .scope_gate import ScopeGate, apply_admin_command
from .status_text import StatusText
from .tracker import ActivityTracker

__all__ = [
    "ActivityTracker",
    "MessagePosted",
    "PhraseBank",
    "PhraseCategory",
    "ScopeGate",
    "Session",
    "SessionKey",
    "SessionRegistry",
    "StatusText",
    "TypingStart",
    "TypingState",
    "apply_admin_command",
]
