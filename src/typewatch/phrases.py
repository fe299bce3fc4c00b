"""Randomized status phrases for each stage of a typing session."""

from __future__ import annotations

import random
from enum import Enum
from typing import Callable, Mapping, Sequence

__all__ = ["PhraseCategory", "PhraseBank", "MENTION_TOKEN", "DEFAULT_PHRASES"]

MENTION_TOKEN = "{mention}"


class PhraseCategory(Enum):
    STARTED = "started"
    PAUSED = "paused"
    RESUMED = "resumed"


DEFAULT_PHRASES: Mapping[PhraseCategory, Sequence[str]] = {
    PhraseCategory.STARTED: (
        "What's up {mention}? Got something to share with the class?",
        "Oooh whatcha typing there {mention}?",
        "Let's see that message {mention} 👀",
        "Excited to see what you're typing out {mention}",
        "Oh sorry {mention}, don't let me interrupt you",
    ),
    PhraseCategory.PAUSED: (
        "Huh? Why'd you stop?",
        "Well don't let me stop you",
        "No no keep going, I wanted to see what you were saying",
        "Taking a breather?",
        "Yeah, okay, let those fingers rest for a bit",
    ),
    PhraseCategory.RESUMED: (
        "Oh? Welcome back?",
        "Come back to finish what you started?",
        "Good to see you back on the grind",
        "Back at it again!",
        "Hopefully worth the wait",
    ),
}

Chooser = Callable[[Sequence[str]], str]


class PhraseBank:
    """Pick a phrase for a category and fill in the user mention.

    ``chooser`` receives the candidate list and returns one element. It
    defaults to :func:`random.choice`; tests pass something deterministic.
    """

    def __init__(
        self,
        phrases: Mapping[PhraseCategory, Sequence[str]] | None = None,
        chooser: Chooser | None = None,
    ) -> None:
        self._phrases = dict(phrases or DEFAULT_PHRASES)
        self._choose = chooser or random.choice
        for category in PhraseCategory:
            if not self._phrases.get(category):
                raise ValueError(f"No phrases configured for {category.value!r}")

    def pick(self, category: PhraseCategory, mention: str = "") -> str:
        template = self._choose(list(self._phrases[category]))
        return template.replace(MENTION_TOKEN, mention)
