"""Structured content of a status message."""

from __future__ import annotations

from dataclasses import dataclass, field

__all__ = ["StatusText", "STRIKE_MARKER"]

STRIKE_MARKER = "~~"


@dataclass
class StatusText:
    """History lines plus one current annotation.

    Only the annotation changes in place; once a new line is appended the
    previous annotation becomes part of ``history`` exactly as it rendered.
    """

    annotation: str
    history: list[str] = field(default_factory=list)
    struck: bool = False

    def append(self, line: str) -> None:
        self.history.append(self._render_annotation())
        self.annotation = line
        self.struck = False

    def strike(self) -> None:
        self.struck = True

    def unstrike(self) -> None:
        self.struck = False

    @property
    def last_line(self) -> str:
        return self._render_annotation()

    def render(self) -> str:
        return "\n".join([*self.history, self._render_annotation()])

    def _render_annotation(self) -> str:
        if self.struck:
            return f"{STRIKE_MARKER}{self.annotation}{STRIKE_MARKER}"
        return self.annotation
