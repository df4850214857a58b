"""Severity levels attached to a log."""

from __future__ import annotations

from enum import Enum


class Severity(Enum):
    TRACE = "trace"
    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"

    @property
    def rank(self) -> int:
        return _RANKS[self]

    @property
    def symbol(self) -> str:
        """Glyph shown in the gutter of a code excerpt's top border."""
        return _SYMBOLS[self]

    @property
    def color(self) -> str:
        return _COLORS[self]

    @classmethod
    def parse(cls, name: str) -> Severity:
        """Look up a severity by tag, accepting ``warning`` for ``warn``."""
        key = name.strip().lower()
        if key == "warning":
            key = "warn"
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"unknown severity '{name}'") from None

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank <= other.rank


_RANKS = {
    Severity.TRACE: 1000,
    Severity.DEBUG: 2000,
    Severity.INFO: 3000,
    Severity.WARN: 4000,
    Severity.ERROR: 5000,
}

_SYMBOLS = {
    Severity.TRACE: "•",
    Severity.DEBUG: "•",
    Severity.INFO: "•",
    Severity.WARN: "⚠",
    Severity.ERROR: "×",
}

# click.style color names
_COLORS = {
    Severity.TRACE: "bright_black",
    Severity.DEBUG: "green",
    Severity.INFO: "blue",
    Severity.WARN: "yellow",
    Severity.ERROR: "red",
}
