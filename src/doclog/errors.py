"""Exceptions raised while building or rendering a log."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from doclog.spans import Span


class DoclogError(Exception):
    """Base class for every error caused by invalid caller input."""


class OffsetError(DoclogError):
    """A byte offset is outside the source or splits a character."""

    def __init__(self, message: str, offset: int | None = None) -> None:
        self.offset = offset
        super().__init__(message)


class LineRangeError(DoclogError):
    """A line number is outside the source."""

    def __init__(self, line: int, line_count: int) -> None:
        self.line = line
        self.line_count = line_count
        super().__init__(f"line {line} out of range (source has {line_count} line(s))")


class InvalidSpanError(DoclogError):
    """A highlighted range cannot be placed on its source."""

    def __init__(self, span: Span, reason: str) -> None:
        self.span = span
        self.reason = reason
        super().__init__(f"invalid span [{span.start}, {span.end}): {reason}")


class EmptyBlockError(DoclogError):
    """A code block has nothing to display."""
