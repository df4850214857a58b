"""Highlighted byte ranges and their resolution against a source."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from doclog.errors import InvalidSpanError, OffsetError
from doclog.levels import Severity
from doclog.source import Position, SourceText, line_text, resolve


@dataclass(frozen=True)
class Span:
    """Half-open byte range ``[start, end)`` over a source text."""

    start: int
    end: int
    inline_message: str | None = None
    trailing_message: str | None = None
    severity_hint: Severity | None = None

    @classmethod
    def cursor(cls, offset: int, message: str | None = None) -> Span:
        """A zero-width span; it still renders a one-column marker."""
        return cls(offset, offset, trailing_message=message)

    @property
    def is_empty(self) -> bool:
        return self.start == self.end


@dataclass(frozen=True)
class ResolvedAnnotation:
    span: Span
    start: Position
    end: Position

    @property
    def multiline(self) -> bool:
        return self.start.line != self.end.line

    @property
    def width(self) -> int:
        """Marker width in columns for a single-line annotation."""
        return max(1, self.end.column - self.start.column)


def resolve_span(source: SourceText, span: Span) -> ResolvedAnnotation:
    if span.start > span.end:
        raise InvalidSpanError(span, "start is after end")
    if span.start < 0 or span.end > len(source):
        raise InvalidSpanError(span, f"outside source of {len(source)} byte(s)")
    try:
        start = resolve(source, span.start)
        end = resolve(source, span.end)
    except OffsetError as e:
        raise InvalidSpanError(span, str(e)) from e

    # A range that stops right after a newline ends on the previous line,
    # covering the newline column.
    if span.end > span.start and end.column == 1 and end.line > start.line:
        line = end.line - 1
        end = Position(line=line, column=len(line_text(source, line)) + 2, offset=span.end)

    return ResolvedAnnotation(span=span, start=start, end=end)


def resolve_spans(source: SourceText, spans: Iterable[Span]) -> list[ResolvedAnnotation]:
    """Validate spans and order them by start position, shorter spans first.

    Overlapping and nested spans are kept as they are.
    """
    resolved = [resolve_span(source, span) for span in spans]
    resolved.sort(key=lambda a: (a.start.line, a.start.column, a.span.end))
    return resolved
