"""Shared test helpers for the doclog test suite."""

from __future__ import annotations

from doclog.composer import ExcerptOptions, compose
from doclog.levels import Severity
from doclog.source import SourceText
from doclog.spans import Span, resolve_spans

SCENARIO = 'let a = "test"\nlet y = 3\nlet z = x + y'


def excerpt(text: str, *spans: Span, level: Severity = Severity.ERROR, **options) -> list[str]:
    """Compose a single excerpt with plain unicode glyphs."""
    source = SourceText(text)
    return compose(
        source,
        resolve_spans(source, spans),
        level=level,
        options=ExcerptOptions(**options),
    )


def numbered(count: int) -> str:
    """A source with lines ``line 1`` .. ``line <count>``."""
    return "\n".join(f"line {n}" for n in range(1, count + 1))
