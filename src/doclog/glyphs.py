"""Box-drawing glyph tables used by the renderer."""

from __future__ import annotations

from dataclasses import dataclass

import click


@dataclass(frozen=True)
class Glyphs:
    vertical: str
    horizontal: str
    top_corner: str       # opens a code group and a multi-line connector
    bottom_corner: str    # closes them
    marker: str
    ellipsis: str
    arrow: str
    newline: str
    note: str
    pointer: str          # leads a step, a stack message or a cause
    branch: str           # vertical bar with a branch to the right


UNICODE = Glyphs(
    vertical="│",
    horizontal="─",
    top_corner="╭",
    bottom_corner="╰",
    marker="^",
    ellipsis="···",
    arrow="↪",
    newline="↩",
    note="=",
    pointer="▶",
    branch="├",
)

ASCII = Glyphs(
    vertical="|",
    horizontal="-",
    top_corner=",",
    bottom_corner="`",
    marker="^",
    ellipsis="...",
    arrow="->",
    newline="$",
    note="=",
    pointer=">",
    branch="|",
)


def by_name(name: str) -> Glyphs:
    if name == "unicode":
        return UNICODE
    if name == "ascii":
        return ASCII
    raise ValueError(f"unknown charset '{name}' (expected 'unicode' or 'ascii')")


def paint(text: str, fg: str | None, enabled: bool) -> str:
    """Bold-color ``text`` for a terminal when ``enabled``."""
    if not enabled or not text:
        return text
    return click.style(text, fg=fg, bold=True)
