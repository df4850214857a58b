"""Underline composition for annotated source excerpts.

Produces a bordered group of rows::

    × ╭─[main.txt]
    1 │   let a = 1
      │ ╭─────^
    2 │ │ let b = a + c
      │ ╰──^ binding spans two lines
      │               ^ not defined
      ╰─

Every multi-line annotation owns a connector lane between the gutter bar
and the source text; single-line annotations get one pointer row each,
stacked in resolved order.
"""

from __future__ import annotations

from dataclasses import dataclass

from doclog.errors import EmptyBlockError
from doclog.glyphs import UNICODE, Glyphs, paint
from doclog.levels import Severity
from doclog.source import SourceText, line_text
from doclog.spans import ResolvedAnnotation


@dataclass(frozen=True)
class ExcerptOptions:
    title: str | None = None
    file_path: str | None = None
    final_message: str | None = None
    previous_lines: int = 0
    next_lines: int = 0
    middle_lines: int = 0
    show_newlines: bool = False
    align_messages: bool = False


def displayed_lines(
    source: SourceText,
    annotations: list[ResolvedAnnotation],
    options: ExcerptOptions,
) -> list[int]:
    """Line numbers shown for a group, in ascending order."""
    covered: set[int] = set()
    for a in annotations:
        covered.update(range(a.start.line, a.end.line + 1))
    if not covered:
        return []

    first, last = min(covered), max(covered)
    covered.update(range(max(1, first - options.previous_lines), first))
    covered.update(range(last + 1, min(source.line_count, last + options.next_lines) + 1))

    lines: list[int] = []
    for line in sorted(covered):
        if lines and 1 < line - lines[-1] <= options.middle_lines + 1:
            lines.extend(range(lines[-1] + 1, line))
        lines.append(line)
    return lines


class UnderlineComposer:
    """Render one source excerpt and its annotations into text rows."""

    def __init__(
        self,
        source: SourceText,
        annotations: list[ResolvedAnnotation],
        *,
        level: Severity,
        glyphs: Glyphs = UNICODE,
        options: ExcerptOptions | None = None,
        color: bool = False,
    ) -> None:
        self.source = source
        self.annotations = annotations
        self.level = level
        self.glyphs = glyphs
        self.options = options or ExcerptOptions()
        self.color = color

        multiline = [i for i, a in enumerate(annotations) if a.multiline]
        self._lanes = {index: lane for lane, index in enumerate(multiline)}
        self._lane_count = len(multiline)
        self._open: set[int] = set()
        self._width = 1

    # ── Public API ─────────────────────────────────────────────

    def compose(self) -> list[str]:
        if not self.source.text:
            raise EmptyBlockError("code block has an empty source text")
        lines = displayed_lines(self.source, self.annotations, self.options)
        if not lines:
            raise EmptyBlockError("code block has no lines to display")

        self._width = len(str(lines[-1]))
        self._open = set()
        g = self.glyphs
        rows = self._top_rows()

        previous = None
        for line in lines:
            if previous is not None and line - previous > 1:
                rows.append(f"{'':>{self._width}} {g.ellipsis}")
            previous = line
            rows.append(self._source_row(line))
            rows.extend(self._annotation_rows(line))

        rows.extend(self._bottom_rows())
        return rows

    # ── Border ─────────────────────────────────────────────────

    def _top_rows(self) -> list[str]:
        g = self.glyphs
        symbol = paint(f"{self.level.symbol:>{self._width}}", self.level.color, self.color)
        indent = " " * (self._width + 1)
        border = g.top_corner + g.horizontal
        if self.options.file_path:
            border += f"[{' '.join(self.options.file_path.splitlines())}]"

        if not self.options.title:
            return [f"{symbol} {border}"]
        title = self.options.title.splitlines() or [""]
        rows = [f"{symbol} {title[0]}"]
        rows.extend(indent + part for part in title[1:])
        rows.append(indent + border)
        return rows

    def _bottom_rows(self) -> list[str]:
        g = self.glyphs
        indent = " " * (self._width + 1)
        border = g.bottom_corner + g.horizontal
        if not self.options.final_message:
            return [indent + border]
        message = self.options.final_message.splitlines() or [""]
        rows = [f"{indent}{border} {message[0]}"]
        rows.extend(" " * (len(indent) + len(border) + 1) + part for part in message[1:])
        return rows

    # ── Rows ───────────────────────────────────────────────────

    def _gutter(self, line: int | None = None) -> str:
        number = "" if line is None else str(line)
        return f"{number:>{self._width}} {self.glyphs.vertical} "

    def _lane_cells(self, corner_lane: int | None = None, corner: str = "") -> str:
        if not self._lane_count:
            return ""
        g = self.glyphs
        cells = []
        for lane in range(self._lane_count):
            if lane == corner_lane:
                cells.append(corner)
            elif corner_lane is not None and lane > corner_lane:
                cells.append(g.horizontal)
            elif lane in self._open:
                cells.append(g.vertical)
            else:
                cells.append(" ")
        cells.append(" " if corner_lane is None else g.horizontal)
        return "".join(cells)

    def _source_row(self, line: int) -> str:
        text = line_text(self.source, line)
        if self.options.show_newlines and self.source.has_newline(line):
            text += self.glyphs.newline
        return (self._gutter(line) + self._lane_cells() + text).rstrip()

    def _annotation_rows(self, line: int) -> list[str]:
        rows: list[str] = []
        align = self._message_column(line) if self.options.align_messages else 0
        for index, a in enumerate(self.annotations):
            if not a.multiline:
                if a.start.line == line:
                    rows.extend(self._pointer_rows(a, align))
                continue
            lane = self._lanes[index]
            if a.start.line == line:
                rows.extend(self._connector_start_rows(a, lane))
            if a.end.line == line:
                rows.extend(self._connector_end_rows(a, lane))
        return rows

    def _message_column(self, line: int) -> int:
        """Widest marker head among the single-line messages on ``line``."""
        column = 0
        for a in self.annotations:
            if a.multiline or a.start.line != line:
                continue
            inline, trailing = a.span.inline_message, a.span.trailing_message
            if inline or trailing:
                column = max(column, a.start.column - 1 + a.width)
            if inline and trailing:
                column = max(column, a.start.column + 1)
        return column

    def _pointer_rows(self, a: ResolvedAnnotation, align: int = 0) -> list[str]:
        g = self.glyphs
        pad = " " * (a.start.column - 1)
        marker = self._marker(a, g.marker * a.width)
        inline, trailing = a.span.inline_message, a.span.trailing_message
        message = inline or trailing

        width = len(pad) + a.width
        if message and align > width:
            marker += " " * (align - width)
            width = align
        rows = self._message_rows(pad + marker, width, message)
        if inline and trailing:
            hook = pad + g.bottom_corner + g.horizontal
            hook += g.horizontal * max(0, align - len(hook))
            rows.extend(self._message_rows(hook, len(hook), trailing))
        return rows

    def _connector_start_rows(self, a: ResolvedAnnotation, lane: int) -> list[str]:
        g = self.glyphs
        lead = g.horizontal * (a.start.column - 1)
        cells = self._lane_cells(lane, g.top_corner)
        self._open.add(lane)
        return self._message_rows(
            lead + self._marker(a, g.marker),
            len(lead) + 1,
            a.span.inline_message,
            cells=cells,
        )

    def _connector_end_rows(self, a: ResolvedAnnotation, lane: int) -> list[str]:
        g = self.glyphs
        self._open.discard(lane)
        lead = g.horizontal * (max(1, a.end.column - 1) - 1)
        cells = self._lane_cells(lane, g.bottom_corner)
        return self._message_rows(
            lead + self._marker(a, g.marker),
            len(lead) + 1,
            a.span.trailing_message,
            cells=cells,
        )

    def _message_rows(
        self,
        head: str,
        head_width: int,
        message: str | None,
        *,
        cells: str | None = None,
    ) -> list[str]:
        """Rows for a marker followed by a message that may span lines.

        ``head_width`` is the visible width of ``head`` (it may carry color).
        """
        first = self._gutter() + (self._lane_cells() if cells is None else cells) + head
        if not message:
            return [first]
        parts = message.splitlines() or [""]
        rows = [f"{first} {parts[0]}"]
        indent = " " * (head_width + 1)
        for part in parts[1:]:
            rows.append((self._gutter() + self._lane_cells() + indent + part).rstrip())
        return rows

    def _marker(self, a: ResolvedAnnotation, text: str) -> str:
        level = a.span.severity_hint or self.level
        return paint(text, level.color, self.color)


def compose(
    source: SourceText,
    annotations: list[ResolvedAnnotation],
    *,
    level: Severity,
    glyphs: Glyphs = UNICODE,
    options: ExcerptOptions | None = None,
    color: bool = False,
) -> list[str]:
    return UnderlineComposer(
        source, annotations, level=level, glyphs=glyphs, options=options, color=color
    ).compose()
