"""Layout renderer: walks a block tree and produces decorated text lines."""

from __future__ import annotations

import logging
from typing import IO

import click

from doclog.blocks import (
    Block,
    Code,
    Container,
    Header,
    Log,
    Note,
    Prefix,
    Separator,
    Stack,
    StackTrace,
    Steps,
    Tag,
    Text,
)
from doclog.composer import compose
from doclog.glyphs import UNICODE, Glyphs, paint
from doclog.levels import Severity
from doclog.spans import resolve_spans

logger = logging.getLogger(__name__)


class LayoutRenderer:
    """Render a frozen :class:`Log` depth-first.

    The output depends only on the tree; rendering the same log twice
    gives identical lines.
    """

    def __init__(self, *, glyphs: Glyphs = UNICODE, color: bool = False) -> None:
        self.glyphs = glyphs
        self.color = color

    # ── Public API ─────────────────────────────────────────────

    def render(self, log: Log) -> list[str]:
        lines: list[str] = []
        for block in log.blocks:
            lines.extend(self._render_block(block, log.kind))
        if log.cause is not None:
            lines.append("")
            lines.extend(self.render(log.cause))
        logger.debug("rendered %s log into %d line(s)", log.kind.value, len(lines))
        return lines

    # ── Blocks ─────────────────────────────────────────────────

    def _render_block(self, block: Block, level: Severity) -> list[str]:
        if isinstance(block, Header):
            return self._render_header(block, level)
        if isinstance(block, Prefix):
            return [block.prefix + line for line in self._render_block(block.child, level)]
        if isinstance(block, Code):
            return self._render_code(block, level)
        if isinstance(block, Text):
            return list(block.lines)
        if isinstance(block, Container):
            lines: list[str] = []
            for child in block.children:
                lines.extend(self._render_block(child, level))
            return lines
        if isinstance(block, Separator):
            return [block.character * block.width]
        if isinstance(block, Note):
            return self._render_note(block, level)
        if isinstance(block, Tag):
            return self._render_tag(block, level)
        if isinstance(block, Stack):
            return self._render_stack(block, level)
        if isinstance(block, Steps):
            return self._render_steps(block, level)
        raise TypeError(f"unsupported block type: {type(block).__name__}")

    def _render_header(self, block: Header, level: Severity) -> list[str]:
        head = level.value
        if block.code:
            head += f"[{block.code}]"
        tag = paint(head, level.color, self.color)

        title = block.title.splitlines()
        lines = [f"{tag}: {title[0]}" if title else tag]
        lines.extend(" " * (len(head) + 2) + part for part in title[1:])

        arrow = paint(f" {self.glyphs.arrow}", level.color, self.color)
        fields = (
            ("in", block.location, block.show_location),
            ("at", block.timestamp, block.show_timestamp),
            ("in thread", block.thread_id, block.show_thread),
        )
        for label, value, shown in fields:
            if not (value and shown):
                continue
            parts = value.splitlines() or [""]
            lines.append(f"{arrow} {label} {parts[0]}")
            indent = " " * (len(self.glyphs.arrow) + len(label) + 3)
            lines.extend(indent + part for part in parts[1:])
        return lines

    def _render_code(self, block: Code, level: Severity) -> list[str]:
        annotations = resolve_spans(block.source, block.spans)
        return compose(
            block.source,
            annotations,
            level=level,
            glyphs=self.glyphs,
            options=block.options,
            color=self.color,
        )

    def _render_note(self, block: Note, level: Severity) -> list[str]:
        marker = paint(self.glyphs.note, level.color, self.color)
        title = " ".join(block.title.splitlines())
        message = block.message.splitlines() or [""]
        lines = [f"{marker} {title}: {message[0]}"]
        indent = " " * (len(self.glyphs.note) + len(title) + 3)
        lines.extend(indent + part for part in message[1:])
        return lines

    def _render_tag(self, block: Tag, level: Severity) -> list[str]:
        marker = paint(self.glyphs.note, level.color, self.color)
        tag = paint(" ".join(block.tag.splitlines()), None, self.color)
        return [f"{marker} {tag}"]

    def _render_stack(self, block: Stack, level: Severity) -> list[str]:
        g = self.glyphs
        digits = len(str(block.count_traces()))
        lines = self._stack_lines(block, level, 0, digits, is_cause=False)
        lines.append(paint(g.bottom_corner + g.horizontal, level.color, self.color))
        return lines

    def _stack_lines(
        self,
        stack: Stack,
        level: Severity,
        first_number: int,
        digits: int,
        *,
        is_cause: bool,
    ) -> list[str]:
        g = self.glyphs
        message = stack.message.splitlines()
        lines: list[str] = []
        if is_cause:
            lines.append(paint(g.vertical, level.color, self.color))
            head = f"{g.branch}{g.horizontal * 3}{g.pointer} Caused by:"
            indent = g.vertical + " " * 5
        else:
            head = g.top_corner + g.horizontal + (g.pointer if message else "")
            indent = g.vertical + " " * 3
        first = paint(head, level.color, self.color)
        lines.append(f"{first} {message[0]}" if message else first)
        lines.extend(paint(indent, level.color, self.color) + part for part in message[1:])

        lead = g.vertical + "  "
        continuation = paint(lead + " " * (digits + 2), level.color, self.color)
        count = len(stack.traces)
        for index, trace in enumerate(stack.traces):
            number = first_number + count - index
            label = f"[{number:>{digits}}] " if stack.show_numbers else " at "
            text = self._trace_lines(trace, level)
            lines.append(paint(lead + label, level.color, self.color) + text[0])
            lines.extend(continuation + part for part in text[1:])

        if stack.cause is not None:
            lines.extend(self._stack_lines(
                stack.cause, level, first_number + count, digits, is_cause=True,
            ))
        return lines

    def _trace_lines(self, trace: StackTrace, level: Severity) -> list[str]:
        head = " ".join(trace.location.splitlines()) if trace.location else "<unknown location>"
        if trace.code_path:
            code_path = " ".join(trace.code_path.splitlines())
            head += paint("(", level.color, self.color) + code_path
            head += paint(")", level.color, self.color)
        if not trace.message:
            return [head]
        message = trace.message.splitlines() or [""]
        return [head + paint(" - ", level.color, self.color) + message[0], *message[1:]]

    def _render_steps(self, block: Steps, level: Severity) -> list[str]:
        g = self.glyphs
        symbol = paint(level.symbol, level.color, self.color)
        title = block.title.splitlines()
        lines = [f"{symbol} {title[0]}" if title else symbol]
        bar = paint(g.vertical + " ", level.color, self.color)
        lines.extend(bar + part for part in title[1:])

        step_head = paint(f"{g.branch}{g.horizontal}{g.pointer} ", level.color, self.color)
        step_indent = paint(g.vertical + "   ", level.color, self.color)
        for step in block.steps:
            body = self._render_block(step, level) or [""]
            head = step_indent if isinstance(step, Separator) else step_head
            lines.append(head + body[0])
            lines.extend(step_indent + line for line in body[1:])

        final = block.final_message.splitlines()
        if not final:
            lines.append(paint(g.bottom_corner + g.horizontal, level.color, self.color))
            return lines
        end = paint(f"{g.bottom_corner}{g.horizontal}{g.pointer}", level.color, self.color)
        lines.append(f"{end} {final[0]}")
        lines.extend(" " * 4 + part for part in final[1:])
        return lines


def render(log: Log, *, glyphs: Glyphs = UNICODE, color: bool = False) -> list[str]:
    """Render a log into its ordered output lines."""
    return LayoutRenderer(glyphs=glyphs, color=color).render(log)


def render_text(log: Log, *, glyphs: Glyphs = UNICODE, color: bool = False) -> str:
    return "\n".join(render(log, glyphs=glyphs, color=color))


def emit(
    log: Log,
    file: IO[str] | None = None,
    *,
    err: bool = False,
    glyphs: Glyphs = UNICODE,
    color: bool = False,
) -> None:
    """Render a log and write it to ``file`` (stdout, or stderr with ``err``)."""
    text = render_text(log, glyphs=glyphs, color=color)
    click.echo(text, file=file, err=err, color=color or None)
