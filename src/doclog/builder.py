"""Mutable builders that finalize into a frozen :class:`~doclog.blocks.Log`.

Two construction styles produce the same tree:

- block composition: ``prefix("> ", lambda b: b.text("..."))``
- indentation: ``indent(2, lambda b: b.text("..."))``, which is a
  :class:`~doclog.blocks.Prefix` of spaces.
"""

from __future__ import annotations

from typing import Callable

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
from doclog.levels import Severity
from doclog.source import SourceText
from doclog.spans import Span


class ContentBuilder:
    """Collects blocks in order."""

    def __init__(self) -> None:
        self._blocks: list[Block] = []

    def add(self, block: Block) -> ContentBuilder:
        self._blocks.append(block)
        return self

    def text(self, text: str) -> ContentBuilder:
        return self.add(Text.of(text))

    def code(
        self,
        source: SourceText | str,
        *spans: Span,
        title: str | None = None,
        file_path: str | None = None,
        final_message: str | None = None,
        previous_lines: int = 0,
        next_lines: int = 0,
        middle_lines: int = 0,
        show_newlines: bool = False,
        align_messages: bool = False,
    ) -> ContentBuilder:
        return self.add(Code(
            source,
            spans,
            title=title,
            file_path=file_path,
            final_message=final_message,
            previous_lines=previous_lines,
            next_lines=next_lines,
            middle_lines=middle_lines,
            show_newlines=show_newlines,
            align_messages=align_messages,
        ))

    def separator(self, width: int = 0, character: str = "─") -> ContentBuilder:
        return self.add(Separator(width, character))

    def note(self, title: str, message: str) -> ContentBuilder:
        return self.add(Note(title, message))

    def tag(self, tag: str) -> ContentBuilder:
        return self.add(Tag(tag))

    def stack(
        self,
        message: str = "",
        *traces: StackTrace,
        cause: Stack | None = None,
        show_numbers: bool = False,
    ) -> ContentBuilder:
        return self.add(Stack(message, traces, cause, show_numbers))

    def steps(
        self,
        build: Callable[[ContentBuilder], object],
        *,
        title: str = "",
        final_message: str = "",
    ) -> ContentBuilder:
        """Each block added by ``build`` becomes one step."""
        return self.add(Steps(title, _collect(build), final_message))

    def container(self, build: Callable[[ContentBuilder], object]) -> ContentBuilder:
        return self.add(Container(_collect(build)))

    def prefix(self, prefix: str, build: Callable[[ContentBuilder], object]) -> ContentBuilder:
        blocks = _collect(build)
        child = blocks[0] if len(blocks) == 1 else Container(blocks)
        return self.add(Prefix(prefix, child))

    def indent(self, size: int, build: Callable[[ContentBuilder], object]) -> ContentBuilder:
        if size < 0:
            raise ValueError("indent size must not be negative")
        return self.prefix(" " * size, build)

    def blocks(self) -> tuple[Block, ...]:
        return tuple(self._blocks)


class LogBuilder(ContentBuilder):
    """Builds a :class:`Log` of a given severity."""

    def __init__(self, kind: Severity) -> None:
        super().__init__()
        self.kind = kind
        self._cause: Log | None = None

    @classmethod
    def trace(cls) -> LogBuilder:
        return cls(Severity.TRACE)

    @classmethod
    def debug(cls) -> LogBuilder:
        return cls(Severity.DEBUG)

    @classmethod
    def info(cls) -> LogBuilder:
        return cls(Severity.INFO)

    @classmethod
    def warn(cls) -> LogBuilder:
        return cls(Severity.WARN)

    @classmethod
    def error(cls) -> LogBuilder:
        return cls(Severity.ERROR)

    def header(
        self,
        title: str = "",
        *,
        code: str | None = None,
        location: str | None = None,
        timestamp: str | None = None,
        thread_id: str | None = None,
    ) -> LogBuilder:
        self.add(Header(
            title=title,
            code=code,
            location=location,
            timestamp=timestamp,
            thread_id=thread_id,
        ))
        return self

    def cause(
        self,
        build: Callable[[LogBuilder], object],
        kind: Severity | None = None,
    ) -> LogBuilder:
        """Attach a nested log, by default with this log's severity."""
        builder = LogBuilder(kind or self.kind)
        build(builder)
        self._cause = builder.build()
        return self

    def build(self) -> Log:
        return Log(self.kind, self.blocks(), self._cause)


def _collect(build: Callable[[ContentBuilder], object]) -> tuple[Block, ...]:
    builder = ContentBuilder()
    build(builder)
    return builder.blocks()
