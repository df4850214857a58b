"""Block tree definitions.

Every block is a frozen dataclass and owns its children; a finished
:class:`Log` is never mutated, so it can be rendered any number of times
and from any thread.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from doclog.composer import ExcerptOptions, displayed_lines
from doclog.errors import EmptyBlockError
from doclog.levels import Severity
from doclog.source import SourceText
from doclog.spans import Span, resolve_spans


@dataclass(frozen=True)
class Header:
    """Title line tagged with the log severity, plus optional metadata.

    ``timestamp`` and ``thread_id`` are plain strings supplied by the
    caller; nothing here reads a clock or the current thread.
    """

    title: str = ""
    code: str | None = None
    location: str | None = None
    timestamp: str | None = None
    thread_id: str | None = None
    show_location: bool = True
    show_timestamp: bool = True
    show_thread: bool = True


@dataclass(frozen=True)
class Prefix:
    prefix: str
    child: Block


@dataclass(frozen=True)
class Code:
    """A source excerpt with highlighted spans.

    Spans are validated on construction; an invalid or empty excerpt fails
    here rather than at render time.
    """

    source: SourceText
    spans: tuple[Span, ...]
    title: str | None = None
    file_path: str | None = None
    final_message: str | None = None
    previous_lines: int = 0
    next_lines: int = 0
    middle_lines: int = 0
    show_newlines: bool = False
    align_messages: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.source, str):
            object.__setattr__(self, "source", SourceText(self.source))
        object.__setattr__(self, "spans", tuple(self.spans))
        for name in ("previous_lines", "next_lines", "middle_lines"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative")

        if not self.source.text:
            raise EmptyBlockError("code block has an empty source text")
        annotations = resolve_spans(self.source, self.spans)
        if not displayed_lines(self.source, annotations, self.options):
            raise EmptyBlockError("code block has no highlighted spans to display")

    @property
    def options(self) -> ExcerptOptions:
        return ExcerptOptions(
            title=self.title,
            file_path=self.file_path,
            final_message=self.final_message,
            previous_lines=self.previous_lines,
            next_lines=self.next_lines,
            middle_lines=self.middle_lines,
            show_newlines=self.show_newlines,
            align_messages=self.align_messages,
        )


@dataclass(frozen=True)
class Text:
    """Literal lines. Elements holding line breaks are split with
    :meth:`str.splitlines`, so every stored element is one physical line."""

    lines: tuple[str, ...]

    def __post_init__(self) -> None:
        lines = tuple(part for line in self.lines for part in line.splitlines() or [""])
        object.__setattr__(self, "lines", lines)

    @classmethod
    def of(cls, text: str) -> Text:
        return cls((text,))


@dataclass(frozen=True)
class Container:
    children: tuple[Block, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", tuple(self.children))


@dataclass(frozen=True)
class Separator:
    """A line repeating one character; width 0 is an empty line."""

    width: int = 0
    character: str = "─"

    def __post_init__(self) -> None:
        if len(self.character) != 1 or self.character == "\n":
            raise ValueError("separator character must be a single non-newline character")
        if self.width < 0:
            raise ValueError("separator width must not be negative")


@dataclass(frozen=True)
class Note:
    title: str
    message: str


@dataclass(frozen=True)
class Tag:
    """``= TAG`` on one line; line breaks in the tag become spaces."""

    tag: str


@dataclass(frozen=True)
class StackTrace:
    """One stack frame, rendered as ``location(code_path) - message``."""

    location: str | None = None
    code_path: str | None = None
    message: str | None = None


@dataclass(frozen=True)
class Stack:
    """An error stack: a message, its frames and an optional cause chain.

    Frame numbers run across the whole chain, highest first. A stack with
    ``show_numbers`` prints them as ``[n]``; others print ``at``.
    """

    message: str = ""
    traces: tuple[StackTrace, ...] = ()
    cause: Stack | None = None
    show_numbers: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "traces", tuple(self.traces))

    def count_traces(self) -> int:
        own = len(self.traces)
        return own if self.cause is None else own + self.cause.count_traces()


@dataclass(frozen=True)
class Steps:
    """A titled list of steps joined by a vertical bar."""

    title: str = ""
    steps: tuple[Block, ...] = ()
    final_message: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "steps", tuple(self.steps))


Block = Union[Header, Prefix, Code, Text, Container, Separator, Note, Tag, Stack, Steps]


@dataclass(frozen=True)
class Log:
    """Root of a block tree."""

    kind: Severity
    blocks: tuple[Block, ...] = ()
    cause: Log | None = field(default=None)

    def __post_init__(self) -> None:
        object.__setattr__(self, "blocks", tuple(self.blocks))
