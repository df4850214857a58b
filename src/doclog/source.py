"""Source text and byte-offset to line/column translation."""

from __future__ import annotations

import threading
from bisect import bisect_left
from dataclasses import dataclass

from doclog.errors import LineRangeError, OffsetError


@dataclass(frozen=True, order=True)
class Position:
    """A resolved location. Line and column are 1-based; the column counts
    Unicode scalar values, not bytes."""

    line: int
    column: int
    offset: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


class SourceText:
    """An immutable source string with a lazily built newline index.

    Offsets handed to the rest of the library are UTF-8 byte offsets into
    ``text``. The index is built on first use and shared by every later
    query, including queries from other threads.
    """

    __slots__ = ("text", "data", "_newlines", "_lock")

    def __init__(self, text: str) -> None:
        self.text = text
        self.data = text.encode("utf-8")
        self._newlines: tuple[int, ...] | None = None
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f"SourceText({self.text!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SourceText):
            return NotImplemented
        return self.text == other.text

    def __hash__(self) -> int:
        return hash(self.text)

    def __len__(self) -> int:
        return len(self.data)

    @property
    def newlines(self) -> tuple[int, ...]:
        """Byte offsets of every ``\\n``, strictly increasing."""
        index = self._newlines
        if index is None:
            with self._lock:
                if self._newlines is None:
                    self._newlines = _scan_newlines(self.data)
                index = self._newlines
        return index

    @property
    def line_count(self) -> int:
        return len(self.newlines) + 1

    def line_start(self, line: int) -> int:
        """Byte offset where a 1-based line begins."""
        self._check_line(line)
        if line == 1:
            return 0
        return self.newlines[line - 2] + 1

    def line_end(self, line: int) -> int:
        """Byte offset of a line's terminating newline, or the source length."""
        self._check_line(line)
        newlines = self.newlines
        if line - 1 < len(newlines):
            return newlines[line - 1]
        return len(self.data)

    def has_newline(self, line: int) -> bool:
        self._check_line(line)
        return line - 1 < len(self.newlines)

    def is_boundary(self, offset: int) -> bool:
        """Whether ``offset`` does not split a UTF-8 encoded character."""
        if offset == len(self.data):
            return True
        return (self.data[offset] & 0xC0) != 0x80

    def _check_line(self, line: int) -> None:
        if not 1 <= line <= self.line_count:
            raise LineRangeError(line, self.line_count)


def _scan_newlines(data: bytes) -> tuple[int, ...]:
    offsets = []
    pos = data.find(b"\n")
    while pos != -1:
        offsets.append(pos)
        pos = data.find(b"\n", pos + 1)
    return tuple(offsets)


def resolve(source: SourceText, offset: int) -> Position:
    """Translate a byte offset into a line/column position."""
    if offset < 0 or offset > len(source.data):
        raise OffsetError(
            f"offset {offset} is outside the source ({len(source.data)} byte(s))", offset
        )
    if not source.is_boundary(offset):
        raise OffsetError(f"offset {offset} is not on a character boundary", offset)
    # Newlines before the offset decide the line; the newline itself belongs
    # to the line it terminates.
    line = bisect_left(source.newlines, offset) + 1
    start = source.line_start(line)
    column = len(source.data[start:offset].decode("utf-8")) + 1
    return Position(line=line, column=column, offset=offset)


def line_text(source: SourceText, line: int) -> str:
    """Return a 1-based line without its terminating newline."""
    start = source.line_start(line)
    end = source.line_end(line)
    return source.data[start:end].decode("utf-8")


def offset_of(source: SourceText, line: int, column: int) -> int:
    """Inverse of :func:`resolve`: the byte offset of a line/column pair."""
    text = line_text(source, line)
    if not 1 <= column <= len(text) + 1:
        raise OffsetError(f"column {column} is out of range for line {line}")
    return source.line_start(line) + len(text[: column - 1].encode("utf-8"))
