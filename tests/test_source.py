"""Tests for byte-offset to line/column resolution."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from doclog.errors import LineRangeError, OffsetError
from doclog.source import Position, SourceText, line_text, offset_of, resolve


class TestResolve:
    def test_first_offset(self, scenario):
        assert resolve(scenario, 0) == Position(line=1, column=1, offset=0)

    def test_newline_belongs_to_its_line(self, scenario):
        pos = resolve(scenario, 14)
        assert (pos.line, pos.column) == (1, 15)

    def test_line_start(self, scenario):
        pos = resolve(scenario, 15)
        assert (pos.line, pos.column) == (2, 1)

    def test_third_line(self, scenario):
        pos = resolve(scenario, 37)
        assert (pos.line, pos.column) == (3, 13)

    def test_end_of_source(self, scenario):
        pos = resolve(scenario, len(scenario))
        assert (pos.line, pos.column) == (3, 14)

    def test_columns_count_characters_not_bytes(self):
        source = SourceText("héllo\nwörld")
        assert resolve(source, 3).column == 3
        pos = resolve(source, 10)
        assert (pos.line, pos.column) == (2, 3)

    def test_offset_inside_character(self):
        source = SourceText("héllo")
        with pytest.raises(OffsetError, match="character boundary"):
            resolve(source, 2)

    def test_offset_past_end(self, scenario):
        with pytest.raises(OffsetError) as exc:
            resolve(scenario, len(scenario) + 1)
        assert exc.value.offset == len(scenario) + 1

    def test_negative_offset(self, scenario):
        with pytest.raises(OffsetError):
            resolve(scenario, -1)

    def test_empty_source(self):
        assert resolve(SourceText(""), 0) == Position(1, 1, 0)

    def test_str(self):
        assert str(Position(3, 7, 20)) == "3:7"


class TestLineText:
    def test_lines(self, scenario):
        assert line_text(scenario, 1) == 'let a = "test"'
        assert line_text(scenario, 2) == "let y = 3"
        assert line_text(scenario, 3) == "let z = x + y"

    def test_trailing_newline_adds_empty_line(self):
        source = SourceText("a\n")
        assert source.line_count == 2
        assert line_text(source, 2) == ""

    def test_out_of_range(self, scenario):
        with pytest.raises(LineRangeError):
            line_text(scenario, 0)
        with pytest.raises(LineRangeError, match="3 line"):
            line_text(scenario, 4)


class TestOffsetOf:
    @pytest.mark.parametrize("text", [
        'let a = "test"\nlet y = 3\nlet z = x + y',
        "héllo\nwörld\n",
        "\n\n",
        "日本語のテキスト\n🎉 party",
    ])
    def test_round_trip(self, text):
        source = SourceText(text)
        for offset in range(len(source) + 1):
            if not source.is_boundary(offset):
                continue
            pos = resolve(source, offset)
            assert offset_of(source, pos.line, pos.column) == offset

    def test_column_out_of_range(self, scenario):
        with pytest.raises(OffsetError):
            offset_of(scenario, 2, 42)


class TestLineIndex:
    def test_newlines_strictly_increasing(self, scenario):
        assert scenario.newlines == (14, 24)

    def test_index_built_once_across_threads(self):
        source = SourceText("x\n" * 5000)
        with ThreadPoolExecutor(max_workers=8) as pool:
            indexes = list(pool.map(lambda _: source.newlines, range(32)))
        assert all(index is indexes[0] for index in indexes)
        assert len(indexes[0]) == 5000

    def test_equality_by_text(self):
        assert SourceText("abc") == SourceText("abc")
        assert hash(SourceText("abc")) == hash(SourceText("abc"))
