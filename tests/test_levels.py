"""Tests for severity levels."""

from __future__ import annotations

import pytest

from doclog.levels import Severity


class TestSeverity:
    def test_order(self):
        assert Severity.TRACE < Severity.DEBUG < Severity.INFO < Severity.WARN < Severity.ERROR
        assert max(Severity) is Severity.ERROR

    def test_symbols(self):
        assert Severity.ERROR.symbol == "×"
        assert Severity.WARN.symbol == "⚠"
        assert Severity.INFO.symbol == "•"

    @pytest.mark.parametrize("name, expected", [
        ("error", Severity.ERROR),
        ("WARN", Severity.WARN),
        ("warning", Severity.WARN),
        (" info ", Severity.INFO),
    ])
    def test_parse(self, name, expected):
        assert Severity.parse(name) is expected

    def test_parse_unknown(self):
        with pytest.raises(ValueError, match="unknown severity"):
            Severity.parse("fatal")
