"""Shared pytest fixtures for the doclog test suite."""

from __future__ import annotations

import pytest

from doclog.source import SourceText
from tests.helpers import SCENARIO


@pytest.fixture
def scenario():
    return SourceText(SCENARIO)
