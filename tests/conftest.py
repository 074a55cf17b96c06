"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import pytest

from darkchess.core.chessboard import ChessBoard
from darkchess.core.diagnostics import RecordingSink


@pytest.fixture
def sink() -> RecordingSink:
    """In-memory diagnostic sink, fresh per test."""
    return RecordingSink()


@pytest.fixture
def board(sink: RecordingSink) -> ChessBoard:
    """Standard starting position reporting into ``sink``."""
    return ChessBoard(sink=sink)
