"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import pytest

from chessrules.core.board import Board


@pytest.fixture
def board() -> Board:
    """An empty board."""
    return Board()


@pytest.fixture
def initial_board() -> Board:
    """The standard starting layout."""
    return Board.initial()
