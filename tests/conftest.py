"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import pytest

from chessrules.core.gamestate import Gamestate


@pytest.fixture
def game() -> Gamestate:
    """A fresh game at the standard starting position."""
    return Gamestate()
