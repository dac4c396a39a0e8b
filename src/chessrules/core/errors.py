"""Exceptions raised by the rules engine.

There are two families:

* :class:`ChessError` and its subclasses are recoverable. They describe bad
  input (unparseable notation) or a move the rules forbid, and the game state
  is untouched when they are raised.
* :class:`InvariantViolation` means the engine's own bookkeeping is broken
  (a king vanished, a piece disappeared mid-move). It is an
  :class:`AssertionError` so that ``except ChessError`` never hides it.
"""

from __future__ import annotations

from enum import Enum


class ChessError(Exception):
    """Base class for every recoverable error raised by chessrules."""


class NotationError(ChessError, ValueError):
    """Malformed square, move or FEN text."""


class SquareOutOfRangeError(NotationError):
    """Coordinates that fall outside the 8x8 board."""

    def __init__(self, x: int, y: int) -> None:
        super().__init__(f"Square coordinates out of range: ({x}, {y})")
        self.x = x
        self.y = y


class MoveRejection(Enum):
    """Why a move was refused, in the order the checks run."""

    NO_PIECE_AT_MOVE_SOURCE = "no_piece_at_move_source"
    ENEMY_PIECE_AT_MOVE_SOURCE = "enemy_piece_at_move_source"
    INVALID_MOVE_PATTERN = "invalid_move_pattern"
    MOVE_COLLISION_OCCURS = "move_collision_occurs"
    CANNOT_CAPTURE_FRIENDLY = "cannot_capture_friendly"
    CANNOT_SELF_CHECK = "cannot_self_check"


class IllegalMoveError(ChessError):
    """A move that breaks the rules; :attr:`reason` says which one."""

    def __init__(self, reason: MoveRejection, move: object | None = None) -> None:
        detail = reason.value if move is None else f"{reason.value}: {move}"
        super().__init__(detail)
        self.reason = reason
        self.move = move


class InvariantViolation(AssertionError):
    """Internal bookkeeping no longer matches the board."""
