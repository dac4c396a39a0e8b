"""Core domain layer: pure chess rules with zero external dependencies.

Quick start::

    from chessrules.core import Gamestate, IllegalMoveError, Move

    game = Gamestate()
    game.perform_move(Move.parse("e2 e4"))
    try:
        game.perform_move(Move.parse("e4 e5"))
    except IllegalMoveError as exc:
        print(exc.reason)
"""

from chessrules.core.attacks import attacked_squares, is_attacked
from chessrules.core.board import Board
from chessrules.core.enums import CastlingRights, Color, PieceKind
from chessrules.core.errors import (
    ChessError,
    IllegalMoveError,
    InvariantViolation,
    MoveRejection,
    NotationError,
    SquareOutOfRangeError,
)
from chessrules.core.gamestate import Gamestate
from chessrules.core.move import Move
from chessrules.core.piece import PatternLegality, Piece
from chessrules.core.square import Square

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "PieceKind",
    # Errors
    "ChessError",
    "IllegalMoveError",
    "InvariantViolation",
    "MoveRejection",
    "NotationError",
    "SquareOutOfRangeError",
    # Domain objects
    "Board",
    "Gamestate",
    "Move",
    "PatternLegality",
    "Piece",
    "Square",
    # Attacks
    "attacked_squares",
    "is_attacked",
]
