"""Attack detection over a bare board.

These functions look only at piece placement. They have no notion of whose
turn it is, so the same code answers "is this king in check?" for the live
game and for a trial board with a candidate move already applied.
"""

from __future__ import annotations

from chessrules.core.board import Board
from chessrules.core.enums import Color, PieceKind
from chessrules.core.move import Move
from chessrules.core.square import Square, all_squares


def path_is_clear(board: Board, move: Move) -> bool:
    """Whether nothing stands strictly between the move's endpoints."""
    return all(board.is_empty(sq) for sq in Square.between(move.source, move.destination))


def attacks(board: Board, source: Square, target: Square) -> bool:
    """Whether the piece on *source* could capture on *target*."""
    piece = board.piece_at(source)
    if piece is None or source == target:
        return False
    move = Move(source, target)
    if not piece.pattern_legality(move).capture:
        return False
    return piece.kind == PieceKind.KNIGHT or path_is_clear(board, move)


def is_attacked(board: Board, square: Square, by_color: Color) -> bool:
    """Whether any of *by_color*'s pieces attacks *square*."""
    return any(attacks(board, source, square) for source in board.occupied(by_color))


def attacked_squares(board: Board, by_color: Color) -> frozenset[Square]:
    """Every square *by_color* attacks, whether empty or occupied."""
    sources = board.occupied(by_color)
    return frozenset(
        target
        for target in all_squares()
        if any(attacks(board, source, target) for source in sources)
    )
