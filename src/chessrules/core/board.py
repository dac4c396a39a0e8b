"""Board - piece placement on an 8x8 board."""

from __future__ import annotations

from collections.abc import Iterator

from chessrules.core.enums import Color, PieceKind
from chessrules.core.piece import Piece
from chessrules.core.square import BOARD_SIZE, Square, all_squares

_BACK_RANK = (
    PieceKind.ROOK,
    PieceKind.KNIGHT,
    PieceKind.BISHOP,
    PieceKind.QUEEN,
    PieceKind.KING,
    PieceKind.BISHOP,
    PieceKind.KNIGHT,
    PieceKind.ROOK,
)


def _index(sq: Square) -> int:
    return sq.y * BOARD_SIZE + sq.x


class Board:
    """Mutable 64-square grid. Holds pieces; knows nothing about the rules."""

    __slots__ = ("_squares",)

    def __init__(self) -> None:
        self._squares: list[Piece | None] = [None] * (BOARD_SIZE * BOARD_SIZE)

    # -- Element access -----------------------------------------------------

    def piece_at(self, sq: Square) -> Piece | None:
        return self._squares[_index(sq)]

    def set_piece(self, sq: Square, piece: Piece | None) -> None:
        self._squares[_index(sq)] = piece

    def __getitem__(self, sq: Square) -> Piece | None:
        return self.piece_at(sq)

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        self.set_piece(sq, piece)

    def is_empty(self, sq: Square) -> bool:
        return self.piece_at(sq) is None

    # -- Query helpers ------------------------------------------------------

    def items(self) -> Iterator[tuple[Square, Piece | None]]:
        """Every square with its contents, a1 → h1, a2 → h2, … h8."""
        for sq in all_squares():
            yield sq, self.piece_at(sq)

    def occupied(self, color: Color | None = None) -> list[Square]:
        """Occupied squares, optionally only those holding *color*'s pieces."""
        return [
            sq
            for sq, piece in self.items()
            if piece is not None and (color is None or piece.color == color)
        ]

    # -- Copying ------------------------------------------------------------

    def copy(self) -> Board:
        """Deep copy, pieces included."""
        b = Board()
        b._squares = [p.copy() if p is not None else None for p in self._squares]
        return b

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for x, kind in enumerate(_BACK_RANK):
            b[Square(x, 0)] = Piece(kind, Color.WHITE)
            b[Square(x, 1)] = Piece(PieceKind.PAWN, Color.WHITE)
            b[Square(x, 6)] = Piece(PieceKind.PAWN, Color.BLACK)
            b[Square(x, 7)] = Piece(kind, Color.BLACK)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    __hash__ = None  # type: ignore[assignment]

    def diagram(self, unicode_symbols: bool = False) -> str:
        """Text diagram with rank 8 on top and file letters underneath."""
        rows: list[str] = []
        for rank in range(BOARD_SIZE - 1, -1, -1):
            row = []
            for file in range(BOARD_SIZE):
                p = self[Square(file, rank)]
                if p is None:
                    row.append(".")
                else:
                    row.append(p.symbol if unicode_symbols else str(p))
            rows.append(f"{rank + 1} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)

    def __repr__(self) -> str:
        return self.diagram()
