"""Piece object and per-kind movement patterns."""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

from chessrules.core.enums import Color, PieceKind

if TYPE_CHECKING:
    from chessrules.core.move import Move

# FEN character ↔ (Color, PieceKind)
_CHAR_MAP: dict[str, tuple[Color, PieceKind]] = {
    "P": (Color.WHITE, PieceKind.PAWN),
    "N": (Color.WHITE, PieceKind.KNIGHT),
    "B": (Color.WHITE, PieceKind.BISHOP),
    "R": (Color.WHITE, PieceKind.ROOK),
    "Q": (Color.WHITE, PieceKind.QUEEN),
    "K": (Color.WHITE, PieceKind.KING),
    "p": (Color.BLACK, PieceKind.PAWN),
    "n": (Color.BLACK, PieceKind.KNIGHT),
    "b": (Color.BLACK, PieceKind.BISHOP),
    "r": (Color.BLACK, PieceKind.ROOK),
    "q": (Color.BLACK, PieceKind.QUEEN),
    "k": (Color.BLACK, PieceKind.KING),
}

_UNICODE: dict[tuple[Color, PieceKind], str] = {
    (Color.WHITE, PieceKind.PAWN): "♙",
    (Color.WHITE, PieceKind.KNIGHT): "♘",
    (Color.WHITE, PieceKind.BISHOP): "♗",
    (Color.WHITE, PieceKind.ROOK): "♖",
    (Color.WHITE, PieceKind.QUEEN): "♕",
    (Color.WHITE, PieceKind.KING): "♔",
    (Color.BLACK, PieceKind.PAWN): "♟",
    (Color.BLACK, PieceKind.KNIGHT): "♞",
    (Color.BLACK, PieceKind.BISHOP): "♝",
    (Color.BLACK, PieceKind.ROOK): "♜",
    (Color.BLACK, PieceKind.QUEEN): "♛",
    (Color.BLACK, PieceKind.KING): "♚",
}

_FEN_CHARS: dict[tuple[Color, PieceKind], str] = {v: k for k, v in _CHAR_MAP.items()}

_KNIGHT_JUMPS = frozenset({(1, 2), (2, 1)})


class PatternLegality(NamedTuple):
    """Whether a move vector fits a piece's shape, per kind of move."""

    standard: bool
    capture: bool


class Piece:
    """A chess piece: fixed kind and color plus a count of its own moves."""

    __slots__ = ("_kind", "_color", "move_count")

    def __init__(self, kind: PieceKind, color: Color, move_count: int = 0) -> None:
        if move_count < 0:
            raise ValueError(f"move_count must be non-negative, got {move_count}")
        self._kind = kind
        self._color = color
        self.move_count = move_count

    @property
    def kind(self) -> PieceKind:
        return self._kind

    @property
    def color(self) -> Color:
        return self._color

    # ── Movement ─────────────────────────────────────────────────────────

    def pattern_legality(self, move: Move) -> PatternLegality:
        """Check *move*'s shape against this piece's pattern, ignoring the board."""
        dx = abs(move.source.dx(move.destination))
        dy = abs(move.source.dy(move.destination))

        if self._kind == PieceKind.PAWN:
            ahead = move.source.dy(move.destination) * self._color.forward
            reach = 2 if self.move_count == 0 else 1
            return PatternLegality(
                standard=dx == 0 and 1 <= ahead <= reach,
                capture=dx == 1 and ahead == 1,
            )

        if self._kind == PieceKind.ROOK:
            legal = _rook_line(dx, dy)
        elif self._kind == PieceKind.KNIGHT:
            legal = (dx, dy) in _KNIGHT_JUMPS
        elif self._kind == PieceKind.BISHOP:
            legal = _bishop_line(dx, dy)
        elif self._kind == PieceKind.QUEEN:
            legal = _rook_line(dx, dy) != _bishop_line(dx, dy)
        else:
            legal = max(dx, dy) == 1
        return PatternLegality(standard=legal, capture=legal)

    def increment_move_count(self) -> None:
        self.move_count += 1

    def copy(self) -> Piece:
        return Piece(self._kind, self._color, self.move_count)

    # ── Serialisation ────────────────────────────────────────────────────

    def __str__(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        return _FEN_CHARS[(self._color, self._kind)]

    @classmethod
    def from_char(cls, char: str, move_count: int = 0) -> Piece:
        """Create piece from FEN character, e.g. 'N' → white knight."""
        try:
            color, kind = _CHAR_MAP[char]
        except KeyError:
            raise ValueError(f"Invalid piece character: {char!r}") from None
        return cls(kind, color, move_count)

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return _UNICODE[(self._color, self._kind)]

    # ── Dunder helpers ───────────────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Piece):
            return NotImplemented
        return (self._kind, self._color, self.move_count) == (
            other._kind,
            other._color,
            other.move_count,
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"Piece({self._kind.name}, {self._color.name}, "
            f"move_count={self.move_count})"
        )


def _rook_line(dx: int, dy: int) -> bool:
    return (dx == 0) != (dy == 0)


def _bishop_line(dx: int, dy: int) -> bool:
    return dx == dy
