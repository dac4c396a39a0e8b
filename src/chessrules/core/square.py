"""Square value object and coordinate helpers.

Coordinates are zero-indexed: ``x`` is the file (a=0 … h=7) and ``y`` the
rank (1=0 … 8=7), so a1 is ``Square(0, 0)`` and h8 is ``Square(7, 7)``.
"""

from __future__ import annotations

from dataclasses import dataclass

from chessrules.core.errors import NotationError, SquareOutOfRangeError

BOARD_SIZE = 8
_FILES = "abcdefgh"
_RANKS = "12345678"


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


@dataclass(frozen=True, slots=True)
class Square:
    """Immutable, bounds-checked board coordinate."""

    x: int
    y: int

    def __post_init__(self) -> None:
        if not (0 <= self.x < BOARD_SIZE and 0 <= self.y < BOARD_SIZE):
            raise SquareOutOfRangeError(self.x, self.y)

    # ── Notation ─────────────────────────────────────────────────────────

    @classmethod
    def parse(cls, text: str) -> Square:
        """Parse a square name, e.g. ``'e4'`` → ``Square(4, 3)``."""
        name = text.strip()
        if len(name) != 2 or name[0] not in _FILES or name[1] not in _RANKS:
            raise NotationError(f"Invalid square name: {text!r}")
        return cls(ord(name[0]) - ord("a"), ord(name[1]) - ord("1"))

    @property
    def name(self) -> str:
        """Human-readable name, e.g. ``'a1'``."""
        return _FILES[self.x] + _RANKS[self.y]

    def __str__(self) -> str:
        return self.name

    # ── Geometry ─────────────────────────────────────────────────────────

    def dx(self, other: Square) -> int:
        """Signed file distance from this square to *other*."""
        return other.x - self.x

    def dy(self, other: Square) -> int:
        """Signed rank distance from this square to *other*."""
        return other.y - self.y

    @staticmethod
    def between(a: Square, b: Square) -> list[Square]:
        """Squares strictly between *a* and *b*, walking from *a*.

        Only meaningful when the two squares share a rank, file or diagonal;
        any other pair (a knight jump, say) has no squares between it.
        """
        dx, dy = a.dx(b), a.dy(b)
        if dx and dy and abs(dx) != abs(dy):
            return []

        step_x, step_y = _sign(dx), _sign(dy)
        squares: list[Square] = []
        for i in range(1, max(abs(dx), abs(dy))):
            squares.append(Square(a.x + i * step_x, a.y + i * step_y))
        return squares


def all_squares() -> list[Square]:
    """Every square, a1 → h1, a2 → h2, … h8."""
    return [Square(x, y) for y in range(BOARD_SIZE) for x in range(BOARD_SIZE)]


# ── Named square constants ──────────────────────────────────────────────────

A1, B1, C1, D1, E1, F1, G1, H1 = (Square(x, 0) for x in range(8))
A2, B2, C2, D2, E2, F2, G2, H2 = (Square(x, 1) for x in range(8))
A3, B3, C3, D3, E3, F3, G3, H3 = (Square(x, 2) for x in range(8))
A4, B4, C4, D4, E4, F4, G4, H4 = (Square(x, 3) for x in range(8))
A5, B5, C5, D5, E5, F5, G5, H5 = (Square(x, 4) for x in range(8))
A6, B6, C6, D6, E6, F6, G6, H6 = (Square(x, 5) for x in range(8))
A7, B7, C7, D7, E7, F7, G7, H7 = (Square(x, 6) for x in range(8))
A8, B8, C8, D8, E8, F8, G8, H8 = (Square(x, 7) for x in range(8))
