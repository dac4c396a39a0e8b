"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass

from chessrules.core.errors import NotationError
from chessrules.core.square import Square


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable source → destination pair.

    No special-move notation is understood: castling, promotion and check
    suffixes are not part of a move here.
    """

    source: Square
    destination: Square

    @classmethod
    def parse(cls, text: str) -> Move:
        """Parse two whitespace-separated square names, e.g. ``'e2 e4'``."""
        tokens = text.split()
        if len(tokens) != 2:
            raise NotationError(f"Expected two squares like 'e2 e4', got {text!r}")
        return cls(Square.parse(tokens[0]), Square.parse(tokens[1]))

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        return f"{self.source} {self.destination}"
