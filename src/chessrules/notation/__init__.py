"""Notation package: FEN parsing and serialization."""

from chessrules.notation.fen import STARTING_FEN, gamestate_from_fen, gamestate_to_fen

__all__ = [
    "STARTING_FEN",
    "gamestate_from_fen",
    "gamestate_to_fen",
]
