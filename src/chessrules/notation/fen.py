"""FEN parsing and serialization for :class:`Gamestate`."""

from __future__ import annotations

from chessrules.core.attacks import is_attacked
from chessrules.core.board import Board
from chessrules.core.enums import CastlingRights, Color, PieceKind
from chessrules.core.errors import NotationError
from chessrules.core.gamestate import Gamestate
from chessrules.core.piece import Piece
from chessrules.core.square import Square

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_CHARS: dict[str, CastlingRights] = {
    "K": CastlingRights.WHITE_KINGSIDE,
    "Q": CastlingRights.WHITE_QUEENSIDE,
    "k": CastlingRights.BLACK_KINGSIDE,
    "q": CastlingRights.BLACK_QUEENSIDE,
}
_PAWN_HOME_RANK = {Color.WHITE: 1, Color.BLACK: 6}
_SKIP_DIGITS = frozenset("12345678")


def _parse_counter(text: str, name: str, minimum: int) -> int:
    try:
        value = int(text)
    except ValueError:
        raise NotationError(f"Invalid FEN {name}: {text!r}") from None
    if value < minimum:
        raise NotationError(f"Invalid FEN {name}: {text!r}")
    return value


def _parse_placement(placement: str, fen: str) -> Board:
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise NotationError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")
    board = Board()
    for rank_idx, rank_text in enumerate(ranks):
        rank = 7 - rank_idx
        file = 0
        for ch in rank_text:
            if ch in _SKIP_DIGITS:
                file += int(ch)
            else:
                if file >= 8:
                    raise NotationError(f"Invalid FEN rank width: {fen!r}")
                try:
                    piece = Piece.from_char(ch)
                except ValueError as exc:
                    raise NotationError(f"{exc}: {fen!r}") from None
                # Pawns off their home rank have already used the double step.
                if piece.kind == PieceKind.PAWN and rank != _PAWN_HOME_RANK[piece.color]:
                    piece.move_count = 1
                board[Square(file, rank)] = piece
                file += 1
            if file > 8:
                raise NotationError(f"Invalid FEN rank width: {fen!r}")
        if file != 8:
            raise NotationError(f"Invalid FEN rank width: {fen!r}")
    return board


def _single_king(board: Board, color: Color, fen: str) -> Square:
    kings = [
        sq
        for sq, piece in board.items()
        if piece is not None and piece.color == color and piece.kind == PieceKind.KING
    ]
    if len(kings) != 1:
        raise NotationError(f"FEN must contain exactly one {color!s} king: {fen!r}")
    return kings[0]


def gamestate_from_fen(fen: str) -> Gamestate:
    """Parse a FEN string into a :class:`Gamestate`.

    The FEN full-move number becomes the half-move based ``fullmove_clock``:
    ``1 w`` is 0, ``1 b`` is 1, ``2 w`` is 2 and so on.
    """
    parts = fen.split()
    if not (4 <= len(parts) <= 6):
        raise NotationError(f"Invalid FEN (need 4-6 fields): {fen!r}")

    placement, side_part, castling_part, ep_part = parts[:4]

    # 1. Piece placement
    board = _parse_placement(placement, fen)

    # 2. Side to move
    if side_part == "w":
        side = Color.WHITE
    elif side_part == "b":
        side = Color.BLACK
    else:
        raise NotationError(f"Invalid FEN side-to-move field: {side_part!r}")

    # 3. Castling
    castling = CastlingRights.NONE
    if castling_part != "-":
        seen: set[str] = set()
        for ch in castling_part:
            right = _CASTLING_CHARS.get(ch)
            if right is None or ch in seen:
                raise NotationError(f"Invalid FEN castling field: {castling_part!r}")
            seen.add(ch)
            castling |= right

    # 4. En passant
    ep: Square | None = None
    if ep_part != "-":
        ep = Square.parse(ep_part)
        expected_ep_rank = 5 if side == Color.WHITE else 2
        if ep.y != expected_ep_rank:
            raise NotationError(
                f"Invalid FEN en-passant square for side-to-move: {ep_part!r}"
            )

    # 5–6. Clocks (optional)
    halfmove = _parse_counter(parts[4], "halfmove clock", 0) if len(parts) > 4 else 0
    fullmove = _parse_counter(parts[5], "fullmove number", 1) if len(parts) > 5 else 1

    # A playable position: one king each, and the side that just moved is safe.
    _single_king(board, Color.WHITE, fen)
    _single_king(board, Color.BLACK, fen)
    waiting = side.opposite
    if is_attacked(board, _single_king(board, waiting, fen), side):
        raise NotationError(f"FEN leaves the side not to move in check: {fen!r}")

    return Gamestate(
        board=board,
        turn=side,
        castling=castling,
        en_passant_target=ep,
        halfmove_clock=halfmove,
        fullmove_clock=2 * (fullmove - 1) + (1 if side == Color.BLACK else 0),
    )


def gamestate_to_fen(game: Gamestate) -> str:
    """Serialise a :class:`Gamestate` to FEN."""
    # 1. Board
    rows: list[str] = []
    for rank in range(7, -1, -1):
        empty = 0
        row = ""
        for file in range(8):
            piece = game.board[Square(file, rank)]
            if piece is None:
                empty += 1
            else:
                if empty:
                    row += str(empty)
                    empty = 0
                row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)
    board_str = "/".join(rows)

    # 2. Side
    side_str = "w" if game.turn == Color.WHITE else "b"

    # 3. Castling
    castling_str = "".join(
        ch for ch, right in _CASTLING_CHARS.items() if game.castling & right
    )
    if not castling_str:
        castling_str = "-"

    # 4. En passant
    ep_str = str(game.en_passant_target) if game.en_passant_target is not None else "-"

    return (
        f"{board_str} {side_str} {castling_str} {ep_str} "
        f"{game.halfmove_clock} {game.fullmove_number}"
    )
