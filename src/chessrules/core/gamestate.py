"""Gamestate: board plus turn, castling, en passant, clocks and king cache.

Every change goes through :meth:`Gamestate.perform_move`, which runs in three
strictly ordered phases:

1. :meth:`~Gamestate.validate_move` is read-only and raises
   :class:`~chessrules.core.errors.IllegalMoveError` on the first failed rule.
2. :meth:`~Gamestate.move_piece` relocates pieces on the board.
3. :meth:`~Gamestate.update_gamestate` updates counters, king cache, castling
   rights, en passant target, turn.

A rejected move therefore never leaves a trace.
"""

from __future__ import annotations

import logging

from chessrules.core.attacks import attacked_squares, is_attacked, path_is_clear
from chessrules.core.board import Board
from chessrules.core.enums import CastlingRights, Color, PieceKind
from chessrules.core.errors import IllegalMoveError, InvariantViolation, MoveRejection
from chessrules.core.move import Move
from chessrules.core.piece import Piece
from chessrules.core.square import A1, A8, E1, E8, H1, H8, Square

_LOGGER = logging.getLogger(__name__)

# Square → (piece that must still stand there, rights lost once it is gone)
_CASTLING_ORIGINS: tuple[tuple[Square, Color, PieceKind, CastlingRights], ...] = (
    (E1, Color.WHITE, PieceKind.KING, CastlingRights.WHITE_BOTH),
    (A1, Color.WHITE, PieceKind.ROOK, CastlingRights.WHITE_QUEENSIDE),
    (H1, Color.WHITE, PieceKind.ROOK, CastlingRights.WHITE_KINGSIDE),
    (E8, Color.BLACK, PieceKind.KING, CastlingRights.BLACK_BOTH),
    (A8, Color.BLACK, PieceKind.ROOK, CastlingRights.BLACK_QUEENSIDE),
    (H8, Color.BLACK, PieceKind.ROOK, CastlingRights.BLACK_KINGSIDE),
)


def _scan_king(board: Board, color: Color) -> Square:
    kings = [
        sq
        for sq in board.occupied(color)
        if (piece := board.piece_at(sq)) is not None and piece.kind == PieceKind.KING
    ]
    if len(kings) != 1:
        raise InvariantViolation(
            f"Expected exactly one {color.name} king, found {len(kings)}"
        )
    return kings[0]


def _is_en_passant(
    board: Board, move: Move, piece: Piece, target: Square | None
) -> bool:
    """Pawn moving diagonally onto the empty en passant square past an enemy pawn."""
    if piece.kind != PieceKind.PAWN or target is None or move.destination != target:
        return False
    if abs(move.source.dx(move.destination)) != 1 or not board.is_empty(target):
        return False
    passed = board.piece_at(Square(target.x, move.source.y))
    return (
        passed is not None
        and passed.kind == PieceKind.PAWN
        and passed.color != piece.color
    )


def _relocate(board: Board, move: Move, en_passant_target: Square | None) -> bool:
    """Move the source contents to the destination; report whether it captured."""
    piece = board.piece_at(move.source)
    captured = board.piece_at(move.destination) is not None
    if piece is not None and _is_en_passant(board, move, piece, en_passant_target):
        board.set_piece(Square(move.destination.x, move.source.y), None)
        captured = True
    board.set_piece(move.destination, piece)
    board.set_piece(move.source, None)
    return captured


class Gamestate:
    """A live game: the single place where moves are validated and applied."""

    __slots__ = (
        "board",
        "turn",
        "white_king_position",
        "black_king_position",
        "castling",
        "en_passant_target",
        "halfmove_clock",
        "fullmove_clock",
    )

    def __init__(
        self,
        board: Board | None = None,
        turn: Color = Color.WHITE,
        castling: CastlingRights = CastlingRights.ALL,
        en_passant_target: Square | None = None,
        halfmove_clock: int = 0,
        fullmove_clock: int = 0,
    ) -> None:
        self.board = board if board is not None else Board.initial()
        self.turn = turn
        self.castling = castling
        self.en_passant_target = en_passant_target
        self.halfmove_clock = halfmove_clock
        self.fullmove_clock = fullmove_clock
        self.white_king_position = self.find_king(Color.WHITE)
        self.black_king_position = self.find_king(Color.BLACK)
        self._revoke_castling_rights()

    # ── Public entry point ───────────────────────────────────────────────

    def perform_move(self, move: Move) -> None:
        """Validate and apply *move*, or raise without touching anything."""
        try:
            self.validate_move(move)
        except IllegalMoveError as exc:
            _LOGGER.debug("Rejected %s for %s: %s", move, self.turn, exc.reason.value)
            raise
        was_capture = self.move_piece(move)
        self.update_gamestate(move, was_capture)
        _LOGGER.debug(
            "Applied %s (capture=%s); %s to move", move, was_capture, self.turn
        )

    # ── Validation (read-only) ───────────────────────────────────────────

    def validate_move(self, move: Move) -> None:
        """Run every legality rule in order; raise on the first that fails."""
        board = self.board

        piece = board.piece_at(move.source)
        if piece is None:
            raise IllegalMoveError(MoveRejection.NO_PIECE_AT_MOVE_SOURCE, move)
        if piece.color != self.turn:
            raise IllegalMoveError(MoveRejection.ENEMY_PIECE_AT_MOVE_SOURCE, move)

        target = board.piece_at(move.destination)
        is_capture = target is not None or _is_en_passant(
            board, move, piece, self.en_passant_target
        )

        pattern = piece.pattern_legality(move)
        if not (pattern.capture if is_capture else pattern.standard):
            raise IllegalMoveError(MoveRejection.INVALID_MOVE_PATTERN, move)

        if piece.kind != PieceKind.KNIGHT and not path_is_clear(board, move):
            raise IllegalMoveError(MoveRejection.MOVE_COLLISION_OCCURS, move)

        if target is not None and target.color == piece.color:
            raise IllegalMoveError(MoveRejection.CANNOT_CAPTURE_FRIENDLY, move)

        if self._exposes_king(move, piece.color):
            raise IllegalMoveError(MoveRejection.CANNOT_SELF_CHECK, move)

    def is_legal(self, move: Move) -> bool:
        try:
            self.validate_move(move)
        except IllegalMoveError:
            return False
        return True

    def _exposes_king(self, move: Move, color: Color) -> bool:
        trial = self.board.copy()
        _relocate(trial, move, self.en_passant_target)
        return is_attacked(trial, _scan_king(trial, color), color.opposite)

    # ── Check queries ────────────────────────────────────────────────────

    def is_check(self, color: Color | None = None) -> bool:
        """Whether *color*'s king (default: side to move) is attacked."""
        if color is None:
            color = self.turn
        return is_attacked(self.board, self.king_position(color), color.opposite)

    def attacked_squares(self, by_color: Color) -> frozenset[Square]:
        return attacked_squares(self.board, by_color)

    def king_position(self, color: Color) -> Square:
        if color == Color.WHITE:
            return self.white_king_position
        return self.black_king_position

    def find_king(self, color: Color) -> Square:
        """Scan the board for *color*'s king."""
        return _scan_king(self.board, color)

    # ── State transition ─────────────────────────────────────────────────

    def move_piece(self, move: Move) -> bool:
        """Relocate the piece unconditionally. Returns whether it captured."""
        return _relocate(self.board, move, self.en_passant_target)

    def update_gamestate(self, move: Move, was_capture: bool) -> None:
        piece = self.board.piece_at(move.destination)
        if piece is None:
            raise InvariantViolation(f"Moved piece missing from {move.destination}")
        piece.increment_move_count()

        if was_capture or piece.kind == PieceKind.PAWN:
            self.halfmove_clock = 0
        else:
            self.halfmove_clock += 1
        self.fullmove_clock += 1

        self.white_king_position = self.find_king(Color.WHITE)
        self.black_king_position = self.find_king(Color.BLACK)

        self._revoke_castling_rights()

        if piece.kind == PieceKind.PAWN and abs(move.source.dy(move.destination)) == 2:
            self.en_passant_target = Square(
                move.source.x, (move.source.y + move.destination.y) // 2
            )
        else:
            self.en_passant_target = None

        self.turn = self.turn.opposite

    def _revoke_castling_rights(self) -> None:
        for sq, color, kind, rights in _CASTLING_ORIGINS:
            piece = self.board.piece_at(sq)
            if piece is None or piece.color != color or piece.kind != kind:
                self.castling &= ~rights

    # ── Castling flags ───────────────────────────────────────────────────

    @property
    def white_castle_kingside(self) -> bool:
        return bool(self.castling & CastlingRights.WHITE_KINGSIDE)

    @property
    def white_castle_queenside(self) -> bool:
        return bool(self.castling & CastlingRights.WHITE_QUEENSIDE)

    @property
    def black_castle_kingside(self) -> bool:
        return bool(self.castling & CastlingRights.BLACK_KINGSIDE)

    @property
    def black_castle_queenside(self) -> bool:
        return bool(self.castling & CastlingRights.BLACK_QUEENSIDE)

    # ── Utilities ────────────────────────────────────────────────────────

    @property
    def fullmove_number(self) -> int:
        """Conventional move number (starts at 1, advances after Black moves)."""
        return self.fullmove_clock // 2 + 1

    def copy(self) -> Gamestate:
        return Gamestate(
            board=self.board.copy(),
            turn=self.turn,
            castling=self.castling,
            en_passant_target=self.en_passant_target,
            halfmove_clock=self.halfmove_clock,
            fullmove_clock=self.fullmove_clock,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Gamestate):
            return NotImplemented
        return all(getattr(self, name) == getattr(other, name) for name in self.__slots__)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"Gamestate(turn={self.turn!s}, castling={self.castling!r}, "
            f"en_passant_target={self.en_passant_target}, "
            f"halfmove_clock={self.halfmove_clock}, "
            f"fullmove_clock={self.fullmove_clock})"
        )
