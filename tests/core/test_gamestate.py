"""Tests for Gamestate validation and state transitions."""

import logging

import pytest

from chessrules.core.board import Board
from chessrules.core.enums import CastlingRights, Color, PieceKind
from chessrules.core.errors import IllegalMoveError, InvariantViolation, MoveRejection
from chessrules.core.gamestate import Gamestate
from chessrules.core.move import Move
from chessrules.core.piece import Piece
from chessrules.core.square import D5, D6, E1, E2, E3, E4, E5, E8, Square
from chessrules.notation.fen import gamestate_from_fen

_CASTLE_READY = "r3k2r/pppppppp/8/8/8/8/PPPPPPPP/R3K2R w KQkq - 0 1"


def play(game: Gamestate, *moves: str) -> None:
    for text in moves:
        game.perform_move(Move.parse(text))


def rejection(game: Gamestate, text: str) -> MoveRejection:
    with pytest.raises(IllegalMoveError) as info:
        game.perform_move(Move.parse(text))
    return info.value.reason


class TestOpening:
    def test_e2_e4(self, game: Gamestate) -> None:
        play(game, "e2 e4")
        assert game.turn == Color.BLACK
        assert game.halfmove_clock == 0
        assert game.fullmove_clock == 1
        assert game.board[E4] == Piece(PieceKind.PAWN, Color.WHITE, move_count=1)
        assert game.board.is_empty(E2)

    def test_e2_e5_is_invalid_and_changes_nothing(self, game: Gamestate) -> None:
        before = game.copy()
        assert rejection(game, "e2 e5") == MoveRejection.INVALID_MOVE_PATTERN
        assert game == before

    def test_initial_fields(self, game: Gamestate) -> None:
        assert game.turn == Color.WHITE
        assert game.white_king_position == E1
        assert game.black_king_position == E8
        assert game.castling == CastlingRights.ALL
        assert game.en_passant_target is None
        assert (game.halfmove_clock, game.fullmove_clock) == (0, 0)
        assert game.fullmove_number == 1


class TestRejections:
    @pytest.mark.parametrize(
        "text, reason",
        [
            ("e4 e5", MoveRejection.NO_PIECE_AT_MOVE_SOURCE),
            ("e7 e5", MoveRejection.ENEMY_PIECE_AT_MOVE_SOURCE),
            ("g1 g3", MoveRejection.INVALID_MOVE_PATTERN),
            ("a1 a3", MoveRejection.MOVE_COLLISION_OCCURS),
            ("c1 e3", MoveRejection.MOVE_COLLISION_OCCURS),
            ("a1 a2", MoveRejection.CANNOT_CAPTURE_FRIENDLY),
            ("g1 e2", MoveRejection.CANNOT_CAPTURE_FRIENDLY),
        ],
    )
    def test_opening_position(
        self, game: Gamestate, text: str, reason: MoveRejection
    ) -> None:
        before = game.copy()
        assert rejection(game, text) == reason
        assert game == before

    def test_checks_run_in_order(self, game: Gamestate) -> None:
        # Bad pattern *and* blocked: the pattern check comes first.
        assert rejection(game, "a1 b3") == MoveRejection.INVALID_MOVE_PATTERN
        # Blocked *and* a friendly target: collision comes first.
        assert rejection(game, "a1 d1") == MoveRejection.MOVE_COLLISION_OCCURS

    def test_pawn_cannot_capture_straight_ahead(self, game: Gamestate) -> None:
        play(game, "e2 e4", "e7 e5")
        assert rejection(game, "e4 e5") == MoveRejection.INVALID_MOVE_PATTERN

    def test_pawn_cannot_move_diagonally_without_capture(self, game: Gamestate) -> None:
        assert rejection(game, "e2 d3") == MoveRejection.INVALID_MOVE_PATTERN

    def test_pawn_double_step_blocked(self) -> None:
        game = gamestate_from_fen("4k3/8/8/8/8/4n3/4P3/4K3 w - - 0 1")
        assert rejection(game, "e2 e4") == MoveRejection.MOVE_COLLISION_OCCURS

    def test_pawn_double_step_only_once(self, game: Gamestate) -> None:
        play(game, "e2 e3", "a7 a6")
        assert rejection(game, "e3 e5") == MoveRejection.INVALID_MOVE_PATTERN

    def test_rook_blocked_by_own_pawn(self) -> None:
        game = gamestate_from_fen("4k3/8/8/8/8/P7/8/R3K3 w - - 0 1")
        assert rejection(game, "a1 a5") == MoveRejection.MOVE_COLLISION_OCCURS

    def test_knight_ignores_collision(self, game: Gamestate) -> None:
        play(game, "g1 f3")
        assert game.board[Square.parse("f3")] is not None

    def test_error_carries_move(self, game: Gamestate) -> None:
        with pytest.raises(IllegalMoveError) as info:
            game.perform_move(Move.parse("e2 e5"))
        assert info.value.move == Move.parse("e2 e5")
        assert "invalid_move_pattern" in str(info.value)


class TestSelfCheck:
    def test_pinned_piece_cannot_move(self) -> None:
        game = gamestate_from_fen("4k3/4r3/8/8/8/8/4B3/4K3 w - - 0 1")
        before = game.copy()
        assert rejection(game, "e2 d3") == MoveRejection.CANNOT_SELF_CHECK
        assert game == before

    def test_pinned_piece_may_move_along_pin(self) -> None:
        game = gamestate_from_fen("4k3/4r3/8/8/8/8/4R3/4K3 w - - 0 1")
        play(game, "e2 e7")
        assert game.board[Square.parse("e7")] == Piece(PieceKind.ROOK, Color.WHITE, 1)

    def test_king_cannot_step_into_attack(self) -> None:
        game = gamestate_from_fen("4k3/8/8/8/8/8/3r4/4K3 w - - 0 1")
        assert rejection(game, "e1 f2") == MoveRejection.CANNOT_SELF_CHECK

    def test_must_answer_check(self) -> None:
        game = gamestate_from_fen("4k3/8/8/8/8/8/8/r3K2R w K - 0 1")
        assert game.is_check()
        assert rejection(game, "h1 h2") == MoveRejection.CANNOT_SELF_CHECK
        play(game, "e1 e2")
        assert not game.is_check(Color.WHITE)

    def test_king_may_capture_undefended_attacker(self) -> None:
        game = gamestate_from_fen("4k3/8/8/8/8/8/3r4/4K3 w - - 0 1")
        play(game, "e1 d2")
        assert game.white_king_position == Square.parse("d2")
        assert game.halfmove_clock == 0

    def test_is_legal(self) -> None:
        game = gamestate_from_fen("4k3/4r3/8/8/8/8/4B3/4K3 w - - 0 1")
        assert not game.is_legal(Move.parse("e2 d3"))
        assert game.is_legal(Move.parse("e1 d1"))

    def test_is_check_defaults_to_side_to_move(self) -> None:
        game = gamestate_from_fen("4k3/8/8/8/8/8/8/4K2R b - - 0 1")
        assert not game.is_check()
        game = gamestate_from_fen("4k3/8/8/8/8/8/8/4R2K b - - 0 1")
        assert game.is_check()
        assert not game.is_check(Color.WHITE)


class TestClocks:
    def test_quiet_piece_move_increments_halfmove(self, game: Gamestate) -> None:
        play(game, "g1 f3")
        assert game.halfmove_clock == 1
        play(game, "g8 f6")
        assert game.halfmove_clock == 2
        assert game.fullmove_clock == 2

    def test_pawn_move_resets_halfmove(self, game: Gamestate) -> None:
        play(game, "g1 f3", "g8 f6", "d2 d3")
        assert game.halfmove_clock == 0

    def test_capture_resets_halfmove(self, game: Gamestate) -> None:
        play(game, "g1 f3", "d7 d5", "f3 e5", "b8 c6", "e5 c6")
        assert game.halfmove_clock == 0

    def test_fullmove_counts_every_half_move(self, game: Gamestate) -> None:
        moves = ["g1 f3", "g8 f6", "f3 g1", "f6 g8", "b1 c3"]
        for count, text in enumerate(moves, start=1):
            play(game, text)
            assert game.fullmove_clock == count
        assert game.fullmove_number == 3

    def test_move_count_tracks_each_piece(self, game: Gamestate) -> None:
        play(game, "g1 f3", "g8 f6", "f3 g1")
        knight = game.board[Square.parse("g1")]
        assert knight is not None and knight.move_count == 2


class TestKingTracking:
    def test_cache_follows_king(self, game: Gamestate) -> None:
        play(game, "e2 e4", "e7 e5", "e1 e2", "e8 e7")
        assert game.white_king_position == E2
        assert game.black_king_position == Square.parse("e7")
        assert game.white_king_position == game.find_king(Color.WHITE)
        assert game.black_king_position == game.find_king(Color.BLACK)

    def test_cache_matches_board_after_every_move(self, game: Gamestate) -> None:
        for text in ["e2 e4", "d7 d5", "e4 d5", "d8 d5", "e1 e2", "d5 a5", "e2 d3"]:
            play(game, text)
            for color in Color:
                piece = game.board[game.king_position(color)]
                assert piece is not None
                assert (piece.kind, piece.color) == (PieceKind.KING, color)

    def test_missing_king_is_invariant_violation(self) -> None:
        with pytest.raises(InvariantViolation):
            Gamestate(board=Board())

    def test_missing_moved_piece_is_invariant_violation(self, game: Gamestate) -> None:
        with pytest.raises(InvariantViolation):
            game.update_gamestate(Move(E4, E5), was_capture=False)


class TestCastlingRights:
    def test_king_move_clears_both(self) -> None:
        game = gamestate_from_fen(_CASTLE_READY)
        play(game, "e1 f1")
        assert not game.white_castle_kingside
        assert not game.white_castle_queenside
        assert game.black_castle_kingside and game.black_castle_queenside

    def test_rook_move_clears_one_side(self) -> None:
        game = gamestate_from_fen(_CASTLE_READY)
        play(game, "a1 b1")
        assert not game.white_castle_queenside
        assert game.white_castle_kingside

    def test_rights_never_return(self) -> None:
        game = gamestate_from_fen(_CASTLE_READY)
        play(game, "h1 g1", "h8 g8", "g1 h1", "g8 h8")
        assert not game.white_castle_kingside
        assert not game.black_castle_kingside
        assert game.white_castle_queenside and game.black_castle_queenside

    def test_captured_rook_loses_right(self) -> None:
        game = gamestate_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        play(game, "h1 h8")
        assert not game.black_castle_kingside
        assert not game.white_castle_kingside
        assert game.black_castle_queenside

    def test_construction_drops_unsupported_rights(self) -> None:
        board = Board()
        board[E1] = Piece(PieceKind.KING, Color.WHITE)
        board[E8] = Piece(PieceKind.KING, Color.BLACK)
        board[Square.parse("a8")] = Piece(PieceKind.ROOK, Color.BLACK)
        game = Gamestate(board=board)
        assert game.castling == CastlingRights.BLACK_QUEENSIDE

    def test_monotonic_over_a_game(self, game: Gamestate) -> None:
        moves = [
            "e2 e4", "e7 e5", "g1 f3", "b8 c6", "f1 c4", "g8 f6",
            "h1 g1", "a8 b8", "g1 h1", "e8 e7", "e1 e2", "b8 a8",
        ]
        previous = game.castling
        for text in moves:
            play(game, text)
            assert game.castling & ~previous == CastlingRights.NONE
            previous = game.castling
        assert game.castling == CastlingRights.NONE


class TestEnPassant:
    def test_double_step_sets_target(self, game: Gamestate) -> None:
        play(game, "e2 e4")
        assert game.en_passant_target == E3

    def test_single_step_clears_target(self, game: Gamestate) -> None:
        play(game, "e2 e4", "e7 e6")
        assert game.en_passant_target is None

    def test_capture_removes_passed_pawn(self, game: Gamestate) -> None:
        play(game, "e2 e4", "a7 a6", "e4 e5", "d7 d5")
        assert game.en_passant_target == D6
        play(game, "e5 d6")
        assert game.board.is_empty(D5)
        assert game.board[D6] == Piece(PieceKind.PAWN, Color.WHITE, move_count=3)
        assert game.halfmove_clock == 0
        assert game.en_passant_target is None

    def test_only_on_the_next_move(self, game: Gamestate) -> None:
        play(game, "e2 e4", "a7 a6", "e4 e5", "d7 d5", "a2 a3", "a6 a5")
        before = game.copy()
        assert rejection(game, "e5 d6") == MoveRejection.INVALID_MOVE_PATTERN
        assert game == before

    def test_black_captures_en_passant(self) -> None:
        game = gamestate_from_fen("4k3/8/8/8/3p4/8/4P3/4K3 w - - 0 1")
        play(game, "e2 e4", "d4 e3")
        assert game.board.is_empty(E4)
        assert game.board[E3] == Piece(PieceKind.PAWN, Color.BLACK, move_count=2)

    def test_capture_that_exposes_king_is_rejected(self) -> None:
        # Removing both pawns from rank 5 would open the rook's line to the king.
        game = gamestate_from_fen("8/8/8/K2Pp2r/8/8/8/7k w - e6 0 1")
        assert rejection(game, "d5 e6") == MoveRejection.CANNOT_SELF_CHECK


class TestGamestateUtilities:
    def test_copy_is_independent(self, game: Gamestate) -> None:
        clone = game.copy()
        play(clone, "e2 e4")
        assert game.turn == Color.WHITE
        assert game.board[E2] is not None
        assert game != clone

    def test_logs_rejections(self, game: Gamestate, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="chessrules.core.gamestate"):
            with pytest.raises(IllegalMoveError):
                game.perform_move(Move.parse("e2 e5"))
        assert "invalid_move_pattern" in caplog.text

    def test_repr(self, game: Gamestate) -> None:
        assert "turn=white" in repr(game)
