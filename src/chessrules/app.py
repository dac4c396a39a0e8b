"""Application entry point: a two-player text game in the terminal."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from typing import TextIO

from chessrules.core.errors import IllegalMoveError, MoveRejection, NotationError
from chessrules.core.gamestate import Gamestate
from chessrules.core.move import Move
from chessrules.notation.fen import STARTING_FEN, gamestate_from_fen

_LOGGER = logging.getLogger(__name__)

_CLEAR_SCREEN = "\x1b[2J\x1b[1;1H"
_QUIT_WORDS = frozenset({"quit", "exit"})

REJECTION_MESSAGES: dict[MoveRejection, str] = {
    MoveRejection.NO_PIECE_AT_MOVE_SOURCE: "There is no piece at the selected tile.",
    MoveRejection.ENEMY_PIECE_AT_MOVE_SOURCE: "You cannot move an enemy piece.",
    MoveRejection.INVALID_MOVE_PATTERN: (
        "The piece you selected cannot move in the way specified."
    ),
    MoveRejection.MOVE_COLLISION_OCCURS: (
        "Pieces other than Knights cannot move through other pieces."
    ),
    MoveRejection.CANNOT_CAPTURE_FRIENDLY: "You cannot capture your own pieces.",
    MoveRejection.CANNOT_SELF_CHECK: "You cannot move into check.",
}


# ── Settings ─────────────────────────────────────────────────────────────────


@dataclass
class SessionSettings:
    """All user-configurable settings for a terminal session."""

    start_fen: str = STARTING_FEN
    unicode_symbols: bool = True
    clear_screen: bool = True
    log_level: str = "WARNING"

    @classmethod
    def from_args(cls, argv: list[str] | None = None) -> SessionSettings:
        parser = argparse.ArgumentParser(
            prog="chessrules",
            description="Play chess against another person at the same terminal.",
        )
        parser.add_argument(
            "--fen", default=STARTING_FEN,
            help="Start from this FEN position (default: standard opening)",
        )
        parser.add_argument(
            "--ascii", action="store_true",
            help="Draw pieces as FEN letters instead of Unicode symbols",
        )
        parser.add_argument(
            "--no-clear", action="store_true",
            help="Do not clear the terminal before each board",
        )
        parser.add_argument(
            "--log-level", default="WARNING",
            choices=["DEBUG", "INFO", "WARNING", "ERROR"],
            help="Logging verbosity on stderr (default: WARNING)",
        )
        args = parser.parse_args(argv)
        return cls(
            start_fen=args.fen,
            unicode_symbols=not args.ascii,
            clear_screen=not args.no_clear,
            log_level=args.log_level,
        )


# ── Game loop ────────────────────────────────────────────────────────────────


def _read_and_apply(game: Gamestate, stdin: TextIO, stdout: TextIO) -> bool:
    """Prompt until one move is applied. Returns False when the player quits."""
    while True:
        stdout.write("Enter a move: ")
        stdout.flush()
        line = stdin.readline()
        if not line or line.strip().lower() in _QUIT_WORDS:
            stdout.write("\n")
            return False
        if not line.strip():
            continue

        try:
            game.perform_move(Move.parse(line))
        except NotationError as exc:
            stdout.write(f"{exc}. Enter moves like 'e2 e4'.\n\n")
        except IllegalMoveError as exc:
            stdout.write(f"{REJECTION_MESSAGES[exc.reason]}\n\n")
        else:
            return True


def play(
    game: Gamestate,
    settings: SessionSettings | None = None,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> int:
    """Run the read-move/print-board loop until EOF or ``quit``."""
    settings = settings or SessionSettings()
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout

    while True:
        if settings.clear_screen:
            stdout.write(_CLEAR_SCREEN)
        stdout.write(game.board.diagram(settings.unicode_symbols) + "\n")
        stdout.write(f"\nIt is {game.turn!s}'s turn.\n")
        if game.is_check():
            stdout.write(f"{str(game.turn).capitalize()} is in check.\n")

        if not _read_and_apply(game, stdin, stdout):
            _LOGGER.info("Session ended at move %d", game.fullmove_number)
            return 0


def main(argv: list[str] | None = None) -> int:
    """Launch the terminal game."""
    settings = SessionSettings.from_args(argv)

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s [%(name)s] %(message)s",
        stream=sys.stderr,
    )

    try:
        game = gamestate_from_fen(settings.start_fen)
    except NotationError as exc:
        _LOGGER.error("Cannot start from the given position: %s", exc)
        return 2

    return play(game, settings)


if __name__ == "__main__":
    sys.exit(main())
