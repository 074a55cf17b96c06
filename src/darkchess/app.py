"""Text-mode entry point: play moves typed on stdin."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Iterable
from typing import TextIO

from darkchess.core.chessboard import ChessBoard
from darkchess.core.enums import BoardMode
from darkchess.core.types import Square, parse_square
from darkchess.notation import board_from_placement
from darkchess.render import board_to_text

_LOGGER = logging.getLogger(__name__)
_QUIT_COMMANDS = frozenset({"quit", "exit", "q"})


def parse_move(text: str) -> tuple[Square, Square]:
    """Parse ``"e2 e3"`` or ``"e2e3"`` into a (from, to) pair."""
    compact = "".join(text.split())
    if len(compact) != 4:
        raise ValueError(f"Invalid move: {text!r}")
    return parse_square(compact[:2]), parse_square(compact[2:])


def play(board: ChessBoard, lines: Iterable[str], out: TextIO) -> int:
    """Apply each move in *lines*; return how many were accepted."""
    accepted = 0
    for line in lines:
        command = line.strip()
        if not command:
            continue
        if command.lower() in _QUIT_COMMANDS:
            break
        try:
            from_sq, to_sq = parse_move(command)
        except ValueError as exc:
            print(exc, file=out)
            continue
        if board.apply_move(from_sq, to_sq):
            accepted += 1
            print(board_to_text(board), file=out)
        else:
            print(f"Rejected: {command}", file=out)
    return accepted


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="darkchess", description=__doc__)
    parser.add_argument(
        "--debug",
        action="store_true",
        help="unrestricted mode: move any piece anywhere",
    )
    parser.add_argument(
        "--position",
        default=None,
        help="start from a FEN placement (optionally followed by w/b)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Launch the text front end."""
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )

    mode = BoardMode.UNRESTRICTED if args.debug else BoardMode.STANDARD
    if args.position:
        board = board_from_placement(args.position, mode=mode)
    else:
        board = ChessBoard(mode)
    _LOGGER.info("Starting game in %s mode", mode.value)

    print(board_to_text(board))
    play(board, sys.stdin, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
