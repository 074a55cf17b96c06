"""Position import/export using the FEN piece-placement field."""

from __future__ import annotations

from darkchess.core.chessboard import ChessBoard
from darkchess.core.diagnostics import IDiagnosticSink
from darkchess.core.enums import BoardMode, Color
from darkchess.core.piece import Piece
from darkchess.core.types import Square, make_square

STARTING_PLACEMENT = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"

_SIDES: dict[str, Color] = {"w": Color.WHITE, "b": Color.BLACK}


def parse_placement(placement: str) -> dict[Square, Piece]:
    """Parse the placement field, e.g. ``"8/8/8/8/8/8/8/4K3"``."""
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise ValueError(f"Invalid placement (must contain 8 ranks): {placement!r}")

    pieces: dict[Square, Piece] = {}
    for rank_idx, rank_text in enumerate(ranks):
        rank = 7 - rank_idx
        file = 0
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise ValueError(f"Invalid placement digit {ch!r}: {placement!r}")
                file += step
            else:
                if file >= 8:
                    raise ValueError(f"Invalid placement rank width: {placement!r}")
                pieces[make_square(file, rank)] = Piece.from_char(ch)
                file += 1
            if file > 8:
                raise ValueError(f"Invalid placement rank width: {placement!r}")
        if file != 8:
            raise ValueError(f"Invalid placement rank width: {placement!r}")
    return pieces


def board_from_placement(
    text: str,
    *,
    mode: BoardMode = BoardMode.STANDARD,
    sink: IDiagnosticSink | None = None,
) -> ChessBoard:
    """Build a :class:`ChessBoard` from a placement field.

    An optional second field (``w`` or ``b``) sets the side to move, so a
    full FEN string is accepted too; any later fields are ignored because
    the engine tracks neither castling, en passant nor clocks.
    """
    parts = text.split()
    if not parts:
        raise ValueError("Empty placement")

    turn = Color.WHITE
    if len(parts) > 1:
        try:
            turn = _SIDES[parts[1]]
        except KeyError:
            raise ValueError(f"Invalid side-to-move field: {parts[1]!r}") from None

    return ChessBoard.from_pieces(
        parse_placement(parts[0]), turn=turn, mode=mode, sink=sink
    )


def placement_of(board: ChessBoard) -> str:
    """Serialize *board*'s pieces back to a placement field."""
    rows: list[str] = []
    for rank in range(7, -1, -1):
        row = ""
        empty = 0
        for file in range(8):
            piece = board.piece_at(make_square(file, rank))
            if piece is None:
                empty += 1
                continue
            if empty:
                row += str(empty)
                empty = 0
            row += piece.symbol
        if empty:
            row += str(empty)
        rows.append(row)
    return "/".join(rows)
