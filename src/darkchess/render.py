"""Plain-text rendering of a board."""

from __future__ import annotations

from darkchess.core.chessboard import ChessBoard
from darkchess.core.types import make_square

_RULE = "  +---+---+---+---+---+---+---+---+"
_FILES = "    a   b   c   d   e   f   g   h"


def board_to_text(board: ChessBoard, *, unicode: bool = False) -> str:
    """Grid with rank 8 on top, followed by the side to move."""
    lines = [_RULE]
    for rank in range(7, -1, -1):
        cells: list[str] = []
        for file in range(8):
            piece = board.piece_at(make_square(file, rank))
            if piece is None:
                cells.append(" ")
            else:
                cells.append(piece.unicode_symbol if unicode else piece.symbol)
        lines.append(f"{rank + 1} | " + " | ".join(cells) + " |")
        lines.append(_RULE)
    lines.append(_FILES)
    lines.append(f"{board.turn_name} to move, {board.move_count} moves played")
    return "\n".join(lines)
