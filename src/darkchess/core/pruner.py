"""Second stage of move generation: pin restriction and king safety."""

from __future__ import annotations

from darkchess.core.board import Board
from darkchess.core.diagnostics import IDiagnosticSink
from darkchess.core.enums import Color, PieceType
from darkchess.core.move_table import MoveTable
from darkchess.core.types import PieceId, Square, is_colinear, square_name


class MovePruner:
    """Cuts raw move lists down to the moves the engine accepts.

    1. A pinned piece keeps only the moves on the line through itself and
       its pinner.
    2. A king loses every square an enemy non-king piece could reach with
       its raw moves, pinned pieces included.

    This does not resolve a king that is already in check.
    """

    __slots__ = ("_board", "_table", "_sink")

    def __init__(self, board: Board, table: MoveTable, sink: IDiagnosticSink) -> None:
        self._board = board
        self._table = table
        self._sink = sink

    def prune(self) -> None:
        # Aggregate before the pin pass rewrites any list.
        threatened = self.threatened_squares()
        self.prune_pinned_pieces()
        self.prune_king_moves(threatened)

    def threatened_squares(self) -> dict[Color, set[Square]]:
        """Destinations of every non-king piece, grouped by its color."""
        board = self._board
        threatened: dict[Color, set[Square]] = {Color.WHITE: set(), Color.BLACK: set()}
        for pid, moves in self._table.moves.items():
            piece = board.piece(pid)
            if piece.piece_type != PieceType.KING:
                threatened[piece.color].update(moves)
        return threatened

    def prune_pinned_pieces(self) -> None:
        table = self._table
        for pinned_sq, pinner_sq in table.pinned.items():
            pid = self._board.piece_id_at(pinned_sq)
            moves = table.moves.get(pid) if pid is not None else None
            if moves is None:
                self._sink.critical(
                    "Pinned piece has no moves container",
                    square=square_name(pinned_sq),
                )
                continue
            moves[:] = [m for m in moves if is_colinear(m, pinned_sq, pinner_sq)]
        table.pinned.clear()

    def prune_king_moves(
        self, threatened: dict[Color, set[Square]] | None = None
    ) -> None:
        if threatened is None:
            threatened = self.threatened_squares()

        board = self._board
        kings: dict[Color, list[PieceId]] = {Color.WHITE: [], Color.BLACK: []}
        for pid in self._table.moves:
            piece = board.piece(pid)
            if piece.piece_type == PieceType.KING:
                kings[piece.color].append(pid)

        for color in Color:
            if not kings[color]:
                self._sink.critical("No king on board", color=str(color))
                continue
            attacked = threatened[color.opposite]
            for pid in kings[color]:
                king_moves = self._table.moves[pid]
                king_moves[:] = sorted(set(king_moves) - attacked)
