"""ChessBoard — board state, move lists and the move applier in one place.

Every accepted move is followed by a full regeneration: the raw pass over
all pieces, then pin restriction, then king safety. Nothing is updated
incrementally, so the board is only ever observed before a move or after
the whole pipeline has settled.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TypeAlias

from darkchess.core.board import Board
from darkchess.core.diagnostics import IDiagnosticSink, LoggingSink
from darkchess.core.enums import BoardMode, Color
from darkchess.core.move_generator import RawMoveGenerator
from darkchess.core.move_table import MoveTable
from darkchess.core.piece import Piece
from darkchess.core.pruner import MovePruner
from darkchess.core.types import (
    Coord,
    PieceId,
    Square,
    coord_to_square,
    is_valid_coord,
    is_valid_square,
    square_name,
)

SquareLike: TypeAlias = Square | Coord


def _resolve(where: SquareLike) -> Square | None:
    """Square index for *where*, or None when it is off the board."""
    if isinstance(where, tuple):
        coord = Coord(*where)
        return coord_to_square(coord) if is_valid_coord(coord) else None
    return where if is_valid_square(where) else None


def _describe(where: SquareLike) -> str:
    sq = _resolve(where)
    return square_name(sq) if sq is not None else repr(where)


class ChessBoard:
    """A game board that knows every piece's legal moves.

    Args:
        mode: ``BoardMode.UNRESTRICTED`` skips turn and legality checks.
        sink: Receiver for diagnostic events; defaults to a
            :class:`LoggingSink`.
        board: Starting placement; the standard position when omitted.

    Not thread-safe: callers must serialize ``apply_move`` calls.
    """

    __slots__ = ("_board", "_table", "_mode", "_sink", "_generator", "_pruner", "_pins")

    def __init__(
        self,
        mode: BoardMode = BoardMode.STANDARD,
        sink: IDiagnosticSink | None = None,
        *,
        board: Board | None = None,
    ) -> None:
        self._board = board if board is not None else Board.initial()
        self._table = MoveTable()
        self._mode = mode
        self._sink = sink if sink is not None else LoggingSink()
        self._generator = RawMoveGenerator(self._board, self._table, self._sink)
        self._pruner = MovePruner(self._board, self._table, self._sink)
        self._pins: dict[Square, Square] = {}

        for _, pid in self._board.occupied():
            self._table.register(pid)
        self.generate_moves()

    @classmethod
    def from_pieces(
        cls,
        placement: Mapping[SquareLike, Piece],
        *,
        turn: Color = Color.WHITE,
        move_count: int = 0,
        mode: BoardMode = BoardMode.STANDARD,
        sink: IDiagnosticSink | None = None,
    ) -> ChessBoard:
        """Build an arbitrary position, e.g. from imported notation."""
        board = Board()
        for where, piece in placement.items():
            sq = _resolve(where)
            if sq is None:
                raise ValueError(f"Square out of range: {where!r}")
            board.place(piece, sq)
        board.turn = turn
        board.move_count = move_count
        return cls(mode, sink, board=board)

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def turn(self) -> Color:
        return self._board.turn

    @property
    def turn_name(self) -> str:
        return str(self._board.turn).capitalize()

    @property
    def move_count(self) -> int:
        return self._board.move_count

    @property
    def mode(self) -> BoardMode:
        return self._mode

    @property
    def sink(self) -> IDiagnosticSink:
        return self._sink

    @property
    def move_table(self) -> MoveTable:
        return self._table

    # ── Queries ──────────────────────────────────────────────────────────

    def piece_at(self, where: SquareLike) -> Piece | None:
        sq = _resolve(where)
        return None if sq is None else self._board[sq]

    def piece_id_at(self, where: SquareLike) -> PieceId | None:
        sq = _resolve(where)
        return None if sq is None else self._board.piece_id_at(sq)

    def pieces(self) -> dict[Square, Piece]:
        return self._board.pieces()

    def piece_ids(self) -> tuple[PieceId, ...]:
        return tuple(pid for _, pid in self._board.occupied())

    def legal_moves(self, where: SquareLike) -> tuple[Square, ...]:
        """Pruned destinations of the piece on *where* (empty if none)."""
        pid = self.piece_id_at(where)
        return () if pid is None else self.moves_of(pid)

    def moves_of(self, pid: PieceId) -> tuple[Square, ...]:
        return tuple(self._table.moves.get(pid, ()))

    def own_piece_threats(self, where: SquareLike) -> tuple[Square, ...]:
        pid = self.piece_id_at(where)
        if pid is None:
            return ()
        return tuple(self._table.own_piece_threats.get(pid, ()))

    def pinned_pieces(self) -> dict[Square, Square]:
        """Pins found by the last raw pass: pinned square → pinner square."""
        return dict(self._pins)

    # ── Setup ────────────────────────────────────────────────────────────

    def place_piece(self, piece: Piece, where: SquareLike) -> PieceId:
        """Put *piece* on *where*, replacing any occupant.

        Setup only: move lists are stale until :meth:`generate_moves` runs.
        """
        sq = _resolve(where)
        if sq is None:
            raise ValueError(f"Square out of range: {where!r}")
        old = self._board.piece_id_at(sq)
        if old is not None:
            self._table.discard(old)
        pid = self._board.place(piece, sq)
        self._table.register(pid)
        return pid

    # ── Move generation ──────────────────────────────────────────────────

    def generate_moves(self) -> None:
        """Recompute every move list, then prune it."""
        if not self._generator.generate():
            return
        self._pins = dict(self._table.pinned)
        self.prune_moves()

    def prune_moves(self) -> None:
        self._pruner.prune()

    # ── Move applier ─────────────────────────────────────────────────────

    def apply_move(self, from_: SquareLike, to: SquareLike) -> bool:
        """Validate and commit a move.

        Returns True if the move was made. A rejected move is reported to
        the sink as a warning and leaves the board untouched.
        """
        from_sq = _resolve(from_)
        to_sq = _resolve(to)
        if from_sq is None or to_sq is None:
            return self._reject(from_, to, "Off the board")

        board = self._board
        pid = board.piece_id_at(from_sq)
        if pid is None:
            return self._reject(from_sq, to_sq, "No piece")
        if from_sq == to_sq:
            return self._reject(from_sq, to_sq, "Null move")

        piece = board.piece(pid)
        unrestricted = self._mode is BoardMode.UNRESTRICTED

        if not unrestricted and piece.color != board.turn:
            return self._reject(from_sq, to_sq, "Not your turn")

        legal = self._table.moves.get(pid)
        if legal is None:
            self._sink.critical(
                "Piece has no moves container",
                piece=piece.name,
                square=square_name(from_sq),
            )
            return False

        if not unrestricted and to_sq not in legal:
            return self._reject(from_sq, to_sq, "Not a legal move")

        target = board[to_sq]
        if target is not None and target.color == piece.color:
            return self._reject(from_sq, to_sq, "Square holds own piece")

        captured = board.relocate(from_sq, to_sq)
        if captured is not None:
            self._table.discard(captured)
        board.swap_turn()
        board.move_count += 1

        self._sink.info(
            f"Move {square_name(from_sq)} to {square_name(to_sq)}",
            piece=piece.name,
            from_square=square_name(from_sq),
            to_square=square_name(to_sq),
            captured=target.name if target else None,
        )

        self.generate_moves()
        return True

    def _reject(self, from_: SquareLike, to: SquareLike, reason: str) -> bool:
        self._sink.warning(
            f"Invalid move {_describe(from_)} to {_describe(to)}: {reason}",
            from_square=_describe(from_),
            to_square=_describe(to),
            reason=reason,
        )
        return False

    # ── Dunder helpers ───────────────────────────────────────────────────

    def __repr__(self) -> str:
        return f"{self._board!r}\n{self.turn_name} to move, {self.move_count} moves"
