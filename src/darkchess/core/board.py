"""Board - piece placement on an 8x8 board plus turn bookkeeping."""

from __future__ import annotations

from collections.abc import Iterator

from darkchess.core.arena import PieceArena
from darkchess.core.enums import Color, PieceType
from darkchess.core.piece import Piece
from darkchess.core.types import PieceId, Square, is_valid_square, make_square

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """Mutable 64-square board holding arena handles, the side to move and
    the number of moves played."""

    __slots__ = ("_squares", "_arena", "turn", "move_count")

    def __init__(self) -> None:
        self._squares: list[PieceId | None] = [None] * 64
        self._arena = PieceArena()
        self.turn = Color.WHITE
        self.move_count = 0

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        pid = self._squares[sq]
        return None if pid is None else self._arena[pid]

    def piece_at(self, sq: Square) -> Piece | None:
        """Piece on *sq*; None for empty or off-board squares."""
        if not is_valid_square(sq):
            return None
        return self[sq]

    def piece_id_at(self, sq: Square) -> PieceId | None:
        if not is_valid_square(sq):
            return None
        return self._squares[sq]

    def piece(self, pid: PieceId) -> Piece:
        return self._arena[pid]

    def is_empty(self, sq: Square) -> bool:
        return self._squares[sq] is None

    # -- Query helpers ------------------------------------------------------

    def occupied(self) -> Iterator[tuple[Square, PieceId]]:
        """``(square, handle)`` pairs in ascending square order."""
        for sq, pid in enumerate(self._squares):
            if pid is not None:
                yield sq, pid

    def pieces(self) -> dict[Square, Piece]:
        """Snapshot of the current placement."""
        return {sq: self._arena[pid] for sq, pid in self.occupied()}

    # -- Mutation -----------------------------------------------------------

    def place(self, piece: Piece, sq: Square) -> PieceId:
        """Put a new *piece* on *sq*, replacing any occupant."""
        if not is_valid_square(sq):
            raise ValueError(f"Square out of range: {sq!r}")
        pid = self._arena.add(piece)
        self._squares[sq] = pid
        return pid

    def relocate(self, from_sq: Square, to_sq: Square) -> PieceId | None:
        """Move the occupant of *from_sq* to *to_sq*; return the displaced handle."""
        displaced = self._squares[to_sq]
        self._squares[to_sq] = self._squares[from_sq]
        self._squares[from_sq] = None
        return displaced

    def swap_turn(self) -> None:
        self.turn = self.turn.opposite

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for f in range(8):
            b.place(Piece(Color.WHITE, PieceType.PAWN), make_square(f, 1))
            b.place(Piece(Color.BLACK, PieceType.PAWN), make_square(f, 6))
        for f, pt in enumerate(_BACK_RANK):
            b.place(Piece(Color.WHITE, pt), make_square(f, 0))
            b.place(Piece(Color.BLACK, pt), make_square(f, 7))
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self.pieces() == other.pieces()
            and self.turn == other.turn
            and self.move_count == other.move_count
        )

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(7, -1, -1):
            row = []
            for file in range(8):
                p = self[make_square(file, rank)]
                row.append(p.symbol if p else ".")
            rows.append(f"{rank + 1} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
