"""Raw move generation: per-piece move lists, ray casting and pin discovery.

Raw moves ignore king safety. While ray casting, a sliding piece also
records the same-color pieces it runs into and any enemy piece that stands
alone between it and the enemy king (a pin). :class:`MovePruner` consumes
both afterwards.
"""

from __future__ import annotations

from darkchess.core.board import Board
from darkchess.core.diagnostics import IDiagnosticSink
from darkchess.core.enums import Color, PieceType
from darkchess.core.move_table import MoveTable
from darkchess.core.types import PieceId, Square, make_square, offset_square, square_name

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (1, 2),
    (2, 1),
    (-1, 2),
    (-2, 1),
    (1, -2),
    (2, -1),
    (-1, -2),
    (-2, -1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (1, 1),
    (1, -1),
    (-1, 1),
    (-1, -1),
    (0, 1),
    (1, 0),
    (0, -1),
    (-1, 0),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((1, 1), (1, -1), (-1, 1), (-1, -1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((0, 1), (1, 0), (0, -1), (-1, 0))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

PAWN_CAPTURE_FILES: tuple[int, ...] = (-1, 1)

# A ray never has more than 7 squares on an 8x8 board.
_MAX_RAY_LENGTH = 7


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> tuple[tuple[Square, ...], ...]:
    targets: list[tuple[Square, ...]] = []
    for sq in range(64):
        moves: list[Square] = []
        for df, dr in offsets:
            to_sq = offset_square(sq, df, dr)
            if to_sq is not None:
                moves.append(to_sq)
        targets.append(tuple(moves))
    return tuple(targets)


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> tuple[tuple[tuple[Square, ...], ...], ...]:
    rays_per_square: list[tuple[tuple[Square, ...], ...]] = []
    for sq in range(64):
        file_idx = sq & 7
        rank_idx = sq >> 3
        square_rays: list[tuple[Square, ...]] = []
        for df, dr in directions:
            ray: list[Square] = []
            for step in range(1, _MAX_RAY_LENGTH + 1):
                af = file_idx + df * step
                ar = rank_idx + dr * step
                if not (0 <= af < 8 and 0 <= ar < 8):
                    break
                ray.append(make_square(af, ar))
            square_rays.append(tuple(ray))
        rays_per_square.append(tuple(square_rays))
    return tuple(rays_per_square)


_KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
_KING_TARGETS = _build_targets(KING_OFFSETS)

_BISHOP_RAYS = _build_rays(BISHOP_DIRS)
_ROOK_RAYS = _build_rays(ROOK_DIRS)
_QUEEN_RAYS = _build_rays(QUEEN_DIRS)

_PAWN_DIRECTION: dict[Color, int] = {Color.WHITE: 1, Color.BLACK: -1}


class RawMoveGenerator:
    """Fills a :class:`MoveTable` with the raw moves of every piece."""

    __slots__ = ("_board", "_table", "_sink")

    def __init__(self, board: Board, table: MoveTable, sink: IDiagnosticSink) -> None:
        self._board = board
        self._table = table
        self._sink = sink

    # -- Public API ---------------------------------------------------------

    def generate(self) -> bool:
        """Recompute all move lists from scratch.

        Returns False when a consistency violation aborted the pass; the
        caller must not prune a half-built table.
        """
        table = self._table
        board = self._board
        table.reset()

        for sq, pid in board.occupied():
            piece = board.piece(pid)
            moves = table.moves.get(pid)
            if moves is None:
                self._sink.critical(
                    "Piece has no moves container",
                    piece=piece.name,
                    square=square_name(sq),
                )
                return False

            pt = piece.piece_type
            if pt == PieceType.PAWN:
                self._gen_pawn(sq, piece.color, moves)
            elif pt == PieceType.KNIGHT:
                self._gen_stepper(sq, piece.color, _KNIGHT_TARGETS[sq], moves)
            elif pt == PieceType.BISHOP:
                self._gen_sliding(sq, pid, piece.color, _BISHOP_RAYS[sq], moves)
            elif pt == PieceType.ROOK:
                self._gen_sliding(sq, pid, piece.color, _ROOK_RAYS[sq], moves)
            elif pt == PieceType.QUEEN:
                self._gen_sliding(sq, pid, piece.color, _QUEEN_RAYS[sq], moves)
            elif pt == PieceType.KING:
                self._gen_stepper(sq, piece.color, _KING_TARGETS[sq], moves)
            else:
                self._sink.critical(
                    "Unknown piece type", piece_type=pt, square=square_name(sq)
                )
                return False
        return True

    # -- Piece-specific generators (private) -------------------------------

    def _gen_pawn(self, sq: Square, color: Color, moves: list[Square]) -> None:
        board = self._board
        dr = _PAWN_DIRECTION[color]

        one_step = offset_square(sq, 0, dr)
        if one_step is not None and board.is_empty(one_step):
            moves.append(one_step)

        for df in PAWN_CAPTURE_FILES:
            cap_sq = offset_square(sq, df, dr)
            if cap_sq is None:
                continue
            target = board[cap_sq]
            if target is not None and target.color != color:
                moves.append(cap_sq)

    def _gen_stepper(
        self,
        sq: Square,
        color: Color,
        targets: tuple[Square, ...],
        moves: list[Square],
    ) -> None:
        board = self._board
        for to_sq in targets:
            target = board[to_sq]
            if target is None or target.color != color:
                moves.append(to_sq)

    def _gen_sliding(
        self,
        sq: Square,
        pid: PieceId,
        color: Color,
        rays: tuple[tuple[Square, ...], ...],
        moves: list[Square],
    ) -> None:
        board = self._board
        for ray in rays:
            # Square of the first enemy piece hit; set once we are only
            # scanning on for a king behind it.
            victim_sq: Square | None = None
            for to_sq in ray:
                target = board[to_sq]

                if victim_sq is not None:
                    if target is None:
                        continue
                    if target.color != color and target.piece_type == PieceType.KING:
                        self._record_pin(victim_sq, sq)
                    break

                if target is None:
                    moves.append(to_sq)
                    continue
                if target.color != color:
                    moves.append(to_sq)
                    victim_sq = to_sq
                    continue

                self._record_own_piece_threat(pid, sq, to_sq)
                break

    # -- Side structures ---------------------------------------------------

    def _record_pin(self, pinned_sq: Square, pinner_sq: Square) -> None:
        self._table.pinned.setdefault(pinned_sq, pinner_sq)
        pinned = self._board[pinned_sq]
        self._sink.debug(
            "Piece is pinned",
            piece=pinned.name if pinned else None,
            square=square_name(pinned_sq),
            pinned_by=square_name(pinner_sq),
        )

    def _record_own_piece_threat(
        self, pid: PieceId, from_sq: Square, to_sq: Square
    ) -> None:
        threats = self._table.own_piece_threats.get(pid)
        if threats is None:
            self._sink.error(
                "No own-piece threat container, creating one",
                piece=self._board.piece(pid).name,
                square=square_name(from_sq),
            )
            threats = self._table.own_piece_threats[pid] = []
        threats.append(to_sq)
