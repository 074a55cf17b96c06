"""PieceArena — single owner of every piece placed on a board."""

from __future__ import annotations

from collections.abc import Iterator

from darkchess.core.piece import Piece
from darkchess.core.types import PieceId


class PieceArena:
    """Issues stable integer handles for placed pieces.

    Handles are never reused, so equal-valued pieces (e.g. the eight white
    pawns) keep separate identities for as long as the arena lives.
    """

    __slots__ = ("_pieces", "_next_id")

    def __init__(self) -> None:
        self._pieces: dict[PieceId, Piece] = {}
        self._next_id: PieceId = 0

    def add(self, piece: Piece) -> PieceId:
        pid = self._next_id
        self._next_id += 1
        self._pieces[pid] = piece
        return pid

    def __getitem__(self, pid: PieceId) -> Piece:
        return self._pieces[pid]

    def __contains__(self, pid: object) -> bool:
        return pid in self._pieces

    def __len__(self) -> int:
        return len(self._pieces)

    def __iter__(self) -> Iterator[PieceId]:
        return iter(self._pieces)
