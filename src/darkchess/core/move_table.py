"""MoveTable — per-piece move lists and the data the raw pass hands to
the pruner."""

from __future__ import annotations

from dataclasses import dataclass, field

from darkchess.core.types import PieceId, Square


@dataclass(slots=True)
class MoveTable:
    """Side structures rebuilt on every generation cycle.

    ``moves`` and ``own_piece_threats`` hold one container per piece on the
    board, keyed by arena handle. ``pinned`` maps a pinned piece's square to
    its pinner's square and only lives between the raw pass and pruning.
    """

    moves: dict[PieceId, list[Square]] = field(default_factory=dict)
    own_piece_threats: dict[PieceId, list[Square]] = field(default_factory=dict)
    pinned: dict[Square, Square] = field(default_factory=dict)

    def register(self, pid: PieceId) -> None:
        self.moves[pid] = []
        self.own_piece_threats[pid] = []

    def discard(self, pid: PieceId) -> None:
        self.moves.pop(pid, None)
        self.own_piece_threats.pop(pid, None)

    def reset(self) -> None:
        """Empty every container in place; the pin map is dropped."""
        for move_list in self.moves.values():
            move_list.clear()
        for threats in self.own_piece_threats.values():
            threats.clear()
        self.pinned.clear()
