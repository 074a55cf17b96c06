"""Core enumerations for the rules engine."""

from __future__ import annotations

from enum import Enum, IntEnum


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


class BoardMode(Enum):
    """How strictly :class:`ChessBoard` validates submitted moves.

    ``UNRESTRICTED`` is a debugging aid: any piece may be moved to any
    square regardless of whose turn it is or what its move list says.
    """

    STANDARD = "standard"
    UNRESTRICTED = "unrestricted"
