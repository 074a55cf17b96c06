"""Core rules layer — board state, move generation and pruning.

Quick start::

    from darkchess.core import ChessBoard
    from darkchess.core.types import E2, E3

    board = ChessBoard()
    board.legal_moves(E2)   # (20,), i.e. e3
    board.apply_move(E2, E3)
"""

from darkchess.core.arena import PieceArena
from darkchess.core.board import Board
from darkchess.core.chessboard import ChessBoard, SquareLike
from darkchess.core.diagnostics import (
    DiagnosticEvent,
    IDiagnosticSink,
    LoggingSink,
    RecordingSink,
    Severity,
)
from darkchess.core.enums import BoardMode, Color, PieceType
from darkchess.core.move_generator import RawMoveGenerator
from darkchess.core.move_table import MoveTable
from darkchess.core.piece import Piece
from darkchess.core.pruner import MovePruner
from darkchess.core.types import (
    Coord,
    PieceId,
    Square,
    coord_to_square,
    file_of,
    is_colinear,
    is_valid_coord,
    is_valid_square,
    make_square,
    parse_square,
    rank_of,
    square_name,
    square_to_coord,
)

__all__ = [
    # Enums / config
    "BoardMode",
    "Color",
    "PieceType",
    # Types / helpers
    "Coord",
    "PieceId",
    "Square",
    "SquareLike",
    "coord_to_square",
    "file_of",
    "is_colinear",
    "is_valid_coord",
    "is_valid_square",
    "make_square",
    "parse_square",
    "rank_of",
    "square_name",
    "square_to_coord",
    # Domain objects
    "Board",
    "ChessBoard",
    "MovePruner",
    "MoveTable",
    "Piece",
    "PieceArena",
    "RawMoveGenerator",
    # Diagnostics
    "DiagnosticEvent",
    "IDiagnosticSink",
    "LoggingSink",
    "RecordingSink",
    "Severity",
]
