"""darkchess — rules core of a two-player chess variant."""

from darkchess.core import BoardMode, ChessBoard, Color, Piece, PieceType

__all__ = ["BoardMode", "ChessBoard", "Color", "Piece", "PieceType"]

__version__ = "0.1.0"
