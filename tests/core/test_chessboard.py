"""Tests for ChessBoard: construction, setup primitives and the move applier."""

import pytest

from darkchess.core.chessboard import ChessBoard
from darkchess.core.diagnostics import LoggingSink, RecordingSink, Severity
from darkchess.core.enums import BoardMode, Color, PieceType
from darkchess.core.piece import Piece
from darkchess.core.types import (
    A1, A5, D4, D7, D8, E1, E2, E3, E4, E5, E6, E7, E8,
    Coord,
)

WHITE_KING = Piece(Color.WHITE, PieceType.KING)
BLACK_KING = Piece(Color.BLACK, PieceType.KING)


def _snapshot(board: ChessBoard) -> tuple:
    return (
        board.pieces(),
        board.turn,
        board.move_count,
        {pid: list(moves) for pid, moves in board.move_table.moves.items()},
    )


class TestConstruction:
    def test_standard_start(self, board: ChessBoard) -> None:
        assert board.turn == Color.WHITE
        assert board.turn_name == "White"
        assert board.move_count == 0
        assert board.mode is BoardMode.STANDARD
        assert len(board.pieces()) == 32

    def test_generation_runs_before_returning(self, board: ChessBoard) -> None:
        assert board.legal_moves(E2) == (E3,)

    def test_quiet_construction(self, board: ChessBoard, sink: RecordingSink) -> None:
        assert sink.of(Severity.WARNING) == []
        assert sink.of(Severity.ERROR) == []
        assert sink.of(Severity.CRITICAL) == []

    def test_default_sink_logs(self) -> None:
        assert isinstance(ChessBoard().sink, LoggingSink)

    def test_from_pieces_with_coords(self, sink: RecordingSink) -> None:
        b = ChessBoard.from_pieces(
            {Coord(4, 0): WHITE_KING, Coord(4, 7): BLACK_KING},
            turn=Color.BLACK,
            move_count=7,
            sink=sink,
        )
        assert b.piece_at(E1) == WHITE_KING
        assert b.piece_at(Coord(4, 7)) == BLACK_KING
        assert b.turn == Color.BLACK
        assert b.move_count == 7

    def test_from_pieces_rejects_off_board(self) -> None:
        with pytest.raises(ValueError):
            ChessBoard.from_pieces({64: WHITE_KING})

    def test_piece_at_off_board(self, board: ChessBoard) -> None:
        assert board.piece_at(-1) is None
        assert board.piece_at(64) is None
        assert board.piece_at(Coord(8, 0)) is None

    def test_legal_moves_of_empty_square(self, board: ChessBoard) -> None:
        assert board.legal_moves(E4) == ()
        assert board.own_piece_threats(E4) == ()


class TestPlacePiece:
    def test_moves_stale_until_generation(self, sink: RecordingSink) -> None:
        b = ChessBoard.from_pieces({E1: WHITE_KING, E8: BLACK_KING}, sink=sink)
        b.place_piece(Piece(Color.WHITE, PieceType.ROOK), A1)
        assert b.legal_moves(A1) == ()
        b.generate_moves()
        assert len(b.legal_moves(A1)) == 10

    def test_replacing_drops_old_containers(self, board: ChessBoard) -> None:
        old = board.piece_id_at(E2)
        new = board.place_piece(Piece(Color.WHITE, PieceType.QUEEN), E2)
        board.generate_moves()
        assert old not in board.move_table.moves
        assert new in board.move_table.moves
        assert set(board.move_table.moves) == set(board.piece_ids())

    def test_off_board(self, board: ChessBoard) -> None:
        with pytest.raises(ValueError):
            board.place_piece(WHITE_KING, Coord(0, 8))


class TestApplyMove:
    def test_pawn_push_switches_turn(self, board: ChessBoard, sink: RecordingSink) -> None:
        assert board.apply_move(E2, E3)
        assert board.turn == Color.BLACK
        assert board.move_count == 1
        assert board.piece_at(E3) == Piece(Color.WHITE, PieceType.PAWN)
        assert board.piece_at(E2) is None
        infos = sink.of(Severity.INFO)
        assert len(infos) == 1
        assert infos[0].fields["from_square"] == "e2"
        assert infos[0].fields["to_square"] == "e3"

    def test_accepts_coords(self, board: ChessBoard) -> None:
        assert board.apply_move(Coord(4, 1), Coord(4, 2))
        assert board.piece_at(E3) is not None

    def test_piece_keeps_identity(self, board: ChessBoard) -> None:
        pid = board.piece_id_at(E2)
        board.apply_move(E2, E3)
        assert board.piece_id_at(E3) == pid

    def test_no_double_step(self, board: ChessBoard, sink: RecordingSink) -> None:
        before = _snapshot(board)
        assert not board.apply_move(E2, E4)
        assert _snapshot(board) == before
        [warning] = sink.of(Severity.WARNING)
        assert warning.fields["reason"] == "Not a legal move"

    def test_black_cannot_move_first(self, board: ChessBoard, sink: RecordingSink) -> None:
        before = _snapshot(board)
        assert not board.apply_move(E7, E6)
        assert _snapshot(board) == before
        [warning] = sink.of(Severity.WARNING)
        assert warning.fields["reason"] == "Not your turn"

    def test_empty_square(self, board: ChessBoard, sink: RecordingSink) -> None:
        assert not board.apply_move(E4, E5)
        assert sink.of(Severity.WARNING)[0].fields["reason"] == "No piece"

    def test_off_board(self, board: ChessBoard, sink: RecordingSink) -> None:
        assert not board.apply_move(E2, 64)
        assert not board.apply_move(Coord(-1, 0), E3)
        assert len(sink.of(Severity.WARNING)) == 2
        assert board.move_count == 0

    def test_null_move(self, board: ChessBoard, sink: RecordingSink) -> None:
        assert not board.apply_move(E2, E2)
        assert board.piece_at(E2) is not None

    def test_rejection_never_raises(self, board: ChessBoard) -> None:
        for from_sq, to_sq in ((E2, E5), (D8, D7), (A1, A5), (E1, E2)):
            assert board.apply_move(from_sq, to_sq) is False
        assert board.move_count == 0

    def test_alternating_turns(self, board: ChessBoard) -> None:
        assert board.apply_move(E2, E3)
        assert board.apply_move(E7, E6)
        assert board.turn == Color.WHITE
        assert board.move_count == 2

    def test_capture_discards_victim(self, sink: RecordingSink) -> None:
        b = ChessBoard.from_pieces(
            {
                E1: WHITE_KING,
                E8: BLACK_KING,
                A1: Piece(Color.WHITE, PieceType.ROOK),
                A5: Piece(Color.BLACK, PieceType.KNIGHT),
            },
            sink=sink,
        )
        victim = b.piece_id_at(A5)
        assert b.apply_move(A1, A5)
        assert b.piece_at(A5) == Piece(Color.WHITE, PieceType.ROOK)
        assert victim not in b.move_table.moves
        assert victim not in b.move_table.own_piece_threats
        assert len(b.piece_ids()) == 3
        assert sink.of(Severity.INFO)[-1].fields["captured"] == "black knight"


class TestUnrestrictedMode:
    def test_any_piece_any_square(self, sink: RecordingSink) -> None:
        b = ChessBoard(BoardMode.UNRESTRICTED, sink)
        assert b.apply_move(E7, E5)
        assert b.piece_at(E5) == Piece(Color.BLACK, PieceType.PAWN)
        assert b.turn == Color.BLACK
        assert b.move_count == 1

    def test_own_piece_square_still_rejected(self, sink: RecordingSink) -> None:
        b = ChessBoard(BoardMode.UNRESTRICTED, sink)
        assert not b.apply_move(D8, D7)
        assert sink.of(Severity.WARNING)[0].fields["reason"] == "Square holds own piece"


class TestConsistencyViolations:
    def test_missing_move_container_rejects(
        self, board: ChessBoard, sink: RecordingSink
    ) -> None:
        del board.move_table.moves[board.piece_id_at(E2)]
        assert not board.apply_move(E2, E3)
        assert board.piece_at(E2) is not None
        assert board.move_count == 0
        assert len(sink.of(Severity.CRITICAL)) == 1

    def test_generation_aborts_without_container(
        self, board: ChessBoard, sink: RecordingSink
    ) -> None:
        del board.move_table.moves[board.piece_id_at(A1)]
        board.generate_moves()
        [critical] = sink.of(Severity.CRITICAL)
        assert critical.fields["square"] == "a1"

    def test_missing_threat_container_self_heals(
        self, board: ChessBoard, sink: RecordingSink
    ) -> None:
        del board.move_table.own_piece_threats[board.piece_id_at(A1)]
        board.generate_moves()
        assert len(sink.of(Severity.ERROR)) == 1
        assert sink.of(Severity.CRITICAL) == []
        assert board.own_piece_threats(A1) == (8, 1)

    def test_unknown_piece_type_aborts_cycle(self, sink: RecordingSink) -> None:
        board = ChessBoard.from_pieces(
            {E1: WHITE_KING, E8: BLACK_KING, D4: Piece(Color.WHITE, 99)},
            sink=sink,
        )
        [critical] = sink.of(Severity.CRITICAL)
        assert critical.message == "Unknown piece type"
        assert critical.fields["square"] == "d4"
        assert board.pinned_pieces() == {}
        assert board.move_table.pinned == {}
        # e1 came before d4 and kept its raw list; pruning never ran
        assert board.legal_moves(E1) == (13, 11, 12, 5, 3)
        assert board.legal_moves(E8) == ()
