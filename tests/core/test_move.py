"""Tests for Move execution and display."""

import pytest

from chessmate.core.board import Board
from chessmate.core.enums import Alliance, MoveKind, PieceType
from chessmate.core.geometry import parse_coordinate
from chessmate.core.move import NULL_MOVE, Move, NullMoveError
from chessmate.core.move_factory import MoveFactory
from chessmate.core.notation import STARTING_FEN, board_from_fen


def _move(board: Board, current: str, destination: str) -> Move:
    move = MoveFactory.create_move(
        board, parse_coordinate(current), parse_coordinate(destination)
    )
    assert not move.is_null, f"{current}{destination} not found"
    return move


class TestExecute:
    def test_originating_board_is_untouched(self) -> None:
        board = Board.standard()
        snapshot = dict(board.pieces)
        after = _move(board, "e2", "e4").execute()

        assert dict(board.pieces) == snapshot
        assert board.move_maker == Alliance.WHITE
        assert board.en_passant_pawn is None
        assert after is not board

    def test_quiet_move_result(self) -> None:
        after = _move(Board.standard(), "g1", "f3").execute()
        knight = after.get_piece(parse_coordinate("f3"))

        assert after.get_piece(parse_coordinate("g1")) is None
        assert knight is not None
        assert knight.piece_type == PieceType.KNIGHT
        assert not knight.first_move
        assert after.move_maker == Alliance.BLACK
        assert len(after.pieces) == 32

    def test_pawn_jump_records_en_passant_pawn(self) -> None:
        after = _move(Board.standard(), "e2", "e4").execute()
        assert after.en_passant_pawn == after.get_piece(parse_coordinate("e4"))

        reply = _move(after, "g8", "f6").execute()
        assert reply.en_passant_pawn is None

    def test_capture_removes_captured_piece(self) -> None:
        board = board_from_fen("4k3/8/8/3p4/4P3/8/8/4K3 w - - 0 1")
        after = _move(board, "e4", "d5").execute()
        pawn = after.get_piece(parse_coordinate("d5"))

        assert pawn is not None and pawn.alliance == Alliance.WHITE
        assert len(after.active_pieces(Alliance.BLACK)) == 1

    def test_en_passant_removes_passed_pawn(self) -> None:
        board = board_from_fen("4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 1")
        move = _move(board, "e5", "d6")
        after = move.execute()

        assert move.kind == MoveKind.PAWN_EN_PASSANT
        assert after.get_piece(parse_coordinate("d5")) is None
        assert after.get_piece(parse_coordinate("e5")) is None
        assert after.get_piece(parse_coordinate("d6")) is not None
        assert after.active_pieces(Alliance.BLACK) == (
            after.get_piece(parse_coordinate("e8")),
        )

    def test_king_side_castle_relocates_rook(self) -> None:
        board = board_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        move = _move(board, "e1", "g1")
        after = move.execute()
        rook = after.get_piece(parse_coordinate("f1"))

        assert move.kind == MoveKind.KING_SIDE_CASTLE
        assert after.get_piece(parse_coordinate("e1")) is None
        assert after.get_piece(parse_coordinate("h1")) is None
        assert rook is not None and rook.piece_type == PieceType.ROOK
        assert not rook.first_move

    def test_queen_side_castle_relocates_rook(self) -> None:
        board = board_from_fen("r3k2r/8/8/8/8/8/8/R3K2R b KQkq - 0 1")
        after = _move(board, "e8", "c8").execute()
        king = after.get_piece(parse_coordinate("c8"))
        rook = after.get_piece(parse_coordinate("d8"))

        assert king is not None and king.piece_type == PieceType.KING
        assert rook is not None and rook.piece_type == PieceType.ROOK
        assert after.get_piece(parse_coordinate("a8")) is None
        assert after.move_maker == Alliance.WHITE

    def test_promotion_replaces_pawn(self) -> None:
        board = board_from_fen("4k3/P7/8/8/8/8/8/4K3 w - - 0 1")
        knight_promotion = MoveFactory.get_promotion_moves(
            board, parse_coordinate("a7"), parse_coordinate("a8")
        )[-1]
        after = knight_promotion.execute()
        promoted = after.get_piece(parse_coordinate("a8"))

        assert promoted is not None
        assert promoted.piece_type == PieceType.KNIGHT
        assert promoted.alliance == Alliance.WHITE
        assert not promoted.first_move
        assert after.get_piece(parse_coordinate("a7")) is None
        assert after.move_maker == Alliance.BLACK

    def test_null_move_raises(self) -> None:
        with pytest.raises(NullMoveError):
            NULL_MOVE.execute()


class TestMoveValue:
    def test_first_move_flag_captured_at_construction(self) -> None:
        board = Board.standard()
        assert _move(board, "e2", "e4").is_first_move

        after = _move(board, "e2", "e3").execute()
        after = _move(after, "a7", "a6").execute()
        assert not _move(after, "e3", "e4").is_first_move

    def test_structural_equality(self) -> None:
        first = Board.standard().current_player.legal_moves
        second = Board.standard().current_player.legal_moves
        assert first == second
        assert hash(first[0]) == hash(second[0])

    def test_invalid_promotion_type(self) -> None:
        board = board_from_fen("4k3/P7/8/8/8/8/8/4K3 w - - 0 1")
        base = Move.pawn(
            board,
            board.get_piece(parse_coordinate("a7")),
            parse_coordinate("a8"),
        )
        with pytest.raises(ValueError):
            Move.promotion(base, PieceType.KING)

    def test_null_move_sentinel(self) -> None:
        assert NULL_MOVE.is_null
        assert NULL_MOVE.moved_piece is None
        assert str(NULL_MOVE) == "--"


class TestDisplay:
    @pytest.mark.parametrize(
        ("fen", "current", "destination", "text"),
        [
            (STARTING_FEN, "g1", "f3", "Nf3"),
            (STARTING_FEN, "e2", "e4", "e4"),
            ("4k3/8/8/3p4/4P3/8/8/4K3 w - - 0 1", "e4", "d5", "exd5"),
            ("4k3/8/8/8/8/5p2/8/4KN2 w - - 0 1", "f1", "e3", "Ne3"),
            ("4k3/8/8/8/8/3p4/8/2N1K3 w - - 0 1", "c1", "d3", "Nxd3"),
            ("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1", "e1", "g1", "0-0"),
            ("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1", "e1", "c1", "0-0-0"),
            ("4k3/P7/8/8/8/8/8/4K3 w - - 0 1", "a7", "a8", "a8=Q"),
        ],
    )
    def test_short_algebraic(
        self, fen: str, current: str, destination: str, text: str
    ) -> None:
        assert str(_move(board_from_fen(fen), current, destination)) == text

    def test_uci(self) -> None:
        board = board_from_fen("4k3/P7/8/8/8/8/8/4K3 w - - 0 1")
        assert _move(Board.standard(), "e2", "e4").uci == "e2e4"
        assert _move(board, "a7", "a8").uci == "a7a8q"
