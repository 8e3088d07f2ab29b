"""Tests for FEN parsing and serialization."""

import pytest

from chessmate.core.board import Board
from chessmate.core.enums import Alliance, CastlingRights, PieceType
from chessmate.core.geometry import parse_coordinate
from chessmate.core.move_factory import MoveFactory
from chessmate.core.notation import STARTING_FEN, board_from_fen, board_to_fen


class TestFenParse:
    def test_starting_fen_is_standard_board(self) -> None:
        assert board_from_fen(STARTING_FEN) == Board.standard()

    def test_side_to_move(self) -> None:
        board = board_from_fen("4k3/8/8/8/8/8/8/4K3 b - - 0 1")
        assert board.move_maker == Alliance.BLACK

    def test_partial_castling_rights(self) -> None:
        board = board_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w Kq - 0 1")
        assert board.castling_rights == (
            CastlingRights.WHITE_KINGSIDE | CastlingRights.BLACK_QUEENSIDE
        )
        queen_rook = board.get_piece(parse_coordinate("a1"))
        assert queen_rook is not None and not queen_rook.first_move

    def test_en_passant_pawn(self) -> None:
        board = board_from_fen("4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 1")
        pawn = board.en_passant_pawn
        assert pawn is not None
        assert pawn.piece_type == PieceType.PAWN
        assert str(pawn.coordinate) == "d5"

    def test_clocks_are_optional(self) -> None:
        assert board_from_fen("4k3/8/8/8/8/8/8/4K3 w - -") == board_from_fen(
            "4k3/8/8/8/8/8/8/4K3 w - - 12 40"
        )

    @pytest.mark.parametrize(
        "fen",
        [
            "",
            "8/8/8/8/8/8/8/8 w",
            "4k3/8/8/8/8/8/8/4K3 x - - 0 1",
            "4k3/8/8/8/8/8/8 w - - 0 1",
            "4k3/8/8/8/8/8/8/4K2 w - - 0 1",
            "4k3/8/8/8/8/8/8/4K4 w - - 0 1",
            "4k3/8/8/8/8/8/8/4X3 w - - 0 1",
            "4k3/8/8/8/8/8/8/4K3 w KK - 0 1",
            "4k3/8/8/8/8/8/8/4K3 w K - 0 1",
            "4k3/8/8/8/8/8/8/4K3 w - d6 0 1",
            "4k3/8/8/3pP3/8/8/8/4K3 w - d3 0 1",
            "4k3/8/8/8/8/8/8/4K3 w - - -1 1",
            "4k3/8/8/8/8/8/8/4K3 w - - 0 0",
        ],
    )
    def test_malformed_fen_raises(self, fen: str) -> None:
        with pytest.raises(ValueError):
            board_from_fen(fen)


class TestFenSerialize:
    def test_standard_board(self) -> None:
        assert board_to_fen(Board.standard()) == STARTING_FEN

    def test_after_pawn_jump(self) -> None:
        board = Board.standard()
        move = MoveFactory.create_move(
            board, parse_coordinate("e2"), parse_coordinate("e4")
        )
        after = board.current_player.make_move(move).to_board
        fen = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"

        assert board_to_fen(after) == fen
        assert board_from_fen(fen) == after

    @pytest.mark.parametrize(
        "fen",
        [
            "r3k2r/8/8/8/8/8/8/R3K2R w Kq - 0 1",
            "4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 1",
            "7k/8/5KQ1/8/8/8/8/8 b - - 0 1",
        ],
    )
    def test_round_trip(self, fen: str) -> None:
        assert board_to_fen(board_from_fen(fen)) == fen
