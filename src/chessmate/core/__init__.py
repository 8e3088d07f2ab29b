"""Core domain layer: pure chess rules with zero external dependencies.

Quick start::

    from chessmate.core import Board, MoveFactory, parse_coordinate

    board = Board.standard()
    move = MoveFactory.create_move(
        board, parse_coordinate("e2"), parse_coordinate("e4")
    )
    transition = board.current_player.make_move(move)
    print(transition.status, transition.to_board)
"""

from chessmate.core.board import Board, BoardBuilder, Tile
from chessmate.core.enums import (
    Alliance,
    CastlingRights,
    GameResult,
    MoveKind,
    MoveStatus,
    PieceType,
)
from chessmate.core.geometry import (
    ALL_COORDINATES,
    BOARD_HEIGHT,
    BOARD_WIDTH,
    Coordinate,
    coordinate_name,
    is_valid_coordinate,
    parse_coordinate,
)
from chessmate.core.move import NULL_MOVE, Move, NullMoveError
from chessmate.core.move_factory import MoveFactory
from chessmate.core.notation import STARTING_FEN, board_from_fen, board_to_fen
from chessmate.core.piece import Piece
from chessmate.core.player import MoveTransition, Player

__all__ = [
    # Enums / flags
    "Alliance",
    "CastlingRights",
    "GameResult",
    "MoveKind",
    "MoveStatus",
    "PieceType",
    # Geometry
    "ALL_COORDINATES",
    "BOARD_HEIGHT",
    "BOARD_WIDTH",
    "Coordinate",
    "coordinate_name",
    "is_valid_coordinate",
    "parse_coordinate",
    # Domain objects
    "Board",
    "BoardBuilder",
    "Move",
    "MoveFactory",
    "MoveTransition",
    "NULL_MOVE",
    "NullMoveError",
    "Piece",
    "Player",
    "Tile",
    # Notation
    "STARTING_FEN",
    "board_from_fen",
    "board_to_fen",
]
