"""Notation package: FEN parsing and serialization."""

from chessmate.core.notation.fen import STARTING_FEN, board_from_fen, board_to_fen

__all__ = [
    "STARTING_FEN",
    "board_from_fen",
    "board_to_fen",
]
