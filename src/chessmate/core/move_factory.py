"""Resolve user-chosen coordinates against the legal moves of a board."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessmate.core.move import NULL_MOVE, Move

if TYPE_CHECKING:
    from chessmate.core.board import Board
    from chessmate.core.geometry import Coordinate


class MoveFactory:
    """Static lookups from a ``(from, to)`` pair to a concrete :class:`Move`."""

    @staticmethod
    def create_move(
        board: Board, current_coordinate: Coordinate, destination: Coordinate
    ) -> Move:
        """First legal move of the side to move matching the pair, else ``NULL_MOVE``.

        On a promotion square this is the queen promotion; use
        :meth:`get_promotion_moves` to offer the other choices.
        """
        for move in board.current_player.legal_moves:
            if (
                move.current_coordinate == current_coordinate
                and move.destination == destination
            ):
                return move
        return NULL_MOVE

    @staticmethod
    def get_promotion_moves(
        board: Board, current_coordinate: Coordinate, destination: Coordinate
    ) -> list[Move]:
        """Every promotion variant for the pair (empty if the pair is no promotion)."""
        return [
            move
            for move in board.current_player.legal_moves
            if move.is_promotion
            and move.current_coordinate == current_coordinate
            and move.destination == destination
        ]
