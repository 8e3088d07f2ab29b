"""Shared engine search protocol."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from chessmate.core.board import Board
    from chessmate.core.move import Move


class MoveStrategy(Protocol):
    """Protocol for move pickers used by the game layer."""

    def execute(self, board: Board) -> Move | None:
        """Best move for the side to move, or None when it has no legal move."""
        ...
