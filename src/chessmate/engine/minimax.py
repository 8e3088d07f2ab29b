"""Full-width fixed-depth minimax search."""

from __future__ import annotations

import logging
from time import perf_counter
from typing import TYPE_CHECKING

from chessmate.core.enums import Alliance
from chessmate.engine.evaluator import BoardEvaluator, StandardBoardEvaluator

if TYPE_CHECKING:
    from chessmate.core.board import Board
    from chessmate.core.move import Move

_LOGGER = logging.getLogger(__name__)

_INF_SCORE = 1_000_000_000


class MiniMax:
    """Plain minimax to a fixed depth; White maximises, Black minimises.

    No pruning or move ordering: every legal move is searched, so results
    depend only on the board, the depth and the evaluator.  Among moves of
    equal value the one enumerated last is kept.
    """

    __slots__ = ("_evaluator", "_search_depth", "_boards_evaluated")

    def __init__(
        self, search_depth: int, evaluator: BoardEvaluator | None = None
    ) -> None:
        if search_depth < 1:
            raise ValueError("Search depth must be >= 1")
        self._search_depth = search_depth
        self._evaluator: BoardEvaluator = evaluator or StandardBoardEvaluator()
        self._boards_evaluated = 0

    @property
    def search_depth(self) -> int:
        return self._search_depth

    @property
    def boards_evaluated(self) -> int:
        """Leaf evaluations performed by the most recent :meth:`execute`."""
        return self._boards_evaluated

    def execute(self, board: Board) -> Move | None:
        start = perf_counter()
        self._boards_evaluated = 0

        player = board.current_player
        maximizing = player.alliance == Alliance.WHITE
        _LOGGER.info(
            "%s evaluating with depth %d", player.alliance, self._search_depth
        )

        best_move: Move | None = None
        highest = -_INF_SCORE
        lowest = _INF_SCORE
        for move in player.legal_moves:
            transition = player.make_move(move)
            if not transition.status.is_done:
                continue
            if maximizing:
                value = self.min(transition.to_board, self._search_depth - 1)
                if value >= highest:
                    highest = value
                    best_move = move
            else:
                value = self.max(transition.to_board, self._search_depth - 1)
                if value <= lowest:
                    lowest = value
                    best_move = move

        elapsed_ms = (perf_counter() - start) * 1000.0
        _LOGGER.info(
            "Search picked %s after %d evaluations in %.1f ms",
            best_move,
            self._boards_evaluated,
            elapsed_ms,
        )
        return best_move

    def min(self, board: Board, depth: int) -> int:
        if depth == 0 or self.is_end_game(board):
            return self._evaluate(board, depth)
        lowest = _INF_SCORE
        player = board.current_player
        for move in player.legal_moves:
            transition = player.make_move(move)
            if transition.status.is_done:
                value = self.max(transition.to_board, depth - 1)
                if value <= lowest:
                    lowest = value
        return lowest

    def max(self, board: Board, depth: int) -> int:
        if depth == 0 or self.is_end_game(board):
            return self._evaluate(board, depth)
        highest = -_INF_SCORE
        player = board.current_player
        for move in player.legal_moves:
            transition = player.make_move(move)
            if transition.status.is_done:
                value = self.min(transition.to_board, depth - 1)
                if value >= highest:
                    highest = value
        return highest

    @staticmethod
    def is_end_game(board: Board) -> bool:
        """Whether the side to move is checkmated or stalemated."""
        player = board.current_player
        return player.is_in_checkmate() or player.is_in_stalemate()

    def _evaluate(self, board: Board, depth: int) -> int:
        self._boards_evaluated += 1
        return self._evaluator.evaluate(board, depth)

    def __repr__(self) -> str:
        return f"MiniMax(depth={self._search_depth})"
