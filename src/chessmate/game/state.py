"""Board history: the ordered record of (board, move) entries of one game."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chessmate.core.board import Board
    from chessmate.core.move import Move

_LOGGER = logging.getLogger(__name__)

REPETITION_LIMIT = 3


@dataclass(frozen=True, slots=True)
class BoardState:
    """A single entry in the history: a board and the move that produced it."""

    board: Board
    move: Move | None = None


class BoardStateManager:
    """Append-only history with undo and threefold-repetition detection.

    The current board is the last entry's board.  Undo pops exactly one
    entry; reverting a human move together with the engine reply is the
    caller's business (two pops).
    """

    __slots__ = ("_history",)

    def __init__(self, initial_board: Board | None = None) -> None:
        self._history: list[BoardState] = []
        if initial_board is not None:
            self._history.append(BoardState(initial_board))

    def update(self, board: Board, move: Move | None) -> None:
        """Record *board*, reached by playing *move*."""
        self._history.append(BoardState(board, move))
        _LOGGER.debug("History +%s (%d entries)", move, len(self._history))

    def get_last_move(self) -> Move | None:
        if not self._history:
            return None
        return self._history[-1].move

    def get_last_board_state(self) -> BoardState | None:
        if not self._history:
            return None
        return self._history[-1]

    def undo(self) -> Move | None:
        """Drop the most recent entry and return its move (None if empty)."""
        if not self._history:
            return None
        state = self._history.pop()
        _LOGGER.debug("History -%s (%d entries)", state.move, len(self._history))
        return state.move

    def is_draw(self) -> bool:
        """Whether any position has occurred three or more times."""
        if not self._history:
            return False
        counts = Counter(state.board.position_key for state in self._history)
        return max(counts.values()) >= REPETITION_LIMIT

    def repetition_count(self) -> int:
        """How often the current position has occurred (0 if empty)."""
        if not self._history:
            return 0
        key = self._history[-1].board.position_key
        return sum(1 for state in self._history if state.board.position_key == key)

    def board_history_size(self) -> int:
        return len(self._history)

    def moves(self) -> list[Move]:
        """Moves played so far, oldest first."""
        return [state.move for state in self._history if state.move is not None]

    def clear(self, initial_board: Board | None = None) -> None:
        """Forget the history, optionally reseeding it with *initial_board*."""
        self._history.clear()
        if initial_board is not None:
            self._history.append(BoardState(initial_board))
        _LOGGER.debug("History cleared")

    def __len__(self) -> int:
        return len(self._history)
