"""Qt bridge to run the minimax search in a worker thread."""

from __future__ import annotations

import logging
import threading

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from chessmate.core.board import Board
from chessmate.engine.minimax import MiniMax
from chessmate.engine.search import MoveStrategy

_LOGGER = logging.getLogger(__name__)


class EngineWorker(QObject):
    """Thread-affine worker that computes engine moves on demand.

    Cancellation does not interrupt a running search; the result is
    discarded and ``search_cancelled`` is emitted instead.
    """

    best_move_ready = pyqtSignal(int, object)
    search_cancelled = pyqtSignal(int)
    search_no_move = pyqtSignal(int)
    search_error = pyqtSignal(int, str)

    __slots__ = ("_cancel_event", "_strategy")

    def __init__(self, *, search_depth: int = 3) -> None:
        super().__init__()
        self._strategy: MoveStrategy = MiniMax(search_depth)
        self._cancel_event = threading.Event()

    @pyqtSlot(object, int)
    def request_move(self, board_obj: object, request_id: int) -> None:
        """Search for the best move on *board_obj* and emit the result."""
        if not isinstance(board_obj, Board):
            self.search_error.emit(request_id, "Engine received invalid board")
            return

        self._cancel_event.clear()
        try:
            move = self._strategy.execute(board_obj)
        except Exception as exc:
            _LOGGER.warning("Search request %d failed: %s", request_id, exc)
            self.search_error.emit(request_id, str(exc))
            return

        if self._cancel_event.is_set():
            self.search_cancelled.emit(request_id)
            return

        if move is None:
            self.search_no_move.emit(request_id)
            return

        self.best_move_ready.emit(request_id, move)

    @pyqtSlot()
    def cancel(self) -> None:
        """Request cancellation of the current search."""
        self._cancel_event.set()

    @pyqtSlot(int)
    def set_depth(self, search_depth: int) -> None:
        """Update the search depth (takes effect on the next search).

        Depths below 1 are logged and ignored; the current strategy is kept.
        """
        if search_depth < 1:
            _LOGGER.warning("Ignoring invalid search depth %d", search_depth)
            return
        self._strategy = MiniMax(search_depth)
