"""Tests for Qt engine bridge worker."""

from __future__ import annotations

import pytest
from PyQt6.QtTest import QSignalSpy

from chessmate.core.board import Board
from chessmate.core.move import Move
from chessmate.core.notation import board_from_fen
from chessmate.engine.minimax import MiniMax
from chessmate.engine.qt_bridge import EngineWorker

pytestmark = pytest.mark.usefixtures("qapp")


class _CancellingStrategy:
    def __init__(self, worker: EngineWorker) -> None:
        self._worker = worker

    def execute(self, board: Board) -> Move | None:
        self._worker.cancel()
        return board.current_player.legal_moves[0]


class _NoMoveStrategy:
    def execute(self, board: Board) -> Move | None:
        del board
        return None


class _FailingStrategy:
    def execute(self, board: Board) -> Move | None:
        del board
        raise RuntimeError("boom")


class TestEngineWorker:
    def test_emits_best_move(self) -> None:
        board = board_from_fen("6k1/5ppp/8/8/8/8/8/R5K1 w - - 0 1")
        worker = EngineWorker(search_depth=1)

        best_moves = QSignalSpy(worker.best_move_ready)
        errors = QSignalSpy(worker.search_error)
        received: list[Move] = []
        worker.best_move_ready.connect(lambda _id, move: received.append(move))

        worker.request_move(board, 3)

        assert len(errors) == 0
        assert len(best_moves) == 1
        assert best_moves[0][0] == 3
        assert [str(m) for m in received] == ["Ra8"]

    def test_emits_cancelled_when_search_is_cancelled(self) -> None:
        worker = EngineWorker()
        worker._strategy = _CancellingStrategy(worker)

        cancelled = QSignalSpy(worker.search_cancelled)
        best_moves = QSignalSpy(worker.best_move_ready)

        worker.request_move(Board.standard(), 7)

        assert len(cancelled) == 1
        assert cancelled[0][0] == 7
        assert len(best_moves) == 0

    def test_cancel_is_cleared_for_next_request(self) -> None:
        worker = EngineWorker()
        worker._strategy = _CancellingStrategy(worker)
        worker.request_move(Board.standard(), 1)

        worker._strategy = MiniMax(1)
        best_moves = QSignalSpy(worker.best_move_ready)
        worker.request_move(Board.standard(), 2)

        assert len(best_moves) == 1
        assert best_moves[0][0] == 2

    def test_emits_no_move_when_search_returns_none(self) -> None:
        worker = EngineWorker()
        worker._strategy = _NoMoveStrategy()

        no_move = QSignalSpy(worker.search_no_move)
        best_moves = QSignalSpy(worker.best_move_ready)
        errors = QSignalSpy(worker.search_error)

        worker.request_move(Board.standard(), 11)

        assert len(no_move) == 1
        assert no_move[0][0] == 11
        assert len(best_moves) == 0
        assert len(errors) == 0

    def test_emits_error_when_search_raises(self) -> None:
        worker = EngineWorker()
        worker._strategy = _FailingStrategy()

        errors = QSignalSpy(worker.search_error)
        worker.request_move(Board.standard(), 5)

        assert len(errors) == 1
        assert errors[0][0] == 5
        assert errors[0][1] == "boom"

    def test_rejects_non_board(self) -> None:
        worker = EngineWorker()
        errors = QSignalSpy(worker.search_error)

        worker.request_move("not a board", 9)

        assert len(errors) == 1
        assert errors[0][0] == 9

    def test_set_depth_applies_to_next_search(self) -> None:
        worker = EngineWorker(search_depth=3)
        worker.set_depth(1)
        assert isinstance(worker._strategy, MiniMax)
        assert worker._strategy.search_depth == 1

    @pytest.mark.parametrize("depth", [0, -2])
    def test_set_depth_ignores_invalid_depth(self, depth: int) -> None:
        worker = EngineWorker(search_depth=2)
        worker.set_depth(depth)
        assert isinstance(worker._strategy, MiniMax)
        assert worker._strategy.search_depth == 2
