"""Tests for BoardStateManager."""

from chessmate.core.board import Board
from chessmate.core.geometry import parse_coordinate
from chessmate.core.move import Move
from chessmate.core.move_factory import MoveFactory
from chessmate.game.state import BoardState, BoardStateManager

KNIGHT_SHUFFLE = ("g1f3", "g8f6", "f3g1", "f6g8")


def _step(manager: BoardStateManager, text: str) -> Move:
    state = manager.get_last_board_state()
    assert state is not None
    board = state.board
    move = MoveFactory.create_move(
        board, parse_coordinate(text[:2]), parse_coordinate(text[2:])
    )
    transition = board.current_player.make_move(move)
    assert transition.status.is_done, text
    manager.update(transition.to_board, move)
    return move


class TestHistory:
    def test_seeded_with_initial_board(self) -> None:
        board = Board.standard()
        manager = BoardStateManager(board)
        assert manager.board_history_size() == 1
        assert manager.get_last_board_state() == BoardState(board, None)
        assert manager.get_last_move() is None

    def test_empty_manager(self) -> None:
        manager = BoardStateManager()
        assert manager.board_history_size() == 0
        assert manager.get_last_board_state() is None
        assert manager.get_last_move() is None
        assert manager.undo() is None
        assert not manager.is_draw()
        assert manager.repetition_count() == 0

    def test_update_appends(self) -> None:
        manager = BoardStateManager(Board.standard())
        move = _step(manager, "e2e4")

        assert manager.board_history_size() == 2
        assert manager.get_last_move() == move
        state = manager.get_last_board_state()
        assert state is not None and state.board == move.execute()
        assert manager.moves() == [move]

    def test_undo_pops_one_entry(self) -> None:
        manager = BoardStateManager(Board.standard())
        human = _step(manager, "e2e4")
        reply = _step(manager, "e7e5")

        assert manager.undo() == reply
        assert manager.get_last_move() == human
        assert manager.undo() == human
        assert manager.board_history_size() == 1
        state = manager.get_last_board_state()
        assert state is not None and state.board == Board.standard()

    def test_clear(self) -> None:
        manager = BoardStateManager(Board.standard())
        _step(manager, "e2e4")

        manager.clear()
        assert manager.board_history_size() == 0

        manager.clear(Board.standard())
        assert len(manager) == 1
        assert manager.moves() == []


class TestRepetition:
    def test_threefold_repetition_is_draw(self) -> None:
        manager = BoardStateManager(Board.standard())
        for text in KNIGHT_SHUFFLE:
            _step(manager, text)
        assert manager.repetition_count() == 2
        assert not manager.is_draw()

        for text in KNIGHT_SHUFFLE[:3]:
            _step(manager, text)
        assert not manager.is_draw()

        _step(manager, KNIGHT_SHUFFLE[3])
        assert manager.repetition_count() == 3
        assert manager.is_draw()

    def test_undo_reverts_draw(self) -> None:
        manager = BoardStateManager(Board.standard())
        for text in KNIGHT_SHUFFLE * 2:
            _step(manager, text)
        assert manager.is_draw()

        manager.undo()
        assert not manager.is_draw()

    def test_different_side_to_move_is_not_repetition(self) -> None:
        manager = BoardStateManager(Board.standard())
        # Same placement twice, but with a different side to move.
        for text in ("g1f3", "g8f6", "f3g1", "f6g8", "b1c3", "b8c6", "c3b1"):
            _step(manager, text)
        assert manager.repetition_count() == 1
