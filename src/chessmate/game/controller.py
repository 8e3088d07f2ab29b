"""GameController: the central orchestrator of a chess game.

Coordinates: Board, Player legality, BoardStateManager, the AI strategy.
Emits events via simple callbacks so observers / tests can subscribe.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from dataclasses import dataclass, field

from chessmate.config import GameSettings
from chessmate.core.board import Board
from chessmate.core.enums import Alliance, GameResult, MoveStatus, PieceType
from chessmate.core.geometry import Coordinate
from chessmate.core.move import Move
from chessmate.core.move_factory import MoveFactory
from chessmate.core.notation import board_from_fen
from chessmate.core.piece import Piece
from chessmate.core.player import MoveTransition
from chessmate.engine.minimax import MiniMax
from chessmate.engine.search import MoveStrategy
from chessmate.game.interfaces import GameEndReason, GameObserver, GamePhase
from chessmate.game.state import BoardStateManager

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[Move, Board], None]  # move, board after it
UndoCallback = Callable[[Board], None]
GameOverCallback = Callable[[GameResult, GameEndReason], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_undo: list[UndoCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController:
    """Orchestrates a full chess game: validates moves, asks the AI for
    replies, keeps history, detects the end of the game, notifies listeners.

    Thread-safety: methods are designed to be called from a single thread.
    :meth:`play_ai_move` searches synchronously; callers that want a
    responsive UI run the search in an ``EngineWorker`` and hand the result
    to :meth:`apply_move` on the main thread.
    """

    __slots__ = (
        "_settings",
        "_strategy",
        "_history",
        "_ai_sides",
        "_phase",
        "_result",
        "_end_reason",
        "events",
    )

    def __init__(
        self,
        settings: GameSettings | None = None,
        strategy: MoveStrategy | None = None,
    ) -> None:
        self._settings = settings if settings is not None else GameSettings()
        self._strategy: MoveStrategy = (
            strategy if strategy is not None else MiniMax(self._settings.search_depth)
        )
        self._history = BoardStateManager()
        self._ai_sides: frozenset[Alliance] = frozenset()
        self._phase = GamePhase.NOT_STARTED
        self._result = GameResult.IN_PROGRESS
        self._end_reason: GameEndReason | None = None
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def settings(self) -> GameSettings:
        return self._settings

    @property
    def history(self) -> BoardStateManager:
        return self._history

    @property
    def board(self) -> Board:
        state = self._history.get_last_board_state()
        if state is None:
            raise RuntimeError("No game in progress; call new_game() first")
        return state.board

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def result(self) -> GameResult:
        return self._result

    @property
    def end_reason(self) -> GameEndReason | None:
        return self._end_reason

    @property
    def is_game_over(self) -> bool:
        return self._phase == GamePhase.GAME_OVER

    @property
    def is_ai_turn(self) -> bool:
        return self.is_ai(self.board.move_maker)

    def is_ai(self, alliance: Alliance) -> bool:
        return alliance in self._ai_sides

    @property
    def captured_pieces(self) -> list[Piece]:
        """Pieces taken so far, in capture order."""
        return [
            move.attacked_piece
            for move in self._history.moves()
            if move.attacked_piece is not None
        ]

    # ── Observers ────────────────────────────────────────────────────────

    def add_observer(self, observer: GameObserver) -> None:
        self.events.on_move.append(observer.on_move)
        self.events.on_undo.append(observer.on_undo)
        self.events.on_game_over.append(observer.on_game_over)

    def remove_observer(self, observer: GameObserver) -> None:
        self.events.on_move.remove(observer.on_move)
        self.events.on_undo.remove(observer.on_undo)
        self.events.on_game_over.remove(observer.on_game_over)

    # ── Game lifecycle ───────────────────────────────────────────────────

    def new_game(
        self,
        white_is_ai: bool | None = None,
        black_is_ai: bool | None = None,
        random_layout: bool | None = None,
        seed: int | None = None,
        fen: str | None = None,
    ) -> Board:
        """Set up a new game; unspecified options come from the settings.

        *fen* starts from an arbitrary position instead of a layout.
        """
        settings = self._settings
        if white_is_ai is None:
            white_is_ai = settings.white_is_ai
        if black_is_ai is None:
            black_is_ai = settings.black_is_ai
        if random_layout is None:
            random_layout = settings.random_layout
        if seed is None:
            seed = settings.random_seed

        if fen is not None:
            board = board_from_fen(fen)
        elif random_layout:
            board = Board.randomized(random.Random(seed))
        else:
            board = Board.standard()

        ai_sides = set()
        if white_is_ai:
            ai_sides.add(Alliance.WHITE)
        if black_is_ai:
            ai_sides.add(Alliance.BLACK)
        self._ai_sides = frozenset(ai_sides)

        self._history.clear(board)
        self._phase = GamePhase.AWAITING_MOVE
        self._result = GameResult.IN_PROGRESS
        self._end_reason = None
        _LOGGER.info(
            "New game (white ai=%s, black ai=%s, random=%s)",
            white_is_ai,
            black_is_ai,
            random_layout,
        )
        self._emit_undo(board)
        self._check_game_over()
        return board

    def submit_move(
        self,
        current: Coordinate,
        destination: Coordinate,
        promotion: PieceType | None = None,
    ) -> MoveTransition:
        """Play the move of the side to move from *current* to *destination*.

        *promotion* picks the piece a pawn turns into on the last rank
        (queen when omitted).

        Raises:
            ValueError: if *promotion* is not a piece a pawn can become.
        """
        board = self.board
        move = MoveFactory.create_move(board, current, destination)
        if promotion is not None and move.is_promotion:
            for candidate in MoveFactory.get_promotion_moves(
                board, current, destination
            ):
                if candidate.promotion_type == promotion:
                    move = candidate
                    break
            else:
                raise ValueError(f"Cannot promote to {promotion.name}")
        return self.apply_move(move)

    def apply_move(self, move: Move) -> MoveTransition:
        """Validate *move* against the current board and record it."""
        board = self.board
        if self.is_game_over or move.is_null:
            return MoveTransition(board, board, move, MoveStatus.ILLEGAL_MOVE)

        transition = board.current_player.make_move(move)
        if not transition.status.is_done:
            _LOGGER.debug("Rejected %s: %s", move, transition.status.name)
            return transition

        self._history.update(transition.to_board, move)
        self._emit_move(move, transition.to_board)
        self._check_game_over()
        return transition

    def play_ai_move(self) -> Move | None:
        """Let the strategy pick and play a move for the side to move."""
        if self.is_game_over:
            return None
        move = self._strategy.execute(self.board)
        if move is None:
            _LOGGER.warning("Strategy found no move for %s", self.board.move_maker)
            return None
        transition = self.apply_move(move)
        if not transition.status.is_done:
            _LOGGER.warning("Strategy move %s was rejected", move)
            return None
        return move

    def hint(self) -> Move | None:
        """Best move for the side to move, without playing it."""
        if self.is_game_over:
            return None
        return self._strategy.execute(self.board)

    @property
    def can_undo(self) -> bool:
        return self._history.board_history_size() > self._undo_depth()

    def undo(self) -> bool:
        """Take back the last human move (and the AI reply that followed it).

        Returns False when there is nothing to take back.
        """
        if not self.can_undo:
            return False
        for _ in range(self._undo_depth()):
            self._history.undo()

        self._phase = GamePhase.AWAITING_MOVE
        self._result = GameResult.IN_PROGRESS
        self._end_reason = None
        self._emit_undo(self.board)
        return True

    # ── Internal helpers ─────────────────────────────────────────────────

    def _undo_depth(self) -> int:
        if self._ai_sides and not self.is_ai_turn:
            return 2
        return 1

    def _check_game_over(self) -> None:
        player = self.board.current_player
        if player.is_in_checkmate():
            if player.alliance == Alliance.WHITE:
                result = GameResult.BLACK_WINS
            else:
                result = GameResult.WHITE_WINS
            self._finish(result, GameEndReason.CHECKMATE)
        elif player.is_in_stalemate():
            self._finish(GameResult.DRAW, GameEndReason.STALEMATE)
        elif self._history.is_draw():
            self._finish(GameResult.DRAW, GameEndReason.THREEFOLD_REPETITION)

    def _finish(self, result: GameResult, reason: GameEndReason) -> None:
        self._phase = GamePhase.GAME_OVER
        self._result = result
        self._end_reason = reason
        _LOGGER.info("Game over: %s by %s", result.name, reason.name)
        for cb in self.events.on_game_over:
            cb(result, reason)

    def _emit_move(self, move: Move, board: Board) -> None:
        for cb in self.events.on_move:
            cb(move, board)

    def _emit_undo(self, board: Board) -> None:
        for cb in self.events.on_undo:
            cb(board)
