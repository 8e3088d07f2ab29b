"""Abstract interfaces for the game layer.

The controller talks to presentation (sounds, images, score storage) only
through :class:`GameObserver`, so the engine has no knowledge of it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chessmate.core.board import Board
    from chessmate.core.enums import GameResult
    from chessmate.core.move import Move


# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states for a chess game."""

    NOT_STARTED = auto()
    AWAITING_MOVE = auto()
    GAME_OVER = auto()


class GameEndReason(IntEnum):
    """Why a finished game ended."""

    CHECKMATE = auto()
    STALEMATE = auto()
    THREEFOLD_REPETITION = auto()


# ── Abstract interfaces ─────────────────────────────────────────────────────


class GameObserver(ABC):
    """Listener for game events (move sounds, board redraws, score keeping)."""

    @abstractmethod
    def on_move(self, move: Move, board: Board) -> None:
        """*move* was applied; *board* is the resulting position."""

    @abstractmethod
    def on_undo(self, board: Board) -> None:
        """History was rolled back (or reset for a new game) to *board*."""

    @abstractmethod
    def on_game_over(self, result: GameResult, reason: GameEndReason) -> None:
        """The game finished with *result*."""
