"""Game layer: history, turn orchestration and observer interfaces."""

from chessmate.game.controller import GameController, GameEvents
from chessmate.game.interfaces import GameEndReason, GameObserver, GamePhase
from chessmate.game.state import BoardState, BoardStateManager

__all__ = [
    "BoardState",
    "BoardStateManager",
    "GameController",
    "GameEndReason",
    "GameEvents",
    "GameObserver",
    "GamePhase",
]
