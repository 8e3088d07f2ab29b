"""Chess engine package: evaluation, minimax search and Qt worker bridge."""

from chessmate.engine.evaluator import BoardEvaluator, StandardBoardEvaluator
from chessmate.engine.minimax import MiniMax
from chessmate.engine.qt_bridge import EngineWorker
from chessmate.engine.search import MoveStrategy

__all__ = [
    "BoardEvaluator",
    "EngineWorker",
    "MiniMax",
    "MoveStrategy",
    "StandardBoardEvaluator",
]
