"""Static board evaluation.

Scores are White-relative: positive favours White, negative favours Black.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from chessmate.core.enums import Alliance, PieceType

if TYPE_CHECKING:
    from chessmate.core.board import Board
    from chessmate.core.piece import Piece
    from chessmate.core.player import Player

CHECK_BONUS = 50
CHECKMATE_BONUS = 10_000
DEPTH_BONUS_FACTOR = 100

PIECE_VALUES: dict[PieceType, int] = {
    PieceType.PAWN: 100,
    PieceType.KNIGHT: 320,
    PieceType.BISHOP: 330,
    PieceType.ROOK: 500,
    PieceType.QUEEN: 900,
    PieceType.KING: 0,
}


class BoardEvaluator(Protocol):
    """Protocol for static evaluators used by the search."""

    def evaluate(self, board: Board, depth: int) -> int: ...


class StandardBoardEvaluator:
    """Material, placement, mobility and king-safety evaluator.

    A side's score is the sum of

    * material (:data:`PIECE_VALUES`),
    * a piece-square bonus rewarding central and advanced pieces,
    * mobility (number of legal-move candidates),
    * :data:`CHECK_BONUS` when the opponent is in check,
    * :data:`CHECKMATE_BONUS` scaled by the remaining *depth* when the
      opponent is mated, so a mate found earlier in the search outweighs
      a later one.

    The evaluator is pure: the same board and depth always give the same
    score.
    """

    __slots__ = ()

    def evaluate(self, board: Board, depth: int) -> int:
        return self._score(board.white_player, depth) - self._score(
            board.black_player, depth
        )

    def _score(self, player: Player, depth: int) -> int:
        score = 0
        for piece in player.active_pieces:
            score += PIECE_VALUES[piece.piece_type]
            score += _piece_square_bonus(piece)
        score += len(player.legal_moves)

        opponent = player.opponent
        if opponent.is_in_check():
            score += CHECK_BONUS
            if opponent.is_in_checkmate():
                score += CHECKMATE_BONUS * _depth_bonus(depth)
        return score


def _depth_bonus(depth: int) -> int:
    return 1 if depth == 0 else DEPTH_BONUS_FACTOR * depth


def _piece_square_bonus(piece: Piece) -> int:
    file_idx = piece.coordinate.x
    rank_idx = piece.coordinate.y
    if piece.alliance == Alliance.BLACK:
        rank_idx = 7 - rank_idx

    center_dist = abs(file_idx - 3) + abs(rank_idx - 3)

    match piece.piece_type:
        case PieceType.PAWN:
            return rank_idx * 12 - abs(file_idx - 3) * 2
        case PieceType.KNIGHT:
            return 28 - center_dist * 8
        case PieceType.BISHOP:
            return 22 - center_dist * 5 + rank_idx * 2
        case PieceType.ROOK:
            return 10 + rank_idx * 3 - abs(file_idx - 3)
        case PieceType.QUEEN:
            return 6 - center_dist * 2

    # King: favour staying home.
    if rank_idx <= 1:
        return 18 - abs(file_idx - 4) * 2
    return -rank_idx * 8
