"""Player - one side's view of a board: legal moves, check and castling."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from chessmate.core.enums import Alliance, MoveStatus, PieceType
from chessmate.core.geometry import (
    KING_HOME_FILE,
    KING_SIDE_ROOK_FILE,
    QUEEN_SIDE_ROOK_FILE,
    Coordinate,
)
from chessmate.core.move import Move

if TYPE_CHECKING:
    from chessmate.core.board import Board
    from chessmate.core.piece import Piece


@dataclass(frozen=True, slots=True)
class MoveTransition:
    """Result of attempting a move.

    ``to_board`` is the board after the move when ``status`` is DONE and
    the unchanged ``from_board`` otherwise.
    """

    from_board: Board
    to_board: Board
    move: Move
    status: MoveStatus

    @property
    def transition_board(self) -> Board:
        return self.to_board


class Player:
    """Legality and game-status queries for *alliance* on *board*.

    Players are derived from (and cached on) a board; they hold no state of
    their own beyond memoised results.
    """

    __slots__ = (
        "_board",
        "_alliance",
        "_legal_moves",
        "_legal_move_set",
        "_in_check",
        "_has_escape_moves",
    )

    def __init__(self, board: Board, alliance: Alliance) -> None:
        self._board = board
        self._alliance = alliance
        self._legal_moves: tuple[Move, ...] | None = None
        self._legal_move_set: frozenset[Move] | None = None
        self._in_check: bool | None = None
        self._has_escape_moves: bool | None = None

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def board(self) -> Board:
        return self._board

    @property
    def alliance(self) -> Alliance:
        return self._alliance

    @property
    def opponent(self) -> Player:
        return self._board.player(self._alliance.opposite)

    @property
    def active_pieces(self) -> tuple[Piece, ...]:
        return self._board.active_pieces(self._alliance)

    @property
    def king(self) -> Piece:
        king = self._find_king()
        if king is None:
            raise ValueError(f"No {self._alliance.name} king on board")
        return king

    @property
    def legal_moves(self) -> tuple[Move, ...]:
        """Pseudo-legal piece moves plus available castles.

        Whether a move leaves the own king attacked is decided by
        :meth:`make_move`.
        """
        if self._legal_moves is None:
            opponent_moves = self._board.piece_moves(self._alliance.opposite)
            self._legal_moves = (
                *self._board.piece_moves(self._alliance),
                *self.calculate_king_castles(opponent_moves),
            )
        return self._legal_moves

    # ── Status queries ───────────────────────────────────────────────────

    def is_in_check(self) -> bool:
        if self._in_check is None:
            opponent_moves = self._board.piece_moves(self._alliance.opposite)
            attacks = self.calculate_attacks_on_coordinate(
                self.king.coordinate, opponent_moves
            )
            self._in_check = bool(attacks)
        return self._in_check

    def is_in_checkmate(self) -> bool:
        return self.is_in_check() and not self._can_escape()

    def is_in_stalemate(self) -> bool:
        return not self.is_in_check() and not self._can_escape()

    def _can_escape(self) -> bool:
        if self._has_escape_moves is None:
            self._has_escape_moves = any(
                self.make_move(move).status.is_done for move in self.legal_moves
            )
        return self._has_escape_moves

    # ── Move application ─────────────────────────────────────────────────

    def make_move(self, move: Move) -> MoveTransition:
        """Try *move*; the originating board is never modified."""
        board = self._board
        if self._legal_move_set is None:
            self._legal_move_set = frozenset(self.legal_moves)
        if move not in self._legal_move_set:
            return MoveTransition(board, board, move, MoveStatus.ILLEGAL_MOVE)

        candidate = move.execute()
        king = candidate.player(self._alliance)._find_king()
        if king is not None and self.calculate_attacks_on_coordinate(
            king.coordinate, candidate.piece_moves(self._alliance.opposite)
        ):
            return MoveTransition(
                board, board, move, MoveStatus.LEAVES_PLAYER_IN_CHECK
            )
        return MoveTransition(board, candidate, move, MoveStatus.DONE)

    # ── Castling ─────────────────────────────────────────────────────────

    def calculate_king_castles(
        self, opponent_legal_moves: Iterable[Move]
    ) -> list[Move]:
        """King-side and queen-side castles currently available (0, 1 or 2)."""
        board = self._board
        rank = self._alliance.back_rank
        king = self._find_king()
        if (
            king is None
            or not king.first_move
            or king.coordinate != Coordinate(KING_HOME_FILE, rank)
        ):
            return []

        opponent_moves = tuple(opponent_legal_moves)
        if self._is_attacked(king.coordinate, opponent_moves):
            return []

        castles: list[Move] = []

        rook = self._unmoved_rook(Coordinate(KING_SIDE_ROOK_FILE, rank))
        if (
            rook is not None
            and self._is_clear(range(KING_HOME_FILE + 1, KING_SIDE_ROOK_FILE), rank)
            and not self._is_path_attacked((5, 6), rank, opponent_moves)
        ):
            castles.append(
                Move.king_side_castle(
                    board, king, Coordinate(6, rank), rook, Coordinate(5, rank)
                )
            )

        rook = self._unmoved_rook(Coordinate(QUEEN_SIDE_ROOK_FILE, rank))
        if (
            rook is not None
            and self._is_clear(range(QUEEN_SIDE_ROOK_FILE + 1, KING_HOME_FILE), rank)
            and not self._is_path_attacked((3, 2), rank, opponent_moves)
        ):
            castles.append(
                Move.queen_side_castle(
                    board, king, Coordinate(2, rank), rook, Coordinate(3, rank)
                )
            )
        return castles

    @staticmethod
    def calculate_attacks_on_coordinate(
        coordinate: Coordinate, moves: Iterable[Move]
    ) -> list[Move]:
        """Moves from *moves* whose destination is *coordinate*."""
        return [move for move in moves if move.destination == coordinate]

    # ── Internal helpers ─────────────────────────────────────────────────

    def _find_king(self) -> Piece | None:
        for piece in self._board.active_pieces(self._alliance):
            if piece.piece_type == PieceType.KING:
                return piece
        return None

    def _unmoved_rook(self, coordinate: Coordinate) -> Piece | None:
        piece = self._board.get_piece(coordinate)
        if (
            piece is not None
            and piece.piece_type == PieceType.ROOK
            and piece.alliance == self._alliance
            and piece.first_move
        ):
            return piece
        return None

    def _is_clear(self, files: range, rank: int) -> bool:
        return all(not self._board.is_tile_occupied(Coordinate(x, rank)) for x in files)

    def _is_path_attacked(
        self, files: tuple[int, ...], rank: int, opponent_moves: tuple[Move, ...]
    ) -> bool:
        return any(
            self._is_attacked(Coordinate(x, rank), opponent_moves) for x in files
        )

    def _is_attacked(
        self, coordinate: Coordinate, opponent_moves: tuple[Move, ...]
    ) -> bool:
        for move in self.calculate_attacks_on_coordinate(coordinate, opponent_moves):
            # A pawn advance does not attack the square it moves to.
            if move.is_attack or not _is_pawn_move(move):
                return True
        # Pawns only generate diagonal moves onto occupied squares.
        opponent = self._alliance.opposite
        for dx in (-1, 1):
            piece = self._board.get_piece(coordinate.offset(dx, -opponent.direction))
            if (
                piece is not None
                and piece.alliance == opponent
                and piece.piece_type == PieceType.PAWN
            ):
                return True
        return False

    def __repr__(self) -> str:
        return f"Player({self._alliance})"


def _is_pawn_move(move: Move) -> bool:
    piece = move.moved_piece
    return piece is not None and piece.piece_type == PieceType.PAWN
