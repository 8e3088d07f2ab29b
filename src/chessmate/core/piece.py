"""Piece value object and per-kind pseudo-legal move generation."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from chessmate.core.enums import Alliance, PieceType
from chessmate.core.geometry import Coordinate, is_valid_coordinate
from chessmate.core.move import Move

if TYPE_CHECKING:
    from chessmate.core.board import Board


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)

_UNICODE: dict[tuple[Alliance, PieceType], str] = {
    (Alliance.WHITE, PieceType.PAWN): "♙",
    (Alliance.WHITE, PieceType.KNIGHT): "♘",
    (Alliance.WHITE, PieceType.BISHOP): "♗",
    (Alliance.WHITE, PieceType.ROOK): "♖",
    (Alliance.WHITE, PieceType.QUEEN): "♕",
    (Alliance.WHITE, PieceType.KING): "♔",
    (Alliance.BLACK, PieceType.PAWN): "♟",
    (Alliance.BLACK, PieceType.KNIGHT): "♞",
    (Alliance.BLACK, PieceType.BISHOP): "♝",
    (Alliance.BLACK, PieceType.ROOK): "♜",
    (Alliance.BLACK, PieceType.QUEEN): "♛",
    (Alliance.BLACK, PieceType.KING): "♚",
}


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable chess piece standing on a coordinate.

    Moving a piece never mutates it: :meth:`move_piece` returns a new
    instance at the destination with ``first_move`` cleared.
    """

    piece_type: PieceType
    alliance: Alliance
    coordinate: Coordinate
    first_move: bool = True

    # ── Relocation ───────────────────────────────────────────────────────

    def move_piece(self, move: Move) -> Piece:
        """The piece as it stands after *move* is played."""
        return self.move_to(move.destination)

    def move_to(self, coordinate: Coordinate) -> Piece:
        return replace(self, coordinate=coordinate, first_move=False)

    # ── Move generation ──────────────────────────────────────────────────

    def calculate_legal_moves(self, board: Board) -> list[Move]:
        """All pseudo-legal moves of this piece on *board*.

        Whether the move leaves the own king attacked is not checked here;
        that is :meth:`Player.make_move`'s job.
        """
        match self.piece_type:
            case PieceType.PAWN:
                return self._pawn_moves(board)
            case PieceType.KNIGHT:
                return self._leaper_moves(board, KNIGHT_OFFSETS)
            case PieceType.BISHOP:
                return self._slider_moves(board, BISHOP_DIRS)
            case PieceType.ROOK:
                return self._slider_moves(board, ROOK_DIRS)
            case PieceType.QUEEN:
                return self._slider_moves(board, QUEEN_DIRS)
            case PieceType.KING:
                return self._leaper_moves(board, KING_OFFSETS)
        raise ValueError(f"Unknown piece type: {self.piece_type!r}")

    def _slider_moves(
        self, board: Board, directions: tuple[tuple[int, int], ...]
    ) -> list[Move]:
        moves: list[Move] = []
        for dx, dy in directions:
            destination = self.coordinate.offset(dx, dy)
            while is_valid_coordinate(destination):
                occupant = board.get_piece(destination)
                if occupant is None:
                    moves.append(Move.major(board, self, destination))
                    destination = destination.offset(dx, dy)
                    continue
                if occupant.alliance != self.alliance:
                    moves.append(Move.attack(board, self, destination, occupant))
                break
        return moves

    def _leaper_moves(
        self, board: Board, offsets: tuple[tuple[int, int], ...]
    ) -> list[Move]:
        moves: list[Move] = []
        for dx, dy in offsets:
            destination = self.coordinate.offset(dx, dy)
            if not is_valid_coordinate(destination):
                continue
            occupant = board.get_piece(destination)
            if occupant is None:
                moves.append(Move.major(board, self, destination))
            elif occupant.alliance != self.alliance:
                moves.append(Move.attack(board, self, destination, occupant))
        return moves

    def _pawn_moves(self, board: Board) -> list[Move]:
        moves: list[Move] = []
        direction = self.alliance.direction
        promotion_rank = self.alliance.promotion_rank

        forward = self.coordinate.offset(0, direction)
        if is_valid_coordinate(forward) and board.get_piece(forward) is None:
            step = Move.pawn(board, self, forward)
            if forward.y == promotion_rank:
                moves.extend(Move.promotion(step, pt) for pt in PROMOTION_TYPES)
            else:
                moves.append(step)
                if self.first_move and self.coordinate.y == self.alliance.pawn_rank:
                    jump = self.coordinate.offset(0, 2 * direction)
                    if board.get_piece(jump) is None:
                        moves.append(Move.pawn_jump(board, self, jump))

        for dx in (-1, 1):
            target = self.coordinate.offset(dx, direction)
            if not is_valid_coordinate(target):
                continue
            occupant = board.get_piece(target)
            if occupant is not None:
                if occupant.alliance == self.alliance:
                    continue
                capture = Move.pawn_attack(board, self, target, occupant)
                if target.y == promotion_rank:
                    moves.extend(Move.promotion(capture, pt) for pt in PROMOTION_TYPES)
                else:
                    moves.append(capture)
                continue

            passed = board.en_passant_pawn
            if (
                passed is not None
                and passed.alliance != self.alliance
                and passed.coordinate == self.coordinate.offset(dx, 0)
            ):
                moves.append(Move.en_passant(board, self, target, passed))
        return moves

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        letter = self.piece_type.letter
        return letter if self.alliance == Alliance.WHITE else letter.lower()

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return _UNICODE[(self.alliance, self.piece_type)]
