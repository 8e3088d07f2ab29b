"""Move value object: a closed set of variants tagged by :class:`MoveKind`.

A move is a pure descriptor of a transition from its originating board.
Nothing happens until :meth:`Move.execute` is called, which derives a
brand-new :class:`Board` and leaves the originating one untouched.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from chessmate.core.enums import MoveKind, PieceType
from chessmate.core.geometry import Coordinate, coordinate_name

if TYPE_CHECKING:
    from chessmate.core.board import Board
    from chessmate.core.piece import Piece

_ATTACK_KINDS = frozenset(
    {MoveKind.ATTACK, MoveKind.PAWN_ATTACK, MoveKind.PAWN_EN_PASSANT}
)
_CASTLE_KINDS = frozenset({MoveKind.KING_SIDE_CASTLE, MoveKind.QUEEN_SIDE_CASTLE})
_PROMOTABLE = frozenset(
    {PieceType.QUEEN, PieceType.ROOK, PieceType.BISHOP, PieceType.KNIGHT}
)
_NOWHERE = Coordinate(-1, -1)


class NullMoveError(RuntimeError):
    """Raised when the null-move sentinel is executed."""


@dataclass(frozen=True, slots=True, repr=False)
class Move:
    """Immutable move descriptor.

    Prefer the named constructors (:meth:`major`, :meth:`attack`, ...) over
    building instances directly; they fill in the variant-specific fields.
    """

    kind: MoveKind
    board: Board | None
    moved_piece: Piece | None
    destination: Coordinate
    attacked_piece: Piece | None = None
    castle_rook: Piece | None = None
    castle_rook_destination: Coordinate | None = None
    promotion_type: PieceType | None = None
    decorated_move: Move | None = None
    is_first_move: bool = field(init=False, default=False)

    def __post_init__(self) -> None:
        if self.moved_piece is not None:
            object.__setattr__(self, "is_first_move", self.moved_piece.first_move)

    # ── Named constructors ───────────────────────────────────────────────

    @classmethod
    def major(cls, board: Board, piece: Piece, destination: Coordinate) -> Move:
        return cls(MoveKind.MAJOR, board, piece, destination)

    @classmethod
    def attack(
        cls, board: Board, piece: Piece, destination: Coordinate, attacked: Piece
    ) -> Move:
        return cls(MoveKind.ATTACK, board, piece, destination, attacked_piece=attacked)

    @classmethod
    def pawn(cls, board: Board, pawn: Piece, destination: Coordinate) -> Move:
        return cls(MoveKind.PAWN, board, pawn, destination)

    @classmethod
    def pawn_jump(cls, board: Board, pawn: Piece, destination: Coordinate) -> Move:
        return cls(MoveKind.PAWN_JUMP, board, pawn, destination)

    @classmethod
    def pawn_attack(
        cls, board: Board, pawn: Piece, destination: Coordinate, attacked: Piece
    ) -> Move:
        return cls(
            MoveKind.PAWN_ATTACK, board, pawn, destination, attacked_piece=attacked
        )

    @classmethod
    def en_passant(
        cls, board: Board, pawn: Piece, destination: Coordinate, passed: Piece
    ) -> Move:
        """Capture of *passed*, which stands beside the pawn, not on *destination*."""
        return cls(
            MoveKind.PAWN_EN_PASSANT, board, pawn, destination, attacked_piece=passed
        )

    @classmethod
    def king_side_castle(
        cls,
        board: Board,
        king: Piece,
        destination: Coordinate,
        rook: Piece,
        rook_destination: Coordinate,
    ) -> Move:
        return cls(
            MoveKind.KING_SIDE_CASTLE,
            board,
            king,
            destination,
            castle_rook=rook,
            castle_rook_destination=rook_destination,
        )

    @classmethod
    def queen_side_castle(
        cls,
        board: Board,
        king: Piece,
        destination: Coordinate,
        rook: Piece,
        rook_destination: Coordinate,
    ) -> Move:
        return cls(
            MoveKind.QUEEN_SIDE_CASTLE,
            board,
            king,
            destination,
            castle_rook=rook,
            castle_rook_destination=rook_destination,
        )

    @classmethod
    def promotion(cls, base: Move, piece_type: PieceType) -> Move:
        """Wrap a pawn move onto the last rank with the chosen piece type."""
        if piece_type not in _PROMOTABLE:
            raise ValueError(f"Cannot promote to {piece_type.name}")
        return cls(
            MoveKind.PAWN_PROMOTION,
            base.board,
            base.moved_piece,
            base.destination,
            attacked_piece=base.attacked_piece,
            promotion_type=piece_type,
            decorated_move=base,
        )

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def current_coordinate(self) -> Coordinate:
        """Coordinate the moved piece starts from."""
        if self.moved_piece is None:
            return _NOWHERE
        return self.moved_piece.coordinate

    @property
    def is_attack(self) -> bool:
        return self.attacked_piece is not None

    @property
    def is_castling_move(self) -> bool:
        return self.kind in _CASTLE_KINDS

    @property
    def is_promotion(self) -> bool:
        return self.kind == MoveKind.PAWN_PROMOTION

    @property
    def is_null(self) -> bool:
        return self.kind == MoveKind.NULL

    # ── Execution ────────────────────────────────────────────────────────

    def execute(self) -> Board:
        """Derive the board that results from playing this move."""
        match self.kind:
            case MoveKind.NULL:
                raise NullMoveError("Cannot execute a null move")
            case MoveKind.PAWN_PROMOTION:
                return self._execute_promotion()
        return self._execute_relocation()

    def _execute_relocation(self) -> Board:
        from chessmate.core.board import BoardBuilder

        board = self.board
        mover = self.moved_piece
        assert board is not None and mover is not None

        builder = BoardBuilder()
        for piece in board.active_pieces(mover.alliance):
            if piece != mover and piece != self.castle_rook:
                builder.set_piece(piece)
        for piece in board.active_pieces(mover.alliance.opposite):
            if piece != self.attacked_piece:
                builder.set_piece(piece)

        moved = mover.move_piece(self)
        builder.set_piece(moved)

        if self.kind in _CASTLE_KINDS:
            assert self.castle_rook is not None
            assert self.castle_rook_destination is not None
            builder.set_piece(self.castle_rook.move_to(self.castle_rook_destination))
        elif self.kind == MoveKind.PAWN_JUMP:
            builder.set_en_passant_pawn(moved)

        builder.set_move_maker(mover.alliance.opposite)
        return builder.build()

    def _execute_promotion(self) -> Board:
        from chessmate.core.board import BoardBuilder

        assert self.decorated_move is not None and self.moved_piece is not None
        assert self.promotion_type is not None

        pawn_moved_board = self.decorated_move.execute()
        promoted = replace(
            self.moved_piece.move_piece(self), piece_type=self.promotion_type
        )
        builder = BoardBuilder.from_board(pawn_moved_board)
        builder.set_piece(promoted)
        return builder.build()

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        if self.kind == MoveKind.NULL or self.moved_piece is None:
            return "--"
        match self.kind:
            case MoveKind.KING_SIDE_CASTLE:
                return "0-0"
            case MoveKind.QUEEN_SIDE_CASTLE:
                return "0-0-0"
            case MoveKind.PAWN_PROMOTION:
                assert self.promotion_type is not None
                return f"{self.decorated_move}={self.promotion_type.letter}"

        target = coordinate_name(self.destination)
        if self.kind in (MoveKind.PAWN, MoveKind.PAWN_JUMP):
            return target
        if self.kind in (MoveKind.PAWN_ATTACK, MoveKind.PAWN_EN_PASSANT):
            return f"{coordinate_name(self.current_coordinate)[0]}x{target}"

        letter = self.moved_piece.piece_type.letter
        if self.kind in _ATTACK_KINDS:
            return f"{letter}x{target}"
        return f"{letter}{target}"

    def __repr__(self) -> str:
        return f"Move({self.kind.name}, {self})"

    @property
    def uci(self) -> str:
        """Long-algebraic coordinates, e.g. 'e2e4' or 'e7e8q'."""
        if self.moved_piece is None:
            return "0000"
        text = coordinate_name(self.current_coordinate) + coordinate_name(
            self.destination
        )
        if self.promotion_type is not None:
            text += self.promotion_type.letter.lower()
        return text


NULL_MOVE = Move(MoveKind.NULL, None, None, _NOWHERE)
"""Sentinel meaning "no move found"; executing it raises :class:`NullMoveError`."""
