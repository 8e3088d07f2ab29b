"""Core enumerations for the chess domain."""

from __future__ import annotations

from enum import IntEnum, IntFlag, auto


class Alliance(IntEnum):
    """Side of the board."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Alliance:
        return Alliance(1 - self.value)

    @property
    def direction(self) -> int:
        """Rank step of a pawn advance: +1 for white, -1 for black."""
        return 1 if self is Alliance.WHITE else -1

    @property
    def back_rank(self) -> int:
        return 0 if self is Alliance.WHITE else 7

    @property
    def pawn_rank(self) -> int:
        """Rank index the pawns start on."""
        return 1 if self is Alliance.WHITE else 6

    @property
    def promotion_rank(self) -> int:
        return 7 if self is Alliance.WHITE else 0

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6

    @property
    def letter(self) -> str:
        return _LETTERS[self]


_LETTERS: dict[PieceType, str] = {
    PieceType.PAWN: "P",
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}


class MoveKind(IntEnum):
    """Closed set of move variants."""

    MAJOR = auto()
    ATTACK = auto()
    PAWN = auto()
    PAWN_JUMP = auto()
    PAWN_ATTACK = auto()
    PAWN_EN_PASSANT = auto()
    KING_SIDE_CASTLE = auto()
    QUEEN_SIDE_CASTLE = auto()
    PAWN_PROMOTION = auto()
    NULL = auto()


class MoveStatus(IntEnum):
    """Outcome of attempting a move."""

    DONE = auto()
    ILLEGAL_MOVE = auto()
    LEAVES_PLAYER_IN_CHECK = auto()

    @property
    def is_done(self) -> bool:
        return self is MoveStatus.DONE


class CastlingRights(IntFlag):
    """Bitmask for castling availability."""

    NONE = 0
    WHITE_KINGSIDE = auto()
    WHITE_QUEENSIDE = auto()
    BLACK_KINGSIDE = auto()
    BLACK_QUEENSIDE = auto()

    WHITE_BOTH = WHITE_KINGSIDE | WHITE_QUEENSIDE
    BLACK_BOTH = BLACK_KINGSIDE | BLACK_QUEENSIDE
    ALL = WHITE_BOTH | BLACK_BOTH


class GameResult(IntEnum):
    """Outcome of a game."""

    IN_PROGRESS = 0
    WHITE_WINS = 1
    BLACK_WINS = 2
    DRAW = 3
