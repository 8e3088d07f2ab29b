"""Board - immutable snapshot of a position, built through :class:`BoardBuilder`."""

from __future__ import annotations

import random
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from chessmate.core.enums import Alliance, CastlingRights, PieceType
from chessmate.core.geometry import (
    BOARD_HEIGHT,
    BOARD_WIDTH,
    KING_HOME_FILE,
    KING_SIDE_ROOK_FILE,
    QUEEN_SIDE_ROOK_FILE,
    Coordinate,
)
from chessmate.core.move import Move
from chessmate.core.piece import Piece
from chessmate.core.player import Player
from chessmate.core.zobrist import board_key

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)

_CASTLING_FLAGS: dict[Alliance, tuple[CastlingRights, CastlingRights]] = {
    Alliance.WHITE: (CastlingRights.WHITE_KINGSIDE, CastlingRights.WHITE_QUEENSIDE),
    Alliance.BLACK: (CastlingRights.BLACK_KINGSIDE, CastlingRights.BLACK_QUEENSIDE),
}


@dataclass(frozen=True, slots=True)
class Tile:
    """A coordinate together with whatever stands on it."""

    coordinate: Coordinate
    piece: Piece | None = None

    @property
    def is_occupied(self) -> bool:
        return self.piece is not None


class BoardBuilder:
    """Accumulates piece placements, then freezes them into a :class:`Board`.

    A later placement on the same coordinate replaces the earlier one, so a
    board never holds two pieces on a square.
    """

    __slots__ = ("_pieces", "_move_maker", "_en_passant_pawn")

    def __init__(self) -> None:
        self._pieces: dict[Coordinate, Piece] = {}
        self._move_maker = Alliance.WHITE
        self._en_passant_pawn: Piece | None = None

    @classmethod
    def from_board(cls, board: Board) -> BoardBuilder:
        """Start from a board's placement, side to move and en passant pawn."""
        builder = cls()
        builder._pieces = dict(board.pieces)
        builder._move_maker = board.move_maker
        builder._en_passant_pawn = board.en_passant_pawn
        return builder

    def set_piece(self, piece: Piece) -> BoardBuilder:
        self._pieces[piece.coordinate] = piece
        return self

    def remove_piece(self, coordinate: Coordinate) -> BoardBuilder:
        self._pieces.pop(coordinate, None)
        return self

    def set_move_maker(self, alliance: Alliance) -> BoardBuilder:
        self._move_maker = alliance
        return self

    def set_en_passant_pawn(self, pawn: Piece | None) -> BoardBuilder:
        self._en_passant_pawn = pawn
        return self

    def build(self) -> Board:
        return Board(self._pieces, self._move_maker, self._en_passant_pawn)


class Board:
    """Immutable board: piece placement, side to move and en passant pawn.

    Derived data (pseudo-legal moves, players, hash keys) is computed lazily
    and cached; none of it is observable as mutation.  Executing a move always
    yields a new board, so sibling search branches never share state.
    """

    __slots__ = (
        "_pieces",
        "_move_maker",
        "_en_passant_pawn",
        "_active_pieces",
        "_piece_moves",
        "_players",
        "_zobrist_key",
        "_position_key",
    )

    def __init__(
        self,
        pieces: Mapping[Coordinate, Piece],
        move_maker: Alliance,
        en_passant_pawn: Piece | None = None,
    ) -> None:
        self._pieces: dict[Coordinate, Piece] = dict(pieces)
        self._move_maker = move_maker
        self._en_passant_pawn = en_passant_pawn

        ordered = sorted(self._pieces.values(), key=_placement_order)
        self._active_pieces: tuple[tuple[Piece, ...], tuple[Piece, ...]] = (
            tuple(p for p in ordered if p.alliance == Alliance.WHITE),
            tuple(p for p in ordered if p.alliance == Alliance.BLACK),
        )
        self._piece_moves: list[tuple[Move, ...] | None] = [None, None]
        self._players: list[Player | None] = [None, None]
        self._zobrist_key: int | None = None
        self._position_key: tuple[object, ...] | None = None

    # -- Factories ------------------------------------------------------------

    @staticmethod
    def builder() -> BoardBuilder:
        return BoardBuilder()

    @classmethod
    def standard(cls) -> Board:
        """Standard starting position, white to move."""
        builder = BoardBuilder()
        for x, piece_type in enumerate(_BACK_RANK):
            builder.set_piece(Piece(piece_type, Alliance.WHITE, Coordinate(x, 0)))
            builder.set_piece(Piece(piece_type, Alliance.BLACK, Coordinate(x, 7)))
        _place_pawns(builder)
        return builder.build()

    @classmethod
    def randomized(cls, rng: random.Random | None = None) -> Board:
        """Standard material with each back rank shuffled (mirrored for black)."""
        rng = rng if rng is not None else random.Random()
        back_rank = list(_BACK_RANK)
        rng.shuffle(back_rank)

        builder = BoardBuilder()
        for x, piece_type in enumerate(back_rank):
            builder.set_piece(Piece(piece_type, Alliance.WHITE, Coordinate(x, 0)))
            builder.set_piece(Piece(piece_type, Alliance.BLACK, Coordinate(x, 7)))
        _place_pawns(builder)
        return builder.build()

    # -- Element access -------------------------------------------------------

    def get_piece(self, coordinate: Coordinate) -> Piece | None:
        return self._pieces.get(coordinate)

    def get_tile(self, coordinate: Coordinate) -> Tile:
        return Tile(coordinate, self._pieces.get(coordinate))

    def is_tile_occupied(self, coordinate: Coordinate) -> bool:
        return coordinate in self._pieces

    @property
    def pieces(self) -> Mapping[Coordinate, Piece]:
        """Read-only view of the placement."""
        return MappingProxyType(self._pieces)

    def active_pieces(self, alliance: Alliance) -> tuple[Piece, ...]:
        """Pieces of *alliance* ordered by rank, then file."""
        return self._active_pieces[int(alliance)]

    @property
    def move_maker(self) -> Alliance:
        return self._move_maker

    @property
    def en_passant_pawn(self) -> Piece | None:
        return self._en_passant_pawn

    # -- Players and moves ----------------------------------------------------

    def player(self, alliance: Alliance) -> Player:
        idx = int(alliance)
        player = self._players[idx]
        if player is None:
            player = Player(self, alliance)
            self._players[idx] = player
        return player

    @property
    def white_player(self) -> Player:
        return self.player(Alliance.WHITE)

    @property
    def black_player(self) -> Player:
        return self.player(Alliance.BLACK)

    @property
    def current_player(self) -> Player:
        return self.player(self._move_maker)

    def piece_moves(self, alliance: Alliance) -> tuple[Move, ...]:
        """Pseudo-legal moves of every *alliance* piece, castles excluded."""
        idx = int(alliance)
        moves = self._piece_moves[idx]
        if moves is None:
            collected: list[Move] = []
            for piece in self._active_pieces[idx]:
                collected.extend(piece.calculate_legal_moves(self))
            moves = tuple(collected)
            self._piece_moves[idx] = moves
        return moves

    def all_legal_moves(self) -> list[Move]:
        """Legal-move candidates of both sides, white first."""
        return [*self.white_player.legal_moves, *self.black_player.legal_moves]

    # -- Position identity ----------------------------------------------------

    @property
    def castling_rights(self) -> CastlingRights:
        """Rights implied by unmoved kings and rooks on their home squares."""
        rights = CastlingRights.NONE
        for alliance, (king_side, queen_side) in _CASTLING_FLAGS.items():
            rank = alliance.back_rank
            king_home = Coordinate(KING_HOME_FILE, rank)
            if not self._is_unmoved(king_home, PieceType.KING, alliance):
                continue
            king_rook = Coordinate(KING_SIDE_ROOK_FILE, rank)
            if self._is_unmoved(king_rook, PieceType.ROOK, alliance):
                rights |= king_side
            queen_rook = Coordinate(QUEEN_SIDE_ROOK_FILE, rank)
            if self._is_unmoved(queen_rook, PieceType.ROOK, alliance):
                rights |= queen_side
        return rights

    def _is_unmoved(
        self, coordinate: Coordinate, piece_type: PieceType, alliance: Alliance
    ) -> bool:
        piece = self._pieces.get(coordinate)
        return (
            piece is not None
            and piece.piece_type == piece_type
            and piece.alliance == alliance
            and piece.first_move
        )

    @property
    def position_key(self) -> tuple[object, ...]:
        """Exact position identity used for repetition detection.

        Covers placement, side to move, castling rights and the en passant
        pawn.  First-move flags of other pieces are not part of it.
        """
        if self._position_key is None:
            placement = tuple(
                (p.coordinate.index, int(p.alliance), int(p.piece_type))
                for side in self._active_pieces
                for p in side
            )
            ep = self._en_passant_pawn
            self._position_key = (
                placement,
                int(self._move_maker),
                int(self.castling_rights),
                ep.coordinate.index if ep is not None else -1,
            )
        return self._position_key

    @property
    def zobrist_key(self) -> int:
        if self._zobrist_key is None:
            self._zobrist_key = board_key(
                self._pieces.values(),
                self._move_maker,
                int(self.castling_rights),
                self._en_passant_pawn,
            )
        return self._zobrist_key

    # -- Dunder helpers -------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self._move_maker == other._move_maker
            and self._en_passant_pawn == other._en_passant_pawn
            and self._pieces == other._pieces
        )

    def __hash__(self) -> int:
        return self.zobrist_key

    def __repr__(self) -> str:
        rows: list[str] = []
        for y in range(BOARD_HEIGHT - 1, -1, -1):
            row = []
            for x in range(BOARD_WIDTH):
                p = self._pieces.get(Coordinate(x, y))
                row.append(str(p) if p else ".")
            rows.append(f"{y + 1} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)


def _placement_order(piece: Piece) -> int:
    return piece.coordinate.index


def _place_pawns(builder: BoardBuilder) -> None:
    for alliance in Alliance:
        for x in range(BOARD_WIDTH):
            coordinate = Coordinate(x, alliance.pawn_rank)
            builder.set_piece(Piece(PieceType.PAWN, alliance, coordinate))
