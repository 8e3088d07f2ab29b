"""FEN parsing and serialization.

Boards carry no move clocks, so the halfmove and fullmove fields are
validated on input and written back as ``0 1``.
"""

from __future__ import annotations

from chessmate.core.board import Board
from chessmate.core.enums import Alliance, CastlingRights, PieceType
from chessmate.core.geometry import (
    BOARD_HEIGHT,
    BOARD_WIDTH,
    KING_HOME_FILE,
    KING_SIDE_ROOK_FILE,
    QUEEN_SIDE_ROOK_FILE,
    Coordinate,
    coordinate_name,
    parse_coordinate,
)
from chessmate.core.piece import Piece

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_PIECE_TYPES: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}

_CASTLING_CHARS: dict[str, CastlingRights] = {
    "K": CastlingRights.WHITE_KINGSIDE,
    "Q": CastlingRights.WHITE_QUEENSIDE,
    "k": CastlingRights.BLACK_KINGSIDE,
    "q": CastlingRights.BLACK_QUEENSIDE,
}

# Home squares of the pieces whose first-move flag is decided by castling.
_CASTLING_SQUARES: dict[CastlingRights, tuple[Alliance, int]] = {
    CastlingRights.WHITE_KINGSIDE: (Alliance.WHITE, KING_SIDE_ROOK_FILE),
    CastlingRights.WHITE_QUEENSIDE: (Alliance.WHITE, QUEEN_SIDE_ROOK_FILE),
    CastlingRights.BLACK_KINGSIDE: (Alliance.BLACK, KING_SIDE_ROOK_FILE),
    CastlingRights.BLACK_QUEENSIDE: (Alliance.BLACK, QUEEN_SIDE_ROOK_FILE),
}

_START_FILES: dict[PieceType, tuple[int, ...]] = {
    PieceType.KNIGHT: (1, 6),
    PieceType.BISHOP: (2, 5),
    PieceType.QUEEN: (3,),
}


def board_from_fen(fen: str) -> Board:
    """Parse a FEN string into a :class:`Board`."""
    parts = fen.split()
    if not (4 <= len(parts) <= 6):
        raise ValueError(f"Invalid FEN (need 4-6 fields): {fen!r}")

    placement, side_part, castling_part, ep_part = parts[:4]

    # 1. Side to move
    if side_part == "w":
        side = Alliance.WHITE
    elif side_part == "b":
        side = Alliance.BLACK
    else:
        raise ValueError(f"Invalid FEN side-to-move field: {side_part!r}")

    # 2. Castling
    castling = CastlingRights.NONE
    if castling_part != "-":
        seen: set[str] = set()
        for ch in castling_part:
            right = _CASTLING_CHARS.get(ch)
            if right is None or ch in seen:
                raise ValueError(f"Invalid FEN castling field: {castling_part!r}")
            seen.add(ch)
            castling |= right

    # 3. Piece placement
    ranks = placement.split("/")
    if len(ranks) != BOARD_HEIGHT:
        raise ValueError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")
    builder = Board.builder().set_move_maker(side)
    for rank_idx, rank_text in enumerate(ranks):
        y = BOARD_HEIGHT - 1 - rank_idx
        x = 0
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= BOARD_WIDTH):
                    raise ValueError(f"Invalid FEN digit {ch!r}: {fen!r}")
                x += step
            else:
                piece_type = _PIECE_TYPES.get(ch.lower())
                if piece_type is None or x >= BOARD_WIDTH:
                    raise ValueError(f"Invalid FEN placement {ch!r}: {fen!r}")
                alliance = Alliance.WHITE if ch.isupper() else Alliance.BLACK
                coordinate = Coordinate(x, y)
                first_move = _is_first_move(piece_type, alliance, coordinate, castling)
                builder.set_piece(Piece(piece_type, alliance, coordinate, first_move))
                x += 1
            if x > BOARD_WIDTH:
                raise ValueError(f"Invalid FEN rank width: {fen!r}")
        if x != BOARD_WIDTH:
            raise ValueError(f"Invalid FEN rank width: {fen!r}")

    board = builder.build()
    if board.castling_rights != castling:
        raise ValueError(
            f"FEN castling field {castling_part!r} does not match king/rook placement"
        )

    # 4. En passant
    if ep_part != "-":
        builder.set_en_passant_pawn(_en_passant_pawn(board, ep_part, side))
        board = builder.build()

    # 5–6. Clocks (optional, not stored)
    if len(parts) > 4 and int(parts[4]) < 0:
        raise ValueError(f"Invalid FEN halfmove clock: {parts[4]!r}")
    if len(parts) > 5 and int(parts[5]) < 1:
        raise ValueError(f"Invalid FEN fullmove number: {parts[5]!r}")

    return board


def board_to_fen(board: Board) -> str:
    """Serialise a :class:`Board` to FEN."""
    # 1. Placement
    rows: list[str] = []
    for y in range(BOARD_HEIGHT - 1, -1, -1):
        empty = 0
        row = ""
        for x in range(BOARD_WIDTH):
            piece = board.get_piece(Coordinate(x, y))
            if piece is None:
                empty += 1
            else:
                if empty:
                    row += str(empty)
                    empty = 0
                row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)
    board_str = "/".join(rows)

    # 2. Side
    side_str = "w" if board.move_maker == Alliance.WHITE else "b"

    # 3. Castling
    rights = board.castling_rights
    castling_str = "".join(
        ch for ch, right in _CASTLING_CHARS.items() if rights & right
    )
    if not castling_str:
        castling_str = "-"

    # 4. En passant: the square the pawn jumped over
    pawn = board.en_passant_pawn
    ep_str = "-"
    if pawn is not None:
        ep_str = coordinate_name(pawn.coordinate.offset(0, -pawn.alliance.direction))

    return f"{board_str} {side_str} {castling_str} {ep_str} 0 1"


def _is_first_move(
    piece_type: PieceType,
    alliance: Alliance,
    coordinate: Coordinate,
    castling: CastlingRights,
) -> bool:
    back_rank = alliance.back_rank
    match piece_type:
        case PieceType.PAWN:
            return coordinate.y == alliance.pawn_rank
        case PieceType.KING:
            if coordinate != Coordinate(KING_HOME_FILE, back_rank):
                return False
            return any(
                castling & right
                for right, (side, _) in _CASTLING_SQUARES.items()
                if side == alliance
            )
        case PieceType.ROOK:
            for right, (side, file) in _CASTLING_SQUARES.items():
                if side == alliance and coordinate == Coordinate(file, back_rank):
                    return bool(castling & right)
            return False
    return coordinate.y == back_rank and coordinate.x in _START_FILES[piece_type]


def _en_passant_pawn(board: Board, ep_part: str, side: Alliance) -> Piece:
    target = parse_coordinate(ep_part)
    expected_rank = 5 if side == Alliance.WHITE else 2
    if target.y != expected_rank:
        raise ValueError(f"Invalid FEN en-passant square for side-to-move: {ep_part!r}")
    pawn = board.get_piece(target.offset(0, -side.direction))
    if (
        pawn is None
        or pawn.piece_type != PieceType.PAWN
        or pawn.alliance != side.opposite
    ):
        raise ValueError(f"No pawn can be captured en passant on {ep_part!r}")
    return pawn

