"""Zobrist keys: a deterministic 64-bit hash of a board.

Every key is drawn once, at import time, from a fixed splitmix64 stream,
so hashes are stable across processes.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Final

from chessmate.core.enums import Alliance

if TYPE_CHECKING:
    from chessmate.core.piece import Piece

_SEED: Final = 0xA5B3C7D9E1F23412
_MASK_64: Final = 0xFFFFFFFFFFFFFFFF

# Layout of the key stream.
_PIECE_OFFSET: Final = 0  # 2 alliances × 6 piece types × 64 squares
_SIDE_OFFSET: Final = _PIECE_OFFSET + 2 * 6 * 64
_CASTLING_OFFSET: Final = _SIDE_OFFSET + 1  # 16 masks
_EN_PASSANT_OFFSET: Final = _CASTLING_OFFSET + 16  # 64 pawn squares
_KEY_COUNT: Final = _EN_PASSANT_OFFSET + 64


def _splitmix64(state: int) -> int:
    """Deterministic 64-bit bit-mixer suitable for static key generation."""
    z = (state + 0x9E3779B97F4A7C15) & _MASK_64
    z = ((z ^ (z >> 30)) * 0xBF58476D1CE4E5B9) & _MASK_64
    z = ((z ^ (z >> 27)) * 0x94D049BB133111EB) & _MASK_64
    return z ^ (z >> 31)


_KEYS: Final = tuple(_splitmix64(_SEED + n) for n in range(_KEY_COUNT))


def piece_key(piece: Piece) -> int:
    """Key of *piece* standing on its coordinate."""
    slot = (int(piece.alliance) * 6 + int(piece.piece_type) - 1) * 64
    return _KEYS[_PIECE_OFFSET + slot + piece.coordinate.index]


def board_key(
    pieces: Iterable[Piece],
    move_maker: Alliance,
    castling_mask: int,
    en_passant_pawn: Piece | None,
) -> int:
    """XOR of the keys of every piece plus side, castling and en passant."""
    key = _KEYS[_CASTLING_OFFSET + (castling_mask & 0xF)]
    if move_maker == Alliance.BLACK:
        key ^= _KEYS[_SIDE_OFFSET]
    if en_passant_pawn is not None:
        key ^= _KEYS[_EN_PASSANT_OFFSET + en_passant_pawn.coordinate.index]
    for piece in pieces:
        key ^= piece_key(piece)
    return key
