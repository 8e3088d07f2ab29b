"""Board geometry: coordinates, bounds and algebraic names.

Coordinates are ``(x, y)`` pairs:
    x = file index 0–7 (a–h)
    y = rank index 0–7 (1–8)

so a1 = (0, 0), h1 = (7, 0) and h8 = (7, 7).
"""

from __future__ import annotations

from dataclasses import dataclass

BOARD_WIDTH = 8
BOARD_HEIGHT = 8

KING_HOME_FILE = 4
KING_SIDE_ROOK_FILE = 7
QUEEN_SIDE_ROOK_FILE = 0

_FILES = "abcdefgh"
_RANKS = "12345678"


@dataclass(frozen=True, slots=True)
class Coordinate:
    """Immutable board coordinate."""

    x: int
    y: int

    def offset(self, dx: int, dy: int) -> Coordinate:
        return Coordinate(self.x + dx, self.y + dy)

    @property
    def index(self) -> int:
        """Linear index 0–63 (a1=0, h8=63)."""
        return self.y * BOARD_WIDTH + self.x

    def __str__(self) -> str:
        if is_valid_coordinate(self):
            return coordinate_name(self)
        return f"({self.x},{self.y})"


def is_valid_coordinate(coordinate: Coordinate) -> bool:
    """Whether *coordinate* lies on the board."""
    return 0 <= coordinate.x < BOARD_WIDTH and 0 <= coordinate.y < BOARD_HEIGHT


def parse_coordinate(name: str) -> Coordinate:
    """Parse an algebraic square name, e.g. 'e4' → Coordinate(4, 3)."""
    if len(name) != 2 or name[0] not in _FILES or name[1] not in _RANKS:
        raise ValueError(f"Invalid square name: {name!r}")
    return Coordinate(_FILES.index(name[0]), _RANKS.index(name[1]))


def coordinate_name(coordinate: Coordinate) -> str:
    """Algebraic name of *coordinate*, e.g. Coordinate(0, 0) → 'a1'."""
    if not is_valid_coordinate(coordinate):
        raise ValueError(f"Coordinate off the board: ({coordinate.x},{coordinate.y})")
    return _FILES[coordinate.x] + _RANKS[coordinate.y]


ALL_COORDINATES: tuple[Coordinate, ...] = tuple(
    Coordinate(x, y) for y in range(BOARD_HEIGHT) for x in range(BOARD_WIDTH)
)
