from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple


BOARD_SIZE = 8

# Pattern describing a valid square designator (column letter, row digit).
ROW_COL = re.compile(r"^[a-h][1-8]$")

# Compass directions, clockwise from north
N, NE, E, SE, S, SW, W, NW = range(8)
NO_DIRECTION = -1
DISPLACEMENTS: Tuple[Tuple[int, int], ...] = (
    (0, 1),
    (1, 1),
    (1, 0),
    (1, -1),
    (0, -1),
    (-1, -1),
    (-1, 0),
    (-1, 1),
)
_DIRECTION_OF = {d: i for i, d in enumerate(DISPLACEMENTS)}


def exists(col: int, row: int) -> bool:
    """Return True iff (col, row) lies on the board."""
    return 0 <= col < BOARD_SIZE and 0 <= row < BOARD_SIZE


def _sign(x: int) -> int:
    return (x > 0) - (x < 0)


@dataclass(frozen=True)
class Square:
    """A cell of the 8x8 grid.

    Attributes:
        col (int): Column 0..7 (files a..h).
        row (int): Row 0..7 (ranks 1..8).
    """

    col: int
    row: int

    def __post_init__(self) -> None:
        if not exists(self.col, self.row):
            raise ValueError(f"square off board: ({self.col}, {self.row})")

    @property
    def index(self) -> int:
        return self.row * BOARD_SIZE + self.col

    def direction(self, to: "Square") -> int:
        """Return the compass direction from this square towards ``to``.

        Returns:
            int: One of ``N`` .. ``NW``, or ``NO_DIRECTION`` when the squares
                coincide or do not share a row, column or diagonal.
        """
        dc = to.col - self.col
        dr = to.row - self.row
        if dc == 0 and dr == 0:
            return NO_DIRECTION
        if dc != 0 and dr != 0 and abs(dc) != abs(dr):
            return NO_DIRECTION
        return _DIRECTION_OF[(_sign(dc), _sign(dr))]

    def distance(self, to: "Square") -> int:
        """Return the Chebyshev distance to ``to``.

        Only meaningful for squares aligned on a line of action.
        """
        return max(abs(to.col - self.col), abs(to.row - self.row))

    def is_valid_move(self, to: "Square") -> bool:
        """Return True iff a straight-line move from here to ``to`` is possible."""
        return self.direction(to) != NO_DIRECTION and 1 <= self.distance(to) < BOARD_SIZE

    def move_dest(self, direction: int, steps: int) -> Optional["Square"]:
        """Return the square ``steps`` away along ``direction``, or None off board."""
        if direction == NO_DIRECTION:
            return None
        dc, dr = DISPLACEMENTS[direction]
        col = self.col + dc * steps
        row = self.row + dr * steps
        if not exists(col, row):
            return None
        return ALL_SQUARES[row * BOARD_SIZE + col]

    def adjacent(self) -> List["Square"]:
        return [ALL_SQUARES[i] for i in NEIGHBORS[self.index]]

    def __str__(self) -> str:
        return chr(ord("a") + self.col) + str(self.row + 1)


ALL_SQUARES: Tuple[Square, ...] = tuple(
    Square(i % BOARD_SIZE, i // BOARD_SIZE) for i in range(BOARD_SIZE * BOARD_SIZE)
)


def _neighbors(idx: int) -> Tuple[int, ...]:
    col, row = idx % BOARD_SIZE, idx // BOARD_SIZE
    out = []
    for dc, dr in DISPLACEMENTS:
        if exists(col + dc, row + dr):
            out.append((row + dr) * BOARD_SIZE + col + dc)
    return tuple(out)


# Indices of the up-to-8 neighbours of each square, by square index
NEIGHBORS: Tuple[Tuple[int, ...], ...] = tuple(
    _neighbors(i) for i in range(BOARD_SIZE * BOARD_SIZE)
)


def sq(col: int, row: int) -> Square:
    """Return the interned square at (col, row).

    Raises:
        ValueError: If the coordinates are off board.
    """
    if not exists(col, row):
        raise ValueError(f"square off board: ({col}, {row})")
    return ALL_SQUARES[row * BOARD_SIZE + col]


def str_to_square(s: str) -> Square:
    """Convert a designator such as ``"c2"`` into a Square.

    Raises:
        ValueError: If ``s`` is not a valid designator.
    """
    if not isinstance(s, str) or not ROW_COL.fullmatch(s):
        raise ValueError(f"invalid square: {s!r}")
    return sq(ord(s[0]) - ord("a"), int(s[1]) - 1)


def square_to_str(idx: int) -> str:
    """Convert a 0-based square index into its designator.

    Raises:
        ValueError: If ``idx`` is outside 0..63.
    """
    if idx < 0 or idx >= BOARD_SIZE * BOARD_SIZE:
        raise ValueError(f"invalid square index: {idx}")
    return str(ALL_SQUARES[idx])
