from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Tuple

from .square import ALL_SQUARES, BOARD_SIZE, Square, str_to_square


_MOVE_TEXT = re.compile(r"^([a-h][1-8])-([a-h][1-8])$")


@dataclass(frozen=True)
class Move:
    """Relocation of one piece along a line of action.

    Attributes:
        from_sq (Square): Origin square.
        to_sq (Square): Destination square.
        is_capture (bool): True when the destination holds an opposing piece.
    """

    from_sq: Square
    to_sq: Square
    is_capture: bool = False

    def capture_move(self) -> "Move":
        """Return the capturing variant of this move (same endpoints)."""
        if self.is_capture:
            return self
        key = (self.from_sq.index, self.to_sq.index)
        return _CAPTURES.get(key, replace(self, is_capture=True))

    def __str__(self) -> str:
        return f"{self.from_sq}-{self.to_sq}"


def _build_universe() -> Tuple[
    Tuple[Move, ...],
    Tuple[Tuple[Move, ...], ...],
    Dict[Tuple[int, int], Move],
    Dict[Tuple[int, int], Move],
]:
    plain: Dict[Tuple[int, int], Move] = {}
    captures: Dict[Tuple[int, int], Move] = {}
    by_origin: List[Tuple[Move, ...]] = []
    for origin in ALL_SQUARES:
        dests: List[Square] = []
        for direction in range(8):
            for steps in range(1, BOARD_SIZE):
                dest = origin.move_dest(direction, steps)
                if dest is None:
                    break
                dests.append(dest)
        row: List[Move] = []
        for dest in sorted(dests, key=lambda s: s.index):
            key = (origin.index, dest.index)
            plain[key] = Move(origin, dest)
            captures[key] = Move(origin, dest, True)
            row.append(plain[key])
        by_origin.append(tuple(row))
    everything = tuple(m for row in by_origin for m in row)
    return everything, tuple(by_origin), plain, captures


# Every geometrically possible non-capturing move, ordered by origin index then
# destination index. Computed once; depends only on the grid.
ALL_MOVES, MOVES_BY_ORIGIN, _PLAIN, _CAPTURES = _build_universe()


def mv(from_sq: Square, to_sq: Square, capture: bool = False) -> Optional[Move]:
    """Return the interned move between two squares, or None if not on a line."""
    table = _CAPTURES if capture else _PLAIN
    return table.get((from_sq.index, to_sq.index))


def parse_move(text: str) -> Move:
    """Parse a move written like ``"c2-c4"``.

    Returns:
        Move: The interned non-capturing move.

    Raises:
        ValueError: If the text is malformed or the squares are not on a
            common row, column or diagonal.
    """
    m = _MOVE_TEXT.fullmatch(text.strip()) if isinstance(text, str) else None
    if m is None:
        raise ValueError(f"invalid move: {text!r}")
    move = mv(str_to_square(m.group(1)), str_to_square(m.group(2)))
    if move is None:
        raise ValueError(f"not a straight-line move: {text!r}")
    return move
