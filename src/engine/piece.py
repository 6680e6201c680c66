from __future__ import annotations

from enum import Enum


class Piece(Enum):
    """Contents of a square; BLACK and WHITE double as the sides to move."""

    EMPTY = "-"
    BLACK = "b"
    WHITE = "w"

    @property
    def abbrev(self) -> str:
        return self.value

    @property
    def full_name(self) -> str:
        return self.name.lower()

    def opposite(self) -> "Piece":
        if self is Piece.BLACK:
            return Piece.WHITE
        if self is Piece.WHITE:
            return Piece.BLACK
        return Piece.EMPTY


EMPTY = Piece.EMPTY
BLACK = Piece.BLACK
WHITE = Piece.WHITE
