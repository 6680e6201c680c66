from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .board import Board
from .move import Move
from .piece import Piece


logger = logging.getLogger(__name__)


@dataclass
class Game:
    """Game wrapper around a board with helper operations.

    Responsibility: hold the board, validate moves applied from outside, and
    collect the moves reported by automated players.
    """

    board: Board
    reported: List[Move] = field(default_factory=list)

    @classmethod
    def new(cls) -> "Game":
        return cls(board=Board.startpos())

    @classmethod
    def from_layout(cls, layout: str) -> "Game":
        return cls(board=Board.from_layout(layout))

    def to_layout(self) -> str:
        return self.board.to_layout()

    def legal_moves(self) -> List[Move]:
        return self.board.legal_moves()

    def apply_move(self, move: Move) -> None:
        if self.board.game_over():
            raise ValueError("game is over")
        if not self.board.is_legal(move):
            raise ValueError("illegal move")
        self.board.make_move(move)

    def undo_move(self) -> None:
        if self.board.moves_made() == 0:
            raise ValueError("no moves to undo")
        self.board.retract()

    def report_move(self, move: Move) -> None:
        """Record a move chosen by an automated player."""
        logger.info(
            "move reported",
            extra={"move": str(move), "side": self.board.turn().full_name},
        )
        self.reported.append(move)

    # --- State flags for protocol ---
    def game_over(self) -> bool:
        return self.board.game_over()

    def winner(self) -> Optional[Piece]:
        return self.board.winner()

    def move_history_str(self) -> List[str]:
        return [str(m) for m in self.board.history()]
