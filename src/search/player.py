from __future__ import annotations

from typing import Optional

from src.engine.board import Board
from src.engine.game import Game
from src.engine.move import Move
from src.engine.piece import Piece

from .service import DEFAULT_DEPTH, SearchService


class MachinePlayer:
    """Automated player for one side, choosing moves by alpha-beta search."""

    def __init__(
        self,
        side: Piece,
        game: Optional[Game] = None,
        depth: int = DEFAULT_DEPTH,
        service: Optional[SearchService] = None,
    ) -> None:
        self.side = side
        self.game = game
        self.depth = depth
        self.service = service or SearchService()

    def choose_move(self, board: Board) -> Move:
        """Return the move this player makes on ``board``.

        Raises:
            ValueError: If it is not this player's turn or there is no move
                to make.
        """
        if board.turn() is not self.side:
            raise ValueError(f"not {self.side.full_name}'s turn")
        res = self.service.search(board, depth=self.depth, side=self.side)
        if res.best_move is None:
            raise ValueError("no move available")
        return res.best_move

    def get_move(self) -> str:
        """Choose a move on the game's board, report it to the game, and return its text."""
        if self.game is None:
            raise ValueError("player is not attached to a game")
        choice = self.choose_move(self.game.board)
        self.game.report_move(choice)
        return str(choice)
