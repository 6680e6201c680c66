from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Optional, Tuple

from src.engine.board import Board
from src.engine.move import Move
from src.engine.piece import Piece
from src.eval import INFTY, evaluate


logger = logging.getLogger(__name__)

DEFAULT_DEPTH = 4


@dataclass
class SearchResult:
    best_move: Optional[Move]
    score: int
    nodes: int
    cutoffs: int
    depth: int
    time_ms: int


class SearchService:
    """Depth-limited minimax with alpha-beta pruning for Lines of Action.

    Every child position is searched on its own copy of the board, so no
    retraction is needed while unwinding.
    """

    def search(
        self,
        board: Board,
        depth: int = DEFAULT_DEPTH,
        side: Optional[Piece] = None,
        movetime_ms: Optional[int] = None,
        *,
        enable_pruning: bool = True,
    ) -> SearchResult:
        """Search ``board`` for the best move of ``side``.

        Args:
            board (Board): Position to search; it is not modified.
            depth (int): Search depth in plies.
            side (Optional[Piece]): Maximizing side; defaults to the side to
                move and must equal it when given.
            movetime_ms (Optional[int]): Soft deadline. Once expired, nodes are
                scored statically and the best root move found so far is kept.
            enable_pruning (bool): When False, search the full minimax tree.

        Returns:
            SearchResult: Best move (None when the root is a leaf), its score
                from ``side``'s point of view, and search statistics.

        Raises:
            ValueError: If ``depth`` is negative or ``side`` is not on move.
        """
        if depth < 0:
            raise ValueError("depth must be >= 0")
        work = board.copy()
        if side is None:
            side = work.turn()
        if side is not work.turn():
            raise ValueError(f"not {side.full_name}'s turn")

        nodes = 0
        cutoffs = 0

        # Time control
        start = time.perf_counter()
        time_up = False

        def out_of_time() -> bool:
            nonlocal time_up
            if movetime_ms is None or time_up:
                return time_up
            elapsed_ms = int((time.perf_counter() - start) * 1000)
            if elapsed_ms >= movetime_ms:
                time_up = True
            return time_up

        def find_move(b: Board, d: int, alpha: int, beta: int) -> Tuple[int, Optional[Move]]:
            nonlocal nodes, cutoffs
            nodes += 1

            # Leaf or terminal; the root is always expanded once
            if d <= 0 or b.winner() is not None or (b is not work and out_of_time()):
                return evaluate(b, side, d), None
            legal = b.legal_moves()
            if not legal:
                return evaluate(b, side, d), None

            if b.turn() is side:
                best_val = -INFTY
                best_move: Optional[Move] = None
                for m in legal:
                    child = b.apply(m)
                    val, _ = find_move(child, d - 1, alpha, beta)
                    # Strict improvement only: the first move reaching a value keeps it
                    if val > best_val:
                        best_val = val
                        best_move = m
                    alpha = max(alpha, best_val)
                    if enable_pruning and beta <= alpha:
                        cutoffs += 1
                        break
                return best_val, best_move

            best_val = INFTY
            for m in legal:
                child = b.apply(m)
                val, _ = find_move(child, d - 1, alpha, beta)
                best_val = min(best_val, val)
                beta = min(beta, best_val)
                if enable_pruning and beta <= alpha:
                    cutoffs += 1
                    break
            return best_val, None

        score, best_move = find_move(work, depth, -INFTY, INFTY)
        time_ms = int((time.perf_counter() - start) * 1000)
        logger.debug(
            "search done",
            extra={
                "best_move": str(best_move) if best_move else None,
                "score": score,
                "nodes": nodes,
                "depth": depth,
                "time_ms": time_ms,
            },
        )
        return SearchResult(
            best_move=best_move,
            score=score,
            nodes=nodes,
            cutoffs=cutoffs,
            depth=depth,
            time_ms=time_ms,
        )
