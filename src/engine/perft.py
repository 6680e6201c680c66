from __future__ import annotations

from typing import Dict

from .board import Board


def perft(board: Board, depth: int) -> int:
    """Compute perft node count for `board` at `depth`.

    Definition:
    - depth == 0 returns 1 (the current node).
    - a decided position returns 1; play does not continue past a win or tie.
    - depth > 0 returns the sum over all legal child positions' perft(depth-1).

    Children are visited with make/retract on `board` itself, so the board is
    restored to its starting state on return.
    """
    if depth < 0:
        raise ValueError("depth must be >= 0")
    if depth == 0 or board.game_over():
        return 1

    nodes = 0
    for m in board.legal_moves():
        board.make_move(m)
        nodes += perft(board, depth - 1)
        board.retract()
    return nodes


def perft_divide(board: Board, depth: int) -> Dict[str, int]:
    """Split perft(depth) by root move, keyed by move text in move order."""
    if depth < 1:
        raise ValueError("depth must be >= 1")
    counts: Dict[str, int] = {}
    for m in board.legal_moves():
        board.make_move(m)
        counts[str(m)] = perft(board, depth - 1)
        board.retract()
    return counts
