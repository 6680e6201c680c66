"""Evaluation heuristics for Lines of Action positions.

Pure, deterministic, and side-effect free.
"""

from __future__ import annotations

from typing import Final, List

from src.engine.board import Board
from src.engine.piece import BLACK, WHITE, Piece


# A position-score magnitude indicating a decided game
WINNING_VALUE: Final = 2**31 - 1 - 20
# A magnitude greater than any score
INFTY: Final = 2**31 - 1

# Heuristic weights
REGION_COUNT_WEIGHT: Final = 1000
LARGEST_REGION_WEIGHT: Final = 10


def _spread(sizes: List[int]) -> int:
    # Fewer regions is better; a side with no pieces contributes nothing
    return REGION_COUNT_WEIGHT // len(sizes) if sizes else 0


def _largest(sizes: List[int]) -> int:
    return sizes[0] if sizes else 0


def evaluate(board: Board, side: Piece, depth: int) -> int:
    """Score ``board`` from ``side``'s point of view.

    Args:
        board (Board): Position to score.
        side (Piece): The maximizing side.
        depth (int): Remaining search depth at this node.

    Returns:
        int: ``WINNING_VALUE + depth`` if ``side`` has won,
            ``-WINNING_VALUE - depth`` if it has lost, otherwise a region
            score rewarding fewer, larger groups.

    Notes:
        Adding the remaining depth makes quicker wins score higher. It also
        makes deeper losses score less negative, so a lost position prefers to
        delay the loss only within the search horizon.
    """
    winner = board.winner()
    if winner is side:
        return WINNING_VALUE + depth
    if winner is side.opposite():
        return -WINNING_VALUE - depth

    white = board.region_sizes(WHITE)
    black = board.region_sizes(BLACK)
    value = (
        _spread(white)
        - _spread(black)
        + LARGEST_REGION_WEIGHT * _largest(white)
        - LARGEST_REGION_WEIGHT * _largest(black)
    )
    if side is BLACK:
        value = -value
    return value
