from __future__ import annotations

from src.engine.board import Board
from src.engine.piece import BLACK, WHITE


def _walk(board: Board, plies: int, pick: int) -> list[Board]:
    """Play a deterministic line, returning every position visited."""
    seen = [board.copy()]
    for _ in range(plies):
        moves = board.legal_moves()
        if not moves or board.game_over():
            break
        board.make_move(moves[pick % len(moves)])
        seen.append(board.copy())
    return seen


def test_start_regions(start_board: Board) -> None:
    assert start_board.region_sizes(WHITE) == [6, 6]
    assert start_board.region_sizes(BLACK) == [6, 6]
    assert not start_board.pieces_contiguous(WHITE)


def test_regions_sorted_descending(board_with) -> None:
    b = board_with(
        {"a1": WHITE, "h8": WHITE, "h7": WHITE, "d4": WHITE, "e5": WHITE, "f6": WHITE}, BLACK
    )
    assert b.region_sizes(WHITE) == [3, 2, 1]
    assert b.region_sizes(BLACK) == []


def test_region_sizes_sum_to_piece_count(start_board: Board) -> None:
    for pick in (0, 7, 13):
        for pos in _walk(start_board.copy(), 24, pick):
            for side in (BLACK, WHITE):
                sizes = pos.region_sizes(side)
                assert sum(sizes) == pos.piece_count(side)
                assert sizes == sorted(sizes, reverse=True)
                assert pos.pieces_contiguous(side) == (len(sizes) == 1)


def test_regions_refresh_after_retract(start_board: Board) -> None:
    b = start_board
    for m in b.legal_moves():
        b.make_move(m)
        moved = b.region_sizes(BLACK)
        assert sum(moved) == 12
        b.retract()
        assert b.region_sizes(BLACK) == [6, 6]
