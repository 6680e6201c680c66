from __future__ import annotations

import pytest

from src.engine.board import STARTPOS_LAYOUT, Board
from src.engine.perft import perft, perft_divide
from src.engine.piece import BLACK, WHITE


def test_perft_startpos_depth_1(start_board: Board) -> None:
    assert perft(start_board, 0) == 1
    assert perft(start_board, 1) == 36


def test_perft_depth_2_matches_copy_based_count(start_board: Board) -> None:
    expected = sum(len(start_board.apply(m).legal_moves()) for m in start_board.legal_moves())
    assert perft(start_board, 2) == expected
    # make/retract leaves the board as it was
    assert start_board.to_layout() == STARTPOS_LAYOUT
    assert start_board.moves_made() == 0


def test_perft_stops_at_decided_positions(board_with) -> None:
    b = board_with({"d4": BLACK, "e4": BLACK, "a1": WHITE, "h8": WHITE}, WHITE)
    assert b.game_over()
    assert perft(b, 3) == 1


def test_perft_rejects_negative_depth(start_board: Board) -> None:
    with pytest.raises(ValueError):
        perft(start_board, -1)


def test_divide_sums_to_perft(start_board: Board) -> None:
    counts = perft_divide(start_board, 2)
    assert len(counts) == 36
    assert next(iter(counts)) == "b1-h1"
    assert sum(counts.values()) == perft(start_board, 2)
    with pytest.raises(ValueError):
        perft_divide(start_board, 0)
