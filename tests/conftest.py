import os
import sys
from typing import Dict

import pytest


# Ensure the repository root (which contains `src/`) is on sys.path for `from src...` imports
REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from src.engine.board import Board  # noqa: E402
from src.engine.piece import EMPTY, Piece  # noqa: E402
from src.engine.square import str_to_square  # noqa: E402


def make_board(pieces: Dict[str, Piece], turn: Piece) -> Board:
    """Build a board holding only `pieces` (designator -> piece)."""
    board = Board(cells=[EMPTY] * 64, side_to_move=turn)
    for name, piece in pieces.items():
        board.set(str_to_square(name), piece)
    return board


@pytest.fixture
def start_board() -> Board:
    return Board.startpos()


@pytest.fixture
def board_with():
    return make_board
