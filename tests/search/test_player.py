from __future__ import annotations

import pytest

from src.engine.game import Game
from src.engine.piece import BLACK, WHITE
from src.search.player import MachinePlayer


WIN_IN_ONE = "--------/----w---/--------/--------/-------w/--------/--b-----/b------- b"


def test_get_move_reports_to_game() -> None:
    game = Game.from_layout(WIN_IN_ONE)
    player = MachinePlayer(BLACK, game, depth=2)
    assert player.get_move() == "a1-b1"
    assert [str(m) for m in game.reported] == ["a1-b1"]
    # reporting does not play the move
    assert game.to_layout() == WIN_IN_ONE


def test_choose_move_requires_turn() -> None:
    game = Game.from_layout(WIN_IN_ONE)
    with pytest.raises(ValueError):
        MachinePlayer(WHITE, game, depth=1).choose_move(game.board)


def test_choose_move_on_decided_board_raises(board_with) -> None:
    b = board_with({"d4": BLACK, "e4": BLACK, "a1": WHITE, "h8": WHITE}, WHITE)
    with pytest.raises(ValueError):
        MachinePlayer(WHITE, depth=2).choose_move(b)


def test_get_move_needs_a_game() -> None:
    with pytest.raises(ValueError):
        MachinePlayer(BLACK).get_move()
