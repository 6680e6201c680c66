from __future__ import annotations

import logging

import pytest

from src.engine.board import STARTPOS_LAYOUT
from src.engine.game import Game
from src.engine.move import parse_move
from src.engine.piece import BLACK, WHITE


def test_new_game_starts_with_black() -> None:
    g = Game.new()
    assert g.to_layout() == STARTPOS_LAYOUT
    assert g.board.turn() is BLACK
    assert len(g.legal_moves()) == 36
    assert not g.game_over()
    assert g.winner() is None


def test_apply_and_undo() -> None:
    g = Game.new()
    g.apply_move(parse_move("b1-b3"))
    g.apply_move(parse_move("a2-c2"))
    assert g.move_history_str() == ["b1-b3", "a2-c2"]
    g.undo_move()
    assert g.move_history_str() == ["b1-b3"]
    assert g.board.turn() is WHITE
    g.undo_move()
    assert g.to_layout() == STARTPOS_LAYOUT


def test_apply_rejects_illegal_move() -> None:
    g = Game.new()
    with pytest.raises(ValueError, match="illegal move"):
        g.apply_move(parse_move("a2-a4"))
    assert g.to_layout() == STARTPOS_LAYOUT


def test_apply_rejects_moves_after_game_end() -> None:
    g = Game.from_layout("--------/--------/--------/---bb---/--------/--------/--------/w------w w")
    assert g.game_over()
    assert g.winner() is BLACK
    with pytest.raises(ValueError, match="game is over"):
        g.apply_move(parse_move("a1-b1"))


def test_undo_without_moves_raises() -> None:
    with pytest.raises(ValueError, match="no moves to undo"):
        Game.new().undo_move()


def test_report_move_records_without_applying(caplog: pytest.LogCaptureFixture) -> None:
    g = Game.new()
    m = parse_move("c1-c3")
    with caplog.at_level(logging.INFO, logger="src.engine.game"):
        g.report_move(m)
    assert g.reported == [m]
    assert g.to_layout() == STARTPOS_LAYOUT
    assert any(r.getMessage() == "move reported" for r in caplog.records)
