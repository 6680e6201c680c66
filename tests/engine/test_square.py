from __future__ import annotations

import pytest

from src.engine.square import (
    ALL_SQUARES,
    E,
    N,
    NE,
    NO_DIRECTION,
    S,
    SW,
    Square,
    exists,
    sq,
    square_to_str,
    str_to_square,
)


def test_exists_bounds() -> None:
    assert exists(0, 0)
    assert exists(7, 7)
    assert not exists(-1, 3)
    assert not exists(3, 8)


def test_square_rejects_off_board_coordinates() -> None:
    with pytest.raises(ValueError):
        Square(8, 0)
    with pytest.raises(ValueError):
        sq(0, -1)


def test_index_and_designators() -> None:
    c2 = str_to_square("c2")
    assert (c2.col, c2.row) == (2, 1)
    assert c2.index == 10
    assert str(c2) == "c2"
    assert square_to_str(63) == "h8"
    assert ALL_SQUARES[10] is c2
    assert sq(2, 1) == Square(2, 1)


@pytest.mark.parametrize("text", ["", "i1", "a0", "a9", "A1", "a10", "c2\n", "c"])
def test_invalid_designators(text: str) -> None:
    with pytest.raises(ValueError):
        str_to_square(text)


def test_direction_and_distance() -> None:
    a1 = str_to_square("a1")
    assert a1.direction(str_to_square("a5")) == N
    assert a1.direction(str_to_square("c3")) == NE
    assert a1.direction(str_to_square("h1")) == E
    assert str_to_square("d4").direction(str_to_square("d1")) == S
    assert str_to_square("d4").direction(str_to_square("a1")) == SW
    assert a1.direction(str_to_square("b3")) == NO_DIRECTION
    assert a1.direction(a1) == NO_DIRECTION
    assert a1.distance(str_to_square("c3")) == 2
    assert a1.distance(str_to_square("a8")) == 7


def test_is_valid_move() -> None:
    a1 = str_to_square("a1")
    assert a1.is_valid_move(str_to_square("h8"))
    assert a1.is_valid_move(str_to_square("a2"))
    assert not a1.is_valid_move(a1)
    assert not a1.is_valid_move(str_to_square("b3"))


def test_adjacent_counts() -> None:
    assert len(str_to_square("a1").adjacent()) == 3
    assert len(str_to_square("a4").adjacent()) == 5
    center = str_to_square("d4")
    names = {str(s) for s in center.adjacent()}
    assert names == {"c3", "c4", "c5", "d3", "d5", "e3", "e4", "e5"}


def test_move_dest_off_board_is_none() -> None:
    a1 = str_to_square("a1")
    assert a1.move_dest(NE, 3) == str_to_square("d4")
    assert a1.move_dest(S, 1) is None
    assert a1.move_dest(N, 8) is None
    assert a1.move_dest(NO_DIRECTION, 1) is None
