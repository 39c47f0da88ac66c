from __future__ import annotations

import pytest

from bitchess.engine.errors import InvalidFormat, InvalidSquare, NotationError
from bitchess.engine.move import parse_squares
from bitchess.engine.square import Square


def test_parse_a8() -> None:
    sq = Square.parse("a8")
    assert (sq.file, sq.rank) == (0, 7)
    assert sq.index == 56
    assert str(sq) == "a8"


@pytest.mark.parametrize(
    "text,file,rank",
    [("a1", 0, 0), ("h1", 7, 0), ("e4", 4, 3), ("h8", 7, 7)],
)
def test_parse_valid(text: str, file: int, rank: int) -> None:
    sq = Square.parse(text)
    assert (sq.file, sq.rank) == (file, rank)
    assert Square.from_index(sq.index) == sq


@pytest.mark.parametrize("text", ["", "a"])
def test_too_short_is_invalid_format(text: str) -> None:
    with pytest.raises(InvalidFormat):
        Square.parse(text)


@pytest.mark.parametrize("text", ["a9", "a0", "i1", "A1", "`1", "11"])
def test_out_of_range_is_invalid_square(text: str) -> None:
    with pytest.raises(InvalidSquare):
        Square.parse(text)


def test_errors_are_value_errors() -> None:
    with pytest.raises(ValueError):
        Square.parse("z9")
    assert issubclass(InvalidSquare, NotationError)


def test_from_index_bounds() -> None:
    assert str(Square.from_index(0)) == "a1"
    assert str(Square.from_index(63)) == "h8"
    with pytest.raises(ValueError):
        Square.from_index(64)


def test_parse_squares() -> None:
    fr, to = parse_squares("e5f4")
    assert str(fr) == "e5" and str(to) == "f4"
    with pytest.raises(InvalidFormat):
        parse_squares("e5")
    with pytest.raises(InvalidSquare):
        parse_squares("e5f9")
