from __future__ import annotations

import pytest

from bitchess.engine.bitboard import BitBoard


OUT_OF_RANGE = [(8, 0), (0, 8), (8, 8), (-1, 0), (0, -1), (100, 3)]


def test_corner_bits_follow_rank_major_indexing() -> None:
    b = BitBoard()
    b.toggle(0, 0)
    assert int(b) == 1
    b.toggle(0, 0)
    assert int(b) == 0

    b.toggle(7, 7)
    assert b.get(7, 7) is True
    assert int(b) == 9223372036854775808
    b.toggle(7, 7)
    assert b.get(7, 7) is False
    assert int(b) == 0

    b.set(4, 3)  # e4
    assert int(b) == 1 << 28


def test_set_and_unset_are_idempotent() -> None:
    b = BitBoard()
    b.unset(7, 7)
    assert int(b) == 0
    b.set(7, 7)
    b.set(7, 7)
    assert int(b) == 1 << 63
    b.unset(7, 7)
    b.unset(7, 7)
    assert int(b) == 0


def test_double_toggle_restores_every_square() -> None:
    base = BitBoard(0x00FF00000000FF00)
    for rank in range(8):
        for file in range(8):
            b = base.copy()
            before = b.get(file, rank)
            b.toggle(file, rank)
            assert b.get(file, rank) is (not before)
            b.toggle(file, rank)
            assert b == base


@pytest.mark.parametrize("file,rank", OUT_OF_RANGE)
def test_out_of_range_access_is_permissive(file: int, rank: int) -> None:
    b = BitBoard(0x8100000000000081)
    assert b.get(file, rank) is None
    b.set(file, rank)
    b.toggle(file, rank)
    b.unset(file, rank)
    assert int(b) == 0x8100000000000081


def test_union_and_export() -> None:
    a = BitBoard(0b0011)
    b = BitBoard(0b0110)
    assert int(a | b) == 0b0111
    assert int(a) == 0b0011  # `|` does not mutate

    a.union_in_place(b)
    assert int(a) == 0b0111

    flat = a.to_list()
    assert len(flat) == 64
    assert flat[:4] == [1, 1, 1, 0]
    assert sum(flat) == 3


def test_squares_iterates_in_bit_order() -> None:
    b = BitBoard()
    b.set(7, 7)
    b.set(3, 4)
    b.set(0, 0)
    assert list(b.squares()) == [(0, 0), (3, 4), (7, 7)]
    assert b.count() == 3
    assert list(BitBoard().squares()) == []
    assert BitBoard().is_empty()
