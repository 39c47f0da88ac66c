from __future__ import annotations

import pytest

from bitchess.engine.errors import (
    InvalidCastling,
    InvalidFEN,
    InvalidFieldCount,
    InvalidFormat,
    InvalidFullmove,
    InvalidHalfmove,
    InvalidSideColor,
    InvalidSquare,
)
from bitchess.engine.fen import position_from_fen, position_to_fen
from bitchess.engine.piece import Color, PieceType
from bitchess.engine.position import STARTPOS_FEN, Castling, GameState
from bitchess.engine.square import Square


def test_startpos_round_trip() -> None:
    pos = position_from_fen(STARTPOS_FEN)
    assert position_to_fen(pos) == STARTPOS_FEN
    assert pos.side == Color.WHITE
    assert pos.white_castling == Castling(True, True)
    assert pos.black_castling == Castling(True, True)
    assert pos.en_passant is None
    assert pos.halfmove == 0 and pos.fullmove == 1
    assert pos.history == []
    assert pos.state == GameState.normal()


def test_startpos_boards() -> None:
    pos = position_from_fen(STARTPOS_FEN)
    assert int(pos.white_all) == 0x000000000000FFFF
    assert int(pos.black_all) == 0xFFFF000000000000
    assert int(pos.white.board(PieceType.PAWN)) == 0x000000000000FF00
    assert int(pos.black.board(PieceType.KING)) == 1 << 60
    assert int(pos.white.board(PieceType.QUEEN)) == 1 << 3
    assert pos.white_all == pos.white.combine()
    assert pos.black_all == pos.black.combine()


@pytest.mark.parametrize(
    "fen",
    [
        "r1bqkbnr/pppp1ppp/2n5/4p3/3P4/5N2/PPP1PPPP/RNBQKB1R b KQ - 2 3",
        "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b - e3 0 1",
        "r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1",
        "rnbqkb1r/pppp1ppp/5n2/4p3/4PP2/2N5/PPPP2PP/R1BQKBNR b KQkq f3 0 3",
        "8/8/8/8/8/8/8/8 w - - 99 120",
    ],
)
def test_round_trip_various_positions(fen: str) -> None:
    assert position_to_fen(position_from_fen(fen)) == fen


def test_five_fields_default_fullmove() -> None:
    pos = position_from_fen("4k3/8/8/8/8/8/8/4K3 b - - 7")
    assert pos.side == Color.BLACK
    assert pos.halfmove == 7
    assert pos.fullmove == 1


def test_castling_letters_set_matching_rights() -> None:
    pos = position_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w qK - 0 1")
    assert pos.white_castling == Castling(king_side=True, queen_side=False)
    assert pos.black_castling == Castling(king_side=False, queen_side=True)
    assert position_to_fen(pos).split()[2] == "Kq"


def test_en_passant_square_decoded() -> None:
    pos = position_from_fen("rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1")
    assert pos.en_passant == Square(4, 2)


def test_rank_with_seven_squares_fails() -> None:
    with pytest.raises(InvalidFEN) as exc:
        position_from_fen("rnbqkbn/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1")
    assert exc.value.position == 7
    assert exc.value.char == "/"

    with pytest.raises(InvalidFEN) as exc:
        position_from_fen("rnbqkbnr/pppppppp/7/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1")
    assert exc.value.position == 19


def test_missing_separator_overflows_rank() -> None:
    with pytest.raises(InvalidFEN) as exc:
        position_from_fen("rnbqkbnrpppppppp/8/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1")
    assert (exc.value.position, exc.value.char) == (8, "p")


def test_unknown_piece_reports_position_and_char() -> None:
    with pytest.raises(InvalidFEN) as exc:
        position_from_fen("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNX w KQkq - 0 1")
    assert (exc.value.position, exc.value.char) == (42, "X")


@pytest.mark.parametrize(
    "fen,error",
    [
        ("", InvalidFieldCount),
        ("8/8/8/8/8/8/8/8 w - -", InvalidFieldCount),
        ("8/8/8/8/8/8/8/8 w - - 0 1 extra", InvalidFieldCount),
        ("8/8/8/8/8/8/8 w - - 0 1", InvalidFEN),  # not enough ranks
        ("8/8/8/8/8/8/8/8/8 w - - 0 1", InvalidFEN),  # too many ranks
        ("9/8/8/8/8/8/8/8 w - - 0 1", InvalidFEN),
        ("0/8/8/8/8/8/8/8 w - - 0 1", InvalidFEN),
        ("\u212a7/8/8/8/8/8/8/7k w - - 0 1", InvalidFEN),  # Kelvin sign, not K
        ("8/8/8/8/8/8/8/8 x - - 0 1", InvalidSideColor),
        ("8/8/8/8/8/8/8/8 W - - 0 1", InvalidSideColor),
        ("8/8/8/8/8/8/8/8 w A - 0 1", InvalidCastling),
        ("8/8/8/8/8/8/8/8 w - z9 0 1", InvalidSquare),
        ("8/8/8/8/8/8/8/8 w - e33 0 1", InvalidSquare),
        ("8/8/8/8/8/8/8/8 w - e 0 1", InvalidFormat),
        ("8/8/8/8/8/8/8/8 w - - x 1", InvalidHalfmove),
        ("8/8/8/8/8/8/8/8 w - - -1 1", InvalidHalfmove),
        ("8/8/8/8/8/8/8/8 w - - 0 0", InvalidFullmove),
        ("8/8/8/8/8/8/8/8 w - - 0 one", InvalidFullmove),
    ],
)
def test_decode_errors(fen: str, error) -> None:
    with pytest.raises(error):
        position_from_fen(fen)


@pytest.mark.parametrize(
    "fen",
    [
        "",
        "8/8/8/8/8/8/8/8 x - - 0 1",
        "8/8/8/8/8/8/8/8 w - a9 0 1",
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNX w KQkq - 0 1",
    ],
)
def test_decode_errors_are_value_errors(fen: str) -> None:
    with pytest.raises(ValueError):
        position_from_fen(fen)
