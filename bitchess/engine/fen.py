from __future__ import annotations

from typing import List, Optional, Tuple

from .errors import (
    InvalidCastling,
    InvalidFEN,
    InvalidFieldCount,
    InvalidFullmove,
    InvalidHalfmove,
    InvalidSideColor,
    InvalidSquare,
)
from .piece import Color, PieceType, piece_from_char, piece_to_char
from .position import Castling, Position
from .sidemap import SideMap
from .square import Square


CASTLING_ORDER = "KQkq"


def position_from_fen(fen: str) -> Position:
    """Decode a FEN string into a fully populated :class:`Position`.

    Args:
        fen (str): ``<placement> <side> <castling> <en-passant> <halfmove>``
            optionally followed by ``<fullmove>``.

    Returns:
        Position: Position with occupancy and attack maps computed.

    Raises:
        InvalidFieldCount: If there are not 5 or 6 fields.
        InvalidFEN: On a bad placement character or a rank not summing to 8.
        InvalidSideColor: If the side field is not ``w`` or ``b``.
        InvalidCastling: On a castling letter outside ``KQkq``.
        InvalidSquare: If the en passant field is not ``-`` or a square.
        InvalidFormat: If the en passant field is a single character.
        InvalidHalfmove: If the halfmove clock is not an unsigned integer.
        InvalidFullmove: If the fullmove number is not a positive integer.
    """
    parts = fen.split()
    if len(parts) not in (5, 6):
        raise InvalidFieldCount(len(parts))
    placement, stm, castling, ep, halfmove = parts[:5]

    white, black = _parse_placement(placement)

    if stm == "w":
        side = Color.WHITE
    elif stm == "b":
        side = Color.BLACK
    else:
        raise InvalidSideColor(stm)

    white_castling, black_castling = _parse_castling(castling)

    # Malformed en passant squares are rejected rather than read as "none"
    en_passant: Optional[Square] = None
    if ep != "-":
        if len(ep) > 2:
            raise InvalidSquare(ep)
        en_passant = Square.parse(ep)

    if not _is_unsigned(halfmove):
        raise InvalidHalfmove(halfmove)
    fullmove = 1
    if len(parts) == 6:
        if not _is_unsigned(parts[5]) or int(parts[5]) == 0:
            raise InvalidFullmove(parts[5])
        fullmove = int(parts[5])

    return Position(
        white=white,
        black=black,
        side=side,
        white_castling=white_castling,
        black_castling=black_castling,
        en_passant=en_passant,
        halfmove=int(halfmove),
        fullmove=fullmove,
    )


def _is_unsigned(text: str) -> bool:
    return text.isascii() and text.isdigit()


def _parse_placement(placement: str) -> Tuple[SideMap, SideMap]:
    white = SideMap()
    black = SideMap()
    rank = 7
    file = 0
    for pos, ch in enumerate(placement):
        if ch == "/":
            if file != 8 or rank == 0:
                raise InvalidFEN(pos, ch)
            rank -= 1
            file = 0
        elif ch in "0123456789":
            n = int(ch)
            if n < 1 or file + n > 8:
                raise InvalidFEN(pos, ch)
            file += n
        else:
            piece = piece_from_char(ch)
            if piece is None or file >= 8:
                raise InvalidFEN(pos, ch)
            ptype, color = piece
            (white if color == Color.WHITE else black).set(ptype, file, rank)
            file += 1
    if file != 8 or rank != 0:
        raise InvalidFEN(len(placement), "")
    return white, black


def _parse_castling(field: str) -> Tuple[Castling, Castling]:
    if field == "-":
        return Castling(), Castling()
    for ch in field:
        if ch not in CASTLING_ORDER:
            raise InvalidCastling(field)
    return (
        Castling(king_side="K" in field, queen_side="Q" in field),
        Castling(king_side="k" in field, queen_side="q" in field),
    )


def position_to_fen(position: Position) -> str:
    """Serialize a position into canonical FEN.

    Castling rights are written in ``KQkq`` order and both counters are
    always emitted.
    """
    ranks: List[str] = []
    for rank in range(7, -1, -1):
        run = 0
        row: List[str] = []
        for file in range(8):
            occupant = position.piece_at(Square(file, rank))
            if occupant is None:
                run += 1
                continue
            if run > 0:
                row.append(str(run))
                run = 0
            row.append(piece_to_char(*occupant))
        if run > 0:
            row.append(str(run))
        ranks.append("".join(row))
    placement = "/".join(ranks)

    rights = []
    for color in (Color.WHITE, Color.BLACK):
        c = position.castling(color)
        if c.king_side:
            rights.append(piece_to_char(PieceType.KING, color))
        if c.queen_side:
            rights.append(piece_to_char(PieceType.QUEEN, color))
    castling = "".join(rights) or "-"
    ep = str(position.en_passant) if position.en_passant is not None else "-"
    return (
        f"{placement} {position.side.letter} {castling} {ep} "
        f"{position.halfmove} {position.fullmove}"
    )
