from __future__ import annotations

from enum import IntEnum
from typing import Optional, Tuple


class PieceType(IntEnum):
    # Ordinals index the per-type boards of a SideMap
    KING = 0
    QUEEN = 1
    ROOK = 2
    BISHOP = 3
    KNIGHT = 4
    PAWN = 5

    @property
    def letter(self) -> str:
        """Lowercase FEN letter."""
        return _LETTERS[self]


class Color(IntEnum):
    WHITE = 0
    BLACK = 1

    def other(self) -> "Color":
        return Color.BLACK if self == Color.WHITE else Color.WHITE

    @property
    def letter(self) -> str:
        return "w" if self == Color.WHITE else "b"


_LETTERS = {
    PieceType.KING: "k",
    PieceType.QUEEN: "q",
    PieceType.ROOK: "r",
    PieceType.BISHOP: "b",
    PieceType.KNIGHT: "n",
    PieceType.PAWN: "p",
}
_PIECES = {
    "K": (PieceType.KING, Color.WHITE),
    "Q": (PieceType.QUEEN, Color.WHITE),
    "R": (PieceType.ROOK, Color.WHITE),
    "B": (PieceType.BISHOP, Color.WHITE),
    "N": (PieceType.KNIGHT, Color.WHITE),
    "P": (PieceType.PAWN, Color.WHITE),
    "k": (PieceType.KING, Color.BLACK),
    "q": (PieceType.QUEEN, Color.BLACK),
    "r": (PieceType.ROOK, Color.BLACK),
    "b": (PieceType.BISHOP, Color.BLACK),
    "n": (PieceType.KNIGHT, Color.BLACK),
    "p": (PieceType.PAWN, Color.BLACK),
}


def piece_from_char(ch: str) -> Optional[Tuple[PieceType, Color]]:
    """Decode a FEN piece letter; uppercase is white, lowercase black.

    Returns ``None`` for anything that is not one of ``KQRBNPkqrbnp``.
    """
    return _PIECES.get(ch)


def piece_to_char(ptype: PieceType, color: Color) -> str:
    c = _LETTERS[ptype]
    return c.upper() if color == Color.WHITE else c


def piece_type_from_letter(ch: str) -> PieceType:
    """Decode a piece letter ignoring case.

    Raises:
        ValueError: If ``ch`` is not a piece letter.
    """
    piece = _PIECES.get(ch)
    if piece is None:
        raise ValueError(f"invalid piece letter: {ch!r}")
    return piece[0]
