from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from .errors import InvalidFormat
from .piece import PieceType
from .square import Square


@dataclass(frozen=True)
class StateChange:
    """Side effects of a move that undo must reverse."""

    captured: Optional[PieceType] = None


@dataclass(frozen=True)
class Move:
    """Engine-internal move representation.

    Attributes:
        from_sq (Square): Origin square.
        to_sq (Square): Destination square.
        piece (PieceType): Type of the moving piece.
        change (StateChange): Captured piece type, if any.
    """

    from_sq: Square
    to_sq: Square
    piece: PieceType
    change: StateChange = field(default_factory=StateChange)

    @property
    def captured(self) -> Optional[PieceType]:
        return self.change.captured

    def to_text(self) -> str:
        """Serialize as origin and destination, e.g. ``"e5f4"``."""
        return str(self.from_sq) + str(self.to_sq)


def parse_squares(text: str) -> Tuple[Square, Square]:
    """Split move text like ``"e2e4"`` into its two squares.

    Raises:
        InvalidFormat: If ``text`` is not exactly four characters.
        InvalidSquare: If either half is not a square.
    """
    if len(text) != 4:
        raise InvalidFormat(text, "move must be 4 characters")
    return Square.parse(text[0:2]), Square.parse(text[2:4])
