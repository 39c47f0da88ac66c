from __future__ import annotations

from dataclasses import dataclass

from .errors import InvalidFormat, InvalidSquare


FILES = "abcdefgh"
RANKS = "12345678"


@dataclass(frozen=True)
class Square:
    """Board coordinate.

    Attributes:
        file (int): 0..7 for files a..h.
        rank (int): 0..7 for ranks 1..8.
    """

    file: int
    rank: int

    @classmethod
    def parse(cls, text: str) -> "Square":
        """Decode algebraic notation such as ``"e4"``.

        Only the first two characters are read.

        Args:
            text (str): Square name.

        Returns:
            Square: Decoded coordinate.

        Raises:
            InvalidFormat: If ``text`` is shorter than two characters.
            InvalidSquare: If the file letter is outside ``a..h`` or the rank
                digit outside ``1..8``.
        """
        if len(text) < 2:
            raise InvalidFormat(text)
        f, r = text[0], text[1]
        if f not in FILES or r not in RANKS:
            raise InvalidSquare(text)
        return cls(FILES.index(f), RANKS.index(r))

    @classmethod
    def from_index(cls, idx: int) -> "Square":
        if idx < 0 or idx > 63:
            raise ValueError(f"invalid square index: {idx}")
        return cls(idx % 8, idx // 8)

    @property
    def index(self) -> int:
        return self.rank * 8 + self.file

    def __str__(self) -> str:
        return FILES[self.file] + RANKS[self.rank]
