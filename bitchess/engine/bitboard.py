from __future__ import annotations

from typing import Iterator, List, Optional, Tuple


MASK64 = 0xFFFFFFFFFFFFFFFF


def _in_range(file: int, rank: int) -> bool:
    return 0 <= file <= 7 and 0 <= rank <= 7


class BitBoard:
    """Set of squares packed into a 64-bit word.

    Notes:
    - Bit index is ``rank * 8 + file`` (a1=0 .. h8=63).
    - Coordinate access is permissive: out-of-range reads return ``None`` and
      out-of-range writes do nothing, so edge-walking loops need no guards.
    """

    __slots__ = ("_bits",)

    def __init__(self, bits: int = 0) -> None:
        self._bits = bits & MASK64

    def get(self, file: int, rank: int) -> Optional[bool]:
        """Return whether the square is set.

        Args:
            file (int): File index, 0 for the a-file.
            rank (int): Rank index, 0 for the first rank.

        Returns:
            Optional[bool]: ``None`` when the coordinates are off the board.
        """
        if not _in_range(file, rank):
            return None
        return (self._bits >> (rank * 8 + file)) & 1 == 1

    def set(self, file: int, rank: int) -> None:
        if _in_range(file, rank):
            self._bits |= 1 << (rank * 8 + file)

    def unset(self, file: int, rank: int) -> None:
        if _in_range(file, rank):
            self._bits &= ~(1 << (rank * 8 + file)) & MASK64

    def toggle(self, file: int, rank: int) -> None:
        if _in_range(file, rank):
            self._bits ^= 1 << (rank * 8 + file)

    def union_in_place(self, other: BitBoard) -> None:
        self._bits |= other._bits

    def union(self, other: BitBoard) -> BitBoard:
        return BitBoard(self._bits | other._bits)

    def __ior__(self, other: BitBoard) -> BitBoard:
        self.union_in_place(other)
        return self

    def __or__(self, other: BitBoard) -> BitBoard:
        return self.union(other)

    def to_list(self) -> List[int]:
        """Export as 64 indicators (0/1), position ``i`` holding bit ``i``."""
        return [(self._bits >> i) & 1 for i in range(64)]

    def squares(self) -> Iterator[Tuple[int, int]]:
        """Yield ``(file, rank)`` for every set bit, lowest bit first."""
        bits = self._bits
        while bits:
            lsb = bits & -bits
            idx = lsb.bit_length() - 1
            yield idx % 8, idx // 8
            bits ^= lsb

    def count(self) -> int:
        return bin(self._bits).count("1")

    def is_empty(self) -> bool:
        return self._bits == 0

    def copy(self) -> BitBoard:
        return BitBoard(self._bits)

    def __int__(self) -> int:
        return self._bits

    def __bool__(self) -> bool:
        return self._bits != 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BitBoard):
            return NotImplemented
        return self._bits == other._bits

    def __repr__(self) -> str:
        return f"BitBoard(0x{self._bits:016x})"
