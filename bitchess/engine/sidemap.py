from __future__ import annotations

from typing import Iterator, List, Optional, Tuple

from .bitboard import BitBoard
from .piece import PieceType


class SideMap:
    """One color's six per-type boards.

    Boards live in a fixed list indexed by ``PieceType`` ordinal, so every type
    always has a board. Mutators touch a single type, which keeps the boards
    disjoint as long as callers never place two types on one square.
    """

    __slots__ = ("_boards",)

    def __init__(self, boards: Optional[List[BitBoard]] = None) -> None:
        if boards is None:
            boards = [BitBoard() for _ in PieceType]
        if len(boards) != len(PieceType):
            raise ValueError("SideMap needs exactly one board per piece type")
        self._boards = boards

    def board(self, ptype: PieceType) -> BitBoard:
        return self._boards[ptype]

    def replace(self, ptype: PieceType, board: BitBoard) -> None:
        self._boards[ptype] = board

    def get(self, ptype: PieceType, file: int, rank: int) -> Optional[bool]:
        return self._boards[ptype].get(file, rank)

    def set(self, ptype: PieceType, file: int, rank: int) -> None:
        self._boards[ptype].set(file, rank)

    def unset(self, ptype: PieceType, file: int, rank: int) -> None:
        self._boards[ptype].unset(file, rank)

    def toggle(self, ptype: PieceType, file: int, rank: int) -> None:
        self._boards[ptype].toggle(file, rank)

    def combine(self) -> BitBoard:
        """Return a fresh union of all six boards."""
        out = BitBoard()
        for b in self._boards:
            out.union_in_place(b)
        return out

    def piece_at(self, file: int, rank: int) -> Optional[PieceType]:
        for ptype in PieceType:
            if self._boards[ptype].get(file, rank):
                return ptype
        return None

    def items(self) -> Iterator[Tuple[PieceType, BitBoard]]:
        for ptype in PieceType:
            yield ptype, self._boards[ptype]

    def copy(self) -> SideMap:
        return SideMap([b.copy() for b in self._boards])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SideMap):
            return NotImplemented
        return self._boards == other._boards

    def __repr__(self) -> str:
        inner = ", ".join(f"{p.name}={int(b):#x}" for p, b in self.items())
        return f"SideMap({inner})"
