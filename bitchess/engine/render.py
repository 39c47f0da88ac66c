from __future__ import annotations

from typing import List, Sequence

from .bitboard import BitBoard
from .piece import Color, piece_to_char
from .position import Position


EMPTY = " "
EMPTY_CELL = "·"


def snapshot(position: Position) -> List[str]:
    """Flatten the position into 64 characters for terminal output.

    Index is ``rank * 8 + (7 - file)``, i.e. files are mirrored within each
    rank. Empty squares are ``" "``, white pieces uppercase, black lowercase.
    """
    out = [EMPTY] * 64
    for color in (Color.WHITE, Color.BLACK):
        for ptype, board in position.pieces(color).items():
            ch = piece_to_char(ptype, color)
            for file, rank in board.squares():
                out[rank * 8 + (7 - file)] = ch
    return out


def board_snapshot(board: BitBoard, mark: str = "x") -> List[str]:
    """Same layout as :func:`snapshot` for a single bitboard."""
    out = [EMPTY] * 64
    for file, rank in board.squares():
        out[rank * 8 + (7 - file)] = mark
    return out


def render_rows(cells: Sequence[str]) -> List[str]:
    """Turn a snapshot into eight printable rows, rank 8 first.

    Reading the snapshot backwards yields a8..h8, a7..h7 and so on.
    """
    if len(cells) != 64:
        raise ValueError(f"snapshot must have 64 cells, got {len(cells)}")
    rows: List[str] = []
    line = ""
    for i, c in enumerate(reversed(cells)):
        line += "|" + (EMPTY_CELL if c == EMPTY else c)
        if (i + 1) % 8 == 0:
            rows.append(line + "|")
            line = ""
    return rows


def render(cells: Sequence[str]) -> str:
    return "\n".join(render_rows(cells)) + "\n"
