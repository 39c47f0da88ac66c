"""Pseudo-legal attack sets.

Every generator takes the board of one piece type for one color plus the
occupancy of both sides and returns the squares those pieces attack. Check
and pins are ignored. Functions are pure; recomputing from scratch after any
occupancy change is always safe.
"""

from __future__ import annotations

from typing import Tuple

from .bitboard import BitBoard
from .piece import Color, PieceType


KING_STEPS: Tuple[Tuple[int, int], ...] = (
    (-1, -1),
    (0, -1),
    (1, -1),
    (-1, 0),
    (1, 0),
    (-1, 1),
    (0, 1),
    (1, 1),
)
KNIGHT_STEPS: Tuple[Tuple[int, int], ...] = (
    (-1, 2),
    (1, 2),
    (-2, 1),
    (2, 1),
    (-2, -1),
    (2, -1),
    (-1, -2),
    (1, -2),
)
ROOK_RAYS: Tuple[Tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
BISHOP_RAYS: Tuple[Tuple[int, int], ...] = ((-1, -1), (1, -1), (-1, 1), (1, 1))


def _steps(board: BitBoard, steps: Tuple[Tuple[int, int], ...]) -> BitBoard:
    out = BitBoard()
    for f, r in board.squares():
        for df, dr in steps:
            # off-board targets are dropped by BitBoard.set
            out.set(f + df, r + dr)
    return out


def _rays(
    board: BitBoard,
    rays: Tuple[Tuple[int, int], ...],
    friendly: BitBoard,
    opposing: BitBoard,
) -> BitBoard:
    out = BitBoard()
    occupied = friendly | opposing
    for f, r in board.squares():
        for df, dr in rays:
            tf, tr = f + df, r + dr
            while 0 <= tf < 8 and 0 <= tr < 8:
                out.set(tf, tr)
                # first blocker of either color is attacked, nothing behind it
                if occupied.get(tf, tr):
                    break
                tf += df
                tr += dr
    return out


def king_attacks(board: BitBoard) -> BitBoard:
    return _steps(board, KING_STEPS)


def knight_attacks(board: BitBoard) -> BitBoard:
    return _steps(board, KNIGHT_STEPS)


def rook_attacks(board: BitBoard, friendly: BitBoard, opposing: BitBoard) -> BitBoard:
    return _rays(board, ROOK_RAYS, friendly, opposing)


def bishop_attacks(board: BitBoard, friendly: BitBoard, opposing: BitBoard) -> BitBoard:
    return _rays(board, BISHOP_RAYS, friendly, opposing)


def queen_attacks(board: BitBoard, friendly: BitBoard, opposing: BitBoard) -> BitBoard:
    out = rook_attacks(board, friendly, opposing)
    out.union_in_place(bishop_attacks(board, friendly, opposing))
    return out


def pawn_attacks(board: BitBoard, color: Color) -> BitBoard:
    """Diagonal capture squares only; forward pushes are moves, not attacks."""
    dr = 1 if color == Color.WHITE else -1
    out = BitBoard()
    for f, r in board.squares():
        out.set(f - 1, r + dr)
        out.set(f + 1, r + dr)
    return out


def piece_attacks(
    ptype: PieceType,
    color: Color,
    board: BitBoard,
    friendly: BitBoard,
    opposing: BitBoard,
) -> BitBoard:
    """Dispatch to the generator for ``ptype``.

    Args:
        ptype (PieceType): Piece type held in ``board``.
        color (Color): Owner of ``board``; only pawns depend on it.
        board (BitBoard): Squares holding pieces of that type and color.
        friendly (BitBoard): Full occupancy of the owner.
        opposing (BitBoard): Full occupancy of the opponent.

    Returns:
        BitBoard: Attacked squares.
    """
    if ptype == PieceType.KING:
        return king_attacks(board)
    if ptype == PieceType.KNIGHT:
        return knight_attacks(board)
    if ptype == PieceType.PAWN:
        return pawn_attacks(board, color)
    if ptype == PieceType.ROOK:
        return rook_attacks(board, friendly, opposing)
    if ptype == PieceType.BISHOP:
        return bishop_attacks(board, friendly, opposing)
    return queen_attacks(board, friendly, opposing)
