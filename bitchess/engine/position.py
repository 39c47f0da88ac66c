from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from .attacks import piece_attacks
from .bitboard import BitBoard
from .errors import EmptyHistoryError, InvalidMove
from .move import Move
from .piece import Color, PieceType
from .sidemap import SideMap
from .square import Square


STARTPOS_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"


@dataclass(frozen=True)
class Castling:
    king_side: bool = False
    queen_side: bool = False


class GameStateKind(Enum):
    NORMAL = "normal"
    IN_CHECK = "in_check"
    DRAW = "draw"
    WON = "won"


@dataclass(frozen=True)
class GameState:
    """Game outcome tag.

    Nothing derives this from the rules yet; decoded positions are always
    ``NORMAL``. ``color`` names the checked side for ``IN_CHECK`` and the
    winner for ``WON``.
    """

    kind: GameStateKind = GameStateKind.NORMAL
    color: Optional[Color] = None

    @classmethod
    def normal(cls) -> "GameState":
        return cls()

    @classmethod
    def in_check(cls, color: Color) -> "GameState":
        return cls(GameStateKind.IN_CHECK, color)

    @classmethod
    def draw(cls) -> "GameState":
        return cls(GameStateKind.DRAW)

    @classmethod
    def won(cls, color: Color) -> "GameState":
        return cls(GameStateKind.WON, color)

    def __str__(self) -> str:
        if self.color is None:
            return self.kind.value
        return f"{self.kind.value}:{self.color.letter}"


@dataclass
class Position:
    """Bitboard position with reversible move application.

    Notes:
    - ``white`` / ``black`` are the authoritative per-type boards.
    - ``white_all`` / ``black_all`` always equal ``SideMap.combine()`` of the
      matching side; ``apply`` and ``undo`` update both together.
    - Attack maps are only refreshed by :meth:`recompute_attacks`; callers
      run it after changing occupancy and before reading attack data.
    - A position has one owner. Nothing here is thread-safe.
    """

    white: SideMap
    black: SideMap
    side: Color = Color.WHITE
    white_castling: Castling = field(default_factory=Castling)
    black_castling: Castling = field(default_factory=Castling)
    en_passant: Optional[Square] = None
    halfmove: int = 0
    fullmove: int = 1
    history: List[Move] = field(default_factory=list)
    state: GameState = field(default_factory=GameState)
    # derived caches, filled in __post_init__
    white_all: BitBoard = field(init=False)
    black_all: BitBoard = field(init=False)
    white_attacks: SideMap = field(init=False)
    black_attacks: SideMap = field(init=False)
    white_attacks_all: BitBoard = field(init=False)
    black_attacks_all: BitBoard = field(init=False)

    def __post_init__(self) -> None:
        self.white_all = self.white.combine()
        self.black_all = self.black.combine()
        self.recompute_attacks()

    @classmethod
    def from_fen(cls, fen: str) -> "Position":
        from .fen import position_from_fen

        return position_from_fen(fen)

    @classmethod
    def startpos(cls) -> "Position":
        return cls.from_fen(STARTPOS_FEN)

    def to_fen(self) -> str:
        from .fen import position_to_fen

        return position_to_fen(self)

    # --- Accessors ---
    def pieces(self, color: Color) -> SideMap:
        return self.white if color == Color.WHITE else self.black

    def occupancy(self, color: Color) -> BitBoard:
        return self.white_all if color == Color.WHITE else self.black_all

    def attacks(self, color: Color) -> SideMap:
        return self.white_attacks if color == Color.WHITE else self.black_attacks

    def attacks_all(self, color: Color) -> BitBoard:
        return self.white_attacks_all if color == Color.WHITE else self.black_attacks_all

    def castling(self, color: Color) -> Castling:
        return self.white_castling if color == Color.WHITE else self.black_castling

    def piece_at(self, square: Square) -> Optional[Tuple[PieceType, Color]]:
        for color in (Color.WHITE, Color.BLACK):
            ptype = self.pieces(color).piece_at(square.file, square.rank)
            if ptype is not None:
                return ptype, color
        return None

    # --- Mutation ---
    def apply(self, move: Move) -> None:
        """Move a piece for the side to move and record it in history.

        The move must be pseudo-legal for ``self.side`` (see
        :func:`check_move`); only debug assertions guard that. Side to move,
        castling rights, en passant, counters and attack maps are left alone.

        Args:
            move (Move): Move to apply. A declared capture removes that piece
                type from the destination on the opponent's side.
        """
        own, own_all = self.pieces(self.side), self.occupancy(self.side)
        opp, opp_all = self.pieces(self.side.other()), self.occupancy(self.side.other())
        fr, to = move.from_sq, move.to_sq
        assert own.get(move.piece, fr.file, fr.rank), f"no {move.piece.name} on {fr}"
        assert not own_all.get(to.file, to.rank), f"{to} holds a piece of the mover"
        if move.captured is None:
            assert not opp_all.get(to.file, to.rank), f"undeclared capture on {to}"
        else:
            assert opp.get(move.captured, to.file, to.rank), f"no {move.captured.name} on {to}"

        own.unset(move.piece, fr.file, fr.rank)
        own.set(move.piece, to.file, to.rank)
        own_all.unset(fr.file, fr.rank)
        own_all.set(to.file, to.rank)

        if move.captured is not None:
            opp.unset(move.captured, to.file, to.rank)
            opp_all.unset(to.file, to.rank)

        self.history.append(move)

    def undo(self) -> Move:
        """Reverse the last applied move and return it.

        The mover is taken to be ``self.side``, so undo before flipping the
        turn (or flip it back first). A mismatch between the recorded move
        and the boards trips a debug assertion before anything changes.

        Raises:
            EmptyHistoryError: If no move has been applied.
        """
        if not self.history:
            raise EmptyHistoryError("no moves to undo")
        move = self.history[-1]
        own, own_all = self.pieces(self.side), self.occupancy(self.side)
        opp_all = self.occupancy(self.side.other())
        fr, to = move.from_sq, move.to_sq
        assert own.get(move.piece, to.file, to.rank), f"no {move.piece.name} of the mover on {to}"
        assert not own_all.get(fr.file, fr.rank), f"{fr} is not empty"
        assert not opp_all.get(fr.file, fr.rank), f"{fr} is not empty"
        assert not opp_all.get(to.file, to.rank), f"opponent piece on {to}"
        self.history.pop()

        own.set(move.piece, fr.file, fr.rank)
        own.unset(move.piece, to.file, to.rank)
        own_all.set(fr.file, fr.rank)
        own_all.unset(to.file, to.rank)

        if move.captured is not None:
            opp, opp_all = self.pieces(self.side.other()), self.occupancy(self.side.other())
            opp.set(move.captured, to.file, to.rank)
            opp_all.set(to.file, to.rank)

        return move

    def pass_turn(self) -> None:
        """Hand the move to the other side."""
        self.side = self.side.other()

    def recompute_attacks(self) -> None:
        """Rebuild both sides' attack maps from the current occupancy."""
        self.white_attacks = self._attack_map(Color.WHITE)
        self.black_attacks = self._attack_map(Color.BLACK)
        self.white_attacks_all = self.white_attacks.combine()
        self.black_attacks_all = self.black_attacks.combine()

    def _attack_map(self, color: Color) -> SideMap:
        own = self.pieces(color)
        friendly = self.occupancy(color)
        opposing = self.occupancy(color.other())
        out = SideMap()
        for ptype, board in own.items():
            out.replace(ptype, piece_attacks(ptype, color, board, friendly, opposing))
        return out

    def copy(self) -> "Position":
        out = Position(
            white=self.white.copy(),
            black=self.black.copy(),
            side=self.side,
            white_castling=self.white_castling,
            black_castling=self.black_castling,
            en_passant=self.en_passant,
            halfmove=self.halfmove,
            fullmove=self.fullmove,
            history=list(self.history),
            state=self.state,
        )
        # keep stale attack maps stale; a copy mirrors the source exactly
        out.white_attacks = self.white_attacks.copy()
        out.black_attacks = self.black_attacks.copy()
        out.white_attacks_all = self.white_attacks_all.copy()
        out.black_attacks_all = self.black_attacks_all.copy()
        return out


def check_move(position: Position, move: Move) -> None:
    """Reject moves that are not pseudo-legal for the side to move.

    Covers piece movement only: no check, pin, castling, en passant or
    promotion handling. Reach is computed from the current occupancy, so the
    cached attack maps may be stale.

    Args:
        position (Position): Position the move would be applied to.
        move (Move): Candidate move.

    Raises:
        InvalidMove: If ``Position.apply`` must not be called with ``move``.
    """
    mover = position.side
    own_all = position.occupancy(mover)
    opp_all = position.occupancy(mover.other())
    fr, to = move.from_sq, move.to_sq
    name = move.piece.name.lower()

    if not position.pieces(mover).get(move.piece, fr.file, fr.rank):
        raise InvalidMove(f"no {mover.name.lower()} {name} on {fr}")
    if own_all.get(to.file, to.rank):
        raise InvalidMove(f"{to} is occupied by the mover")

    target = position.pieces(mover.other()).piece_at(to.file, to.rank)
    if target != move.captured:
        if target is None:
            raise InvalidMove(f"nothing to capture on {to}")
        if move.captured is None:
            raise InvalidMove(f"move to {to} must capture the {target.name.lower()}")
        raise InvalidMove(
            f"{to} holds a {target.name.lower()}, not a {move.captured.name.lower()}"
        )

    if move.piece == PieceType.PAWN:
        _check_pawn(mover, own_all | opp_all, move)
        return

    origin = BitBoard()
    origin.set(fr.file, fr.rank)
    reach = piece_attacks(move.piece, mover, origin, own_all, opp_all)
    if not reach.get(to.file, to.rank):
        raise InvalidMove(f"{name} on {fr} cannot reach {to}")


def _check_pawn(mover: Color, occupied: BitBoard, move: Move) -> None:
    fr, to = move.from_sq, move.to_sq
    dr = 1 if mover == Color.WHITE else -1
    last_rank = 7 if mover == Color.WHITE else 0
    start_rank = 1 if mover == Color.WHITE else 6
    if to.rank == last_rank:
        raise InvalidMove("promotion is not supported")
    if move.captured is not None:
        if to.rank == fr.rank + dr and abs(to.file - fr.file) == 1:
            return
        raise InvalidMove(f"pawn on {fr} cannot capture on {to}")
    if to.file != fr.file:
        raise InvalidMove(f"pawn on {fr} cannot reach {to}")
    if to.rank == fr.rank + dr:
        return
    if (
        fr.rank == start_rank
        and to.rank == fr.rank + 2 * dr
        and not occupied.get(fr.file, fr.rank + dr)
    ):
        return
    raise InvalidMove(f"pawn on {fr} cannot reach {to}")
