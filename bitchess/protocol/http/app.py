from __future__ import annotations

import logging
from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException, Response
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, Field

from .error import (
    exception_handler,
    http_exception_handler,
    invalid_move_exception_handler,
    notation_exception_handler,
    request_validation_exception_handler,
)
from .logging_middleware import RequestIDLoggingMiddleware
from .session import InMemorySessionStore
from ...engine.bitboard import BitBoard
from ...engine.errors import InvalidMove, NotationError
from ...engine.move import Move, StateChange, parse_squares
from ...engine.piece import Color, PieceType, piece_type_from_letter
from ...engine.position import STARTPOS_FEN, Position, check_move
from ...engine.render import render_rows, snapshot
from ...engine.square import Square


logger = logging.getLogger(__name__)


class CreatePositionRequest(BaseModel):
    fen: str = Field(default=STARTPOS_FEN, description="FEN string")


class SetFenRequest(BaseModel):
    fen: str = Field(..., description="FEN string")


class ApplyRequest(BaseModel):
    move: str = Field(..., description="Origin and destination, e.g. e5f4")
    piece: Optional[str] = Field(
        default=None, description="Moving piece letter; read from the board when omitted"
    )
    captured: Optional[str] = Field(
        default=None, description="Captured piece letter; read from the board when omitted"
    )


class PositionState(BaseModel):
    position_id: str
    fen: str
    side: str
    castling: str
    en_passant: Optional[str]
    halfmove: int
    fullmove: int
    game_state: str
    board: List[str]
    snapshot: List[str]
    history: List[str]


class AttackSet(BaseModel):
    bits: str
    squares: List[str]


class AttacksResponse(BaseModel):
    position_id: str
    white: Dict[str, AttackSet]
    black: Dict[str, AttackSet]
    white_all: AttackSet
    black_all: AttackSet


def create_app(log_level: int | str = logging.INFO) -> FastAPI:
    app = FastAPI(title="bitchess position API", version="0.1.0")

    logging.basicConfig(level=log_level)

    app.add_middleware(RequestIDLoggingMiddleware)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(NotationError, notation_exception_handler)
    app.add_exception_handler(InvalidMove, invalid_move_exception_handler)
    app.add_exception_handler(Exception, exception_handler)

    store = InMemorySessionStore()

    @app.get("/healthz")
    async def healthz() -> Dict[str, str]:
        return {"status": "ok"}

    @app.post("/api/positions", response_model=PositionState)
    async def create_position(req: Optional[CreatePositionRequest] = None) -> PositionState:
        fen = req.fen if req is not None else STARTPOS_FEN
        position = Position.from_fen(fen)
        position_id = store.create(position)
        logger.info("created position", extra={"position_id": position_id})
        return _state(position_id, position)

    @app.get("/api/positions/{position_id}", response_model=PositionState)
    async def get_position(position_id: str) -> PositionState:
        with store.locked(position_id) as position:
            return _state(position_id, _require(position))

    @app.post("/api/positions/{position_id}/fen", response_model=PositionState)
    async def set_fen(position_id: str, req: SetFenRequest) -> PositionState:
        with store.locked(position_id) as position:
            _require(position)
            replacement = Position.from_fen(req.fen)
            store.set(position_id, replacement)
            return _state(position_id, replacement)

    @app.post("/api/positions/{position_id}/apply", response_model=PositionState)
    async def apply_move(position_id: str, req: ApplyRequest) -> PositionState:
        with store.locked(position_id) as position:
            position = _require(position)
            move = _build_move(position, req)
            check_move(position, move)
            position.apply(move)
            position.recompute_attacks()
            position.pass_turn()
            logger.info(
                "applied move",
                extra={"position_id": position_id, "move": move.to_text()},
            )
            return _state(position_id, position)

    @app.post("/api/positions/{position_id}/undo", response_model=PositionState)
    async def undo_move(position_id: str) -> PositionState:
        with store.locked(position_id) as position:
            position = _require(position)
            if not position.history:
                raise HTTPException(status_code=400, detail="no moves to undo")
            position.pass_turn()
            move = position.undo()
            position.recompute_attacks()
            logger.info(
                "undid move",
                extra={"position_id": position_id, "move": move.to_text()},
            )
            return _state(position_id, position)

    @app.get("/api/positions/{position_id}/attacks", response_model=AttacksResponse)
    async def get_attacks(position_id: str) -> AttacksResponse:
        with store.locked(position_id) as position:
            position = _require(position)
            return AttacksResponse(
                position_id=position_id,
                white=_attack_sets(position, Color.WHITE),
                black=_attack_sets(position, Color.BLACK),
                white_all=_attack_set(position.attacks_all(Color.WHITE)),
                black_all=_attack_set(position.attacks_all(Color.BLACK)),
            )

    @app.delete("/api/positions/{position_id}", status_code=204)
    async def delete_position(position_id: str) -> Response:
        if not store.delete(position_id):
            raise HTTPException(status_code=404, detail="position not found")
        return Response(status_code=204)

    return app


def _require(position: Optional[Position]) -> Position:
    if position is None:
        raise HTTPException(status_code=404, detail="position not found")
    return position


def _piece_letter(field: str, letter: str) -> PieceType:
    try:
        return piece_type_from_letter(letter)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"{field}: {e}")


def _build_move(position: Position, req: ApplyRequest) -> Move:
    fr, to = parse_squares(req.move)
    if req.piece is not None:
        piece = _piece_letter("piece", req.piece)
    else:
        occupant = position.piece_at(fr)
        if occupant is None or occupant[1] != position.side:
            raise InvalidMove(f"no piece of the side to move on {fr}")
        piece = occupant[0]
    captured: Optional[PieceType] = None
    if req.captured is not None:
        captured = _piece_letter("captured", req.captured)
    else:
        occupant = position.piece_at(to)
        if occupant is not None and occupant[1] != position.side:
            captured = occupant[0]
    return Move(fr, to, piece, StateChange(captured=captured))


def _state(position_id: str, position: Position) -> PositionState:
    fen = position.to_fen()
    fields = fen.split()
    cells = snapshot(position)
    return PositionState(
        position_id=position_id,
        fen=fen,
        side=fields[1],
        castling=fields[2],
        en_passant=str(position.en_passant) if position.en_passant is not None else None,
        halfmove=position.halfmove,
        fullmove=position.fullmove,
        game_state=str(position.state),
        board=render_rows(cells),
        snapshot=cells,
        history=[m.to_text() for m in position.history],
    )


def _attack_set(board: BitBoard) -> AttackSet:
    return AttackSet(
        bits=f"0x{int(board):016x}",
        squares=[str(Square(f, r)) for f, r in board.squares()],
    )


def _attack_sets(position: Position, color: Color) -> Dict[str, AttackSet]:
    return {p.name.lower(): _attack_set(b) for p, b in position.attacks(color).items()}


# Default app for non-factory servers
app = create_app()
