from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

import uvicorn

from ..engine.errors import NotationError
from ..engine.piece import Color
from ..engine.position import STARTPOS_FEN, Position
from ..engine.render import board_snapshot, render, snapshot


logger = logging.getLogger(__name__)

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000
LOG_LEVELS = ("debug", "info", "warning", "error")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bitchess", description="Bitboard chess positions: decode, inspect, serve"
    )
    parser.add_argument(
        "--log-level", choices=LOG_LEVELS, default="info", help="Logging level (default: info)"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP position API")
    serve.add_argument(
        "--host", default=DEFAULT_HOST, help=f"Bind address (default: {DEFAULT_HOST})"
    )
    serve.add_argument(
        "--port", type=int, default=DEFAULT_PORT, help=f"Port (default: {DEFAULT_PORT})"
    )

    show = sub.add_parser("show", help="Print the board of a FEN position")
    show.add_argument(
        "fen", nargs="?", default=STARTPOS_FEN, help="FEN string (default: startpos)"
    )

    attacks = sub.add_parser("attacks", help="Print the squares attacked by one side")
    attacks.add_argument(
        "fen", nargs="?", default=STARTPOS_FEN, help="FEN string (default: startpos)"
    )
    attacks.add_argument(
        "--color", choices=("w", "b"), default="w", help="Attacking side (default: w)"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper())

    if args.command == "serve":
        logger.info("serving", extra={"host": args.host, "port": args.port})
        uvicorn.run(
            "bitchess.protocol.http.app:create_app",
            factory=True,
            host=args.host,
            port=args.port,
            log_level=args.log_level,
        )
        return 0

    try:
        position = Position.from_fen(args.fen)
    except NotationError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    if args.command == "show":
        sys.stdout.write(render(snapshot(position)))
        return 0

    color = Color.WHITE if args.color == "w" else Color.BLACK
    sys.stdout.write(render(board_snapshot(position.attacks_all(color))))
    return 0


if __name__ == "__main__":
    sys.exit(main())
