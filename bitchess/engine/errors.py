from __future__ import annotations


class ChessError(Exception):
    """Base class for every error raised by the engine package."""


class NotationError(ChessError, ValueError):
    """Malformed text input (FEN fields, square names).

    Attributes:
        code (str): Stable identifier used by the HTTP error envelope.
    """

    code = "invalid_notation"


class InvalidFieldCount(NotationError):
    code = "invalid_field_count"

    def __init__(self, count: int) -> None:
        super().__init__(f"FEN must have 5 or 6 fields, got {count}")
        self.count = count


class InvalidFEN(NotationError):
    """Bad piece placement: unknown character or a rank not summing to 8."""

    code = "invalid_fen"

    def __init__(self, position: int, char: str) -> None:
        if char:
            msg = f"invalid character {char!r} at position {position} in FEN placement"
        else:
            msg = f"unexpected end of FEN placement at position {position}"
        super().__init__(msg)
        self.position = position
        self.char = char


class InvalidSideColor(NotationError):
    code = "invalid_side_color"

    def __init__(self, value: str) -> None:
        super().__init__(f"side to move must be 'w' or 'b', got {value!r}")
        self.value = value


class InvalidCastling(NotationError):
    code = "invalid_castling"

    def __init__(self, value: str) -> None:
        super().__init__(f"invalid castling rights: {value!r}")
        self.value = value


class InvalidFormat(NotationError):
    code = "invalid_format"

    def __init__(
        self, value: str, message: str = "square must have at least 2 characters"
    ) -> None:
        super().__init__(f"{message}, got {value!r}")
        self.value = value


class InvalidSquare(NotationError):
    code = "invalid_square"

    def __init__(self, value: str) -> None:
        super().__init__(f"invalid square: {value!r}")
        self.value = value


class InvalidHalfmove(NotationError):
    code = "invalid_halfmove"

    def __init__(self, value: str) -> None:
        super().__init__(f"halfmove clock must be an unsigned integer, got {value!r}")
        self.value = value


class InvalidFullmove(NotationError):
    code = "invalid_fullmove"

    def __init__(self, value: str) -> None:
        super().__init__(f"fullmove number must be a positive integer, got {value!r}")
        self.value = value


class InvalidMove(ChessError, ValueError):
    """Move rejected by :func:`bitchess.engine.position.check_move`."""


class EmptyHistoryError(ChessError, IndexError):
    """``Position.undo`` called with no recorded move."""
