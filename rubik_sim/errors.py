"""Error types raised by the cube model."""

from __future__ import annotations


class StateValidationError(ValueError):
    """Raised when an input state is invalid."""


class ParseError(ValueError):
    """Raised when a scramble contains an unrecognized move token."""

    def __init__(self, token: str, message: str | None = None):
        self.token = token
        super().__init__(message or f"Unrecognized move token: {token!r}")


class InvalidSizeError(ValueError):
    """Raised when a cube size is not an integer >= 1."""

    def __init__(self, size: int, message: str | None = None):
        self.size = size
        super().__init__(message or f"Invalid cube size: {size} (must be >= 1)")


class UnsupportedSizeError(InvalidSizeError):
    """Raised when a valid cube size is larger than the solver handles."""

    def __init__(self, size: int, limit: int):
        self.limit = limit
        super().__init__(size, f"Solver supports cube sizes 1..{limit}, got {size}")


class InvalidMoveError(ValueError):
    """Raised when a move cannot be applied to a cube of the given size."""


def check_size(size: int) -> int:
    if not isinstance(size, int) or isinstance(size, bool) or size < 1:
        raise InvalidSizeError(size)
    return size
