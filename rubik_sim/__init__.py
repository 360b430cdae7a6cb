"""NxNxN cube model: moves, notation and two interchangeable cube representations."""

from .errors import InvalidMoveError, InvalidSizeError, ParseError, StateValidationError, UnsupportedSizeError
from .facelet_cube import DEFAULT_REGISTRY, FaceletCube, PermutationRegistry
from .geometric_cube import GeoCube
from .moves import (
    FACE_ORDER,
    Face,
    Move,
    MoveKind,
    MoveVariant,
    all_moves,
    format_moves,
    invert_moves,
    solved_state,
    sticker_index,
)
from .scramble import parse_move, parse_scramble, random_scramble, simplify_moves

__all__ = [
    "DEFAULT_REGISTRY",
    "FACE_ORDER",
    "Face",
    "FaceletCube",
    "GeoCube",
    "InvalidMoveError",
    "InvalidSizeError",
    "Move",
    "MoveKind",
    "MoveVariant",
    "ParseError",
    "PermutationRegistry",
    "StateValidationError",
    "UnsupportedSizeError",
    "all_moves",
    "format_moves",
    "invert_moves",
    "parse_move",
    "parse_scramble",
    "random_scramble",
    "simplify_moves",
    "solved_state",
    "sticker_index",
]
