"""Scramble parsing, simplification and generation."""

from __future__ import annotations

import re

import numpy as np

from .errors import ParseError, check_size
from .moves import FACE_NAMES, Move, MoveKind, MoveVariant

_TURN_TOKEN = re.compile(r"^(?P<layers>\d+)?(?P<face>[URFDLB])(?P<wide>w)?(?P<suffix>2'|2|')?$")
_ROTATION_TOKEN = re.compile(r"^(?P<axis>[xyz])(?P<suffix>2'|2|')?$")

_SUFFIX_VARIANT = {
    None: MoveVariant.STANDARD,
    "2": MoveVariant.DOUBLE,
    "2'": MoveVariant.DOUBLE,
    "'": MoveVariant.INVERSE,
}


def parse_move(token: str) -> Move:
    """Convert one WCA notation token into a ``Move``."""
    m = _ROTATION_TOKEN.match(token)
    if m:
        return Move.rotation(m.group("axis"), _SUFFIX_VARIANT[m.group("suffix")])

    m = _TURN_TOKEN.match(token)
    if m is None:
        raise ParseError(token)

    variant = _SUFFIX_VARIANT[m.group("suffix")]
    layers = m.group("layers")
    if m.group("wide") is None:
        if layers is not None:
            raise ParseError(token, f"Layer count requires a wide move: {token!r}")
        return Move.turn(m.group("face"), variant)

    count = 2 if layers is None else int(layers)
    if count < 1:
        raise ParseError(token, f"Layer count must be >= 1: {token!r}")
    return Move.wide(m.group("face"), count, variant)


def parse_scramble(scramble: str) -> list[Move]:
    """Convert a whitespace-separated WCA scramble into a list of moves."""
    return [parse_move(token) for token in scramble.split()]


def simplify_moves(moves: list[Move]) -> list[Move]:
    """Merge adjacent moves of the same family until nothing merges any more.

    >>> [str(m) for m in simplify_moves(parse_scramble("B B2 B' R B2 B' R2 R' F2"))]
    ['B2', 'R', 'B', 'R', 'F2']
    """
    stack: list[Move] = []
    for mv in moves:
        if stack and stack[-1].family == mv.family:
            merged = stack.pop().variant.compose(mv.variant)
            if merged is not None:
                stack.append(mv.with_variant(merged))
        else:
            stack.append(mv)
    return stack


def random_scramble(
    size: int,
    allow_wide: bool = False,
    length: int | None = None,
    seed: int | None = None,
    rng: np.random.Generator | None = None,
) -> list[Move]:
    """Random scramble with no face, variant or layer count repeated back to back."""
    check_size(size)
    if length is None:
        length = size * 10
    if length < 0:
        raise ValueError("Scramble length must be a non-negative integer")
    if rng is None:
        rng = np.random.default_rng(seed)

    variants = list(MoveVariant)
    layer_choices = list(range(1, max(1, size // 2) + 1)) if allow_wide else [1]

    scramble: list[Move] = []
    prev_face: int | None = None
    prev_variant: int | None = None
    prev_layers: int | None = None

    for _ in range(length):
        faces = [f for f in range(len(FACE_NAMES)) if f != prev_face]
        face = int(rng.choice(faces))

        variant_ids = [v for v in range(len(variants)) if v != prev_variant]
        variant_id = int(rng.choice(variant_ids))

        layers_options = layer_choices
        if len(layer_choices) > 1:
            layers_options = [k for k in layer_choices if k != prev_layers]
        layers = int(rng.choice(layers_options))

        if layers == 1:
            mv = Move.turn(FACE_NAMES[face], variants[variant_id])
        else:
            mv = Move.wide(FACE_NAMES[face], layers, variants[variant_id])
        scramble.append(mv)

        prev_face = face
        prev_variant = variant_id
        prev_layers = layers

    return scramble


def count_turns(moves: list[Move]) -> int:
    """Half-turn metric length, ignoring whole-cube rotations."""
    return sum(1 for mv in moves if mv.kind is not MoveKind.ROTATION)
