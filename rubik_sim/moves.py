"""Faces, moves and move variants in WCA notation."""

from __future__ import annotations

import enum
from dataclasses import dataclass

import numpy as np


class Face(enum.IntEnum):
    """Sticker face label. ``X`` marks a blanked (masked) sticker."""

    U = 0
    R = 1
    F = 2
    D = 3
    L = 4
    B = 5
    X = 6

    def __str__(self) -> str:
        return self.name


FACE_ORDER = (Face.U, Face.R, Face.F, Face.D, Face.L, Face.B)
FACE_NAMES = "URFDLB"
ROTATION_NAMES = "xyz"


class MoveVariant(enum.IntEnum):
    """Number of clockwise quarter turns, modulo 4."""

    STANDARD = 1
    DOUBLE = 2
    INVERSE = 3

    @property
    def suffix(self) -> str:
        return _VARIANT_SUFFIX[self]

    def compose(self, other: MoveVariant) -> MoveVariant | None:
        """Sum of two variants; ``None`` when the turns cancel out."""
        turns = (int(self) + int(other)) % 4
        return MoveVariant(turns) if turns else None

    def inverse(self) -> MoveVariant:
        return MoveVariant(4 - int(self))


_VARIANT_SUFFIX = {
    MoveVariant.STANDARD: "",
    MoveVariant.DOUBLE: "2",
    MoveVariant.INVERSE: "'",
}


class MoveKind(enum.Enum):
    TURN = "turn"
    WIDE = "wide"
    ROTATION = "rotation"


@dataclass(frozen=True)
class Move:
    """A single move: a face turn, a wide turn of the outer layers, or a cube rotation."""

    kind: MoveKind
    face: str
    variant: MoveVariant = MoveVariant.STANDARD
    layers: int = 1

    def __post_init__(self):
        if self.kind is MoveKind.ROTATION:
            if self.face not in ROTATION_NAMES:
                raise ValueError(f"Rotation axis must be one of {ROTATION_NAMES!r}, got {self.face!r}")
        elif self.face not in FACE_NAMES:
            raise ValueError(f"Face must be one of {FACE_NAMES!r}, got {self.face!r}")
        if self.kind is not MoveKind.WIDE and self.layers != 1:
            raise ValueError(f"Only wide moves take a layer count, got {self.layers} for {self.kind.value}")
        if self.layers < 1:
            raise ValueError(f"Layer count must be >= 1, got {self.layers}")
        object.__setattr__(self, "variant", MoveVariant(self.variant))

    @classmethod
    def turn(cls, face: str, variant: MoveVariant = MoveVariant.STANDARD) -> Move:
        return cls(MoveKind.TURN, face, variant)

    @classmethod
    def wide(cls, face: str, layers: int = 2, variant: MoveVariant = MoveVariant.STANDARD) -> Move:
        return cls(MoveKind.WIDE, face, variant, layers)

    @classmethod
    def rotation(cls, axis: str, variant: MoveVariant = MoveVariant.STANDARD) -> Move:
        return cls(MoveKind.ROTATION, axis, variant)

    @property
    def family(self) -> tuple[MoveKind, str, int]:
        """Moves of the same family differ only in their variant."""
        return self.kind, self.face, self.layers

    def with_variant(self, variant: MoveVariant) -> Move:
        return Move(self.kind, self.face, variant, self.layers)

    def inverse(self) -> Move:
        return self.with_variant(self.variant.inverse())

    @property
    def name(self) -> str:
        if self.kind is MoveKind.WIDE:
            return f"{self.face}w" if self.layers == 2 else f"{self.layers}{self.face}w"
        return self.face

    def __str__(self) -> str:
        return f"{self.name}{self.variant.suffix}"


def invert_moves(moves: list[Move]) -> list[Move]:
    """Return the sequence that undoes ``moves``."""
    return [mv.inverse() for mv in reversed(moves)]


def format_moves(moves: list[Move]) -> str:
    return " ".join(str(mv) for mv in moves)


def all_moves(size: int) -> list[Move]:
    """Every face turn and wide turn for a cube of the given size."""
    moveset: list[Move] = []
    for face in FACE_NAMES:
        for variant in MoveVariant:
            moveset.append(Move.turn(face, variant))
    for face in FACE_NAMES:
        for variant in MoveVariant:
            for layers in range(1, size // 2 + 1):
                moveset.append(Move.wide(face, layers, variant))
    return moveset


def solved_state(size: int) -> np.ndarray:
    """Flat solved face sequence of length 6 * size**2."""
    return np.repeat(np.array(FACE_ORDER, dtype=np.int8), size * size)


def sticker_index(size: int, face: Face, index: int) -> int:
    """Flat index of the ``index``-th (1-based) sticker on ``face``."""
    return FACE_ORDER.index(face) * size * size + index - 1
