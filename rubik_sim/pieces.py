"""Cubie model: stickers grouped into the physical pieces that carry them."""

from __future__ import annotations

import enum
import functools
from dataclasses import dataclass

from .errors import check_size
from .geometric_cube import GeoCube
from .moves import FACE_ORDER, Face


class PieceKind(enum.Enum):
    CORNER = "corner"
    EDGE = "edge"
    CENTER = "center"
    CORE = "core"


@dataclass(frozen=True)
class Piece:
    kind: PieceKind
    position: tuple[int, int, int]  # cubie centre on the solved cube
    stickers: tuple[int, ...]  # home indices, ascending
    faces: tuple[Face, ...]  # home face of each sticker

    def sticker_on(self, face: Face) -> int | None:
        for idx, f in zip(self.stickers, self.faces):
            if f == face:
                return idx
        return None

    @property
    def color_key(self) -> tuple[int, ...]:
        return tuple(sorted(int(f) for f in self.faces))


@dataclass(frozen=True)
class PieceModel:
    size: int
    pieces: tuple[Piece, ...]
    piece_of_sticker: tuple[int, ...]  # home index -> piece index

    def of_kind(self, kind: PieceKind) -> list[Piece]:
        return [p for p in self.pieces if p.kind is kind]

    @property
    def corners(self) -> list[Piece]:
        return self.of_kind(PieceKind.CORNER)

    @property
    def edges(self) -> list[Piece]:
        return self.of_kind(PieceKind.EDGE)

    def fixed_centers(self) -> list[int]:
        """Home indices of the face-middle stickers that face turns never move."""
        if self.size % 2 == 0:
            return []
        middle = (self.size * self.size - 1) // 2
        return [i * self.size * self.size + middle for i in range(len(FACE_ORDER))]


def _cubie_position(coord: tuple[int, int, int], size: int) -> tuple[int, int, int]:
    inner = size - 1
    return tuple(max(-inner, min(inner, v)) for v in coord)


@functools.lru_cache(maxsize=None)
def piece_model(size: int) -> PieceModel:
    check_size(size)
    groups: dict[tuple[int, int, int], list[tuple[int, Face]]] = {}
    for coord, _, label, home in GeoCube.new(size).stickers():
        groups.setdefault(_cubie_position(coord, size), []).append((home, label))

    pieces = []
    for position, members in groups.items():
        members.sort()
        if size == 1:
            kind = PieceKind.CORE
        else:
            kind = {3: PieceKind.CORNER, 2: PieceKind.EDGE, 1: PieceKind.CENTER}[len(members)]
        pieces.append(
            Piece(
                kind=kind,
                position=position,
                stickers=tuple(h for h, _ in members),
                faces=tuple(f for _, f in members),
            )
        )
    pieces.sort(key=lambda p: p.stickers[0])

    piece_of_sticker = [0] * (6 * size * size)
    for i, piece in enumerate(pieces):
        for idx in piece.stickers:
            piece_of_sticker[idx] = i
    return PieceModel(size=size, pieces=tuple(pieces), piece_of_sticker=tuple(piece_of_sticker))
