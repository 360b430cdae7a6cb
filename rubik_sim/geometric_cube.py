"""Coordinate-based cube model.

Every sticker is a centroid on an integer lattice: the cube spans ``[-N, N]``
along each axis, a sticker sits at ``+-N`` along its face normal and at
``-N + 1, -N + 3, ..., N - 1`` along the two in-face axes. A move multiplies the
centroids inside the turning slab by a rotation matrix; nothing else changes.

This form is slow and only exists to derive the index permutations used by
``FaceletCube``.
"""

from __future__ import annotations

from typing import Callable

import numpy as np

from .errors import InvalidMoveError, check_size
from .geometry import FACE_TO_UP_MOVES, affected_layers, face_of_normal, move_rotation
from .moves import FACE_ORDER, Face, Move, MoveKind
from .solved_check import is_solved_state


def _sequence_matrix(moves: tuple[Move, ...]) -> np.ndarray:
    mat = np.eye(3, dtype=np.int64)
    for mv in moves:
        mat = move_rotation(mv)[2] @ mat
    return mat


_FACE_TO_UP_MATRICES = [_sequence_matrix(FACE_TO_UP_MOVES[face]) for face in FACE_ORDER]


def _generate_coords(size: int) -> np.ndarray:
    inner = range(-size + 1, size, 2)
    coords = []
    for face_coord in (-size, size):
        for p1 in inner:
            for p2 in inner:
                coords.append((face_coord, p1, p2))
                coords.append((p1, face_coord, p2))
                coords.append((p1, p2, face_coord))
    return np.array(coords, dtype=np.int64)


def _read_order(coords: np.ndarray, size: int) -> np.ndarray:
    """Sticker indices in state order: face by face, row-major within a face."""
    order = []
    for mat in _FACE_TO_UP_MATRICES:
        rotated = coords @ mat.T
        on_top = np.flatnonzero(rotated[:, 1] == size)
        # row runs back to front (z), column left to right (x)
        keys = np.lexsort((rotated[on_top, 0], rotated[on_top, 2]))
        order.append(on_top[keys])
    return np.concatenate(order)


class GeoCube:
    """Immutable cube whose stickers carry 3D centroids."""

    def __init__(self, size: int, coords: np.ndarray, labels: np.ndarray, homes: np.ndarray):
        self._size = size
        self._coords = coords
        self._labels = labels
        self._homes = homes
        for arr in (coords, labels, homes):
            arr.flags.writeable = False

    @classmethod
    def new(cls, size: int) -> GeoCube:
        check_size(size)
        coords = _generate_coords(size)
        order = _read_order(coords, size)

        homes = np.empty(len(coords), dtype=np.int32)
        homes[order] = np.arange(len(coords), dtype=np.int32)
        labels = np.array(FACE_ORDER, dtype=np.int8)[homes // (size * size)]
        return cls(size, coords, labels, homes)

    @property
    def size(self) -> int:
        return self._size

    def state(self) -> np.ndarray:
        """Flat face labels in U, R, F, D, L, B order, row-major per face."""
        return self._labels[_read_order(self._coords, self._size)]

    def home_order(self) -> np.ndarray:
        """Home index of the sticker at every flat position."""
        return self._homes[_read_order(self._coords, self._size)]

    def is_solved(self) -> bool:
        return is_solved_state(self.state(), self._size)

    def mask(self, projector: Callable[[int, Face], Face]) -> GeoCube:
        labels = np.array(
            [projector(int(h), Face(int(f))) for h, f in zip(self._homes, self._labels)],
            dtype=np.int8,
        )
        return GeoCube(self._size, self._coords.copy(), labels, self._homes.copy())

    def apply_move(self, mv: Move) -> GeoCube:
        if mv.kind is MoveKind.WIDE and mv.layers > self._size:
            raise InvalidMoveError(f"{mv} turns more layers than a {self._size}x{self._size} cube has")
        _, _, rot = move_rotation(mv)
        turning = affected_layers(mv, self._coords, self._size)
        coords = self._coords.copy()
        coords[turning] = coords[turning] @ rot.T
        return GeoCube(self._size, coords, self._labels.copy(), self._homes.copy())

    def apply_moves(self, moves: list[Move]) -> GeoCube:
        cube = self
        for mv in moves:
            cube = cube.apply_move(mv)
        return cube

    def stickers(self) -> list[tuple[tuple[int, int, int], Face, Face, int]]:
        """(centroid, current face, label, home index) per sticker, for renderers."""
        result = []
        for coord, label, home in zip(self._coords, self._labels, self._homes):
            normal = np.where(np.abs(coord) == self._size, np.sign(coord), 0)
            result.append((tuple(int(v) for v in coord), face_of_normal(normal), Face(int(label)), int(home)))
        return result

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GeoCube):
            return NotImplemented
        return (
            self._size == other._size
            and np.array_equal(self.state(), other.state())
            and np.array_equal(self.home_order(), other.home_order())
        )

    def __hash__(self) -> int:
        return hash((self._size, self.state().tobytes(), self.home_order().tobytes()))

    def __repr__(self) -> str:
        return f"GeoCube(size={self._size})"
