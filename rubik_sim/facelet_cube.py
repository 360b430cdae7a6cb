"""Array-backed cube model with cached index permutations."""

from __future__ import annotations

import threading
from typing import Callable

import numpy as np

from .errors import InvalidMoveError, check_size
from .geometric_cube import GeoCube
from .moves import Face, Move, MoveKind, MoveVariant, solved_state
from .solved_check import is_solved_state
from .state_codec import cube_size_for, recover_home_indices, validate_state


class PermutationRegistry:
    """Index permutations per (size, move family), derived once from ``GeoCube``.

    A permutation ``perm`` maps a state to its successor with ``state[perm]``:
    ``perm[new_index]`` is the index the sticker came from.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._perms: dict[tuple[int, tuple], tuple[np.ndarray, np.ndarray, np.ndarray]] = {}
        self._geo: dict[int, GeoCube] = {}

    def __len__(self) -> int:
        return len(self._perms)

    def __contains__(self, key: tuple[int, Move]) -> bool:
        size, mv = key
        return (size, mv.family) in self._perms

    def permutation(self, size: int, mv: Move) -> np.ndarray:
        key = (size, mv.family)
        perms = self._perms.get(key)
        if perms is None:
            with self._lock:
                perms = self._perms.get(key)
                if perms is None:
                    perms = self._derive(size, mv)
                    self._perms[key] = perms
        return perms[int(mv.variant) - 1]

    def _derive(self, size: int, mv: Move) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        if mv.kind is MoveKind.WIDE and mv.layers > size:
            raise InvalidMoveError(f"{mv} turns more layers than a {size}x{size} cube has")
        geo = self._geo.get(size)
        if geo is None:
            geo = self._geo[size] = GeoCube.new(size)

        standard = geo.apply_move(mv.with_variant(MoveVariant.STANDARD)).home_order().astype(np.intp)
        double = standard[standard]
        inverse = double[standard]
        for perm in (standard, double, inverse):
            perm.flags.writeable = False
        return standard, double, inverse

    def clear(self) -> None:
        with self._lock:
            self._perms.clear()
            self._geo.clear()


DEFAULT_REGISTRY = PermutationRegistry()


class FaceletCube:
    """Immutable cube stored as a flat array of stickers.

    Each sticker is a face label plus the home index it had on the solved
    cube. Moves relocate both arrays with a precomputed permutation.
    """

    def __init__(
        self,
        size: int,
        faces: np.ndarray,
        homes: np.ndarray,
        registry: PermutationRegistry | None = None,
    ):
        self._size = size
        self._faces = faces
        self._homes = homes
        self._registry = registry if registry is not None else DEFAULT_REGISTRY
        faces.flags.writeable = False
        homes.flags.writeable = False

    @classmethod
    def new(cls, size: int, registry: PermutationRegistry | None = None) -> FaceletCube:
        check_size(size)
        faces = solved_state(size)
        homes = np.arange(len(faces), dtype=np.int32)
        return cls(size, faces, homes, registry)

    @classmethod
    def from_state(
        cls,
        state: list[int] | list[Face] | np.ndarray,
        registry: PermutationRegistry | None = None,
    ) -> FaceletCube:
        """Build a cube from a flat face sequence, recovering sticker identities."""
        faces = validate_state(state)
        size = cube_size_for(len(faces))
        homes = recover_home_indices(faces, size)
        return cls(size, faces, homes, registry)

    @classmethod
    def from_geometric(cls, geo: GeoCube, registry: PermutationRegistry | None = None) -> FaceletCube:
        faces = geo.state().astype(np.int8)
        homes = geo.home_order().astype(np.int32)
        return cls(geo.size, faces, homes, registry)

    @property
    def size(self) -> int:
        return self._size

    @property
    def registry(self) -> PermutationRegistry:
        return self._registry

    def state(self) -> np.ndarray:
        return self._faces.copy()

    def home_indices(self) -> np.ndarray:
        return self._homes.copy()

    def is_solved(self) -> bool:
        return is_solved_state(self._faces, self._size)

    def mask(self, projector: Callable[[int, Face], Face]) -> FaceletCube:
        faces = np.array(
            [projector(int(h), Face(int(f))) for h, f in zip(self._homes, self._faces)],
            dtype=np.int8,
        )
        return FaceletCube(self._size, faces, self._homes.copy(), self._registry)

    def apply_move(self, mv: Move) -> FaceletCube:
        perm = self._registry.permutation(self._size, mv)
        return FaceletCube(self._size, self._faces[perm], self._homes[perm], self._registry)

    def apply_moves(self, moves: list[Move]) -> FaceletCube:
        faces = self._faces.copy()
        homes = self._homes.copy()
        for mv in moves:
            perm = self._registry.permutation(self._size, mv)
            faces = faces[perm]
            homes = homes[perm]
        return FaceletCube(self._size, faces, homes, self._registry)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FaceletCube):
            return NotImplemented
        return (
            self._size == other._size
            and np.array_equal(self._faces, other._faces)
            and np.array_equal(self._homes, other._homes)
        )

    def __hash__(self) -> int:
        return hash((self._size, self._faces.tobytes(), self._homes.tobytes()))

    def __repr__(self) -> str:
        return f"FaceletCube(size={self._size}, state={''.join(Face(int(f)).name for f in self._faces)!r})"
