"""Pruning tables: exact phase distances over the product coordinate space."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import datetime

import numpy as np
from tqdm import tqdm

from rubik_sim.facelet_cube import FaceletCube, PermutationRegistry
from rubik_sim.moves import Move

from .coordinates import ComponentSpace, Phase, explore_component, phase_components, phase_moves

UNREACHED = -1


@dataclass
class PruningTable:
    phase: Phase
    size: int
    moves: tuple[Move, ...]
    spaces: tuple[ComponentSpace, ...]
    distances: np.ndarray  # int8 over the product space, UNREACHED where not reached
    goal: int = 0
    _successors: list[list[list[int]]] = field(default_factory=list, repr=False)

    @property
    def radices(self) -> tuple[int, ...]:
        return tuple(len(space) for space in self.spaces)

    @property
    def strides(self) -> tuple[int, ...]:
        strides = []
        acc = 1
        for radix in reversed(self.radices):
            strides.append(acc)
            acc *= radix
        return tuple(reversed(strides))

    @property
    def max_distance(self) -> int:
        return int(self.distances.max())

    @property
    def reached(self) -> int:
        return int(np.count_nonzero(self.distances != UNREACHED))

    def digits(self, cube: FaceletCube) -> tuple[int, ...] | None:
        """Component coordinates of a cube; None when a component key was never reached."""
        digits = []
        for space in self.spaces:
            value = space.coordinate(cube)
            if value is None:
                return None
            digits.append(value)
        return tuple(digits)

    def index(self, digits: tuple[int, ...]) -> int:
        return sum(d * s for d, s in zip(digits, self.strides))

    def coordinate(self, cube: FaceletCube) -> int | None:
        digits = self.digits(cube)
        return None if digits is None else self.index(digits)

    def distance(self, cube: FaceletCube) -> int:
        coord = self.coordinate(cube)
        return UNREACHED if coord is None else int(self.distances[coord])

    def successors(self) -> list[list[list[int]]]:
        """Per component, per move: successor lists (plain Python for the search loop)."""
        if not self._successors:
            self._successors = [space.move_table.tolist() for space in self.spaces]
        return self._successors


def _split(coords: np.ndarray, radices: tuple[int, ...], strides: tuple[int, ...]) -> list[np.ndarray]:
    return [(coords // stride) % radix for radix, stride in zip(radices, strides)]


def build_pruning_table(
    phase: Phase,
    size: int,
    registry: PermutationRegistry | None = None,
    progress: bool = False,
) -> PruningTable:
    """Breadth-first distances from the phase goal under the phase's moves only."""
    moves = phase_moves(phase)
    spaces = tuple(explore_component(c, moves, size, registry) for c in phase_components(phase, size))
    table = PruningTable(
        phase=phase,
        size=size,
        moves=moves,
        spaces=spaces,
        distances=np.empty(0, dtype=np.int8),
    )
    radices = table.radices
    strides = table.strides
    total = int(np.prod(radices, dtype=np.int64)) if radices else 1

    distances = np.full(total, UNREACHED, dtype=np.int8)
    distances[table.goal] = 0
    frontier = np.array([table.goal], dtype=np.int64)
    depth = 0

    bar = tqdm(total=total, desc=f"{phase.value} N={size}", unit="coord", disable=not progress, leave=False)
    try:
        bar.update(1)
        while frontier.size:
            digits = _split(frontier, radices, strides)
            neighbours = []
            for m in range(len(moves)):
                nxt = np.zeros_like(frontier)
                for space, d, stride in zip(spaces, digits, strides):
                    nxt += space.move_table[m][d].astype(np.int64) * stride
                neighbours.append(nxt)
            candidates = np.unique(np.concatenate(neighbours)) if neighbours else frontier[:0]
            frontier = candidates[distances[candidates] == UNREACHED]
            if frontier.size == 0:
                break
            depth += 1
            if depth > np.iinfo(np.int8).max:
                raise RuntimeError(f"{phase.value}: search depth overflow while building table")
            distances[frontier] = depth
            bar.update(int(frontier.size))
            bar.set_postfix({"depth": depth})
    finally:
        bar.close()

    table.distances = distances
    _check_coverage(table)
    return table


def _check_coverage(table: PruningTable) -> None:
    reached = np.flatnonzero(table.distances != UNREACHED)
    for space, values in zip(table.spaces, _split(reached, table.radices, table.strides)):
        if np.unique(values).size != len(space):
            raise RuntimeError(
                f"{table.phase.value}: component {space.component.name} has keys "
                "that no reachable coordinate uses"
            )


class TableCache:
    """Pruning tables built on first use and kept until invalidated, keyed by (size, phase)."""

    def __init__(self, registry: PermutationRegistry | None = None, verbose: bool = False):
        self.registry = registry
        self.verbose = verbose
        self._lock = threading.RLock()
        self._tables: dict[tuple[int, Phase], PruningTable] = {}

    def __contains__(self, key: tuple[int, Phase]) -> bool:
        return key in self._tables

    def __len__(self) -> int:
        return len(self._tables)

    def get(self, size: int, phase: Phase) -> PruningTable:
        key = (size, phase)
        table = self._tables.get(key)
        if table is not None:
            return table
        with self._lock:
            table = self._tables.get(key)
            if table is None:
                started = datetime.now()
                table = build_pruning_table(phase, size, self.registry, progress=self.verbose)
                elapsed = (datetime.now() - started).total_seconds()
                self._log(
                    f"table_built phase={phase.value} size={size} coords={table.distances.size} "
                    f"reached={table.reached} max_depth={table.max_distance} seconds={elapsed:.2f}"
                )
                self._tables[key] = table
        return table

    def invalidate(self, size: int | None = None) -> None:
        with self._lock:
            if size is None:
                self._tables.clear()
            else:
                for key in [k for k in self._tables if k[0] == size]:
                    del self._tables[key]

    def _log(self, message: str) -> None:
        if not self.verbose:
            return
        ts = datetime.now().strftime("%H:%M:%S")
        tqdm.write(f"[{ts}] {message}")
