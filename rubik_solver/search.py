"""Iterative-deepening A* within one phase."""

from __future__ import annotations

from rubik_sim.facelet_cube import FaceletCube
from rubik_sim.moves import Move

from .pruning import UNREACHED, PruningTable


class PhaseSearch:
    """IDA* over component coordinates, guided by an exact pruning table.

    Depth bounds are tried in increasing order; within a bound moves are
    expanded in the table's move order, so the first hit is the shortest
    solution and ties go to the earlier move.
    """

    def __init__(self, table: PruningTable, max_depth: int | None = None):
        self.table = table
        self.max_depth = table.max_distance if max_depth is None else max_depth
        self._faces = [mv.face for mv in table.moves]
        self._strides = table.strides
        self._distances = table.distances
        self.nodes = 0

    def solve(self, cube: FaceletCube) -> list[Move] | None:
        start = self.table.digits(cube)
        if start is None:
            return None
        if self._heuristic(start) == UNREACHED:
            return None

        successors = self.table.successors()
        self.nodes = 0
        for bound in range(self.max_depth + 1):
            path: list[int] = []
            if self._dfs(start, 0, bound, None, path, successors):
                return [self.table.moves[i] for i in path]
        return None

    def _heuristic(self, digits: tuple[int, ...]) -> int:
        index = 0
        for d, s in zip(digits, self._strides):
            index += d * s
        return int(self._distances[index])

    def _dfs(
        self,
        digits: tuple[int, ...],
        depth: int,
        bound: int,
        last_face: str | None,
        path: list[int],
        successors: list[list[list[int]]],
    ) -> bool:
        self.nodes += 1
        h = self._heuristic(digits)
        if h == 0:
            return True
        if h == UNREACHED or depth + h > bound:
            return False

        for m, face in enumerate(self._faces):
            # consecutive turns of one face collapse into a single move
            if face == last_face:
                continue
            nxt = tuple(table[m][d] for table, d in zip(successors, digits))
            path.append(m)
            if self._dfs(nxt, depth + 1, bound, face, path, successors):
                return True
            path.pop()
        return False
