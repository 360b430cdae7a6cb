"""Four-phase subgroup reduction solver."""

from __future__ import annotations

from datetime import datetime

import numpy as np
from tqdm import tqdm

from rubik_sim.errors import UnsupportedSizeError
from rubik_sim.facelet_cube import FaceletCube
from rubik_sim.geometric_cube import GeoCube
from rubik_sim.geometry import ORIENTATION_SEQUENCES
from rubik_sim.moves import Move, format_moves
from rubik_sim.pieces import piece_model
from rubik_sim.scramble import simplify_moves

from .config import SolverConfig
from .coordinates import PHASE_ORDER
from .pruning import TableCache
from .search import PhaseSearch

MAX_SOLVER_SIZE = 3


class Solver:
    """Runs the phases in order, feeding each phase the cube left by the previous one."""

    def __init__(self, config: SolverConfig | None = None, cache: TableCache | None = None):
        self.config = config or SolverConfig()
        self.cache = cache if cache is not None else TableCache(verbose=self.config.verbose)

    def solve(self, cube: FaceletCube | GeoCube) -> list[Move] | None:
        if isinstance(cube, GeoCube):
            cube = FaceletCube.from_geometric(cube, self.cache.registry)
        size = cube.size
        if size > MAX_SOLVER_SIZE:
            raise UnsupportedSizeError(size, MAX_SOLVER_SIZE)
        if cube.is_solved():
            return []

        solution = _centre_alignment(cube)
        if solution is None:
            self._log("solve_failed reason=centres_not_alignable")
            return None
        cube = cube.apply_moves(solution)

        for phase in PHASE_ORDER:
            table = self.cache.get(size, phase)
            search = PhaseSearch(table, self.config.max_depth(phase))
            moves = search.solve(cube)
            if moves is None:
                self._log(f"solve_failed phase={phase.value} max_depth={search.max_depth}")
                return None
            self._log(f"phase_done phase={phase.value} moves={len(moves)} nodes={search.nodes} [{format_moves(moves)}]")
            cube = cube.apply_moves(moves)
            solution.extend(moves)

        if not cube.is_solved():
            raise RuntimeError("Phase chain finished on an unsolved cube")
        return simplify_moves(solution)

    def _log(self, message: str) -> None:
        if not self.config.verbose:
            return
        ts = datetime.now().strftime("%H:%M:%S")
        tqdm.write(f"[{ts}] {message}")


def _centre_alignment(cube: FaceletCube) -> list[Move] | None:
    """Whole-cube rotation that puts every fixed centre back on its home face."""
    centres = piece_model(cube.size).fixed_centers()
    if not centres:
        return []
    for seq in ORIENTATION_SEQUENCES:
        homes = cube.apply_moves(list(seq)).home_indices()
        if np.array_equal(homes[centres], centres):
            return list(seq)
    return None


_default_solver: Solver | None = None


def default_solver() -> Solver:
    global _default_solver
    if _default_solver is None:
        _default_solver = Solver()
    return _default_solver


def solve(cube: FaceletCube | GeoCube) -> list[Move] | None:
    """Solve a cube with the shared default solver; None when no solution is found."""
    return default_solver().solve(cube)
