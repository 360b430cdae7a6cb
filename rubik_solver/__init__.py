"""Four-phase subgroup reduction solver for the cube model in ``rubik_sim``."""

from .config import SolverConfig, load_config
from .coordinates import PHASE_ORDER, Phase, phase_moves
from .pruning import PruningTable, TableCache, build_pruning_table
from .search import PhaseSearch
from .thistlethwaite import Solver, solve

__all__ = [
    "PHASE_ORDER",
    "Phase",
    "PhaseSearch",
    "PruningTable",
    "Solver",
    "SolverConfig",
    "TableCache",
    "build_pruning_table",
    "load_config",
    "phase_moves",
    "solve",
]
