"""Solver configuration loaded from YAML."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .coordinates import Phase

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "configs" / "solver.yaml"


@dataclass
class SolverConfig:
    # None means: bounded by the deepest entry of the phase's pruning table.
    max_depths: dict[Phase, int | None] = field(default_factory=lambda: {phase: None for phase in Phase})
    verbose: bool = False

    def max_depth(self, phase: Phase) -> int | None:
        return self.max_depths.get(phase)


def load_config(path: str | Path) -> SolverConfig:
    """Load YAML config. Returns a SolverConfig built from its 'solver' section."""
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config root must be a mapping: {path}")
    return config_from_dict(data.get("solver", {}) or {})


def config_from_dict(section: dict[str, Any]) -> SolverConfig:
    unknown = set(section) - {"max_depths", "verbose"}
    if unknown:
        raise ValueError(f"Unknown solver config keys: {', '.join(sorted(unknown))}")

    config = SolverConfig()
    verbose = section.get("verbose", False)
    if not isinstance(verbose, bool):
        raise ValueError(f"solver.verbose must be true or false, got {verbose!r}")
    config.verbose = verbose

    depths = section.get("max_depths") or {}
    if not isinstance(depths, dict):
        raise ValueError("solver.max_depths must be a mapping of phase name to depth")
    for name, depth in depths.items():
        try:
            phase = Phase(name)
        except ValueError:
            raise ValueError(f"Unknown phase in solver.max_depths: {name}") from None
        if depth is not None and (not isinstance(depth, int) or isinstance(depth, bool) or depth < 0):
            raise ValueError(f"solver.max_depths.{name} must be a non-negative integer or null")
        config.max_depths[phase] = depth
    return config
