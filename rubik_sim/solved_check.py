"""Solved-state checks for the cube model."""

from __future__ import annotations

import numpy as np


def is_solved_state(state: list[int] | np.ndarray, size: int) -> bool:
    """True when each of the six size*size blocks holds a single label."""
    faces = np.asarray(state).reshape(6, size * size)
    return bool(np.all(faces == faces[:, :1]))
