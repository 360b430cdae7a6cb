"""Rotation geometry shared by the geometric cube and the solver."""

from __future__ import annotations

from collections import deque

import numpy as np

from .moves import Face, Move, MoveKind, MoveVariant

AXIS_INDEX = {"x": 0, "y": 1, "z": 2}

# Outward normal of each face.
FACE_NORMALS = {
    Face.U: (0, 1, 0),
    Face.R: (1, 0, 0),
    Face.F: (0, 0, 1),
    Face.D: (0, -1, 0),
    Face.L: (-1, 0, 0),
    Face.B: (0, 0, -1),
}

# Clockwise turn from face viewpoint expressed as world-axis rotation angle.
CLOCKWISE_ANGLE_DEG = {
    "U": -90,
    "D": +90,
    "L": +90,
    "R": -90,
    "F": -90,
    "B": +90,
    "x": -90,
    "y": -90,
    "z": -90,
}

FACE_AXIS_LAYER = {
    "U": ("y", +1),
    "D": ("y", -1),
    "L": ("x", -1),
    "R": ("x", +1),
    "F": ("z", +1),
    "B": ("z", -1),
    "x": ("x", +1),
    "y": ("y", +1),
    "z": ("z", +1),
}

NORMAL_TO_FACE = {normal: face for face, normal in FACE_NORMALS.items()}


def rotation_matrix(axis: str, angle_deg: int) -> np.ndarray:
    """Return integer rotation matrix for +-90 around x/y/z axes."""
    if axis == "x" and angle_deg == +90:
        return np.array([[1, 0, 0], [0, 0, -1], [0, 1, 0]], dtype=np.int64)
    if axis == "x" and angle_deg == -90:
        return np.array([[1, 0, 0], [0, 0, 1], [0, -1, 0]], dtype=np.int64)
    if axis == "y" and angle_deg == +90:
        return np.array([[0, 0, 1], [0, 1, 0], [-1, 0, 0]], dtype=np.int64)
    if axis == "y" and angle_deg == -90:
        return np.array([[0, 0, -1], [0, 1, 0], [1, 0, 0]], dtype=np.int64)
    if axis == "z" and angle_deg == +90:
        return np.array([[0, -1, 0], [1, 0, 0], [0, 0, 1]], dtype=np.int64)
    if axis == "z" and angle_deg == -90:
        return np.array([[0, 1, 0], [-1, 0, 0], [0, 0, 1]], dtype=np.int64)
    raise ValueError(f"Unsupported rotation: axis={axis}, angle={angle_deg}")


def move_rotation(mv: Move) -> tuple[int, int, np.ndarray]:
    """Axis index, layer sign and rotation matrix of a move."""
    axis, sign = FACE_AXIS_LAYER[mv.face]
    quarter = rotation_matrix(axis, CLOCKWISE_ANGLE_DEG[mv.face])
    if mv.variant is MoveVariant.STANDARD:
        rot = quarter
    elif mv.variant is MoveVariant.DOUBLE:
        rot = quarter @ quarter
    else:
        rot = quarter.T
    return AXIS_INDEX[axis], sign, rot


def affected_layers(mv: Move, coords: np.ndarray, size: int) -> np.ndarray:
    """Boolean mask of stickers whose centroid lies in the turning slab."""
    if mv.kind is MoveKind.ROTATION:
        return np.ones(len(coords), dtype=bool)
    axis_idx, sign, _ = move_rotation(mv)
    depth = size - 2 * mv.layers
    return sign * coords[:, axis_idx] >= depth


def face_of_normal(normal: np.ndarray) -> Face:
    return NORMAL_TO_FACE[tuple(int(v) for v in normal)]


# Whole-cube reorientations that bring each face to the U position.
_X = Move.rotation("x")
_Y = Move.rotation("y")
FACE_TO_UP_MOVES: dict[Face, tuple[Move, ...]] = {
    Face.U: (),
    Face.R: (_Y, _X),
    Face.F: (_X,),
    Face.D: (_X.with_variant(MoveVariant.DOUBLE),),
    Face.L: (_Y.with_variant(MoveVariant.INVERSE), _X),
    Face.B: (_Y.with_variant(MoveVariant.DOUBLE), _X),
}


def _matrix_key(mat: np.ndarray) -> tuple[int, ...]:
    return tuple(int(v) for v in mat.reshape(-1))


def _generate_orientation_sequences() -> list[tuple[Move, ...]]:
    gens = [Move.rotation(axis) for axis in "xyz"]
    identity = np.eye(3, dtype=np.int64)

    sequences: list[tuple[Move, ...]] = []
    seen: set[tuple[int, ...]] = set()
    q: deque[tuple[np.ndarray, tuple[Move, ...]]] = deque([(identity, ())])

    while q:
        mat, seq = q.popleft()
        key = _matrix_key(mat)
        if key in seen:
            continue
        seen.add(key)
        sequences.append(seq)
        for g in gens:
            q.append((move_rotation(g)[2] @ mat, seq + (g,)))

    if len(sequences) != 24:
        raise RuntimeError(f"Expected 24 orientations, got {len(sequences)}")
    return sequences


# Shortest x/y/z sequence for each of the 24 whole-cube orientations.
ORIENTATION_SEQUENCES = _generate_orientation_sequences()
