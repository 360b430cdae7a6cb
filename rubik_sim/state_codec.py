"""State validation and codec helpers."""

from __future__ import annotations

import math

import numpy as np

from .errors import StateValidationError
from .moves import FACE_NAMES, Face
from .pieces import piece_model

N_FACES = 6


def cube_size_for(length: int) -> int:
    size = math.isqrt(length // N_FACES) if length % N_FACES == 0 else 0
    if size < 1 or N_FACES * size * size != length:
        raise StateValidationError(f"State length must be 6 * N * N for some N >= 1, got {length}")
    return size


def validate_state(state: list[int] | list[Face] | np.ndarray, allow_masked: bool = False) -> np.ndarray:
    """Validate a flat face sequence and return it as an int8 array."""
    arr = np.asarray(state).astype(np.int16).reshape(-1)
    size = cube_size_for(arr.size)

    upper = int(Face.X) if allow_masked else N_FACES - 1
    if np.any(arr < 0) or np.any(arr > upper):
        raise StateValidationError(f"State contains invalid face ids; allowed values are 0..{upper}")

    if not allow_masked:
        counts = np.bincount(arr, minlength=N_FACES)
        if not np.all(counts == size * size):
            raise StateValidationError(
                f"Invalid sticker counts; each face must appear exactly {size * size} times"
            )

    return arr.astype(np.int8, copy=True)


def flat_to_faces(state: list[int] | np.ndarray) -> np.ndarray:
    """Reshape a flat state to (6, N, N): one row-major grid per face."""
    arr = validate_state(state, allow_masked=True)
    size = cube_size_for(arr.size)
    return arr.reshape(N_FACES, size, size)


def faces_to_flat(faces: np.ndarray) -> np.ndarray:
    arr = np.asarray(faces, dtype=np.int16)
    if arr.ndim != 3 or arr.shape[0] != N_FACES or arr.shape[1] != arr.shape[2]:
        raise StateValidationError(f"Faces array must have shape (6, N, N), got {arr.shape}")
    return validate_state(arr.reshape(-1), allow_masked=True)


def state_to_string(state: list[int] | np.ndarray) -> str:
    """Facelet string such as ``UUUUUUUUURRR...``; masked stickers print as ``X``."""
    return "".join(Face(int(v)).name for v in np.asarray(state).reshape(-1))


def state_from_string(text: str) -> np.ndarray:
    letters = "".join(text.split())
    unknown = sorted({ch for ch in letters if ch not in FACE_NAMES})
    if unknown:
        raise StateValidationError(f"Unknown facelet letters: {''.join(unknown)}")
    return validate_state([FACE_NAMES.index(ch) for ch in letters])


def recover_home_indices(faces: np.ndarray, size: int) -> np.ndarray:
    """Assign a home index to every sticker of a coloured state.

    Each piece slot is matched to an unused solved piece with the same colour
    set; pieces sharing a colour set (wings, inner centres) are taken in order.
    """
    model = piece_model(size)
    available: dict[tuple[int, ...], list[int]] = {}
    for i, piece in enumerate(model.pieces):
        available.setdefault(piece.color_key, []).append(i)

    homes = np.empty(len(faces), dtype=np.int32)
    for slot in model.pieces:
        colors = tuple(int(faces[idx]) for idx in slot.stickers)
        candidates = available.get(tuple(sorted(colors)))
        if not candidates:
            names = "".join(Face(c).name for c in colors)
            raise StateValidationError(f"No piece with colours {names} is left for position {slot.position}")
        piece = model.pieces[candidates.pop(0)]
        for idx, color in zip(slot.stickers, colors):
            homes[idx] = piece.sticker_on(Face(color))
    return homes
