"""Phase coordinates for the four-phase subgroup reduction.

Each phase projects the cube onto the part of its state that the phase has
to fix. A projection is a set of components; a component blanks every sticker
except those of one piece class and relabels the survivors (``Cube.mask``),
optionally adding the corner permutation parity. Component keys are numbered
in breadth-first discovery order under the phase's moves, so index 0 is
always the solved key.

Subgroup chain (moves allowed in each phase):

    G0 = <U, D, L, R, F, B>          all face turns
    G1 = <U, D, L, R, F2, B2>        edges oriented
    G2 = <U, D, L2, R2, F2, B2>      corners oriented, E-slice edges in E
    G3 = <U2, D2, L2, R2, F2, B2>    corners paired, edges in slices, even parity
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Callable

import numpy as np

from rubik_sim.facelet_cube import FaceletCube, PermutationRegistry
from rubik_sim.moves import FACE_NAMES, Face, Move, MoveVariant
from rubik_sim.pieces import Piece, PieceModel, piece_model


class Phase(enum.Enum):
    EDGE_ORIENTATION = "edge_orientation"
    CORNER_ORIENTATION_SLICE = "corner_orientation_slice"
    TETRAD_PARITY = "tetrad_parity"
    HALF_TURN = "half_turn"


PHASE_ORDER = tuple(Phase)

_QUARTER = (MoveVariant.STANDARD, MoveVariant.DOUBLE, MoveVariant.INVERSE)
_HALF = (MoveVariant.DOUBLE,)

_PHASE_VARIANTS = {
    Phase.EDGE_ORIENTATION: {face: _QUARTER for face in FACE_NAMES},
    Phase.CORNER_ORIENTATION_SLICE: {"U": _QUARTER, "R": _QUARTER, "F": _HALF, "D": _QUARTER, "L": _QUARTER, "B": _HALF},
    Phase.TETRAD_PARITY: {"U": _QUARTER, "R": _HALF, "F": _HALF, "D": _QUARTER, "L": _HALF, "B": _HALF},
    Phase.HALF_TURN: {face: _HALF for face in FACE_NAMES},
}


def phase_moves(phase: Phase) -> tuple[Move, ...]:
    """Legal moves of a phase in their fixed enumeration order."""
    variants = _PHASE_VARIANTS[phase]
    return tuple(Move.turn(face, v) for face in FACE_NAMES for v in variants[face])


@dataclass(frozen=True)
class Component:
    """One masked projection of the cube.

    ``labels`` maps home index to the label kept at that sticker; ``None``
    keeps the sticker's own face. Stickers not listed are blanked.
    """

    name: str
    labels: dict[int, Face | None]
    corner_parity: tuple[tuple[int, ...], tuple[int, ...]] | None = None

    def projector(self, home: int, face: Face) -> Face:
        if home not in self.labels:
            return Face.X
        label = self.labels[home]
        return face if label is None else label

    def key(self, masked: FaceletCube) -> bytes:
        """Key of a cube that was already masked with ``projector``."""
        key = masked.state().tobytes()
        if self.corner_parity is not None:
            key += bytes([_permutation_parity(masked.home_indices(), *self.corner_parity)])
        return key


def _permutation_parity(homes: np.ndarray, slots: tuple[int, ...], owner: tuple[int, ...]) -> int:
    """Parity of the piece permutation read at one reference sticker per slot."""
    seq = [owner[int(homes[s])] for s in slots]
    inversions = 0
    for i in range(len(seq)):
        for j in range(i + 1, len(seq)):
            if seq[i] > seq[j]:
                inversions += 1
    return inversions % 2


def _sign(v: int) -> int:
    return (v > 0) - (v < 0)


def _label_all(pieces: list[Piece], label: Callable[[Piece], Face | None]) -> dict[int, Face | None]:
    labels: dict[int, Face | None] = {}
    for piece in pieces:
        value = label(piece)
        for idx in piece.stickers:
            labels[idx] = value
    return labels


def _edge_reference(piece: Piece) -> int:
    for face in (Face.U, Face.D, Face.F, Face.B):
        idx = piece.sticker_on(face)
        if idx is not None:
            return idx
    raise RuntimeError(f"Edge at {piece.position} has no U/D/F/B sticker")


def _ud_sticker(piece: Piece) -> int:
    idx = piece.sticker_on(Face.U)
    if idx is None:
        idx = piece.sticker_on(Face.D)
    if idx is None:
        raise RuntimeError(f"Corner at {piece.position} has no U/D sticker")
    return idx


_PAIR_LABELS = {(1, 1): Face.U, (1, -1): Face.R, (-1, 1): Face.F, (-1, -1): Face.D}
_SLICE_LABELS = {0: Face.U, 2: Face.R, 1: Face.F}  # zero coordinate on x: M, z: S, y: E


def _corner_pair(piece: Piece) -> Face:
    # Corners sharing a U/D layer and lying on the same face diagonal.
    x, y, z = piece.position
    return _PAIR_LABELS[(_sign(y), _sign(x * z))]


def _edge_slice(piece: Piece) -> Face:
    axis = next(i for i, v in enumerate(piece.position) if v == 0)
    return _SLICE_LABELS[axis]


def _corner_parity_spec(model: PieceModel) -> tuple[tuple[int, ...], tuple[int, ...]]:
    corners = model.corners
    rank = {model.pieces.index(p): i for i, p in enumerate(corners)}
    slots = tuple(p.stickers[0] for p in corners)
    owner = tuple(rank.get(piece, -1) for piece in model.piece_of_sticker)
    return slots, owner


def phase_components(phase: Phase, size: int) -> list[Component]:
    """Non-empty components of a phase's coordinate for a cube size."""
    model = piece_model(size)
    corners = model.corners
    edges = model.edges

    if phase is Phase.EDGE_ORIENTATION:
        components = [Component("edge_orientation", {_edge_reference(e): Face.U for e in edges})]
    elif phase is Phase.CORNER_ORIENTATION_SLICE:
        e_slice = [e for e in edges if e.position[1] == 0]
        components = [
            Component("corner_orientation", {_ud_sticker(c): Face.U for c in corners}),
            Component("e_slice", _label_all(e_slice, lambda e: Face.F)),
        ]
    elif phase is Phase.TETRAD_PARITY:
        components = [
            Component("corner_pairs", _label_all(corners, _corner_pair), _corner_parity_spec(model)),
            Component("edge_slices", _label_all(edges, _edge_slice)),
        ]
    elif phase is Phase.HALF_TURN:
        components = [
            Component("corners", _label_all(corners, lambda c: None)),
            Component("edges", _label_all(edges, lambda e: None)),
        ]
    else:
        raise ValueError(f"Unknown phase: {phase}")

    return [c for c in components if c.labels]


@dataclass
class ComponentSpace:
    """Discovered keys of one component and its move table."""

    component: Component
    index: dict[bytes, int]
    move_table: np.ndarray  # (n_moves, n_keys): successor key index

    def __len__(self) -> int:
        return len(self.index)

    def coordinate(self, cube: FaceletCube) -> int | None:
        return self.index.get(self.component.key(cube.mask(self.component.projector)))


def explore_component(
    component: Component,
    moves: tuple[Move, ...],
    size: int,
    registry: PermutationRegistry | None = None,
) -> ComponentSpace:
    """Breadth-first discovery of every key reachable from solved under ``moves``."""
    start = FaceletCube.new(size, registry).mask(component.projector)
    index = {component.key(start): 0}
    frontier = [start]
    transitions: list[list[int]] = []

    i = 0
    while i < len(frontier):
        cube = frontier[i]
        row = []
        for mv in moves:
            nxt = cube.apply_move(mv)
            key = component.key(nxt)
            j = index.get(key)
            if j is None:
                j = index[key] = len(frontier)
                frontier.append(nxt)
            row.append(j)
        transitions.append(row)
        i += 1

    move_table = np.array(transitions, dtype=np.int32).T.copy()
    return ComponentSpace(component=component, index=index, move_table=move_table)
