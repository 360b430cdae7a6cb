import unittest

import numpy as np

from rubik_sim.errors import InvalidMoveError
from rubik_sim.facelet_cube import FaceletCube
from rubik_sim.geometric_cube import GeoCube
from rubik_sim.geometry import FACE_NORMALS, NORMAL_TO_FACE, ORIENTATION_SEQUENCES, face_of_normal, rotation_matrix
from rubik_sim.moves import Face, Move, solved_state
from rubik_sim.scramble import parse_scramble, random_scramble


class TestGeoCube(unittest.TestCase):
    def test_new_cube_is_solved(self):
        for size in range(1, 5):
            cube = GeoCube.new(size)
            self.assertTrue(cube.is_solved())
            self.assertTrue(np.array_equal(cube.state(), solved_state(size)))
            self.assertTrue(np.array_equal(cube.home_order(), np.arange(6 * size * size)))

    def test_matches_facelet_cube(self):
        for size in (1, 2, 3, 4, 5):
            moves = random_scramble(size, allow_wide=True, length=20, seed=40 + size)
            moves += parse_scramble("x' y z2 U2")
            geo = GeoCube.new(size).apply_moves(moves)
            flat = FaceletCube.new(size).apply_moves(moves)
            self.assertTrue(np.array_equal(geo.state(), flat.state()), msg=f"size {size}")
            self.assertTrue(np.array_equal(geo.home_order(), flat.home_indices()), msg=f"size {size}")

    def test_from_geometric(self):
        moves = parse_scramble("R U Fw' y")
        geo = GeoCube.new(4).apply_moves(moves)
        self.assertEqual(FaceletCube.from_geometric(geo), FaceletCube.new(4).apply_moves(moves))

    def test_u_turn_matches_reference(self):
        cube = GeoCube.new(3).apply_move(Move.turn("U"))
        expected = "UUUUUUUUU" "BBBRRRRRR" "RRRFFFFFF" "DDDDDDDDD" "FFFLLLLLL" "LLLBBBBBB"
        self.assertEqual("".join(Face(int(v)).name for v in cube.state()), expected)

    def test_too_many_layers(self):
        with self.assertRaises(InvalidMoveError):
            GeoCube.new(2).apply_move(Move.wide("U", 3))

    def test_moves_do_not_mutate(self):
        cube = GeoCube.new(3)
        cube.apply_move(Move.turn("R"))
        self.assertTrue(cube.is_solved())
        self.assertEqual(cube, GeoCube.new(3))

    def test_stickers(self):
        cube = GeoCube.new(3)
        stickers = cube.stickers()
        self.assertEqual(len(stickers), 54)
        for coord, face, label, _ in stickers:
            self.assertEqual(face, label)
            self.assertEqual(max(abs(v) for v in coord), 3)

        turned = GeoCube.new(3).apply_move(Move.turn("F"))
        moved = [s for s in turned.stickers() if s[1] != s[2]]
        self.assertEqual(len(moved), 12)

    def test_mask(self):
        masked = GeoCube.new(2).mask(lambda home, face: Face.U if face is Face.U else Face.X)
        state = masked.state()
        self.assertEqual(int(np.count_nonzero(state == Face.U)), 4)
        self.assertEqual(int(np.count_nonzero(state == Face.X)), 20)


class TestGeometry(unittest.TestCase):
    def test_face_normals(self):
        self.assertEqual(len(NORMAL_TO_FACE), 6)
        for face, normal in FACE_NORMALS.items():
            self.assertIs(face_of_normal(np.array(normal)), face)
        self.assertEqual(np.array(list(FACE_NORMALS.values())).sum(axis=0).tolist(), [0, 0, 0])

    def test_rotation_matrices(self):
        for axis in "xyz":
            quarter = rotation_matrix(axis, 90)
            self.assertTrue(np.array_equal(quarter @ rotation_matrix(axis, -90), np.eye(3, dtype=np.int64)))
            self.assertTrue(np.array_equal(np.linalg.matrix_power(quarter, 4), np.eye(3, dtype=np.int64)))
        with self.assertRaises(ValueError):
            rotation_matrix("x", 45)

    def test_orientation_sequences(self):
        self.assertEqual(len(ORIENTATION_SEQUENCES), 24)
        self.assertEqual(ORIENTATION_SEQUENCES[0], ())
        states = {FaceletCube.new(3).apply_moves(list(seq)).state().tobytes() for seq in ORIENTATION_SEQUENCES}
        self.assertEqual(len(states), 24)


if __name__ == "__main__":
    unittest.main()
