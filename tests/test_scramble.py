import unittest

import numpy as np

from rubik_sim.errors import InvalidSizeError
from rubik_sim.moves import MoveKind
from rubik_sim.scramble import parse_scramble, random_scramble


class TestRandomScramble(unittest.TestCase):
    def test_default_length_scales_with_size(self):
        self.assertEqual(len(random_scramble(3, seed=1)), 30)
        self.assertEqual(len(random_scramble(5, seed=1)), 50)
        self.assertEqual(len(random_scramble(3, length=7, seed=1)), 7)
        self.assertEqual(random_scramble(3, length=0, seed=1), [])

    def test_deterministic_for_fixed_seed(self):
        self.assertEqual(random_scramble(4, allow_wide=True, seed=123), random_scramble(4, allow_wide=True, seed=123))

    def test_accepts_generator(self):
        a = random_scramble(3, rng=np.random.default_rng(5))
        b = random_scramble(3, rng=np.random.default_rng(5))
        self.assertEqual(a, b)

    def test_no_face_or_variant_repeats(self):
        moves = random_scramble(3, length=300, seed=99)
        for prev, nxt in zip(moves, moves[1:]):
            self.assertNotEqual(prev.face, nxt.face)
            self.assertNotEqual(prev.variant, nxt.variant)

    def test_face_turns_only_without_wide(self):
        moves = random_scramble(6, length=200, seed=3)
        self.assertTrue(all(mv.kind is MoveKind.TURN for mv in moves))

    def test_wide_layer_counts(self):
        moves = random_scramble(6, allow_wide=True, length=300, seed=11)
        layers = [mv.layers for mv in moves]
        self.assertEqual(set(layers), {1, 2, 3})
        for prev, nxt in zip(layers, layers[1:]):
            self.assertNotEqual(prev, nxt)

    def test_small_cube_with_wide_allowed(self):
        moves = random_scramble(3, allow_wide=True, length=50, seed=4)
        self.assertTrue(all(mv.layers == 1 for mv in moves))

    def test_scramble_text_round_trip(self):
        moves = random_scramble(5, allow_wide=True, seed=8)
        self.assertEqual(parse_scramble(" ".join(str(mv) for mv in moves)), moves)

    def test_invalid_arguments(self):
        with self.assertRaises(InvalidSizeError):
            random_scramble(0)
        with self.assertRaises(ValueError):
            random_scramble(3, length=-1)


if __name__ == "__main__":
    unittest.main()
