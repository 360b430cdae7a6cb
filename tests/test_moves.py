import unittest

from rubik_sim.errors import ParseError
from rubik_sim.moves import Move, MoveKind, MoveVariant, all_moves, format_moves, invert_moves
from rubik_sim.scramble import count_turns, parse_move, parse_scramble, simplify_moves


def names(moves):
    return [str(mv) for mv in moves]


class TestParse(unittest.TestCase):
    def test_parse_face_turns(self):
        moves = parse_scramble("R2 U' F")
        self.assertEqual(
            moves,
            [
                Move.turn("R", MoveVariant.DOUBLE),
                Move.turn("U", MoveVariant.INVERSE),
                Move.turn("F", MoveVariant.STANDARD),
            ],
        )

    def test_parse_wide_and_rotations(self):
        self.assertEqual(parse_move("Uw'"), Move.wide("U", 2, MoveVariant.INVERSE))
        self.assertEqual(parse_move("3Rw2"), Move.wide("R", 3, MoveVariant.DOUBLE))
        self.assertEqual(parse_move("x"), Move.rotation("x"))
        self.assertEqual(parse_move("y2"), Move.rotation("y", MoveVariant.DOUBLE))
        self.assertEqual(parse_move("z'").kind, MoveKind.ROTATION)

    def test_double_prime_is_a_double(self):
        self.assertEqual(parse_move("R2'"), Move.turn("R", MoveVariant.DOUBLE))

    def test_tokens_render_back(self):
        for token in ["R", "U'", "F2", "Rw", "3Rw2", "x'", "1Lw", "Bw2"]:
            self.assertEqual(str(parse_move(token)), token)

    def test_extra_whitespace_is_ignored(self):
        self.assertEqual(names(parse_scramble("  R   U\tF2 \n")), ["R", "U", "F2"])
        self.assertEqual(parse_scramble(""), [])

    def test_unknown_tokens_raise(self):
        for token in ["Q", "R3", "3R", "0Rw", "Rx", "r", "2x"]:
            with self.assertRaises(ParseError, msg=token) as ctx:
                parse_move(token)
            self.assertEqual(ctx.exception.token, token)

    def test_parse_error_reports_offending_token(self):
        with self.assertRaises(ParseError) as ctx:
            parse_scramble("R U Q F")
        self.assertEqual(ctx.exception.token, "Q")

    def test_parse_error_is_value_error(self):
        with self.assertRaises(ValueError):
            parse_scramble("R K")


class TestMove(unittest.TestCase):
    def test_variant_algebra(self):
        self.assertIs(MoveVariant.STANDARD.compose(MoveVariant.STANDARD), MoveVariant.DOUBLE)
        self.assertIs(MoveVariant.DOUBLE.compose(MoveVariant.INVERSE), MoveVariant.STANDARD)
        self.assertIsNone(MoveVariant.STANDARD.compose(MoveVariant.INVERSE))
        self.assertIsNone(MoveVariant.DOUBLE.compose(MoveVariant.DOUBLE))
        self.assertIs(MoveVariant.STANDARD.inverse(), MoveVariant.INVERSE)
        self.assertIs(MoveVariant.DOUBLE.inverse(), MoveVariant.DOUBLE)

    def test_invalid_moves_rejected(self):
        with self.assertRaises(ValueError):
            Move.turn("Q")
        with self.assertRaises(ValueError):
            Move.rotation("R")
        with self.assertRaises(ValueError):
            Move.wide("R", 0)

    def test_layer_count_only_on_wide_moves(self):
        with self.assertRaises(ValueError):
            Move(MoveKind.TURN, "R", layers=2)
        with self.assertRaises(ValueError):
            Move(MoveKind.ROTATION, "x", layers=3)
        self.assertEqual(Move(MoveKind.TURN, "R").family, parse_move("R'").family)

    def test_invert_moves(self):
        self.assertEqual(names(invert_moves(parse_scramble("R U2 Fw' x"))), ["x'", "Fw", "U2", "R'"])

    def test_family_distinguishes_layers(self):
        self.assertNotEqual(Move.wide("R", 2).family, Move.wide("R", 3).family)
        self.assertNotEqual(Move.turn("R").family, Move.wide("R", 2).family)
        self.assertEqual(Move.turn("R").family, Move.turn("R", MoveVariant.INVERSE).family)

    def test_all_moves(self):
        self.assertEqual(len(all_moves(3)), 18 + 18)
        self.assertEqual(len(all_moves(5)), 18 + 36)
        self.assertEqual(len(set(all_moves(4))), len(all_moves(4)))

    def test_format_and_count(self):
        moves = parse_scramble("R U x Rw2")
        self.assertEqual(format_moves(moves), "R U x Rw2")
        self.assertEqual(count_turns(moves), 3)


class TestSimplify(unittest.TestCase):
    def test_four_quarter_turns_vanish(self):
        self.assertEqual(simplify_moves(parse_scramble("R R R R")), [])

    def test_two_quarter_turns_merge(self):
        self.assertEqual(names(simplify_moves(parse_scramble("R R"))), ["R2"])

    def test_merges_cascade(self):
        self.assertEqual(
            names(simplify_moves(parse_scramble("B B2 B' R B2 B' R2 R' F2"))),
            ["B2", "R", "B", "R", "F2"],
        )
        self.assertEqual(names(simplify_moves(parse_scramble("R R' U2 F F' U2 x"))), ["x"])

    def test_different_families_do_not_merge(self):
        seq = parse_scramble("R L R Rw 3Rw x")
        self.assertEqual(simplify_moves(seq), seq)

    def test_idempotent(self):
        for text in ["R U R' U' R' F R2 U' R' U' R U R' F'", "U U D D' F2 F2 Lw Lw' y y", "R R R"]:
            once = simplify_moves(parse_scramble(text))
            self.assertEqual(simplify_moves(once), once)

    def test_no_adjacent_family_after_simplify(self):
        out = simplify_moves(parse_scramble("R R2 U U U L L' D2 D2 F"))
        for a, b in zip(out, out[1:]):
            self.assertNotEqual(a.family, b.family)


if __name__ == "__main__":
    unittest.main()
