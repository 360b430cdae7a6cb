import tempfile
import unittest
from pathlib import Path

from rubik_solver.config import DEFAULT_CONFIG_PATH, SolverConfig, config_from_dict, load_config
from rubik_solver.coordinates import Phase


class TestConfig(unittest.TestCase):
    def test_default_file(self):
        self.assertTrue(DEFAULT_CONFIG_PATH.exists())
        config = load_config(DEFAULT_CONFIG_PATH)
        self.assertFalse(config.verbose)
        for phase in Phase:
            self.assertIsNone(config.max_depth(phase))

    def test_load_yaml(self):
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "solver.yaml"
            path.write_text(
                "solver:\n  verbose: true\n  max_depths:\n    edge_orientation: 5\n    half_turn: null\n",
                encoding="utf-8",
            )
            config = load_config(path)
        self.assertTrue(config.verbose)
        self.assertEqual(config.max_depth(Phase.EDGE_ORIENTATION), 5)
        self.assertIsNone(config.max_depth(Phase.HALF_TURN))
        self.assertIsNone(config.max_depth(Phase.TETRAD_PARITY))

    def test_empty_file(self):
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "empty.yaml"
            path.write_text("", encoding="utf-8")
            config = load_config(path)
        self.assertEqual(config.max_depths, SolverConfig().max_depths)

    def test_invalid_sections(self):
        with self.assertRaises(ValueError):
            config_from_dict({"depth": 3})
        with self.assertRaises(ValueError):
            config_from_dict({"max_depths": {"phase_five": 3}})
        with self.assertRaises(ValueError):
            config_from_dict({"max_depths": {"half_turn": -1}})
        with self.assertRaises(ValueError):
            config_from_dict({"max_depths": [1, 2]})

    def test_verbose_must_be_boolean(self):
        self.assertTrue(config_from_dict({"verbose": True}).verbose)
        for value in ("false", "yes", 1, None):
            with self.assertRaises(ValueError, msg=repr(value)):
                config_from_dict({"verbose": value})

    def test_non_mapping_root(self):
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "list.yaml"
            path.write_text("- 1\n- 2\n", encoding="utf-8")
            with self.assertRaises(ValueError):
                load_config(path)


if __name__ == "__main__":
    unittest.main()
