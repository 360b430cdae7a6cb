"""CLI entrypoint for the cube solver."""

from __future__ import annotations

import argparse
from datetime import datetime

from rubik_sim.facelet_cube import FaceletCube
from rubik_sim.moves import format_moves
from rubik_sim.scramble import parse_scramble, random_scramble
from rubik_sim.state_codec import state_from_string, state_to_string

from .config import DEFAULT_CONFIG_PATH, SolverConfig, load_config
from .coordinates import PHASE_ORDER
from .thistlethwaite import Solver


def _load_solver_config(path: str | None, verbose: bool) -> SolverConfig:
    if path is not None:
        config = load_config(path)
    elif DEFAULT_CONFIG_PATH.exists():
        config = load_config(DEFAULT_CONFIG_PATH)
    else:
        config = SolverConfig()
    if verbose:
        config.verbose = True
    return config


def _log(message: str) -> None:
    ts = datetime.now().strftime("%H:%M:%S")
    print(f"[{ts}] {message}", flush=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="NxNxN cube scrambler and four-phase solver")
    sub = parser.add_subparsers(dest="mode", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", type=str, default=None, help="Path to YAML config (solver section)")
    common.add_argument("--size", type=int, default=3)
    common.add_argument("--verbose", action="store_true", help="Log phase progress and table builds")

    solve = sub.add_parser("solve", parents=[common], help="Solve a scrambled cube")
    solve.add_argument("--scramble", type=str, default=None, help="WCA scramble applied to a solved cube")
    solve.add_argument("--state", type=str, default=None, help="Facelet string in U, R, F, D, L, B order")

    scramble = sub.add_parser("scramble", parents=[common], help="Print a random scramble")
    scramble.add_argument("--length", type=int, default=None)
    scramble.add_argument("--seed", type=int, default=None)
    scramble.add_argument("--wide", action="store_true", help="Allow wide turns")

    sub.add_parser("tables", parents=[common], help="Build every pruning table for a size")

    return parser


def _run_solve(args: argparse.Namespace, parser: argparse.ArgumentParser) -> int:
    if (args.scramble is None) == (args.state is None):
        parser.error("Use exactly one of --scramble or --state")

    if args.state is not None:
        cube = FaceletCube.from_state(state_from_string(args.state))
    else:
        cube = FaceletCube.new(args.size).apply_moves(parse_scramble(args.scramble))

    solver = Solver(_load_solver_config(args.config, args.verbose))
    solution = solver.solve(cube)
    if solution is None:
        _log(f"no solution found state={state_to_string(cube.state())}")
        return 1
    print(format_moves(solution))
    return 0


def _run_tables(args: argparse.Namespace) -> int:
    config = _load_solver_config(args.config, verbose=True)
    solver = Solver(config)
    for phase in PHASE_ORDER:
        solver.cache.get(args.size, phase)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        if args.mode == "solve":
            return _run_solve(args, parser)
        if args.mode == "scramble":
            moves = random_scramble(args.size, allow_wide=args.wide, length=args.length, seed=args.seed)
            print(format_moves(moves))
            return 0
        if args.mode == "tables":
            if args.size < 1 or args.size > 3:
                parser.error("--size must be between 1 and 3 for table builds")
            return _run_tables(args)
    except ValueError as exc:
        # library errors (parse, size, move, state, config) all derive from ValueError
        parser.error(str(exc))

    parser.error(f"Unsupported mode: {args.mode}")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
