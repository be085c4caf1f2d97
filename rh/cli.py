import argparse
import json
import os
import sys
from dataclasses import replace

from tqdm import tqdm

from rh.board import validate_board
from rh.config import SolverConfig
from rh.data_loader import data_loader, load_board, parse_board, save_dataset
from rh.path import compress_moves, validate_solution
from rh.rh_exceptions import InvariantViolation, RushHourException
from rh.solver import RushHourSolver, SolveResult


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rh-solve",
        description="Find the shortest sequence of moves that gets the target car out of a Rush Hour board.",
    )
    parser.add_argument(
        "board",
        nargs="?",
        default="-",
        help="File holding the initial board, one row per line ('-' or nothing reads stdin)",
    )
    parser.add_argument("--size", type=int, default=None, help="Board size N for an N x N board (default 6)")
    parser.add_argument("--exit-row", type=int, default=None, help="Row index of the exit on the right edge (default 2)")
    parser.add_argument("--target", default=None, help="Symbol of the car to get out (default X)")
    parser.add_argument("--verbose", action="store_true", default=None, help="Trace every state explored, added or rejected")
    parser.add_argument("--progress-every", type=int, default=None, help="Print a status line every N explored states")
    parser.add_argument("--moves", action="store_true", help="Also print the solution as a JSON list of moves")
    parser.add_argument("--no-validate", action="store_true", help="Skip the car shape checks on the input board")
    parser.add_argument(
        "--dataset",
        default=None,
        help="Solve every puzzle of a JSON dataset instead of a single board. "
             "Every puzzle uses the same target car, so pass --target if it is not X (e.g. --target R)",
    )
    parser.add_argument("--output", default=None, help="Where to write the solved dataset (with --dataset)")
    return parser


def checked_moves(board, result: SolveResult, config: SolverConfig) -> list[dict]:
    """Compress the solution and replay it on ``board`` before handing it out."""
    moves = compress_moves(result.moves())
    ok, label = validate_solution(board, moves, exit_row=config.exit_row, target=config.target)
    if not ok:
        raise InvariantViolation(f"Solution does not replay on the initial board: {label}.")
    return moves


def solve_dataset(path: str, output: str | None, config: SolverConfig) -> int:
    puzzles = data_loader(path)

    samples = []
    solved = 0
    for sample in tqdm(puzzles.values(), desc="Solving puzzles", unit="puzzle"):
        moves = None
        try:
            board = sample.to_board()
            if config.target not in board.vehicles():
                tqdm.write(f"Puzzle {sample.id}: target car {config.target} is not on the board (use --target)")
            cfg = replace(config, board_size=board.size, exit_row=sample.exit_row(config.exit_row), verbose=False)
            result = RushHourSolver(cfg).solve(board, quiet=True)
            if result.solved:
                moves = checked_moves(board, result, cfg)
        except (RushHourException, ValueError) as e:
            tqdm.write(f"Puzzle {sample.id} skipped: {e}")

        if moves is not None:
            solved += 1
            sample.min_num_moves = result.num_moves
            sample.solution_moves = moves
        else:
            sample.min_num_moves = None
            sample.solution_moves = []
        samples.append(sample)

    print(f"Solved {solved}/{len(samples)} puzzles")
    if output:
        save_dataset(output, samples)
        print(f"Saved: {os.path.abspath(output)}")
    return 0 if solved == len(samples) else 1


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = SolverConfig.from_env(
            board_size=args.size,
            exit_row=args.exit_row,
            target=args.target,
            verbose=args.verbose,
            progress_every=args.progress_every,
        )
    except (RuntimeError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if args.dataset:
        return solve_dataset(args.dataset, args.output, config)

    try:
        if args.board == "-":
            board = parse_board(sys.stdin.read(), size=config.board_size)
        else:
            board = load_board(args.board, size=config.board_size)
        if not args.no_validate:
            validate_board(board, exit_row=config.exit_row, target=config.target)
    except (OSError, RushHourException) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    result = RushHourSolver(config).solve(board)
    if result.solved and args.moves:
        print(json.dumps(checked_moves(board, result, config), indent=4))
    return 0 if result.solved else 1


if __name__ == "__main__":
    sys.exit(main())
