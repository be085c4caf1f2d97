from __future__ import annotations

import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, TextIO

from rh.board import Board
from rh.config import SolverConfig
from rh.frontier import Frontier
from rh.moves import expand, is_goal
from rh.path import describe_moves, reconstruct, transitions
from rh.rh_exceptions import InvalidBoard


class SearchState(Enum):
    EXPLORING = "exploring"
    SOLVED = "solved"
    EXHAUSTED = "exhausted"


@dataclass
class SolveResult:
    solved: bool
    path: list[Board] = field(default_factory=list)  # initial state first, goal last
    explored: int = 0
    frontier_size: int = 0

    @property
    def num_moves(self) -> Optional[int]:
        return len(self.path) - 1 if self.solved else None

    def moves(self) -> list[dict[str, str | int]]:
        return describe_moves(self.path)


class RushHourSolver:
    """
    Breadth-first search over board states.

    Each solve() starts a fresh frontier, so one solver can be reused for any
    number of puzzles. Output is printed to ``out`` unless ``quiet`` is set.
    """

    def __init__(self, config: SolverConfig | None = None):
        self.config = config or SolverConfig()
        self.frontier = Frontier()
        self.state = SearchState.EXPLORING
        self._out: Optional[TextIO] = None

    def _print(self, *args) -> None:
        if self._out is not None:
            print(*args, file=self._out)

    def _render(self, board: Board, indent: str, next_board: Board | None = None) -> str:
        return board.render(indent, next_board, exit_row=self.config.exit_row)

    def _offer(self, board: Board, parent: int) -> int:
        index, added = self.frontier.offer(board, parent)
        if self.config.verbose:
            if added:
                self._print(f"  Added state {index} (previous {parent})")
            else:
                self._print(f"  Rejected move, already found state {index}")
            self._print(self._render(self.frontier[parent].board, "    ", board))
        return index

    def solve(self, board: Board, out: TextIO | None = None, quiet: bool = False) -> SolveResult:
        cfg = self.config
        if board.size != cfg.board_size:
            raise InvalidBoard(f"Expected a {cfg.board_size}x{cfg.board_size} board, got {board.size}x{board.size}.")

        self._out = None if quiet else (out if out is not None else sys.stdout)
        self.frontier = Frontier()
        self.state = SearchState.EXPLORING

        self._print("Initial board state:")
        self._print(self._render(board, "  "))

        root = self.frontier.seed(board)
        if is_goal(board, cfg.exit_row, cfg.target):
            return self._solved(root, explored=0)

        # The frontier is also the queue: keep going until we run off its end.
        idx = 0
        while idx < len(self.frontier):
            s = self.frontier[idx].board.copy()

            if cfg.verbose:
                self._print(f"Exploring state {idx}")
                self._print(self._render(s, "  "))
            elif idx % cfg.progress_every == 0:
                self._print(f"...explored {idx} board states")

            parent = idx

            def offer(candidate: Board) -> int:
                return self._offer(candidate, parent)

            goal = expand(s, offer, exit_row=cfg.exit_row, target=cfg.target)
            idx += 1
            if goal is not None:
                return self._solved(goal, explored=idx)

        self.state = SearchState.EXHAUSTED
        self._print("Cannot find solution!")
        return SolveResult(False, explored=idx, frontier_size=len(self.frontier))

    def _solved(self, index: int, explored: int) -> SolveResult:
        self.state = SearchState.SOLVED
        path = reconstruct(self.frontier, index)
        for step, (cur, nxt) in enumerate(transitions(path), start=1):
            self._print(f"Solution step {step}")
            self._print(self._render(cur, "  ", nxt))
            self._print()
        return SolveResult(True, path, explored=explored, frontier_size=len(self.frontier))


def solve_board(board: Board, config: SolverConfig | None = None, out: TextIO | None = None, quiet: bool = False) -> SolveResult:
    return RushHourSolver(config).solve(board, out=out, quiet=quiet)
