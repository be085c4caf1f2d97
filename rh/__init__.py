"""
Breadth-first Rush Hour solver.

    board       - Board grid, cell access, rendering of moves.
    moves       - Single-cell move generation.
    frontier    - Discovered states, doubling as the BFS queue.
    path        - Walking parent links back to the start, move lists.
    solver      - RushHourSolver, the search itself.
    data_loader - Reading boards and JSON puzzle datasets.
    cli         - rh-solve command line.
"""

from rh.board import Board, validate_board
from rh.config import SolverConfig
from rh.solver import RushHourSolver, SolveResult, solve_board

__all__ = ["Board", "validate_board", "SolverConfig", "RushHourSolver", "SolveResult", "solve_board"]
