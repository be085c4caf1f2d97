"""
Single-cell move generation for Rush Hour boards.

Moves are found from the empty cells rather than from the cars: for an empty
cell (y, x) we scan outward in one direction, and if a car is sitting there
lined up along the scan axis it can slide one cell into the hole. Sliding only
touches two cells no matter how long the car is: the hole gets the car's
symbol and the car's far end is cleared.

The board under examination is modified in place while a candidate is offered
and is always put back afterwards, so callers see it unchanged.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, Optional

from rh.board import Board
from rh.config import BLANK, BOARD_EXIT_Y, TARGET_CAR

# (dy, dx) scan directions, in the order they are tried. The car moves the
# opposite way, into the empty cell. Keep this order fixed: it decides which
# of several equally short solutions is found first.
DIRECTIONS = ((0, +1), (0, -1), (+1, 0), (-1, 0))

# Receives a candidate board and returns the frontier index it ended up at.
# The board is only valid for the duration of the call.
Offer = Callable[[Board], Optional[int]]


@contextmanager
def _slid(board: Board, y: int, x: int, ty: int, tx: int, car: str):
    board.set_cell(y, x, car)
    board.set_cell(ty, tx, BLANK)
    try:
        yield board
    finally:
        board.set_cell(y, x, BLANK)
        board.set_cell(ty, tx, car)


@contextmanager
def _removed(board: Board, y: int, x0: int, x1: int, car: str):
    for xx in range(x0, x1 + 1):
        board.set_cell(y, xx, BLANK)
    try:
        yield board
    finally:
        for xx in range(x0, x1 + 1):
            board.set_cell(y, xx, car)


def is_goal(board: Board, exit_row: int = BOARD_EXIT_Y, target: str = TARGET_CAR) -> bool:
    """The target car has reached the right edge of the exit row."""
    return board.cell(exit_row, board.size - 1) == target


def check_move(
    board: Board,
    y: int,
    x: int,
    dy: int,
    dx: int,
    offer: Offer,
    exit_row: int = BOARD_EXIT_Y,
    target: str = TARGET_CAR,
) -> Optional[int]:
    """
    Try to slide a car into the empty cell (y, x) from direction (dy, dx).

    Every resulting board is passed to ``offer``. Returns the frontier index
    of the goal board if the move freed the target car, else None.
    """
    size = board.size

    # Step two squares in the scan direction
    ty = y + dy * 2
    tx = x + dx * 2
    if not (0 <= ty < size and 0 <= tx < size):
        return None

    car = board.cell(ty, tx)
    if car == BLANK or board.cell(ty - dy, tx - dx) != car:
        return None

    # Find the far end of the car
    while 0 <= ty + dy < size and 0 <= tx + dx < size and board.cell(ty + dy, tx + dx) == car:
        ty += dy
        tx += dx

    with _slid(board, y, x, ty, tx, car):
        if dx == -1 and x == size - 1 and y == exit_row:
            if car == target:
                return offer(board)

            # Any other car at the exit can also be driven off the board.
            offer(board)
            with _removed(board, y, tx + 1, x, car):
                offer(board)
        else:
            offer(board)

    return None


def expand(
    board: Board,
    offer: Offer,
    exit_row: int = BOARD_EXIT_Y,
    target: str = TARGET_CAR,
) -> Optional[int]:
    """
    Offer every board reachable from ``board`` by one single-cell slide.

    Stops as soon as a goal board is found and returns its frontier index.
    """
    for y in range(board.size):
        for x in range(board.size):
            if board.cell(y, x) != BLANK:
                continue
            for dy, dx in DIRECTIONS:
                goal = check_move(board, y, x, dy, dx, offer, exit_row=exit_row, target=target)
                if goal is not None:
                    return goal
    return None


def successors(board: Board, exit_row: int = BOARD_EXIT_Y, target: str = TARGET_CAR) -> list[Board]:
    """All one-move successors of ``board`` in generation order, goals included."""
    found: list[Board] = []

    def collect(candidate: Board) -> None:
        found.append(candidate.copy())

    for y in range(board.size):
        for x in range(board.size):
            if board.cell(y, x) == BLANK:
                for dy, dx in DIRECTIONS:
                    check_move(board, y, x, dy, dx, collect, exit_row=exit_row, target=target)
    return found
