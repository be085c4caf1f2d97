from __future__ import annotations

from rh.board import Board
from rh.config import BLANK, BOARD_EXIT_Y, TARGET_CAR
from rh.frontier import Frontier
from rh.rh_exceptions import CarNotFound, InvalidMove, InvariantViolation

DIRECTION_DELTAS = {
    "up": (-1, 0),
    "down": (1, 0),
    "left": (0, -1),
    "right": (0, 1),
}


def reconstruct(frontier: Frontier, index: int) -> list[Board]:
    """Follow parent links from ``index`` back to the initial state; return root first."""
    path = []
    i = index
    while i is not None:
        entry = frontier[i]
        path.append(entry.board)
        i = entry.parent
    path.reverse()
    return path


def transitions(path: list[Board]) -> list[tuple[Board, Board]]:
    """Pair every step with the one after it. The last step is paired with itself."""
    return [(board, path[i + 1] if i + 1 < len(path) else board) for i, board in enumerate(path)]


def describe_move(before: Board, after: Board) -> dict[str, str | int]:
    old = before.vehicles()
    new = after.vehicles()

    changed = [symbol for symbol, v in old.items() if new.get(symbol) != v]
    if len(changed) != 1 or set(new) - set(old):
        raise InvariantViolation(f"Expected exactly one car to move, got {changed}.")

    car = changed[0]
    if car not in new:
        return {"name": car, "direction": "exit", "distance": 1}

    (y0, x0), (y1, x1) = old[car].cells[0], new[car].cells[0]
    for direction, (dy, dx) in DIRECTION_DELTAS.items():
        if (y1 - y0, x1 - x0) == (dy, dx):
            return {"name": car, "direction": direction, "distance": 1}
    raise InvariantViolation(f"Car {car} did not move by a single cell.")


def describe_moves(path: list[Board]) -> list[dict[str, str | int]]:
    return [describe_move(a, b) for a, b in zip(path, path[1:])]


def compress_moves(moves: list[dict[str, str | int]]) -> list[dict[str, str | int]]:
    """Merge consecutive moves of the same car in the same direction."""
    merged: list[dict[str, str | int]] = []
    for m in moves:
        last = merged[-1] if merged else None
        if last and last["name"] == m["name"] and last["direction"] == m["direction"] and m["direction"] != "exit":
            last["distance"] += m["distance"]
        else:
            merged.append(dict(m))
    return merged


def apply_move(board: Board, move: dict, exit_row: int = BOARD_EXIT_Y) -> Board:
    """
    Return a new board with ``move`` played, in the same format as describe_moves.
    """
    car = move["name"]
    direction = str(move["direction"]).lower()
    distance = int(move.get("distance", 1))

    vehicle = board.vehicles().get(car)
    if vehicle is None:
        raise CarNotFound(f"Car {car} not found on the board.")

    result = board.copy()

    if direction == "exit":
        # One move: slide into the last cell of the exit row and drive off.
        (y, _), (_, x_end) = vehicle.cells[0], vehicle.cells[-1]
        if vehicle.orientation != 'H' or y != exit_row or x_end != board.size - 2:
            raise InvalidMove(f"Car {car} cannot exit; it is not next to the exit.")
        if board.cell(y, board.size - 1) != BLANK:
            raise InvalidMove(f"Car {car} cannot exit; path blocked.")
        for yy, xx in vehicle.cells:
            result.set_cell(yy, xx, BLANK)
        return result

    if direction not in DIRECTION_DELTAS:
        raise InvalidMove(f"Invalid direction {direction} for car {car}.")
    if distance < 1:
        raise InvalidMove(f"Car {car} cannot move by {distance}.")

    dy, dx = DIRECTION_DELTAS[direction]
    if (dy and vehicle.orientation != 'V') or (dx and vehicle.orientation != 'H'):
        raise InvalidMove(f"Car {car} cannot move {direction}; it is not {'vertical' if dy else 'horizontal'}.")

    ly, lx = vehicle.cells[-1] if dy + dx > 0 else vehicle.cells[0]
    for step in range(1, distance + 1):
        yy, xx = ly + dy * step, lx + dx * step
        if not (0 <= yy < board.size and 0 <= xx < board.size):
            raise InvalidMove(f"Car {car} cannot move {direction} by {distance}; out of bounds.")
        if board.cell(yy, xx) != BLANK:
            raise InvalidMove(f"Car {car} cannot move {direction} by {distance}; path blocked.")

    for yy, xx in vehicle.cells:
        result.set_cell(yy, xx, BLANK)
    for yy, xx in vehicle.cells:
        result.set_cell(yy + dy * distance, xx + dx * distance, car)
    return result


def validate_solution(
    board: Board,
    moves: list,
    exit_row: int = BOARD_EXIT_Y,
    target: str = TARGET_CAR,
) -> tuple[bool, str]:
    """Replay ``moves`` on ``board`` and label the outcome."""
    sim = board
    for m in moves:
        if not isinstance(m, dict):
            return False, "TYPE_ERROR"
        if not all(k in m for k in ("name", "direction", "distance")):
            return False, "MISSING_KEYS"
        try:
            sim = apply_move(sim, m, exit_row=exit_row)
        except CarNotFound:
            return False, "CAR_NOT_FOUND"
        except InvalidMove:
            return False, "INVALID_MOVE"

    if sim.cell(exit_row, sim.size - 1) != target:
        return False, "UNSOLVED"
    return True, "SOLVED"
