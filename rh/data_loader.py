import json
from dataclasses import dataclass, field

from rh.board import Board
from rh.config import BLANK, BOARD_SIZE
from rh.rh_exceptions import InvalidBoard

# Symbols accepted as an empty cell when reading boards.
BLANK_ALIASES = {BLANK, "."}


@dataclass
class RushHourSample:
    id: int
    board: list[list[str | None]]
    exit: list[int] | tuple[int, int] | None = None
    min_num_moves: int | None = None
    solution_moves: list[dict[str, str | int]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: dict) -> "RushHourSample":
        return cls(
            id=d.get("id", d.get("name")),
            board=d["board"],
            exit=d.get("exit"),
            min_num_moves=d.get("min_num_moves", d.get("min_moves")),
            solution_moves=d.get("solution_moves") or [],
        )

    def to_dict(self) -> dict:
        return {
            "name": self.id,
            "exit": self.exit,
            "min_num_moves": self.min_num_moves,
            "board": self.board,
            "solution_moves": self.solution_moves,
        }

    def to_board(self) -> Board:
        return board_from_grid(self.board)

    def exit_row(self, default: int) -> int:
        """
        Dataset exits are 1-indexed [row, col]. Only exits on the right edge
        are supported, anything else falls back to ``default``.
        """
        if isinstance(self.exit, (list, tuple)) and len(self.exit) == 2 and self.exit[1] == len(self.board):
            return int(self.exit[0]) - 1
        return default


def _normalize(c) -> str:
    if c is None or c == "none" or c in BLANK_ALIASES:
        return BLANK
    return c


def board_from_grid(grid: list[list[str | None]]) -> Board:
    """Build a Board from a list of lists where empty cells are None."""
    return Board([[_normalize(c) for c in row] for row in grid], size=len(grid))


def board_to_grid(board: Board) -> list[list[str | None]]:
    return [[None if c == BLANK else c for c in row] for row in board.rows()]


def parse_board(text: str, size: int = BOARD_SIZE) -> Board:
    """
    Read a board written as ``size`` lines of ``size`` symbols. A space or '.'
    is an empty cell. Short lines are padded with empty cells.
    """
    lines = text.splitlines()
    while len(lines) > size and not lines[-1].strip():
        lines.pop()
    while lines and len(lines) > size and not lines[0].strip():
        lines.pop(0)

    if len(lines) != size:
        raise InvalidBoard(f"Expected {size} rows, got {len(lines)}.")
    for y, line in enumerate(lines):
        if len(line) > size:
            raise InvalidBoard(f"Row {y} has {len(line)} cells, expected {size}: {line!r}")

    return Board([[_normalize(c) for c in line.ljust(size)] for line in lines], size=size)


def load_board(file_path: str, size: int = BOARD_SIZE) -> Board:
    with open(file_path, "r", encoding="utf-8") as file:
        return parse_board(file.read(), size=size)


def data_loader(file_path: str) -> dict:
    """
    Load all puzzles from a single JSON file into a dictionary.

    Args:
        file_path (str): Path to the JSON file containing all puzzles.

    Returns:
        dict: {puzzle_name (int): RushHourSample}
    """
    with open(file_path, "r", encoding="utf-8") as file:
        puzzles_list = json.load(file)

    samples = (RushHourSample.from_dict(puzzle) for puzzle in puzzles_list)
    return {sample.id: sample for sample in samples}


def save_dataset(file_path: str, samples: list[RushHourSample]) -> None:
    with open(file_path, "w", encoding="utf-8") as f:
        json.dump([s.to_dict() for s in samples], f, indent=4)
