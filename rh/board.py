from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from rh.config import BLANK, BOARD_EXIT_Y, BOARD_SIZE, TARGET_CAR
from rh.rh_exceptions import InvalidBoard, InvariantViolation, OutOfBounds


@dataclass(frozen=True)
class Vehicle:
    symbol: str
    cells: tuple[tuple[int, int], ...]  # (y, x), sorted
    orientation: str | None  # 'H', 'V', or None for a single loose cell

    @property
    def length(self) -> int:
        return len(self.cells)


class Board:
    """
    One configuration of the Rush Hour grid.

    The grid is stored row-major as a flat list of one-character symbols and is
    indexed (y, x), y being the row and x the column. A space is an empty cell.
    Every other symbol is a car; the target car is usually 'X'.

        board = Board([
            "AA   O",
            "P  Q O",
            "PXXQ O",
            "P  Q  ",
            "B   CC",
            "B RRR ",
        ])

    Two boards are equal when every cell holds the same symbol. The ordering
    compares the raw cell strings and only exists to make tie-breaks stable.
    """

    __slots__ = ("size", "_cells")

    def __init__(self, rows: Iterable[Sequence[str]], size: int = BOARD_SIZE):
        rows = [list(row) for row in rows]
        if len(rows) != size or any(len(row) != size for row in rows):
            raise InvalidBoard(f"Board must be {size}x{size}, got rows of length {[len(r) for r in rows]}.")

        cells = []
        for y, row in enumerate(rows):
            for x, c in enumerate(row):
                if not isinstance(c, str) or len(c) != 1:
                    raise InvalidBoard(f"Cell ({y},{x}) must be a single character, got {c!r}.")
                cells.append(c)

        self.size = size
        self._cells = cells

    @classmethod
    def _from_cells(cls, cells: list[str], size: int) -> "Board":
        board = cls.__new__(cls)
        board.size = size
        board._cells = cells
        return board

    def copy(self) -> "Board":
        return Board._from_cells(list(self._cells), self.size)

    # --- cell access ---

    def _in_bounds(self, y: int, x: int) -> bool:
        return 0 <= y < self.size and 0 <= x < self.size

    def cell(self, y: int, x: int) -> str:
        """Return the symbol at (y, x). Raise if we are off the board."""
        if not self._in_bounds(y, x):
            raise OutOfBounds(f"Cell ({y},{x}) is off a {self.size}x{self.size} board.")
        return self._cells[y * self.size + x]

    def cell_safe(self, y: int, x: int) -> str:
        """Return the symbol at (y, x), or a blank if the coords are off the board."""
        if not self._in_bounds(y, x):
            return BLANK
        return self._cells[y * self.size + x]

    def set_cell(self, y: int, x: int, c: str) -> None:
        if not self._in_bounds(y, x):
            raise OutOfBounds(f"Cell ({y},{x}) is off a {self.size}x{self.size} board.")
        self._cells[y * self.size + x] = c

    # --- identity ---

    @property
    def key(self) -> str:
        return "".join(self._cells)

    def __eq__(self, other):
        if not isinstance(other, Board):
            return NotImplemented
        return self.size == other.size and self._cells == other._cells

    def __lt__(self, other: "Board") -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.key < other.key

    def __hash__(self):
        return hash(self.key)

    def rows(self) -> list[str]:
        return ["".join(self._cells[y * self.size:(y + 1) * self.size]) for y in range(self.size)]

    def __str__(self):
        return "\n".join(self.rows())

    def __repr__(self):
        return f"Board({self.rows()!r})"

    def vehicles(self) -> dict[str, Vehicle]:
        positions: dict[str, list[tuple[int, int]]] = {}
        for y in range(self.size):
            for x in range(self.size):
                c = self.cell(y, x)
                if c != BLANK:
                    positions.setdefault(c, []).append((y, x))

        vehicles = {}
        for symbol, cells in positions.items():
            orientation = None
            if len(cells) > 1:
                if len({y for y, _ in cells}) == 1:
                    orientation = 'H'
                elif len({x for _, x in cells}) == 1:
                    orientation = 'V'
            vehicles[symbol] = Vehicle(symbol, tuple(cells), orientation)
        return vehicles

    # --- rendering ---

    def render(self, indent: str = "", next_board: "Board | None" = None, exit_row: int = BOARD_EXIT_Y) -> str:
        """
        Draw this board. If there is a next state, draw an arrow where the
        move happened, or a trail off the right edge when a car leaves the board.
        """
        if next_board is None:
            next_board = self

        lines = []
        for y in range(self.size):
            out = []
            x = 0
            while x < self.size:
                c = self.cell(y, x)
                n = next_board.cell(y, x)
                if c != n:
                    if c == BLANK:
                        # A car slid into this cell. Find where it came from.
                        if self.cell_safe(y, x - 1) == n:
                            c = '>'
                        elif self.cell_safe(y, x + 1) == n:
                            c = '<'
                        elif self.cell_safe(y - 1, x) == n:
                            c = 'v'
                        elif self.cell_safe(y + 1, x) == n:
                            c = '^'
                        else:
                            raise InvariantViolation(f"Next state is not one move away from this state at ({y},{x}).")
                    elif n == BLANK and y == exit_row and x < self.size - 1 and self._leaves_board(next_board, y, x, c):
                        while x < self.size and self.cell(y, x) == c:
                            out.append(c)
                            x += 1
                        out.append('>' * (self.size + 1 - x))
                        break
                out.append(c)
                x += 1
            lines.append(indent + "".join(out))
        return "\n".join(lines)

    def _leaves_board(self, next_board: "Board", y: int, x: int, c: str) -> bool:
        for xx in range(x + 1, self.size):
            if next_board.cell(y, xx) != BLANK:
                return False
            if self.cell(y, xx) not in (BLANK, c):
                return False
        return True


def validate_board(board: Board, exit_row: int = BOARD_EXIT_Y, target: str = TARGET_CAR) -> dict[str, Vehicle]:
    """
    Check that every car is a straight run of at least two cells and that the
    target car sits horizontally on the exit row. Returns the cars found.
    """
    vehicles = board.vehicles()
    for symbol, v in vehicles.items():
        if v.length < 2:
            raise InvalidBoard(f"Car {symbol} must be at least 2 cells long.")
        if v.orientation is None:
            raise InvalidBoard(f"Car {symbol} must be a straight horizontal or vertical line.")
        axis = [x for _, x in v.cells] if v.orientation == 'H' else [y for y, _ in v.cells]
        if axis != list(range(axis[0], axis[0] + v.length)):
            raise InvalidBoard(f"Car {symbol} has a gap in it.")

    car = vehicles.get(target)
    if car is None:
        raise InvalidBoard(f"Target car {target} not found on the board.")
    if car.orientation != 'H':
        raise InvalidBoard(f"Target car {target} must be horizontal.")
    if car.cells[0][0] != exit_row:
        raise InvalidBoard(f"Target car {target} must be on the exit row {exit_row}.")
    return vehicles
