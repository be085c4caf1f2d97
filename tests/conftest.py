import os
from collections import deque

import pytest

from rh.board import Board

BEGINNER = [
    "AA   O",
    "P  Q O",
    "PXXQ O",
    "P  Q  ",
    "B   CC",
    "B RRR ",
]

# Target one cell away from the exit with a clear path.
ONE_MOVE = [
    "      ",
    "      ",
    "   XX ",
    "      ",
    "      ",
    "      ",
]

# A must go up once before X can leave.
ONE_BLOCKER = [
    "      ",
    "     A",
    "   XXA",
    "      ",
    "      ",
    "      ",
]

# X is walled in by A and B, which cannot move; only D can shuffle.
BOXED_IN = [
    "  A   ",
    "  A   ",
    "XXA   ",
    "  B   ",
    "  B   ",
    "  B DD",
]

# B sits between X and the exit and can be driven off the board.
EXIT_BLOCKER = [
    "      ",
    "      ",
    "XX BB ",
    "      ",
    "      ",
    "      ",
]


# Same as ONE_MOVE with a free car further down that the search never gets to.
ONE_MOVE_WITH_TRAFFIC = [
    "      ",
    "      ",
    "   XX ",
    "      ",
    "AA    ",
    "      ",
]


def _cars(rows):
    cars = {}
    for y, row in enumerate(rows):
        for x, c in enumerate(row):
            if c != " ":
                cars.setdefault(c, []).append((y, x))
    return cars


def _place(rows, clear, fill, car):
    grid = [list(r) for r in rows]
    for y, x in clear:
        grid[y][x] = " "
    for y, x in fill:
        grid[y][x] = car
    return tuple("".join(r) for r in grid)


def reference_neighbours(rows, exit_row, target):
    """
    Car-by-car move generation: try shifting every car one cell either way
    along its axis. Yields (rows, is_goal).
    """
    size = len(rows)
    for car, cells in sorted(_cars(rows).items()):
        horizontal = len({y for y, _ in cells}) == 1
        for dy, dx in ([(0, -1), (0, 1)] if horizontal else [(-1, 0), (1, 0)]):
            moved = [(y + dy, x + dx) for y, x in cells]
            if any(not (0 <= y < size and 0 <= x < size) for y, x in moved):
                continue
            if any(rows[y][x] not in (" ", car) for y, x in moved):
                continue
            new = _place(rows, cells, moved, car)
            at_exit = horizontal and dx == 1 and max(moved) == (exit_row, size - 1)
            yield new, at_exit and car == target
            if at_exit and car != target:
                yield _place(new, moved, [], car), False


def reference_search(rows, exit_row=2, target="X"):
    """Plain BFS on whole boards. Returns (min moves or None, number of states seen)."""
    start = tuple(rows)
    depth = {start: 0}
    queue = deque([start])
    while queue:
        cur = queue.popleft()
        for nxt, goal in reference_neighbours(cur, exit_row, target):
            if goal:
                return depth[cur] + 1, len(depth)
            if nxt not in depth:
                depth[nxt] = depth[cur] + 1
                queue.append(nxt)
    return None, len(depth)


@pytest.fixture
def beginner():
    return Board(BEGINNER)


@pytest.fixture
def one_move():
    return Board(ONE_MOVE)


@pytest.fixture
def one_blocker():
    return Board(ONE_BLOCKER)


@pytest.fixture
def boxed_in():
    return Board(BOXED_IN)


@pytest.fixture
def exit_blocker():
    return Board(EXIT_BLOCKER)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    # load_dotenv() writes straight into os.environ; give each test its own copy
    monkeypatch.setattr(os, "environ", dict(os.environ))
    for name in [k for k in os.environ if k.startswith("RH_")]:
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
