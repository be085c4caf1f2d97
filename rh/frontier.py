from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

from rh.board import Board
from rh.rh_exceptions import InvariantViolation


@dataclass(frozen=True)
class FrontierEntry:
    board: Board
    parent: Optional[int]  # index of the state we came from, None for the initial state


class Frontier:
    """
    Every board state discovered so far, in discovery order.

    The initial state is at index 0. Since we explore breadth-first, all the
    states reachable in one move follow it, then all the states reachable in
    two moves, and so on. The list doubles as the BFS queue: the solver walks
    it by index while new states are appended behind it. Entries are never
    removed, so parent indices stay valid for the whole run.

    ``_seen`` holds the same states keyed by their cells so that we can
    quickly check if a state is already in the list, and where.
    """

    def __init__(self):
        self._entries: list[FrontierEntry] = []
        self._seen: dict[str, int] = {}

    def seed(self, board: Board) -> int:
        index, _ = self.offer(board, None)
        return index

    def offer(self, board: Board, parent: Optional[int]) -> tuple[int, bool]:
        """
        Add ``board`` unless we have been in this state before.

        Returns the index of the state and whether it was newly added. A
        duplicate returns the index it was first found at.
        """
        key = board.key
        found = self._seen.get(key)
        if found is not None:
            return found, False

        index = len(self._entries)
        self._seen[key] = index
        self._entries.append(FrontierEntry(board.copy(), parent))

        if len(self._entries) != len(self._seen):
            raise InvariantViolation(
                f"Frontier holds {len(self._entries)} states but {len(self._seen)} are marked seen."
            )
        return index, True

    def __contains__(self, board: Board) -> bool:
        return board.key in self._seen

    def __getitem__(self, index: int) -> FrontierEntry:
        return self._entries[index]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[FrontierEntry]:
        # Index-based so states appended while iterating are still visited.
        i = 0
        while i < len(self._entries):
            yield self._entries[i]
            i += 1

    @property
    def seen_count(self) -> int:
        return len(self._seen)
