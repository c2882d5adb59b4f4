"""Letter buffer owned by a single placement attempt."""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from ..core.constants import Bounds, Direction
from ..core.models import WordPlacement

_OWNER_BITS = {Direction.ACROSS: 1, Direction.DOWN: 2}

# (row, col, previous letter, previous owner mask)
CellWrite = Tuple[int, int, Optional[str], int]


class GridBuffer:
    """Sparse letter matrix with an undo log of cell writes.

    Every write records the previous state of the cell so that a placement
    can be rolled back chronologically with :meth:`undo_to`. Cells shared
    with an earlier placement are restored to that placement's letter, which
    keeps crossing words intact on backtrack.
    """

    def __init__(self, rows: int, cols: int) -> None:
        self.bounds = Bounds(rows=rows, cols=cols)
        self.letters: List[List[Optional[str]]] = [[None] * cols for _ in range(rows)]
        self._owners: List[List[int]] = [[0] * cols for _ in range(rows)]
        self._log: List[CellWrite] = []

    @classmethod
    def from_placements(cls, rows: int, cols: int, placements: Iterable[WordPlacement]) -> "GridBuffer":
        buffer = cls(rows, cols)
        for placement in placements:
            buffer.write(placement)
        return buffer

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def letter(self, row: int, col: int) -> Optional[str]:
        return self.letters[row][col]

    def occupied(self, row: int, col: int) -> bool:
        """True when the cell is inside the grid and holds a letter."""

        return self.bounds.contains(row, col) and self.letters[row][col] is not None

    def owned_by(self, row: int, col: int, direction: Direction) -> bool:
        return bool(self._owners[row][col] & _OWNER_BITS[direction])

    def is_intersection(self, row: int, col: int) -> bool:
        return self._owners[row][col] == 3

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def mark(self) -> int:
        return len(self._log)

    def write(self, placement: WordPlacement) -> None:
        bit = _OWNER_BITS[placement.direction]
        for (row, col), letter in zip(placement.cells, placement.answer):
            self._log.append((row, col, self.letters[row][col], self._owners[row][col]))
            self.letters[row][col] = letter
            self._owners[row][col] |= bit

    def undo_to(self, mark: int) -> None:
        while len(self._log) > mark:
            row, col, letter, owners = self._log.pop()
            self.letters[row][col] = letter
            self._owners[row][col] = owners
