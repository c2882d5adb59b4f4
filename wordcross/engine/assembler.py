"""Conversion of the internal letter buffer into the exported grid."""

from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

from ..core.constants import Bounds, CellType
from ..core.models import CrosswordCell, CrosswordGrid, CrosswordNumbering, WordPlacement
from .grid import GridBuffer


class ResultAssembler:
    """Build the exported :class:`CrosswordGrid` for the best placement set."""

    def __init__(self, bounds: Bounds) -> None:
        self.bounds = bounds

    def build_grid(
        self, placements: Sequence[WordPlacement], numbering: CrosswordNumbering
    ) -> CrosswordGrid:
        buffer = GridBuffer.from_placements(self.bounds.rows, self.bounds.cols, placements)
        numbers: Dict[Tuple[int, int], int] = {
            (entry.row, entry.col): entry.number
            for entry in (*numbering.across, *numbering.down)
        }

        cells: List[List[CrosswordCell]] = []
        for row in range(self.bounds.rows):
            cells_row: List[CrosswordCell] = []
            for col in range(self.bounds.cols):
                letter = buffer.letter(row, col)
                if letter is None:
                    cells_row.append(CrosswordCell(row=row, col=col, type=CellType.BLOCK))
                else:
                    cells_row.append(
                        CrosswordCell(
                            row=row,
                            col=col,
                            type=CellType.CELL,
                            letter=letter,
                            number=numbers.get((row, col)),
                        )
                    )
            cells.append(cells_row)
        return CrosswordGrid(rows=self.bounds.rows, cols=self.bounds.cols, cells=cells)
