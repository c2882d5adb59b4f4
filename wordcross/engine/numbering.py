"""Crossword numbering for a finished placement set."""

from __future__ import annotations

from typing import Dict, Sequence, Tuple

from ..core.constants import Bounds, Direction
from ..core.models import ClueEntry, CrosswordNumbering, WordPlacement


class GridNumberer:
    """Assign clue numbers in row-major scan order."""

    def __init__(self, bounds: Bounds) -> None:
        self.bounds = bounds

    def number(self, placements: Sequence[WordPlacement]) -> CrosswordNumbering:
        """Number ``placements`` in place and return the clue lists.

        A cell anchoring both an across and a down word gets a single number
        shared by both entries.
        """

        anchors: Dict[Tuple[int, int, Direction], WordPlacement] = {
            (p.row, p.col, p.direction): p for p in placements
        }
        numbering = CrosswordNumbering()
        current = 1
        for row in range(self.bounds.rows):
            for col in range(self.bounds.cols):
                across = anchors.get((row, col, Direction.ACROSS))
                down = anchors.get((row, col, Direction.DOWN))
                if across is None and down is None:
                    continue
                if across is not None:
                    across.number = current
                    numbering.across.append(self._entry(across))
                if down is not None:
                    down.number = current
                    numbering.down.append(self._entry(down))
                current += 1
        return numbering

    @staticmethod
    def _entry(placement: WordPlacement) -> ClueEntry:
        return ClueEntry(
            number=placement.number,
            answer=placement.answer,
            clue=placement.clue,
            row=placement.row,
            col=placement.col,
            length=placement.length,
            direction=placement.direction,
        )
