"""Deterministic rule validation for generated crosswords."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Set, Tuple

from ..core.constants import Bounds, Direction
from ..core.exceptions import ValidationError
from ..core.models import CrosswordNumbering, WordPlacement
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


class GridValidator:
    """Runs deterministic validation over a finished placement set."""

    def __init__(self, bounds: Bounds) -> None:
        self.bounds = bounds

    def validate(
        self,
        placements: Sequence[WordPlacement],
        numbering: Optional[CrosswordNumbering] = None,
    ) -> ValidationResult:
        try:
            self._check_bounds(placements)
            letters, owners = self._collect_cells(placements)
            self._check_word_boundaries(placements, letters)
            self._check_adjacency(placements, letters, owners)
            if numbering is not None:
                self._check_numbering(placements, numbering)
        except ValidationError as exc:
            LOGGER.error("Validation failed: %s", exc)
            return ValidationResult(ok=False, messages=[str(exc)])
        return ValidationResult(ok=True, messages=[])

    def _check_bounds(self, placements: Sequence[WordPlacement]) -> None:
        for placement in placements:
            for row, col in placement.cells:
                if not self.bounds.contains(row, col):
                    raise ValidationError(
                        f"Word '{placement.answer}' leaves the grid at ({row},{col})"
                    )

    @staticmethod
    def _collect_cells(
        placements: Sequence[WordPlacement],
    ) -> Tuple[Dict[Tuple[int, int], str], Dict[Tuple[int, int], Set[Direction]]]:
        letters: Dict[Tuple[int, int], str] = {}
        owners: Dict[Tuple[int, int], Set[Direction]] = {}
        for placement in placements:
            for cell, letter in zip(placement.cells, placement.answer):
                existing = letters.get(cell)
                if existing is not None and existing != letter:
                    raise ValidationError(
                        f"Letter conflict at {cell}: '{existing}' vs '{letter}' ({placement.answer})"
                    )
                directions = owners.setdefault(cell, set())
                if placement.direction in directions:
                    raise ValidationError(
                        f"Word '{placement.answer}' overlaps a parallel word at {cell}"
                    )
                directions.add(placement.direction)
                letters[cell] = letter
        return letters, owners

    @staticmethod
    def _check_word_boundaries(
        placements: Sequence[WordPlacement], letters: Dict[Tuple[int, int], str]
    ) -> None:
        for placement in placements:
            dr, dc = placement.direction.step
            first_row, first_col = placement.cells[0]
            last_row, last_col = placement.cells[-1]
            for cell in ((first_row - dr, first_col - dc), (last_row + dr, last_col + dc)):
                if cell in letters:
                    raise ValidationError(
                        f"Word '{placement.answer}' runs into another word at {cell}"
                    )

    @staticmethod
    def _check_adjacency(
        placements: Sequence[WordPlacement],
        letters: Dict[Tuple[int, int], str],
        owners: Dict[Tuple[int, int], Set[Direction]],
    ) -> None:
        for placement in placements:
            dr, dc = placement.direction.step
            for row, col in placement.cells:
                if len(owners[(row, col)]) > 1:
                    continue
                for neighbor in ((row - dc, col - dr), (row + dc, col + dr)):
                    if neighbor in letters:
                        raise ValidationError(
                            f"Word '{placement.answer}' touches a parallel letter at {neighbor}"
                        )

    def _check_numbering(
        self, placements: Sequence[WordPlacement], numbering: CrosswordNumbering
    ) -> None:
        anchors = sorted({(p.row, p.col) for p in placements})
        expected = {anchor: index for index, anchor in enumerate(anchors, start=1)}
        entries = [*numbering.across, *numbering.down]
        if len(entries) != len(placements):
            raise ValidationError(
                f"Numbering lists {len(entries)} entries for {len(placements)} words"
            )
        for entry in entries:
            if expected.get((entry.row, entry.col)) != entry.number:
                raise ValidationError(
                    f"Clue {entry.number} {entry.direction.value} at ({entry.row},{entry.col}) "
                    f"should be numbered {expected.get((entry.row, entry.col))}"
                )
        for clues in (numbering.across, numbering.down):
            numbers = [entry.number for entry in clues]
            if numbers != sorted(set(numbers)):
                raise ValidationError("Clue numbers are not strictly increasing")
