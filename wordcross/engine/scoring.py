"""Placement scoring strategies."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from ..core.constants import Bounds, Direction
from ..core.models import WordEntry


class PlacementScorer(Protocol):
    """Protocol implemented by candidate scoring policies.

    Higher scores are tried first. ``intersections`` is the number of cells
    the candidate shares with words already on the grid.
    """

    def score(
        self,
        word: WordEntry,
        row: int,
        col: int,
        direction: Direction,
        intersections: int,
        bounds: Bounds,
    ) -> float:
        ...


@dataclass(frozen=True)
class IntersectionScorer:
    """Reward crossings super-linearly and mildly prefer central anchors."""

    intersection_weight: float = 10.0
    quadratic_weight: float = 5.0
    center_penalty: float = 0.5

    def score(
        self,
        word: WordEntry,
        row: int,
        col: int,
        direction: Direction,
        intersections: int,
        bounds: Bounds,
    ) -> float:
        distance = abs(row - bounds.rows / 2) + abs(col - bounds.cols / 2)
        return (
            self.intersection_weight * intersections
            + self.quadratic_weight * intersections * intersections
            - self.center_penalty * distance
        )
