"""Shared constants and enumerations for the crossword generator."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class CellType(str, Enum):
    """Cell types of an exported grid."""

    BLOCK = "block"
    CELL = "cell"


class Direction(str, Enum):
    """Word directions supported by the grid."""

    ACROSS = "across"
    DOWN = "down"

    @property
    def step(self) -> Tuple[int, int]:
        return (0, 1) if self is Direction.ACROSS else (1, 0)

    @property
    def perpendicular(self) -> "Direction":
        return Direction.DOWN if self is Direction.ACROSS else Direction.ACROSS


DEFAULT_GRID_ROWS = 15
DEFAULT_GRID_COLS = 15
MIN_GRID_SIZE = 9
MAX_GRID_SIZE = 19

MIN_ANSWER_LENGTH = 2
MAX_ANSWER_LENGTH = 20
MIN_CLUE_LENGTH = 3
MAX_CLUE_LENGTH = 200
MIN_LIST_ITEMS = 5
MAX_LIST_ITEMS = 50

DEFAULT_MAX_ATTEMPTS = 300
DEFAULT_MAX_STEPS_PER_ATTEMPT = 10_000
SUCCESS_RATIO = 0.9
MAX_CONFLICTING_WORDS = 5


@dataclass(frozen=True)
class Bounds:
    """Simple rectangle bounds helper."""

    rows: int
    cols: int

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols
