"""Data models supporting the crossword generator."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .constants import CellType, Direction


@dataclass(frozen=True)
class WordEntry:
    """A normalized answer ready for placement."""

    answer: str
    clue: str
    length: int
    positions: Mapping[str, Tuple[int, ...]]


@dataclass
class WordPlacement:
    """A word anchored on the grid."""

    answer: str
    clue: str
    row: int
    col: int
    direction: Direction
    number: int = 0
    entry: Optional[WordEntry] = field(default=None, repr=False, compare=False)
    _cells: Optional[List[Tuple[int, int]]] = field(default=None, repr=False, compare=False)

    @property
    def length(self) -> int:
        return len(self.answer)

    @property
    def cells(self) -> List[Tuple[int, int]]:
        if self._cells is None:
            dr, dc = self.direction.step
            self._cells = [(self.row + dr * i, self.col + dc * i) for i in range(self.length)]
        return self._cells


@dataclass
class PlacementCandidate:
    """A prospective placement evaluated while searching for one word."""

    word: WordEntry
    row: int
    col: int
    direction: Direction
    score: float
    intersections: List[Tuple[int, int]] = field(default_factory=list)


@dataclass
class CrosswordCell:
    """Exported grid cell."""

    row: int
    col: int
    type: CellType
    letter: Optional[str] = None
    number: Optional[int] = None

    def to_jsonable(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"row": self.row, "col": self.col, "type": self.type.value}
        if self.letter is not None:
            payload["letter"] = self.letter
        if self.number is not None:
            payload["number"] = self.number
        return payload

    @classmethod
    def from_jsonable(cls, data: Mapping[str, Any]) -> "CrosswordCell":
        return cls(
            row=int(data["row"]),
            col=int(data["col"]),
            type=CellType(data["type"]),
            letter=data.get("letter"),
            number=data.get("number"),
        )


@dataclass
class CrosswordGrid:
    """Exported crossword grid."""

    rows: int
    cols: int
    cells: List[List[CrosswordCell]]

    def cell(self, row: int, col: int) -> CrosswordCell:
        return self.cells[row][col]

    def to_jsonable(self) -> Dict[str, Any]:
        return {
            "cells": [[cell.to_jsonable() for cell in row] for row in self.cells],
            "size": {"rows": self.rows, "cols": self.cols},
        }

    @classmethod
    def from_jsonable(cls, data: Mapping[str, Any]) -> "CrosswordGrid":
        size = data["size"]
        return cls(
            rows=int(size["rows"]),
            cols=int(size["cols"]),
            cells=[[CrosswordCell.from_jsonable(cell) for cell in row] for row in data["cells"]],
        )


@dataclass
class ClueEntry:
    number: int
    answer: str
    clue: str
    row: int
    col: int
    length: int
    direction: Direction

    def to_jsonable(self) -> Dict[str, Any]:
        return {
            "number": self.number,
            "answer": self.answer,
            "clue": self.clue,
            "row": self.row,
            "col": self.col,
            "length": self.length,
            "direction": self.direction.value,
        }

    @classmethod
    def from_jsonable(cls, data: Mapping[str, Any]) -> "ClueEntry":
        return cls(
            number=int(data["number"]),
            answer=data["answer"],
            clue=data["clue"],
            row=int(data["row"]),
            col=int(data["col"]),
            length=int(data["length"]),
            direction=Direction(data["direction"]),
        )


@dataclass
class CrosswordNumbering:
    across: List[ClueEntry] = field(default_factory=list)
    down: List[ClueEntry] = field(default_factory=list)

    def to_jsonable(self) -> Dict[str, Any]:
        return {
            "across": [entry.to_jsonable() for entry in self.across],
            "down": [entry.to_jsonable() for entry in self.down],
        }

    @classmethod
    def from_jsonable(cls, data: Mapping[str, Any]) -> "CrosswordNumbering":
        return cls(
            across=[ClueEntry.from_jsonable(entry) for entry in data.get("across", [])],
            down=[ClueEntry.from_jsonable(entry) for entry in data.get("down", [])],
        )
