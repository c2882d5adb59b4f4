"""Pretty-print helpers for generated crosswords."""

from __future__ import annotations

import sys
from collections import Counter
from typing import TYPE_CHECKING, List

from ..core.constants import CellType

if TYPE_CHECKING:
    from ..core.models import CrosswordGrid, CrosswordNumbering
    from ..engine.generator import GenerationResult


BLOCK_SYMBOL = "#"


def format_grid(grid: CrosswordGrid) -> str:
    header_cells = [f"{c:>2}" for c in range(grid.cols)]
    lines = ["    " + " ".join(header_cells)]
    lines.append("    " + "-" * (3 * grid.cols - 1))
    for r in range(grid.rows):
        symbols = [
            (cell.letter or "?") if cell.type == CellType.CELL else BLOCK_SYMBOL
            for cell in grid.cells[r]
        ]
        row_render = " ".join(f"{symbol:>2}" for symbol in symbols)
        lines.append(f"{r:>2} | {row_render}")
    return "\n".join(lines)


def format_clues(numbering: CrosswordNumbering) -> str:
    lines: List[str] = []
    for title, entries in (("Across", numbering.across), ("Down", numbering.down)):
        lines.append(title)
        for entry in entries:
            lines.append(f"  {entry.number:>2}. {entry.clue} ({entry.length})")
    return "\n".join(lines)


def print_puzzle(result: GenerationResult, *, stream=None) -> None:
    """Print grid, clues and placement stats for a generation result."""

    stream = stream or sys.stdout
    print(f"Placed {result.placed_words}/{result.total_words} words "
          f"in {result.attempts} attempts (seed: {result.seed})", file=stream)
    if not result.success or result.grid is None or result.numbering is None:
        if result.conflicting_words:
            print(f"Hard to place: {', '.join(result.conflicting_words)}", file=stream)
        return

    print(file=stream)
    print(format_grid(result.grid), file=stream)
    print(file=stream)
    print(format_clues(result.numbering), file=stream)

    lengths = [entry.length for entry in (*result.numbering.across, *result.numbering.down)]
    if lengths:
        dist_parts = [f"{l}:{c}" for l, c in sorted(Counter(lengths).items())]
        print(file=stream)
        print("--- Words ---", file=stream)
        print(f"  Length range:  {min(lengths)}-{max(lengths)} "
              f"(avg {sum(lengths) / len(lengths):.1f})", file=stream)
        print(f"  Distribution:  {' '.join(dist_parts)}", file=stream)
