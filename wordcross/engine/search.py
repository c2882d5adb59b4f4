"""Backtracking placement search for a single attempt.

The search walks the shuffled word list once. For every word it generates
placement candidates from intersections with words already on the grid,
tries them best score first and recurses into the remaining words. Undo is
explicit: each placement pushes its cell writes onto the grid buffer's log
and is rolled back to a mark, so an attempt never copies its grid.

Work is metered in steps: entering a word and evaluating one candidate each
cost a step. Once ``max_steps`` is spent the search turns greedy (first
candidate only, no skip branch), which bounds the cost of an attempt.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from ..core.constants import DEFAULT_MAX_STEPS_PER_ATTEMPT, Bounds, Direction
from ..core.models import PlacementCandidate, WordEntry, WordPlacement
from .grid import GridBuffer
from .scoring import IntersectionScorer, PlacementScorer


class PlacementSearch:
    """Owns the grid buffer and placement arena of one attempt."""

    def __init__(
        self,
        bounds: Bounds,
        scorer: Optional[PlacementScorer] = None,
        max_steps: int = DEFAULT_MAX_STEPS_PER_ATTEMPT,
    ) -> None:
        self.bounds = bounds
        self.scorer = scorer or IntersectionScorer()
        self.max_steps = max_steps
        self.grid = GridBuffer(bounds.rows, bounds.cols)
        self.placements: List[WordPlacement] = []
        self.steps = 0
        self._words: Sequence[WordEntry] = ()

    @property
    def budget_exhausted(self) -> bool:
        return self.steps >= self.max_steps

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def run(self, words: Sequence[WordEntry]) -> List[WordPlacement]:
        """Place as many of ``words`` as possible, in the given order."""

        self._words = words
        self._step(0)
        return list(self.placements)

    # ------------------------------------------------------------------
    # Recursive step
    # ------------------------------------------------------------------
    def _step(self, index: int) -> int:
        """Return how many of ``words[index:]`` end up placed.

        On return the grid and arena hold the best arrangement found for the
        suffix. Recursion depth is bounded by the number of words.
        """

        if index >= len(self._words):
            return 0
        self.steps += 1

        candidates = self.candidates_for(self._words[index])
        if not candidates:
            return self._step(index + 1)

        target = len(self._words) - index
        grid_mark = self.grid.mark()
        arena_mark = len(self.placements)
        best_count = -1
        best: List[WordPlacement] = []

        for candidate in candidates:
            if best_count >= 0 and self.budget_exhausted:
                break
            self._place(candidate)
            count = 1 + self._step(index + 1)
            if count == target:
                return count
            if count > best_count:
                best_count = count
                best = self.placements[arena_mark:]
            self._rollback(grid_mark, arena_mark)

        # The seed word stays anchored; only later words may be skipped.
        if arena_mark and not self.budget_exhausted:
            skipped = self._step(index + 1)
            if skipped > best_count:
                return skipped
            self._rollback(grid_mark, arena_mark)

        self._replay(best)
        return best_count

    def _place(self, candidate: PlacementCandidate) -> None:
        placement = WordPlacement(
            answer=candidate.word.answer,
            clue=candidate.word.clue,
            row=candidate.row,
            col=candidate.col,
            direction=candidate.direction,
            entry=candidate.word,
        )
        self.grid.write(placement)
        self.placements.append(placement)

    def _rollback(self, grid_mark: int, arena_mark: int) -> None:
        self.grid.undo_to(grid_mark)
        del self.placements[arena_mark:]

    def _replay(self, placements: List[WordPlacement]) -> None:
        for placement in placements:
            self.grid.write(placement)
            self.placements.append(placement)

    # ------------------------------------------------------------------
    # Candidate generation
    # ------------------------------------------------------------------
    def candidates_for(self, word: WordEntry) -> List[PlacementCandidate]:
        """Valid placements for ``word``, best score first.

        With an empty grid the only candidate is the centered across seed.
        Equal scores keep discovery order: placed word, then its letter
        index, then the letter position within ``word``.
        """

        if not self.placements:
            seed = self._evaluate(
                word,
                self.bounds.rows // 2,
                (self.bounds.cols - word.length) // 2,
                Direction.ACROSS,
            )
            return [seed] if seed is not None else []

        found: List[PlacementCandidate] = []
        seen = set()
        for placed in self.placements:
            direction = placed.direction.perpendicular
            for (cross_row, cross_col), letter in zip(placed.cells, placed.answer):
                for position in word.positions.get(letter, ()):
                    if direction is Direction.ACROSS:
                        row, col = cross_row, cross_col - position
                    else:
                        row, col = cross_row - position, cross_col
                    key = (row, col, direction)
                    if key in seen:
                        continue
                    seen.add(key)
                    candidate = self._evaluate(word, row, col, direction)
                    if candidate is not None:
                        found.append(candidate)

        found.sort(key=lambda item: item.score, reverse=True)
        return found

    def _evaluate(
        self, word: WordEntry, row: int, col: int, direction: Direction
    ) -> Optional[PlacementCandidate]:
        self.steps += 1
        intersections = self.check_placement(word, row, col, direction)
        if intersections is None:
            return None
        score = self.scorer.score(word, row, col, direction, len(intersections), self.bounds)
        return PlacementCandidate(
            word=word,
            row=row,
            col=col,
            direction=direction,
            score=score,
            intersections=intersections,
        )

    def check_placement(
        self, word: WordEntry, row: int, col: int, direction: Direction
    ) -> Optional[List[Tuple[int, int]]]:
        """Return the shared cells of a legal placement, or ``None``."""

        grid = self.grid
        dr, dc = direction.step
        end_row = row + dr * (word.length - 1)
        end_col = col + dc * (word.length - 1)
        if not (self.bounds.contains(row, col) and self.bounds.contains(end_row, end_col)):
            return None
        if grid.occupied(row - dr, col - dc) or grid.occupied(end_row + dr, end_col + dc):
            return None

        # Perpendicular step: across words check above/below, down words left/right.
        pr, pc = dc, dr
        intersections: List[Tuple[int, int]] = []
        for index, letter in enumerate(word.answer):
            r = row + dr * index
            c = col + dc * index
            existing = grid.letter(r, c)
            if existing is None:
                if grid.occupied(r - pr, c - pc) or grid.occupied(r + pr, c + pc):
                    return None
            elif existing != letter or grid.owned_by(r, c, direction):
                return None
            else:
                intersections.append((r, c))
        return intersections
