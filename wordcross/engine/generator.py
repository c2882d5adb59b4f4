"""Main crossword generator orchestration.

Each call runs up to ``max_attempts`` independent attempts. An attempt
shuffles the word list with the seeded random source and hands it to a fresh
:class:`PlacementSearch`; the attempt placing the most words is kept. The
best placement set is then numbered, assembled into the exported grid and
checked by the validator.
"""

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ..core.constants import (
    DEFAULT_GRID_COLS,
    DEFAULT_GRID_ROWS,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_MAX_STEPS_PER_ATTEMPT,
    MAX_CONFLICTING_WORDS,
    SUCCESS_RATIO,
    Bounds,
)
from ..core.exceptions import ValidationError
from ..core.models import CrosswordGrid, CrosswordNumbering, WordEntry, WordPlacement
from ..data.preprocess import preprocess_words
from ..utils.logger import get_logger
from .assembler import ResultAssembler
from .numbering import GridNumberer
from .random_source import SeededRandom
from .scoring import IntersectionScorer, PlacementScorer
from .search import PlacementSearch
from .validator import GridValidator


LOGGER = get_logger(__name__)


@dataclass
class GeneratorConfig:
    rows: int = DEFAULT_GRID_ROWS
    cols: int = DEFAULT_GRID_COLS
    seed: Optional[str] = None
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    success_ratio: float = SUCCESS_RATIO
    max_conflicting_words: int = MAX_CONFLICTING_WORDS
    max_steps_per_attempt: int = DEFAULT_MAX_STEPS_PER_ATTEMPT
    time_limit_seconds: Optional[float] = None

    def to_bounds(self) -> Bounds:
        return Bounds(rows=self.rows, cols=self.cols)

    @classmethod
    def from_options(cls, options: Mapping[str, Any], **overrides: Any) -> "GeneratorConfig":
        """Build a config from wire options (``gridSize``, ``seed``, ``maxAttempts``).

        Options are validated first; invalid values raise
        :class:`~wordcross.core.exceptions.ListValidationError`.
        """

        from ..data.validation import parse_generate_options

        parsed = parse_generate_options(options)
        return cls(
            rows=parsed.grid_size.rows,
            cols=parsed.grid_size.cols,
            seed=parsed.seed,
            max_attempts=parsed.max_attempts,
            **overrides,
        )


@dataclass
class GenerationResult:
    success: bool
    placed_words: int
    total_words: int
    seed: str
    attempts: int = 0
    grid: Optional[CrosswordGrid] = None
    numbering: Optional[CrosswordNumbering] = None
    conflicting_words: List[str] = field(default_factory=list)
    placements: List[WordPlacement] = field(default_factory=list, repr=False, compare=False)

    def to_jsonable(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"success": self.success}
        if self.success and self.grid is not None and self.numbering is not None:
            payload["grid"] = self.grid.to_jsonable()
            payload["numbering"] = self.numbering.to_jsonable()
        payload["placedWords"] = self.placed_words
        payload["totalWords"] = self.total_words
        if not self.success:
            payload["conflictingWords"] = list(self.conflicting_words)
        payload["seed"] = self.seed
        payload["attempts"] = self.attempts
        return payload

    @classmethod
    def from_jsonable(cls, data: Mapping[str, Any]) -> "GenerationResult":
        grid = data.get("grid")
        numbering = data.get("numbering")
        return cls(
            success=bool(data["success"]),
            placed_words=int(data["placedWords"]),
            total_words=int(data["totalWords"]),
            seed=str(data.get("seed", "")),
            attempts=int(data.get("attempts", 0)),
            grid=CrosswordGrid.from_jsonable(grid) if grid else None,
            numbering=CrosswordNumbering.from_jsonable(numbering) if numbering else None,
            conflicting_words=list(data.get("conflictingWords", [])),
        )


class CrosswordGenerator:
    """High-level orchestrator: attempt loop, numbering and assembly."""

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        scorer: Optional[PlacementScorer] = None,
    ) -> None:
        self.config = config or GeneratorConfig()
        self.bounds = self.config.to_bounds()
        self.scorer = scorer or IntersectionScorer()
        self.validator = GridValidator(self.bounds)

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def generate(self, words: Iterable[Any]) -> GenerationResult:
        raw_words = list(words)
        seed = self.config.seed or uuid.uuid4().hex
        entries = preprocess_words(raw_words)
        if not entries:
            LOGGER.info("No usable words among %d inputs; skipping search", len(raw_words))
            return GenerationResult(
                success=False, placed_words=0, total_words=len(raw_words), seed=seed
            )

        LOGGER.info(
            "Generating %dx%d crossword from %d words (seed=%s)",
            self.bounds.rows, self.bounds.cols, len(entries), seed,
        )
        best, attempts = self._search(entries, seed)
        total = len(entries)
        ratio = len(best) / total

        if ratio < self.config.success_ratio:
            conflicting = self._conflicting_words(entries, best)
            LOGGER.info(
                "Generation failed: placed %d/%d words after %d attempts",
                len(best), total, attempts,
            )
            return GenerationResult(
                success=False,
                placed_words=len(best),
                total_words=total,
                seed=seed,
                attempts=attempts,
                conflicting_words=conflicting,
                placements=best,
            )

        numbering = GridNumberer(self.bounds).number(best)
        grid = ResultAssembler(self.bounds).build_grid(best, numbering)
        validation = self.validator.validate(best, numbering)
        if not validation.ok:
            raise ValidationError(f"Grid validation failed: {validation.messages}")

        LOGGER.info(
            "Crossword generated: placed %d/%d words in %d attempts",
            len(best), total, attempts,
        )
        return GenerationResult(
            success=True,
            placed_words=len(best),
            total_words=total,
            seed=seed,
            attempts=attempts,
            grid=grid,
            numbering=numbering,
            placements=best,
        )

    # ------------------------------------------------------------------
    # Attempt loop
    # ------------------------------------------------------------------
    def _search(self, entries: List[WordEntry], seed: str) -> tuple[List[WordPlacement], int]:
        rng = SeededRandom(seed)
        deadline = (
            time.monotonic() + self.config.time_limit_seconds
            if self.config.time_limit_seconds is not None
            else None
        )
        best: List[WordPlacement] = []
        attempts = 0
        total = len(entries)

        for attempt in range(1, self.config.max_attempts + 1):
            if deadline is not None and time.monotonic() >= deadline:
                LOGGER.warning(
                    "Time limit reached after %d attempts; keeping best of %d words",
                    attempts, len(best),
                )
                break
            order = rng.shuffle(entries)
            search = PlacementSearch(
                self.bounds, self.scorer, max_steps=self.config.max_steps_per_attempt
            )
            placements = search.run(order)
            attempts = attempt
            LOGGER.debug(
                "Attempt %d/%d placed %d/%d words in %d steps",
                attempt, self.config.max_attempts, len(placements), total, search.steps,
            )
            if len(placements) > len(best):
                best = placements
            if len(best) / total >= self.config.success_ratio:
                break
        return best, attempts

    def _conflicting_words(
        self, entries: List[WordEntry], placements: List[WordPlacement]
    ) -> List[str]:
        # Duplicate answers are separate entries.
        placed = {id(placement.entry) for placement in placements}
        unplaced = [entry.answer for entry in entries if id(entry) not in placed]
        return unplaced[: self.config.max_conflicting_words]
