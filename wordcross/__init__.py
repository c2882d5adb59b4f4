"""Crossword generator for topic-organized word lists.

This package exposes the public API surface via:

- ``wordcross.engine.generator.CrosswordGenerator``: seeded backtracking grid generation.
- ``wordcross.data.validation``: word list and generation option rules.
- ``wordcross.io.list_io``: JSON/CSV list import and export.
- ``wordcross.engine.puzzle_store.PuzzleStore``: JSON persistence of generated puzzles.
"""

from .engine.generator import CrosswordGenerator, GenerationResult, GeneratorConfig
from .engine.puzzle_store import PuzzleStore
from .engine.scoring import IntersectionScorer, PlacementScorer

__all__ = [
    "CrosswordGenerator",
    "GenerationResult",
    "GeneratorConfig",
    "IntersectionScorer",
    "PlacementScorer",
    "PuzzleStore",
]

__version__ = "0.1.0"
