"""Persistent puzzle document store.

Every generation call (success or failure) can be saved as a JSON document
under ``local_db/collections/puzzles/``. Documents hold the grid and
numbering exactly as generated, plus the seed and config needed to
reproduce them; :meth:`PuzzleStore.load` rehydrates them unchanged.
"""

from __future__ import annotations

import json
import uuid
from collections import Counter
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from ..core.constants import CellType
from ..core.exceptions import StoreError
from ..core.models import CrosswordGrid, CrosswordNumbering
from ..utils.logger import get_logger

if TYPE_CHECKING:
    from .generator import GenerationResult, GeneratorConfig


LOGGER = get_logger(__name__)

DEFAULT_STORE_DIR = Path("local_db/collections/puzzles")


class PuzzleStore:
    """Save generation results as structured JSON documents."""

    def __init__(self, store_dir: Path | str = DEFAULT_STORE_DIR) -> None:
        self.store_dir = Path(store_dir)
        self.store_dir.mkdir(parents=True, exist_ok=True)

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    def save(
        self,
        result: "GenerationResult",
        config: "GeneratorConfig",
        list_name: Optional[str] = None,
    ) -> str:
        """Persist a generation result and return its document ID."""
        doc_id = self._new_id()
        doc: Dict[str, Any] = {
            "id": doc_id,
            "created_at": datetime.now(timezone.utc).isoformat(),
            "status": "success" if result.success else "failed",
            "list_name": list_name,
            "config": self._serialize_config(config),
            "seed": result.seed,
            "attempts": result.attempts,
            "placed_words": result.placed_words,
            "total_words": result.total_words,
        }
        if result.success and result.grid is not None and result.numbering is not None:
            doc["grid"] = result.grid.to_jsonable()
            doc["numbering"] = result.numbering.to_jsonable()
            doc["stats"] = self._compute_stats(result.grid, result.numbering)
        else:
            doc["conflicting_words"] = list(result.conflicting_words)

        path = self.store_dir / f"{doc_id}.json"
        path.write_text(json.dumps(doc, ensure_ascii=False, indent=2), encoding="utf-8")
        if result.success:
            LOGGER.info("Puzzle saved: %s", doc_id)
        else:
            LOGGER.info("Puzzle failure saved: %s", doc_id)
        return doc_id

    def load(self, doc_id: str) -> Dict[str, Any]:
        """Return a stored document with ``grid`` and ``numbering`` rehydrated."""
        path = self.store_dir / f"{doc_id}.json"
        if not path.exists():
            raise StoreError(f"Puzzle {doc_id} not found in {self.store_dir}")
        try:
            doc = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as exc:
            raise StoreError(f"Puzzle {doc_id} could not be read: {exc}") from exc

        if doc.get("grid") is not None:
            doc["grid"] = CrosswordGrid.from_jsonable(doc["grid"])
        if doc.get("numbering") is not None:
            doc["numbering"] = CrosswordNumbering.from_jsonable(doc["numbering"])
        return doc

    def list_ids(self) -> List[str]:
        return sorted(path.stem for path in self.store_dir.glob("*.json"))

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _compute_stats(grid: CrosswordGrid, numbering: CrosswordNumbering) -> dict:
        total_cells = grid.rows * grid.cols
        letter_cells = sum(
            1 for row in grid.cells for cell in row if cell.type == CellType.CELL
        )
        entries = [*numbering.across, *numbering.down]
        lengths = [entry.length for entry in entries]
        length_dist = Counter(lengths)
        letters_in_words = sum(lengths)
        return {
            "grid": {
                "rows": grid.rows,
                "cols": grid.cols,
                "total_cells": total_cells,
                "letter_cells": letter_cells,
                "block_cells": total_cells - letter_cells,
                "fill_pct": round(letter_cells / total_cells * 100, 1) if total_cells else 0.0,
            },
            "words": {
                "across": len(numbering.across),
                "down": len(numbering.down),
                "intersections": letters_in_words - letter_cells,
                "length_min": min(lengths) if lengths else 0,
                "length_max": max(lengths) if lengths else 0,
                "length_avg": round(sum(lengths) / len(lengths), 1) if lengths else 0.0,
                "length_distribution": {str(k): v for k, v in sorted(length_dist.items())},
            },
        }

    @staticmethod
    def _serialize_config(config: "GeneratorConfig") -> dict:
        return {
            "rows": config.rows,
            "cols": config.cols,
            "seed": config.seed,
            "max_attempts": config.max_attempts,
            "success_ratio": config.success_ratio,
            "max_steps_per_attempt": config.max_steps_per_attempt,
            "time_limit_seconds": config.time_limit_seconds,
        }

    @staticmethod
    def _new_id() -> str:
        ts = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S")
        short_uuid = uuid.uuid4().hex[:8]
        return f"{ts}_{short_uuid}"
