"""Word list import/export and printable puzzle export."""

from __future__ import annotations

import csv
import io
import json
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from ..core.exceptions import ImportFormatError
from ..data.normalization import normalize_answer
from ..utils.logger import get_logger

if TYPE_CHECKING:
    from ..data.validation import ImportList
    from ..engine.generator import GenerationResult


LOGGER = get_logger(__name__)

CSV_HEADERS = ("answer", "clue", "difficulty", "note")
DIFFICULTY_LABELS = {1: "EASY", 2: "MEDIUM", 3: "HARD", 4: "HARD", 5: "HARD"}
DEFAULT_DIFFICULTY_LABEL = "MEDIUM"
DIFFICULTY_BY_LABEL = {"EASY": 1, "MEDIUM": 2, "HARD": 3}


@dataclass
class ParsedImport:
    """Raw list payload recovered from an import file.

    Answers are normalized but the list is not validated; pass ``data`` to
    :func:`wordcross.data.validation.validate_list_json` for that.
    """

    format: str
    data: Dict[str, Any] = field(default_factory=dict)

    @property
    def items(self) -> List[Dict[str, Any]]:
        return self.data.get("items", [])


def parse_import_file(content: str, filename: str) -> ParsedImport:
    extension = filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
    if extension == "json":
        return _parse_json_import(content)
    if extension == "csv":
        return _parse_csv_import(content)
    raise ImportFormatError(f"Unsupported file format: {extension or filename}")


def _parse_json_import(content: str) -> ParsedImport:
    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ImportFormatError(f"Invalid JSON: {exc}") from exc

    if not isinstance(data, dict) or not data.get("topic") or not data.get("name") \
            or not isinstance(data.get("items"), list):
        raise ImportFormatError("Invalid JSON: missing required fields (topic, name, items)")
    if not data["items"]:
        raise ImportFormatError("Invalid JSON: list must contain at least one item")

    items: List[Dict[str, Any]] = []
    for index, item in enumerate(data["items"], start=1):
        if not isinstance(item, dict) or not item.get("answer") or not item.get("clue"):
            raise ImportFormatError(f"Invalid JSON: item {index}: missing answer or clue")
        entry: Dict[str, Any] = {
            "answer": normalize_answer(str(item["answer"])),
            "clue": str(item["clue"]),
        }
        if item.get("note"):
            entry["note"] = str(item["note"])
        if item.get("difficulty"):
            entry["difficulty"] = _parse_difficulty(item["difficulty"], index)
        items.append(entry)

    try:
        version = int(data.get("version") or 1)
    except (TypeError, ValueError):
        version = 1
    return ParsedImport(
        format="json",
        data={
            "topic": str(data["topic"]),
            "name": str(data["name"]),
            "version": version or 1,
            "items": items,
        },
    )


def _parse_difficulty(value: Any, index: int) -> int:
    """Accept numeric difficulties or the EASY/MEDIUM/HARD export labels."""

    if isinstance(value, str) and value.strip().upper() in DIFFICULTY_BY_LABEL:
        return DIFFICULTY_BY_LABEL[value.strip().upper()]
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ImportFormatError(
            f"Invalid JSON: item {index}: difficulty {value!r} is not a number or label"
        ) from exc


def _parse_csv_import(content: str) -> ParsedImport:
    rows = list(csv.reader(io.StringIO(content.strip())))
    if len(rows) < 2:
        raise ImportFormatError("Invalid CSV: needs a header row and at least one data row")

    headers = [header.strip().lower() for header in rows[0]]
    answer_index = next((i for i, h in enumerate(headers) if "answer" in h), None)
    clue_index = next((i for i, h in enumerate(headers) if "clue" in h), None)
    if answer_index is None or clue_index is None:
        raise ImportFormatError('Invalid CSV: must contain "answer" and "clue" columns')

    items: List[Dict[str, Any]] = []
    for row in rows[1:]:
        values = [value.strip() for value in row]
        if max(answer_index, clue_index) >= len(values):
            continue
        answer, clue = values[answer_index], values[clue_index]
        if answer and clue:
            items.append({"answer": normalize_answer(answer), "clue": clue})

    if not items:
        raise ImportFormatError("Invalid CSV: no valid items found")
    LOGGER.debug("Parsed %d items from CSV import", len(items))
    return ParsedImport(
        format="csv",
        data={"topic": "Imported from CSV", "name": "CSV Import", "version": 1, "items": items},
    )


def export_list_as_json(word_list: "ImportList") -> str:
    items = []
    for item in word_list.items:
        entry: Dict[str, Any] = {"answer": item.answer, "clue": item.clue}
        if item.note:
            entry["note"] = item.note
        if item.difficulty:
            entry["difficulty"] = item.difficulty
        items.append(entry)
    payload = {
        "topic": word_list.topic,
        "name": word_list.name,
        "version": word_list.version,
        "items": items,
    }
    return json.dumps(payload, ensure_ascii=False, indent=2)


def export_list_as_csv(word_list: "ImportList") -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for item in word_list.items:
        difficulty = DIFFICULTY_LABELS.get(item.difficulty or 0, DEFAULT_DIFFICULTY_LABEL)
        writer.writerow([item.answer, item.clue, difficulty, item.note or ""])
    return buffer.getvalue().rstrip("\n")


def export_puzzle(
    puzzle_id: str,
    result: "GenerationResult",
    exported_at: Optional[datetime] = None,
) -> str:
    """Export the grid structure and clues of a puzzle, without answers."""

    if not result.success or result.grid is None or result.numbering is None:
        raise ValueError("Only successfully generated puzzles can be exported")

    def _clues(entries) -> List[Dict[str, Any]]:
        return [
            {
                "number": entry.number,
                "clue": entry.clue,
                "length": entry.length,
                "row": entry.row,
                "col": entry.col,
            }
            for entry in entries
        ]

    grid = result.grid
    payload = {
        "puzzleId": puzzle_id,
        "exportedAt": (exported_at or datetime.now(timezone.utc)).isoformat(),
        "seed": result.seed,
        "grid": {
            "size": {"rows": grid.rows, "cols": grid.cols},
            "cells": [
                [
                    {"row": cell.row, "col": cell.col, "type": cell.type.value, "number": cell.number}
                    for cell in row
                ]
                for row in grid.cells
            ],
        },
        "clues": {
            "across": _clues(result.numbering.across),
            "down": _clues(result.numbering.down),
        },
    }
    return json.dumps(payload, ensure_ascii=False, indent=2)


def generate_filename(
    base_name: str,
    extension: str,
    include_timestamp: bool = True,
    today: Optional[datetime] = None,
) -> str:
    sanitized = re.sub(r"[^a-zA-Z0-9]", "_", base_name)
    timestamp = ""
    if include_timestamp:
        timestamp = "_" + (today or datetime.now(timezone.utc)).date().isoformat()
    return f"{sanitized}{timestamp}.{extension}"


__all__ = [
    "ParsedImport",
    "export_list_as_csv",
    "export_list_as_json",
    "export_puzzle",
    "generate_filename",
    "parse_import_file",
]
