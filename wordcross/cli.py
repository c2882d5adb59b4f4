"""CLI entrypoint for the word list crossword generator."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List

from .core.constants import DEFAULT_GRID_COLS, DEFAULT_GRID_ROWS, DEFAULT_MAX_ATTEMPTS, \
    DEFAULT_MAX_STEPS_PER_ATTEMPT
from .core.exceptions import ImportFormatError, ListValidationError
from .data.validation import parse_list
from .engine.generator import CrosswordGenerator, GeneratorConfig
from .engine.puzzle_store import PuzzleStore
from .io.list_io import parse_import_file
from .utils.logger import configure_logging, get_logger
from .utils.pretty import print_puzzle


LOGGER = get_logger(__name__)


def parse_word_entry(entry: str) -> Dict[str, str]:
    """Split a ``WORD`` or ``WORD:Clue`` entry."""
    answer, _, clue = entry.partition(":")
    return {"answer": answer.strip(), "clue": clue.strip()}


def parse_words_file(path: Path) -> List[Dict[str, Any]]:
    """Read a word list file.

    ``.json`` and ``.csv`` files use the list import formats; anything else is
    read as one ``WORD`` or ``WORD:Clue`` entry per line, skipping blank lines
    and # comments.
    """
    content = path.read_text(encoding="utf-8")
    if path.suffix.lower() in {".json", ".csv"}:
        return parse_import_file(content, path.name).items
    entries: List[Dict[str, Any]] = []
    for line in content.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        entries.append(parse_word_entry(line))
    return entries


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate a crossword from a list of answers and clues",
    )
    parser.add_argument(
        "--words",
        nargs="+",
        metavar="WORD",
        help="Explicit entries (format: WORD or WORD:Clue)",
    )
    parser.add_argument(
        "--words-file",
        type=Path,
        metavar="FILE",
        help="Word list: .json/.csv import file, or one WORD:Clue entry per line",
    )
    parser.add_argument("--rows", type=int, default=DEFAULT_GRID_ROWS, help="Grid height (9-19)")
    parser.add_argument("--cols", type=int, default=DEFAULT_GRID_COLS, help="Grid width (9-19)")
    parser.add_argument("--seed", type=str, default=None, help="Seed string for reproducibility")
    parser.add_argument(
        "--max-attempts",
        type=int,
        default=DEFAULT_MAX_ATTEMPTS,
        help="Maximum number of independent placement attempts",
    )
    parser.add_argument(
        "--max-steps",
        type=int,
        default=DEFAULT_MAX_STEPS_PER_ATTEMPT,
        help="Steps (word entries and candidate evaluations) per attempt before going greedy",
    )
    parser.add_argument(
        "--time-limit",
        type=float,
        default=None,
        help="Stop starting new attempts after this many seconds",
    )
    parser.add_argument(
        "--validate",
        action="store_true",
        help="Enforce word list rules (5-50 unique items, 3-200 character clues)",
    )
    parser.add_argument("--output", type=Path, help="Optional path to JSON output")
    parser.add_argument(
        "--store-dir",
        type=Path,
        help="Persist the result as a JSON document in this directory",
    )
    parser.add_argument("--show", action="store_true", help="Print the grid and clues to stderr")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if not args.words and not args.words_file:
        parser.error("provide --words or --words-file")

    words: List[Dict[str, Any]] = []
    if args.words:
        words.extend(parse_word_entry(entry) for entry in args.words)
    if args.words_file:
        try:
            words.extend(parse_words_file(args.words_file))
        except (ImportFormatError, OSError) as exc:
            parser.error(str(exc))

    list_name = args.words_file.stem if args.words_file else "cli"
    if args.validate:
        try:
            parse_list({"topic": "cli", "name": list_name, "items": words})
        except ListValidationError as exc:
            parser.error(str(exc))

    options: Dict[str, Any] = {
        "gridSize": {"rows": args.rows, "cols": args.cols},
        "maxAttempts": args.max_attempts,
    }
    if args.seed is not None:
        options["seed"] = args.seed
    try:
        config = GeneratorConfig.from_options(
            options,
            max_steps_per_attempt=args.max_steps,
            time_limit_seconds=args.time_limit,
        )
    except ListValidationError as exc:
        parser.error(str(exc))

    result = CrosswordGenerator(config).generate(words)
    payload = result.to_jsonable()

    if args.store_dir:
        payload["puzzleId"] = PuzzleStore(args.store_dir).save(result, config, list_name=list_name)

    if args.show:
        print_puzzle(result, stream=sys.stderr)

    output_text = json.dumps(payload, ensure_ascii=False, indent=2)
    if args.output:
        args.output.write_text(output_text, encoding="utf-8")
        LOGGER.info("Result written to %s", args.output)
    else:
        print(output_text)
    return 0 if result.success else 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
