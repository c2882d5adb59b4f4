"""CLI entrypoint for the word list crossword generator."""

from __future__ import annotations

from wordcross.cli import main


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
