"""Turn raw (answer, clue) pairs into placeable word entries."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Tuple

from ..core.constants import MAX_ANSWER_LENGTH, MIN_ANSWER_LENGTH
from ..core.models import WordEntry
from ..utils.logger import get_logger
from .normalization import normalize_answer


LOGGER = get_logger(__name__)


def letter_positions(answer: str) -> Dict[str, Tuple[int, ...]]:
    """Map every letter of ``answer`` to all of its positions, in order."""

    positions: Dict[str, List[int]] = {}
    for index, letter in enumerate(answer):
        positions.setdefault(letter, []).append(index)
    return {letter: tuple(indexes) for letter, indexes in positions.items()}


def _unpack(item: Any) -> Tuple[str, str]:
    if isinstance(item, Mapping):
        return str(item.get("answer") or ""), str(item.get("clue") or "")
    if isinstance(item, (tuple, list)):
        answer, clue = item
        return str(answer or ""), str(clue or "")
    return str(getattr(item, "answer", "") or ""), str(getattr(item, "clue", "") or "")


def preprocess_words(words: Iterable[Any]) -> List[WordEntry]:
    """Normalize answers and drop those outside the allowed length range.

    ``words`` may hold ``{"answer", "clue"}`` mappings, ``(answer, clue)``
    pairs or objects exposing ``answer`` and ``clue`` attributes. Input order
    is preserved.
    """

    entries: List[WordEntry] = []
    for item in words:
        raw_answer, clue = _unpack(item)
        answer = normalize_answer(raw_answer)
        if not MIN_ANSWER_LENGTH <= len(answer) <= MAX_ANSWER_LENGTH:
            LOGGER.debug("Dropping answer %r (normalized length %d)", raw_answer, len(answer))
            continue
        entries.append(
            WordEntry(
                answer=answer,
                clue=clue,
                length=len(answer),
                positions=letter_positions(answer),
            )
        )
    return entries


__all__ = ["letter_positions", "preprocess_words"]
