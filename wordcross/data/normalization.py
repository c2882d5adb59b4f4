"""Shared helpers for answer normalization."""

from __future__ import annotations

import re

NON_LETTER_RE = re.compile(r"[^A-Z]")


def normalize_answer(text: str) -> str:
    """Uppercase ``text`` and strip every character outside ``A-Z``."""

    if not text:
        return ""
    return NON_LETTER_RE.sub("", text.upper())


__all__ = ["normalize_answer", "NON_LETTER_RE"]
