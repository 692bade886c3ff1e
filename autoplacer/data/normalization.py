"""Shared helpers for normalizing form text and frenzy labels."""

from __future__ import annotations

import math
import re
from typing import Any, Optional

WORD_RE = re.compile(r"[^A-Za-z]")
TRAILING_NUMBER_RE = re.compile(r"(\d+)\s*$")
LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


def is_blank(text: Optional[str]) -> bool:
    return not str(text or "").strip()


def clean_word(text: Optional[str]) -> str:
    """Return ``text`` reduced to upper-case ASCII letters."""

    if not text:
        return ""
    return WORD_RE.sub("", str(text)).upper()


def clamp_int(value: Any, low: int, high: int, fallback: int) -> int:
    """Parse ``value`` as an integer and clamp it to ``[low, high]``.

    Numbers are truncated toward zero and strings are read up to the first
    non-digit, so ``2.0``, ``"2.5"`` and ``"2 letters"`` all give 2. Input
    with no leading integer (``None``, empty strings, garbage) yields
    ``fallback`` before clamping.
    """

    number = fallback
    if isinstance(value, bool):
        pass
    elif isinstance(value, (int, float)):
        if math.isfinite(value):
            number = int(value)
    elif value is not None:
        match = LEADING_INT_RE.match(str(value))
        if match:
            number = int(match.group(1))
    return max(low, min(high, number))


def parse_trailing_number(label: Optional[str]) -> int:
    """Tile number at the end of a frenzy label such as ``"K17"``; 0 if absent."""

    match = TRAILING_NUMBER_RE.search(str(label or ""))
    return int(match.group(1)) if match else 0


__all__ = [
    "clamp_int",
    "clean_word",
    "is_blank",
    "parse_trailing_number",
]
