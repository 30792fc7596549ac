"""Cheap pre-test deciding whether a decoded window is worth aggregating."""

from __future__ import annotations

import re

DEFAULT_MIN_ALPHA_RATIO = 0.2

_LETTER_RE = re.compile(r"[A-Za-z]")
_KEYWORD = r"\b(?i:class)\s+[A-Z][A-Za-z0-9_]+"

_SHAPES_RE = re.compile(
    "|".join(
        (
            _KEYWORD + r"\s{2,}",
            _KEYWORD + r"\s*:",
            _KEYWORD + r"\s*\(",
            _KEYWORD + r"\s*\{",
            r"<h[1-6][^>]*>\s*" + _KEYWORD,
            _KEYWORD + r"[ \t]*\r?$",
        )
    ),
    flags=re.MULTILINE,
)


def alpha_ratio(text: str) -> float:
    """Share of ASCII letters in ``text``."""
    if not text:
        return 0.0
    return len(_LETTER_RE.findall(text)) / len(text)


def is_relevant(text: str, min_alpha_ratio: float = DEFAULT_MIN_ALPHA_RATIO) -> bool:
    """Return True when ``text`` may hold a class header.

    Windows that are mostly binary (letter density at or below
    ``min_alpha_ratio``) are rejected before any pattern is tried.
    """
    if not text or alpha_ratio(text) <= min_alpha_ratio:
        return False
    return _SHAPES_RE.search(text) is not None


__all__ = ["DEFAULT_MIN_ALPHA_RATIO", "alpha_ratio", "is_relevant"]
