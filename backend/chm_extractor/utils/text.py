"""Text processing helpers."""

from __future__ import annotations

import re


WHITESPACE_RE = re.compile(r"\s+")
TAG_RE = re.compile(r"<[^>]*>")


def normalize(text: str) -> str:
    """Collapse whitespace and strip."""
    return WHITESPACE_RE.sub(" ", text).strip()


def strip_tags(text: str) -> str:
    """Drop HTML tags, leaving a space where each tag stood."""
    return TAG_RE.sub(" ", text)


def clean_fragment(text: str) -> str:
    """Tag-strip and whitespace-collapse a line fragment."""
    return normalize(strip_tags(text))
