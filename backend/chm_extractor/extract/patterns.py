"""Line-oriented recognition of class headers and their descriptions.

Lines are scanned top to bottom. When a line matches one of
``HEADER_PATTERNS`` (first pattern wins, most specific first) the extractor
starts capturing: the header's own trailing text plus every following line
that is neither blank nor the start of another header becomes the
description. A blank line, a new header or the end of input closes the
record; a new header is then scanned again as a fresh candidate.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from chm_extractor.extract.types import RawMatch
from chm_extractor.utils.text import clean_fragment

# Generic words the lenient patterns pick up from running prose.
NOISE_WORDS = frozenset(
    {
        "class",
        "definitions",
        "definition",
        "text",
        "without",
        "any",
        "some",
        "regular",
        "just",
        "manages",
        "files",
        "content",
        "other",
        "here",
    }
)

_LEAD = r"^\s*(?:<[^>]+>\s*)*"
_NAME = r"(?P<name>[A-Z][A-Za-z0-9_]+)\b"
_TAIL = r"[,.;]?(?:\s+(?P<description>.*))?$"

HEADER_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("colon", re.compile(_LEAD + r"(?i:class)\s+" + _NAME + r"\s*:\s*(?P<description>.*)$")),
    ("parenthesis", re.compile(_LEAD + r"(?i:class)\s+" + _NAME + r"\s*\([^)]*\)?\s*(?P<description>.*)$")),
    (
        "html_heading",
        re.compile(
            r"<(?i:h)(?P<level>[1-6])[^>]*>\s*(?i:class)\s+"
            + _NAME
            + r"(?:\s+(?P<description>.*?))?\s*</(?i:h)(?P=level)\s*>"
        ),
    ),
    ("upper", re.compile(_LEAD + r"CLASS\s+" + _NAME + _TAIL)),
    ("mixed", re.compile(_LEAD + r"Class\s+" + _NAME + _TAIL)),
    ("lower", re.compile(_LEAD + r"class\s+" + _NAME + _TAIL)),
    # glued "ClassFoo" is allowed, "CLASSIFICATION" is not
    ("lenient", re.compile(r"\b(?i:class)(?:\s+|(?=[A-Z][a-z0-9_]))" + _NAME + _TAIL)),
)

_NEW_HEADER_RE = re.compile(_LEAD + r"(?:Class|CLASS)\s+[A-Z]")


@dataclass(frozen=True, slots=True)
class HeaderMatch:
    pattern: str
    name: str
    description: str


def match_header(line: str) -> HeaderMatch | None:
    """Try the header patterns in priority order; first hit wins."""
    for pattern_name, pattern in HEADER_PATTERNS:
        found = pattern.search(line)
        if found is not None:
            return HeaderMatch(
                pattern=pattern_name,
                name=found.group("name"),
                description=found.group("description") or "",
            )
    return None


def starts_new_header(line: str) -> bool:
    return _NEW_HEADER_RE.match(line) is not None


def is_noise_name(name: str) -> bool:
    return name.strip().lower() in NOISE_WORDS


def extract_matches(text: str | None) -> list[RawMatch]:
    """Return raw class matches in the order they appear in ``text``."""
    if not text:
        return []

    lines = text.splitlines()
    total = len(lines)
    matches: list[RawMatch] = []
    index = 0

    while index < total:
        line_no = index
        header = match_header(lines[index])
        index += 1
        if header is None or is_noise_name(header.name):
            continue

        parts = [clean_fragment(header.description)]
        while index < total and lines[index].strip() and not starts_new_header(lines[index]):
            parts.append(clean_fragment(lines[index]))
            index += 1

        matches.append(
            RawMatch(
                name=header.name,
                raw_description=" ".join(part for part in parts if part),
                line_no=line_no,
            )
        )

    return matches


__all__ = [
    "NOISE_WORDS",
    "HEADER_PATTERNS",
    "HeaderMatch",
    "match_header",
    "starts_new_header",
    "is_noise_name",
    "extract_matches",
]
