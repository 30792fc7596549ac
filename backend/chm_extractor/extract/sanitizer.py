"""Turn raw matches into validated class records."""

from __future__ import annotations

import re

from chm_extractor.extract.patterns import is_noise_name
from chm_extractor.extract.types import ClassRecord
from chm_extractor.utils.text import normalize

MAX_DESCRIPTION_LENGTH = 500
MIN_NAME_LENGTH = 2

_NAME_RE = re.compile(r"[A-Z][A-Za-z0-9_]*")


def sanitize(name: str, raw_description: str) -> ClassRecord | None:
    """Build a ``ClassRecord`` or return None when the name is unusable.

    Descriptions are whitespace-collapsed, default to ``"<name> class"`` when
    empty and are cut to the first 500 characters without an ellipsis.
    """
    clean_name = name.strip()
    if len(clean_name) < MIN_NAME_LENGTH:
        return None
    if not _NAME_RE.fullmatch(clean_name) or is_noise_name(clean_name):
        return None

    description = normalize(raw_description or "")
    if not description:
        description = f"{clean_name} class"
    return ClassRecord(name=clean_name, description=description[:MAX_DESCRIPTION_LENGTH])


__all__ = ["MAX_DESCRIPTION_LENGTH", "sanitize"]
