"""Common extraction data structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Union


@dataclass(frozen=True, slots=True)
class Valid:
    """Buffer carries the ITSF signature."""

    version: int
    header_size: int


@dataclass(frozen=True, slots=True)
class Invalid:
    """Buffer rejected; ``reason`` is ``too_small``, ``bad_signature`` or ``header_inconsistent``."""

    reason: str


ValidationResult = Union[Valid, Invalid]


@dataclass(frozen=True, slots=True)
class TextChunk:
    """Decoded byte window and the offset it was read from."""

    offset: int
    text: str
    encoding: str


@dataclass(frozen=True, slots=True)
class RawMatch:
    """Class header recognised in aggregated text, before sanitizing."""

    name: str
    raw_description: str
    line_no: int


@dataclass(frozen=True, slots=True)
class ClassRecord:
    """Sanitized class definition handed back to callers."""

    name: str
    description: str
    type: Literal["Class"] = "Class"

    def to_dict(self) -> dict[str, str]:
        return {"type": self.type, "name": self.name, "description": self.description}


@dataclass(slots=True)
class ExtractionStats:
    """Counters gathered during a single extraction."""

    chunks: int = 0
    relevant_chunks: int = 0
    encodings: dict[str, int] = field(default_factory=dict)
    matches: int = 0
    records: int = 0
    header_consistent: bool = True

    def to_dict(self) -> dict[str, object]:
        return {
            "chunks": self.chunks,
            "relevant_chunks": self.relevant_chunks,
            "encodings": dict(self.encodings),
            "matches": self.matches,
            "records": self.records,
            "header_consistent": self.header_consistent,
        }


@dataclass(slots=True)
class ExtractionResult:
    """Outcome of one pipeline run over a buffer."""

    records: list[ClassRecord]
    stats: ExtractionStats
    validation: Valid


__all__ = [
    "Valid",
    "Invalid",
    "ValidationResult",
    "TextChunk",
    "RawMatch",
    "ClassRecord",
    "ExtractionStats",
    "ExtractionResult",
]
