"""Extraction pipeline orchestration."""

from __future__ import annotations

import time
from typing import Iterable, Iterator

from chm_extractor.core.config import Settings, get_settings
from chm_extractor.core.errors import HeaderInconsistentError, InvalidFormatError, InvalidWindowError
from chm_extractor.core.logging import get_logger
from chm_extractor.core.metrics import (
    CHUNKS_DECODED,
    CHUNKS_RELEVANT,
    EXTRACTION_DURATION,
    EXTRACTIONS,
    RECORDS_EXTRACTED,
)
from chm_extractor.extract.decoder import iter_chunks
from chm_extractor.extract.patterns import extract_matches
from chm_extractor.extract.relevance import is_relevant
from chm_extractor.extract.sanitizer import sanitize
from chm_extractor.extract.signature import validate_signature
from chm_extractor.extract.types import (
    ClassRecord,
    ExtractionResult,
    ExtractionStats,
    Invalid,
    RawMatch,
    TextChunk,
    Valid,
)

logger = get_logger(__name__)


class ExtractionPipeline:
    """Coordinate signature checks, decoding, filtering, matching and sanitizing.

    A pipeline holds only its settings, so one instance may serve any number
    of buffers, including from several threads.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    def run(self, buffer: bytes, chunk_size: int | None = None) -> ExtractionResult:
        """Extract class records from ``buffer``.

        ``chunk_size`` overrides the configured window for this call only and
        must stay larger than ``settings.chunk_overlap``.
        """
        started = time.perf_counter()
        size = self.settings.chunk_size if chunk_size is None else chunk_size
        overlap = self.settings.chunk_overlap
        if size <= overlap:
            raise InvalidWindowError(size, overlap)

        validation = validate_signature(buffer)
        if isinstance(validation, Invalid):
            EXTRACTIONS.labels(outcome="invalid_format").inc()
            logger.info("Rejected %s-byte buffer: %s", len(buffer), validation.reason)
            raise InvalidFormatError(validation.reason)

        stats = ExtractionStats()
        stats.header_consistent = self._check_header(buffer, validation)

        if overlap:
            matches = self._match_windows(buffer, size, overlap, stats)
        else:
            matches = extract_matches(self._aggregate(buffer, size, stats))
        stats.matches = len(matches)
        records = _to_records(matches)
        stats.records = len(records)

        elapsed = time.perf_counter() - started
        EXTRACTION_DURATION.observe(elapsed)
        RECORDS_EXTRACTED.inc(len(records))
        EXTRACTIONS.labels(outcome="ok" if records else "empty").inc()
        if not records:
            logger.warning("Valid CHM buffer produced no class definitions", extra={"ctx_stats": stats.to_dict()})
        else:
            logger.info(
                "Extracted %s class records in %.3fs",
                len(records),
                elapsed,
                extra={"ctx_stats": stats.to_dict()},
            )
        return ExtractionResult(records=records, stats=stats, validation=validation)

    # Internal helpers -------------------------------------------------

    def _check_header(self, buffer: bytes, validation: Valid) -> bool:
        if isinstance(validate_signature(buffer, strict=True), Valid):
            return True
        if self.settings.strict_header:
            EXTRACTIONS.labels(outcome="header_inconsistent").inc()
            raise HeaderInconsistentError(validation.version, validation.header_size, len(buffer))
        logger.warning(
            "ITSF header out of bounds (version=%s, header_size=%s, size=%s); scanning whole buffer",
            validation.version,
            validation.header_size,
            len(buffer),
        )
        return False

    def _relevant_chunks(
        self, buffer: bytes, chunk_size: int, overlap: int, stats: ExtractionStats
    ) -> Iterator[TextChunk]:
        for chunk in iter_chunks(buffer, chunk_size=chunk_size, overlap=overlap):
            stats.chunks += 1
            stats.encodings[chunk.encoding] = stats.encodings.get(chunk.encoding, 0) + 1
            CHUNKS_DECODED.labels(encoding=chunk.encoding).inc()
            if not is_relevant(chunk.text, self.settings.min_alpha_ratio):
                continue
            logger.debug("Keeping chunk at offset %s (%s)", chunk.offset, chunk.encoding)
            stats.relevant_chunks += 1
            CHUNKS_RELEVANT.inc()
            yield chunk

    def _aggregate(self, buffer: bytes, chunk_size: int, stats: ExtractionStats) -> str:
        return "\n".join(chunk.text for chunk in self._relevant_chunks(buffer, chunk_size, 0, stats))

    def _match_windows(
        self, buffer: bytes, chunk_size: int, overlap: int, stats: ExtractionStats
    ) -> list[RawMatch]:
        """Match each overlapping window on its own, keyed by header byte offset.

        A header seen by several windows keeps the capture of the last one,
        which reads furthest past it. Windows after the first may open
        mid-line, so their first line is never treated as a header.
        """
        by_offset: dict[int, RawMatch] = {}
        for chunk in self._relevant_chunks(buffer, chunk_size, overlap, stats):
            line_starts = _line_starts(chunk.text)
            for match in extract_matches(chunk.text):
                if chunk.offset > 0 and match.line_no == 0:
                    continue
                prefix = chunk.text[: line_starts[match.line_no]]
                by_offset[chunk.offset + len(prefix.encode(chunk.encoding))] = match
        return [by_offset[offset] for offset in sorted(by_offset)]


def _line_starts(text: str) -> list[int]:
    # same line breaks as str.splitlines() in extract_matches
    starts = [0]
    for line in text.splitlines(keepends=True):
        starts.append(starts[-1] + len(line))
    return starts


def _to_records(matches: Iterable[RawMatch]) -> list[ClassRecord]:
    records: list[ClassRecord] = []
    for match in matches:
        record = sanitize(match.name, match.raw_description)
        if record is not None:
            records.append(record)
    return records


def extract_from_text(text: str | None) -> list[ClassRecord]:
    """Run the matcher and sanitizer over already-decoded text."""
    return _to_records(extract_matches(text))


def extract_class_records(
    buffer: bytes,
    chunk_size: int | None = None,
    settings: Settings | None = None,
) -> list[ClassRecord]:
    """Extract class records from an in-memory CHM buffer.

    Raises ``InvalidFormatError`` when the buffer lacks the ITSF signature.
    An empty list means the file is a CHM with no recognisable classes.
    """
    return ExtractionPipeline(settings).run(buffer, chunk_size=chunk_size).records


__all__ = ["ExtractionPipeline", "extract_from_text", "extract_class_records"]
