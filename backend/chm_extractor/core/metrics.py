"""Prometheus metrics instrumentation."""

from __future__ import annotations

from fastapi import Response
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

REGISTRY = CollectorRegistry()

EXTRACTIONS = Counter(
    "chmx_extractions_total",
    "Extraction calls by outcome",
    labelnames=("outcome",),
    registry=REGISTRY,
)

RECORDS_EXTRACTED = Counter(
    "chmx_records_extracted_total",
    "Class records returned to callers",
    registry=REGISTRY,
)

CHUNKS_DECODED = Counter(
    "chmx_chunks_decoded_total",
    "Byte windows decoded, by winning encoding",
    labelnames=("encoding",),
    registry=REGISTRY,
)

CHUNKS_RELEVANT = Counter(
    "chmx_chunks_relevant_total",
    "Decoded windows kept by the relevance filter",
    registry=REGISTRY,
)

EXTRACTION_DURATION = Histogram(
    "chmx_extraction_duration_seconds",
    "Wall time of a full extraction",
    registry=REGISTRY,
)


def metrics_response() -> Response:
    """Return Prometheus metrics as an HTTP response."""
    payload = generate_latest(REGISTRY)
    return Response(content=payload, media_type=CONTENT_TYPE_LATEST)


__all__ = [
    "REGISTRY",
    "EXTRACTIONS",
    "RECORDS_EXTRACTED",
    "CHUNKS_DECODED",
    "CHUNKS_RELEVANT",
    "EXTRACTION_DURATION",
    "metrics_response",
]
