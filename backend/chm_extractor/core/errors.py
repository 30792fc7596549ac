"""Failures that cross the extractor boundary."""

from __future__ import annotations


class ExtractionError(Exception):
    """Base class for extraction failures reported to callers."""


class InvalidFormatError(ExtractionError, ValueError):
    """The buffer is not a CHM container (missing ITSF signature or too small)."""

    def __init__(self, reason: str, message: str | None = None) -> None:
        self.reason = reason
        super().__init__(message or f"Invalid CHM format ({reason})")


class InvalidWindowError(ExtractionError, ValueError):
    """The decoding window is not larger than the configured overlap."""

    def __init__(self, chunk_size: int, overlap: int) -> None:
        self.chunk_size = chunk_size
        self.overlap = overlap
        super().__init__(f"chunk_size ({chunk_size}) must be larger than chunk_overlap ({overlap})")


class HeaderInconsistentError(ExtractionError):
    """Signature matched but the ITSF header fields are out of bounds."""

    def __init__(self, version: int, header_size: int, buffer_size: int) -> None:
        self.version = version
        self.header_size = header_size
        self.buffer_size = buffer_size
        super().__init__(
            f"Inconsistent ITSF header (version={version}, header_size={header_size}, "
            f"buffer_size={buffer_size})"
        )


__all__ = ["ExtractionError", "InvalidFormatError", "InvalidWindowError", "HeaderInconsistentError"]
