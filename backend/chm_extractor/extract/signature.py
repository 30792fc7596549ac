"""ITSF signature and header checks."""

from __future__ import annotations

import struct

from chm_extractor.extract.types import Invalid, Valid, ValidationResult

ITSF_MAGIC = b"ITSF"
MIN_SIGNATURE_LENGTH = 4
MIN_HEADER_LENGTH = 96

_HEADER_FIELDS = struct.Struct("<II")


def validate_signature(buffer: bytes, strict: bool = False) -> ValidationResult:
    """Check that ``buffer`` starts with the ITSF magic.

    In strict mode the buffer must hold a full 96-byte header whose declared
    size lies between 96 bytes and the buffer length. Only the leading bytes
    are read.
    """
    size = len(buffer)
    minimum = MIN_HEADER_LENGTH if strict else MIN_SIGNATURE_LENGTH
    if size < minimum:
        return Invalid(reason="too_small")
    if bytes(buffer[:MIN_SIGNATURE_LENGTH]) != ITSF_MAGIC:
        return Invalid(reason="bad_signature")

    version, header_size = read_header_fields(buffer)
    if strict and not MIN_HEADER_LENGTH <= header_size <= size:
        return Invalid(reason="header_inconsistent")
    return Valid(version=version, header_size=header_size)


def read_header_fields(buffer: bytes) -> tuple[int, int]:
    """Return the little-endian (version, header_size) pair, zeros if absent."""
    if len(buffer) < MIN_SIGNATURE_LENGTH + _HEADER_FIELDS.size:
        return 0, 0
    version, header_size = _HEADER_FIELDS.unpack_from(buffer, MIN_SIGNATURE_LENGTH)
    return version, header_size


__all__ = ["ITSF_MAGIC", "MIN_HEADER_LENGTH", "validate_signature", "read_header_fields"]
