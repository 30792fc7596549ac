"""Tests for ITSF signature validation."""

import struct

from chm_extractor.extract.signature import read_header_fields, validate_signature
from chm_extractor.extract.types import Invalid, Valid


def _header(version: int, header_size: int, total: int = 128) -> bytes:
    return (b"ITSF" + struct.pack("<II", version, header_size)).ljust(total, b"\x00")


def test_minimal_check_accepts_bare_magic() -> None:
    assert validate_signature(b"ITSF") == Valid(version=0, header_size=0)


def test_minimal_check_reads_header_fields_when_present() -> None:
    assert validate_signature(_header(3, 96)) == Valid(version=3, header_size=96)


def test_strict_check_accepts_well_formed_header() -> None:
    result = validate_signature(_header(3, 96), strict=True)
    assert isinstance(result, Valid)
    assert result.version == 3
    assert result.header_size == 96


def test_bad_signature_is_invalid() -> None:
    buffer = b"XYZA" + bytes(124)
    assert validate_signature(buffer) == Invalid(reason="bad_signature")
    assert validate_signature(buffer, strict=True) == Invalid(reason="bad_signature")


def test_short_buffers_fail_closed() -> None:
    assert validate_signature(b"") == Invalid(reason="too_small")
    assert validate_signature(b"ITS") == Invalid(reason="too_small")
    assert validate_signature(_header(3, 96, total=50), strict=True) == Invalid(reason="too_small")


def test_strict_check_rejects_out_of_bounds_header_size() -> None:
    assert validate_signature(_header(3, 50), strict=True) == Invalid(reason="header_inconsistent")
    assert validate_signature(_header(3, 4096), strict=True) == Invalid(reason="header_inconsistent")
    # the minimal check does not look at the size field
    assert isinstance(validate_signature(_header(3, 50)), Valid)


def test_validation_does_not_mutate_buffer() -> None:
    buffer = bytearray(_header(3, 96))
    snapshot = bytes(buffer)
    validate_signature(buffer, strict=True)
    assert bytes(buffer) == snapshot


def test_read_header_fields_short_buffer() -> None:
    assert read_header_fields(b"ITSF\x03\x00") == (0, 0)
    assert read_header_fields(_header(7, 120)) == (7, 120)
