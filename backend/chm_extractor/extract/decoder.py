"""Fixed-window byte decoding with a per-window encoding ladder."""

from __future__ import annotations

from typing import Iterator

from chm_extractor.core.config import DEFAULT_CHUNK_SIZE
from chm_extractor.extract.types import TextChunk

# Tried in order with errors="strict"; the first codec that decodes a window wins.
STRICT_CODECS: tuple[str, ...] = ("utf-8", "utf-16-le", "cp1252")

# Terminal step: every byte maps to a code point, so this never fails.
FALLBACK_CODEC = "latin-1"

_CONTROL_TO_SPACE = {
    code: " "
    for code in (*range(0x00, 0x09), 0x0B, 0x0C, *range(0x0E, 0x20), *range(0x7F, 0xA0))
}


def decode_bytes(data: bytes) -> tuple[str, str]:
    """Decode ``data`` with the first codec that accepts it.

    Returns the text and the name of the codec used.
    """
    for codec in STRICT_CODECS:
        try:
            return data.decode(codec), codec
        except UnicodeDecodeError:
            continue
    return data.decode(FALLBACK_CODEC).translate(_CONTROL_TO_SPACE), FALLBACK_CODEC


def iter_chunks(
    buffer: bytes,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    overlap: int = 0,
) -> Iterator[TextChunk]:
    """Yield decoded windows of ``buffer`` in offset order.

    Windows start every ``chunk_size`` bytes. With ``overlap`` > 0 each window
    after the first also re-reads the preceding ``overlap`` bytes, so a header
    split across a boundary is seen whole at least once. With the default of 0
    a definition straddling two windows can be lost or truncated.
    """
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
    if not 0 <= overlap < chunk_size:
        raise ValueError("overlap must be in [0, chunk_size)")

    view = memoryview(buffer)
    for start in range(0, len(view), chunk_size):
        window_start = max(0, start - overlap)
        text, encoding = decode_bytes(bytes(view[window_start : start + chunk_size]))
        yield TextChunk(offset=window_start, text=text, encoding=encoding)


__all__ = ["STRICT_CODECS", "FALLBACK_CODEC", "decode_bytes", "iter_chunks"]
