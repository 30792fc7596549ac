"""Tests for windowed decoding."""

import pytest

from chm_extractor.extract.decoder import decode_bytes, iter_chunks


def test_utf8_wins_for_ascii() -> None:
    assert decode_bytes(b"Class Foo  bar") == ("Class Foo  bar", "utf-8")


def test_utf16le_when_utf8_fails() -> None:
    data = "Größe".encode("utf-16-le")
    assert decode_bytes(data) == ("Größe", "utf-16-le")


def test_cp1252_when_utf8_and_utf16_fail() -> None:
    # odd length rules out UTF-16, a lone 0xE9 rules out UTF-8
    assert decode_bytes(b"caf\xe9!") == ("café!", "cp1252")


def test_latin1_fallback_blanks_control_characters() -> None:
    text, encoding = decode_bytes(b"A\x81B\x01C")
    assert encoding == "latin-1"
    assert text == "A B C"


def test_latin1_fallback_keeps_line_structure() -> None:
    text, encoding = decode_bytes(b"a\tb\n\x81")
    assert encoding == "latin-1"
    assert text == "a\tb\n "


def test_iter_chunks_windows_in_offset_order() -> None:
    chunks = list(iter_chunks(b"abcdefghij", chunk_size=4))
    assert [chunk.offset for chunk in chunks] == [0, 4, 8]
    assert [chunk.text for chunk in chunks] == ["abcd", "efgh", "ij"]


def test_iter_chunks_with_overlap_rereads_tail() -> None:
    chunks = list(iter_chunks(b"abcdefghij", chunk_size=4, overlap=2))
    assert [chunk.offset for chunk in chunks] == [0, 2, 6]
    assert [chunk.text for chunk in chunks] == ["abcd", "cdefgh", "ghij"]


def test_fallback_is_chosen_per_window() -> None:
    chunks = list(iter_chunks(b"abcdx\x81y", chunk_size=4))
    assert [chunk.encoding for chunk in chunks] == ["utf-8", "latin-1"]


def test_iter_chunks_is_restartable() -> None:
    buffer = b"Class Foo  bar\nClass Baz  qux\n"
    assert list(iter_chunks(buffer, chunk_size=8)) == list(iter_chunks(buffer, chunk_size=8))


def test_iter_chunks_empty_buffer() -> None:
    assert list(iter_chunks(b"", chunk_size=8)) == []


@pytest.mark.parametrize(("chunk_size", "overlap"), [(0, 0), (-1, 0), (4, 4), (4, -1)])
def test_iter_chunks_rejects_bad_window(chunk_size: int, overlap: int) -> None:
    with pytest.raises(ValueError):
        list(iter_chunks(b"abc", chunk_size=chunk_size, overlap=overlap))
