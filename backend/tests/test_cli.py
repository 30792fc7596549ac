"""CLI tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Callable

import pytest
from typer.testing import CliRunner

from chm_extractor.cli.main import app

runner = CliRunner()


def _write(tmp_path: Path, data: bytes, name: str = "help.chm") -> Path:
    path = tmp_path / name
    path.write_bytes(data)
    return path


def test_extract_to_json_file(tmp_path: Path, make_chm: Callable[..., bytes], api_reference_text: str) -> None:
    source = _write(tmp_path, make_chm(api_reference_text))
    target = tmp_path / "out.json"
    result = runner.invoke(app, ["extract", str(source), "--output", str(target)])
    assert result.exit_code == 0
    records = json.loads(target.read_text(encoding="utf-8"))
    assert [record["name"] for record in records] == ["Window", "Button", "Dialog", "Timer", "Slider"]


def test_extract_to_csv_file(tmp_path: Path, make_chm: Callable[..., bytes]) -> None:
    source = _write(tmp_path, make_chm("\nClass Foo  bar baz\n"))
    target = tmp_path / "out.csv"
    result = runner.invoke(app, ["extract", str(source), "--format", "csv", "-o", str(target)])
    assert result.exit_code == 0
    assert target.read_text(encoding="utf-8") == 'Type,Name,Description\nClass,"Foo","bar baz"\n'


def test_extract_invalid_file_exits_nonzero(tmp_path: Path) -> None:
    source = _write(tmp_path, b"XYZA" + b"\x00" * 32)
    result = runner.invoke(app, ["extract", str(source)])
    assert result.exit_code == 1
    assert "Not a valid CHM file" in result.output


def test_extract_strict_flag_rejects_bad_header(
    tmp_path: Path, make_chm: Callable[..., bytes], api_reference_text: str
) -> None:
    source = _write(tmp_path, make_chm(api_reference_text, header=True, header_size=50))
    assert runner.invoke(app, ["extract", str(source), "--strict", "-o", str(tmp_path / "a.json")]).exit_code == 1
    assert runner.invoke(app, ["extract", str(source), "-o", str(tmp_path / "b.json")]).exit_code == 0


def test_extract_missing_file(tmp_path: Path) -> None:
    result = runner.invoke(app, ["extract", str(tmp_path / "nope.chm")])
    assert result.exit_code == 2


def test_validate_command(tmp_path: Path, make_chm: Callable[..., bytes]) -> None:
    good = _write(tmp_path, make_chm(b"", header=True), name="good.chm")
    result = runner.invoke(app, ["validate", str(good), "--strict"])
    assert result.exit_code == 0
    assert '"header_size": 96' in result.output

    bad = _write(tmp_path, b"XYZA", name="bad.chm")
    result = runner.invoke(app, ["validate", str(bad)])
    assert result.exit_code == 1
    assert "bad_signature" in result.output


def test_extract_chunk_size_within_overlap_is_usage_error(
    tmp_path: Path, make_chm: Callable[..., bytes], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("CHMX_CHUNK_OVERLAP", "1024")
    source = _write(tmp_path, make_chm("\nClass Foo  bar\n"))
    result = runner.invoke(app, ["extract", str(source), "--chunk-size", "512"])
    assert result.exit_code == 2
    assert "chunk_overlap" in result.output
