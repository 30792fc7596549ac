"""CLI entrypoint for the CHM extractor."""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Optional

import typer

from chm_extractor.core.config import get_settings
from chm_extractor.core.errors import HeaderInconsistentError, InvalidFormatError, InvalidWindowError
from chm_extractor.core.logging import configure_logging
from chm_extractor.export.formats import records_to_csv, records_to_json
from chm_extractor.extract.pipeline import ExtractionPipeline
from chm_extractor.extract.signature import validate_signature
from chm_extractor.extract.types import Invalid

app = typer.Typer(name="chmx", help="Extract API class definitions from CHM help files")


class OutputFormat(str, Enum):
    json = "json"
    csv = "csv"


def _read_buffer(path: Path) -> bytes:
    resolved = path.expanduser()
    if not resolved.is_file():
        typer.echo(f"File not found: {path}", err=True)
        raise typer.Exit(code=2)
    return resolved.read_bytes()


@app.callback()
def main(
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level"),
    json_logs: bool = typer.Option(False, "--json-logs", help="Emit logs as JSON lines"),
) -> None:
    """Configure logging before any command runs."""
    configure_logging(level=log_level.upper(), use_json=json_logs)


@app.command()
def extract(
    path: Path = typer.Argument(..., help="CHM file to scan"),
    fmt: OutputFormat = typer.Option(OutputFormat.json, "--format", "-f", help="Output format"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write here instead of stdout"),
    chunk_size: Optional[int] = typer.Option(None, "--chunk-size", min=1, help="Decoding window in bytes"),
    strict: Optional[bool] = typer.Option(
        None, "--strict/--lenient", help="Fail on an out-of-bounds ITSF header (default from config)"
    ),
) -> None:
    """Extract class definitions to JSON or CSV."""
    settings = get_settings()
    if strict is not None:
        settings = settings.model_copy(update={"strict_header": strict})
    buffer = _read_buffer(path)
    try:
        result = ExtractionPipeline(settings).run(buffer, chunk_size=chunk_size)
    except InvalidFormatError as exc:
        typer.echo(f"Not a valid CHM file: {exc}", err=True)
        raise typer.Exit(code=1)
    except HeaderInconsistentError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1)
    except InvalidWindowError as exc:
        typer.echo(f"Invalid --chunk-size: {exc}", err=True)
        raise typer.Exit(code=2)

    rendered = records_to_csv(result.records) if fmt is OutputFormat.csv else records_to_json(result.records)
    if output is not None:
        output.expanduser().write_text(rendered + "\n", encoding="utf-8")
    else:
        typer.echo(rendered)

    if result.records:
        typer.echo(f"Extracted {len(result.records)} class records", err=True)
    else:
        typer.echo("Warning: valid CHM file, but no class definitions were found", err=True)


@app.command()
def validate(
    path: Path = typer.Argument(..., help="CHM file to check"),
    strict: bool = typer.Option(False, "--strict", help="Also bound-check the 96-byte ITSF header"),
) -> None:
    """Check the ITSF signature and report header fields."""
    buffer = _read_buffer(path)
    result = validate_signature(buffer, strict=strict)
    if isinstance(result, Invalid):
        typer.echo(json.dumps({"valid": False, "reason": result.reason}, indent=2))
        raise typer.Exit(code=1)
    typer.echo(
        json.dumps(
            {"valid": True, "version": result.version, "header_size": result.header_size},
            indent=2,
        )
    )


if __name__ == "__main__":
    app()
