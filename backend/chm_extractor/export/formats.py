"""JSON and CSV renderings of extracted records."""

from __future__ import annotations

from typing import Iterable

import orjson

from chm_extractor.extract.types import ClassRecord

CSV_HEADER = "Type,Name,Description"


def records_to_json(records: Iterable[ClassRecord]) -> str:
    """Array of ``{type, name, description}`` objects, indented by two spaces."""
    payload = [record.to_dict() for record in records]
    return orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode("utf-8")


def records_to_csv(records: Iterable[ClassRecord]) -> str:
    """``Type,Name,Description`` rows with quoted name and description."""
    rows = [CSV_HEADER]
    for record in records:
        rows.append(",".join((record.type, _quote(record.name), _quote(record.description))))
    return "\n".join(rows)


def _quote(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'


__all__ = ["CSV_HEADER", "records_to_json", "records_to_csv"]
