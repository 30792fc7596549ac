"""Pydantic DTOs exposed via API."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field


class ClassRecordModel(BaseModel):
    type: Literal["Class"] = "Class"
    name: str = Field(pattern=r"^[A-Z][A-Za-z0-9_]*$", min_length=2)
    description: str = Field(min_length=1, max_length=500)


class ValidationResponse(BaseModel):
    filename: str | None
    size_bytes: int
    valid: bool
    version: int | None = None
    header_size: int | None = None
    reason: str | None = None
    strict: bool = False


class ExtractionResponse(BaseModel):
    extraction_id: str
    filename: str | None
    sha256: str
    size_bytes: int
    version: int
    header_size: int
    header_consistent: bool
    record_count: int
    records: list[ClassRecordModel]
    stats: dict[str, Any]
    warning: str | None = None
    extracted_at: datetime


__all__ = [
    "ClassRecordModel",
    "ValidationResponse",
    "ExtractionResponse",
]
