"""Upload-and-extract API routes."""

from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Depends, File, HTTPException, Query, Response, UploadFile

from chm_extractor.api.dependencies import get_app_settings, get_pipeline
from chm_extractor.core.config import Settings
from chm_extractor.core.errors import HeaderInconsistentError, InvalidFormatError, InvalidWindowError
from chm_extractor.export.formats import records_to_csv
from chm_extractor.extract.pipeline import ExtractionPipeline
from chm_extractor.extract.signature import validate_signature
from chm_extractor.extract.types import Invalid
from chm_extractor.models.dto import ClassRecordModel, ExtractionResponse, ValidationResponse
from chm_extractor.utils.hashing import sha256_bytes
from chm_extractor.utils.ids import new_id
from chm_extractor.utils.time import utc_now

router = APIRouter()

CSV_FILENAME = "chm_api.csv"
NO_RECORDS_WARNING = "Valid CHM file, but no class definitions were found."

_INVALID_FORMAT_MESSAGES = {
    "bad_signature": "Invalid CHM format (missing ITSF signature).",
    "too_small": "Invalid CHM format (file too small).",
}


async def _read_upload(file: UploadFile, settings: Settings) -> bytes:
    filename = file.filename or ""
    if not filename.lower().endswith(".chm"):
        raise HTTPException(status_code=400, detail="Only .chm files are supported.")
    limit = settings.max_upload_bytes
    data = await file.read(limit + 1)
    if not data:
        raise HTTPException(status_code=400, detail="Uploaded file is empty.")
    if len(data) > limit:
        raise HTTPException(status_code=413, detail=f"File exceeds the {settings.max_upload_mb}MB limit.")
    return data


@router.post("/validate", response_model=ValidationResponse, summary="Check the ITSF signature")
async def validate_upload(
    file: UploadFile = File(...),
    strict: bool = Query(False, description="Also bound-check the 96-byte ITSF header"),
    settings: Settings = Depends(get_app_settings),
) -> ValidationResponse:
    data = await _read_upload(file, settings)
    result = validate_signature(data, strict=strict)
    if isinstance(result, Invalid):
        return ValidationResponse(
            filename=file.filename,
            size_bytes=len(data),
            valid=False,
            reason=result.reason,
            strict=strict,
        )
    return ValidationResponse(
        filename=file.filename,
        size_bytes=len(data),
        valid=True,
        version=result.version,
        header_size=result.header_size,
        strict=strict,
    )


@router.post("/extract", response_model=ExtractionResponse, summary="Extract class definitions")
async def extract_upload(
    file: UploadFile = File(...),
    output: Literal["json", "csv"] = Query("json", alias="format"),
    chunk_size: int | None = Query(None, gt=0, description="Override the decoding window size"),
    settings: Settings = Depends(get_app_settings),
    pipeline: ExtractionPipeline = Depends(get_pipeline),
):
    data = await _read_upload(file, settings)
    try:
        result = pipeline.run(data, chunk_size=chunk_size)
    except InvalidFormatError as exc:
        detail = _INVALID_FORMAT_MESSAGES.get(exc.reason, str(exc))
        raise HTTPException(status_code=422, detail=detail) from exc
    except HeaderInconsistentError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except InvalidWindowError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    if output == "csv":
        return Response(
            content=records_to_csv(result.records),
            media_type="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{CSV_FILENAME}"'},
        )

    return ExtractionResponse(
        extraction_id=new_id("ext"),
        filename=file.filename,
        sha256=sha256_bytes(data),
        size_bytes=len(data),
        version=result.validation.version,
        header_size=result.validation.header_size,
        header_consistent=result.stats.header_consistent,
        record_count=len(result.records),
        records=[ClassRecordModel(**record.to_dict()) for record in result.records],
        stats=result.stats.to_dict(),
        warning=None if result.records else NO_RECORDS_WARNING,
        extracted_at=utc_now(),
    )
