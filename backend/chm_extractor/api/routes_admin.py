"""Administrative routes for the CHM extractor."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from chm_extractor.api.dependencies import get_app_settings
from chm_extractor.core.config import Settings
from chm_extractor.core.metrics import metrics_response

router = APIRouter()


@router.get("/metrics", summary="Prometheus metrics")
async def metrics() -> Response:
    return metrics_response()


@router.get("/settings", summary="Effective extraction settings")
async def effective_settings(settings: Settings = Depends(get_app_settings)) -> dict[str, object]:
    return settings.model_dump()
