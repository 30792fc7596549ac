"""Shared FastAPI dependencies."""

from __future__ import annotations

from functools import lru_cache

from chm_extractor.core.config import Settings, get_settings
from chm_extractor.extract.pipeline import ExtractionPipeline

_PIPELINE: ExtractionPipeline | None = None


@lru_cache(maxsize=1)
def get_app_settings() -> Settings:
    return get_settings()


def get_pipeline() -> ExtractionPipeline:
    global _PIPELINE
    if _PIPELINE is None:
        _PIPELINE = ExtractionPipeline(settings=get_app_settings())
    return _PIPELINE


__all__ = ["get_app_settings", "get_pipeline"]
