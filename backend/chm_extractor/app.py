"""FastAPI application setup for the CHM extractor."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from chm_extractor.api.routes_admin import router as admin_router
from chm_extractor.api.routes_extract import router as extract_router
from chm_extractor.core.logging import configure_logging

configure_logging()

app = FastAPI(
    title="CHM Extractor",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://127.0.0.1:5173",
        "http://localhost:5173",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(extract_router, prefix="", tags=["extract"])
app.include_router(admin_router, prefix="", tags=["admin"])


@app.get("/health", tags=["admin"])
def health() -> dict[str, bool]:
    """Simple liveness check."""
    return {"ok": True}
