"""Test fixtures for the CHM extractor."""

from __future__ import annotations

import logging
import struct
import sys
from pathlib import Path
from typing import Callable

import pytest

BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))


@pytest.fixture(autouse=True)
def reset_state(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Reset cached settings, environment and logging between tests."""
    import os

    for key in list(os.environ):
        if key.startswith("CHMX_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("CHMX_CONFIG", str(tmp_path / "missing-config.yaml"))

    from chm_extractor.api import dependencies as deps
    from chm_extractor.core.config import get_settings

    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level

    get_settings.cache_clear()
    deps.get_app_settings.cache_clear()
    deps._PIPELINE = None
    yield
    get_settings.cache_clear()
    deps.get_app_settings.cache_clear()
    deps._PIPELINE = None
    root.handlers = saved_handlers
    root.setLevel(saved_level)


@pytest.fixture
def make_chm() -> Callable[..., bytes]:
    """Build a CHM-like buffer: ITSF magic, optional 96-byte header, then a body."""

    def _build(body: str | bytes = b"", header: bool = False, version: int = 3, header_size: int = 96) -> bytes:
        payload = body.encode("utf-8") if isinstance(body, str) else body
        if not header:
            return b"ITSF" + payload
        head = b"ITSF" + struct.pack("<II", version, header_size)
        return head.ljust(96, b"\x00") + payload

    return _build


@pytest.fixture(scope="session")
def api_reference_text() -> str:
    return (
        "Widget Toolkit Reference\n"
        "\n"
        "Class Window  Top-level frame that hosts other widgets.\n"
        "It owns the event loop for its children.\n"
        "\n"
        "class Button: Clickable control with a text label\n"
        "<h2>Class Dialog modal window</h2>\n"
        "CLASS Timer  Fires events at a fixed interval\n"
        "Class Definitions are listed below\n"
        "Class Slider(Widget) numeric range picker\n"
    )
