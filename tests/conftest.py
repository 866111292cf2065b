"""Shared fixtures for stencil tests."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable

import pytest

from stencil.core.settings import get_settings
from stencil.rendering.engine import RenderingEngine, get_default_engine
from stencil.template import Template


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Ignore STENCIL_* variables from the surrounding environment."""
    for key in list(os.environ):
        if key.upper().startswith("STENCIL_"):
            monkeypatch.delenv(key)
    get_settings.cache_clear()
    get_default_engine.cache_clear()
    yield
    get_settings.cache_clear()
    get_default_engine.cache_clear()


@pytest.fixture
def write_document(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write a document under tmp_path and return its path."""

    def _write(name: str, body: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(body, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def engine() -> RenderingEngine:
    return RenderingEngine(max_depth=32)


@pytest.fixture
def make_template(write_document, engine) -> Callable[..., Template]:
    """Build a Template over a freshly written document, debug off by default."""

    def _make(identifier: str, body: str, **options) -> Template:
        path = write_document(f"{identifier}.html", body)
        config = {"path": str(path), "debug": False}
        config.update(options)
        return Template(identifier, config, engine=engine)

    return _make
