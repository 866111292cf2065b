from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StencilSettings(BaseSettings):
    """Process-wide rendering defaults, read from ``STENCIL_*`` variables."""

    model_config = SettingsConfigDict(env_prefix="STENCIL_", case_sensitive=False)

    debug: bool = True
    minify: bool = False
    extension: str = ""
    directory: Path | None = None
    max_depth: int = Field(default=32, ge=1)
    log_level: str = "INFO"


@lru_cache(maxsize=1)
def get_settings() -> StencilSettings:
    return StencilSettings()
