"""Runtime settings.

Values come from ``LEXPARSE_*`` environment variables, optionally loaded from
a ``.env`` file. ``get_settings`` is the cached FastAPI dependency.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from lexparse.hierarchy.builder import AttachMode
from lexparse.hierarchy.titles import SplitMode

load_dotenv(override=False)

DEFAULT_CORS_ORIGINS = ["*"]


class Settings(BaseModel):
    """Runtime configuration for the parser, exporters and server."""

    environment: str = Field(default_factory=lambda: os.getenv("LEXPARSE_ENV", "dev"))
    title_split_mode: SplitMode = Field(
        default_factory=lambda: os.getenv("LEXPARSE_TITLE_SPLIT", SplitMode.SLASH.value)
    )
    attach_mode: AttachMode = Field(
        default_factory=lambda: os.getenv("LEXPARSE_ATTACH_MODE", AttachMode.SHALLOWEST.value)
    )
    uploads_dir: Path = Field(default_factory=lambda: Path(os.getenv("LEXPARSE_UPLOADS_DIR", "uploads")))
    output_dir: Path = Field(default_factory=lambda: Path(os.getenv("LEXPARSE_OUTPUT_DIR", "output")))
    max_upload_mb: int = Field(default_factory=lambda: int(os.getenv("LEXPARSE_MAX_UPLOAD_MB", "10")))
    database_path: Path = Field(
        default_factory=lambda: Path(os.getenv("LEXPARSE_DB_PATH", "data/lexparse.db"))
    )
    sql_dialect: str = Field(default_factory=lambda: os.getenv("LEXPARSE_SQL_DIALECT", "sqlite"))
    cors_origins: list[str] = Field(
        default_factory=lambda: os.getenv("LEXPARSE_CORS_ORIGINS", "*")
    )
    log_level: str = Field(default_factory=lambda: os.getenv("LEXPARSE_LOG_LEVEL", "INFO"))

    model_config = {
        "frozen": True,
        "validate_default": True,
    }

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: object) -> list[str]:
        if value is None:
            return list(DEFAULT_CORS_ORIGINS)
        if isinstance(value, str):
            if not value.strip():
                return list(DEFAULT_CORS_ORIGINS)
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return list(value)

    @field_validator("sql_dialect")
    @classmethod
    def _known_dialect(cls, value: str) -> str:
        from lexparse.exporters.sql import DIALECTS

        dialect = value.strip().lower()
        if dialect not in DIALECTS:
            raise ValueError(f"Unsupported SQL dialect {value!r}; expected one of {sorted(DIALECTS)}")
        return dialect

    @field_validator("max_upload_mb")
    @classmethod
    def _positive_limit(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("LEXPARSE_MAX_UPLOAD_MB must be positive")
        return value

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.strip().upper()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance for FastAPI dependency injection."""

    return Settings()


__all__ = ["Settings", "get_settings"]
