"""Application configuration settings."""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).resolve().parents[2]


class Settings(BaseSettings):
    """Settings read from ``SLIDING_*`` environment variables or ``.env``."""

    app_name: str = "Adaptive Sliding Puzzle"
    app_version: str = "1.0.0"

    # storage
    data_dir: Path = PROJECT_ROOT / "data"
    store_file: str = "puzzles.json"
    seed_per_size: int = Field(default=20, ge=0)

    # adaptive play
    default_skill: float = Field(default=1.0, ge=0.5, le=10.0)
    fallback_size: int = Field(default=4, ge=2)
    fallback_difficulty: int = Field(default=2, ge=1)

    # server
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:5173,http://localhost:3000"

    model_config = SettingsConfigDict(
        env_prefix="SLIDING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def store_path(self) -> Path:
        return self.data_dir / self.store_file

    def get_cors_origins(self) -> List[str]:
        """Parse CORS origins from a comma-separated string or a JSON list."""
        try:
            origins = json.loads(self.cors_origins)
            if isinstance(origins, list):
                return origins
        except json.JSONDecodeError:
            pass
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()
