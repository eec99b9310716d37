"""
Central configuration loaded from environment variables with sensible defaults.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[1] / "data"


@dataclass(frozen=True)
class DataConfig:
    data_dir: str = os.getenv("QUIZ_DATA_DIR", str(_DEFAULT_DATA_DIR))
    # When set, datasets and bounds are fetched over HTTP instead of from data_dir
    data_url: str = os.getenv("QUIZ_DATA_URL", "")
    bounds_file: str = os.getenv("QUIZ_BOUNDS_FILE", "map_bounds.json")
    request_timeout: float = float(os.getenv("QUIZ_REQUEST_TIMEOUT", "10"))


@dataclass(frozen=True)
class QuizConfig:
    default_mode: str = os.getenv("QUIZ_MODE", "world")
    # Drawing surface used when a caller does not report one
    surface_width: float = float(os.getenv("QUIZ_SURFACE_WIDTH", "1000"))
    surface_height: float = float(os.getenv("QUIZ_SURFACE_HEIGHT", "500"))


@dataclass(frozen=True)
class MarkerConfig:
    min_pop: int = int(os.getenv("MARKER_MIN_POP", "100"))
    max_pop: int = int(os.getenv("MARKER_MAX_POP", "20000000"))
    min_radius: float = float(os.getenv("MARKER_MIN_RADIUS", "3.0"))
    max_radius: float = float(os.getenv("MARKER_MAX_RADIUS", "12.0"))
    capital_fill: str = os.getenv("MARKER_CAPITAL_FILL", "#FFD700")
    default_fill: str = os.getenv("MARKER_DEFAULT_FILL", "#4285F4")


@dataclass(frozen=True)
class APIConfig:
    host: str = os.getenv("API_HOST", "0.0.0.0")
    port: int = int(os.getenv("API_PORT", "8000"))
    max_sessions: int = int(os.getenv("API_MAX_SESSIONS", "1000"))


@dataclass(frozen=True)
class Settings:
    data: DataConfig = field(default_factory=DataConfig)
    quiz: QuizConfig = field(default_factory=QuizConfig)
    marker: MarkerConfig = field(default_factory=MarkerConfig)
    api: APIConfig = field(default_factory=APIConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    env: str = os.getenv("APP_ENV", "development")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Singleton settings instance."""
    return Settings()
