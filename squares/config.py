"""
Runtime settings read from the environment, and one-time logging setup.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_PRICE_PER_SQUARE = 10.0
DEFAULT_CORS_ORIGINS = "http://localhost:5173,http://127.0.0.1:5173"


@dataclass(frozen=True)
class Settings:
    log_level: str
    price_per_square: float
    cors_origins: tuple[str, ...]


def _float_env(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Settings are read once per process; call get_settings.cache_clear() to re-read."""
    origins = os.environ.get("SQUARES_CORS_ORIGINS", DEFAULT_CORS_ORIGINS)
    return Settings(
        log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        price_per_square=_float_env("SQUARES_PRICE_PER_SQUARE", DEFAULT_PRICE_PER_SQUARE),
        cors_origins=tuple(o.strip() for o in origins.split(",") if o.strip()),
    )


def configure_logging(level: str | None = None) -> None:
    """Configure the root logger. LOG_LEVEL wins when no level is given; unknown names fall back to INFO."""
    name = (level or get_settings().log_level).upper()
    numeric_level = getattr(logging, name, logging.INFO)
    logging.basicConfig(level=numeric_level, format=LOG_FORMAT)
