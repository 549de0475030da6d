from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv


load_dotenv()

DEFAULT_WIT_API_URL = "https://api.wit.ai"
DEFAULT_WIT_API_VERSION = "20240304"
DEFAULT_WEATHER_API_URL = "http://api.weatherapi.com/v1/forecast.json"


def _get_int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_log_level(name: str, default: str) -> str:
    raw = os.getenv(name, default).strip().upper()
    # getLevelName maps known names to their number and echoes unknown ones back.
    if isinstance(logging.getLevelName(raw), int):
        return raw
    return default


def _get_float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables.

    Keep all credentials and config centralized here.
    """

    wit_token: str
    wit_api_url: str
    wit_api_version: str
    nlu_backend: str
    nlu_min_confidence: float
    weather_api_key: str
    weather_api_url: str
    weather_timeout: float
    host: str
    port: int
    debug: bool
    log_level: str

    @classmethod
    def from_env(cls) -> "Settings":
        wit_token = os.getenv("WIT_TOKEN", "").strip()
        backend = os.getenv("NLU_BACKEND", "").strip().lower() or ("wit" if wit_token else "rules")
        return cls(
            wit_token=wit_token,
            wit_api_url=os.getenv("WIT_API_URL", DEFAULT_WIT_API_URL).rstrip("/"),
            wit_api_version=os.getenv("WIT_API_VERSION", DEFAULT_WIT_API_VERSION),
            nlu_backend=backend,
            nlu_min_confidence=_get_float_env("NLU_MIN_CONFIDENCE", 0.5),
            weather_api_key=os.getenv("WEATHER_API_KEY") or os.getenv("APPID", ""),
            weather_api_url=os.getenv("WEATHER_API_URL", DEFAULT_WEATHER_API_URL),
            weather_timeout=_get_float_env("WEATHER_TIMEOUT_SECONDS", 10.0),
            host=os.getenv("HOST", "127.0.0.1"),
            port=_get_int_env("PORT", 8081),
            debug=os.getenv("FLASK_DEBUG", "").strip() == "1",
            log_level=_get_log_level("LOG_LEVEL", "INFO"),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
