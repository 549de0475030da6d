from __future__ import annotations

from weather_bot.agent.archetypes.actions import ActionRegistry
from weather_bot.agent.archetypes.run_manager import Engine
from weather_bot.agent.nlu.base import NluEngine
from weather_bot.agent.nlu.rules import RuleBasedNlu
from weather_bot.agent.nlu.wit_client import WitClient
from weather_bot.config import Settings, get_settings
from weather_bot.errors import ConfigurationError
from weather_bot.services.weather_api import WeatherClient


_DEFAULT_ENGINE: Engine | None = None


def build_nlu(settings: Settings) -> NluEngine:
    if settings.nlu_backend == "wit":
        if not settings.wit_token:
            raise ConfigurationError("NLU_BACKEND=wit requires WIT_TOKEN to be set")
        return WitClient(
            access_token=settings.wit_token,
            base_url=settings.wit_api_url,
            api_version=settings.wit_api_version,
        )
    if settings.nlu_backend == "rules":
        return RuleBasedNlu()
    raise ConfigurationError(f"unknown NLU_BACKEND: {settings.nlu_backend!r}")


def build_engine(settings: Settings) -> Engine:
    weather = WeatherClient(
        api_key=settings.weather_api_key,
        base_url=settings.weather_api_url,
        timeout=settings.weather_timeout,
    )
    return Engine(
        nlu=build_nlu(settings),
        actions=ActionRegistry(weather=weather),
        min_confidence=settings.nlu_min_confidence,
    )


def build_default_engine() -> Engine:
    """Build (and memoize) the engine used by the web app and console."""

    global _DEFAULT_ENGINE
    if _DEFAULT_ENGINE is not None:
        return _DEFAULT_ENGINE

    _DEFAULT_ENGINE = build_engine(get_settings())
    return _DEFAULT_ENGINE
