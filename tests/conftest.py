from __future__ import annotations

from typing import Any

import pytest
import requests

from weather_bot.agent.archetypes.actions import ActionRegistry
from weather_bot.agent.archetypes.run_manager import Engine
from weather_bot.agent.core.models import NluResult
from weather_bot.agent.governance.session_store import InMemorySessionStore
from weather_bot.agent.nlu.rules import RuleBasedNlu
from weather_bot.errors import WeatherApiError


PARIS_NOW = {
    "location": {"name": "Paris"},
    "current": {"temp_c": 20, "condition": {"text": "Clear"}},
}


class FakeWeather:
    def __init__(self, payload: dict[str, Any] | None = None, error: Exception | None = None):
        self.payload = payload if payload is not None else PARIS_NOW
        self.error = error
        self.calls: list[tuple[str, bool]] = []

    def fetch_forecast(self, location: str, wants_multi_day: bool) -> dict[str, Any]:
        self.calls.append((location, wants_multi_day))
        if self.error is not None:
            raise self.error
        return self.payload


class FakeNlu:
    def __init__(self, result: NluResult | None = None, error: Exception | None = None):
        self.result = result
        self.error = error
        self.texts: list[str] = []

    def message(self, text: str) -> NluResult:
        self.texts.append(text)
        if self.error is not None:
            raise self.error
        return self.result or NluResult(text=text)


class FakeResponse:
    def __init__(self, payload: Any = None, status_code: int = 200, body_error: Exception | None = None):
        self.payload = payload
        self.status_code = status_code
        self.body_error = body_error

    def json(self) -> Any:
        if self.body_error is not None:
            raise self.body_error
        return self.payload

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


class FakeSession:
    def __init__(self, response: FakeResponse | None = None, error: Exception | None = None):
        self.response = response or FakeResponse({})
        self.error = error
        self.calls: list[dict[str, Any]] = []

    def get(self, url, params=None, headers=None, timeout=None):
        self.calls.append({"url": url, "params": params, "headers": headers, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def weather() -> FakeWeather:
    return FakeWeather()


@pytest.fixture
def actions(weather: FakeWeather) -> ActionRegistry:
    return ActionRegistry(weather=weather)


@pytest.fixture
def engine(actions: ActionRegistry) -> Engine:
    return Engine(nlu=RuleBasedNlu(), actions=actions)


@pytest.fixture
def store() -> InMemorySessionStore:
    return InMemorySessionStore()


@pytest.fixture
def api_error() -> WeatherApiError:
    return WeatherApiError("connection refused")
