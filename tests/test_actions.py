from __future__ import annotations

import pytest

from weather_bot.agent.archetypes.actions import DEFAULT_ACTION, GET_FORECAST, ActionRegistry
from weather_bot.agent.archetypes.forecast import NOT_AVAILABLE_FOR_DATE
from weather_bot.agent.archetypes.reporter import compose_reply
from weather_bot.agent.archetypes.transitions import API_ERROR_FORECAST
from weather_bot.agent.core.models import ActionRequest

from conftest import FakeWeather


def _request(context=None, entities=None) -> ActionRequest:
    return ActionRequest(session_id="s1", context=context or {}, entities=entities or {})


@pytest.mark.parametrize(
    "entities",
    [{}, {"datetime": [{"value": "2024-05-02"}]}, {"location": []}, {"location": [{"value": ""}]}],
)
def test_missing_location_flags_context_without_calling_api(actions, weather, entities):
    ctx = actions.get_forecast(_request({"forecast": "stale"}, entities))

    assert ctx["missingLocation"] is True
    assert "forecast" not in ctx
    assert weather.calls == []


def test_current_forecast(actions, weather):
    ctx = actions.get_forecast(_request({"missingLocation": True}, {"location": [{"value": "Paris"}]}))

    assert ctx == {"forecast": "20°C, Clear in Paris", "location": "Paris"}
    assert weather.calls == [("Paris", False)]


def test_dated_forecast_requests_extended_window():
    weather = FakeWeather(
        {
            "location": {"name": "Paris"},
            "forecast": {
                "forecastday": [
                    {"date": "2024-05-01", "day": {"avgtemp_c": 15, "condition": {"text": "Cloudy"}}},
                    {"date": "2024-05-02", "day": {"avgtemp_c": 18, "condition": {"text": "Sunny"}}},
                ]
            },
        }
    )
    actions = ActionRegistry(weather=weather)
    entities = {
        "location": [{"value": "paris"}],
        "datetime": [{"value": "2024-05-02T00:00:00.000+02:00"}],
    }

    ctx = actions.get_forecast(_request({}, entities))

    assert weather.calls == [("paris", True)]
    assert ctx["forecast"] == "18°C, Sunny in Paris"
    # the provider's resolved name wins over the raw entity text
    assert ctx["location"] == "Paris"


def test_provider_error_becomes_forecast_text():
    weather = FakeWeather({"error": {"code": 1006, "message": "No matching location found."}})
    ctx = ActionRegistry(weather=weather).get_forecast(_request({}, {"location": ["Atlantis"]}))

    assert ctx["forecast"] == "No matching location found."
    assert ctx["location"] == ""


def test_transport_failure_keeps_requested_location(api_error):
    weather = FakeWeather(error=api_error)
    ctx = ActionRegistry(weather=weather).get_forecast(
        _request({"missingLocation": True}, {"location": [{"value": "Paris"}]})
    )

    assert ctx == {"forecast": API_ERROR_FORECAST, "location": "Paris"}


def test_unexpected_errors_propagate():
    weather = FakeWeather(error=RuntimeError("boom"))
    with pytest.raises(RuntimeError):
        ActionRegistry(weather=weather).get_forecast(_request({}, {"location": ["Paris"]}))


def test_reset_context_leaves_other_keys(actions):
    ctx = actions.reset_context(_request({"forecast": "x", "location": "y", "user": "ana"}))
    assert ctx == {"user": "ana"}


def test_forecast_then_reset_round_trip(actions):
    before = {"user": "ana"}
    after_forecast = actions.get_forecast(_request(before, {"location": ["Paris"]}))
    after_reset = actions.reset_context(_request(after_forecast))

    assert after_reset == before


def test_default_handler_keeps_context(actions):
    ctx = {"forecast": "20°C, Clear in Paris", "location": "Paris"}
    assert actions.handler_for(DEFAULT_ACTION)(_request(ctx)) == ctx
    assert actions.handler_for("somethingElse")(_request(ctx)) == ctx


def test_provider_error_without_message_still_answers():
    weather = FakeWeather({"error": {"code": 1006}})
    request = _request({}, {"location": ["Atlantis"]})
    ctx = ActionRegistry(weather=weather).get_forecast(request)

    assert ctx == {"forecast": NOT_AVAILABLE_FOR_DATE, "location": ""}
    assert compose_reply(GET_FORECAST, ctx) == NOT_AVAILABLE_FOR_DATE
