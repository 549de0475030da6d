from __future__ import annotations

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol

from weather_bot.agent.archetypes import transitions
from weather_bot.agent.archetypes.forecast import forecast_for, location_for
from weather_bot.agent.core.entities import extract_entity_value
from weather_bot.agent.core.models import ActionRequest, ActionResponse, Context
from weather_bot.errors import WeatherApiError


logger = logging.getLogger(__name__)

SEND = "send"
GET_FORECAST = "getForecast"
RESET_CONTEXT = "resetContext"
DEFAULT_ACTION = "null"


class WeatherLookup(Protocol):
    def fetch_forecast(self, location: str, wants_multi_day: bool) -> dict[str, Any]: ...


ActionHandler = Callable[[ActionRequest], Context]


@dataclass
class ActionRegistry:
    """The named actions the engine calls once an intent is resolved."""

    weather: WeatherLookup

    def handlers(self) -> dict[str, ActionHandler]:
        return {
            GET_FORECAST: self.get_forecast,
            RESET_CONTEXT: self.reset_context,
            DEFAULT_ACTION: self.no_match,
        }

    def handler_for(self, name: str) -> ActionHandler:
        return self.handlers().get(name, self.no_match)

    def send(self, request: ActionRequest, response: ActionResponse) -> None:
        logger.info("sending... session=%s %s", request.session_id, json.dumps(response.to_dict()))

    def get_forecast(self, request: ActionRequest) -> Context:
        context = request.context
        location = extract_entity_value(request.entities, "location")
        if not location:
            return transitions.no_location(context)
        location = str(location)

        date_time = extract_entity_value(request.entities, "datetime")
        date = str(date_time)[:10] if date_time else None

        try:
            res = self.weather.fetch_forecast(location, date is not None)
        except WeatherApiError as exc:
            logger.warning("Forecast lookup failed for %s: %s", location, exc)
            return transitions.with_api_error(transitions.with_location(context, location))

        return transitions.with_location(
            transitions.with_forecast(context, forecast_for(res, date)),
            location_for(res),
        )

    def reset_context(self, request: ActionRequest) -> Context:
        return transitions.reset(request.context)

    def no_match(self, request: ActionRequest) -> Context:
        return dict(request.context)
