"""Context transitions applied after a forecast lookup.

Each function returns a new dict and leaves its input untouched.
"""

from __future__ import annotations

from weather_bot.agent.core.models import Context


API_ERROR_FORECAST = "Weather data not available"


def with_forecast(context: Context, forecast: str) -> Context:
    ctx = dict(context)
    ctx["forecast"] = forecast
    return ctx


def with_location(context: Context, location: str) -> Context:
    ctx = dict(context)
    ctx["location"] = location
    ctx.pop("missingLocation", None)
    return ctx


def no_location(context: Context) -> Context:
    ctx = dict(context)
    ctx["missingLocation"] = True
    ctx.pop("forecast", None)
    return ctx


def with_api_error(context: Context) -> Context:
    return with_forecast(context, API_ERROR_FORECAST)


def reset(context: Context) -> Context:
    ctx = dict(context)
    ctx.pop("forecast", None)
    ctx.pop("location", None)
    return ctx
