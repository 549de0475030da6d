from __future__ import annotations

from collections.abc import Mapping
from typing import Any


NOT_AVAILABLE_FOR_DATE = "not available for given date."


def _format_temp(value: Any) -> str:
    # Provider sends 20.0; show it as 20.
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _describe(temp: Any, condition: Any, location: str) -> str:
    if isinstance(condition, Mapping):
        text = condition.get("text", "")
    else:
        text = condition or ""
    return f"{_format_temp(temp)}°C, {text} in {location}"


def location_for(api_res: Mapping[str, Any]) -> str:
    """Resolved location name, or an empty string if the provider reported an error."""

    if api_res.get("error"):
        return ""
    return str(_mapping(api_res.get("location")).get("name", ""))


def forecast_for(api_res: Mapping[str, Any], date: str | None) -> str:
    """Pick the forecast line for ``date`` (YYYY-MM-DD), or the current one if no date."""

    error = api_res.get("error")
    if error:
        message = error.get("message") if isinstance(error, Mapping) else error
        return str(message or NOT_AVAILABLE_FOR_DATE)

    forecast = ""
    if date:
        days = _mapping(api_res.get("forecast")).get("forecastday") or []
        for entry in days:
            if isinstance(entry, Mapping) and entry.get("date") == date:
                day = _mapping(entry.get("day"))
                forecast = _describe(day.get("avgtemp_c"), day.get("condition"), location_for(api_res))
                break
    else:
        current = _mapping(api_res.get("current"))
        if current:
            forecast = _describe(current.get("temp_c"), current.get("condition"), location_for(api_res))

    return forecast or NOT_AVAILABLE_FOR_DATE
