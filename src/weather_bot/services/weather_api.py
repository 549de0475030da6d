from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import requests

from weather_bot.config import DEFAULT_WEATHER_API_URL
from weather_bot.errors import WeatherApiError


logger = logging.getLogger(__name__)

CURRENT_ONLY_DAYS = 0
EXTENDED_DAYS = 10


@dataclass
class WeatherClient:
    """Thin client for a weatherapi.com style ``forecast.json`` endpoint.

    The provider reports its own failures inside the JSON body (``error.message``),
    so the body is returned whatever the HTTP status. Only transport failures and
    unreadable bodies raise ``WeatherApiError``.
    """

    api_key: str
    base_url: str = DEFAULT_WEATHER_API_URL
    timeout: float | None = 10.0
    session: requests.Session = field(default_factory=requests.Session)

    def fetch_forecast(self, location: str, wants_multi_day: bool) -> dict[str, Any]:
        params = {
            "key": self.api_key,
            "q": location,
            "days": EXTENDED_DAYS if wants_multi_day else CURRENT_ONLY_DAYS,
        }
        logger.info("Weather lookup: q=%s days=%s", location, params["days"])

        try:
            response = self.session.get(self.base_url, params=params, timeout=self.timeout)
            data = response.json()
        except (requests.RequestException, ValueError) as exc:
            raise WeatherApiError(f"Weather API call failed: {exc}") from exc

        if not isinstance(data, dict):
            raise WeatherApiError(f"Weather API returned unexpected payload: {type(data).__name__}")

        logger.debug("Weather response: status=%s error=%s", response.status_code, bool(data.get("error")))
        return data
