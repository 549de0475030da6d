from __future__ import annotations


class WeatherBotError(Exception):
    """Base class for errors raised by the weather bot."""


class ConfigurationError(WeatherBotError):
    pass


class NluError(WeatherBotError):
    """The NLU engine could not be reached or answered with an error."""


class WeatherApiError(WeatherBotError):
    """The weather provider could not be reached or returned an unreadable body."""
