from __future__ import annotations

from weather_bot.agent.archetypes.actions import GET_FORECAST, RESET_CONTEXT
from weather_bot.agent.core.models import Context


ASK_LOCATION = "Which city would you like the forecast for?"
RESET_DONE = "Okay, let's start over. Ask me about the weather anywhere."
NOT_UNDERSTOOD = "Sorry, I didn't get that. Try something like 'weather in Paris tomorrow'."


def compose_reply(action_name: str, context: Context) -> str:
    """Formats the text handed to ``send`` at the end of a turn."""

    if action_name == GET_FORECAST:
        if context.get("missingLocation"):
            return ASK_LOCATION
        forecast = context.get("forecast") or ""
        location = context.get("location")
        if forecast and location and location not in forecast:
            # Provider error messages and the fallback lines carry no place name.
            return f"{location}: {forecast}"
        return forecast or ASK_LOCATION

    if action_name == RESET_CONTEXT:
        return RESET_DONE

    return NOT_UNDERSTOOD
