from __future__ import annotations

from typing import Protocol

from weather_bot.agent.core.models import NluResult


class NluEngine(Protocol):
    def message(self, text: str) -> NluResult: ...
