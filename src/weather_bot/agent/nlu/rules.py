"""Keyword/regex intent and entity extraction for offline and development use."""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date, timedelta

from weather_bot.agent.core.models import Entities, NluResult


_WEATHER_WORDS = re.compile(
    r"\b(weather|forecast|temperature|temp|rain|raining|sunny|snow|hot|cold)\b", re.IGNORECASE
)
_RESET_WORDS = re.compile(r"\b(reset|start over|forget|never ?mind)\b", re.IGNORECASE)
_ISO_DATE = re.compile(r"\b(\d{4}-\d{2}-\d{2})\b")
_RELATIVE_DAYS = {"today": 0, "tonight": 0, "tomorrow": 1}
_RELATIVE_DATE = re.compile(r"\b(" + "|".join(_RELATIVE_DAYS) + r")\b", re.IGNORECASE)
_LOCATION_LEAD = re.compile(r"\b(?:in|at|for)\s+", re.IGNORECASE)
_CLAUSE_END = re.compile(r"[?!,;]|\.(?=\s|$)")
_PLACE_WORD = re.compile(r"[A-Za-z][A-Za-z.'-]*")
# Words that end a place name: times, fillers and the next preposition.
_STOP_WORDS = {
    "on", "in", "at", "for", "and", "or", "then", "like", "please",
    "today", "tonight", "tomorrow", "now", "right", "currently", "later", "soon",
    "this", "next", "weekend", "morning", "afternoon", "evening",
}
# A lead word followed by one of these is not introducing a place.
_NOT_PLACES = {"me", "us", "you", "him", "her", "them", "it", "today", "tonight", "tomorrow", "now"}


@dataclass
class RuleBasedNlu:
    """Cheap stand-in for the hosted NLU engine.

    Intents are picked by keyword; ``location`` is the phrase after in/at/for,
    ``datetime`` an ISO date or today/tomorrow.
    """

    today: Callable[[], date] = field(default=date.today)

    def message(self, text: str) -> NluResult:
        text = (text or "").strip()
        entities: Entities = {}

        location = self._extract_location(text)
        if location:
            entities["location"] = [{"value": location, "confidence": 1.0}]

        when = self._extract_date(text)
        if when:
            entities["datetime"] = [{"value": when, "confidence": 1.0}]

        if _RESET_WORDS.search(text):
            intent: str | None = "resetContext"
        elif _WEATHER_WORDS.search(text) or (location and when):
            intent = "getForecast"
        else:
            intent = None

        return NluResult(text=text, intent=intent, confidence=1.0 if intent else 0.0, entities=entities)

    @staticmethod
    def _extract_location(text: str) -> str | None:
        for lead in _LOCATION_LEAD.finditer(text):
            rest = _CLAUSE_END.split(text[lead.end():], maxsplit=1)[0]
            words = rest.split()
            if not words or words[0].lower() in _NOT_PLACES:
                continue

            place: list[str] = []
            for word in words:
                if word.lower() in _STOP_WORDS or not _PLACE_WORD.fullmatch(word):
                    break
                place.append(word)

            candidate = " ".join(place).strip(" .'-")
            if candidate:
                return candidate
        return None

    def _extract_date(self, text: str) -> str | None:
        iso = _ISO_DATE.search(text)
        if iso:
            return iso.group(1)
        rel = _RELATIVE_DATE.search(text)
        if rel:
            return (self.today() + timedelta(days=_RELATIVE_DAYS[rel.group(1).lower()])).isoformat()
        return None
