from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import requests

from weather_bot.agent.core.models import Entities, NluResult
from weather_bot.config import DEFAULT_WIT_API_URL, DEFAULT_WIT_API_VERSION
from weather_bot.errors import NluError


logger = logging.getLogger(__name__)


def _entity_name(key: str) -> str:
    # "wit$location:location" -> "location", "datetime" -> "datetime"
    if ":" in key:
        return key.rsplit(":", 1)[1]
    return key.split("$", 1)[-1]


def _candidate_value(candidate: dict[str, Any]) -> Any:
    if candidate.get("value") is not None:
        return candidate["value"]

    # Interval datetimes carry {"from": {"value": ...}, "to": {...}}.
    start = candidate.get("from")
    if isinstance(start, dict) and start.get("value"):
        return start["value"]

    resolved = (candidate.get("resolved") or {}).get("values") or []
    if resolved and isinstance(resolved[0], dict) and resolved[0].get("name"):
        return resolved[0]["name"]

    return candidate.get("body")


def normalize_entities(raw: dict[str, Any] | None) -> Entities:
    entities: Entities = {}
    for key, candidates in (raw or {}).items():
        if not isinstance(candidates, list):
            continue
        normalized = []
        for candidate in candidates:
            if isinstance(candidate, dict):
                normalized.append({**candidate, "value": _candidate_value(candidate)})
            else:
                normalized.append(candidate)
        entities.setdefault(_entity_name(key), []).extend(normalized)
    return entities


@dataclass
class WitClient:
    """Calls the Wit.ai ``/message`` endpoint to resolve intent and entities."""

    access_token: str
    base_url: str = DEFAULT_WIT_API_URL
    api_version: str = DEFAULT_WIT_API_VERSION
    timeout: float | None = 10.0
    session: requests.Session = field(default_factory=requests.Session)

    def message(self, text: str) -> NluResult:
        headers = {
            "Authorization": f"Bearer {self.access_token}",
            "Accept": "application/json",
        }
        params = {"q": text, "v": self.api_version}

        try:
            response = self.session.get(
                f"{self.base_url}/message", params=params, headers=headers, timeout=self.timeout
            )
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as exc:
            raise NluError(f"Wit.ai call failed: {exc}") from exc

        intents = data.get("intents") or []
        top = max(intents, key=lambda i: i.get("confidence", 0.0), default=None)
        result = NluResult(
            text=data.get("text", text),
            intent=top.get("name") if top else None,
            confidence=float(top.get("confidence", 0.0)) if top else 0.0,
            entities=normalize_entities(data.get("entities")),
        )
        logger.info(
            "Wit resolved intent=%s confidence=%.2f entities=%s",
            result.intent,
            result.confidence,
            sorted(result.entities),
        )
        return result
