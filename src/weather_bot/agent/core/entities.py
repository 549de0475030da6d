"""Helpers for reading values out of the NLU engine's entity mapping.

Entities arrive as ``{name: [candidate, ...]}``. A candidate is either a bare
scalar or an object with a ``value`` field; only the first one is used.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from weather_bot.agent.core.models import EntityMatch, LabeledMatch, ScalarMatch


def parse_candidate(candidate: Any) -> EntityMatch | None:
    if not candidate:
        return None
    if isinstance(candidate, Mapping):
        return LabeledMatch(value=candidate.get("value"), raw=dict(candidate))
    return ScalarMatch(value=candidate)


def first_match(entities: Mapping[str, Any] | None, name: str) -> EntityMatch | None:
    if not entities:
        return None
    candidates = entities.get(name)
    if not isinstance(candidates, (list, tuple)) or not candidates:
        return None
    return parse_candidate(candidates[0])


def extract_entity_value(entities: Mapping[str, Any] | None, name: str) -> Any | None:
    match = first_match(entities, name)
    if match is None:
        return None

    if isinstance(match, ScalarMatch):
        value = match.value
    elif isinstance(match, LabeledMatch):
        value = match.value
        # Wit nests structured values one level deeper: {"value": {"value": ...}}
        if isinstance(value, Mapping):
            value = value.get("value")
    else:
        raise TypeError(f"unexpected entity match: {match!r}")

    return value or None
