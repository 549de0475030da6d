from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Union


Context = dict[str, Any]
Entities = dict[str, Any]


@dataclass(frozen=True)
class ScalarMatch:
    """An entity candidate given as a bare value (e.g. ``"Paris"``)."""

    value: Any


@dataclass(frozen=True)
class LabeledMatch:
    """An entity candidate given as an object carrying a ``value`` field."""

    value: Any
    raw: dict[str, Any] = field(default_factory=dict)


EntityMatch = Union[ScalarMatch, LabeledMatch]


@dataclass(frozen=True)
class NluResult:
    text: str
    intent: str | None = None
    confidence: float = 0.0
    entities: Entities = field(default_factory=dict)


@dataclass(frozen=True)
class ActionRequest:
    session_id: str
    context: Context
    text: str = ""
    entities: Entities = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "sessionId": self.session_id,
            "context": copy.deepcopy(self.context),
            "text": self.text,
            "entities": copy.deepcopy(self.entities),
        }


@dataclass(frozen=True)
class ActionResponse:
    text: str

    def to_dict(self) -> dict[str, Any]:
        return {"text": self.text}


@dataclass(frozen=True)
class ActionInvocation:
    name: str
    args: list[dict[str, Any]]

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "args": self.args}


@dataclass
class TurnResult:
    context: Context
    actions: list[ActionInvocation]
    reply: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "context": self.context,
            "actions": [a.to_dict() for a in self.actions],
            "reply": self.reply,
        }
