from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Protocol


class SessionStore(Protocol):
    def get(self, session_id: str) -> dict[str, Any]: ...

    def set(self, session_id: str, context: dict[str, Any]) -> None: ...

    def delete(self, session_id: str) -> None: ...


@dataclass
class InMemorySessionStore:
    """Keeps a dict of session_id -> context dict for the life of the process.

    No expiry and no size bound; contexts are lost on restart.
    """

    store: dict[str, dict[str, Any]] = field(default_factory=dict)

    def get(self, session_id: str) -> dict[str, Any]:
        return copy.deepcopy(self.store.get(session_id, {}))

    def set(self, session_id: str, context: dict[str, Any]) -> None:
        self.store[session_id] = copy.deepcopy(context)

    def delete(self, session_id: str) -> None:
        self.store.pop(session_id, None)

    def __len__(self) -> int:
        return len(self.store)
