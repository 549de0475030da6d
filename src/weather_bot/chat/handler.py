"""Chat handler: load a session's context, run one turn, store the result."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field

from weather_bot.agent.archetypes.run_manager import Engine
from weather_bot.agent.core.models import TurnResult
from weather_bot.agent.governance.session_store import SessionStore


@dataclass
class TurnHandler:
    """Drives turns for many sessions over a shared store.

    Turns for the same session id run one at a time, so a slow forecast lookup
    cannot be overwritten by a concurrent turn's stale context. Nothing is
    written back if the turn raises.
    """

    store: SessionStore
    engine: Engine
    _locks: dict[str, threading.Lock] = field(default_factory=dict, init=False, repr=False)
    _locks_guard: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def _lock_for(self, session_id: str) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(session_id)
            if lock is None:
                lock = self._locks[session_id] = threading.Lock()
            return lock

    def handle(self, session_id: str, text: str) -> TurnResult:
        with self._lock_for(session_id):
            context = self.store.get(session_id)
            result = self.engine.run_actions(session_id, text or "", context)
            self.store.set(session_id, result.context)
        return result
