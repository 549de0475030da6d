from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field

from weather_bot.agent.archetypes.actions import (
    DEFAULT_ACTION,
    GET_FORECAST,
    SEND,
    ActionRegistry,
)
from weather_bot.agent.archetypes.reporter import compose_reply
from weather_bot.agent.core.models import (
    ActionInvocation,
    ActionRequest,
    ActionResponse,
    Context,
    NluResult,
    TurnResult,
)
from weather_bot.agent.nlu.base import NluEngine


logger = logging.getLogger(__name__)

# Wit built-in intents that map onto our actions.
BUILTIN_INTENTS = {
    "wit$get_weather": GET_FORECAST,
}


@dataclass
class Engine:
    """Runs one conversational turn: resolve intent, dispatch the action, send the reply."""

    nlu: NluEngine
    actions: ActionRegistry
    min_confidence: float = 0.5
    intent_map: dict[str, str] = field(default_factory=lambda: dict(BUILTIN_INTENTS))

    def resolve_action(self, nlu_result: NluResult) -> str:
        intent = nlu_result.intent
        if not intent or nlu_result.confidence < self.min_confidence:
            return DEFAULT_ACTION
        name = self.intent_map.get(intent, intent)
        if name not in self.actions.handlers():
            return DEFAULT_ACTION
        return name

    def run_actions(self, session_id: str, text: str, context: Context) -> TurnResult:
        started = time.perf_counter()
        invocations: list[ActionInvocation] = []

        nlu_result = self.nlu.message(text)
        action_name = self.resolve_action(nlu_result)
        logger.info(
            "Turn: session=%s intent=%s confidence=%.2f action=%s",
            session_id,
            nlu_result.intent,
            nlu_result.confidence,
            action_name,
        )

        request = ActionRequest(
            session_id=session_id,
            context=dict(context),
            text=text,
            entities=nlu_result.entities,
        )
        invocations.append(ActionInvocation(name=action_name, args=[request.to_dict()]))
        new_context = self.actions.handler_for(action_name)(request)

        reply = compose_reply(action_name, new_context)
        send_request = ActionRequest(
            session_id=session_id,
            context=new_context,
            text=text,
            entities=nlu_result.entities,
        )
        response = ActionResponse(text=reply)
        invocations.append(ActionInvocation(name=SEND, args=[send_request.to_dict(), response.to_dict()]))
        self.actions.send(send_request, response)

        logger.debug(
            "Turn finished: session=%s actions=%s elapsed_ms=%.1f",
            session_id,
            [i.name for i in invocations],
            (time.perf_counter() - started) * 1000,
        )
        return TurnResult(context=new_context, actions=invocations, reply=reply)
