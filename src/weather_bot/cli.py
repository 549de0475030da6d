"""Interactive console: chat with the bot from a terminal."""

from __future__ import annotations

import json
import logging
import uuid

from weather_bot.agent.factory import build_default_engine
from weather_bot.agent.governance.session_store import InMemorySessionStore
from weather_bot.chat.handler import TurnHandler
from weather_bot.config import get_settings

logger = logging.getLogger(__name__)

EXIT_WORDS = {"exit", "quit"}


def run_console(handler: TurnHandler, session_id: str, read=input, write=print) -> None:
    write("Weather bot. Ask e.g. 'weather in Paris tomorrow'. Type 'exit' to quit.")
    while True:
        try:
            text = read("> ")
        except EOFError:
            break
        if text.strip().lower() in EXIT_WORDS:
            break
        if not text.strip():
            continue

        try:
            result = handler.handle(session_id, text)
        except Exception as e:
            logger.exception("[engine] error")
            write(f"error: {e}")
            continue

        write(result.reply)
        write(f"context: {json.dumps(result.context, ensure_ascii=False)}")


def main() -> None:
    settings = get_settings()
    logging.basicConfig(level=settings.log_level, format="[%(asctime)s] %(levelname)s - %(message)s")

    handler = TurnHandler(store=InMemorySessionStore(), engine=build_default_engine())
    run_console(handler, session_id=str(uuid.uuid4()))


if __name__ == "__main__":
    main()
