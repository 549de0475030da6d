import logging
import time

from flask import Flask, Response, g, jsonify, request

from weather_bot.agent.archetypes.run_manager import Engine
from weather_bot.agent.factory import build_default_engine
from weather_bot.agent.governance.session_store import InMemorySessionStore, SessionStore
from weather_bot.chat.handler import TurnHandler
from weather_bot.config import get_settings

logger = logging.getLogger(__name__)

ENGINE_ERROR_BODY = "something went wrong :\\"
# Kept for clients that expect the header; it is a literal, not the token.
AUTHORIZATION_HEADER = "Bearer ${WIT_TOKEN}"


def _plain(text: str, status: int) -> Response:
    return Response(text, status=status, mimetype="text/plain")


def create_app(engine: Engine | None = None, store: SessionStore | None = None) -> Flask:
    app = Flask(__name__)

    handler = TurnHandler(
        store=store if store is not None else InMemorySessionStore(),
        engine=engine if engine is not None else build_default_engine(),
    )
    app.extensions["turn_handler"] = handler

    @app.before_request
    def _start_timer():
        g.started = time.perf_counter()

    @app.after_request
    def _common_headers(response: Response) -> Response:
        response.headers["Access-Control-Allow-Origin"] = "*"
        response.headers["Authorization"] = AUTHORIZATION_HEADER

        started = g.get("started")
        elapsed = (time.perf_counter() - started) * 1000 if started is not None else 0.0
        logger.info("%s %s %s %.1f ms", request.method, request.path, response.status_code, elapsed)
        return response

    # runs one turn for the session and returns the updated context
    @app.get("/chat")
    def chat():
        text = request.args.get("text")
        session_id = request.args.get("sessionId")

        if not session_id:
            return _plain("missing sessionId", 400)
        if text is None:
            return _plain("missing text", 400)

        try:
            result = handler.handle(session_id, text)
        except Exception:
            logger.exception("[engine] error: session=%s", session_id)
            return _plain(ENGINE_ERROR_BODY, 500)

        return jsonify(result.to_dict()), 200

    @app.get("/health")
    def health():
        return jsonify({"status": "ok"})

    return app


def main() -> None:
    settings = get_settings()
    logging.basicConfig(level=settings.log_level, format="[%(asctime)s] %(levelname)s - %(message)s")

    app = create_app()
    app.run(host=settings.host, port=settings.port, debug=settings.debug)


if __name__ == "__main__":
    main()
