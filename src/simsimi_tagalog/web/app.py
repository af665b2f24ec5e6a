import logging
import os

from dotenv import load_dotenv
from flask import Flask, jsonify, request
from flask_cors import CORS

from simsimi_tagalog import SERVICE_NAME, __version__
from simsimi_tagalog.agent.factory import build_agent, build_default_agent
from simsimi_tagalog.chat.handler import handle_query
from simsimi_tagalog.services.knowledge_store import KnowledgeStore

load_dotenv()

DEFAULT_PORT = 3000
DEFAULT_HOST = "0.0.0.0"

GET_USAGE = [
    "GET: /?query=sim <message>",
    "GET: /?query=sim teach <ask> | <answer>",
]
POST_USAGE = {
    "POST": {
        "Content-Type": "application/json",
        "body": {"query": "sim <message>"},
    }
}

logger = logging.getLogger(__name__)


def _get_int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_log_level(name: str, default: str) -> str:
    level = os.getenv(name, default).strip().upper()
    if isinstance(logging.getLevelName(level), int):
        return level
    return default


def _is_missing(value) -> bool:
    # Only null, false, zero and "" count as absent; an empty list or object is passed on.
    return value is None or value is False or value == "" or (type(value) in (int, float) and value == 0)


def _internal_error():
    return jsonify({"status": "error", "message": "Internal server error"}), 500


def create_app(store: KnowledgeStore | None = None) -> Flask:
    app = Flask(__name__)

    CORS(
        app,
        origins="*",
        send_wildcard=True,
        methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    # An explicit store gets its own interpreter; otherwise share the configured one.
    agent = build_agent(store) if store is not None else build_default_agent()

    @app.get("/")
    def query_get():
        query = request.args.get("query")
        if not query:
            return jsonify({"status": "error", "message": "Query parameter is required", "usage": GET_USAGE})

        try:
            return jsonify(handle_query(query, agent=agent))
        except Exception:
            logger.exception("Error processing GET request")
            return _internal_error()

    # JSON bodies are the documented form; url-encoded forms are accepted as well.
    @app.post("/")
    def query_post():
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            payload = request.form.to_dict()

        query = payload.get("query")
        if _is_missing(query):
            return jsonify({"status": "error", "message": "Query is required in request body", "usage": POST_USAGE}), 400

        try:
            if payload.get("debug") is True:
                body, dbg = handle_query(query, debug=True, agent=agent)
                body["debug"] = dbg
                return jsonify(body)
            return jsonify(handle_query(query, agent=agent))
        except Exception:
            logger.exception("Error processing POST request")
            return _internal_error()

    @app.get("/health")
    def health():
        return jsonify({"status": "healthy", "service": SERVICE_NAME, "version": __version__})

    return app


if __name__ == "__main__":
    logging.basicConfig(
        level=_get_log_level("LOG_LEVEL", "INFO"),
        format="[%(asctime)s] %(levelname)s - %(message)s",
    )

    app = create_app()

    host = os.getenv("HOST", DEFAULT_HOST)
    port = _get_int_env("PORT", DEFAULT_PORT)
    debug = os.getenv("FLASK_DEBUG", "").strip() == "1"

    logger.info("SimSimi API running on port %s", port)
    logger.info("GET: http://localhost:%s/?query=sim%%20hello", port)
    logger.info("POST: http://localhost:%s/ (with JSON body)", port)

    app.run(host=host, port=port, debug=debug)
