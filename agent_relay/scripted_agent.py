# agent_relay/scripted_agent.py

"""A small A2A agent that answers with scripted replies.

Useful to try the relay locally without any model behind the agents:

    python -m agent_relay.scripted_agent --port 5001 --name Echo --mode echo
    python -m agent_relay.scripted_agent --port 5002 --name Mirror --mode reverse
    python -m agent_relay --agent1 http://127.0.0.1:5001 --agent2 http://127.0.0.1:5002 --init-message hello
"""

import argparse
import logging
import os
import threading
from uuid import uuid4

from dotenv import load_dotenv
from flask import Flask, jsonify, request
from pydantic import ValidationError

from .card_resolver import AGENT_CARD_PATH
from .common_types import (
    AgentCapabilities,
    AgentCard,
    JSONRPCError,
    Message,
    SendTaskResponse,
    Task,
    TaskSendParams,
    TaskState,
    TaskStatus,
    TextPart,
)
from .relay import get_text_from_parts

load_dotenv()

logger = logging.getLogger(__name__)

HOST = os.getenv("SCRIPTED_AGENT_HOST", "127.0.0.1")
PORT = int(os.getenv("SCRIPTED_AGENT_PORT", "5001"))

MODES = ("echo", "reverse", "fixed")

# JSON-RPC error codes
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602


def scripted_reply(mode: str, text: str, fixed_text: str = "ack") -> str:
    if mode == "echo":
        return text
    if mode == "reverse":
        return text[::-1]
    if mode == "fixed":
        return fixed_text
    raise ValueError(f"Unknown mode: {mode}")


def _rpc_error(request_id, code: int, message: str):
    response = SendTaskResponse(id=request_id, error=JSONRPCError(code=code, message=message))
    return jsonify(response.model_dump(mode="json", exclude_none=True))


def create_app(
    name: str = "ScriptedAgent",
    mode: str = "echo",
    fixed_text: str = "ack",
    max_replies: int | None = None,
    base_url: str | None = None,
) -> Flask:
    """Builds the Flask app for one scripted agent.

    After max_replies replies the agent keeps accepting tasks but answers
    them without a status message.
    """
    if mode not in MODES:
        raise ValueError(f"mode must be one of {MODES}, got {mode!r}")

    app = Flask(__name__)
    lock = threading.Lock()
    replies_sent = 0

    @app.route(AGENT_CARD_PATH, methods=["GET"])
    def agent_card():
        """Return metadata about this agent in JSON format."""
        logger.info(f"Received request for Agent Card {AGENT_CARD_PATH}")
        card = AgentCard(
            name=name,
            description=f"Scripted agent that replies in '{mode}' mode.",
            url=base_url or request.host_url.rstrip('/'),
            version="1.0",
            capabilities=AgentCapabilities(streaming=False, pushNotifications=False),
        )
        return jsonify(card.model_dump(mode="json", exclude_none=True))

    @app.route("/", methods=["POST"])
    def handle_rpc():
        """Handles JSON-RPC requests sent via POST."""
        nonlocal replies_sent
        body = request.get_json(silent=True)
        if not isinstance(body, dict) or body.get("jsonrpc") != "2.0" or "method" not in body:
            return _rpc_error(None, INVALID_REQUEST, "Invalid JSON-RPC request")

        request_id = body.get("id")
        if body["method"] != "tasks/send":
            return _rpc_error(request_id, METHOD_NOT_FOUND, f"Method not found: {body['method']}")

        try:
            params = TaskSendParams.model_validate(body.get("params"))
        except ValidationError as e:
            logger.warning(f"Invalid tasks/send params: {e}")
            return _rpc_error(request_id, INVALID_PARAMS, "Invalid parameters")

        session_id = params.sessionId or uuid4().hex
        with lock:
            replying = max_replies is None or replies_sent < max_replies
            if replying:
                replies_sent += 1

        reply = None
        if replying:
            incoming = get_text_from_parts(params.message.parts)
            reply = Message(role="agent", parts=[TextPart(text=scripted_reply(mode, incoming, fixed_text))])
            logger.info(f"Task {params.id}: replying to {incoming!r}")
        else:
            logger.info(f"Task {params.id}: reply limit reached, not replying")

        task = Task(
            id=params.id,
            sessionId=session_id,
            status=TaskStatus(state=TaskState.COMPLETED, message=reply),
            history=[params.message] + ([reply] if reply else []),
        )
        response = SendTaskResponse(id=request_id, result=task)
        return jsonify(response.model_dump(mode="json", exclude_none=True))

    return app


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Run a scripted A2A agent")
    parser.add_argument("--host", default=HOST)
    parser.add_argument("--port", type=int, default=PORT)
    parser.add_argument("--name", default="ScriptedAgent", help="Agent name shown on its card")
    parser.add_argument("--mode", choices=MODES, default="echo", help="How the agent builds its reply")
    parser.add_argument("--fixed-text", default="ack", help="Reply text in 'fixed' mode")
    parser.add_argument("--max-replies", type=int, default=None, help="Stop replying after this many replies")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    app = create_app(
        name=args.name,
        mode=args.mode,
        fixed_text=args.fixed_text,
        max_replies=args.max_replies,
        base_url=f"http://{args.host}:{args.port}",
    )
    print(f"--- {args.name} A2A agent starting on http://{args.host}:{args.port} ---")
    app.run(host=args.host, port=args.port, debug=False)


if __name__ == "__main__":
    main()
