"""Shared fixtures and helpers for agent_relay tests."""

import io
from unittest.mock import AsyncMock

import httpx
import pytest
from flask import Flask
from rich.console import Console

from agent_relay.common_types import AgentCard, Message, Task, TaskState, TaskStatus, TextPart
from agent_relay.transcript import RichTranscript


def text_of(message: Message) -> str:
    return " ".join(part.text for part in message.parts)


def make_task(text: str | None, session_id: str | None = "session-1", task_id: str = "conv") -> Task:
    """Task whose status message carries `text`, or no message when text is None."""
    message = Message(role="agent", parts=[TextPart(text=text)]) if text is not None else None
    return Task(
        id=task_id,
        sessionId=session_id,
        status=TaskStatus(state=TaskState.COMPLETED, message=message),
    )


def make_client(name: str = "Agent", replies=None) -> AsyncMock:
    """Mock TaskClient. `replies` is a side_effect for send_task."""
    client = AsyncMock()
    client.get_agent_card.return_value = AgentCard(name=name)
    if replies is not None:
        client.send_task.side_effect = replies
    return client


def flask_transport(apps: dict[str, Flask]) -> httpx.MockTransport:
    """httpx transport that routes each request to the Flask app for its host."""
    clients = {host: app.test_client() for host, app in apps.items()}

    def handler(request: httpx.Request) -> httpx.Response:
        client = clients.get(request.url.host)
        if client is None:
            return httpx.Response(404, text="unknown host")
        response = client.open(
            request.url.raw_path.decode(),
            method=request.method,
            data=request.content,
            content_type=request.headers.get("content-type"),
        )
        return httpx.Response(
            response.status_code,
            content=response.get_data(),
            headers={"content-type": response.content_type},
        )

    return httpx.MockTransport(handler)


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def errors():
    return io.StringIO()


@pytest.fixture
def transcript(output, errors):
    return RichTranscript(
        console=Console(file=output, no_color=True, width=200),
        err_console=Console(file=errors, no_color=True, width=200),
    )
