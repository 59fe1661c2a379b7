"""Tests for the scripted Flask agent."""

import pytest

from agent_relay.scripted_agent import create_app, scripted_reply


def rpc(text="hello", session_id=None, method="tasks/send", request_id="req-1"):
    params = {"id": "conv-1", "message": {"role": "user", "parts": [{"type": "text", "text": text}]}}
    if session_id is not None:
        params["sessionId"] = session_id
    return {"jsonrpc": "2.0", "id": request_id, "method": method, "params": params}


@pytest.fixture
def app():
    return create_app(name="Mirror", mode="reverse")


@pytest.fixture
def client(app):
    return app.test_client()


class TestScriptedReply:

    @pytest.mark.parametrize("mode,expected", [("echo", "abc"), ("reverse", "cba"), ("fixed", "ack")])
    def test_modes(self, mode, expected):
        assert scripted_reply(mode, "abc") == expected

    def test_unknown_mode(self):
        with pytest.raises(ValueError):
            scripted_reply("shout", "abc")

    def test_create_app_rejects_unknown_mode(self):
        with pytest.raises(ValueError):
            create_app(mode="shout")


class TestAgentCard:

    def test_card(self, client):
        response = client.get("/.well-known/agent.json")

        assert response.status_code == 200
        card = response.get_json()
        assert card["name"] == "Mirror"
        assert card["capabilities"]["streaming"] is False
        assert card["url"] == "http://localhost"


class TestTasksSend:

    def test_replies_and_assigns_session(self, client):
        body = client.post("/", json=rpc("hello")).get_json()

        assert body["id"] == "req-1"
        task = body["result"]
        assert task["id"] == "conv-1"
        assert task["sessionId"]
        assert task["status"]["state"] == "completed"
        assert task["status"]["message"] == {"role": "agent", "parts": [{"type": "text", "text": "olleh"}]}

    def test_keeps_callers_session(self, client):
        task = client.post("/", json=rpc(session_id="s-42")).get_json()["result"]

        assert task["sessionId"] == "s-42"

    def test_stops_replying_after_limit(self):
        client = create_app(mode="fixed", fixed_text="ok", max_replies=1).test_client()

        first = client.post("/", json=rpc()).get_json()["result"]
        second = client.post("/", json=rpc()).get_json()["result"]

        assert first["status"]["message"]["parts"][0]["text"] == "ok"
        assert "message" not in second["status"]
        assert second["status"]["state"] == "completed"

    def test_unknown_method(self, client):
        body = client.post("/", json=rpc(method="tasks/cancel")).get_json()

        assert body["error"]["code"] == -32601
        assert "result" not in body

    def test_invalid_request(self, client):
        body = client.post("/", data="nope", content_type="text/plain").get_json()

        assert body["error"]["code"] == -32600

    def test_invalid_params(self, client):
        request = rpc()
        del request["params"]["message"]

        body = client.post("/", json=request).get_json()

        assert body["error"]["code"] == -32602
        assert body["id"] == "req-1"
