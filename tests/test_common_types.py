"""Tests for wire models and the display text of message parts."""

import pytest

from agent_relay.common_types import (
    AgentCard,
    DataPart,
    FilePart,
    Message,
    OpaquePart,
    SendTaskRequest,
    TaskSendParams,
    TextPart,
)
from agent_relay.relay import get_text_from_parts, text_message


def parts(*raw):
    return Message.model_validate({"role": "agent", "parts": list(raw)}).parts


class TestPartParsing:

    def test_tagged_parts(self):
        parsed = parts(
            {"type": "text", "text": "hi"},
            {"type": "file", "file": {"name": "a.png", "mimeType": "image/png", "bytes": "AAAA"}},
            {"type": "data", "data": {"k": 1}},
        )
        assert [type(p) for p in parsed] == [TextPart, FilePart, DataPart]

    def test_text_part_without_text_is_empty(self):
        (part,) = parts({"type": "text"})
        assert isinstance(part, TextPart)
        assert part.text == ""
        assert get_text_from_parts([part]) == ""

    def test_undeclared_fields_kept(self):
        message = Message.model_validate({
            "role": "agent",
            "messageId": "m-1",
            "parts": [{"type": "file", "file": {"uri": "file:///x", "size": 3}, "caption": "cat"}],
        })
        dumped = message.model_dump(exclude_none=True)
        assert dumped["messageId"] == "m-1"
        assert dumped["parts"][0]["caption"] == "cat"
        assert dumped["parts"][0]["file"]["size"] == 3

    def test_untagged_part_with_text_is_text(self):
        (part,) = parts({"text": "hi"})
        assert isinstance(part, TextPart)
        assert part.text == "hi"

    def test_unknown_type_kept_verbatim(self):
        (part,) = parts({"type": "image", "url": "http://example.com/x.png", "alt": "x"})
        assert isinstance(part, OpaquePart)
        assert part.model_dump() == {"type": "image", "url": "http://example.com/x.png", "alt": "x"}

    def test_untagged_part_without_text_is_opaque(self):
        (part,) = parts({"blob": "zzz"})
        assert isinstance(part, OpaquePart)
        assert part.type is None


class TestGetTextFromParts:

    def test_missing_type_treated_as_text(self):
        assert get_text_from_parts(parts({"text": "hi"})) == "hi"

    def test_unknown_part_rendered_by_type(self):
        assert get_text_from_parts(parts({"type": "text", "text": "a"}, {"type": "image"})) == "a [image part]"

    def test_known_non_text_parts(self):
        rendered = get_text_from_parts(parts(
            {"type": "data", "data": {}},
            {"type": "text", "text": "b"},
            {"type": "file", "file": {"uri": "file:///tmp/x"}},
        ))
        assert rendered == "[data part] b [file part]"

    def test_missing_tag_without_text_is_unknown(self):
        assert get_text_from_parts(parts({"blob": 1})) == "[unknown part]"

    def test_empty(self):
        assert get_text_from_parts([]) == ""

    def test_multiple_text_parts_joined_with_space(self):
        assert get_text_from_parts(parts({"text": "a"}, {"type": "text", "text": "b"})) == "a b"


class TestRequests:

    def test_send_task_request_envelope(self):
        params = TaskSendParams(id="conv", message=text_message("hello"))
        request = SendTaskRequest(params=params)

        body = request.model_dump(mode="json", exclude_none=True)

        assert body["jsonrpc"] == "2.0"
        assert body["method"] == "tasks/send"
        assert body["id"]
        assert body["params"] == {
            "id": "conv",
            "message": {"role": "user", "parts": [{"type": "text", "text": "hello"}]},
        }

    def test_request_ids_are_unique(self):
        params = TaskSendParams(id="conv", message=text_message("x"))
        assert SendTaskRequest(params=params).id != SendTaskRequest(params=params).id


class TestAgentCard:

    def test_minimal_card_gets_defaults(self):
        card = AgentCard.model_validate({"name": "Echo"})
        assert card.capabilities.streaming is False
        assert card.defaultInputModes == ["text"]

    def test_extra_fields_preserved(self):
        card = AgentCard.model_validate({"name": "Echo", "authentication": {"schemes": ["none"]}})
        assert card.model_dump(exclude_none=True)["authentication"] == {"schemes": ["none"]}

    def test_name_required(self):
        with pytest.raises(ValueError):
            AgentCard.model_validate({"description": "nameless"})
