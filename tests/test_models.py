"""Tests for resource models."""

import pytest

from agixt import (
    Agent,
    Chain,
    ChatCompletions,
    ChatResponse,
    ContentPart,
    DecodeError,
    Extension,
    FileUrl,
    ImageUrl,
    Message,
    Tool,
    ToolFunction,
)
from agixt.models import parse_content


class TestMessageContent:
    """Test the string-or-parts content union."""

    def test_none_is_empty_string(self):
        assert parse_content(None) == ""

    def test_string(self):
        assert parse_content("hi") == "hi"

    def test_parts(self):
        parts = parse_content([
            {"text": "look"},
            {"file_url": {"url": "https://f.test/a.pdf"}},
        ])
        assert parts == [
            ContentPart(text="look"),
            ContentPart(file_url=FileUrl(url="https://f.test/a.pdf")),
        ]

    def test_unsupported(self):
        with pytest.raises(DecodeError):
            parse_content(42)

    def test_message_to_dict_with_parts(self):
        msg = Message(role="user", content=[
            ContentPart(text="see"),
            ContentPart(image_url=ImageUrl(url="https://img.test/a.png")),
        ])
        assert msg.to_dict() == {
            "role": "user",
            "content": [
                {"text": "see"},
                {"image_url": {"url": "https://img.test/a.png"}},
            ],
        }

    def test_non_object_part(self):
        with pytest.raises(DecodeError):
            parse_content(["hi"])

    def test_image_url_must_be_object(self):
        with pytest.raises(DecodeError):
            ContentPart.from_dict({"image_url": "https://img.test/a.png"})

    def test_message_ids_are_strings(self):
        msg = Message.from_dict({"id": 17, "role": "user", "content": "x"})
        assert msg.id == "17"


class TestChatCompletions:

    def test_defaults(self):
        body = ChatCompletions().to_dict()
        assert body == {
            "model": "gpt4free",
            "temperature": 0.9,
            "top_p": 1.0,
            "tools_choice": "auto",
            "n": 1,
            "stream": False,
            "max_tokens": 4096,
            "presence_penalty": 0.0,
            "frequency_penalty": 0.0,
            "user": "Chat",
        }

    def test_tools(self):
        tool = Tool(function=ToolFunction(
            name="lookup", description="Find", parameters={"type": "object"},
        ))
        body = ChatCompletions(tools=[tool]).to_dict()
        assert body["tools"] == [{
            "type": "function",
            "function": {
                "name": "lookup",
                "description": "Find",
                "parameters": {"type": "object"},
            },
        }]

    def test_response_without_choices(self):
        response = ChatResponse.from_dict({"id": "x"})
        assert response.content == ""
        assert response.usage.total_tokens == 0


class TestLenientParsing:
    """Missing keys take defaults; alternate key names are accepted."""

    def test_agent(self):
        assert Agent.from_dict({}) == Agent()
        assert Agent.from_dict({"id": 5, "agent_name": "x"}) == Agent(id="5", name="x")

    @pytest.mark.parametrize("model", [Agent, Chain, Extension, Message, ChatResponse])
    def test_non_object_rejected(self, model):
        with pytest.raises(DecodeError):
            model.from_dict("x")

    def test_null_ids_stay_empty(self):
        assert Agent.from_dict({"id": None, "name": "a"}).id == ""
        assert Chain.from_dict({"id": None}).id == ""
        assert ChatResponse.from_dict({"id": None}).id == ""

    def test_null_choices(self):
        assert ChatResponse.from_dict({"choices": None}).choices == []

    def test_extension_command_not_object(self):
        with pytest.raises(DecodeError):
            Extension.from_dict({"name": "web", "commands": ["Search"]})

    def test_chain_steps(self):
        chain = Chain.from_dict({"id": "c", "chain_name": "S", "steps": [
            {"step": 1, "agent_id": "a1", "prompt_type": "Prompt", "prompt": {"p": 1}},
        ]})
        assert chain.name == "S"
        assert chain.steps[0].step_number == 1
        assert chain.steps[0].prompt == {"p": 1}

    def test_extension_settings_dict(self):
        ext = Extension.from_dict({"name": "web", "settings": {"KEY": "v"}})
        assert ext.settings == {"KEY": "v"}
        assert ext.commands == []
