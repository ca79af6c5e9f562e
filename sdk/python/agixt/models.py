"""Typed representations of AGiXT resources.

Models are built leniently from server JSON: keys the server omits take their
defaults. They are pass-through copies of remote state and are never cached.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from .errors import DecodeError


def _opt_str(value: Any) -> str | None:
    return None if value is None else str(value)


def _id(data: dict[str, Any], key: str = "id") -> str:
    """String id, or empty when the key is absent or null."""
    return _opt_str(data.get(key)) or ""


def _require_object(data: Any, kind: str) -> None:
    if not isinstance(data, dict):
        raise DecodeError(f"Expected a JSON object for {kind}, got {data!r}")


def _ref_url(ref: Any, kind: str) -> str:
    _require_object(ref, kind)
    return ref.get("url", "")


def _drop_none(data: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in data.items() if v is not None}


@dataclass
class ImageUrl:
    """Image reference inside a message."""
    url: str = ""


@dataclass
class FileUrl:
    """File reference inside a message."""
    url: str = ""


@dataclass
class ContentPart:
    """One part of structured message content."""
    text: str | None = None
    image_url: ImageUrl | None = None
    file_url: FileUrl | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ContentPart":
        _require_object(data, "content part")
        image = data.get("image_url")
        file = data.get("file_url")
        return cls(
            text=data.get("text"),
            image_url=ImageUrl(url=_ref_url(image, "image_url")) if image else None,
            file_url=FileUrl(url=_ref_url(file, "file_url")) if file else None,
        )

    def to_dict(self) -> dict[str, Any]:
        return _drop_none({
            "text": self.text,
            "image_url": {"url": self.image_url.url} if self.image_url else None,
            "file_url": {"url": self.file_url.url} if self.file_url else None,
        })


MessageContent = Union[str, list[ContentPart]]


def parse_content(raw: Any) -> MessageContent:
    """Resolve message content by shape: a string or a list of parts."""
    if raw is None:
        return ""
    if isinstance(raw, str):
        return raw
    if isinstance(raw, list):
        return [ContentPart.from_dict(part) for part in raw]
    raise DecodeError(f"Unsupported message content: {raw!r}")


@dataclass
class Message:
    """A single entry in a conversation history."""
    role: str = ""
    content: MessageContent = ""
    id: str | None = None
    timestamp: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Message":
        _require_object(data, "message")
        return cls(
            role=data.get("role", ""),
            content=parse_content(data.get("content")),
            id=_opt_str(data.get("id")),
            timestamp=_opt_str(data.get("timestamp")),
        )

    def to_dict(self) -> dict[str, Any]:
        if isinstance(self.content, str):
            content: Any = self.content
        else:
            content = [part.to_dict() for part in self.content]
        return _drop_none({
            "role": self.role,
            "content": content,
            "id": self.id,
            "timestamp": self.timestamp,
        })

    @property
    def text(self) -> str:
        """Plain-text view of the content, joining text parts."""
        if isinstance(self.content, str):
            return self.content
        return "".join(part.text or "" for part in self.content)


@dataclass
class ToolFunction:
    """Function definition within a tool."""
    name: str = ""
    description: str = ""
    parameters: dict[str, Any] = field(default_factory=dict)


@dataclass
class Tool:
    """Tool definition for function calling."""
    type: str = "function"
    function: ToolFunction = field(default_factory=ToolFunction)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "function": {
                "name": self.function.name,
                "description": self.function.description,
                "parameters": self.function.parameters,
            },
        }


@dataclass
class ChatCompletions:
    """OpenAI-compatible chat completion request.

    ``model`` names the agent, ``user`` names the conversation.
    """
    model: str = "gpt4free"
    messages: list[Message] | None = None
    temperature: float | None = 0.9
    top_p: float | None = 1.0
    tools: list[Tool] | None = None
    tools_choice: str | None = "auto"
    n: int | None = 1
    stream: bool | None = False
    stop: list[str] | None = None
    max_tokens: int | None = 4096
    presence_penalty: float | None = 0.0
    frequency_penalty: float | None = 0.0
    logit_bias: dict[str, float] | None = None
    user: str | None = "Chat"

    def to_dict(self) -> dict[str, Any]:
        return _drop_none({
            "model": self.model,
            "messages": [m.to_dict() for m in self.messages] if self.messages is not None else None,
            "temperature": self.temperature,
            "top_p": self.top_p,
            "tools": [t.to_dict() for t in self.tools] if self.tools is not None else None,
            "tools_choice": self.tools_choice,
            "n": self.n,
            "stream": self.stream,
            "stop": self.stop,
            "max_tokens": self.max_tokens,
            "presence_penalty": self.presence_penalty,
            "frequency_penalty": self.frequency_penalty,
            "logit_bias": self.logit_bias,
            "user": self.user,
        })


@dataclass
class Usage:
    """Token usage in a chat completion response."""
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


@dataclass
class Choice:
    """One choice of a chat completion response."""
    index: int = 0
    message: Message = field(default_factory=Message)
    finish_reason: str = ""
    logprobs: Any = None


@dataclass
class ChatResponse:
    """Response from the chat completions endpoint."""
    id: str = ""
    object: str = ""
    created: int = 0
    model: str = ""
    choices: list[Choice] = field(default_factory=list)
    usage: Usage = field(default_factory=Usage)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ChatResponse":
        _require_object(data, "chat response")
        choices = []
        for c in data.get("choices") or []:
            _require_object(c, "choice")
            choices.append(Choice(
                index=c.get("index", 0),
                message=Message.from_dict(c.get("message") or {}),
                finish_reason=c.get("finish_reason") or "",
                logprobs=c.get("logprobs"),
            ))
        usage = data.get("usage") or {}
        return cls(
            id=_id(data),
            object=data.get("object", ""),
            created=data.get("created", 0),
            model=data.get("model", ""),
            choices=choices,
            usage=Usage(
                prompt_tokens=usage.get("prompt_tokens", 0),
                completion_tokens=usage.get("completion_tokens", 0),
                total_tokens=usage.get("total_tokens", 0),
            ),
        )

    @property
    def content(self) -> str:
        """Text of the first choice, or an empty string."""
        return self.choices[0].message.text if self.choices else ""


@dataclass
class Agent:
    """An agent and its configuration."""
    id: str = ""
    name: str = ""
    settings: dict[str, Any] = field(default_factory=dict)
    commands: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Agent":
        _require_object(data, "agent")
        return cls(
            id=_id(data),
            name=data.get("name") or data.get("agent_name", ""),
            settings=data.get("settings") or {},
            commands=data.get("commands") or {},
        )


@dataclass
class Conversation:
    """Conversation summary."""
    id: str = ""
    name: str = ""
    agent_id: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Conversation":
        _require_object(data, "conversation")
        return cls(
            id=_id(data),
            name=data.get("name") or data.get("conversation_name", ""),
            agent_id=_opt_str(data.get("agent_id")),
        )


@dataclass
class ChainStep:
    """A step in a chain."""
    step_number: int = 0
    agent_id: str = ""
    prompt_type: str = ""
    prompt: Any = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ChainStep":
        _require_object(data, "chain step")
        return cls(
            step_number=data.get("step_number", data.get("step", 0)),
            agent_id=_id(data, "agent_id"),
            prompt_type=data.get("prompt_type", ""),
            prompt=data.get("prompt"),
        )


@dataclass
class Chain:
    """Chain summary, with steps when the server includes them."""
    id: str = ""
    name: str = ""
    steps: list[ChainStep] | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Chain":
        _require_object(data, "chain")
        steps = data.get("steps")
        return cls(
            id=_id(data),
            name=data.get("name") or data.get("chain_name", ""),
            steps=[ChainStep.from_dict(s) for s in steps] if steps is not None else None,
        )


@dataclass
class Prompt:
    """A prompt template."""
    id: str = ""
    name: str = ""
    content: str = ""
    category: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Prompt":
        _require_object(data, "prompt")
        return cls(
            id=_id(data),
            name=data.get("name") or data.get("prompt_name", ""),
            content=data.get("content") or data.get("prompt", ""),
            category=data.get("category") or data.get("prompt_category"),
        )


@dataclass
class Provider:
    """A model provider."""
    name: str = ""
    settings: dict[str, Any] = field(default_factory=dict)
    supports_embeddings: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Provider":
        _require_object(data, "provider")
        return cls(
            name=data.get("name", ""),
            settings=data.get("settings") or {},
            supports_embeddings=bool(data.get("supports_embeddings", False)),
        )


@dataclass
class Company:
    """A company (tenant)."""
    id: str = ""
    name: str = ""
    agents: list[Agent] | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Company":
        _require_object(data, "company")
        agents = data.get("agents")
        return cls(
            id=_id(data),
            name=data.get("name", ""),
            agents=[Agent.from_dict(a) for a in agents] if agents is not None else None,
        )


@dataclass
class User:
    """An AGiXT user."""
    id: str = ""
    email: str = ""
    first_name: str | None = None
    last_name: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "User":
        _require_object(data, "user")
        return cls(
            id=_id(data),
            email=data.get("email", ""),
            first_name=data.get("first_name"),
            last_name=data.get("last_name"),
        )


@dataclass
class ExtensionCommand:
    """A command exposed by an extension."""
    name: str = ""
    description: str = ""
    args: dict[str, Any] = field(default_factory=dict)


@dataclass
class Extension:
    """An extension and its commands."""
    name: str = ""
    description: str = ""
    settings: dict[str, Any] = field(default_factory=dict)
    commands: list[ExtensionCommand] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Extension":
        _require_object(data, "extension")
        commands = []
        for c in data.get("commands") or []:
            _require_object(c, "extension command")
            commands.append(ExtensionCommand(
                name=c.get("name", c.get("friendly_name", "")),
                description=c.get("description", ""),
                args=c.get("args") or c.get("command_args") or {},
            ))
        settings = data.get("settings") or {}
        if isinstance(settings, list):
            settings = {key: None for key in settings}
        return cls(
            name=data.get("name", data.get("extension_name", "")),
            description=data.get("description", ""),
            settings=settings,
            commands=commands,
        )


@dataclass
class StreamEvent:
    """A single event from a streaming response."""
    event: str = ""
    data: dict[str, Any] = field(default_factory=dict)
