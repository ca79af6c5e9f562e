"""AGiXT SDK for Python.

A typed async client library for the AGiXT HTTP API.
"""

from .client import AGiXTClient
from .errors import (
    AGiXTError,
    APIError,
    AuthError,
    ConnectionError,
    DecodeError,
)
from .models import (
    Agent,
    Chain,
    ChainStep,
    ChatCompletions,
    ChatResponse,
    Choice,
    Company,
    ContentPart,
    Conversation,
    Extension,
    ExtensionCommand,
    FileUrl,
    ImageUrl,
    Message,
    Prompt,
    Provider,
    StreamEvent,
    Tool,
    ToolFunction,
    Usage,
    User,
)
from .streaming import StreamResult

__all__ = [
    "AGiXTClient",
    "AGiXTError",
    "APIError",
    "AuthError",
    "ConnectionError",
    "DecodeError",
    "Agent",
    "Chain",
    "ChainStep",
    "ChatCompletions",
    "ChatResponse",
    "Choice",
    "Company",
    "ContentPart",
    "Conversation",
    "Extension",
    "ExtensionCommand",
    "FileUrl",
    "ImageUrl",
    "Message",
    "Prompt",
    "Provider",
    "StreamEvent",
    "StreamResult",
    "Tool",
    "ToolFunction",
    "Usage",
    "User",
]

__version__ = "0.1.0"
