"""Chat completions, including server-sent event streaming.

AGiXT exposes an OpenAI-compatible ``/v1/chat/completions`` endpoint where
``model`` selects the agent and ``user`` the conversation.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import AsyncGenerator, AsyncIterator

import httpx

from .base import BaseClient
from .errors import APIError, ConnectionError
from .models import ChatCompletions, ChatResponse, StreamEvent, Usage

logger = logging.getLogger(__name__)


@dataclass
class StreamResult:
    """Accumulated result from a completed stream."""
    text: str = ""
    finish_reason: str = ""
    usage: Usage = field(default_factory=Usage)


class StreamingMixin(BaseClient):
    """Operations under ``/v1/chat/completions``."""

    async def chat_completions(self, request: ChatCompletions) -> ChatResponse:
        """Send a chat completion request and wait for the full response."""
        body = request.to_dict()
        body["stream"] = False
        resp = await self._request(
            "POST", "/v1/chat/completions", body, expect=dict
        )
        return ChatResponse.from_dict(resp)

    async def stream_chat_completions(
        self, request: ChatCompletions
    ) -> AsyncGenerator[StreamEvent, None]:
        """Stream a chat completion as SSE events.

        Yields one StreamEvent per ``data:`` line; the stream ends at the
        ``[DONE]`` sentinel or when the server closes the connection.
        """
        body = request.to_dict()
        body["stream"] = True
        url = self._url("/v1/chat/completions")
        headers = await self._headers.snapshot()
        headers["Accept"] = "text/event-stream"
        logger.debug("POST %s (stream)", url)

        try:
            async with self._http.stream(
                "POST", url, json=body, headers=headers
            ) as resp:
                if not resp.is_success:
                    await resp.aread()
                    if self._verbose:
                        self._log_response(resp, False)
                    raise APIError(resp.status_code, resp.text)
                if self._verbose:
                    logger.info("Status Code: %s", resp.status_code)
                async for event in _parse_sse(resp.aiter_lines()):
                    yield event
        except httpx.TransportError as e:
            raise ConnectionError(f"Failed to connect to {url}: {e}") from e

    async def stream_chat_text(self, request: ChatCompletions) -> StreamResult:
        """Stream a chat completion and return the accumulated text.

        Collects the ``delta.content`` of the first choice of every chunk.
        """
        result = StreamResult()
        async for event in self.stream_chat_completions(request):
            choices = event.data.get("choices") or []
            if choices:
                choice = choices[0]
                delta = choice.get("delta") or {}
                result.text += delta.get("content") or ""
                if choice.get("finish_reason"):
                    result.finish_reason = choice["finish_reason"]
            usage = event.data.get("usage")
            if usage:
                result.usage = Usage(
                    prompt_tokens=usage.get("prompt_tokens", 0),
                    completion_tokens=usage.get("completion_tokens", 0),
                    total_tokens=usage.get("total_tokens", 0),
                )
        return result


async def _parse_sse(lines: AsyncIterator[str]) -> AsyncGenerator[StreamEvent, None]:
    """Parse Server-Sent Events from an iterator of decoded lines."""
    event_type = ""
    async for raw_line in lines:
        line = raw_line.rstrip("\n\r")
        if line.startswith("event:"):
            event_type = line[6:].strip()
        elif line.startswith("data:"):
            data_str = line[5:].strip()
            if data_str == "[DONE]":
                break
            try:
                data = json.loads(data_str)
            except json.JSONDecodeError:
                data = {"raw": data_str}
            if not isinstance(data, dict):
                data = {"raw": data}
            yield StreamEvent(event=event_type, data=data)
            event_type = ""
