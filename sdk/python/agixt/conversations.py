"""Conversation endpoints."""

from __future__ import annotations

from typing import Any

from .base import BaseClient, first_id_by_name
from .models import Conversation, Message


class ConversationsMixin(BaseClient):
    """Operations under ``/v1/conversation``."""

    async def get_conversations(self) -> list[Conversation]:
        """List all conversations of the current user."""
        items = await self._request_list(
            "GET", "/v1/conversations", "conversations", "conversations_with_ids"
        )
        return [Conversation.from_dict(c) for c in items]

    async def get_conversations_with_ids(self) -> list[dict[str, str]]:
        """``{"id", "name"}`` pairs for every conversation."""
        return [
            {"id": c.id, "name": c.name} for c in await self.get_conversations()
        ]

    async def get_conversation_id_by_name(self, conversation_name: str) -> str | None:
        """Look up a conversation's id by exact name; ``None`` if not found."""
        return first_id_by_name(await self.get_conversations(), conversation_name)

    async def get_conversation(
        self,
        conversation_id: str,
        limit: int = 100,
        page: int = 1,
    ) -> list[Message]:
        """One page of a conversation's history, oldest first."""
        history = await self._request(
            "GET", f"/v1/conversation/{conversation_id}",
            params={"limit": limit, "page": page},
            field="conversation_history", expect=list,
        )
        return [Message.from_dict(m) for m in history]

    async def fork_conversation(
        self, conversation_id: str, message_id: str
    ) -> dict[str, Any]:
        """Copy a conversation up to and including ``message_id``."""
        return await self._request(
            "POST", f"/v1/conversation/fork/{conversation_id}/{message_id}"
        )

    async def new_conversation(
        self,
        agent_id: str,
        conversation_name: str,
        conversation_content: list[Message] | None = None,
    ) -> Conversation:
        resp = await self._request("POST", "/v1/conversation", {
            "conversation_name": conversation_name,
            "agent_id": agent_id,
            "conversation_content": [m.to_dict() for m in conversation_content or []],
        }, expect=dict)
        conversation = Conversation.from_dict(resp)
        conversation.name = conversation.name or conversation_name
        conversation.agent_id = conversation.agent_id or agent_id
        return conversation

    async def rename_conversation(
        self, conversation_id: str, new_name: str
    ) -> dict[str, Any]:
        return await self._request(
            "PUT", f"/v1/conversation/{conversation_id}",
            {"new_conversation_name": new_name},
        )

    async def delete_conversation(self, conversation_id: str) -> str:
        return await self._request(
            "DELETE", f"/v1/conversation/{conversation_id}", field="message"
        )

    async def delete_conversation_message(
        self, conversation_id: str, message_id: str
    ) -> str:
        return await self._request(
            "DELETE", f"/v1/conversation/{conversation_id}/message/{message_id}",
            field="message",
        )

    async def update_conversation_message(
        self, conversation_id: str, message_id: str, new_message: str
    ) -> str:
        return await self._request(
            "PUT", f"/v1/conversation/{conversation_id}/message/{message_id}",
            {"new_message": new_message}, field="message",
        )

    async def new_conversation_message(
        self, role: str, message: str, conversation_id: str
    ) -> str:
        """Append a message to a conversation without prompting the agent."""
        return await self._request(
            "POST", f"/v1/conversation/{conversation_id}/message",
            {"role": role, "message": message}, field="message",
        )
