"""Agent endpoints: configuration, commands, prompting, feedback and memory."""

from __future__ import annotations

from typing import Any

from .base import BaseClient, first_id_by_name
from .models import Agent, Extension


class AgentsMixin(BaseClient):
    """Operations under ``/v1/agent``."""

    async def get_agents(self) -> list[Agent]:
        """List all agents."""
        agents = await self._request("GET", "/v1/agent", field="agents", expect=list)
        return [Agent.from_dict(a) for a in agents]

    async def get_agent_id_by_name(self, agent_name: str) -> str | None:
        """Look up an agent's id by exact name; ``None`` if not found.

        Issues one full listing per call. When several agents share the
        name, the first one listed wins.
        """
        return first_id_by_name(await self.get_agents(), agent_name)

    async def add_agent(
        self,
        agent_name: str,
        settings: dict[str, Any] | None = None,
        commands: dict[str, Any] | None = None,
        training_urls: list[str] | None = None,
    ) -> Agent:
        """Create an agent and return it with its server-assigned id."""
        resp = await self._request("POST", "/v1/agent", {
            "agent_name": agent_name,
            "settings": settings or {},
            "commands": commands or {},
            "training_urls": training_urls or [],
        }, expect=dict)
        return Agent.from_dict(resp)

    async def import_agent(
        self,
        agent_name: str,
        settings: dict[str, Any] | None = None,
        commands: dict[str, Any] | None = None,
    ) -> Agent:
        """Import an agent configuration."""
        resp = await self._request("POST", "/v1/agent/import", {
            "agent_name": agent_name,
            "settings": settings or {},
            "commands": commands or {},
        }, expect=dict)
        return Agent.from_dict(resp)

    async def rename_agent(self, agent_id: str, new_name: str) -> dict[str, Any]:
        return await self._request(
            "PATCH", f"/v1/agent/{agent_id}", {"new_name": new_name}
        )

    async def update_agent_settings(
        self,
        agent_id: str,
        settings: dict[str, Any],
        agent_name: str | None = None,
    ) -> str:
        return await self._request("PUT", f"/v1/agent/{agent_id}", {
            "agent_name": agent_name or "",
            "settings": settings,
            "commands": {},
            "training_urls": [],
        }, field="message")

    async def update_agent_commands(
        self, agent_id: str, commands: dict[str, Any]
    ) -> str:
        return await self._request(
            "PUT", f"/v1/agent/{agent_id}/commands",
            {"commands": commands}, field="message",
        )

    async def delete_agent(self, agent_id: str) -> str:
        return await self._request(
            "DELETE", f"/v1/agent/{agent_id}", field="message"
        )

    async def get_agentconfig(self, agent_id: str) -> dict[str, Any]:
        """Full configuration of one agent."""
        return await self._request(
            "GET", f"/v1/agent/{agent_id}", field="agent", expect=dict
        )

    # Commands

    async def get_commands(self, agent_id: str) -> dict[str, Any]:
        """Map of command name to enabled flag."""
        return await self._request(
            "GET", f"/v1/agent/{agent_id}/command", field="commands", expect=dict
        )

    async def toggle_command(
        self, agent_id: str, command_name: str, enable: bool
    ) -> str:
        return await self._request("PATCH", f"/v1/agent/{agent_id}/command", {
            "command_name": command_name,
            "enable": enable,
        }, field="message")

    async def execute_command(
        self,
        agent_id: str,
        command_name: str,
        command_args: dict[str, Any],
        conversation_id: str | None = None,
    ) -> Any:
        """Run a command on an agent and return its result."""
        return await self._request("POST", f"/v1/agent/{agent_id}/command", {
            "command_name": command_name,
            "command_args": command_args,
            "conversation_name": conversation_id or "",
        }, field="response")

    # Prompting

    async def prompt_agent(
        self,
        agent_id: str,
        prompt_name: str,
        prompt_args: dict[str, Any],
    ) -> str:
        """Run a named prompt template through an agent."""
        return await self._request("POST", f"/v1/agent/{agent_id}/prompt", {
            "prompt_name": prompt_name,
            "prompt_args": prompt_args,
        }, field="response")

    async def instruct(
        self, agent_id: str, user_input: str, conversation_id: str
    ) -> str:
        return await self.prompt_agent(agent_id, "instruct", {
            "user_input": user_input,
            "disable_memory": True,
            "conversation_name": conversation_id,
        })

    async def chat(
        self,
        agent_id: str,
        user_input: str,
        conversation_id: str,
        context_results: int | None = None,
    ) -> str:
        return await self.prompt_agent(agent_id, "Chat", {
            "user_input": user_input,
            "context_results": 4 if context_results is None else context_results,
            "conversation_name": conversation_id,
            "disable_memory": True,
        })

    # Persona

    async def get_persona(self, agent_id: str) -> Any:
        return await self._request(
            "GET", f"/v1/agent/{agent_id}/persona", field="message"
        )

    async def update_persona(self, agent_id: str, persona: str) -> str:
        return await self._request(
            "PUT", f"/v1/agent/{agent_id}/persona",
            {"persona": persona}, field="message",
        )

    async def get_agent_extensions(self, agent_id: str) -> list[Extension]:
        extensions = await self._request(
            "GET", f"/v1/agent/{agent_id}/extensions", field="extensions", expect=list
        )
        return [Extension.from_dict(e) for e in extensions]

    # Feedback

    async def submit_feedback(
        self,
        agent_id: str,
        message: str,
        user_input: str,
        feedback: str,
        positive: bool,
        conversation_id: str | None = None,
    ) -> str:
        """Rate an agent response; the server may learn from it."""
        return await self._request("POST", f"/v1/agent/{agent_id}/feedback", {
            "user_input": user_input,
            "message": message,
            "feedback": feedback,
            "positive": positive,
            "conversation_name": conversation_id or "",
        }, field="message")

    async def positive_feedback(
        self,
        agent_id: str,
        message: str,
        user_input: str,
        feedback: str,
        conversation_id: str | None = None,
    ) -> str:
        return await self.submit_feedback(
            agent_id, message, user_input, feedback, True, conversation_id
        )

    async def negative_feedback(
        self,
        agent_id: str,
        message: str,
        user_input: str,
        feedback: str,
        conversation_id: str | None = None,
    ) -> str:
        return await self.submit_feedback(
            agent_id, message, user_input, feedback, False, conversation_id
        )

    # Learning

    async def learn_text(
        self,
        agent_id: str,
        user_input: str,
        text: str,
        collection_number: str = "0",
    ) -> str:
        return await self._request("POST", f"/v1/agent/{agent_id}/learn/text", {
            "user_input": user_input,
            "text": text,
            "collection_number": collection_number,
        }, field="message")

    async def learn_url(
        self, agent_id: str, url: str, collection_number: str = "0"
    ) -> str:
        return await self._request("POST", f"/v1/agent/{agent_id}/learn/url", {
            "url": url,
            "collection_number": collection_number,
        }, field="message")

    async def learn_file(
        self,
        agent_id: str,
        file_name: str,
        file_content: str,
        collection_number: str = "0",
    ) -> str:
        """Teach an agent a file; ``file_content`` is base64 text."""
        return await self._request("POST", f"/v1/agent/{agent_id}/learn/file", {
            "file_name": file_name,
            "file_content": file_content,
            "collection_number": collection_number,
        }, field="message")

    # Memory

    async def get_agent_memories(
        self,
        agent_id: str,
        user_input: str,
        limit: int = 10,
        min_relevance_score: float = 0.0,
        collection_number: str = "0",
    ) -> list[dict[str, Any]]:
        """Query an agent's memories for entries relevant to ``user_input``."""
        return await self._request(
            "POST", f"/v1/agent/{agent_id}/memory/query", {
                "user_input": user_input,
                "limit": limit,
                "min_relevance_score": min_relevance_score,
                "collection_number": collection_number,
            }, field="memories", expect=list,
        )

    async def delete_agent_memory(
        self, agent_id: str, memory_id: str, collection_number: str = "0"
    ) -> str:
        return await self._request(
            "DELETE", f"/v1/agent/{agent_id}/memory/{memory_id}",
            {"collection_number": collection_number}, field="message",
        )

    async def wipe_agent_memory(
        self, agent_id: str, collection_number: str = ""
    ) -> str:
        """Delete memories of one collection, or all when empty."""
        return await self._request(
            "DELETE", f"/v1/agent/{agent_id}/memory",
            {"collection_number": collection_number}, field="message",
        )
