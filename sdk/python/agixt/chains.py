"""Chain endpoints: listing, running and editing multi-step chains."""

from __future__ import annotations

from typing import Any

from .base import BaseClient, first_id_by_name
from .models import Chain


class ChainsMixin(BaseClient):
    """Operations under ``/v1/chain``."""

    async def get_chains(self) -> list[Chain]:
        items = await self._request_list("GET", "/v1/chains", "chains")
        return [Chain.from_dict(c) for c in items]

    async def get_chain_id_by_name(self, chain_name: str) -> str | None:
        """Look up a chain's id by exact name; ``None`` if not found."""
        return first_id_by_name(await self.get_chains(), chain_name)

    async def get_chain(self, chain_id: str) -> Any:
        """Chain definition.

        The server keys the definition by chain name; a single-key object
        is unwrapped to its value.
        """
        data = await self._request("GET", f"/v1/chain/{chain_id}")
        if isinstance(data, dict) and len(data) == 1:
            return next(iter(data.values()))
        return data

    async def get_chain_responses(self, chain_id: str) -> Any:
        return await self._request(
            "GET", f"/v1/chain/{chain_id}/responses", field="chain"
        )

    async def get_chain_args(self, chain_id: str) -> list[str]:
        """Names of the variables a chain's prompts expect."""
        return await self._request_list(
            "GET", f"/v1/chain/{chain_id}/args", "chain_args"
        )

    async def run_chain(
        self,
        chain_id: str,
        user_input: str,
        agent_id: str | None = None,
        all_responses: bool = False,
        from_step: int = 1,
        chain_args: dict[str, Any] | None = None,
    ) -> Any:
        """Run a chain and return its final output.

        ``agent_id`` overrides the agent of every step; ``all_responses``
        returns the output of each step instead.
        """
        return await self._request("POST", f"/v1/chain/{chain_id}/run", {
            "prompt": user_input,
            "agent_override": agent_id or "",
            "all_responses": all_responses,
            "from_step": from_step,
            "chain_args": chain_args or {},
        })

    async def run_chain_step(
        self,
        chain_id: str,
        step_number: int,
        user_input: str,
        agent_id: str | None = None,
        chain_args: dict[str, Any] | None = None,
    ) -> Any:
        return await self._request(
            "POST", f"/v1/chain/{chain_id}/run/step/{step_number}", {
                "prompt": user_input,
                "agent_override": agent_id,
                "chain_args": chain_args or {},
            },
        )

    async def add_chain(self, chain_name: str) -> Chain:
        resp = await self._request(
            "POST", "/v1/chain", {"chain_name": chain_name}, expect=dict
        )
        chain = Chain.from_dict(resp)
        chain.name = chain.name or chain_name
        return chain

    async def import_chain(self, chain_name: str, steps: Any) -> str:
        return await self._request("POST", "/v1/chain/import", {
            "chain_name": chain_name,
            "steps": steps,
        }, field="message")

    async def rename_chain(self, chain_id: str, new_name: str) -> str:
        return await self._request(
            "PUT", f"/v1/chain/{chain_id}", {"new_name": new_name}, field="message"
        )

    async def delete_chain(self, chain_id: str) -> str:
        return await self._request(
            "DELETE", f"/v1/chain/{chain_id}", field="message"
        )

    async def add_step(
        self,
        chain_id: str,
        step_number: int,
        agent_id: str,
        prompt_type: str,
        prompt: Any,
    ) -> str:
        return await self._request("POST", f"/v1/chain/{chain_id}/step", {
            "step_number": step_number,
            "agent_id": agent_id,
            "prompt_type": prompt_type,
            "prompt": prompt,
        }, field="message")

    async def update_step(
        self,
        chain_id: str,
        step_number: int,
        agent_id: str,
        prompt_type: str,
        prompt: Any,
    ) -> str:
        return await self._request(
            "PUT", f"/v1/chain/{chain_id}/step/{step_number}", {
                "step_number": step_number,
                "agent_id": agent_id,
                "prompt_type": prompt_type,
                "prompt": prompt,
            }, field="message",
        )

    async def move_step(
        self, chain_id: str, old_step_number: int, new_step_number: int
    ) -> str:
        return await self._request("PATCH", f"/v1/chain/{chain_id}/step/move", {
            "old_step_number": old_step_number,
            "new_step_number": new_step_number,
        }, field="message")

    async def delete_step(self, chain_id: str, step_number: int) -> str:
        return await self._request(
            "DELETE", f"/v1/chain/{chain_id}/step/{step_number}", field="message"
        )
