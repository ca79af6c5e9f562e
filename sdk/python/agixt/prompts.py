"""Prompt template endpoints."""

from __future__ import annotations

from typing import Any

from .base import BaseClient, first_id_by_name
from .models import Prompt


class PromptsMixin(BaseClient):
    """Operations under ``/v1/prompt``."""

    async def add_prompt(
        self, prompt_name: str, prompt: str, prompt_category: str = "Default"
    ) -> Prompt:
        resp = await self._request("POST", "/v1/prompt", {
            "prompt_name": prompt_name,
            "prompt": prompt,
            "prompt_category": prompt_category,
        }, expect=dict)
        created = Prompt.from_dict(resp)
        created.name = created.name or prompt_name
        created.content = created.content or prompt
        created.category = created.category or prompt_category
        return created

    async def get_prompt(self, prompt_id: str) -> dict[str, Any]:
        return await self._request("GET", f"/v1/prompt/{prompt_id}", expect=dict)

    async def get_prompts(self, prompt_category: str = "Default") -> list[Prompt]:
        """Prompts of one category."""
        prompts = await self._request(
            "GET", "/v1/prompts",
            params={"prompt_category": prompt_category},
            field="prompts", expect=list,
        )
        return [Prompt.from_dict(p) for p in prompts]

    async def get_all_prompts(self) -> Any:
        """Global and user prompts with full details, as returned."""
        return await self._request("GET", "/v1/prompt/all")

    async def get_prompt_id_by_name(
        self, prompt_name: str, prompt_category: str = "Default"
    ) -> str | None:
        """Look up a prompt's id by exact name within a category."""
        return first_id_by_name(await self.get_prompts(prompt_category), prompt_name)

    async def get_prompt_categories(self) -> list[dict[str, Any]]:
        return await self._request(
            "GET", "/v1/prompt/categories", field="categories", expect=list
        )

    async def get_prompts_by_category_id(self, category_id: str) -> list[Prompt]:
        prompts = await self._request(
            "GET", f"/v1/prompt/category/{category_id}",
            field="prompts", expect=list,
        )
        return [Prompt.from_dict(p) for p in prompts]

    async def get_prompt_args(self, prompt_id: str) -> Any:
        return await self._request(
            "GET", f"/v1/prompt/{prompt_id}/args", field="prompt_args"
        )

    async def delete_prompt(self, prompt_id: str) -> str:
        return await self._request(
            "DELETE", f"/v1/prompt/{prompt_id}", field="message"
        )

    async def update_prompt(self, prompt_id: str, prompt: str) -> str:
        return await self._request(
            "PUT", f"/v1/prompt/{prompt_id}", {"prompt": prompt}, field="message"
        )

    async def rename_prompt(self, prompt_id: str, new_name: str) -> str:
        return await self._request(
            "PATCH", f"/v1/prompt/{prompt_id}",
            {"prompt_name": new_name}, field="message",
        )
