"""Provider and extension endpoints."""

from __future__ import annotations

from typing import Any

from .base import BaseClient
from .models import Extension, Provider


class ProvidersMixin(BaseClient):
    """Operations under ``/v1/provider`` and ``/v1/extensions``."""

    async def get_providers(self) -> list[Provider]:
        """List all model providers known to the server."""
        items = await self._request_list("GET", "/v1/provider", "providers")
        return [Provider.from_dict(p) for p in items]

    async def get_providers_by_service(self, service: str) -> list[Provider]:
        """Providers offering a service such as ``llm``, ``tts`` or ``image``."""
        items = await self._request_list(
            "GET", f"/v1/providers/service/{service}", "providers"
        )
        return [Provider.from_dict(p) for p in items]

    async def get_provider_settings(self, provider_name: str) -> dict[str, Any]:
        return await self._request(
            "GET", f"/v1/provider/{provider_name}", field="settings", expect=dict
        )

    async def get_embed_providers(self) -> list[str]:
        """Names of providers that support embeddings."""
        return [p.name for p in await self.get_providers() if p.supports_embeddings]

    async def get_embedders(self) -> dict[str, Provider]:
        return {
            p.name: p for p in await self.get_providers() if p.supports_embeddings
        }

    async def get_extension_settings(self) -> Any:
        return await self._request(
            "GET", "/v1/extensions/settings", field="extension_settings"
        )

    async def get_extensions(self) -> list[Extension]:
        items = await self._request_list("GET", "/v1/extensions", "extensions")
        return [Extension.from_dict(e) for e in items]

    async def get_command_args(self, command_name: str) -> Any:
        return await self._request(
            "GET", f"/v1/extensions/{command_name}/args", field="command_args"
        )
