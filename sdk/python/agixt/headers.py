"""Shared request header state for one client instance."""

from __future__ import annotations

import asyncio
import re

_BEARER = re.compile(r"^bearer\s+", re.IGNORECASE)


def normalize_credential(value: str | None) -> str:
    """Strip one leading ``Bearer`` prefix; the server expects the raw token."""
    if not value:
        return ""
    return _BEARER.sub("", value.strip(), count=1)


class HeaderState:
    """Header map shared by every call of a client.

    One writer at a time; readers get a copied snapshot so a concurrent
    login never mutates headers of a request already in flight.
    """

    def __init__(self, credential: str | None = None):
        self._lock = asyncio.Lock()
        self._headers: dict[str, str] = {"Content-Type": "application/json"}
        token = normalize_credential(credential)
        if token:
            self._headers["Authorization"] = token

    async def snapshot(self) -> dict[str, str]:
        async with self._lock:
            return dict(self._headers)

    async def set_authorization(self, credential: str) -> str:
        token = normalize_credential(credential)
        async with self._lock:
            if token:
                self._headers["Authorization"] = token
            else:
                self._headers.pop("Authorization", None)
        return token

    async def clear_authorization(self) -> None:
        async with self._lock:
            self._headers.pop("Authorization", None)

    @property
    def authorization(self) -> str | None:
        """Current token without taking the lock; for inspection only."""
        return self._headers.get("Authorization")
