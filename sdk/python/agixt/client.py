"""AGiXT SDK client for Python.

Provides typed coroutines for every ID-keyed ``/v1`` endpoint of the AGiXT
HTTP API: agents, conversations, chains, prompts, providers, users and more.
"""

from __future__ import annotations

import logging
import os
from typing import Any
from urllib.parse import parse_qs, urlsplit

import httpx

from .agents import AgentsMixin
from .base import DEFAULT_TIMEOUT
from .chains import ChainsMixin
from .conversations import ConversationsMixin
from .errors import AuthError
from .models import Company, User
from .prompts import PromptsMixin
from .providers import ProvidersMixin
from .streaming import StreamingMixin

logger = logging.getLogger(__name__)

_TRUTHY = ("1", "true", "yes", "on")


def _query_param(uri: str, name: str) -> str | None:
    """First value of query parameter ``name`` in ``uri``, if any."""
    values = parse_qs(urlsplit(uri.strip()).query).get(name)
    return values[0] if values else None


class AGiXTClient(
    AgentsMixin,
    ConversationsMixin,
    ChainsMixin,
    PromptsMixin,
    ProvidersMixin,
    StreamingMixin,
):
    """Client for the AGiXT HTTP API.

    One instance may be shared by concurrent tasks; only the credential is
    mutable after construction.

    Usage::

        async with AGiXTClient("http://localhost:7437", api_key="...") as client:
            agent = await client.add_agent("my_agent")
            conv = await client.new_conversation(agent.id, "test_conversation")
            print(await client.chat(agent.id, "Hello!", conv.id))
    """

    @classmethod
    def from_env(cls, http_client: httpx.AsyncClient | None = None) -> "AGiXTClient":
        """Build a client from ``AGIXT_URI``, ``AGIXT_API_KEY``,
        ``AGIXT_VERBOSE`` and ``AGIXT_TIMEOUT``."""
        return cls(
            base_uri=os.environ.get("AGIXT_URI") or None,
            api_key=os.environ.get("AGIXT_API_KEY") or None,
            verbose=os.environ.get("AGIXT_VERBOSE", "").strip().lower() in _TRUTHY,
            timeout=float(os.environ.get("AGIXT_TIMEOUT") or DEFAULT_TIMEOUT),
            http_client=http_client,
        )

    # Authentication

    async def login(self, email: str, otp: str) -> str | None:
        """Log in with an email and one-time password.

        On success the issued token is installed for all later calls and
        returned. Returns ``None`` when the response carries no token.
        """
        resp = await self._request("POST", "/v1/login", {
            "email": email,
            "token": otp,
        })
        return await self._accept_token(resp)

    async def _accept_token(self, resp: Any) -> str | None:
        if not isinstance(resp, dict):
            return None
        token = resp.get("token")
        if not isinstance(token, str) or not token:
            detail = resp.get("detail")
            if not isinstance(detail, str):
                return None
            # Magic-link flow: the token rides in the verification URL.
            token = _query_param(detail, "token")
            if not token:
                return None
            logger.info("Log in at %s", detail)
        return await self._headers.set_authorization(token) or None

    async def register_user(self, email: str, first_name: str, last_name: str) -> str:
        """Register a user and log in with the issued MFA secret.

        Returns the ``otp_uri`` for an authenticator app, or the raw response
        body when the server did not issue one.
        """
        resp = await self._send("POST", "/v1/user", {
            "email": email,
            "first_name": first_name,
            "last_name": last_name,
        })
        payload = self._decode(resp)
        if not isinstance(payload, dict):
            return resp.text
        if payload.get("token"):
            await self._accept_token(payload)
        otp_uri = payload.get("otp_uri")
        if not isinstance(otp_uri, str) or not otp_uri:
            return resp.text
        mfa_secret = _query_param(otp_uri, "secret")
        if not mfa_secret:
            raise AuthError(f"Invalid OTP URI format: {otp_uri}")
        await self.login(email, mfa_secret)
        return otp_uri

    async def logout(self) -> None:
        """Forget the current token locally."""
        await self.clear_credential()

    # Users

    async def user_exists(self, email: str) -> bool:
        data = await self._request("GET", "/v1/user/exists", params={"email": email})
        return data if isinstance(data, bool) else False

    async def get_user(self) -> User:
        """The authenticated user."""
        return User.from_dict(await self._request("GET", "/v1/user", expect=dict))

    async def update_user(self, **updates: Any) -> dict[str, Any]:
        return await self._request("PUT", "/v1/user", updates)

    # Companies and invitations

    async def get_companies(self) -> list[Company]:
        items = await self._request_list("GET", "/v1/companies", "companies")
        return [Company.from_dict(c) for c in items]

    async def get_company(self, company_id: str) -> dict[str, Any]:
        return await self._request("GET", f"/v1/company/{company_id}")

    async def create_invitation(self, email: str, role: str = "user") -> dict[str, Any]:
        """Invite someone by email into the current company."""
        return await self._request("POST", "/v1/invitation", {
            "email": email,
            "role": role,
        })

    async def delete_invitation(self, invitation_id: str) -> str:
        return await self._request(
            "DELETE", f"/v1/invitation/{invitation_id}", field="message"
        )

    async def get_oauth_providers(self) -> list[dict[str, Any]]:
        return await self._request_list("GET", "/v1/oauth", "providers")

    # Media

    async def text_to_speech(self, text: str, voice: str = "default") -> bytes:
        """Synthesize speech; returns the raw audio bytes."""
        return await self._request_bytes("POST", "/v1/audio/speech", {
            "input": text,
            "voice": voice,
        })

    async def generate_image(self, prompt: str, n: int = 1) -> dict[str, Any]:
        return await self._request("POST", "/v1/images/generations", {
            "prompt": prompt,
            "n": n,
        })

