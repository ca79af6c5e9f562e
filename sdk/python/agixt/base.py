"""Connection handling shared by every AGiXT endpoint group.

All endpoint methods funnel through :meth:`BaseClient._request`, which sends
one request, maps failures to SDK errors and unwraps the documented envelope
field of the response.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from .errors import APIError, ConnectionError, DecodeError
from .headers import HeaderState

logger = logging.getLogger(__name__)

DEFAULT_BASE_URI = "http://localhost:7437"
DEFAULT_TIMEOUT = 120.0


def first_id_by_name(items: list[Any], name: str) -> str | None:
    """Return the id of the first item named exactly ``name``, in server order."""
    for item in items:
        if item.name == name:
            return item.id or None
    return None


class BaseClient:
    """Holds connection settings, header state and the HTTP transport."""

    def __init__(
        self,
        base_uri: str | None = None,
        api_key: str | None = None,
        verbose: bool = False,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._base_uri = (base_uri or DEFAULT_BASE_URI).rstrip("/")
        self._verbose = verbose
        self._timeout = timeout
        self._headers = HeaderState(api_key)
        self._owns_http = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout)

    @property
    def base_uri(self) -> str:
        return self._base_uri

    @property
    def verbose(self) -> bool:
        return self._verbose

    @property
    def timeout(self) -> float:
        return self._timeout

    @property
    def authorization(self) -> str | None:
        """The stored token, without any ``Bearer`` prefix."""
        return self._headers.authorization

    async def set_credential(self, credential: str) -> None:
        """Replace the token sent with every subsequent request."""
        await self._headers.set_authorization(credential)

    async def clear_credential(self) -> None:
        """Stop sending an Authorization header."""
        await self._headers.clear_authorization()

    async def aclose(self) -> None:
        """Close the HTTP transport if this client created it."""
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    def _url(self, path: str) -> str:
        return f"{self._base_uri}{path}"

    async def _send(
        self,
        method: str,
        path: str,
        body: Any = None,
        params: dict[str, Any] | None = None,
        binary: bool = False,
    ) -> httpx.Response:
        url = self._url(path)
        headers = await self._headers.snapshot()
        logger.debug("%s %s", method, url)
        try:
            resp = await self._http.request(
                method, url, json=body, params=params, headers=headers
            )
        except httpx.TransportError as e:
            raise ConnectionError(f"Failed to connect to {url}: {e}") from e

        if self._verbose:
            self._log_response(resp, binary)
        if not resp.is_success:
            raise APIError(resp.status_code, resp.text)
        return resp

    def _log_response(self, resp: httpx.Response, binary: bool) -> None:
        logger.info("Status Code: %s", resp.status_code)
        if binary and resp.is_success:
            logger.info("Response body: <%d bytes>", len(resp.content))
        else:
            logger.info("Response JSON:\n%s", resp.text)

    @staticmethod
    def _decode(resp: httpx.Response) -> Any:
        text = resp.text
        if resp.status_code == 204 or not text.strip():
            return {}
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise DecodeError(f"Response is not valid JSON: {e}", text) from e

    async def _request(
        self,
        method: str,
        path: str,
        body: Any = None,
        params: dict[str, Any] | None = None,
        field: str | None = None,
        expect: type | None = None,
    ) -> Any:
        """Send a JSON request and return the body, or ``body[field]``.

        With ``expect`` set (``dict`` or ``list``), a value of any other
        type raises :class:`DecodeError` instead of reaching the caller.
        """
        resp = await self._send(method, path, body, params)
        value = self._decode(resp)
        if field is not None:
            if not isinstance(value, dict) or field not in value:
                raise DecodeError(
                    f"Response from {method} {path} has no '{field}' field", resp.text
                )
            value = value[field]
        if expect is not None and not isinstance(value, expect):
            where = f"'{field}'" if field else "body"
            raise DecodeError(
                f"Response {where} from {method} {path} is not a JSON "
                f"{'object' if expect is dict else 'array'}",
                resp.text,
            )
        return value

    async def _request_list(self, method: str, path: str, *fields: str) -> list[Any]:
        """Like :meth:`_request` for endpoints answering with either a bare
        array or an object wrapping the array under one of ``fields``."""
        resp = await self._send(method, path)
        payload = self._decode(resp)
        if isinstance(payload, list):
            return payload
        if isinstance(payload, dict):
            for name in fields:
                if isinstance(payload.get(name), list):
                    return payload[name]
        raise DecodeError(
            f"Response from {method} {path} is neither a list nor has a "
            f"{' or '.join(repr(f) for f in fields)} list",
            resp.text,
        )

    async def _request_bytes(self, method: str, path: str, body: Any = None) -> bytes:
        resp = await self._send(method, path, body, binary=True)
        return resp.content
