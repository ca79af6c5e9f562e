"""Shared fixtures: a client pointed at a respx-mocked AGiXT server."""

import json

import pytest
import respx

from agixt import AGiXTClient

BASE_URI = "https://x.test"


@pytest.fixture
def api():
    """respx router standing in for the AGiXT server."""
    with respx.mock(base_url=BASE_URI, assert_all_called=False) as router:
        yield router


@pytest.fixture
async def client(api):
    """Client with a trailing-slash base URI and a Bearer-prefixed key."""
    c = AGiXTClient(BASE_URI + "/", api_key="Bearer test-token")
    yield c
    await c.aclose()


def sent_json(route):
    """JSON body of the last request a route received."""
    return json.loads(route.calls.last.request.content)
