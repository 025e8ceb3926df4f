# Copyright (c) 2026 Beijing Volcano Engine Technology Co., Ltd.
# SPDX-License-Identifier: Apache-2.0

"""Tests for HttpxTransport (dmquery/transport/http_transport.py)."""

import json

import httpx
import pytest

from dmquery.errors import InvalidArgumentError
from dmquery.transport import HttpxTransport, TransportResponse


def _client(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_send_posts_json_with_bearer_token():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"items": []})

    async with _client(handler) as client:
        transport = HttpxTransport("https://api.example.com/", client=client)
        response = await transport.send("POST", "/api/v1/projects/p/models/instances/query", {"a": 1}, "tok")

    assert seen == {
        "method": "POST",
        "url": "https://api.example.com/api/v1/projects/p/models/instances/query",
        "auth": "Bearer tok",
        "body": {"a": 1},
    }
    assert response.is_success
    assert response.json() == {"items": []}


@pytest.mark.asyncio
async def test_non_success_is_returned_not_raised():
    async with _client(lambda request: httpx.Response(500, text="boom")) as client:
        transport = HttpxTransport("https://api.example.com", client=client)
        response = await transport.send("POST", "/x", {}, "tok")
    assert response == TransportResponse(status_code=500, text="boom")
    assert not response.is_success


@pytest.mark.asyncio
async def test_shared_client_is_not_closed():
    client = _client(lambda request: httpx.Response(200))
    transport = HttpxTransport("https://api.example.com", client=client)
    await transport.close()
    assert not client.is_closed
    await client.aclose()


@pytest.mark.asyncio
async def test_owned_client_is_closed():
    transport = HttpxTransport("https://api.example.com", timeout=5)
    await transport.close()
    assert transport.client.is_closed


def test_base_url_required():
    with pytest.raises(InvalidArgumentError):
        HttpxTransport("")


def test_empty_body_parses_as_empty_object():
    assert TransportResponse(status_code=204, text="").json() == {}
