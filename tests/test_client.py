# Copyright (c) 2026 Beijing Volcano Engine Technology Co., Ltd.
# SPDX-License-Identifier: Apache-2.0

"""Tests for DataModelClient (dmquery/client.py)."""

from unittest.mock import AsyncMock

import pytest

from dmquery import ClientConfig, DataModelClient
from dmquery.resources import QueryBuilder
from dmquery.transport import HttpxTransport, Transport, TransportResponse


@pytest.fixture
def config(project):
    return ClientConfig(project=project, base_url="https://api.example.com", poll_interval=1.5)


def test_resources_share_the_transport(config, transport, token_provider):
    client = DataModelClient(config, token_provider, transport=transport)
    assert client.transport is transport
    for resource in (client.graphql, client.sync, client.search, client.aggregate):
        assert resource._transport is transport
        assert resource.project == config.project
    assert client.sync._poll_interval == 1.5


def test_query_builder_is_fresh_each_time(config, transport, token_provider, view):
    client = DataModelClient(config, token_provider, transport=transport)
    first = client.query_builder()
    first.with_nodes("pumps", view)
    second = client.query_builder()
    assert isinstance(second, QueryBuilder)
    assert second is not first
    assert second._with == {}


@pytest.mark.asyncio
async def test_injected_transport_is_not_closed(config, transport, token_provider):
    async with DataModelClient(config, token_provider, transport=transport):
        pass
    assert not transport.closed


@pytest.mark.asyncio
async def test_default_transport_is_owned_and_closed(config, token_provider):
    client = DataModelClient(config, token_provider)
    assert isinstance(client.transport, HttpxTransport)
    assert client.transport.base_url == "https://api.example.com"
    await client.aclose()
    assert client.transport.client.is_closed


@pytest.mark.asyncio
async def test_end_to_end_with_mock_transport(config, token_provider, view):
    transport = AsyncMock(spec=Transport)
    transport.send.return_value = TransportResponse(
        status_code=200, text='{"items": [{"aggregates": {"count": {"count": 3}}}]}'
    )
    async with DataModelClient(config, token_provider, transport=transport) as client:
        assert await client.aggregate.count(view) == 3

    method, path, body, token = transport.send.await_args.args
    assert method == "POST"
    assert path.endswith("/models/instances/aggregate")
    assert token == token_provider.token
    assert token_provider.calls == 1
