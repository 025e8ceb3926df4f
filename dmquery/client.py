# Copyright (c) 2026 Beijing Volcano Engine Technology Co., Ltd.
# SPDX-License-Identifier: Apache-2.0
"""Entry point tying the resources to one transport."""

from __future__ import annotations

from typing import Optional

from dmquery.config import ClientConfig
from dmquery.errors import InvalidArgumentError
from dmquery.resources import (
    AggregateResource,
    GraphQLResource,
    QueryBuilder,
    SearchResource,
    SyncResource,
    TokenProvider,
)
from dmquery.transport import HttpxTransport, Transport
from dmquery.utils.logger import get_logger

logger = get_logger(__name__)


class DataModelClient:
    """Client for the instance and GraphQL endpoints of one project.

    Example::

        async with DataModelClient(ClientConfig.from_env(), get_token) as client:
            hits = await client.search.search(pumps, query="centrifugal")

    All resources share one transport. When ``transport`` is omitted an
    ``HttpxTransport`` is created and closed together with the client.
    """

    def __init__(
        self,
        config: ClientConfig,
        token_provider: TokenProvider,
        transport: Optional[Transport] = None,
    ):
        if config is None:
            raise InvalidArgumentError("config cannot be null")
        if token_provider is None:
            raise InvalidArgumentError("token_provider cannot be null")
        self.config = config
        self._token_provider = token_provider
        self._owns_transport = transport is None
        if transport is None:
            transport = HttpxTransport(config.base_url, timeout=config.timeout)
        self._transport = transport

        self.graphql = GraphQLResource(config.project, self._transport, token_provider)
        self.sync = SyncResource(
            config.project, self._transport, token_provider, poll_interval=config.poll_interval
        )
        self.search = SearchResource(config.project, self._transport, token_provider)
        self.aggregate = AggregateResource(config.project, self._transport, token_provider)
        logger.debug("Created client for project %s at %s", config.project, config.base_url)

    @property
    def transport(self) -> Transport:
        return self._transport

    def query_builder(self) -> QueryBuilder:
        """Return a new, empty ``QueryBuilder``; builders are not reusable across tasks."""
        return QueryBuilder(self.config.project, self._transport, self._token_provider)

    async def aclose(self) -> None:
        if self._owns_transport:
            await self._transport.close()

    async def __aenter__(self) -> "DataModelClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
