# Copyright (c) 2026 Beijing Volcano Engine Technology Co., Ltd.
# SPDX-License-Identifier: Apache-2.0
"""Full-text and filtered search through ``POST /models/instances/search``."""

from __future__ import annotations

from typing import Any, Optional, Sequence

from dmquery.errors import InvalidArgumentError
from dmquery.filters import ViewRef, filter_to_dict
from dmquery.models.search import SearchRequest, SearchResponse, SearchSort, TargetUnit
from dmquery.utils.logger import get_logger

from .base import Resource, to_filter_node

logger = get_logger(__name__)

DEFAULT_LIMIT = 100
MAX_LIMIT = 1000


def validate_search_request(request: SearchRequest) -> None:
    if request is None:
        raise InvalidArgumentError("request cannot be null")
    if not request.view:
        raise InvalidArgumentError("view cannot be null")
    if not request.query and request.filter is None:
        raise InvalidArgumentError("At least one of query or filter must be provided")
    if request.limit <= 0 or request.limit > MAX_LIMIT:
        raise InvalidArgumentError(f"limit must be between 1 and {MAX_LIMIT}")


class SearchResource(Resource):
    def build_request(
        self,
        view: ViewRef,
        query: Optional[str] = None,
        properties: Optional[Sequence[str]] = None,
        filter: Any = None,
        limit: int = DEFAULT_LIMIT,
        instance_type: str = "node",
        sort: Optional[Sequence[SearchSort]] = None,
        target_units: Optional[Sequence[TargetUnit]] = None,
    ) -> SearchRequest:
        if not isinstance(view, ViewRef):
            raise InvalidArgumentError("view must be a ViewRef")
        node = to_filter_node(filter)
        request = SearchRequest(
            view=view,
            query=query,
            properties=list(properties) if properties is not None else None,
            filter=filter_to_dict(node) if node is not None else None,
            limit=limit,
            instance_type=instance_type,
            sort=list(sort) if sort is not None else None,
            target_units=list(target_units) if target_units is not None else None,
        )
        validate_search_request(request)
        return request

    async def search(
        self,
        view: ViewRef,
        query: Optional[str] = None,
        properties: Optional[Sequence[str]] = None,
        filter: Any = None,
        limit: int = DEFAULT_LIMIT,
        instance_type: str = "node",
        sort: Optional[Sequence[SearchSort]] = None,
        target_units: Optional[Sequence[TargetUnit]] = None,
    ) -> SearchResponse:
        """Search instances of ``view`` by text ``query``, ``filter`` or both.

        ``properties`` limits which text properties the query is matched
        against. Results are ranked by the server.
        """
        request = self.build_request(
            view,
            query=query,
            properties=properties,
            filter=filter,
            limit=limit,
            instance_type=instance_type,
            sort=sort,
            target_units=target_units,
        )
        return await self._execute(request)

    async def search_request(self, request: SearchRequest) -> SearchResponse:
        validate_search_request(request)
        return await self._execute(request)

    async def _execute(self, request: SearchRequest) -> SearchResponse:
        logger.debug("Searching view %s (limit=%s)", request.view.get("externalId"), request.limit)
        payload = await self._post(self._instances_path("search"), request.to_wire(), "Search")
        return SearchResponse.from_dict(payload)
