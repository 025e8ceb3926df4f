# Copyright (c) 2026 Beijing Volcano Engine Technology Co., Ltd.
# SPDX-License-Identifier: Apache-2.0
"""
Fluent builder for ``POST /models/instances/query``.

Result sets are registered by name, then ``build()`` assembles the request
and ``execute()`` sends it::

    response = await (
        client.query_builder()
        .with_nodes("pumps", pump_view, filter=running, limit=100)
        .with_edges("flows", "pumps", direction=EdgeDirection.OUTWARDS)
        .with_nodes_from("targets", "flows")
        .execute()
    )

A builder is stateful and must not be shared between concurrent tasks.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Union

from dmquery.errors import InvalidArgumentError, InvalidStateError
from dmquery.filters import ViewRef, filter_to_dict, scope_to_view
from dmquery.models.query import (
    ChainTo,
    EdgeDirection,
    EdgesExpression,
    NodesExpression,
    QueryRequest,
    QueryResponse,
    ResultSetExpression,
    SelectExpression,
    SourceSelection,
)
from dmquery.utils.logger import get_logger

from .base import Resource, require_positive, require_text, to_filter_node

logger = get_logger(__name__)

DEFAULT_LIMIT = 1000


def _require_view(view: Any) -> ViewRef:
    if not isinstance(view, ViewRef):
        raise InvalidArgumentError("view must be a ViewRef")
    return view


def _wire_filter(value: Any, name: str = "filter") -> Optional[Dict[str, Any]]:
    node = to_filter_node(value, name)
    return filter_to_dict(node) if node is not None else None


def _direction_value(direction: Union[EdgeDirection, str]) -> str:
    try:
        return EdgeDirection(direction).value
    except ValueError:
        raise InvalidArgumentError("direction must be 'outwards' or 'inwards'") from None


def _chain_to_value(chain_to: Union[ChainTo, str]) -> str:
    try:
        return ChainTo(chain_to).value
    except ValueError:
        raise InvalidArgumentError("chain_to must be 'source' or 'destination'") from None


def _select_all(view: ViewRef) -> SelectExpression:
    return SelectExpression(sources=[SourceSelection(source=view, properties=[])])


class QueryBuilder(Resource):
    """Assembles multi-result-set graph queries."""

    def __init__(self, project, transport, token_provider):
        super().__init__(project, transport, token_provider)
        self._with: Dict[str, ResultSetExpression] = {}
        self._select: Dict[str, SelectExpression] = {}
        self._view_info: Dict[str, ViewRef] = {}
        self._cursors: Optional[Dict[str, Optional[str]]] = None
        self._parameters: Optional[Dict[str, Any]] = None

    def with_nodes(
        self,
        name: str,
        view: ViewRef,
        filter: Any = None,
        limit: int = DEFAULT_LIMIT,
    ) -> "QueryBuilder":
        """Add a node result set scoped to ``view``.

        The filter is always combined with ``hasData`` on the view, and the
        result set selects all view properties unless ``select`` overrides it.
        """
        require_text(name, "name")
        _require_view(view)
        require_positive(limit, "limit")
        combined = scope_to_view(view, to_filter_node(filter))
        self._with[name] = ResultSetExpression(
            nodes=NodesExpression(filter=filter_to_dict(combined)),
            limit=limit,
        )
        self._view_info[name] = view
        return self

    def with_edges(
        self,
        name: str,
        from_: str,
        filter: Any = None,
        direction: Union[EdgeDirection, str] = EdgeDirection.OUTWARDS,
        limit: int = DEFAULT_LIMIT,
        max_distance: Optional[int] = None,
        node_filter: Any = None,
        termination_filter: Any = None,
        limit_each: Optional[int] = None,
        chain_to: Optional[Union[ChainTo, str]] = None,
    ) -> "QueryBuilder":
        """Traverse edges starting from the result set ``from_``."""
        require_text(name, "name")
        require_text(from_, "from_")
        require_positive(limit, "limit")
        if max_distance is not None:
            require_positive(max_distance, "max_distance")
        if limit_each is not None:
            require_positive(limit_each, "limit_each")
            if max_distance != 1:
                raise InvalidArgumentError("limit_each can only be used when max_distance is 1")
        self._with[name] = ResultSetExpression(
            edges=EdgesExpression(
                from_=from_,
                filter=_wire_filter(filter),
                direction=_direction_value(direction),
                max_distance=max_distance,
                node_filter=_wire_filter(node_filter, "node_filter"),
                termination_filter=_wire_filter(termination_filter, "termination_filter"),
                limit_each=limit_each,
                chain_to=_chain_to_value(chain_to) if chain_to is not None else None,
            ),
            limit=limit,
        )
        self._view_info.pop(name, None)
        return self

    def with_nodes_from(
        self,
        name: str,
        from_: str,
        chain_to: Union[ChainTo, str] = ChainTo.DESTINATION,
        filter: Any = None,
        limit: int = DEFAULT_LIMIT,
    ) -> "QueryBuilder":
        """Collect the nodes at one end of the edges in result set ``from_``."""
        require_text(name, "name")
        require_text(from_, "from_")
        chain = _chain_to_value(chain_to)
        require_positive(limit, "limit")
        self._with[name] = ResultSetExpression(
            nodes=NodesExpression(from_=from_, chain_to=chain, filter=_wire_filter(filter)),
            limit=limit,
        )
        self._view_info.pop(name, None)
        return self

    def select(self, name: str, view: ViewRef, *properties: str) -> "QueryBuilder":
        """Choose which properties of ``view`` are returned for result set ``name``.

        Without properties every property of the view is returned.
        """
        require_text(name, "result set name")
        _require_view(view)
        self._select[name] = SelectExpression(
            sources=[SourceSelection(source=view, properties=list(properties))]
        )
        return self

    def with_cursors(self, cursors: Optional[Mapping[str, Optional[str]]]) -> "QueryBuilder":
        self._cursors = dict(cursors) if cursors is not None else None
        return self

    def with_parameter(self, name: str, value: Any) -> "QueryBuilder":
        require_text(name, "Parameter name")
        if self._parameters is None:
            self._parameters = {}
        self._parameters[name] = value
        return self

    def with_parameters(self, parameters: Mapping[str, Any]) -> "QueryBuilder":
        if parameters is None:
            raise InvalidArgumentError("parameters cannot be null")
        for name, value in parameters.items():
            self.with_parameter(name, value)
        return self

    def build(self) -> QueryRequest:
        if not self._with:
            raise InvalidStateError(
                "At least one result set must be added using with_nodes, with_edges, or with_nodes_from"
            )
        select = dict(self._select)
        for name, view in self._view_info.items():
            if name not in select:
                select[name] = _select_all(view)
        return QueryRequest(
            with_=dict(self._with),
            select=select,
            cursors=dict(self._cursors) if self._cursors is not None else None,
            parameters=dict(self._parameters) if self._parameters is not None else None,
        )

    async def execute(self) -> QueryResponse:
        request = self.build()
        logger.debug("Executing query with result sets %s", list(request.with_))
        payload = await self._post(self._instances_path("query"), request.to_wire(), "Query")
        return QueryResponse.from_dict(payload)

    def reset(self) -> "QueryBuilder":
        self._with.clear()
        self._select.clear()
        self._view_info.clear()
        self._cursors = None
        self._parameters = None
        return self
