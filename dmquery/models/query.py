# Copyright (c) 2026 Beijing Volcano Engine Technology Co., Ltd.
# SPDX-License-Identifier: Apache-2.0
"""Request and response types for the instances query endpoint."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import Field, field_validator

from .common import WireModel, coerce_filter, coerce_view, get_list, parse_cursors


class EdgeDirection(str, Enum):
    OUTWARDS = "outwards"
    INWARDS = "inwards"


class ChainTo(str, Enum):
    SOURCE = "source"
    DESTINATION = "destination"


class NodesExpression(WireModel):
    filter: Optional[Dict[str, Any]] = None
    from_: Optional[str] = Field(default=None, alias="from")
    chain_to: Optional[str] = None
    direction: Optional[str] = None

    @field_validator("filter", mode="before")
    @classmethod
    def normalize_filter(cls, value: Any) -> Any:
        return coerce_filter(value)


class EdgesExpression(WireModel):
    filter: Optional[Dict[str, Any]] = None
    from_: Optional[str] = Field(default=None, alias="from")
    max_distance: Optional[int] = None
    direction: Optional[str] = None
    node_filter: Optional[Dict[str, Any]] = None
    termination_filter: Optional[Dict[str, Any]] = None
    limit_each: Optional[int] = None
    chain_to: Optional[str] = None

    @field_validator("filter", "node_filter", "termination_filter", mode="before")
    @classmethod
    def normalize_filters(cls, value: Any) -> Any:
        return coerce_filter(value)


class ResultSetExpression(WireModel):
    nodes: Optional[NodesExpression] = None
    edges: Optional[EdgesExpression] = None
    limit: int = 1000


class SourceSelection(WireModel):
    source: Dict[str, Any]
    properties: List[str] = Field(default_factory=list)

    @field_validator("source", mode="before")
    @classmethod
    def normalize_source(cls, value: Any) -> Any:
        return coerce_view(value)


class SelectExpression(WireModel):
    sources: List[SourceSelection] = Field(default_factory=list)


class QueryRequest(WireModel):
    """Body of ``POST /models/instances/query``."""

    with_: Dict[str, ResultSetExpression] = Field(default_factory=dict, alias="with")
    select: Dict[str, SelectExpression] = Field(default_factory=dict)
    cursors: Optional[Dict[str, Optional[str]]] = None
    parameters: Optional[Dict[str, Any]] = None

    def to_wire(self) -> Dict[str, Any]:
        payload = super().to_wire()
        if self.cursors is not None:
            payload["cursors"] = dict(self.cursors)
        if self.parameters is not None:
            # Null parameter values are dropped by exclude_none; put them back.
            parameters = payload.setdefault("parameters", {})
            for name, value in self.parameters.items():
                if value is None:
                    parameters[name] = None
        return payload


@dataclass
class QueryResultSet:
    """Instances of one result set, left as raw JSON objects.

    Their shape depends on the ``select`` clause, so decoding is up to the
    caller.
    """

    items: List[Dict[str, Any]] = field(default_factory=list)


@dataclass
class QueryResponse:
    items: Dict[str, QueryResultSet] = field(default_factory=dict)
    next_cursor: Optional[Dict[str, Optional[str]]] = None

    @property
    def has_next(self) -> bool:
        """True when at least one result set reports a further cursor."""
        if not self.next_cursor:
            return False
        return any(cursor is not None for cursor in self.next_cursor.values())

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "QueryResponse":
        result = cls()
        raw_items = payload.get("items") if isinstance(payload, dict) else None
        if isinstance(raw_items, dict):
            for name in raw_items:
                result.items[name] = QueryResultSet(items=get_list(raw_items, name))
        if isinstance(payload, dict):
            result.next_cursor = parse_cursors(payload)
        return result
