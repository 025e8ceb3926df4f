# Copyright (c) 2026 Beijing Volcano Engine Technology Co., Ltd.
# SPDX-License-Identifier: Apache-2.0
"""Request and response types for the instances search endpoint."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pydantic import Field, field_validator

from .common import (
    WireModel,
    coerce_filter,
    coerce_view,
    get_dict,
    get_int,
    get_list,
    get_str,
)

DEFAULT_INSTANCE_TYPE = "node"


class SearchSort(WireModel):
    property: List[str] = Field(default_factory=list)
    direction: Optional[str] = None
    nulls_first: Optional[bool] = None


class UnitReference(WireModel):
    external_id: str


class TargetUnit(WireModel):
    """Requests the value of ``property`` converted to ``unit``."""

    property: str
    unit: Optional[UnitReference] = None


class SearchRequest(WireModel):
    """Body of ``POST /models/instances/search``."""

    view: Dict[str, Any]
    query: Optional[str] = None
    properties: Optional[List[str]] = None
    filter: Optional[Dict[str, Any]] = None
    limit: int = 100
    instance_type: Optional[str] = None
    sort: Optional[List[SearchSort]] = None
    target_units: Optional[List[TargetUnit]] = None

    @field_validator("view", mode="before")
    @classmethod
    def normalize_view(cls, value: Any) -> Any:
        return coerce_view(value)

    @field_validator("filter", mode="before")
    @classmethod
    def normalize_filter(cls, value: Any) -> Any:
        return coerce_filter(value)


@dataclass
class NodeReference:
    space: str = ""
    external_id: str = ""

    @classmethod
    def from_dict(cls, payload: Any) -> Optional["NodeReference"]:
        if not isinstance(payload, dict):
            return None
        return cls(space=get_str(payload, "space"), external_id=get_str(payload, "externalId"))


@dataclass
class SearchResultItem:
    instance_type: str = DEFAULT_INSTANCE_TYPE
    space: str = ""
    external_id: str = ""
    version: int = 0
    last_updated_time: Optional[int] = None
    created_time: Optional[int] = None
    properties: Dict[str, Any] = field(default_factory=dict)
    start_node: Optional[NodeReference] = None
    end_node: Optional[NodeReference] = None

    @classmethod
    def from_dict(cls, item: Dict[str, Any]) -> "SearchResultItem":
        version = get_int(item, "version")
        return cls(
            instance_type=get_str(item, "instanceType", DEFAULT_INSTANCE_TYPE),
            space=get_str(item, "space"),
            external_id=get_str(item, "externalId"),
            version=version if version is not None else 0,
            last_updated_time=get_int(item, "lastUpdatedTime"),
            created_time=get_int(item, "createdTime"),
            properties=get_dict(item, "properties"),
            start_node=NodeReference.from_dict(item.get("startNode")),
            end_node=NodeReference.from_dict(item.get("endNode")),
        )


@dataclass
class SearchResponse:
    items: List[SearchResultItem] = field(default_factory=list)

    @property
    def has_more(self) -> bool:
        return len(self.items) > 0

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "SearchResponse":
        if not isinstance(payload, dict):
            return cls()
        return cls(
            items=[
                SearchResultItem.from_dict(item)
                for item in get_list(payload, "items")
                if isinstance(item, dict)
            ]
        )
