# Copyright (c) 2026 Beijing Volcano Engine Technology Co., Ltd.
# SPDX-License-Identifier: Apache-2.0
"""Request and response types for the instances sync endpoint."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import Field, field_validator

from .common import WireModel, coerce_filter, get_list, parse_cursors
from .query import SelectExpression


class SyncMode(str, Enum):
    """How the server backfills existing instances on the first sync call.

    ``ONE_PHASE`` is the server default and is omitted from requests.
    """

    ONE_PHASE = "onePhase"
    TWO_PHASE = "twoPhase"
    NO_BACKFILL = "noBackfill"


class SyncBackfillSort(WireModel):
    property: List[str] = Field(default_factory=list)
    direction: Optional[str] = None
    nulls_first: Optional[bool] = None


class SyncNodesQuery(WireModel):
    filter: Optional[Dict[str, Any]] = None

    @field_validator("filter", mode="before")
    @classmethod
    def normalize_filter(cls, value: Any) -> Any:
        return coerce_filter(value)


class SyncResultSetExpression(WireModel):
    nodes: Optional[SyncNodesQuery] = None
    limit: int = 1000


class SyncRequest(WireModel):
    """Body of ``POST /models/instances/sync``."""

    with_: Dict[str, SyncResultSetExpression] = Field(default_factory=dict, alias="with")
    select: Optional[Dict[str, SelectExpression]] = None
    cursors: Optional[Dict[str, Optional[str]]] = None
    mode: Optional[SyncMode] = None
    backfill_sort: Optional[List[SyncBackfillSort]] = None
    allow_expired_cursors: Optional[bool] = Field(
        default=None, alias="allowExpiredCursorsAndAcceptMissedDeletes"
    )

    def to_wire(self) -> Dict[str, Any]:
        payload = super().to_wire()
        if self.cursors is not None:
            # exclude_none also drops exhausted (None) cursors; send them as given.
            payload["cursors"] = dict(self.cursors)
        return payload


@dataclass
class SyncResultSet:
    nodes: List[Dict[str, Any]] = field(default_factory=list)


@dataclass
class SyncResponse:
    items: Dict[str, SyncResultSet] = field(default_factory=dict)
    next_cursor: Optional[Dict[str, Optional[str]]] = None

    @property
    def has_next(self) -> bool:
        if not self.next_cursor:
            return False
        return any(cursor is not None for cursor in self.next_cursor.values())

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "SyncResponse":
        result = cls()
        if not isinstance(payload, dict):
            return result
        raw_items = payload.get("items")
        if isinstance(raw_items, dict):
            for name in raw_items:
                result.items[name] = SyncResultSet(nodes=get_list(raw_items, name))
        result.next_cursor = parse_cursors(payload)
        return result


@dataclass
class SyncBatch:
    """One page delivered by ``SyncResource.stream_changes``.

    ``cursors`` are the cursors that were sent to obtain this page (``None``
    for the first page) and ``timestamp`` is the UTC time it was received.
    """

    response: SyncResponse
    cursors: Optional[Dict[str, Optional[str]]]
    timestamp: datetime

    @property
    def has_data(self) -> bool:
        return any(result_set.nodes for result_set in self.response.items.values())
