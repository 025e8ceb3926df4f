# Copyright (c) 2026 Beijing Volcano Engine Technology Co., Ltd.
# SPDX-License-Identifier: Apache-2.0
"""Request and response types for the instances aggregate endpoint."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import Field, field_validator

from .common import (
    WireModel,
    coerce_filter,
    coerce_view,
    get_dict,
    get_float,
    get_int,
    get_list,
)
from .search import TargetUnit


class AggregateType(str, Enum):
    COUNT = "count"
    SUM = "sum"
    AVG = "avg"
    MIN = "min"
    MAX = "max"
    HISTOGRAM = "histogram"


class AggregateOperation(WireModel):
    """One aggregation, e.g. ``AggregateOperation(property="*", aggregate="count")``.

    ``interval`` is only meaningful for histograms.
    """

    property: str = ""
    aggregate: str = ""
    interval: Optional[float] = None

    @field_validator("aggregate", mode="before")
    @classmethod
    def normalize_aggregate(cls, value: Any) -> Any:
        if isinstance(value, AggregateType):
            return value.value
        return value


class AggregateRequest(WireModel):
    """Body of ``POST /models/instances/aggregate``."""

    view: Dict[str, Any]
    aggregates: List[AggregateOperation] = Field(default_factory=list)
    group_by: Optional[List[str]] = None
    query: Optional[str] = None
    properties: Optional[List[str]] = None
    filter: Optional[Dict[str, Any]] = None
    instance_type: Optional[str] = None
    limit: int = 25
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
class HistogramBucket:
    start: float = 0.0
    count: int = 0


@dataclass
class AggregateValue:
    count: Optional[int] = None
    sum: Optional[float] = None
    avg: Optional[float] = None
    min: Optional[float] = None
    max: Optional[float] = None
    histogram: Optional[List[HistogramBucket]] = None

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "AggregateValue":
        value = cls(
            count=get_int(payload, "count"),
            sum=get_float(payload, "sum"),
            avg=get_float(payload, "avg"),
            min=get_float(payload, "min"),
            max=get_float(payload, "max"),
        )
        if isinstance(payload.get("histogram"), list):
            buckets = []
            for bucket in get_list(payload, "histogram"):
                if not isinstance(bucket, dict):
                    continue
                start = get_float(bucket, "start")
                count = get_int(bucket, "count")
                buckets.append(
                    HistogramBucket(
                        start=start if start is not None else 0.0,
                        count=count if count is not None else 0,
                    )
                )
            value.histogram = buckets
        return value


@dataclass
class AggregateResultItem:
    group: Dict[str, Any] = field(default_factory=dict)
    aggregates: Dict[str, AggregateValue] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, item: Dict[str, Any]) -> "AggregateResultItem":
        aggregates = {
            name: AggregateValue.from_dict(raw)
            for name, raw in get_dict(item, "aggregates").items()
            if isinstance(raw, dict)
        }
        return cls(group=get_dict(item, "group"), aggregates=aggregates)


@dataclass
class AggregateResponse:
    items: List[AggregateResultItem] = field(default_factory=list)

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "AggregateResponse":
        if not isinstance(payload, dict):
            return cls()
        return cls(
            items=[
                AggregateResultItem.from_dict(item)
                for item in get_list(payload, "items")
                if isinstance(item, dict)
            ]
        )
