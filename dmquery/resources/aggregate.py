# Copyright (c) 2026 Beijing Volcano Engine Technology Co., Ltd.
# SPDX-License-Identifier: Apache-2.0
"""Aggregations over instances through ``POST /models/instances/aggregate``."""

from __future__ import annotations

from typing import Any, List, Optional, Sequence, Union

from dmquery.errors import InvalidArgumentError
from dmquery.filters import ViewRef, filter_to_dict
from dmquery.models.aggregate import (
    AggregateOperation,
    AggregateRequest,
    AggregateResponse,
    AggregateType,
    AggregateValue,
    HistogramBucket,
)
from dmquery.models.search import TargetUnit
from dmquery.utils.logger import get_logger

from .base import Resource, require_text, to_filter_node

logger = get_logger(__name__)

DEFAULT_LIMIT = 25
MAX_LIMIT = 10000
MAX_OPERATIONS = 5


def validate_aggregate_request(request: AggregateRequest) -> None:
    if request is None:
        raise InvalidArgumentError("request cannot be null")
    if not request.view:
        raise InvalidArgumentError("view cannot be null")
    if not request.aggregates:
        raise InvalidArgumentError("At least one aggregate operation is required")
    if len(request.aggregates) > MAX_OPERATIONS:
        raise InvalidArgumentError(f"Maximum {MAX_OPERATIONS} aggregate operations per request")
    if request.limit <= 0 or request.limit > MAX_LIMIT:
        raise InvalidArgumentError(f"limit must be between 1 and {MAX_LIMIT}")
    for operation in request.aggregates:
        if not operation.property:
            raise InvalidArgumentError("AggregateOperation.property cannot be null or empty")
        if not operation.aggregate:
            raise InvalidArgumentError("AggregateOperation.aggregate cannot be null or empty")


def _first_value(response: AggregateResponse) -> Optional[AggregateValue]:
    if not response.items:
        return None
    aggregates = response.items[0].aggregates
    if not aggregates:
        return None
    return next(iter(aggregates.values()))


class AggregateResource(Resource):
    def build_request(
        self,
        view: ViewRef,
        aggregates: Sequence[Union[AggregateOperation, dict]],
        group_by: Optional[Sequence[str]] = None,
        query: Optional[str] = None,
        properties: Optional[Sequence[str]] = None,
        filter: Any = None,
        limit: int = DEFAULT_LIMIT,
        instance_type: str = "node",
        target_units: Optional[Sequence[TargetUnit]] = None,
    ) -> AggregateRequest:
        if not isinstance(view, ViewRef):
            raise InvalidArgumentError("view must be a ViewRef")
        if aggregates is None:
            raise InvalidArgumentError("aggregates cannot be null")
        node = to_filter_node(filter)
        request = AggregateRequest(
            view=view,
            aggregates=list(aggregates),
            group_by=list(group_by) if group_by is not None else None,
            query=query,
            properties=list(properties) if properties is not None else None,
            filter=filter_to_dict(node) if node is not None else None,
            limit=limit,
            instance_type=instance_type,
            target_units=list(target_units) if target_units is not None else None,
        )
        validate_aggregate_request(request)
        return request

    async def aggregate(
        self,
        view: ViewRef,
        aggregates: Sequence[Union[AggregateOperation, dict]],
        group_by: Optional[Sequence[str]] = None,
        query: Optional[str] = None,
        properties: Optional[Sequence[str]] = None,
        filter: Any = None,
        limit: int = DEFAULT_LIMIT,
        instance_type: str = "node",
        target_units: Optional[Sequence[TargetUnit]] = None,
    ) -> AggregateResponse:
        """Run up to five aggregations, optionally bucketed by ``group_by``."""
        request = self.build_request(
            view,
            aggregates,
            group_by=group_by,
            query=query,
            properties=properties,
            filter=filter,
            limit=limit,
            instance_type=instance_type,
            target_units=target_units,
        )
        return await self._execute(request)

    async def aggregate_request(self, request: AggregateRequest) -> AggregateResponse:
        validate_aggregate_request(request)
        return await self._execute(request)

    async def _execute(self, request: AggregateRequest) -> AggregateResponse:
        payload = await self._post(self._instances_path("aggregate"), request.to_wire(), "Aggregate")
        return AggregateResponse.from_dict(payload)

    async def _single(
        self,
        view: ViewRef,
        property: str,
        aggregate: AggregateType,
        filter: Any,
        instance_type: str,
        interval: Optional[float] = None,
    ) -> Optional[AggregateValue]:
        require_text(property, "property")
        response = await self.aggregate(
            view,
            [AggregateOperation(property=property, aggregate=aggregate, interval=interval)],
            filter=filter,
            instance_type=instance_type,
        )
        return _first_value(response)

    async def count(self, view: ViewRef, filter: Any = None, instance_type: str = "node") -> int:
        """Number of instances in ``view`` matching ``filter``; 0 when nothing is returned."""
        value = await self._single(view, "*", AggregateType.COUNT, filter, instance_type)
        if value is None or value.count is None:
            return 0
        return value.count

    async def avg(
        self, view: ViewRef, property: str, filter: Any = None, instance_type: str = "node"
    ) -> Optional[float]:
        value = await self._single(view, property, AggregateType.AVG, filter, instance_type)
        return value.avg if value is not None else None

    async def sum(
        self, view: ViewRef, property: str, filter: Any = None, instance_type: str = "node"
    ) -> Optional[float]:
        value = await self._single(view, property, AggregateType.SUM, filter, instance_type)
        return value.sum if value is not None else None

    async def min(
        self, view: ViewRef, property: str, filter: Any = None, instance_type: str = "node"
    ) -> Optional[float]:
        value = await self._single(view, property, AggregateType.MIN, filter, instance_type)
        return value.min if value is not None else None

    async def max(
        self, view: ViewRef, property: str, filter: Any = None, instance_type: str = "node"
    ) -> Optional[float]:
        value = await self._single(view, property, AggregateType.MAX, filter, instance_type)
        return value.max if value is not None else None

    async def histogram(
        self,
        view: ViewRef,
        property: str,
        interval: float,
        filter: Any = None,
        instance_type: str = "node",
    ) -> List[HistogramBucket]:
        """Bucket ``property`` values into fixed-width ``interval`` buckets."""
        if isinstance(interval, bool) or not isinstance(interval, (int, float)) or interval <= 0:
            raise InvalidArgumentError("interval must be greater than 0")
        value = await self._single(
            view, property, AggregateType.HISTOGRAM, filter, instance_type, interval=float(interval)
        )
        if value is None or value.histogram is None:
            return []
        return value.histogram
