# Copyright (c) 2026 Beijing Volcano Engine Technology Co., Ltd.
# SPDX-License-Identifier: Apache-2.0
"""Incremental change tracking through ``POST /models/instances/sync``."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Any, AsyncIterator, Dict, List, Mapping, Optional, Sequence

from pydantic import ValidationError

from dmquery.errors import InvalidArgumentError
from dmquery.filters import ViewRef, filter_to_dict, scope_to_view, validate_property_path
from dmquery.models.query import SelectExpression, SourceSelection
from dmquery.models.sync import (
    SyncBackfillSort,
    SyncBatch,
    SyncMode,
    SyncNodesQuery,
    SyncRequest,
    SyncResponse,
    SyncResultSetExpression,
)
from dmquery.utils.logger import get_logger

from .base import Resource, require_positive, to_filter_node

logger = get_logger(__name__)

RESULT_SET_NAME = "items"
DEFAULT_LIMIT = 1000
DEFAULT_POLL_INTERVAL = 5.0


def _wire_mode(mode: SyncMode) -> Optional[SyncMode]:
    # onePhase is the server default and is left out of the request.
    if mode == SyncMode.ONE_PHASE:
        return None
    return mode


def _validate_backfill_sort(backfill_sort: Sequence[Any]) -> List[SyncBackfillSort]:
    """Coerce each entry to ``SyncBackfillSort`` and check its property path."""
    sorts = []
    for sort in backfill_sort:
        if not isinstance(sort, SyncBackfillSort):
            try:
                sort = SyncBackfillSort.model_validate(sort)
            except ValidationError as exc:
                raise InvalidArgumentError(f"Invalid backfill sort: {sort!r}") from exc
        if not sort.property:
            raise InvalidArgumentError("SyncBackfillSort.property cannot be null or empty")
        validate_property_path(sort.property, "SyncBackfillSort.property")
        sorts.append(sort)
    return sorts


class SyncResource(Resource):
    def __init__(self, project, transport, token_provider, poll_interval: float = DEFAULT_POLL_INTERVAL):
        super().__init__(project, transport, token_provider)
        self._poll_interval = poll_interval

    def build_request(
        self,
        view: ViewRef,
        cursors: Optional[Mapping[str, Optional[str]]] = None,
        filter: Any = None,
        limit: int = DEFAULT_LIMIT,
        mode: SyncMode = SyncMode.ONE_PHASE,
        backfill_sort: Optional[Sequence[SyncBackfillSort]] = None,
        allow_expired_cursors: Optional[bool] = None,
    ) -> SyncRequest:
        """Assemble the single-result-set request used by ``sync``."""
        if not isinstance(view, ViewRef):
            raise InvalidArgumentError("view must be a ViewRef")
        require_positive(limit, "limit")
        try:
            mode = SyncMode(mode)
        except ValueError:
            raise InvalidArgumentError(f"Unsupported sync mode: {mode!r}") from None
        if backfill_sort is not None:
            if mode != SyncMode.TWO_PHASE:
                raise InvalidArgumentError("backfill_sort can only be used with TWO_PHASE mode")
            backfill_sort = _validate_backfill_sort(backfill_sort)

        combined = scope_to_view(view, to_filter_node(filter))
        return SyncRequest(
            with_={
                RESULT_SET_NAME: SyncResultSetExpression(
                    nodes=SyncNodesQuery(filter=filter_to_dict(combined)),
                    limit=limit,
                )
            },
            select={
                RESULT_SET_NAME: SelectExpression(
                    sources=[SourceSelection(source=view, properties=[])]
                )
            },
            cursors=dict(cursors) if cursors is not None else None,
            mode=_wire_mode(mode),
            backfill_sort=backfill_sort,
            allow_expired_cursors=allow_expired_cursors,
        )

    async def sync(
        self,
        view: ViewRef,
        cursors: Optional[Mapping[str, Optional[str]]] = None,
        filter: Any = None,
        limit: int = DEFAULT_LIMIT,
        mode: SyncMode = SyncMode.ONE_PHASE,
        backfill_sort: Optional[Sequence[SyncBackfillSort]] = None,
        allow_expired_cursors: Optional[bool] = None,
    ) -> SyncResponse:
        """Fetch one page of changes for the nodes with data in ``view``.

        Pass the ``next_cursor`` of the previous response as ``cursors`` to
        continue from where it stopped.
        """
        request = self.build_request(
            view,
            cursors=cursors,
            filter=filter,
            limit=limit,
            mode=mode,
            backfill_sort=backfill_sort,
            allow_expired_cursors=allow_expired_cursors,
        )
        return await self._execute(request)

    async def sync_request(self, request: SyncRequest) -> SyncResponse:
        """Send a hand-built request, e.g. one with several result sets."""
        if request is None:
            raise InvalidArgumentError("request cannot be null")
        if request.backfill_sort is not None:
            _validate_backfill_sort(request.backfill_sort)
        return await self._execute(request)

    async def _execute(self, request: SyncRequest) -> SyncResponse:
        payload = await self._post(self._instances_path("sync"), request.to_wire(), "Sync")
        return SyncResponse.from_dict(payload)

    async def stream_changes(
        self,
        view: ViewRef,
        poll_interval: Optional[float] = None,
        filter: Any = None,
        mode: SyncMode = SyncMode.ONE_PHASE,
        allow_expired_cursors: Optional[bool] = None,
        stop_event: Optional[asyncio.Event] = None,
    ) -> AsyncIterator[SyncBatch]:
        """Poll for changes forever, yielding one ``SyncBatch`` per fetch.

        Pages are fetched back to back while the server reports more data.
        Once caught up the stream sleeps ``poll_interval`` seconds before
        asking again. Stop it by cancelling the consuming task, by closing
        the generator, or by setting ``stop_event``. Cancelling while asleep
        never triggers another request.
        """
        interval = self._poll_interval if poll_interval is None else poll_interval
        if isinstance(interval, bool) or not isinstance(interval, (int, float)) or interval <= 0:
            raise InvalidArgumentError("poll_interval must be greater than 0")
        # Fail fast on bad arguments before the first round-trip.
        self.build_request(view, filter=filter, mode=mode, allow_expired_cursors=allow_expired_cursors)

        logger.info(
            "Starting sync stream for view %s/%s/%s", view.space, view.external_id, view.version
        )
        cursors: Optional[Dict[str, Optional[str]]] = None
        while stop_event is None or not stop_event.is_set():
            response = await self.sync(
                view,
                cursors=cursors,
                filter=filter,
                mode=mode,
                allow_expired_cursors=allow_expired_cursors,
            )
            yield SyncBatch(
                response=response,
                cursors=cursors,
                timestamp=datetime.now(timezone.utc),
            )
            cursors = response.next_cursor
            if response.has_next:
                continue
            if stop_event is None:
                await asyncio.sleep(interval)
                continue
            try:
                await asyncio.wait_for(stop_event.wait(), timeout=interval)
            except asyncio.TimeoutError:
                continue
        logger.info("Sync stream for view %s/%s/%s stopped", view.space, view.external_id, view.version)
