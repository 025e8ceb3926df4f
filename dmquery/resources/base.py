# Copyright (c) 2026 Beijing Volcano Engine Technology Co., Ltd.
# SPDX-License-Identifier: Apache-2.0
"""Common plumbing for API resources."""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict, Optional
from urllib.parse import quote

from dmquery.errors import InvalidArgumentError, RequestFailedError
from dmquery.filters import FilterBuilder, FilterNode, RawFilter
from dmquery.filters.expr import is_filter_node
from dmquery.transport import Transport
from dmquery.utils.logger import get_logger

logger = get_logger(__name__)

TokenProvider = Callable[[], Awaitable[str]]


def require_text(value: Any, name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgumentError(f"{name} cannot be null or empty")
    return value


def require_positive(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidArgumentError(f"{name} must be greater than 0")
    return value


def to_filter_node(value: Any, name: str = "filter") -> Optional[FilterNode]:
    """Accept a builder, a filter node or a raw wire dict."""
    if value is None:
        return None
    if isinstance(value, FilterBuilder):
        return value.build()
    if isinstance(value, dict):
        return RawFilter(payload=value)
    if is_filter_node(value):
        return value
    raise InvalidArgumentError(f"Unsupported {name} type: {type(value)!r}")


class Resource:
    """Base class for resources bound to one project.

    Subclasses build request bodies and parse responses; ``_post`` does the
    token lookup, the single transport call and the status check.
    """

    def __init__(self, project: str, transport: Transport, token_provider: TokenProvider):
        self._project = require_text(project, "project")
        if transport is None:
            raise InvalidArgumentError("transport cannot be null")
        if token_provider is None:
            raise InvalidArgumentError("token_provider cannot be null")
        self._transport = transport
        self._token_provider = token_provider

    @property
    def project(self) -> str:
        return self._project

    def _project_path(self) -> str:
        return f"/api/v1/projects/{quote(self._project, safe='')}"

    def _instances_path(self, action: str) -> str:
        return f"{self._project_path()}/models/instances/{action}"

    async def _post(self, path: str, body: Optional[Dict[str, Any]], label: str) -> Any:
        token = await self._token_provider()
        response = await self._transport.send("POST", path, body, token)
        if not response.is_success:
            logger.error("%s request failed with status %s", label, response.status_code)
            raise RequestFailedError(response.status_code, response.text, endpoint=label)
        return response.json()
