# Copyright (c) 2026 Beijing Volcano Engine Technology Co., Ltd.
# SPDX-License-Identifier: Apache-2.0
"""httpx-backed transport."""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from dmquery.errors import InvalidArgumentError
from dmquery.utils.logger import get_logger

from .base import Transport, TransportResponse

logger = get_logger(__name__)

DEFAULT_TIMEOUT = 30.0


class HttpxTransport(Transport):
    """Sends requests through an ``httpx.AsyncClient``.

    Pass ``client`` to share a connection pool owned by the application; in
    that case ``close`` leaves it open.
    """

    def __init__(
        self,
        base_url: str,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        if not base_url:
            raise InvalidArgumentError("base_url cannot be null or empty")
        self.base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self.client = client if client is not None else httpx.AsyncClient(timeout=timeout)

    def _headers(self, token: str) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {token}",
            "Accept": "application/json",
        }

    async def send(
        self,
        method: str,
        path: str,
        body: Optional[Any],
        token: str,
    ) -> TransportResponse:
        url = f"{self.base_url}{path}"
        logger.debug("%s %s", method, url)
        response = await self.client.request(
            method,
            url,
            json=body,
            headers=self._headers(token),
        )
        return TransportResponse(status_code=response.status_code, text=response.text)

    async def close(self) -> None:
        if self._owns_client:
            await self.client.aclose()
