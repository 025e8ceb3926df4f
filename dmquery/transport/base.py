# Copyright (c) 2026 Beijing Volcano Engine Technology Co., Ltd.
# SPDX-License-Identifier: Apache-2.0
"""Transport abstraction shared by all resources."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class TransportResponse:
    """Status code and raw body of one HTTP exchange."""

    status_code: int
    text: str

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self) -> Any:
        return json.loads(self.text) if self.text else {}


class Transport(ABC):
    """Performs exactly one HTTP request per ``send`` call.

    Implementations must not retry. The transport is shared by every
    resource of a client and may be called concurrently.
    """

    @abstractmethod
    async def send(
        self,
        method: str,
        path: str,
        body: Optional[Any],
        token: str,
    ) -> TransportResponse:
        """Send ``body`` as JSON to ``path`` with a bearer ``token``."""

    async def close(self) -> None:
        return None
