# Copyright (c) 2026 Beijing Volcano Engine Technology Co., Ltd.
# SPDX-License-Identifier: Apache-2.0
"""Exceptions raised by the data model client."""

from typing import Optional


class DataModelError(Exception):
    """Base exception for data model client operations."""


class InvalidArgumentError(DataModelError, ValueError):
    """Raised when a filter or request is built with invalid arguments."""


class InvalidStateError(DataModelError, RuntimeError):
    """Raised when a builder is consumed before it was configured."""


class RequestFailedError(DataModelError):
    """Raised when the remote API answers with a non-success status."""

    def __init__(self, status_code: int, body: str, endpoint: Optional[str] = None):
        self.status_code = status_code
        self.body = body
        self.endpoint = endpoint
        prefix = f"{endpoint} request" if endpoint else "Request"
        super().__init__(f"{prefix} failed: {status_code} - {body}")
