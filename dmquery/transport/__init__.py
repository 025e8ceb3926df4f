# Copyright (c) 2026 Beijing Volcano Engine Technology Co., Ltd.
# SPDX-License-Identifier: Apache-2.0
from .base import Transport, TransportResponse
from .http_transport import DEFAULT_TIMEOUT, HttpxTransport

__all__ = ["DEFAULT_TIMEOUT", "HttpxTransport", "Transport", "TransportResponse"]
