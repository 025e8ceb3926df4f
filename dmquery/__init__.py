# Copyright (c) 2026 Beijing Volcano Engine Technology Co., Ltd.
# SPDX-License-Identifier: Apache-2.0
"""
dmquery: async client extensions for a graph data model store.

Fluent filters, query/sync/search/aggregate request builders and a thin
GraphQL shim on top of an injected HTTP transport.
"""

from dmquery.client import DataModelClient
from dmquery.config import ClientConfig
from dmquery.errors import (
    DataModelError,
    InvalidArgumentError,
    InvalidStateError,
    RequestFailedError,
)
from dmquery.filters import FilterBuilder, ParameterRef, ViewRef, property_path
from dmquery.models import (
    AggregateOperation,
    AggregateType,
    EdgeDirection,
    SyncBackfillSort,
    SyncMode,
)

__version__ = "0.1.0"

__all__ = [
    "AggregateOperation",
    "AggregateType",
    "ClientConfig",
    "DataModelClient",
    "DataModelError",
    "EdgeDirection",
    "FilterBuilder",
    "InvalidArgumentError",
    "InvalidStateError",
    "ParameterRef",
    "RequestFailedError",
    "SyncBackfillSort",
    "SyncMode",
    "ViewRef",
    "property_path",
]
