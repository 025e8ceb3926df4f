# Copyright (c) 2026 Beijing Volcano Engine Technology Co., Ltd.
# SPDX-License-Identifier: Apache-2.0
"""Wire models for the instance and GraphQL endpoints."""

from .aggregate import (
    AggregateOperation,
    AggregateRequest,
    AggregateResponse,
    AggregateResultItem,
    AggregateType,
    AggregateValue,
    HistogramBucket,
)
from .common import WireModel
from .graphql import GraphQLError, GraphQLErrorLocation, GraphQLRequest, GraphQLResponse
from .query import (
    ChainTo,
    EdgeDirection,
    EdgesExpression,
    NodesExpression,
    QueryRequest,
    QueryResponse,
    QueryResultSet,
    ResultSetExpression,
    SelectExpression,
    SourceSelection,
)
from .search import (
    NodeReference,
    SearchRequest,
    SearchResponse,
    SearchResultItem,
    SearchSort,
    TargetUnit,
    UnitReference,
)
from .sync import (
    SyncBackfillSort,
    SyncBatch,
    SyncMode,
    SyncNodesQuery,
    SyncRequest,
    SyncResponse,
    SyncResultSet,
    SyncResultSetExpression,
)

__all__ = [
    "AggregateOperation",
    "AggregateRequest",
    "AggregateResponse",
    "AggregateResultItem",
    "AggregateType",
    "AggregateValue",
    "ChainTo",
    "EdgeDirection",
    "EdgesExpression",
    "GraphQLError",
    "GraphQLErrorLocation",
    "GraphQLRequest",
    "GraphQLResponse",
    "HistogramBucket",
    "NodeReference",
    "NodesExpression",
    "QueryRequest",
    "QueryResponse",
    "QueryResultSet",
    "ResultSetExpression",
    "SearchRequest",
    "SearchResponse",
    "SearchResultItem",
    "SearchSort",
    "SelectExpression",
    "SourceSelection",
    "SyncBackfillSort",
    "SyncBatch",
    "SyncMode",
    "SyncNodesQuery",
    "SyncRequest",
    "SyncResponse",
    "SyncResultSet",
    "SyncResultSetExpression",
    "TargetUnit",
    "UnitReference",
    "WireModel",
]
