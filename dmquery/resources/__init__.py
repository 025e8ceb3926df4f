# Copyright (c) 2026 Beijing Volcano Engine Technology Co., Ltd.
# SPDX-License-Identifier: Apache-2.0
"""API resources bound to one project."""

from .aggregate import AggregateResource
from .base import Resource, TokenProvider
from .graphql import INTROSPECTION_QUERY, GraphQLResource
from .query import QueryBuilder
from .search import SearchResource
from .sync import SyncResource

__all__ = [
    "AggregateResource",
    "GraphQLResource",
    "INTROSPECTION_QUERY",
    "QueryBuilder",
    "Resource",
    "SearchResource",
    "SyncResource",
    "TokenProvider",
]
