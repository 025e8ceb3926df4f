# Copyright (c) 2026 Beijing Volcano Engine Technology Co., Ltd.
# SPDX-License-Identifier: Apache-2.0
"""GraphQL endpoint of a published data model."""

from __future__ import annotations

from typing import Any, Dict, Optional, Type
from urllib.parse import quote

from dmquery.models.graphql import GraphQLRequest, GraphQLResponse
from dmquery.utils.logger import get_logger

from .base import Resource, require_text

logger = get_logger(__name__)

INTROSPECTION_QUERY = """
query IntrospectionQuery {
    __schema {
        types {
            name
            kind
            fields {
                name
                type { name kind }
            }
        }
    }
}
"""


class GraphQLResource(Resource):
    """Posts queries to the data model's GraphQL endpoint.

    Nothing is validated or executed locally; GraphQL errors come back in
    ``GraphQLResponse.errors`` and only transport-level failures raise.
    """

    def _graphql_path(self, space: str, external_id: str, version: str) -> str:
        return (
            f"{self._project_path()}/userapis/spaces/{quote(space, safe='')}"
            f"/datamodels/{quote(external_id, safe='')}/versions/{quote(version, safe='')}/graphql"
        )

    async def query(
        self,
        space: str,
        external_id: str,
        version: str,
        query: str,
        variables: Optional[Dict[str, Any]] = None,
        operation_name: Optional[str] = None,
        data_type: Type[Any] = Any,
    ) -> GraphQLResponse:
        """Run ``query`` and decode ``data`` as ``data_type``."""
        require_text(space, "space")
        require_text(external_id, "external_id")
        require_text(version, "version")
        require_text(query, "query")
        request = GraphQLRequest(query=query, variables=variables, operation_name=operation_name)
        logger.debug("GraphQL query against %s/%s/%s", space, external_id, version)
        payload = await self._post(
            self._graphql_path(space, external_id, version), request.to_wire(), "GraphQL"
        )
        if not isinstance(payload, dict):
            payload = {}
        return GraphQLResponse[data_type].model_validate(payload)

    async def query_raw(
        self,
        space: str,
        external_id: str,
        version: str,
        query: str,
        variables: Optional[Dict[str, Any]] = None,
        operation_name: Optional[str] = None,
    ) -> GraphQLResponse:
        """Like ``query`` but leaves ``data`` as plain JSON."""
        return await self.query(
            space,
            external_id,
            version,
            query,
            variables=variables,
            operation_name=operation_name,
        )

    async def introspect(self, space: str, external_id: str, version: str) -> GraphQLResponse:
        return await self.query_raw(space, external_id, version, INTROSPECTION_QUERY)
