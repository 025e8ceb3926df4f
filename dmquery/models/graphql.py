# Copyright (c) 2026 Beijing Volcano Engine Technology Co., Ltd.
# SPDX-License-Identifier: Apache-2.0
"""GraphQL request/response envelopes."""

from __future__ import annotations

from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, field_validator

from .common import WireModel

T = TypeVar("T")


class GraphQLRequest(WireModel):
    query: str
    variables: Optional[Dict[str, Any]] = None
    operation_name: Optional[str] = None

    def to_wire(self) -> Dict[str, Any]:
        payload = super().to_wire()
        if self.variables is not None:
            # Explicit null variables are meaningful to the server.
            variables = payload.setdefault("variables", {})
            for name, value in self.variables.items():
                if value is None:
                    variables[name] = None
        return payload


class GraphQLErrorLocation(BaseModel):
    line: int = 0
    column: int = 0

    @field_validator("line", "column", mode="before")
    @classmethod
    def null_to_zero(cls, value: Any) -> Any:
        return 0 if value is None else value


class GraphQLError(BaseModel):
    model_config = ConfigDict(extra="ignore")

    message: str = ""
    locations: Optional[List[GraphQLErrorLocation]] = None
    path: Optional[List[Any]] = None
    extensions: Optional[Dict[str, Any]] = None

    @field_validator("message", mode="before")
    @classmethod
    def null_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class GraphQLResponse(BaseModel, Generic[T]):
    """Standard GraphQL envelope with ``data`` decoded as ``T``.

    Errors are returned, not raised; check ``has_errors``.
    """

    model_config = ConfigDict(extra="ignore")

    data: Optional[T] = None
    errors: Optional[List[GraphQLError]] = None
    extensions: Optional[Dict[str, Any]] = None

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)
