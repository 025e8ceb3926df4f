# Copyright (c) 2026 Beijing Volcano Engine Technology Co., Ltd.
# SPDX-License-Identifier: Apache-2.0
"""Shared pieces of the request/response models."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from dmquery.filters import FilterBuilder, ViewRef, filter_to_dict
from dmquery.filters.expr import is_filter_node


class WireModel(BaseModel):
    """Request body base: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


def coerce_filter(value: Any) -> Any:
    """Normalise a filter argument to its wire dict."""
    if value is None or isinstance(value, dict):
        return value
    if isinstance(value, FilterBuilder):
        return filter_to_dict(value.build())
    if is_filter_node(value):
        return filter_to_dict(value)
    raise ValueError(f"Unsupported filter type: {type(value)!r}")


def coerce_view(value: Any) -> Any:
    """Normalise a view argument to ``{"type": "view", ...}``."""
    if isinstance(value, ViewRef):
        return value.to_dict()
    return value


def get_str(item: Dict[str, Any], key: str, default: str = "") -> str:
    value = item.get(key)
    return value if isinstance(value, str) else default


def get_int(item: Dict[str, Any], key: str) -> Optional[int]:
    value = item.get(key)
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def get_float(item: Dict[str, Any], key: str) -> Optional[float]:
    value = item.get(key)
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    return None


def get_dict(item: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = item.get(key)
    return dict(value) if isinstance(value, dict) else {}


def get_list(item: Dict[str, Any], key: str) -> List[Any]:
    value = item.get(key)
    return list(value) if isinstance(value, list) else []


def parse_cursors(payload: Dict[str, Any]) -> Optional[Dict[str, Optional[str]]]:
    """Read ``nextCursor``; non-string cursor values become ``None``."""
    raw = payload.get("nextCursor")
    if not isinstance(raw, dict):
        return None
    return {name: value if isinstance(value, str) else None for name, value in raw.items()}
