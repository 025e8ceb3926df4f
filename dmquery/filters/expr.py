# Copyright (c) 2026 Beijing Volcano Engine Technology Co., Ltd.
# SPDX-License-Identifier: Apache-2.0
"""Filter expression AST for instance queries."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence, Tuple, Union

from dmquery.errors import InvalidArgumentError

PropertyPath = Tuple[str, str, str]


def _require_text(value: Any, name: str) -> None:
    if not isinstance(value, str) or not value:
        raise InvalidArgumentError(f"{name} cannot be null or empty")


@dataclass(frozen=True)
class ViewRef:
    """Identifies a view by space, external id and version."""

    space: str
    external_id: str
    version: str

    def __post_init__(self):
        _require_text(self.space, "space")
        _require_text(self.external_id, "external_id")
        _require_text(self.version, "version")

    def to_dict(self) -> Dict[str, str]:
        return {
            "type": "view",
            "space": self.space,
            "externalId": self.external_id,
            "version": self.version,
        }

    def property_path(self, name: str) -> PropertyPath:
        _require_text(name, "property")
        return (self.space, f"{self.external_id}/{self.version}", name)


@dataclass(frozen=True)
class ParameterRef:
    """Named placeholder resolved against the request parameters."""

    parameter: str

    def __post_init__(self):
        if not isinstance(self.parameter, str) or not self.parameter:
            raise InvalidArgumentError("Parameter name cannot be null or empty")

    def to_dict(self) -> Dict[str, str]:
        return {"parameter": self.parameter}


def property_path(space: str, view_external_id: str, version: str, property: str) -> PropertyPath:
    """Build ``[space, "view/version", property]`` from its parts."""
    _require_text(space, "space")
    _require_text(view_external_id, "view_external_id")
    _require_text(version, "version")
    _require_text(property, "property")
    return (space, f"{view_external_id}/{version}", property)


def validate_property_path(path: Any, name: str = "property") -> PropertyPath:
    """Check that ``path`` has exactly three non-empty segments and return it as a tuple."""
    if path is None or isinstance(path, (str, bytes)):
        raise InvalidArgumentError(f"{name} path must be a sequence of 3 segments")
    segments = tuple(path)
    if len(segments) != 3:
        raise InvalidArgumentError(
            f"{name} path must have exactly 3 segments, got {len(segments)}"
        )
    for segment in segments:
        if not isinstance(segment, str) or not segment:
            raise InvalidArgumentError(f"{name} path segments cannot be null or empty")
    return segments  # type: ignore[return-value]


@dataclass(frozen=True)
class HasData:
    models: Tuple[ViewRef, ...]


@dataclass(frozen=True)
class Equals:
    property: PropertyPath
    value: Any


@dataclass(frozen=True)
class In:
    property: PropertyPath
    values: Tuple[Any, ...]


@dataclass(frozen=True)
class Range:
    property: PropertyPath
    gte: Any | None = None
    gt: Any | None = None
    lte: Any | None = None
    lt: Any | None = None


@dataclass(frozen=True)
class Prefix:
    property: PropertyPath
    value: Any


@dataclass(frozen=True)
class Exists:
    property: PropertyPath


@dataclass(frozen=True)
class ContainsAny:
    property: PropertyPath
    values: Tuple[Any, ...]


@dataclass(frozen=True)
class ContainsAll:
    property: PropertyPath
    values: Tuple[Any, ...]


@dataclass(frozen=True)
class Overlaps:
    start_property: PropertyPath
    end_property: PropertyPath
    gte: Any | None = None
    gt: Any | None = None
    lte: Any | None = None
    lt: Any | None = None


@dataclass(frozen=True)
class And:
    operands: Tuple["FilterNode", ...]


@dataclass(frozen=True)
class Or:
    operands: Tuple["FilterNode", ...]


@dataclass(frozen=True)
class Not:
    operand: "FilterNode"


@dataclass(frozen=True)
class Nested:
    scope: PropertyPath
    operand: "FilterNode"


@dataclass(frozen=True)
class MatchAll:
    pass


@dataclass(frozen=True)
class RawFilter:
    payload: Dict[str, Any] = field(default_factory=dict)


FilterNode = Union[
    HasData,
    Equals,
    In,
    Range,
    Prefix,
    Exists,
    ContainsAny,
    ContainsAll,
    Overlaps,
    And,
    Or,
    Not,
    Nested,
    MatchAll,
    RawFilter,
]

FILTER_NODE_TYPES = (
    HasData,
    Equals,
    In,
    Range,
    Prefix,
    Exists,
    ContainsAny,
    ContainsAll,
    Overlaps,
    And,
    Or,
    Not,
    Nested,
    MatchAll,
    RawFilter,
)


def is_filter_node(value: Any) -> bool:
    return isinstance(value, FILTER_NODE_TYPES)


def invert(node: FilterNode) -> FilterNode:
    """Negate ``node``, unwrapping an existing ``Not`` instead of nesting it."""
    if node is None:
        raise InvalidArgumentError("filter cannot be null")
    if isinstance(node, Not):
        return node.operand
    return Not(node)


def _compile_value(value: Any) -> Any:
    if isinstance(value, ParameterRef):
        return value.to_dict()
    return value


def _compile_bounds(payload: Dict[str, Any], node: Range | Overlaps) -> Dict[str, Any]:
    if node.gte is not None:
        payload["gte"] = _compile_value(node.gte)
    if node.gt is not None:
        payload["gt"] = _compile_value(node.gt)
    if node.lte is not None:
        payload["lte"] = _compile_value(node.lte)
    if node.lt is not None:
        payload["lt"] = _compile_value(node.lt)
    return payload


def filter_to_dict(expr: FilterNode | Dict[str, Any]) -> Dict[str, Any]:
    """Compile a filter node into its JSON wire form."""
    if isinstance(expr, dict):
        return expr
    if isinstance(expr, RawFilter):
        return expr.payload
    if isinstance(expr, HasData):
        return {"hasData": [view.to_dict() for view in expr.models]}
    if isinstance(expr, Equals):
        return {"equals": {"property": list(expr.property), "value": _compile_value(expr.value)}}
    if isinstance(expr, In):
        return {
            "in": {
                "property": list(expr.property),
                "values": [_compile_value(v) for v in expr.values],
            }
        }
    if isinstance(expr, Range):
        return {"range": _compile_bounds({"property": list(expr.property)}, expr)}
    if isinstance(expr, Prefix):
        return {"prefix": {"property": list(expr.property), "value": _compile_value(expr.value)}}
    if isinstance(expr, Exists):
        return {"exists": {"property": list(expr.property)}}
    if isinstance(expr, ContainsAny):
        return {
            "containsAny": {
                "property": list(expr.property),
                "values": [_compile_value(v) for v in expr.values],
            }
        }
    if isinstance(expr, ContainsAll):
        return {
            "containsAll": {
                "property": list(expr.property),
                "values": [_compile_value(v) for v in expr.values],
            }
        }
    if isinstance(expr, Overlaps):
        payload: Dict[str, Any] = {
            "startProperty": list(expr.start_property),
            "endProperty": list(expr.end_property),
        }
        return {"overlaps": _compile_bounds(payload, expr)}
    if isinstance(expr, And):
        return {"and": [filter_to_dict(c) for c in expr.operands]}
    if isinstance(expr, Or):
        return {"or": [filter_to_dict(c) for c in expr.operands]}
    if isinstance(expr, Not):
        return {"not": filter_to_dict(expr.operand)}
    if isinstance(expr, Nested):
        return {"nested": {"scope": list(expr.scope), "filter": filter_to_dict(expr.operand)}}
    if isinstance(expr, MatchAll):
        return {"matchAll": {}}
    raise TypeError(f"Unsupported filter expr type: {type(expr)!r}")


def scope_to_view(view: ViewRef, extra: Optional[FilterNode] = None) -> FilterNode:
    """Restrict ``extra`` to instances with data in ``view``.

    Returns ``HasData([view])`` alone, or ``And(HasData([view]), extra)`` with
    the hasData clause always first.
    """
    if view is None:
        raise InvalidArgumentError("view cannot be null")
    has_data = HasData(models=(view,))
    if extra is None:
        return has_data
    return And(operands=(has_data, extra))


def coerce_values(values: Sequence[Any], name: str = "values") -> Tuple[Any, ...]:
    if values is None:
        raise InvalidArgumentError(f"{name} cannot be null")
    items = tuple(values)
    if not items:
        raise InvalidArgumentError("At least one value must be provided")
    for item in items:
        if item is None:
            raise InvalidArgumentError(f"{name} cannot contain null entries")
    return items
