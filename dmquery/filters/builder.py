# Copyright (c) 2026 Beijing Volcano Engine Technology Co., Ltd.
# SPDX-License-Identifier: Apache-2.0
"""
Fluent builder for instance filters.

Property paths use the format ``[space, "viewExternalId/version", property]``.
Every method takes either such a path or, with ``view=``, a bare property
name that is expanded against the view.

The builder holds exactly one filter. Each call replaces it, and the
composite calls (``and_``, ``or_``, ``not_``, ``nested``) read the built
filters of other builders. It is not thread-safe: create one builder per
filter.

Example::

    status = FilterBuilder.create().equals("status", "Running", view=pumps)
    hot = FilterBuilder.create().range("temperature", gte=80, view=pumps)
    flt = FilterBuilder.create().and_(status, hot).build()
"""

from __future__ import annotations

import json
from typing import Any, Optional, Sequence, Tuple, Union

from dmquery.errors import InvalidArgumentError, InvalidStateError

from .expr import (
    And,
    ContainsAll,
    ContainsAny,
    Equals,
    Exists,
    FilterNode,
    HasData,
    In,
    MatchAll,
    Nested,
    Not,
    Or,
    Overlaps,
    ParameterRef,
    Prefix,
    PropertyPath,
    Range,
    ViewRef,
    coerce_values,
    filter_to_dict,
    is_filter_node,
    validate_property_path,
)

PropertyArg = Union[str, Sequence[str]]
Operand = Union["FilterBuilder", FilterNode]
ViewArg = Union[ViewRef, Tuple[str, str, str]]

NO_FILTER_PLACEHOLDER = "<no filter configured>"
SERIALIZATION_FAILED_PLACEHOLDER = "<filter serialization failed>"


def _resolve_path(property: PropertyArg, view: Optional[ViewRef], name: str = "property") -> PropertyPath:
    if view is not None:
        if not isinstance(view, ViewRef):
            raise InvalidArgumentError("view must be a ViewRef")
        if not isinstance(property, str):
            raise InvalidArgumentError(f"{name} must be a property name when view is given")
        return view.property_path(property)
    return validate_property_path(property, name)


def _to_view(view: ViewArg) -> ViewRef:
    if isinstance(view, ViewRef):
        return view
    if isinstance(view, tuple) and len(view) == 3:
        return ViewRef(*view)
    raise InvalidArgumentError("has_data only accepts ViewRef values or (space, external_id, version) tuples")


def _build_operand(operand: Operand) -> FilterNode:
    if operand is None:
        raise InvalidArgumentError("filter cannot be null")
    if isinstance(operand, FilterBuilder):
        return operand.build()
    if is_filter_node(operand):
        return operand
    raise InvalidArgumentError(f"Unsupported filter operand: {type(operand)!r}")


class FilterBuilder:
    """Single-slot fluent filter builder."""

    def __init__(self):
        self._filter: Optional[FilterNode] = None

    @classmethod
    def create(cls) -> "FilterBuilder":
        return cls()

    @staticmethod
    def parameter(name: str) -> ParameterRef:
        """Reference a query parameter by name.

        The value is supplied at execution time, e.g. through
        ``QueryBuilder.with_parameter``.
        """
        return ParameterRef(name)

    # ------------------------------------------------------------------
    # Leaf filters
    # ------------------------------------------------------------------

    def has_data(self, *views: ViewArg) -> "FilterBuilder":
        """Match instances with data in every given view.

        Views are ``ViewRef`` values or ``(space, external_id, version)``
        tuples. Space and externalId attribute filters have no helper here;
        pass their wire JSON as a dict (``RawFilter``) instead.
        """
        if not views:
            raise InvalidArgumentError("At least one view must be provided")
        self._filter = HasData(models=tuple(_to_view(view) for view in views))
        return self

    def equals(self, property: PropertyArg, value: Any, *, view: Optional[ViewRef] = None) -> "FilterBuilder":
        path = _resolve_path(property, view)
        if value is None:
            raise InvalidArgumentError("value cannot be null")
        self._filter = Equals(property=path, value=value)
        return self

    def in_(self, property: PropertyArg, *values: Any, view: Optional[ViewRef] = None) -> "FilterBuilder":
        path = _resolve_path(property, view)
        self._filter = In(property=path, values=coerce_values(values))
        return self

    def range(
        self,
        property: PropertyArg,
        *,
        gte: Any = None,
        gt: Any = None,
        lte: Any = None,
        lt: Any = None,
        view: Optional[ViewRef] = None,
    ) -> "FilterBuilder":
        path = _resolve_path(property, view)
        if gte is None and gt is None and lte is None and lt is None:
            raise InvalidArgumentError("At least one range bound must be specified")
        self._filter = Range(property=path, gte=gte, gt=gt, lte=lte, lt=lt)
        return self

    def prefix(self, property: PropertyArg, value: Any, *, view: Optional[ViewRef] = None) -> "FilterBuilder":
        path = _resolve_path(property, view)
        if not isinstance(value, ParameterRef) and (not isinstance(value, str) or not value):
            raise InvalidArgumentError("value cannot be null or empty")
        self._filter = Prefix(property=path, value=value)
        return self

    def exists(self, property: PropertyArg, *, view: Optional[ViewRef] = None) -> "FilterBuilder":
        self._filter = Exists(property=_resolve_path(property, view))
        return self

    def contains_any(self, property: PropertyArg, *values: Any, view: Optional[ViewRef] = None) -> "FilterBuilder":
        path = _resolve_path(property, view)
        self._filter = ContainsAny(property=path, values=coerce_values(values))
        return self

    def contains_all(self, property: PropertyArg, *values: Any, view: Optional[ViewRef] = None) -> "FilterBuilder":
        path = _resolve_path(property, view)
        self._filter = ContainsAll(property=path, values=coerce_values(values))
        return self

    def overlaps(
        self,
        start_property: PropertyArg,
        end_property: PropertyArg,
        *,
        gte: Any = None,
        gt: Any = None,
        lte: Any = None,
        lt: Any = None,
        view: Optional[ViewRef] = None,
    ) -> "FilterBuilder":
        """Match instances whose [start, end] range overlaps the given bounds."""
        start = _resolve_path(start_property, view, "start_property")
        end = _resolve_path(end_property, view, "end_property")
        if gte is None and gt is None and lte is None and lt is None:
            raise InvalidArgumentError("At least one range bound must be specified")
        self._filter = Overlaps(start_property=start, end_property=end, gte=gte, gt=gt, lte=lte, lt=lt)
        return self

    def match_all(self) -> "FilterBuilder":
        self._filter = MatchAll()
        return self

    # ------------------------------------------------------------------
    # Composite filters
    # ------------------------------------------------------------------

    def and_(self, *others: Operand) -> "FilterBuilder":
        """Combine filters with AND.

        With a single argument this chains: an empty builder adopts the
        other filter as-is, otherwise the current filter and the other one
        are wrapped in ``And``. With two or more arguments they are all
        wrapped in a fresh ``And``, replacing the current filter.
        """
        if len(others) == 1:
            other = others[0]
            if other is None:
                raise InvalidArgumentError("filter cannot be null")
            if self._filter is None:
                if isinstance(other, FilterBuilder):
                    self._filter = other._filter
                else:
                    self._filter = _build_operand(other)
            else:
                self._filter = And(operands=(self._filter, _build_operand(other)))
            return self
        if len(others) < 2:
            raise InvalidArgumentError("At least two filters must be provided for AND")
        self._filter = And(operands=tuple(_build_operand(o) for o in others))
        return self

    def or_(self, *others: Operand) -> "FilterBuilder":
        if len(others) < 2:
            raise InvalidArgumentError("At least two filters must be provided for OR")
        self._filter = Or(operands=tuple(_build_operand(o) for o in others))
        return self

    def not_(self, other: Operand) -> "FilterBuilder":
        self._filter = Not(operand=_build_operand(other))
        return self

    def nested(self, scope: PropertyArg, other: Operand, *, view: Optional[ViewRef] = None) -> "FilterBuilder":
        path = _resolve_path(scope, view, "scope")
        self._filter = Nested(scope=path, operand=_build_operand(other))
        return self

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def build(self) -> FilterNode:
        if self._filter is None:
            raise InvalidStateError("No filter has been configured")
        return self._filter

    def build_or_none(self) -> Optional[FilterNode]:
        return self._filter

    def to_dict(self) -> dict:
        return filter_to_dict(self.build())

    def __str__(self) -> str:
        """Indented JSON of the current filter, for debugging only.

        All filter values are rendered, so do not log this when filters may
        hold sensitive data.
        """
        if self._filter is None:
            return NO_FILTER_PLACEHOLDER
        try:
            return json.dumps(filter_to_dict(self._filter), indent=2)
        except (TypeError, ValueError):
            return SERIALIZATION_FAILED_PLACEHOLDER

    def __repr__(self) -> str:
        kind = type(self._filter).__name__ if self._filter is not None else "empty"
        return f"FilterBuilder({kind})"
