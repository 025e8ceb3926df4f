# Copyright (c) 2026 Beijing Volcano Engine Technology Co., Ltd.
# SPDX-License-Identifier: Apache-2.0
"""Filter expression model and fluent builder."""

from .builder import FilterBuilder
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
    RawFilter,
    ViewRef,
    filter_to_dict,
    invert,
    property_path,
    scope_to_view,
    validate_property_path,
)

__all__ = [
    "FilterBuilder",
    "FilterNode",
    "HasData",
    "Equals",
    "In",
    "Range",
    "Prefix",
    "Exists",
    "ContainsAny",
    "ContainsAll",
    "Overlaps",
    "And",
    "Or",
    "Not",
    "Nested",
    "MatchAll",
    "RawFilter",
    "ParameterRef",
    "PropertyPath",
    "ViewRef",
    "filter_to_dict",
    "invert",
    "property_path",
    "scope_to_view",
    "validate_property_path",
]
