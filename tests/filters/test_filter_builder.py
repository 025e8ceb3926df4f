# Copyright (c) 2026 Beijing Volcano Engine Technology Co., Ltd.
# SPDX-License-Identifier: Apache-2.0

"""Tests for FilterBuilder (dmquery/filters/builder.py)."""

import json

import pytest

from dmquery.errors import InvalidArgumentError, InvalidStateError
from dmquery.filters import FilterBuilder, MatchAll, ViewRef
from dmquery.filters.builder import NO_FILTER_PLACEHOLDER, SERIALIZATION_FAILED_PLACEHOLDER

PATH = ["my-space", "Pump/v1", "status"]
TEMP = ["my-space", "Pump/v1", "temperature"]
PUMP = ViewRef("my-space", "Pump", "v1")
VALVE = ViewRef("my-space", "Valve", "v2")


def _wire(builder):
    return json.loads(json.dumps(builder.to_dict()))


# ---- Leaf filters ----


@pytest.mark.parametrize("value", ["Running", 42, 3.5, True])
def test_equals_round_trips_through_json(value):
    builder = FilterBuilder.create().equals(PATH, value)
    assert _wire(builder) == {"equals": {"property": PATH, "value": value}}


def test_equals_with_view_expands_property():
    builder = FilterBuilder.create().equals("status", "Running", view=PUMP)
    assert builder.to_dict() == {"equals": {"property": PATH, "value": "Running"}}


def test_equals_rejects_null_value():
    with pytest.raises(InvalidArgumentError):
        FilterBuilder.create().equals(PATH, None)


def test_property_path_must_have_three_segments():
    with pytest.raises(InvalidArgumentError):
        FilterBuilder.create().equals(["my-space", "status"], "x")
    with pytest.raises(InvalidArgumentError):
        FilterBuilder.create().exists(["my-space", "Pump/v1", ""])


def test_in_requires_values():
    with pytest.raises(InvalidArgumentError):
        FilterBuilder.create().in_(PATH)
    builder = FilterBuilder.create().in_(PATH, "a", "b")
    assert builder.to_dict() == {"in": {"property": PATH, "values": ["a", "b"]}}


def test_range_without_bounds_fails():
    with pytest.raises(InvalidArgumentError):
        FilterBuilder.create().range(TEMP)


def test_range_serializes_only_given_bounds():
    builder = FilterBuilder.create().range(TEMP, gte=10, lte=100)
    assert _wire(builder) == {"range": {"property": TEMP, "gte": 10, "lte": 100}}


def test_prefix_requires_non_empty_value():
    with pytest.raises(InvalidArgumentError):
        FilterBuilder.create().prefix(PATH, "")
    assert FilterBuilder.create().prefix(PATH, "Run").to_dict() == {
        "prefix": {"property": PATH, "value": "Run"}
    }


def test_contains_any_and_all():
    assert FilterBuilder.create().contains_any(PATH, "a").to_dict() == {
        "containsAny": {"property": PATH, "values": ["a"]}
    }
    assert FilterBuilder.create().contains_all(PATH, "a", "b").to_dict() == {
        "containsAll": {"property": PATH, "values": ["a", "b"]}
    }


def test_has_data_requires_views():
    with pytest.raises(InvalidArgumentError):
        FilterBuilder.create().has_data()


def test_has_data_keeps_order_and_duplicates():
    builder = FilterBuilder.create().has_data(VALVE, PUMP, VALVE)
    models = builder.to_dict()["hasData"]
    assert [m["externalId"] for m in models] == ["Valve", "Pump", "Valve"]


def test_overlaps():
    builder = FilterBuilder.create().overlaps("start", "end", gt=0, view=PUMP)
    assert builder.to_dict() == {
        "overlaps": {
            "startProperty": ["my-space", "Pump/v1", "start"],
            "endProperty": ["my-space", "Pump/v1", "end"],
            "gt": 0,
        }
    }


# ---- Parameters ----


def test_parameter_rejects_empty_name():
    with pytest.raises(InvalidArgumentError):
        FilterBuilder.parameter("")


def test_parameter_accepted_as_scalar():
    param = FilterBuilder.parameter("x")
    assert param.to_dict() == {"parameter": "x"}
    assert FilterBuilder.create().equals(PATH, param).to_dict() == {
        "equals": {"property": PATH, "value": {"parameter": "x"}}
    }
    assert FilterBuilder.create().in_(PATH, param).to_dict() == {
        "in": {"property": PATH, "values": [{"parameter": "x"}]}
    }
    assert FilterBuilder.create().range(TEMP, gte=param).to_dict() == {
        "range": {"property": TEMP, "gte": {"parameter": "x"}}
    }


# ---- Composite filters ----


def test_variadic_and_preserves_order():
    a = FilterBuilder.create().equals(PATH, "Running")
    b = FilterBuilder.create().range(TEMP, gt=80)
    combined = FilterBuilder.create().and_(a, b)
    assert combined.to_dict() == {"and": [a.to_dict(), b.to_dict()]}


def test_and_without_arguments_fails():
    with pytest.raises(InvalidArgumentError):
        FilterBuilder.create().and_()


def test_and_chain_on_empty_builder_adopts_other():
    other = FilterBuilder.create().equals(PATH, "Running")
    builder = FilterBuilder.create().and_(other)
    assert builder.build() is other.build()
    assert "and" not in builder.to_dict()


def test_and_chain_on_configured_builder_wraps():
    other = FilterBuilder.create().range(TEMP, lt=5)
    builder = FilterBuilder.create().equals(PATH, "Stopped").and_(other)
    assert builder.to_dict() == {
        "and": [{"equals": {"property": PATH, "value": "Stopped"}}, other.to_dict()]
    }


def test_and_chain_with_empty_other_fails_when_wrapping():
    builder = FilterBuilder.create().match_all()
    with pytest.raises(InvalidStateError):
        builder.and_(FilterBuilder.create())


def test_or_requires_two_filters():
    a = FilterBuilder.create().equals(PATH, "a")
    with pytest.raises(InvalidArgumentError):
        FilterBuilder.create().or_(a)
    b = FilterBuilder.create().equals(PATH, "b")
    assert FilterBuilder.create().or_(a, b).to_dict() == {"or": [a.to_dict(), b.to_dict()]}


def test_not_and_nested():
    inner = FilterBuilder.create().exists(PATH)
    assert FilterBuilder.create().not_(inner).to_dict() == {"not": {"exists": {"property": PATH}}}
    nested = FilterBuilder.create().nested(["my-space", "Pump/v1", "location"], inner)
    assert nested.to_dict() == {
        "nested": {"scope": ["my-space", "Pump/v1", "location"], "filter": {"exists": {"property": PATH}}}
    }


def test_not_of_empty_builder_fails():
    with pytest.raises(InvalidStateError):
        FilterBuilder.create().not_(FilterBuilder.create())


@pytest.mark.parametrize(
    "scope",
    [
        ["my-space", "Pump/v1"],
        ["my-space", "", "location"],
        ["my-space", "Pump/v1", "location", "extra"],
    ],
)
def test_nested_rejects_bad_scope(scope):
    inner = FilterBuilder.create().exists(PATH)
    with pytest.raises(InvalidArgumentError):
        FilterBuilder.create().nested(scope, inner)


def test_has_data_accepts_view_tuples():
    builder = FilterBuilder.create().has_data(("my-space", "Pump", "v1"), VALVE)
    assert builder.to_dict() == {"hasData": [PUMP.to_dict(), VALVE.to_dict()]}


@pytest.mark.parametrize("view", [("my-space", "Pump"), ("my-space", "", "v1"), {"space": "s"}])
def test_has_data_rejects_bad_views(view):
    with pytest.raises(InvalidArgumentError):
        FilterBuilder.create().has_data(view)


def test_composites_accept_built_nodes():
    a = FilterBuilder.create().equals(PATH, "a").build()
    builder = FilterBuilder.create().and_(a, MatchAll())
    assert builder.to_dict() == {"and": [{"equals": {"property": PATH, "value": "a"}}, {"matchAll": {}}]}


def test_failed_call_keeps_previous_filter():
    builder = FilterBuilder.create().equals(PATH, "a")
    with pytest.raises(InvalidArgumentError):
        builder.range(TEMP)
    assert builder.to_dict() == {"equals": {"property": PATH, "value": "a"}}


# ---- Output ----


def test_build_on_empty_builder():
    builder = FilterBuilder.create()
    with pytest.raises(InvalidStateError):
        builder.build()
    assert builder.build_or_none() is None


def test_str_placeholders():
    assert str(FilterBuilder.create()) == NO_FILTER_PLACEHOLDER
    assert str(FilterBuilder.create().equals(PATH, object())) == SERIALIZATION_FAILED_PLACEHOLDER


def test_str_is_indented_json():
    text = str(FilterBuilder.create().match_all())
    assert json.loads(text) == {"matchAll": {}}
    assert "\n" in text


if __name__ == "__main__":
    pytest.main([__file__])
