# Copyright (c) 2026 Beijing Volcano Engine Technology Co., Ltd.
# SPDX-License-Identifier: Apache-2.0

"""Tests for SearchResource (dmquery/resources/search.py)."""

import pytest

from dmquery.errors import InvalidArgumentError
from dmquery.filters import FilterBuilder
from dmquery.models import SearchRequest, SearchResponse, SearchSort, TargetUnit, UnitReference
from dmquery.resources import SearchResource

STATUS = ["my-space", "Pump/v1", "status"]


@pytest.fixture
def search(project, transport, token_provider):
    return SearchResource(project, transport, token_provider)


def test_query_or_filter_required(search, view):
    with pytest.raises(InvalidArgumentError):
        search.build_request(view)
    with pytest.raises(InvalidArgumentError):
        search.build_request(view, query="")


@pytest.mark.parametrize("limit", [0, 1001])
def test_limit_out_of_range(search, view, limit):
    with pytest.raises(InvalidArgumentError):
        search.build_request(view, query="pump", limit=limit)


@pytest.mark.parametrize("limit", [1, 1000])
def test_limit_boundaries_accepted(search, view, limit):
    assert search.build_request(view, query="pump", limit=limit).limit == limit


def test_filter_only_request(search, view):
    running = FilterBuilder.create().equals(STATUS, "Running")
    body = search.build_request(view, filter=running).to_wire()
    assert body == {
        "view": view.to_dict(),
        "filter": running.to_dict(),
        "limit": 100,
        "instanceType": "node",
    }


def test_full_request_wire_form(search, view):
    body = search.build_request(
        view,
        query="centrifugal",
        properties=["name", "description"],
        limit=10,
        instance_type="edge",
        sort=[SearchSort(property=STATUS, direction="descending", nulls_first=False)],
        target_units=[TargetUnit(property="temperature", unit=UnitReference(external_id="temperature:deg_c"))],
    ).to_wire()
    assert body["query"] == "centrifugal"
    assert body["properties"] == ["name", "description"]
    assert body["instanceType"] == "edge"
    assert body["sort"] == [{"property": STATUS, "direction": "descending", "nullsFirst": False}]
    assert body["targetUnits"] == [
        {"property": "temperature", "unit": {"externalId": "temperature:deg_c"}}
    ]


def test_view_must_be_view_ref(search):
    with pytest.raises(InvalidArgumentError):
        search.build_request(None, query="pump")


@pytest.mark.asyncio
async def test_search_request_is_validated(search, transport, view):
    with pytest.raises(InvalidArgumentError):
        await search.search_request(SearchRequest(view=view, limit=50))
    assert transport.calls == []


@pytest.mark.asyncio
async def test_search_parses_items(search, project, transport, view):
    transport.queue(
        {
            "items": [
                {
                    "instanceType": "edge",
                    "space": "my-space",
                    "externalId": "e1",
                    "version": 3,
                    "createdTime": 1700000000000,
                    "lastUpdatedTime": 1700000001000,
                    "properties": {"my-space": {"Pump/v1": {"name": "P-1"}}},
                    "startNode": {"space": "my-space", "externalId": "a"},
                    "endNode": {"space": "my-space", "externalId": "b"},
                },
                {"externalId": "n1"},
            ]
        }
    )
    response = await search.search(view, query="P-1")

    assert transport.calls[0]["path"] == f"/api/v1/projects/{project}/models/instances/search"
    edge, node = response.items
    assert edge.instance_type == "edge"
    assert edge.version == 3
    assert edge.created_time == 1700000000000
    assert edge.last_updated_time == 1700000001000
    assert edge.properties["my-space"]["Pump/v1"]["name"] == "P-1"
    assert edge.start_node.external_id == "a"
    assert edge.end_node.space == "my-space"

    assert node.instance_type == "node"
    assert node.space == ""
    assert node.version == 0
    assert node.created_time is None
    assert node.properties == {}
    assert node.start_node is None
    assert response.has_more


def test_empty_response_parses():
    response = SearchResponse.from_dict({})
    assert response.items == []
    assert not response.has_more
