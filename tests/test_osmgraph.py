# ruff: noqa: PLR2004
"""Test suite for the package."""

from __future__ import annotations

import gzip
import json
import logging as lg
from pathlib import Path

import networkx as nx
import numpy as np
import pandas as pd
import pytest

import osmgraph as og

og.settings.log_console = True
og.settings.log_file = True
og.settings.log_level = lg.DEBUG
og.settings.logs_folder = ".temp/logs"

input_xml = Path(__file__).parent / "input_data" / "network.osm"


def make_osm_dict() -> dict[str, list[dict]]:
    """Create a small network of grouped OSM elements."""
    nodes = [{"id": i, "lat": 52.5 + i / 1000, "lon": 13.4} for i in range(1, 10)]
    nodes.append({"id": 99, "lat": 52.6, "lon": 13.5, "tags": {"amenity": "bench"}})
    ways = [
        {"id": 10, "nodes": [1, 2, 3], "tags": {"highway": "primary"}},
        {"id": 11, "nodes": [3, 4, 5], "tags": {"highway": "primary"}},
        {"id": 12, "nodes": [3, 6], "tags": {"highway": "residential"}},
        {"id": 13, "nodes": [5, 7], "tags": {"highway": "residential"}},
        {"id": 14, "nodes": [7, 8], "tags": {"highway": "footway"}},
        {"id": 15, "nodes": [9, 7], "tags": {"highway": "residential"}},
        {"id": 16, "nodes": [1, 9]},
        {"id": 17, "tags": {"highway": "residential"}},
    ]
    return {"node": nodes, "way": ways, "relation": []}


def restriction(osmid: int, value: str, *members: tuple[str, int, str]) -> dict:
    """Create a restriction relation from (type, ref, role) member tuples."""
    return {
        "id": osmid,
        "tags": {"type": "restriction", "restriction": value},
        "members": [{"type": t, "ref": r, "role": role} for t, r, role in members],
    }


def test_logging() -> None:
    """Test the logger."""
    og.log("test a fake default message")
    og.log("test a fake debug", level=lg.DEBUG)
    og.log("test a fake info", level=lg.INFO)
    og.log("test a fake warning", level=lg.WARNING)
    og.log("test a fake error", level=lg.ERROR)

    og.ts(style="date")
    og.ts(style="time")
    og.ts(style="iso8601")
    assert og.ts(template="{:%Y}").isdigit()
    with pytest.raises(ValueError, match="Invalid timestamp style"):
        og.ts(style="fake")


def test_exceptions() -> None:
    """Test the custom errors."""
    message = "testing exception"

    with pytest.raises(og._errors.DataQualityError):
        raise og._errors.DataQualityError(message)

    with pytest.raises(og._errors.ValidationError):
        raise og._errors.ValidationError(message)

    assert issubclass(og.DataQualityError, ValueError)


def test_maxspeed() -> None:
    """Test normalizing maxspeed tag values."""
    assert og.maxspeed({"maxspeed": 30}) == 30
    assert og.maxspeed({"maxspeed": np.int64(80)}) == 80
    assert og.maxspeed({"maxspeed": 47.6}) == 48
    assert og.maxspeed({"maxspeed": "50"}) == 50
    assert og.maxspeed({"maxspeed": "50 km/h"}) == 50
    assert og.maxspeed({"maxspeed": "30 mph"}) == round(30 * og.tags.KMH_PER_MPH)
    assert og.maxspeed({"maxspeed": "30 MPH"}) == 48
    assert og.maxspeed({"maxspeed": "50;60"}) == 55
    assert og.maxspeed({"maxspeed": "50,70"}) == 60
    assert og.maxspeed({"maxspeed": "40-60"}) == 50
    assert og.maxspeed({"maxspeed": "30|50|70"}) == 50
    assert og.maxspeed({"maxspeed": "100; 80 conditional (wet)"}) == 90

    # missing, sentinel, and non-numeric text fall back to highway defaults
    assert og.maxspeed({"highway": "motorway"}) == og.settings.default_maxspeeds["motorway"]
    assert og.maxspeed({"highway": "motorway", "maxspeed": "default"}) == 100
    assert og.maxspeed({"highway": "living_street"}) == og.settings.default_maxspeeds["other"]
    assert og.maxspeed({}) == og.settings.default_maxspeeds["other"]
    assert og.maxspeed({"highway": "tertiary", "maxspeed": "none"}) == 50
    assert og.maxspeed({"highway": "trunk", "maxspeed": "signals"}) == 100

    # values that are neither text nor numbers are data quality errors
    with pytest.raises(og.DataQualityError, match="check data quality"):
        og.maxspeed({"maxspeed": ["50", "60"]})
    with pytest.raises(og.DataQualityError):
        og.maxspeed({"maxspeed": None})
    with pytest.raises(og.DataQualityError):
        og.maxspeed({"maxspeed": True})
    with pytest.raises(og.DataQualityError):
        og.maxspeed({"maxspeed": float("nan")})


def test_maxspeed_configured_defaults() -> None:
    """Test that maxspeed defaults come from settings."""
    default = og.settings.default_maxspeeds
    og.settings.default_maxspeeds = {"motorway": 130, "other": 30}
    try:
        assert og.maxspeed({"highway": "motorway"}) == 130
        assert og.maxspeed({"highway": "primary"}) == 30
    finally:
        og.settings.default_maxspeeds = default


def test_lanes_and_tracks() -> None:
    """Test normalizing lanes and tracks tag values."""
    assert og.lanes({"lanes": 2}) == 2
    assert og.lanes({"lanes": 2.0}) == 2
    assert og.lanes({"lanes": "3"}) == 3
    assert og.lanes({"lanes": "2;4"}) == 3
    assert og.lanes({"lanes": "1|1|1"}) == 1
    assert og.lanes({"lanes": "4 mph"}) == 4

    assert og.lanes({"highway": "motorway"}) == 3
    assert og.lanes({"highway": "primary"}) == 2
    assert og.lanes({"highway": "track"}) == 1
    assert og.lanes({"highway": "primary", "lanes": "default"}) == 2
    assert og.lanes({"highway": "secondary", "lanes": "unknown"}) == 2

    with pytest.raises(og.DataQualityError):
        og.lanes({"lanes": {"forward": 1}})

    # lanes and tracks are counts, so negative numbers are bad data
    with pytest.raises(og.DataQualityError, match="negative"):
        og.lanes({"lanes": -2})
    with pytest.raises(og.DataQualityError, match="negative"):
        og.lanes({"lanes": -1.4})
    with pytest.raises(og.DataQualityError, match="negative"):
        og.tags.tracks({"tracks": -1})
    with pytest.raises(og.DataQualityError, match="negative"):
        og.maxspeed({"maxspeed": np.int64(-30)})
    assert og.lanes({"lanes": "-1"}) == 1

    assert og.tags.tracks({}) == 1
    assert og.tags.tracks({"tracks": "2"}) == 2
    assert og.tags.tracks({"tracks": 4}) == 4


def test_oneway_and_reverseway() -> None:
    """Test oneway and reverseway attributes."""
    for value in ("yes", "true", "1", "-1", 1, -1):
        assert og.is_oneway({"highway": "residential", "oneway": value})
    for value in ("no", "false", "0", 0):
        assert not og.is_oneway({"highway": "residential", "oneway": value})

    # roundabouts are one-way regardless of their oneway tag
    for value in ("yes", "no", "0", "reversible"):
        tags = {"highway": "primary", "junction": "roundabout", "oneway": value}
        assert og.is_oneway(tags)
    assert og.is_oneway({"highway": "primary", "junction": "roundabout"})

    # unrecognized or missing values use the highway default
    assert not og.is_oneway({"highway": "residential"})
    assert not og.is_oneway({"highway": "residential", "oneway": "reversible"})
    default = og.settings.default_oneway
    og.settings.default_oneway = {"motorway": True, "other": False}
    try:
        assert og.is_oneway({"highway": "motorway"})
        assert not og.is_oneway({"highway": "unclassified"})
    finally:
        og.settings.default_oneway = default

    assert og.is_reverseway({"oneway": "-1"})
    assert og.is_reverseway({"oneway": -1})
    for value in ("yes", "no", "1", 1, "reverse"):
        assert not og.is_reverseway({"oneway": value})
    assert not og.is_reverseway({})

    with pytest.raises(og.DataQualityError, match="not a single tag value"):
        og.is_oneway({"highway": "residential", "oneway": ["yes", "no"]})
    with pytest.raises(og.DataQualityError):
        og.is_reverseway({"oneway": ["-1"]})
    with pytest.raises(og.DataQualityError):
        og.maxspeed({"highway": ["primary"]})


def test_normalize_tags() -> None:
    """Test that normalization returns new tags without mutating raw tags."""
    raw = {"highway": "motorway", "oneway": "-1", "maxspeed": "60 mph", "lanes": "2"}
    normalized = og.tags.normalize_highway_tags(raw)
    assert raw == {"highway": "motorway", "oneway": "-1", "maxspeed": "60 mph", "lanes": "2"}
    assert normalized["maxspeed"] == 97
    assert normalized["lanes"] == 2
    assert normalized["oneway"] is True
    assert normalized["reverseway"] is True
    assert normalized["highway"] == "motorway"

    raw = {"railway": "rail", "electrified": "contact_line", "tracks": "2"}
    normalized = og.tags.normalize_railway_tags(raw)
    assert "rail_type" not in raw
    assert normalized["rail_type"] == "rail"
    assert normalized["electrified"] == "contact_line"
    assert normalized["gauge"] is None
    assert normalized["usage"] == "unknown"
    assert normalized["name"] == "unknown"
    assert normalized["lanes"] == 2
    assert normalized["maxspeed"] == og.settings.default_maxspeeds["other"]
    assert normalized["oneway"] is False
    assert normalized["reverseway"] is False

    normalized = og.tags.normalize_railway_tags({"railway": "tram", "gauge": "1435"})
    assert normalized["gauge"] == "1435"
    assert normalized["lanes"] == 1


def test_classify() -> None:
    """Test element classification predicates."""
    assert og.is_highway({"highway": "primary"})
    assert not og.is_highway({"railway": "rail"})
    assert og.is_railway({"railway": "rail"})
    assert not og.is_railway({"highway": "primary"})
    assert og.is_roundabout({"junction": "roundabout"})
    assert not og.is_roundabout({"junction": "circular"})
    assert not og.is_roundabout({})
    assert og.is_restriction({"type": "restriction", "restriction": "no_u_turn"})
    assert not og.is_restriction({"type": "restriction"})
    assert not og.is_restriction({"type": "multipolygon", "restriction": "no_u_turn"})


def test_network_types() -> None:
    """Test filtering ways by named and custom network types."""
    assert og.matches_network_type({"highway": "primary"}, "drive")
    assert not og.matches_network_type({"highway": "footway"}, "drive")
    assert not og.matches_network_type({"highway": "primary", "access": "private"}, "drive")
    assert og.matches_network_type({"highway": "service"}, "drive_service")
    assert not og.matches_network_type({"highway": "service"}, "drive")
    assert og.matches_network_type({"highway": "footway"}, "walk")
    assert not og.matches_network_type({"highway": "motorway"}, "walk")
    assert not og.matches_network_type({"highway": "cycleway", "bicycle": "no"}, "bike")
    assert og.matches_network_type({"highway": "primary", "access": "private"}, "all")
    assert not og.matches_network_type({"highway": "primary", "access": "private"}, "all_public")
    assert og.matches_network_type({"highway": "construction"}, "none")
    assert og.matches_network_type({"railway": "rail"}, "rail")
    assert not og.matches_network_type({"highway": "platform"}, "rail")

    custom = {"highway": ["motorway", "trunk"], "toll": "yes"}
    assert og.matches_network_type({"highway": "primary"}, custom)
    assert not og.matches_network_type({"highway": "trunk"}, custom)
    assert not og.matches_network_type({"highway": "primary", "toll": "yes"}, custom)
    assert og.matches_network_type({"highway": "primary", "toll": "y"}, custom)

    with pytest.raises(ValueError, match="Unrecognized network_type"):
        og.matches_network_type({"highway": "primary"}, "boat")


def test_join_on_common_trailing_elements() -> None:
    """Test joining node sequences on shared endpoints."""
    join = og.restrictions.join_on_common_trailing_elements

    assert og.restrictions.trailing_elements([1, 2, 3]) == {1, 3}
    assert og.restrictions.trailing_elements([4]) == {4}
    assert og.restrictions.trailing_elements([]) == set()

    assert join([[1, 2, 3], [3, 4]]).nodes == [1, 2, 3, 4]
    assert join([[1, 2, 3], [4, 3]]).nodes == [1, 2, 3, 4]
    assert join([[1, 2, 3], [0, 1]]).nodes == [0, 1, 2, 3]
    assert join([[1, 2, 3], [1, 0]]).nodes == [0, 1, 2, 3]

    # out of order sequences are joined once they touch the chain
    result = join([[1, 2], [3, 4], [2, 3]])
    assert result.ok
    assert result.nodes == [1, 2, 3, 4]

    result = join([[1, 2], [5, 6]])
    assert not result.ok
    assert result.failure == og.restrictions.JOIN_NOT_CHAINABLE

    result = join([[1, 2], []])
    assert result.failure == og.restrictions.JOIN_EMPTY
    assert join([]).failure == og.restrictions.JOIN_EMPTY


def test_restriction_validation() -> None:
    """Test structural validation of turn restrictions."""
    osm_dict = make_osm_dict()
    G = og.graph_from_dict(osm_dict, network_type="drive")
    valid = og.is_valid_restriction

    def members(*items: tuple[str, int, str]) -> list[dict]:
        return [{"type": t, "ref": r, "role": role} for t, r, role in items]

    # via node shared by the endpoints of from and to ways
    assert valid(members(("way", 10, "from"), ("node", 3, "via"), ("way", 12, "to")), G.ways)

    # via node is not an endpoint of both ways
    assert not valid(members(("way", 10, "from"), ("node", 2, "via"), ("way", 12, "to")), G.ways)
    assert not valid(members(("way", 10, "from"), ("node", 5, "via"), ("way", 13, "to")), G.ways)

    # two from ways, missing to way, or a node as the from member
    assert not valid(
        members(("way", 10, "from"), ("way", 11, "from"), ("node", 3, "via"), ("way", 12, "to")),
        G.ways,
    )
    assert not valid(members(("way", 10, "from"), ("node", 3, "via")), G.ways)
    assert not valid(members(("node", 1, "from"), ("node", 3, "via"), ("way", 12, "to")), G.ways)

    # unknown (filtered out) and duplicate ways
    assert not valid(members(("way", 13, "from"), ("node", 7, "via"), ("way", 14, "to")), G.ways)
    assert not valid(members(("way", 10, "from"), ("node", 3, "via"), ("way", 10, "to")), G.ways)

    # no via, two via nodes, or both a via node and a via way
    assert not valid(members(("way", 10, "from"), ("way", 12, "to")), G.ways)
    assert not valid(
        members(("way", 10, "from"), ("node", 3, "via"), ("node", 3, "via"), ("way", 12, "to")),
        G.ways,
    )
    assert not valid(
        members(("way", 10, "from"), ("node", 3, "via"), ("way", 11, "via"), ("way", 13, "to")),
        G.ways,
    )

    # via ways chained in either member order
    assert valid(members(("way", 10, "from"), ("way", 11, "via"), ("way", 13, "to")), G.ways)
    assert valid(
        members(("way", 10, "from"), ("way", 13, "via"), ("way", 11, "via"), ("way", 15, "to")),
        G.ways,
    )

    # via way chain does not touch the to way, or via ways cannot be chained
    assert not valid(members(("way", 10, "from"), ("way", 13, "via"), ("way", 12, "to")), G.ways)
    assert not valid(
        members(("way", 12, "from"), ("way", 10, "via"), ("way", 13, "via"), ("way", 15, "to")),
        G.ways,
    )


def test_graph_from_dict() -> None:
    """Test building a graph from grouped OSM elements."""
    osm_dict = make_osm_dict()
    osm_dict["relation"] = [
        restriction(100, "no_left_turn", ("way", 10, "from"), ("node", 3, "via"), ("way", 12, "to")),
        restriction(101, "only_straight_on", ("way", 10, "from"), ("way", 11, "via"), ("way", 13, "to")),
        restriction(
            102,
            "no_u_turn",
            ("way", 10, "from"),
            ("way", 11, "from"),
            ("node", 3, "via"),
            ("way", 12, "to"),
        ),
        restriction(103, "no_left_turn", ("way", 10, "from"), ("node", 2, "via"), ("way", 12, "to")),
        {"id": 104, "tags": {"type": "multipolygon"}, "members": []},
        {"id": 105, "members": []},
    ]
    raw_way_tags = [dict(w.get("tags", {})) for w in osm_dict["way"]]

    G = og.graph_from_dict(osm_dict, network_type="drive")
    assert isinstance(G, og.OSMGraph)
    assert G.network_type == "drive"

    # footway is excluded, and ways without tags or nodes are skipped
    assert set(G.ways) == {10, 11, 12, 13, 15}
    assert G.get_way(11).nodes == (3, 4, 5)

    # nodes referenced only by excluded ways, or by nothing, are excluded
    assert set(G.nodes) == {1, 2, 3, 4, 5, 6, 7, 9}
    assert len(G) == 8
    assert 8 not in G.nodes
    assert 99 not in G.nodes
    assert G.get_node(3).location.lat == pytest.approx(52.503)
    assert G.get_node(3).location.lon == pytest.approx(13.4)

    # raw input tags are left untouched
    assert [dict(w.get("tags", {})) for w in osm_dict["way"]] == raw_way_tags
    assert "maxspeed" not in osm_dict["way"][0]["tags"]
    assert G.get_way(10).maxspeed == 100
    assert G.get_way(12).maxspeed == 50
    assert G.get_way(10).lanes == 2

    # only valid turn restrictions are retained
    assert set(G.restrictions) == {100, 101}
    r = G.get_restriction(100)
    assert r.type == "via_node"
    assert r.via_node == 3
    assert r.via_ways is None
    assert r.via == 3
    assert (r.from_way, r.to_way) == (10, 12)
    assert r.is_exclusion
    assert not r.is_exclusive
    r = G.get_restriction(101)
    assert r.type == "via_way"
    assert r.via_ways == (11,)
    assert r.via_node is None
    assert r.via == (11,)
    assert not r.is_exclusion
    assert r.is_exclusive

    # a custom filter excluding every highway type yields an empty graph
    custom = {"highway": ["footway", "primary", "residential"]}
    G = og.graph_from_dict(make_osm_dict(), network_type=custom)
    assert len(G.ways) == 0
    assert len(G.nodes) == 0
    assert G.network_type == "custom"

    with pytest.raises(ValueError, match="Unrecognized network_type"):
        og.graph_from_dict(make_osm_dict(), network_type="boat")


def test_graph_motorway_end_to_end() -> None:
    """Test building a single mph-tagged one-way motorway."""
    osm_dict = {
        "way": [
            {
                "id": 1,
                "nodes": [1, 2, 3],
                "tags": {"highway": "motorway", "oneway": "yes", "maxspeed": "60 mph"},
            },
        ],
        "node": [{"id": i, "lat": 1.0 * i, "lon": 2.0 * i} for i in (1, 2, 3)],
    }
    G = og.graph_from_dict(osm_dict)
    assert list(G.ways) == [1]
    way = G.get_way(1)
    assert way.oneway is True
    assert way.reverseway is False
    assert way.maxspeed == round(60 * 1.60934) == 97
    assert set(G.nodes) == {1, 2, 3}
    assert len(G.restrictions) == 0


def test_graph_railways() -> None:
    """Test building a graph that includes railways."""
    osm_dict = {
        "node": [{"id": i, "lat": 0.0, "lon": i / 100} for i in range(1, 5)],
        "way": [
            {"id": 1, "nodes": [1, 2], "tags": {"railway": "rail", "tracks": "2", "usage": "main"}},
            {"id": 2, "nodes": [2, 3], "tags": {"railway": "light_rail", "maxspeed": "80"}},
            {"id": 3, "nodes": [3, 4], "tags": {"highway": "platform", "railway": "platform"}},
        ],
    }
    G = og.graph_from_dict(osm_dict, network_type="rail")
    assert set(G.ways) == {1, 2}
    assert set(G.nodes) == {1, 2, 3}
    assert G.get_way(1).tags["rail_type"] == "rail"
    assert G.get_way(1).tags["usage"] == "main"
    assert G.get_way(1).lanes == 2
    assert G.get_way(2).lanes == 1
    assert G.get_way(2).maxspeed == 80
    assert G.get_way(2).tags["electrified"] == "unknown"


def test_graph_data_quality_error() -> None:
    """Test that uninterpretable numeric tags abort the build."""
    osm_dict = make_osm_dict()
    osm_dict["way"][0]["tags"]["maxspeed"] = {"value": 50}
    with pytest.raises(og.DataQualityError):
        og.graph_from_dict(osm_dict)

    osm_dict = make_osm_dict()
    osm_dict["way"][0]["tags"]["highway"] = ["primary"]
    with pytest.raises(og.DataQualityError, match="not a single tag value"):
        og.graph_from_dict(osm_dict)
    with pytest.raises(og.DataQualityError, match="not a single tag value"):
        og.graph_from_dict(osm_dict, network_type="none")

    osm_dict = make_osm_dict()
    osm_dict["way"][1]["tags"]["lanes"] = -2
    with pytest.raises(og.DataQualityError, match="negative"):
        og.graph_from_dict(osm_dict)


def test_graph_is_read_only() -> None:
    """Test that built graphs and their entities cannot be modified."""
    raw = {"highway": "primary", "name": "Main Street"}
    way = og.Way(id=1, nodes=(1, 2), tags=raw)
    raw["name"] = "Other Street"
    assert way.tags["name"] == "Main Street"
    with pytest.raises(TypeError):
        way.tags["name"] = "Other Street"  # type: ignore[index]

    G = og.graph_from_dict(make_osm_dict())
    with pytest.raises(TypeError):
        G.ways[404] = way  # type: ignore[index]
    with pytest.raises(TypeError):
        G.get_node(3).tags["highway"] = "stop"  # type: ignore[index]
    with pytest.raises(AttributeError):
        G.network_type = "walk"  # type: ignore[misc]


def test_graph_validation() -> None:
    """Test validation of built graphs."""
    osm_dict = make_osm_dict()
    osm_dict["node"] = [n for n in osm_dict["node"] if n["id"] != 2]
    with pytest.warns(UserWarning, match="missing from the graph"):
        G = og.graph_from_dict(osm_dict)
    assert 2 not in G.nodes
    assert 2 in G.get_way(10).nodes

    with pytest.raises(og._errors.ValidationError, match="missing from the graph"):
        og._validate._validate_graph(G, strict=True)

    bad = og.Restriction(
        id=1,
        tags={"type": "restriction", "restriction": "no_u_turn"},
        type="via_node",
        is_exclusion=True,
        is_exclusive=False,
        from_way=10,
        to_way=404,
    )
    G = og.OSMGraph(nodes=G.nodes, ways=G.ways, restrictions={1: bad})
    with pytest.raises(og._errors.ValidationError, match="Restriction 1"):
        og._validate._validate_graph(G, strict=False)


def test_graph_from_file() -> None:
    """Test building graphs from OSM XML and JSON files."""
    G = og.graph_from_xml(input_xml)
    assert set(G.ways) == {10, 11, 12, 13}
    assert set(G.nodes) == {1, 2, 3, 4, 5, 6, 7}
    assert G.get_node(3).tags == {"highway": "traffic_signals"}
    assert G.get_way(10).tags["name"] == "Main Street"
    assert G.get_way(10).maxspeed == 48
    assert G.get_way(11).lanes == 3
    assert G.get_way(11).oneway
    assert G.get_way(11).reverseway
    assert G.get_way(13).maxspeed == 55
    assert set(G.restrictions) == {100, 101}
    assert G.get_restriction(101).type == "via_way"

    G_walk = og.graph_from_file(input_xml, network_type="walk")
    assert 14 in G_walk.ways
    assert 8 in G_walk.nodes

    # round trip the elements through compressed and uncompressed JSON files
    response_json = og._osm_xml._overpass_json_from_xml(input_xml, "utf-8")
    folder = Path(".temp/data")
    folder.mkdir(parents=True, exist_ok=True)
    fp_json = folder / "network.json"
    fp_json.write_text(json.dumps(response_json), encoding="utf-8")
    fp_gz = folder / "network.json.gz"
    with gzip.open(fp_gz, mode="wt", encoding="utf-8") as f:
        json.dump(response_json, f)

    for fp in (fp_json, fp_gz):
        G_json = og.graph_from_file(fp)
        assert set(G_json.ways) == set(G.ways)
        assert set(G_json.nodes) == set(G.nodes)
        assert set(G_json.restrictions) == set(G.restrictions)

    fp_bad = folder / "network.csv"
    fp_bad.write_text("", encoding="utf-8")
    with pytest.raises(ValueError, match="Unrecognized OSM file format"):
        og.graph_from_file(fp_bad)


def test_graph_from_json() -> None:
    """Test building a graph from an Overpass-like JSON response."""
    osm_dict = make_osm_dict()
    elements = [{"type": t, **e} for t, es in osm_dict.items() for e in es]
    G = og.graph_from_json({"elements": elements})
    assert set(G.ways) == {10, 11, 12, 13, 15}

    G = og.graph_from_json({"elements": []})
    assert len(G.ways) == 0


def test_to_networkx() -> None:
    """Test converting a graph to a NetworkX MultiDiGraph."""
    G = og.graph_from_xml(input_xml)
    M = og.to_networkx(G)
    assert isinstance(M, nx.MultiDiGraph)
    assert set(M.nodes) == set(G.nodes)
    assert M.nodes[1]["y"] == 52.5
    assert M.nodes[1]["x"] == 13.4
    assert M.nodes[3]["highway"] == "traffic_signals"
    assert set(M.graph["restrictions"]) == {100, 101}

    # two-way ways get both directions
    assert M.has_edge(1, 2)
    assert M.has_edge(2, 1)
    assert M.edges[2, 1, 0]["reversed"]
    assert M.edges[1, 2, 0]["osmid"] == 10
    assert M.edges[1, 2, 0]["maxspeed"] == 48

    # a reversed one-way way runs against its node order only
    assert M.has_edge(5, 4)
    assert M.has_edge(4, 3)
    assert not M.has_edge(3, 4)
    assert M.edges[5, 4, 0]["oneway"]
    assert len(M.edges) == 10

    # bidirectional export ignores oneway
    M = og.to_networkx(G, bidirectional=True)
    assert M.has_edge(3, 4)
    assert len(M.edges) == 12

    M = og.to_networkx(og.graph_from_xml(input_xml, network_type="walk"))
    assert M.has_edge(3, 4)
    assert M.has_edge(8, 7)


def test_graph_to_dataframes() -> None:
    """Test converting a graph to DataFrames."""
    G = og.graph_from_xml(input_xml)
    nodes, ways, restrictions = og.graph_to_dataframes(G)

    assert isinstance(nodes, pd.DataFrame)
    assert len(nodes) == 7
    assert nodes.index.dtype == np.dtype("int64")
    assert nodes["index"].dtype == np.dtype("int32")
    assert nodes.loc[1, "lat"] == 52.5

    assert len(ways) == 4
    assert ways.loc[11, "nodes"] == [3, 4, 5]
    assert ways["maxspeed"].dtype == np.dtype("float64")
    assert ways.loc[13, "maxspeed"] == 55

    assert list(restrictions.index) == [100, 101]
    assert restrictions.loc[100, "type"] == "via_node"
    assert restrictions.loc[101, "via_ways"] == (11,)

    nodes, ways, restrictions = og.graph_to_dataframes(og.OSMGraph())
    assert len(nodes) == 0
    assert len(ways) == 0
    assert len(restrictions) == 0
