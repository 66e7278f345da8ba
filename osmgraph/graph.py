"""
Create network graphs from OpenStreetMap data.

The builders in this module turn OSM elements, grouped by element type, into
an `OSMGraph` of typed nodes, ways, and turn restrictions. Ways are
classified and their tags normalized first. Only then are nodes filtered to
those the retained ways reference and restriction relations validated
against the retained ways.
"""

from __future__ import annotations

import logging as lg
from collections.abc import Iterable
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from . import _osm_json
from . import _osm_xml
from . import _validate
from . import classify
from . import restrictions as rs
from . import tags as tg
from . import utils
from .models import GeoLocation
from .models import Node
from .models import OSMGraph
from .models import Restriction
from .models import Way

NetworkType = str | Mapping[str, Iterable[str]]

# file suffixes parsed as OSM XML, compressed or not
_XML_SUFFIXES = {".osm", ".xml"}


def graph_from_dict(
    osm_dict: Mapping[str, Iterable[dict[str, Any]]],
    network_type: NetworkType = "drive",
) -> OSMGraph:
    """
    Create a graph from OSM elements grouped by element type.

    Parameters
    ----------
    osm_dict
        Dict with "node", "way", and optionally "relation" keys, each mapping
        to a list of OSM elements of that type in Overpass JSON format.
    network_type
        {"all", "all_private", "all_public", "bike", "drive",
        "drive_service", "none", "rail", "walk"}
        What type of network to create, or a custom dict of tag keys to
        excluded tag values.

    Returns
    -------
    graph
    """
    # raise early on an unknown network type, before touching any data
    exclusion_filter = classify.get_way_exclusion_filter(network_type)

    ways, way_node_ids = _parse_ways(osm_dict.get("way", []), exclusion_filter)
    nodes = _parse_nodes(osm_dict.get("node", []), way_node_ids)
    restrictions = _parse_restrictions(osm_dict.get("relation", []), ways)

    if len(ways) == 0:
        msg = "No ways matched the network type, the graph is empty."
        utils.log(msg, level=lg.WARNING)

    graph = OSMGraph(
        nodes=nodes,
        ways=ways,
        restrictions=restrictions,
        network_type=network_type if isinstance(network_type, str) else "custom",
    )
    _validate._validate_graph(graph, strict=False)

    msg = (
        f"Created graph with {len(graph.nodes):,} nodes, {len(graph.ways):,} ways, "
        f"and {len(graph.restrictions):,} restrictions"
    )
    utils.log(msg, level=lg.INFO)
    return graph


def graph_from_json(
    response_json: dict[str, Any],
    network_type: NetworkType = "drive",
) -> OSMGraph:
    """
    Create a graph from an Overpass-like JSON response.

    Parameters
    ----------
    response_json
        Dict with an "elements" list of OSM elements, as returned by the
        Overpass API with `[out:json]`.
    network_type
        What type of network to create. See `graph_from_dict`.

    Returns
    -------
    graph
    """
    osm_dict = _osm_json._osm_dict_from_json(response_json)
    return graph_from_dict(osm_dict, network_type)


def graph_from_xml(
    filepath: str | Path,
    network_type: NetworkType = "drive",
    *,
    encoding: str = "utf-8",
) -> OSMGraph:
    """
    Create a graph from data in an OSM XML formatted file.

    Parameters
    ----------
    filepath
        Path to file containing OSM XML data, optionally bz2 or gz
        compressed.
    network_type
        What type of network to create. See `graph_from_dict`.
    encoding
        The XML file's character encoding.

    Returns
    -------
    graph
    """
    response_json = _osm_xml._overpass_json_from_xml(Path(filepath), encoding)
    return graph_from_json(response_json, network_type)


def graph_from_file(
    filepath: str | Path,
    network_type: NetworkType = "drive",
    *,
    encoding: str = "utf-8",
) -> OSMGraph:
    """
    Create a graph from an OSM XML or Overpass JSON file.

    The format is chosen by file suffix, ignoring a trailing ".bz2" or ".gz":
    ".json" files are read as JSON and ".osm" or ".xml" files as XML.

    Parameters
    ----------
    filepath
        Path to the file.
    network_type
        What type of network to create. See `graph_from_dict`.
    encoding
        The file's character encoding.

    Returns
    -------
    graph
    """
    filepath = Path(filepath)
    suffixes = [s for s in filepath.suffixes if s not in {".bz2", ".gz"}]
    fmt = suffixes[-1].lower() if len(suffixes) > 0 else ""

    msg = f"Loading OSM data from {str(filepath)!r}"
    utils.log(msg, level=lg.INFO)

    if fmt == ".json":
        response_json = _osm_json._load_json(filepath, encoding)
        return graph_from_json(response_json, network_type)
    if fmt in _XML_SUFFIXES:
        return graph_from_xml(filepath, network_type, encoding=encoding)

    msg = f"Unrecognized OSM file format {fmt!r}, expected '.json', '.osm', or '.xml'."
    raise ValueError(msg)


def _parse_ways(
    elements: Iterable[dict[str, Any]],
    exclusion_filter: Mapping[str, set[str]],
) -> tuple[dict[int, Way], set[int]]:
    """
    Retain the highways and railways matching a network type.

    Parameters
    ----------
    elements
        OSM elements of type "way".
    exclusion_filter
        Tag keys mapped to excluded values for the network type.

    Returns
    -------
    ways, way_node_ids
        The retained ways keyed by OSM id, and the ids of every node they
        reference.
    """
    ways: dict[int, Way] = {}
    way_node_ids: set[int] = set()
    for element in elements:
        if "tags" not in element or "nodes" not in element:
            continue

        raw_tags = element["tags"]
        if not classify._matches_filter(raw_tags, exclusion_filter):
            continue

        if classify.is_highway(raw_tags):
            way_tags = tg.normalize_highway_tags(raw_tags)
        elif classify.is_railway(raw_tags):
            way_tags = tg.normalize_railway_tags(raw_tags)
        else:
            continue

        nodes = tuple(element["nodes"])
        way_node_ids.update(nodes)
        ways[element["id"]] = Way(id=element["id"], nodes=nodes, tags=way_tags)

    msg = f"Retained {len(ways):,} ways referencing {len(way_node_ids):,} nodes"
    utils.log(msg, level=lg.INFO)
    return ways, way_node_ids


def _parse_nodes(elements: Iterable[dict[str, Any]], way_node_ids: set[int]) -> dict[int, Node]:
    """
    Retain the nodes referenced by retained ways.

    Parameters
    ----------
    elements
        OSM elements of type "node".
    way_node_ids
        Ids of the nodes referenced by the retained ways.

    Returns
    -------
    nodes
        The retained nodes keyed by OSM id.
    """
    nodes: dict[int, Node] = {}
    for element in elements:
        osmid = element["id"]
        if osmid in way_node_ids:
            location = GeoLocation(lat=float(element["lat"]), lon=float(element["lon"]))
            nodes[osmid] = Node(id=osmid, location=location, tags=dict(element.get("tags", {})))
    return nodes


def _parse_restrictions(
    elements: Iterable[dict[str, Any]],
    ways: Mapping[int, Way],
) -> dict[int, Restriction]:
    """
    Retain the valid turn restrictions among relations.

    Restrictions failing validation are dropped, not reported as errors.

    Parameters
    ----------
    elements
        OSM elements of type "relation".
    ways
        The retained ways keyed by OSM id.

    Returns
    -------
    restrictions
        The valid restrictions keyed by OSM id.
    """
    restrictions: dict[int, Restriction] = {}
    dropped = 0
    for element in elements:
        if "tags" not in element or "members" not in element:
            continue
        if not classify.is_restriction(element["tags"]):
            continue

        if rs.is_valid_restriction(element["members"], ways):
            restrictions[element["id"]] = rs.build_restriction(element)
        else:
            dropped += 1
            msg = f"Dropped invalid restriction {element['id']}"
            utils.log(msg, level=lg.DEBUG)

    msg = f"Retained {len(restrictions):,} restrictions and dropped {dropped:,} invalid ones"
    utils.log(msg, level=lg.INFO)
    return restrictions
