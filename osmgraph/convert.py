"""Convert graphs to NetworkX graphs and pandas DataFrames."""

from __future__ import annotations

import logging as lg
from typing import TYPE_CHECKING
from typing import Any

import networkx as nx
import pandas as pd

from . import settings
from . import utils
from ._version import __version__

if TYPE_CHECKING:
    from .models import OSMGraph
    from .models import Way


def to_networkx(graph: OSMGraph, *, bidirectional: bool | None = None) -> nx.MultiDiGraph:
    """
    Convert an OSMGraph to a NetworkX MultiDiGraph.

    Each node becomes a graph node with `y` (latitude) and `x` (longitude)
    attributes plus its OSM tags. Each way becomes a path of edges between
    its consecutive nodes, carrying the way's `osmid` and normalized tags.
    One-way ways are added in the direction of travel only, reversing the
    node order of "reverseway" ways. Other ways are also added in the
    opposite direction with `reversed=True`. Turn restrictions are stored in
    the graph-level `restrictions` attribute.

    Parameters
    ----------
    graph
        Input graph.
    bidirectional
        If True, add every way in both directions regardless of its oneway
        attribute. If None, True when the graph's network type is in
        `settings.bidirectional_network_types`.

    Returns
    -------
    G
    """
    if bidirectional is None:
        bidirectional = graph.network_type in settings.bidirectional_network_types

    metadata = {
        "created_date": utils.ts(),
        "created_with": f"osmgraph {__version__}",
        "network_type": graph.network_type,
        "restrictions": dict(graph.restrictions),
    }
    G = nx.MultiDiGraph(**metadata)

    for osmid, node in graph.nodes.items():
        G.add_node(osmid, **{**node.tags, "y": node.location.lat, "x": node.location.lon})

    skipped = 0
    for way in graph.ways.values():
        skipped += _add_way(G, graph, way, bidirectional)

    if skipped > 0:
        msg = f"Skipped {skipped:,} edges referencing nodes missing from the graph"
        utils.log(msg, level=lg.WARNING)

    msg = f"Converted graph to MultiDiGraph with {len(G):,} nodes and {len(G.edges):,} edges"
    utils.log(msg, level=lg.INFO)
    return G


def _add_way(G: nx.MultiDiGraph, graph: OSMGraph, way: Way, bidirectional: bool) -> int:  # noqa: FBT001
    """
    Add a way to the graph as edges and return how many edges were skipped.

    Parameters
    ----------
    G
        The graph to add edges to.
    graph
        The graph the way belongs to.
    way
        The way to add.
    bidirectional
        If True, add the way in both directions.

    Returns
    -------
    skipped
    """
    nodes = list(way.nodes)
    is_one_way = way.oneway and not bidirectional

    # reverse the order of nodes if this way is both one-way and only allows
    # travel in the opposite direction of its nodes' order
    if is_one_way and way.reverseway:
        nodes.reverse()

    # zip way nodes to get (u, v) tuples like [(0,1), (1,2), (2,3)] and drop
    # any with an endpoint missing from the graph
    pairs = list(zip(nodes[:-1], nodes[1:]))
    edges = [(u, v) for u, v in pairs if u in graph.nodes and v in graph.nodes]

    attrs: dict[str, Any] = {**way.tags, "osmid": way.id, "oneway": is_one_way}
    G.add_edges_from(edges, **{**attrs, "reversed": False})
    if not is_one_way:
        G.add_edges_from([(v, u) for u, v in edges], **{**attrs, "reversed": True})

    return len(pairs) - len(edges)


def graph_to_dataframes(graph: OSMGraph) -> tuple[pd.DataFrame, pd.DataFrame, pd.DataFrame]:
    """
    Convert an OSMGraph's nodes, ways, and restrictions to DataFrames.

    Each DataFrame is indexed by OSM id. The nodes DataFrame has `lat`,
    `lon`, and `index` (the node's position, typed with the graph's "index"
    dtype) columns plus one column per node tag. The ways DataFrame has a
    `nodes` column plus one column per way tag. The restrictions DataFrame has
    one column per Restriction field, with the "restriction" tag value in
    place of the full tags.

    Parameters
    ----------
    graph
        Input graph.

    Returns
    -------
    nodes, ways, restrictions
    """
    id_dtype = graph.dtypes["id"]

    node_rows = [{"lat": n.location.lat, "lon": n.location.lon, **n.tags} for n in graph.nodes.values()]
    nodes = pd.DataFrame(node_rows, index=pd.Index(list(graph.nodes), dtype=id_dtype, name="osmid"))
    nodes["index"] = pd.Series(range(len(nodes)), index=nodes.index, dtype=graph.dtypes["index"])

    way_rows = [{**w.tags, "nodes": list(w.nodes)} for w in graph.ways.values()]
    ways = pd.DataFrame(way_rows, index=pd.Index(list(graph.ways), dtype=id_dtype, name="osmid"))
    if len(ways) > 0:
        ways["maxspeed"] = ways["maxspeed"].astype(graph.dtypes["edge_weight"])

    restriction_rows = [
        {
            "type": r.type,
            "restriction": r.tags["restriction"],
            "is_exclusion": r.is_exclusion,
            "is_exclusive": r.is_exclusive,
            "from_way": r.from_way,
            "to_way": r.to_way,
            "via_node": r.via_node,
            "via_ways": r.via_ways,
        }
        for r in graph.restrictions.values()
    ]
    restrictions = pd.DataFrame(
        restriction_rows,
        index=pd.Index(list(graph.restrictions), dtype=id_dtype, name="osmid"),
        columns=[
            "type",
            "restriction",
            "is_exclusion",
            "is_exclusive",
            "from_way",
            "to_way",
            "via_node",
            "via_ways",
        ],
    )

    msg = "Converted graph to node, way, and restriction DataFrames"
    utils.log(msg, level=lg.INFO)
    return nodes, ways, restrictions
