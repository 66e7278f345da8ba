"""Typed entities of a parsed OSM network graph."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from dataclasses import field
from types import MappingProxyType
from typing import Any

import numpy as np

from . import settings


def _freeze(obj: object, name: str) -> None:
    # store a mapping field as a read-only copy
    object.__setattr__(obj, name, MappingProxyType(dict(getattr(obj, name))))


@dataclass(frozen=True)
class GeoLocation:
    """Geographic coordinates in decimal degrees."""

    lat: float
    lon: float


@dataclass(frozen=True)
class Node:
    """An OSM node retained because at least one graph way references it."""

    id: int
    location: GeoLocation
    tags: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        _freeze(self, "tags")


@dataclass(frozen=True)
class Way:
    """
    An OSM way retained as a graph edge sequence.

    `nodes` is the way's geometry in stored OSM order. `tags` holds the raw
    OSM tags merged with the canonical attributes produced by the `tags`
    module (`maxspeed`, `lanes`, `oneway`, `reverseway`, and the rail fields
    for railways).
    """

    id: int
    nodes: tuple[int, ...]
    tags: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        _freeze(self, "tags")

    @property
    def maxspeed(self) -> int:
        return self.tags["maxspeed"]

    @property
    def lanes(self) -> int:
        return self.tags["lanes"]

    @property
    def oneway(self) -> bool:
        return self.tags["oneway"]

    @property
    def reverseway(self) -> bool:
        return self.tags["reverseway"]


@dataclass(frozen=True)
class Restriction:
    """
    A structurally valid turn restriction.

    Exactly one of `via_node` and `via_ways` is set, matching `type`:
    `"via_node"` restrictions connect `from_way` and `to_way` through a shared
    endpoint node, `"via_way"` restrictions through an ordered chain of ways.
    `is_exclusion` marks restrictions forbidding the movement (eg,
    "no_left_turn") and `is_exclusive` those mandating it (eg,
    "only_straight_on").
    """

    id: int
    tags: Mapping[str, Any]
    type: str
    is_exclusion: bool
    is_exclusive: bool
    from_way: int
    to_way: int
    via_node: int | None = None
    via_ways: tuple[int, ...] | None = None

    def __post_init__(self) -> None:
        _freeze(self, "tags")

    @property
    def via(self) -> int | tuple[int, ...]:
        """Return the via node id or the via way ids, whichever is set."""
        return self.via_node if self.type == "via_node" else self.via_ways  # type: ignore[return-value]


def _default_dtypes() -> dict[str, np.dtype[Any]]:
    return {k: np.dtype(v) for k, v in settings.default_dtypes.items()}


@dataclass(frozen=True)
class OSMGraph:
    """
    Container of the nodes, ways, and turn restrictions of a network.

    Each mapping is keyed by OSM id and, like every entity's tags, is stored
    as a read-only copy of the mapping passed in.
    """

    nodes: Mapping[int, Node] = field(default_factory=dict)
    ways: Mapping[int, Way] = field(default_factory=dict)
    restrictions: Mapping[int, Restriction] = field(default_factory=dict)
    network_type: str | None = None
    dtypes: dict[str, np.dtype[Any]] = field(default_factory=_default_dtypes)

    def __post_init__(self) -> None:
        for name in ("nodes", "ways", "restrictions"):
            _freeze(self, name)

    def __len__(self) -> int:
        return len(self.nodes)

    def get_node(self, osmid: int) -> Node:
        return self.nodes[osmid]

    def get_way(self, osmid: int) -> Way:
        return self.ways[osmid]

    def get_restriction(self, osmid: int) -> Restriction:
        return self.restrictions[osmid]
