"""Classify OSM elements and filter ways by network type."""

from __future__ import annotations

from collections.abc import Hashable
from collections.abc import Iterable
from collections.abc import Mapping
from typing import Any

from ._errors import DataQualityError

# values of the "highway" tag that never denote a way currently in use
_UNUSED_HIGHWAYS = {"abandoned", "construction", "no", "planned", "platform", "proposed", "razed"}


def _build_way_exclusion_filters() -> dict[str, dict[str, set[str]]]:
    """
    Create the built-in way exclusion filters for each named network type.

    A way matches a network type unless one of its tags has a key in the
    type's filter and a value in that key's set of excluded values.

    "all" retains all public and private-access ways currently in use.

    "all_private" is an alias of "all", kept for callers used to naming the
    private-inclusive network explicitly.

    "all_public" retains all public ways currently in use.

    "bike" retains public bikeable ways and excludes foot ways, motor ways,
    and anything tagged bicycle=no.

    "drive" retains public drivable streets and excludes service roads,
    anything tagged motor_vehicle=no or motorcar=no, and non-service roads
    tagged as providing certain services (such as parking or driveways).

    "drive_service" retains public drivable streets including service roads
    but excludes certain services (such as parking or emergency access).

    "none" excludes nothing.

    "rail" retains railways and excludes highways not in use.

    "walk" retains public walkable ways and excludes cycle ways, motor ways,
    and anything tagged foot=no.

    Returns
    -------
    filters
    """
    filters: dict[str, dict[str, set[str]]] = {}

    filters["drive"] = {
        "area": {"yes"},
        "access": {"private"},
        "highway": _UNUSED_HIGHWAYS
        | {
            "bridleway",
            "bus_guideway",
            "corridor",
            "cycleway",
            "elevator",
            "escalator",
            "footway",
            "path",
            "pedestrian",
            "raceway",
            "service",
            "steps",
            "track",
        },
        "motor_vehicle": {"no"},
        "motorcar": {"no"},
        "service": {"alley", "driveway", "emergency_access", "parking", "parking_aisle", "private"},
    }

    filters["drive_service"] = {
        "area": {"yes"},
        "access": {"private"},
        "highway": _UNUSED_HIGHWAYS
        | {
            "bridleway",
            "bus_guideway",
            "corridor",
            "cycleway",
            "elevator",
            "escalator",
            "footway",
            "path",
            "pedestrian",
            "raceway",
            "steps",
            "track",
        },
        "motor_vehicle": {"no"},
        "motorcar": {"no"},
        "service": {"emergency_access", "parking", "parking_aisle", "private"},
    }

    # some cycleways allow pedestrians, but this filter ignores such cycleways
    filters["walk"] = {
        "area": {"yes"},
        "access": {"private"},
        "highway": _UNUSED_HIGHWAYS
        | {"bus_guideway", "cycleway", "motor", "motorway", "motorway_link", "raceway"},
        "foot": {"no"},
        "service": {"private"},
    }

    filters["bike"] = {
        "area": {"yes"},
        "access": {"private"},
        "highway": _UNUSED_HIGHWAYS
        | {
            "bus_guideway",
            "corridor",
            "elevator",
            "escalator",
            "footway",
            "motor",
            "motorway",
            "motorway_link",
            "raceway",
            "steps",
        },
        "bicycle": {"no"},
        "service": {"private"},
    }

    filters["all_public"] = {
        "area": {"yes"},
        "access": {"private"},
        "highway": _UNUSED_HIGHWAYS | {"raceway"},
        "service": {"private"},
    }

    filters["all"] = {
        "area": {"yes"},
        "highway": _UNUSED_HIGHWAYS | {"raceway"},
    }
    filters["all_private"] = filters["all"]

    filters["rail"] = {"highway": {"platform", "proposed"}}

    filters["none"] = {}

    return filters


WAY_EXCLUSION_FILTERS = _build_way_exclusion_filters()


def is_highway(tags: Mapping[str, Any]) -> bool:
    """Determine if an element is a highway."""
    return "highway" in tags


def is_railway(tags: Mapping[str, Any]) -> bool:
    """Determine if an element is a railway."""
    return "railway" in tags


def is_roundabout(tags: Mapping[str, Any]) -> bool:
    """Determine if a way is a roundabout."""
    return tags.get("junction", "") == "roundabout"


def is_restriction(tags: Mapping[str, Any]) -> bool:
    """Determine if a relation is a turn restriction."""
    return tags.get("type", "") == "restriction" and "restriction" in tags


def get_way_exclusion_filter(
    network_type: str | Mapping[str, Iterable[str]],
) -> dict[str, set[str]]:
    """
    Get the way exclusion filter for a network type.

    Parameters
    ----------
    network_type
        {"all", "all_private", "all_public", "bike", "drive", "drive_service",
        "none", "rail", "walk"} or a custom filter mapping tag keys to
        iterables of excluded values.

    Returns
    -------
    exclusion_filter
        Dict of tag keys to sets of excluded values.
    """
    if isinstance(network_type, str):
        if network_type not in WAY_EXCLUSION_FILTERS:
            msg = f"Unrecognized network_type {network_type!r}."
            raise ValueError(msg)
        return WAY_EXCLUSION_FILTERS[network_type]

    # a single string would otherwise be treated as a set of characters
    exclusion_filter = {}
    for key, values in network_type.items():
        exclusion_filter[key] = {values} if isinstance(values, str) else set(values)
    return exclusion_filter


def matches_network_type(
    tags: Mapping[str, Any],
    network_type: str | Mapping[str, Iterable[str]],
) -> bool:
    """
    Determine if a way belongs to a network type.

    Parameters
    ----------
    tags
        The way's raw `tag:value` data.
    network_type
        A named network type or a custom exclusion filter. See
        `get_way_exclusion_filter` for the options.

    Returns
    -------
    matches
        False if any of the way's tags has an excluded value.
    """
    exclusion_filter = get_way_exclusion_filter(network_type)
    return _matches_filter(tags, exclusion_filter)


def _matches_filter(tags: Mapping[str, Any], exclusion_filter: Mapping[str, set[str]]) -> bool:
    for key, excluded_values in exclusion_filter.items():
        if key in tags and _tag_value(tags, key) in excluded_values:
            return False
    return True


def _tag_value(tags: Mapping[str, Any], key: str, default: Any = None) -> Any:  # noqa: ANN401
    """
    Get a tag's value, which must be a single text or numeric value.

    Parameters
    ----------
    tags
        The element's raw `tag:value` data.
    key
        The tag to get.
    default
        Value to return if the tag is absent.

    Returns
    -------
    value
    """
    value = tags.get(key, default)
    if not isinstance(value, Hashable):
        msg = f"{key!r} is not a single tag value, check data quality: {value!r}"
        raise DataQualityError(msg)
    return value
