"""
Normalize raw OSM way tags into canonical routing attributes.

OSM tag values are free text entered by mappers, so numeric tags such as
"maxspeed" and "lanes" may arrive as numbers, as unit-suffixed text (eg,
"30 mph"), as delimited lists (eg, "50;60"), or not at all. The functions in
this module reduce each of these to a single value, falling back to the
per-highway defaults in `settings` when no usable value exists. See
https://wiki.openstreetmap.org/wiki/Key:maxspeed and
https://wiki.openstreetmap.org/wiki/Key:lanes for the value conventions.
"""

from __future__ import annotations

import logging as lg
import math
import re
from numbers import Integral
from numbers import Real
from typing import Any

import numpy as np

from . import classify
from . import settings
from . import utils
from ._errors import DataQualityError

# conversion factor from miles per hour to kilometers per hour
KMH_PER_MPH = 1.60934

# the values OSM uses in its "oneway" tag to denote False and True. a value of
# -1 means one-way against the order of the way's nodes. see:
# https://wiki.openstreetmap.org/wiki/Key:oneway
ONEWAY_FALSE = frozenset({"false", "no", "0", 0})
ONEWAY_TRUE = frozenset({"true", "yes", "1", "-1", 1, -1})
REVERSEWAY_VALUES = frozenset({"-1", -1})

# sentinel tag value meaning "use the default for this highway type"
DEFAULT_VALUE = "default"

# delimiters mappers use to list several values (per lane, per direction, or
# ranges) in a single tag
_DELIMITERS = re.compile(r"[+|/,;-]")
_NON_NUMERIC = re.compile(r"[^0-9.]")
_CONDITIONAL_MARKER = "conditional"


def maxspeed(tags: dict[str, Any]) -> int:
    """
    Determine a way's speed limit in km per hour.

    Numeric values pass through (floats are rounded). Text values are cut at
    any "conditional" qualifier, split on list delimiters, stripped of units,
    converted from mph where a token says "mph", then averaged. If the tag is
    absent, equals "default", or contains no number, the default for the
    way's highway type in `settings.default_maxspeeds` is returned.

    Parameters
    ----------
    tags
        The way's raw `tag:value` data.

    Returns
    -------
    maxspeed
        Speed limit in km per hour.
    """
    default = _highway_default(tags, settings.default_maxspeeds)
    return _clean_numeric_tag(tags, "maxspeed", default, convert_mph=True)


def lanes(tags: dict[str, Any]) -> int:
    """
    Determine a way's number of lanes.

    Follows the same rules as `maxspeed` without unit conversion, falling
    back to `settings.default_lanes`.

    Parameters
    ----------
    tags
        The way's raw `tag:value` data.

    Returns
    -------
    lanes
    """
    default = _highway_default(tags, settings.default_lanes)
    return _clean_numeric_tag(tags, "lanes", default, convert_mph=False)


def tracks(tags: dict[str, Any]) -> int:
    """
    Determine a railway's number of tracks, defaulting to 1.

    Tracks are usually mapped as separate ways in OSM, so an absent "tracks"
    tag means a single track.

    Parameters
    ----------
    tags
        The way's raw `tag:value` data.

    Returns
    -------
    tracks
    """
    return _clean_numeric_tag(tags, "tracks", 1, convert_mph=False)


def is_oneway(tags: dict[str, Any]) -> bool:
    """
    Determine if a way allows travel in only one direction.

    Parameters
    ----------
    tags
        The way's raw `tag:value` data.

    Returns
    -------
    is_oneway
    """
    # roundabouts are one-way whatever their oneway tag says, and are often
    # not explicitly tagged as such
    if classify.is_roundabout(tags):
        return True

    oneway = classify._tag_value(tags, "oneway", "")
    if oneway in ONEWAY_FALSE:
        return False
    if oneway in ONEWAY_TRUE:
        return True

    return _highway_default(tags, settings.default_oneway)


def is_reverseway(tags: dict[str, Any]) -> bool:
    """
    Determine if travel runs against the stored order of a way's nodes.

    Parameters
    ----------
    tags
        The way's raw `tag:value` data.

    Returns
    -------
    is_reverseway
        True if the "oneway" tag is "-1" or -1.
    """
    return classify._tag_value(tags, "oneway", "") in REVERSEWAY_VALUES


def rail_attributes(tags: dict[str, Any]) -> dict[str, Any]:
    """
    Extract the railway-specific attributes of a way.

    Parameters
    ----------
    tags
        The way's raw `tag:value` data.

    Returns
    -------
    attrs
        Dict with `rail_type`, `electrified`, `gauge`, `usage`, `name`, and
        `lanes` (the number of tracks) keys.
    """
    return {
        "rail_type": tags.get("railway", "unknown"),
        "electrified": tags.get("electrified", "unknown"),
        "gauge": tags.get("gauge"),
        "usage": tags.get("usage", "unknown"),
        "name": tags.get("name", "unknown"),
        "lanes": tracks(tags),
    }


def normalize_highway_tags(tags: dict[str, Any]) -> dict[str, Any]:
    """
    Return a highway's raw tags merged with its canonical attributes.

    The input dict is not modified: every attribute is computed from the raw
    values before any of them is overwritten.

    Parameters
    ----------
    tags
        The way's raw `tag:value` data.

    Returns
    -------
    normalized
    """
    canonical = {
        "maxspeed": maxspeed(tags),
        "lanes": lanes(tags),
        "oneway": is_oneway(tags),
        "reverseway": is_reverseway(tags),
    }
    return {**tags, **canonical}


def normalize_railway_tags(tags: dict[str, Any]) -> dict[str, Any]:
    """
    Return a railway's raw tags merged with its canonical attributes.

    Speed, direction, and track count are computed with the same rules as
    highways so that railways can share the graph's edge attributes.

    Parameters
    ----------
    tags
        The way's raw `tag:value` data.

    Returns
    -------
    normalized
    """
    canonical = rail_attributes(tags)
    canonical["maxspeed"] = maxspeed(tags)
    canonical["oneway"] = is_oneway(tags)
    canonical["reverseway"] = is_reverseway(tags)
    return {**tags, **canonical}


def _highway_default(tags: dict[str, Any], defaults: dict[str, Any]) -> Any:  # noqa: ANN401
    highway = classify._tag_value(tags, "highway", "other")
    return defaults.get(highway, defaults["other"])


def _clean_numeric_tag(
    tags: dict[str, Any],
    key: str,
    default: int,
    *,
    convert_mph: bool,
) -> int:
    """
    Reduce a numeric tag's value to a single non-negative integer.

    Text values cannot be negative because "-" is a list delimiter, so only
    numeric values are checked for sign.

    Parameters
    ----------
    tags
        The element's raw `tag:value` data.
    key
        The tag to clean.
    default
        Value to return if the tag is absent, "default", or has no number.
    convert_mph
        If True, convert tokens containing "mph" to km per hour.

    Returns
    -------
    value
    """
    value = tags.get(key, DEFAULT_VALUE)

    # bool is a subclass of int but is never a meaningful count or speed
    if isinstance(value, bool):
        msg = f"{key!r} is neither text nor a number, check data quality: {value!r}"
        raise DataQualityError(msg)

    if isinstance(value, Real):
        if not math.isfinite(value):
            msg = f"{key!r} is not a finite number, check data quality: {value!r}"
            raise DataQualityError(msg)
        # counts and speeds are never negative
        if value < 0:
            msg = f"{key!r} is negative, check data quality: {value!r}"
            raise DataQualityError(msg)
        return int(value) if isinstance(value, Integral) else round(float(value))

    if isinstance(value, str):
        if value == DEFAULT_VALUE:
            return default
        mean = _mean_of_text_values(value, convert_mph=convert_mph)
        if mean is None:
            msg = f"No numeric {key!r} in {value!r}, using default {default}"
            utils.log(msg, level=lg.DEBUG)
            return default
        return round(mean)

    msg = f"{key!r} is neither text nor a number, check data quality: {value!r}"
    raise DataQualityError(msg)


def _mean_of_text_values(value: str, *, convert_mph: bool) -> float | None:
    """
    Average the numbers listed in a text tag value.

    Parameters
    ----------
    value
        A raw text tag value, such as "50;60", "30 mph", or "2|3".
    convert_mph
        If True, convert tokens containing "mph" to km per hour.

    Returns
    -------
    mean
        The mean of the parsed numbers, or None if there were none.
    """
    # conditional values (eg, "30 @ (22:00-06:00)") are not modeled
    value = value.split(_CONDITIONAL_MARKER, maxsplit=1)[0]

    numbers = []
    for token in _DELIMITERS.split(value):
        try:
            number = float(_NON_NUMERIC.sub("", token))
        except ValueError:
            # token held no number (eg, "none", "walk") or a malformed one
            continue
        if convert_mph and "mph" in token.lower():
            number *= KMH_PER_MPH
        numbers.append(number)

    if len(numbers) == 0:
        return None
    return float(np.mean(numbers))
