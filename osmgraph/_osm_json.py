"""Read OSM JSON data and group its elements by type."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING
from typing import Any

from ._osm_xml import _open_file

if TYPE_CHECKING:
    from pathlib import Path


def _load_json(filepath: Path, encoding: str) -> dict[str, Any]:
    """
    Read Overpass-like JSON data from a file.

    Parameters
    ----------
    filepath
        Path to a JSON file, optionally bz2 or gz compressed.
    encoding
        The file's character encoding.

    Returns
    -------
    response_json
    """
    with _open_file(filepath, encoding) as file:
        response_json: dict[str, Any] = json.load(file)
    return response_json


def _osm_dict_from_json(response_json: dict[str, Any]) -> dict[str, list[dict[str, Any]]]:
    """
    Group the elements of an Overpass-like response by element type.

    Parameters
    ----------
    response_json
        Dict with an "elements" list, each element having a "type" key.

    Returns
    -------
    osm_dict
        Dict with "node", "way", and "relation" keys whose values are lists
        of elements in their original order.
    """
    osm_dict: dict[str, list[dict[str, Any]]] = {"node": [], "way": [], "relation": []}
    for element in response_json.get("elements", []):
        osm_dict.setdefault(element["type"], []).append(element)
    return osm_dict
