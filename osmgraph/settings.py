"""
Global settings that can be configured by the user.

bidirectional_network_types : list[str]
    Network types for which every way is exported in both directions by
    `convert.to_networkx`, regardless of its oneway attribute. Default is
    `["walk"]`.
default_dtypes : dict[str, str]
    Numeric types used when exporting a graph's data. Keys are `"index"`
    (positional node index), `"id"` (OSM element ids), and `"edge_weight"`
    (edge weight values). Default is `{"index": "int32", "id": "int64",
    "edge_weight": "float64"}`.
default_lanes : dict[str, int]
    Number of lanes to assign to ways without a usable "lanes" tag, keyed by
    the way's "highway" tag value. The `"other"` key is required: it is used
    for any highway value not in the mapping.
default_maxspeeds : dict[str, int]
    Speed (km per hour) to assign to ways without a usable "maxspeed" tag,
    keyed by the way's "highway" tag value. The `"other"` key is required.
default_oneway : dict[str, bool]
    Whether to treat a way as one-way when its "oneway" tag is absent or
    unrecognized and it is not a roundabout, keyed by the way's "highway" tag
    value. The `"other"` key is required.
log_console : bool
    If True, print log output to the console (terminal window). Default is
    `False`.
log_file : bool
    If True, save log output to a file in `logs_folder`. Default is `False`.
log_filename : str
    Name of the log file, without file extension. Default is `"osmgraph"`.
log_level : int
    One of Python's `logger.level` constants. Default is `logging.INFO`.
log_name : str
    Name of the logger. Default is `"osmgraph"`.
logs_folder : str | Path
    Path to folder in which to save log files. Default is `"./logs"`.
"""

from __future__ import annotations

import logging as lg
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

bidirectional_network_types: list[str] = ["walk"]
default_dtypes: dict[str, str] = {"index": "int32", "id": "int64", "edge_weight": "float64"}
default_lanes: dict[str, int] = {
    "motorway": 3,
    "trunk": 3,
    "primary": 2,
    "secondary": 2,
    "tertiary": 1,
    "unclassified": 1,
    "residential": 1,
    "other": 1,
}
default_maxspeeds: dict[str, int] = {
    "motorway": 100,
    "trunk": 100,
    "primary": 100,
    "secondary": 100,
    "tertiary": 50,
    "unclassified": 50,
    "residential": 50,
    "other": 50,
}
default_oneway: dict[str, bool] = {
    "motorway": False,
    "trunk": False,
    "primary": False,
    "secondary": False,
    "tertiary": False,
    "unclassified": False,
    "residential": False,
    "other": False,
}
log_console: bool = False
log_file: bool = False
log_filename: str = "osmgraph"
log_level: int = lg.INFO
log_name: str = "osmgraph"
logs_folder: str | Path = "./logs"
