# ruff: noqa: PLC0414
"""
Expose common functionality in the package's namespace.

This allows functions to be accessed directly via the og.function_name()
shortcut.
"""

from ._errors import DataQualityError as DataQualityError
from .classify import is_highway as is_highway
from .classify import is_railway as is_railway
from .classify import is_restriction as is_restriction
from .classify import is_roundabout as is_roundabout
from .classify import matches_network_type as matches_network_type
from .convert import graph_to_dataframes as graph_to_dataframes
from .convert import to_networkx as to_networkx
from .graph import graph_from_dict as graph_from_dict
from .graph import graph_from_file as graph_from_file
from .graph import graph_from_json as graph_from_json
from .graph import graph_from_xml as graph_from_xml
from .models import GeoLocation as GeoLocation
from .models import Node as Node
from .models import OSMGraph as OSMGraph
from .models import Restriction as Restriction
from .models import Way as Way
from .restrictions import is_valid_restriction as is_valid_restriction
from .tags import is_oneway as is_oneway
from .tags import is_reverseway as is_reverseway
from .tags import lanes as lanes
from .tags import maxspeed as maxspeed
from .utils import log as log
from .utils import ts as ts
