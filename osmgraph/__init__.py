# ruff: noqa: D205
"""
osmgraph builds typed road and rail network graphs, with validated turn
restrictions, from OpenStreetMap node, way, and relation data.
"""

from ._version import __version__ as __version__

# expose the package's public modules
from . import _errors as _errors
from . import classify as classify
from . import convert as convert
from . import graph as graph
from . import models as models
from . import restrictions as restrictions
from . import settings as settings
from . import tags as tags
from . import utils as utils

# expose the most common functions directly in the package's namespace
from ._api import *  # noqa: F403
