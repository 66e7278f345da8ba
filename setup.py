"""osmgraph setup script."""

import os
from itertools import chain

from setuptools import setup

# version of the package
VERSION = "0.1.0"

# minimum required python version
PYTHON_REQUIRES = ">=3.10"

# optional dependency versions
extras = {
    "tests": ["pytest>=7"],
}
extras["all"] = sorted(set(chain(*extras.values())))
EXTRAS_REQUIRE = dict(sorted(extras.items()))

# list of classifiers from the PyPI classifiers trove
CLASSIFIERS = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "License :: OSI Approved :: MIT License",
    "Operating System :: OS Independent",
    "Programming Language :: Python",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Topic :: Scientific/Engineering :: GIS",
    "Topic :: Scientific/Engineering :: Information Analysis",
]

# provide a short description of package
DESCRIPTION = "Build typed road and rail network graphs with turn restrictions from OpenStreetMap data"

# provide a long description using reStructuredText
LONG_DESCRIPTION = r"""
osmgraph is a Python package that turns OpenStreetMap nodes, ways, and
relations into a typed network graph ready for routing. It normalizes the
free-text "maxspeed", "lanes", and "oneway" tags of highways and railways
into numeric and boolean attributes, filters ways by network type (drive,
walk, bike, rail, or a custom filter), and validates turn restriction
relations against the retained ways. Graphs can be built from grouped OSM
elements, Overpass JSON, or OSM XML files, and exported to NetworkX or
pandas.
"""

# only specify install_requires if not in RTD environment
if os.getenv("READTHEDOCS") == "True":
    INSTALL_REQUIRES = []
else:
    with open(os.path.join(os.path.dirname(os.path.abspath(__file__)), "requirements.txt")) as f:
        INSTALL_REQUIRES = [line.strip() for line in f.readlines() if line.strip()]

# now call setup
setup(
    classifiers=CLASSIFIERS,
    description=DESCRIPTION,
    extras_require=EXTRAS_REQUIRE,
    install_requires=INSTALL_REQUIRES,
    license="MIT",
    long_description=LONG_DESCRIPTION,
    long_description_content_type="text/x-rst",
    name="osmgraph",
    packages=["osmgraph"],
    platforms="any",
    python_requires=PYTHON_REQUIRES,
    version=VERSION,
)
