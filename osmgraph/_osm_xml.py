"""
Read OSM XML files.

For file format information see https://wiki.openstreetmap.org/wiki/OSM_XML
"""

from __future__ import annotations

import bz2
import gzip
from contextlib import contextmanager
from typing import TYPE_CHECKING
from typing import Any
from typing import TextIO
from xml.sax import parse as sax_parse
from xml.sax.handler import ContentHandler

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path
    from xml.sax.xmlreader import AttributesImpl

# OSM XML elements parsed into network elements
ELEMENT_TYPES = ("node", "way", "relation")

# node/way/relation XML attributes to convert from string to numeric
_FLOAT_ATTRS = {"lat", "lon"}
_INT_ATTRS = {"changeset", "id", "uid", "version"}


class _OSMContentHandler(ContentHandler):
    """
    SAX content handler for OSM XML.

    Builds an Overpass-like response JSON object in self.object: every node,
    way, and relation becomes a dict with its attributes, a "tags" dict,
    and either a "nodes" list (ways) or a "members" list (relations).
    Tag values are kept as strings.
    """

    def __init__(self) -> None:
        self._element: dict[str, Any] | None = None
        self.object: dict[str, Any] = {"elements": []}

    def startElement(self, name: str, attrs: AttributesImpl) -> None:  # noqa: N802
        if name in ELEMENT_TYPES:
            self._element = dict(type=name, tags={}, **attrs)
            if name == "way":
                self._element["nodes"] = []
            elif name == "relation":
                self._element["members"] = []
            self._element.update({k: float(v) for k, v in attrs.items() if k in _FLOAT_ATTRS})
            self._element.update({k: int(v) for k, v in attrs.items() if k in _INT_ATTRS})

        # child elements outside a node/way/relation (eg, in a changeset) are
        # not part of the network
        elif self._element is None:
            return

        elif name == "tag":
            self._element["tags"][attrs["k"]] = attrs["v"]

        elif name == "nd":
            self._element["nodes"].append(int(attrs["ref"]))

        elif name == "member":
            self._element["members"].append(
                {k: (int(v) if k == "ref" else v) for k, v in attrs.items()},
            )

    def endElement(self, name: str) -> None:  # noqa: N802
        if name in ELEMENT_TYPES:
            self.object["elements"].append(self._element)
            self._element = None


@contextmanager
def _open_file(filepath: Path, encoding: str) -> Iterator[TextIO]:
    """
    Open a file and return a file object, optionally handling bz2 or gz files.

    Parameters
    ----------
    filepath
        Path to file.
    encoding
        The file's character encoding.

    Returns
    -------
    file
        The file handle.
    """
    if filepath.suffix == ".bz2":
        with bz2.open(filepath, mode="rt", encoding=encoding) as file:
            yield file
    elif filepath.suffix == ".gz":
        with gzip.open(filepath, mode="rt", encoding=encoding) as file:
            yield file
    else:
        with filepath.open(mode="rt", encoding=encoding) as file:
            yield file


def _overpass_json_from_xml(filepath: Path, encoding: str) -> dict[str, Any]:
    """
    Read OSM XML data from file and return Overpass-like JSON.

    Parameters
    ----------
    filepath
        Path to file containing OSM XML data.
    encoding
        The XML file's character encoding.

    Returns
    -------
    response_json
        Dict with an "elements" list, as returned by the Overpass API.
    """
    handler = _OSMContentHandler()
    with _open_file(filepath, encoding) as file:
        sax_parse(file, handler)  # noqa: S317
    return handler.object
