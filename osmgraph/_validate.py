"""Validate that graphs satisfy osmgraph expectations."""

from __future__ import annotations

import logging as lg
from typing import TYPE_CHECKING
from warnings import warn

from ._errors import ValidationError
from .utils import log

if TYPE_CHECKING:
    from .models import OSMGraph


def _validate_ways(graph: OSMGraph) -> tuple[bool, str, str]:
    """
    Validate that every way's nodes are present in the graph.

    Input data may omit node records that ways reference (eg, when an extract
    was clipped to a bounding box). Consumers tolerate such dangling
    references, so they are reported as warnings.

    Parameters
    ----------
    graph
        The graph to validate.

    Returns
    -------
    is_valid, err_msg, warn_msg
    """
    is_valid = True
    err_msg = ""
    warn_msg = ""

    missing = {n for way in graph.ways.values() for n in way.nodes if n not in graph.nodes}
    if len(missing) > 0:
        warn_msg += f"{len(missing):,} node(s) referenced by ways are missing from the graph. "

    for osmid, way in graph.ways.items():
        if osmid != way.id:
            err_msg += f"Way {way.id} is keyed by a different id {osmid}. "
            is_valid = False

    return is_valid, err_msg, warn_msg


def _validate_restrictions(graph: OSMGraph) -> tuple[bool, str, str]:
    """
    Validate that every restriction is well formed and references graph ways.

    Parameters
    ----------
    graph
        The graph to validate.

    Returns
    -------
    is_valid, err_msg, warn_msg
    """
    is_valid = True
    err_msg = ""
    warn_msg = ""

    for osmid, r in graph.restrictions.items():
        way_ids = [r.from_way, r.to_way, *(r.via_ways or ())]
        if any(w not in graph.ways for w in way_ids):
            err_msg += f"Restriction {osmid} references ways missing from the graph. "
            is_valid = False
        has_via_node = r.via_node is not None
        has_via_ways = r.via_ways is not None and len(r.via_ways) > 0
        if has_via_node == has_via_ways or r.type != ("via_way" if has_via_ways else "via_node"):
            err_msg += f"Restriction {osmid} must have either one via node or via ways. "
            is_valid = False
        if has_via_node and r.via_node not in graph.nodes:
            warn_msg += f"Restriction {osmid} via node is missing from the graph. "

    return is_valid, err_msg, warn_msg


def _validate_graph(graph: OSMGraph, *, strict: bool = True) -> None:
    """
    Validate that a graph object satisfies osmgraph expectations.

    Raises `osmgraph._errors.ValidationError` if validation fails.

    Parameters
    ----------
    graph
        The graph to validate.
    strict
        If `True`, elevate warnings to errors.
    """
    is_valid_ways, err_msg_ways, warn_msg_ways = _validate_ways(graph)
    is_valid_rs, err_msg_rs, warn_msg_rs = _validate_restrictions(graph)

    warn_msg = warn_msg_ways + warn_msg_rs
    is_valid = is_valid_ways and is_valid_rs and not (strict and warn_msg != "")
    err_msg = err_msg_ways + err_msg_rs
    valid_msg = "Successfully validated graph."
    _report_validation(is_valid, valid_msg, warn_msg, err_msg)


def _report_validation(is_valid: bool, valid_msg: str, warn_msg: str, err_msg: str) -> None:  # noqa: FBT001
    """
    Report validation results by logging, warning, or raising an exception.

    Parameters
    ----------
    is_valid
        Whether or not the validation succeeded.
    valid_msg
        The message to log if validation succeeded.
    warn_msg
        Any warning messages to log and either issue a warning or include in
        error message.
    err_msg
        Any error messages to include when raising exception if validation
        failed.
    """
    if is_valid:
        log(valid_msg, level=lg.INFO)
        if warn_msg != "":
            log(warn_msg, level=lg.WARNING)
            warn(warn_msg, category=UserWarning, stacklevel=2)
    else:
        log(err_msg + warn_msg, level=lg.ERROR)
        raise ValidationError(err_msg + warn_msg)
