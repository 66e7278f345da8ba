"""
Validate and build turn restrictions.

A turn restriction relation links a "from" way to a "to" way through either
a single "via" node or a chain of "via" ways. See
https://wiki.openstreetmap.org/wiki/Relation:restriction for the tagging
scheme. Validation only checks that the members connect at their endpoints,
which is enough for the handful of ways a real restriction involves.
"""

from __future__ import annotations

import logging as lg
from collections import Counter
from collections.abc import Mapping
from collections.abc import Sequence
from typing import Any
from typing import NamedTuple

from . import utils
from .models import Restriction
from .models import Way

# reasons a list of ways cannot be joined into a single chain
JOIN_EMPTY = "empty"
JOIN_NOT_CHAINABLE = "not_chainable"


class JoinResult(NamedTuple):
    """Outcome of joining sequences on their common trailing elements."""

    nodes: list[int]
    failure: str | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None


def trailing_elements(sequence: Sequence[int]) -> set[int]:
    """
    Return the first and last elements of a sequence.

    Parameters
    ----------
    sequence
        An ordered sequence, such as a way's nodes.

    Returns
    -------
    trailing
        Set of the sequence's endpoints, empty if the sequence is empty.
    """
    if len(sequence) == 0:
        return set()
    return {sequence[0], sequence[-1]}


def _join_two(chain: list[int], other: Sequence[int]) -> list[int] | None:
    """
    Join `other` onto either end of `chain` if they share an endpoint.

    `other` is reversed as needed so the shared endpoint appears once.
    Returns None if the two share no endpoint.
    """
    if chain[-1] == other[0]:
        return chain + list(other[1:])
    if chain[-1] == other[-1]:
        return chain + list(reversed(other[:-1]))
    if chain[0] == other[-1]:
        return list(other[:-1]) + chain
    if chain[0] == other[0]:
        return list(reversed(other[1:])) + chain
    return None


def join_on_common_trailing_elements(sequences: Sequence[Sequence[int]]) -> JoinResult:
    """
    Join sequences end to end on their shared trailing elements.

    The sequences may be given in any order and any direction: each pass
    attaches the first remaining sequence that shares an endpoint with the
    chain built so far.

    Parameters
    ----------
    sequences
        The node sequences of the ways to join.

    Returns
    -------
    result
        The joined chain, or a failure reason if a sequence is empty or no
        remaining sequence touches the chain.
    """
    if len(sequences) == 0 or any(len(s) == 0 for s in sequences):
        return JoinResult([], JOIN_EMPTY)

    chain = list(sequences[0])
    remaining = [list(s) for s in sequences[1:]]
    while len(remaining) > 0:
        for i, sequence in enumerate(remaining):
            joined = _join_two(chain, sequence)
            if joined is not None:
                chain = joined
                del remaining[i]
                break
        else:
            return JoinResult(chain, JOIN_NOT_CHAINABLE)

    return JoinResult(chain)


def is_valid_restriction(members: Sequence[Mapping[str, Any]], ways: Mapping[int, Way]) -> bool:
    """
    Determine if a restriction's members form a usable restriction.

    A valid restriction has exactly one "from" way and one "to" way, all of
    its way members are known and distinct, and it has either exactly one
    "via" node or one or more "via" ways (never both). A via node must be an
    endpoint of both the from and to ways. Via ways must join into a chain
    whose endpoints touch an endpoint of the from way and of the to way.

    Parameters
    ----------
    members
        The relation's members, each a dict with "ref", "type", and "role".
    ways
        The graph's ways, keyed by OSM id.

    Returns
    -------
    is_valid
    """
    role_counts: Counter[str] = Counter()
    role_type_counts: Counter[tuple[str, str]] = Counter()
    way_ids: set[int] = set()
    ways_by_role: dict[str, list[int]] = {"from": [], "via": [], "to": []}
    via_node = None

    for member in members:
        ref = member["ref"]
        member_type = member["type"]
        role = member["role"]

        if member_type == "way":
            # missing and duplicate ways cannot be processed
            if ref not in ways or ref in way_ids:
                return False
            way_ids.add(ref)
            ways_by_role.setdefault(role, []).append(ref)
        elif member_type == "node" and role == "via":
            via_node = ref

        role_counts[role] += 1
        role_type_counts[role, member_type] += 1

    has_single_via_node = role_type_counts["via", "node"] == 1 and role_type_counts["via", "way"] == 0
    has_via_ways = role_type_counts["via", "node"] == 0 and role_type_counts["via", "way"] >= 1
    if (
        role_counts["from"] != 1
        or role_counts["to"] != 1
        or role_type_counts["from", "way"] != 1
        or role_type_counts["to", "way"] != 1
        or not (has_single_via_node or has_via_ways)
    ):
        return False

    trailing_from = trailing_elements(ways[ways_by_role["from"][0]].nodes)
    trailing_to = trailing_elements(ways[ways_by_role["to"][0]].nodes)

    # via node must be an endpoint of both the from way and the to way
    if has_single_via_node:
        return via_node in trailing_from and via_node in trailing_to

    result = join_on_common_trailing_elements([ways[w].nodes for w in ways_by_role["via"]])
    if not result.ok:
        msg = f"Via ways {ways_by_role['via']} cannot be joined: {result.failure}"
        utils.log(msg, level=lg.DEBUG)
        return False

    # via chain endpoints must touch both the from way and the to way
    trailing_via = trailing_elements(result.nodes)
    return len(trailing_via & trailing_from) > 0 and len(trailing_via & trailing_to) > 0


def build_restriction(relation: Mapping[str, Any]) -> Restriction:
    """
    Create a Restriction from a validated restriction relation.

    Parameters
    ----------
    relation
        OSM element of type "relation" that passed `is_valid_restriction`.

    Returns
    -------
    restriction
    """
    tags = relation["tags"]
    from_way = to_way = via_node = None
    via_ways: list[int] = []
    for member in relation["members"]:
        role, member_type, ref = member["role"], member["type"], member["ref"]
        if role == "from" and member_type == "way":
            from_way = ref
        elif role == "to" and member_type == "way":
            to_way = ref
        elif role == "via" and member_type == "way":
            via_ways.append(ref)
        elif role == "via" and member_type == "node":
            via_node = ref

    restriction_value = tags["restriction"]
    return Restriction(
        id=relation["id"],
        tags=dict(tags),
        type="via_way" if len(via_ways) > 0 else "via_node",
        is_exclusion="no" in restriction_value,
        is_exclusive="only" in restriction_value,
        from_way=from_way,  # type: ignore[arg-type]
        to_way=to_way,  # type: ignore[arg-type]
        via_node=via_node if len(via_ways) == 0 else None,
        via_ways=tuple(via_ways) if len(via_ways) > 0 else None,
    )
