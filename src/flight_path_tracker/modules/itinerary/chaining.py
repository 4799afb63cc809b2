"""Leg chaining for itinerary ordering."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Set

from flight_path_tracker.core.errors import ReconstructionError
from flight_path_tracker.core.models import Leg

LOG = logging.getLogger(__name__)


def _find_start(next_map: Dict[str, str], prev_map: Dict[str, str]) -> Optional[str]:
    for origin in next_map:
        if origin not in prev_map:
            return origin
    return None


def reconstruct_path(legs: Iterable[Sequence[str]]) -> List[Leg]:
    """Order unordered ``(origin, destination)`` pairs into a single chain.

    The chain starts at the first origin (in input order) that is never a
    destination and follows ``next[origin]`` until it runs out. A later leg
    sharing an origin with an earlier one replaces it. Chains not reachable
    from the start are dropped, and input without a start (empty or purely
    cyclic) yields an empty list.
    """
    next_map: Dict[str, str] = {}
    prev_map: Dict[str, str] = {}
    for origin, destination in legs:
        if origin in next_map and next_map[origin] != destination:
            LOG.warning("Leg %s->%s replaces %s->%s", origin, destination, origin, next_map[origin])
        next_map[origin] = destination
        prev_map[destination] = origin

    start = _find_start(next_map, prev_map)
    if start is None:
        return []

    ordered: List[Leg] = []
    visited: Set[str] = set()
    current = start
    while current in next_map and current not in visited:
        visited.add(current)
        destination = next_map[current]
        ordered.append(Leg(current, destination))
        current = destination
    LOG.debug("Reconstructed %d legs from %s", len(ordered), start)
    return ordered


def summarize_path(ordered: Sequence[Leg]) -> Leg:
    if not ordered:
        raise ReconstructionError("No path could be reconstructed")
    return Leg(ordered[0].origin, ordered[-1].destination)
