"""Dijkstra shortest paths over an undirected :class:`GraphModel`."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Sequence

from ..graph.model import GraphModel
from ..graph.types import EdgeData, NodeData

__all__ = [
    "PathSegment",
    "shortest_path",
    "path_cost",
    "path_node_ids",
    "edge_in_path",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PathSegment:
    """One directed hop along a route.

    Attributes
    ----------
    from_node:
        Node the packet leaves.
    to_node:
        Node the packet arrives at.
    edge:
        The graph edge being traversed, whatever its declared direction.
    """

    from_node: NodeData
    to_node: NodeData
    edge: EdgeData

    @property
    def cost(self) -> int:
        """Cost of the traversed edge."""

        return self.edge["cost"]

    def __hash__(self) -> int:
        # node and edge records are dicts, so hash their identifying values
        return hash(
            (
                self.from_node["id"],
                self.to_node["id"],
                self.edge["from"],
                self.edge["to"],
                self.edge["cost"],
            )
        )


def shortest_path(graph: GraphModel, source_id: str, dest_id: str) -> List[PathSegment]:
    """Return the cheapest route from ``source_id`` to ``dest_id``.

    An empty list means there is no route: either endpoint is missing, the
    destination is unreachable, or both ids are the same node. Costs must be
    non-negative.
    """

    if graph.find_node(source_id) is None or graph.find_node(dest_id) is None:
        logger.debug("unknown endpoint in %s -> %s", source_id, dest_id)
        return []

    order = graph.node_ids()
    distances: Dict[str, float] = {nid: math.inf for nid in order}
    distances[source_id] = 0
    previous: Dict[str, str] = {}
    unvisited = set(order)

    while unvisited:
        current = min((nid for nid in order if nid in unvisited), key=distances.get)
        if distances[current] == math.inf or current == dest_id:
            break
        unvisited.discard(current)

        for neighbor, edge in graph.neighbors(current):
            if neighbor not in unvisited:
                continue
            candidate = distances[current] + edge["cost"]
            if candidate < distances[neighbor]:
                distances[neighbor] = candidate
                previous[neighbor] = current

    path = _reconstruct(graph, previous, source_id, dest_id)
    if path:
        logger.debug(
            "route %s -> %s: %d hops, cost %d",
            source_id,
            dest_id,
            len(path),
            path_cost(path),
        )
    else:
        logger.debug("no route %s -> %s", source_id, dest_id)
    return path


def _reconstruct(
    graph: GraphModel, previous: Dict[str, str], source_id: str, dest_id: str
) -> List[PathSegment]:
    segments: List[PathSegment] = []
    current = dest_id
    while current != source_id:
        prev = previous.get(current)
        if prev is None:
            return []
        edge = graph.find_edge(prev, current)
        if edge is None:  # pragma: no cover - previous only follows real edges
            return []
        segments.append(PathSegment(graph.find_node(prev), graph.find_node(current), edge))
        current = prev
    segments.reverse()
    return segments


def path_cost(path: Sequence[PathSegment]) -> int:
    """Return the summed edge cost of ``path``."""

    return sum(seg.cost for seg in path)


def path_node_ids(path: Sequence[PathSegment]) -> List[str]:
    """Return the visited node ids, source first."""

    if not path:
        return []
    return [path[0].from_node["id"], *(seg.to_node["id"] for seg in path)]


def edge_in_path(path: Sequence[PathSegment], edge: EdgeData) -> bool:
    """Return ``True`` when ``edge`` joins two consecutive nodes of ``path``."""

    ends = {edge["from"], edge["to"]}
    return any({seg.from_node["id"], seg.to_node["id"]} == ends for seg in path)
