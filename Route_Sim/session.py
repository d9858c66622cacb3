"""Session state owned by a front end and the pure transitions applied to it."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple

from .engine.pathfinding import PathSegment, path_cost, shortest_path
from .graph.model import GraphModel

SAME_NODE_MESSAGE = "Source and destination must be different nodes"
NO_PATH_MESSAGE = "No path found between selected nodes"
DELIVERED_MESSAGE = "Packet Delivered Successfully!"
REGENERATED_MESSAGE = "New network generated. Select source and destination nodes."


class NodeRole(Enum):
    ROUTER = "router"
    SOURCE = "source"
    DESTINATION = "destination"


@dataclass(frozen=True)
class SimulationState:
    """Selections, current route and status line of one session."""

    source_id: Optional[str] = None
    destination_id: Optional[str] = None
    path: Tuple[PathSegment, ...] = ()
    is_animating: bool = False
    is_complete: bool = False
    message: str = ""


def reset_state(message: str = REGENERATED_MESSAGE) -> SimulationState:
    """Return the empty state used after a topology is (re)generated."""
    return SimulationState(message=message)


def select_source(state: SimulationState, node_id: Optional[str]) -> SimulationState:
    """Return ``state`` with a new source; selections are frozen while animating."""
    if state.is_animating:
        return state
    return replace(state, source_id=node_id)


def select_destination(
    state: SimulationState, node_id: Optional[str]
) -> SimulationState:
    """Return ``state`` with a new destination; frozen while animating."""
    if state.is_animating:
        return state
    return replace(state, destination_id=node_id)


def plan_route(state: SimulationState, graph: GraphModel) -> SimulationState:
    """Compute the route for the current selection.

    Identical endpoints are refused before the solver runs. A missing route
    is reported through ``message``; on success the returned state carries
    the path and ``is_animating`` is set.
    """

    if not state.source_id or not state.destination_id:
        return state
    if state.source_id == state.destination_id:
        return replace(state, message=SAME_NODE_MESSAGE, is_complete=False)

    path = shortest_path(graph, state.source_id, state.destination_id)
    if not path:
        return replace(state, message=NO_PATH_MESSAGE, is_complete=False)

    return replace(
        state,
        path=tuple(path),
        is_animating=True,
        is_complete=False,
        message=(
            "Calculating route using Dijkstra's Algorithm... "
            f"Total cost: {path_cost(path)}"
        ),
    )


def mark_delivered(state: SimulationState) -> SimulationState:
    """Return ``state`` after the packet reached its destination."""
    return replace(
        state, is_animating=False, is_complete=True, message=DELIVERED_MESSAGE
    )


def node_role(state: SimulationState, node_id: str) -> NodeRole:
    if node_id == state.source_id:
        return NodeRole.SOURCE
    if node_id == state.destination_id:
        return NodeRole.DESTINATION
    return NodeRole.ROUTER
