"""Routing engine: shortest paths and packet animation."""

from .animation import AnimationClock, ClockPhase, interpolate
from .pathfinding import PathSegment, edge_in_path, path_cost, path_node_ids, shortest_path
from .schedulers import BlockingScheduler, ManualScheduler

__all__ = [
    "AnimationClock",
    "ClockPhase",
    "interpolate",
    "PathSegment",
    "shortest_path",
    "path_cost",
    "path_node_ids",
    "edge_in_path",
    "ManualScheduler",
    "BlockingScheduler",
]
