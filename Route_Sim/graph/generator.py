"""Random connected topologies with spaced node positions."""

from __future__ import annotations

import logging
from typing import Dict, List, Sequence

import numpy as np

from ..config import Config
from .model import GraphModel
from .types import EdgeData, NodeData

__all__ = ["generate_topology"]

logger = logging.getLogger(__name__)


def generate_topology(
    node_count: int | None = None,
    labels: Sequence[str] | None = None,
    canvas: Dict[str, float] | None = None,
    min_separation: float | None = None,
    *,
    rng: np.random.Generator | None = None,
    seed: int | None = None,
) -> GraphModel:
    """Return a random connected :class:`GraphModel`.

    Nodes are placed by rejection sampling, joined by a random spanning tree
    and then sprinkled with a few extra edges so that alternative routes
    exist. The call never fails: when the placement budget runs out the last
    drawn position is kept.

    Parameters
    ----------
    node_count:
        Number of nodes, clamped to ``len(labels)``. Defaults to
        ``Config.node_count``.
    labels:
        Labels assigned in order; each label is also the node id.
    canvas:
        Mapping with ``width``, ``height``, ``margin_x`` and ``margin_y``.
    min_separation:
        Minimum distance requested between any two nodes.
    rng:
        Optional :class:`numpy.random.Generator` for reproducibility.
    seed:
        Seed used when ``rng`` is not supplied. Falls back to
        ``Config.run_seed``.
    """

    labels = list(labels if labels is not None else Config.node_labels)
    count = Config.node_count if node_count is None else node_count
    count = max(0, min(int(count), len(labels)))
    bounds = dict(Config.canvas)
    if canvas is not None:
        bounds.update(canvas)
    separation = Config.min_separation if min_separation is None else min_separation
    if rng is None:
        rng = np.random.default_rng(Config.run_seed if seed is None else seed)

    nodes = _place_nodes(count, labels, bounds, separation, rng)
    edges = _spanning_tree(nodes, rng)
    edges.extend(_extra_edges(nodes, edges, rng))

    graph = GraphModel(nodes=nodes, edges=edges)
    logger.debug(
        "generated topology with %d nodes and %d edges", len(nodes), len(edges)
    )
    return graph


def _random_cost(rng: np.random.Generator) -> int:
    low, high = Config.edge_cost["min"], Config.edge_cost["max"]
    return int(rng.integers(low, high + 1))


def _place_nodes(
    count: int,
    labels: List[str],
    bounds: Dict[str, float],
    separation: float,
    rng: np.random.Generator,
) -> List[NodeData]:
    x_low, x_high = bounds["margin_x"], bounds["width"] - bounds["margin_x"]
    y_low, y_high = bounds["margin_y"], bounds["height"] - bounds["margin_y"]
    attempts = max(1, int(Config.placement_attempts))
    coords = np.empty((count, 2), dtype=float)
    nodes: List[NodeData] = []

    for i in range(count):
        for _ in range(attempts):
            x = float(rng.uniform(x_low, x_high))
            y = float(rng.uniform(y_low, y_high))
            if i == 0:
                break
            dist = np.hypot(coords[:i, 0] - x, coords[:i, 1] - y)
            if dist.min() >= separation:
                break
        else:
            logger.debug(
                "placement budget exhausted for %s; keeping (%.1f, %.1f)",
                labels[i],
                x,
                y,
            )
        coords[i] = (x, y)
        nodes.append({"id": labels[i], "label": labels[i], "x": x, "y": y})
    return nodes


def _spanning_tree(nodes: List[NodeData], rng: np.random.Generator) -> List[EdgeData]:
    edges: List[EdgeData] = []
    for i in range(1, len(nodes)):
        j = int(rng.integers(0, i))
        edges.append(
            {"from": nodes[i]["id"], "to": nodes[j]["id"], "cost": _random_cost(rng)}
        )
    return edges


def _extra_edges(
    nodes: List[NodeData], existing: List[EdgeData], rng: np.random.Generator
) -> List[EdgeData]:
    """Draw the extra edges; collisions are skipped, not retried."""

    wanted = int(rng.integers(Config.extra_edges["min"], Config.extra_edges["max"] + 1))
    pairs = {frozenset((e["from"], e["to"])) for e in existing}
    added: List[EdgeData] = []
    if not nodes:
        return added
    for _ in range(wanted):
        source = nodes[int(rng.integers(0, len(nodes)))]["id"]
        target = nodes[int(rng.integers(0, len(nodes)))]["id"]
        if source == target:
            continue
        key = frozenset((source, target))
        if key in pairs:
            continue
        pairs.add(key)
        added.append({"from": source, "to": target, "cost": _random_cost(rng)})
    if len(added) < wanted:
        logger.debug("requested %d extra edges, added %d", wanted, len(added))
    return added
