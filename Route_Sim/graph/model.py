from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterator, List, Tuple

from .types import EdgeData, GraphDict, NodeData


@dataclass
class GraphModel:
    """In-memory representation of a routing topology.

    Nodes and edges are kept as ordered lists. Edges are undirected: the
    ``from``/``to`` keys only record the order in which they were declared.
    The model is replaced wholesale on regeneration and offers lookups only.
    """

    nodes: List[NodeData] = field(default_factory=list)
    edges: List[EdgeData] = field(default_factory=list)

    def to_dict(self) -> GraphDict:
        """Serialize the model to a plain ``dict`` suitable for JSON."""
        return {
            "nodes": [dict(n) for n in self.nodes],
            "edges": [dict(e) for e in self.edges],
        }

    @classmethod
    def from_dict(cls, data: GraphDict) -> "GraphModel":
        """Construct a validated :class:`GraphModel` from ``data``."""
        model = cls()
        for node in data.get("nodes", []):
            node_id = str(node["id"])
            model.nodes.append(
                NodeData(
                    id=node_id,
                    label=str(node.get("label", node_id)),
                    x=float(node.get("x", 0.0)),
                    y=float(node.get("y", 0.0)),
                )
            )
        for edge in data.get("edges", []):
            record: EdgeData = {
                "from": str(edge["from"]),
                "to": str(edge["to"]),
                "cost": edge.get("cost", 1),
            }
            model.edges.append(record)
        model.validate()
        return model

    @classmethod
    def blank(cls) -> "GraphModel":
        """Return a new empty graph."""
        return cls()

    @classmethod
    def default(cls) -> "GraphModel":
        """Return the six node demonstration network shown on start-up."""
        positions = {
            "A": (150.0, 250.0),
            "B": (300.0, 150.0),
            "C": (300.0, 350.0),
            "D": (500.0, 100.0),
            "E": (500.0, 300.0),
            "F": (700.0, 200.0),
        }
        links = [
            ("A", "B", 7),
            ("A", "C", 9),
            ("B", "D", 10),
            ("B", "C", 10),
            ("C", "E", 2),
            ("D", "F", 15),
            ("D", "E", 6),
            ("E", "F", 7),
        ]
        return cls.from_dict(
            {
                "nodes": [
                    {"id": nid, "label": nid, "x": x, "y": y}
                    for nid, (x, y) in positions.items()
                ],
                "edges": [{"from": a, "to": b, "cost": c} for a, b, c in links],
            }
        )

    def validate(self) -> None:
        """Raise ``ValueError`` if the topology breaks a model invariant."""

        seen: set[str] = set()
        for node in self.nodes:
            if node["id"] in seen:
                raise ValueError(f"duplicate node id {node['id']!r}")
            seen.add(node["id"])
        for edge in self.edges:
            source, target = edge["from"], edge["to"]
            if source not in seen or target not in seen:
                raise ValueError(f"edge {source}-{target} references an unknown node")
            if source == target:
                raise ValueError("self-loops are not allowed")
            cost = edge["cost"]
            if isinstance(cost, bool) or not isinstance(cost, int) or cost < 0:
                raise ValueError(
                    f"edge {source}-{target} cost must be a non-negative integer"
                )

    # ---- Lookups ---------------------------------------------------------------

    def node_ids(self) -> List[str]:
        """Return node ids in declaration order."""
        return [n["id"] for n in self.nodes]

    def find_node(self, node_id: str) -> NodeData | None:
        """Return the node with ``node_id`` or ``None``."""
        for node in self.nodes:
            if node["id"] == node_id:
                return node
        return None

    def find_edge(self, a: str, b: str) -> EdgeData | None:
        """Return the first edge joining ``a`` and ``b`` in either direction."""
        for edge in self.edges:
            if (edge["from"] == a and edge["to"] == b) or (
                edge["from"] == b and edge["to"] == a
            ):
                return edge
        return None

    def node_position(self, node_id: str) -> tuple[float, float] | None:
        """Return the ``(x, y)`` position for ``node_id`` if present."""
        node = self.find_node(node_id)
        if node is None:
            return None
        return node["x"], node["y"]

    def neighbors(self, node_id: str) -> Iterator[Tuple[str, EdgeData]]:
        """Yield ``(neighbor_id, edge)`` for every edge touching ``node_id``."""
        for edge in self.edges:
            if edge["from"] == node_id:
                yield edge["to"], edge
            if edge["to"] == node_id:
                yield edge["from"], edge

    def node_at(self, x: float, y: float, radius: float | None = None) -> NodeData | None:
        """Return the first node whose centre lies within ``radius`` of ``(x, y)``."""
        if radius is None:
            from ..config import Config

            radius = Config.node_radius
        for node in self.nodes:
            if math.hypot(node["x"] - x, node["y"] - y) <= radius:
                return node
        return None

    # ---- networkx bridge -------------------------------------------------------

    def to_networkx(self):
        """Return an undirected ``networkx.Graph`` with ``cost`` edge weights.

        Parallel edges collapse onto the cheapest one.
        """

        import networkx as nx

        g = nx.Graph()
        for node in self.nodes:
            g.add_node(node["id"], x=node["x"], y=node["y"])
        for edge in self.edges:
            u, v = edge["from"], edge["to"]
            if g.has_edge(u, v) and g[u][v]["cost"] <= edge["cost"]:
                continue
            g.add_edge(u, v, cost=edge["cost"])
        return g

    def is_connected(self) -> bool:
        """Return ``True`` when every node is reachable from every other."""

        import networkx as nx

        if not self.nodes:
            return True
        return nx.is_connected(self.to_networkx())
