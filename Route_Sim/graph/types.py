from __future__ import annotations

from typing import List, TypedDict

# Reusable typed mappings for graph records

NodeData = TypedDict(
    "NodeData",
    {
        "id": str,
        "label": str,
        "x": float,
        "y": float,
    },
)

EdgeData = TypedDict(
    "EdgeData",
    {
        "from": str,
        "to": str,
        "cost": int,
    },
)

GraphDict = TypedDict(
    "GraphDict",
    {
        "nodes": List[NodeData],
        "edges": List[EdgeData],
    },
    total=False,
)
