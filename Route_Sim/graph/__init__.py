"""Graph model and topology generation."""

from .generator import generate_topology
from .model import GraphModel
from .types import EdgeData, GraphDict, NodeData

__all__ = ["GraphModel", "NodeData", "EdgeData", "GraphDict", "generate_topology"]
