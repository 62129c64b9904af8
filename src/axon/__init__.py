"""AXON dependency graph engine.

Discovers a DAG by following on-disk edge descriptors, gives every distinct
canonical path an integer id, and stores the edges in a dense adjacency
matrix.
"""

from .core import Graph, GraphDocument, VertexRef

__version__ = "0.1.0"

__all__ = [
    "core",
    "Graph",
    "GraphDocument",
    "VertexRef",
]
