from .config import Config
from .document import GraphDocument
from .exceptions import (
    AxonError,
    ConfigurationError,
    CycleDetected,
    DuplicateRegistration,
    EdgeFileLoadFailed,
    InvalidEdgeIndex,
    MatrixAllocationFailed,
    MatrixNotBuilt,
    MetadataPathNotRegistered,
    NormalizationFailed,
    TraversalDepthExceeded,
)
from .builder import GraphBuilder
from .graph import Graph
from .index import PathIndex
from .loader import VertexRef, load_edge_descriptor, parse_edge_descriptor
from .matrix import AdjacencyMatrix
from .paths import PathStack, join_segments, normalize_path

__all__ = [
    "AdjacencyMatrix",
    "AxonError",
    "Config",
    "ConfigurationError",
    "CycleDetected",
    "DuplicateRegistration",
    "EdgeFileLoadFailed",
    "Graph",
    "GraphBuilder",
    "GraphDocument",
    "InvalidEdgeIndex",
    "MatrixAllocationFailed",
    "MatrixNotBuilt",
    "MetadataPathNotRegistered",
    "NormalizationFailed",
    "PathIndex",
    "PathStack",
    "TraversalDepthExceeded",
    "VertexRef",
    "join_segments",
    "load_edge_descriptor",
    "normalize_path",
    "parse_edge_descriptor",
]
