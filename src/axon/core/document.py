from __future__ import annotations

from typing import Any, Dict, Iterator, Optional, Tuple

from .exceptions import MatrixNotBuilt, MetadataPathNotRegistered
from .index import PathIndex
from .matrix import AdjacencyMatrix


class GraphDocument:
    """Everything a parse produces: the path index, the adjacency matrix
    and the metadata file recorded for each vertex.

    The matrix is absent until traversal finishes; reading it earlier
    raises ``MatrixNotBuilt``.
    """

    def __init__(self, index: Optional[PathIndex] = None) -> None:
        self.index = index if index is not None else PathIndex()
        self._matrix: Optional[AdjacencyMatrix] = None
        self._metadata_paths: Dict[int, str] = {}

    @property
    def is_built(self) -> bool:
        return self._matrix is not None

    @property
    def matrix(self) -> AdjacencyMatrix:
        if self._matrix is None:
            raise MatrixNotBuilt("Adjacency matrix is not available until traversal completes")
        return self._matrix

    def attach_matrix(self, matrix: AdjacencyMatrix) -> None:
        if self._matrix is not None:
            raise ValueError("Adjacency matrix has already been built for this document")
        self._matrix = matrix

    def record_metadata_path(self, index: int, path: str) -> bool:
        """Record the metadata file for a vertex. The first recorded path wins.

        Returns True when this call stored the path.
        """
        if index in self._metadata_paths:
            return False
        self._metadata_paths[index] = path
        return True

    def get_metadata_path(self, index: int) -> str:
        try:
            return self._metadata_paths[index]
        except KeyError:
            raise MetadataPathNotRegistered(f"No metadata path registered for vertex {index}") from None

    @property
    def metadata_paths(self) -> Dict[int, str]:
        return dict(self._metadata_paths)

    @property
    def order(self) -> int:
        return self.index.count()

    def edges(self) -> Iterator[Tuple[int, int]]:
        return self.matrix.edges()

    def to_dict(self) -> Dict[str, Any]:
        """JSON-serializable summary of the document."""
        return {
            "vertices": [
                {
                    "id": index,
                    "path": path,
                    "metadata": self._metadata_paths.get(index),
                }
                for index, path in self.index.items()
            ],
            "edges": [list(edge) for edge in self.edges()] if self.is_built else [],
            "matrix": self.matrix.to_list() if self.is_built else None,
        }
