from __future__ import annotations

import logging
from typing import Iterator, List, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from .exceptions import InvalidEdgeIndex, MatrixAllocationFailed

logger = logging.getLogger(__name__)


class AdjacencyMatrix:
    """Dense ``size x size`` grid of 0/1 edge flags.

    Built once the graph order is known and never resized. Memory grows
    with ``size ** 2``, which limits this representation to modest graphs.
    """

    def __init__(self, cells: NDArray[np.uint8]) -> None:
        if cells.ndim != 2 or cells.shape[0] != cells.shape[1]:
            raise ValueError(f"Adjacency matrix must be square, got shape {cells.shape}")
        self._cells = cells

    @classmethod
    def build(cls, size: int, max_size: Optional[int] = None) -> "AdjacencyMatrix":
        if size < 0:
            raise MatrixAllocationFailed(f"Matrix size must be non-negative, got {size}")
        if max_size is not None and size > max_size:
            raise MatrixAllocationFailed(
                f"Matrix size {size} exceeds the configured maximum of {max_size} vertices"
            )
        try:
            cells = np.zeros((size, size), dtype=np.uint8)
        except MemoryError as e:
            raise MatrixAllocationFailed(f"Could not allocate a {size}x{size} matrix: {e}") from e
        logger.debug(f"Allocated {size}x{size} adjacency matrix")
        return cls(cells)

    @property
    def size(self) -> int:
        return int(self._cells.shape[0])

    @property
    def array(self) -> NDArray[np.uint8]:
        """Read-only view of the underlying cells."""
        view = self._cells.view()
        view.flags.writeable = False
        return view

    def set(self, source: int, target: int) -> None:
        self._check(source, target)
        self._cells[source, target] = 1

    def has_edge(self, source: int, target: int) -> bool:
        self._check(source, target)
        return bool(self._cells[source, target])

    def edge_count(self) -> int:
        return int(np.count_nonzero(self._cells))

    def edges(self) -> Iterator[Tuple[int, int]]:
        for source, target in zip(*np.nonzero(self._cells)):
            yield int(source), int(target)

    def to_list(self) -> List[List[int]]:
        return self._cells.tolist()

    def _check(self, source: int, target: int) -> None:
        size = self.size
        if not (0 <= source < size and 0 <= target < size):
            raise InvalidEdgeIndex(
                f"Edge ({source}, {target}) is outside a {size}x{size} adjacency matrix"
            )

    def __getitem__(self, key):
        if isinstance(key, tuple):
            source, target = key
            self._check(source, target)
            return int(self._cells[source, target])
        if not 0 <= key < self.size:
            raise InvalidEdgeIndex(f"Row {key} is outside a {self.size}x{self.size} adjacency matrix")
        return self.array[key]

    def __len__(self) -> int:
        return self.size

    def __repr__(self) -> str:
        return f"AdjacencyMatrix(size={self.size}, edges={self.edge_count()})"
