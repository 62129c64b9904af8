from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Set, Tuple

import yaml  # type: ignore[import-not-found]

from .document import GraphDocument
from .exceptions import AxonError, CycleDetected, EdgeFileLoadFailed, TraversalDepthExceeded
from .loader import DescriptorLoader, VertexRef, load_edge_descriptor
from .matrix import AdjacencyMatrix
from .paths import PathStack

logger = logging.getLogger(__name__)

Edge = Tuple[int, int]


@dataclass
class _Frame:
    """A vertex whose children are still being walked."""

    vertex: int
    segments: Tuple[str, ...]
    children: Iterator[VertexRef] = field(repr=False)


class GraphBuilder:
    """Depth-first traversal over edge descriptors that fills a GraphDocument.

    The walk keeps an explicit stack of frames rather than recursing, so
    deep descriptor chains do not hit Python's recursion limit. Each frame
    carries the directory segments leading to its vertex; children are
    resolved against those segments plus their own relative path.

    A vertex reached again while its frame is still live is a cycle and
    aborts the parse. A vertex reached again after its frame finished is a
    re-convergent DAG edge: the edge is recorded but the vertex is not
    expanded twice.

    A builder walks one graph; create a new one for each parse.
    """

    def __init__(
        self,
        document: GraphDocument,
        loader: Optional[DescriptorLoader] = None,
        vertex_suffix: str = ".hurdy",
        edge_suffix: str = ".zon",
        max_vertices: Optional[int] = None,
        max_depth: Optional[int] = None,
    ) -> None:
        self.document = document
        self.loader = loader or load_edge_descriptor
        self.vertex_suffix = vertex_suffix
        self.edge_suffix = edge_suffix
        self.max_vertices = max_vertices
        self.max_depth = max_depth
        self.edges: List[Edge] = []
        self._active: Set[int] = set()
        self._expanded: Set[int] = set()
        self._used = False

    def parse(self, root: VertexRef) -> GraphDocument:
        """Traverse from ``root``, then build the adjacency matrix."""

        if self._used:
            raise AxonError("GraphBuilder has already parsed a graph; create a new builder")
        self._used = True
        try:
            self._traverse(root)
        except AxonError as e:
            logger.error(f"Traversal from {root.full_path} aborted: {e}")
            raise

        order = self.document.index.count()
        matrix = AdjacencyMatrix.build(order, max_size=self.max_vertices)
        for source, target in self.edges:
            matrix.set(source, target)
        self.document.attach_matrix(matrix)
        logger.info(f"Parsed {order} vertices and {len(self.edges)} edges from {root.full_path}")
        return self.document

    def _traverse(self, root: VertexRef) -> None:
        frames: List[_Frame] = []
        self._enter(root, (), frames)

        while frames:
            frame = frames[-1]
            child = next(frame.children, None)
            if child is None:
                frames.pop()
                self._active.discard(frame.vertex)
                continue

            stack = PathStack(frame.segments)
            with stack.pushed(child.path):
                leaf = self.document.index.get_or_create(stack.join(child.name))
            self.edges.append((frame.vertex, leaf))
            self._enter(child, frame.segments, frames)

    def _enter(self, ref: VertexRef, prefix: Tuple[str, ...], frames: List[_Frame]) -> None:
        stack = PathStack(prefix)
        with stack.pushed(ref.path):
            full_path = stack.join(ref.name)
            segments = stack.segments

        index = self.document.index
        vertex = index.get_or_create(full_path)
        canonical = index.get_path(vertex)
        if vertex in self._active:
            raise CycleDetected(canonical)
        self.document.record_metadata_path(vertex, canonical + self.vertex_suffix)

        if vertex in self._expanded:
            return
        if self.max_depth is not None and len(frames) >= self.max_depth:
            raise TraversalDepthExceeded(canonical, self.max_depth)

        self._expanded.add(vertex)
        logger.debug(f"Expanding vertex {vertex} ({canonical})")
        children = self._load(canonical + self.edge_suffix)
        self._active.add(vertex)
        frames.append(_Frame(vertex=vertex, segments=segments, children=iter(children)))

    def _load(self, edge_path: str) -> List[VertexRef]:
        try:
            return list(self.loader(edge_path))
        except EdgeFileLoadFailed:
            raise
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise EdgeFileLoadFailed(edge_path, str(e)) from e
