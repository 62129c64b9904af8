from __future__ import annotations

from typing import Optional, Tuple, Union

from .builder import GraphBuilder
from .config import Config
from .document import GraphDocument
from .loader import DescriptorLoader, VertexRef


RootReference = Union[VertexRef, Tuple[str, str]]


class Graph:
    """Entry point: parse a descriptor tree into a GraphDocument.

    ``document`` is only set once a parse succeeds; a failed parse raises
    and leaves no partial graph behind.
    """

    def __init__(self, config: Optional[Config] = None, loader: Optional[DescriptorLoader] = None) -> None:
        self.config = config or Config()
        self.loader = loader
        self.document: Optional[GraphDocument] = None

    def parse(self, root: RootReference) -> GraphDocument:
        if not isinstance(root, VertexRef):
            path, name = root
            root = VertexRef(path=path, name=name)

        self.document = None
        builder = GraphBuilder(
            GraphDocument(),
            loader=self.loader,
            vertex_suffix=self.config.vertex_suffix,
            edge_suffix=self.config.edge_suffix,
            max_vertices=self.config.max_vertices,
            max_depth=self.config.max_depth,
        )
        document = builder.parse(root)
        self.document = document
        return document
