from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, List, Union

import yaml  # type: ignore[import-not-found]

from .exceptions import EdgeFileLoadFailed
from .paths import join_segments

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VertexRef:
    """A ``(path, name)`` reference to a vertex, relative to its parent."""

    path: str
    name: str

    @property
    def full_path(self) -> str:
        return join_segments(self.path, self.name)

    def vertex_path(self, suffix: str) -> str:
        return self.full_path + suffix

    def edge_path(self, suffix: str) -> str:
        return self.full_path + suffix


DescriptorLoader = Callable[[str], List[VertexRef]]


def _as_text(value: Any) -> Any:
    # YAML reads bare numeric scalars such as `1` or `2024` as numbers
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


def _parse_ref(item: Any, path: str, position: int) -> VertexRef:
    if not isinstance(item, dict):
        raise EdgeFileLoadFailed(path, f"edge {position} must be a mapping, got {type(item).__name__}")
    name = _as_text(item.get("name"))
    if not isinstance(name, str) or not name:
        raise EdgeFileLoadFailed(path, f"edge {position} is missing a name")
    rel_path = _as_text(item.get("path", "."))
    if not isinstance(rel_path, str) or not rel_path:
        raise EdgeFileLoadFailed(path, f"edge {position} has an invalid path: {rel_path!r}")
    return VertexRef(path=rel_path, name=name)


def parse_edge_descriptor(text: str, path: str = "<string>") -> List[VertexRef]:
    """Parse edge descriptor text into child references, in file order.

    Accepts either ``{"edges": [...]}`` or a bare list of
    ``{"path": ..., "name": ...}`` items. Empty input has no children.
    """

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise EdgeFileLoadFailed(path, f"invalid YAML: {e}") from e

    if data is None:
        return []
    if isinstance(data, dict):
        if "edges" not in data:
            raise EdgeFileLoadFailed(path, "missing 'edges' list")
        edges = data["edges"]
        if edges is None:
            edges = []
    else:
        edges = data
    if not isinstance(edges, list):
        raise EdgeFileLoadFailed(path, "edges must be a list")
    return [_parse_ref(item, path, i) for i, item in enumerate(edges)]


def load_edge_descriptor(path: Union[str, Path]) -> List[VertexRef]:
    """Read and parse the edge descriptor at ``path``."""

    path_str = str(path)
    try:
        text = Path(path_str).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise EdgeFileLoadFailed(path_str, str(e)) from e
    refs = parse_edge_descriptor(text, path_str)
    logger.debug(f"Loaded {len(refs)} edges from {path_str}")
    return refs
