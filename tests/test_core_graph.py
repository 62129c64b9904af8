from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Sequence, Tuple

import numpy as np
import pytest
import yaml

from axon.core.builder import GraphBuilder
from axon.core.config import Config
from axon.core.document import GraphDocument
from axon.core.exceptions import AxonError, CycleDetected, EdgeFileLoadFailed, TraversalDepthExceeded
from axon.core.graph import Graph
from axon.core.loader import VertexRef


def write_vertex(directory: Path, name: str, children: Sequence[Tuple[str, str]] = ()) -> None:
    directory.mkdir(parents=True, exist_ok=True)
    lines = ["edges:"]
    for rel, child in children:
        lines.append(f"  - path: '{rel}'")
        lines.append(f"    name: '{child}'")
    if not children:
        lines = ["edges: []"]
    (directory / f"{name}.zon").write_text("\n".join(lines) + "\n", encoding="utf-8")


class MemoryLoader:
    """In-memory descriptor source that counts reads per edge path."""

    def __init__(self, tree: Dict[str, List[Tuple[str, str]]]) -> None:
        self.tree = tree
        self.reads: Dict[str, int] = {}

    def __call__(self, edge_path: str) -> List[VertexRef]:
        self.reads[edge_path] = self.reads.get(edge_path, 0) + 1
        if edge_path not in self.tree:
            raise EdgeFileLoadFailed(edge_path, "not found")
        return [VertexRef(path, name) for path, name in self.tree[edge_path]]


def test_scenario_a_single_vertex(tmp_path: Path) -> None:
    write_vertex(tmp_path, "root")
    doc = Graph().parse((str(tmp_path), "root"))

    assert doc.index.count() == 1
    assert doc.matrix.to_list() == [[0]]
    assert doc.get_metadata_path(0) == f"{tmp_path}/root.hurdy"


def test_scenario_b_two_children(tmp_path: Path) -> None:
    write_vertex(tmp_path, "root", [("lib", "child1"), ("lib", "child2")])
    write_vertex(tmp_path / "lib", "child1")
    write_vertex(tmp_path / "lib", "child2")

    doc = Graph().parse(VertexRef(str(tmp_path), "root"))
    index = doc.index
    root = index.get_index(f"{tmp_path}/root")
    child1 = index.get_index(f"{tmp_path}/lib/child1")
    child2 = index.get_index(f"{tmp_path}/lib/child2")

    assert doc.matrix.size == 3
    assert doc.matrix[root][child1] == 1
    assert doc.matrix[root][child2] == 1
    assert doc.matrix.edge_count() == 2


def test_scenario_c_linear_chain(tmp_path: Path) -> None:
    write_vertex(tmp_path, "root", [("a", "child")])
    write_vertex(tmp_path / "a", "child", [("b", "grandchild")])
    write_vertex(tmp_path / "a" / "b", "grandchild")

    doc = Graph().parse((str(tmp_path), "root"))
    cells = doc.matrix.array

    assert cells.shape == (3, 3)
    assert np.array_equal(cells, np.triu(cells))
    assert doc.matrix.to_list() == [[0, 1, 0], [0, 0, 1], [0, 0, 0]]
    assert doc.index.get_path(2) == f"{tmp_path}/a/b/grandchild"


def test_scenario_d_equivalent_paths_collapse(tmp_path: Path) -> None:
    write_vertex(tmp_path, "root", [("a/./b", "x"), ("a/b", "x")])
    write_vertex(tmp_path / "a" / "b", "x")

    doc = Graph().parse((str(tmp_path), "root"))

    assert doc.index.count() == 2
    assert doc.matrix.to_list() == [[0, 1], [0, 0]]


def test_scenario_e_back_reference_is_a_cycle(tmp_path: Path) -> None:
    write_vertex(tmp_path, "root", [(".", "child")])
    write_vertex(tmp_path, "child", [(".", "grandchild")])
    write_vertex(tmp_path, "grandchild", [(".", "root")])

    graph = Graph()
    with pytest.raises(CycleDetected) as excinfo:
        graph.parse((str(tmp_path), "root"))
    assert excinfo.value.path == f"{tmp_path}/root"
    assert graph.document is None


def test_self_reference_is_a_cycle() -> None:
    loader = MemoryLoader({"p/root.zon": [(".", "root")]})
    with pytest.raises(CycleDetected):
        Graph(loader=loader).parse(("p", "root"))


def test_diamond_reconverges_without_rereading() -> None:
    loader = MemoryLoader(
        {
            "p/root.zon": [(".", "left"), (".", "right")],
            "p/left.zon": [("shared", "leaf")],
            "p/right.zon": [("./shared", "leaf")],
            "p/shared/leaf.zon": [],
        }
    )
    doc = Graph(loader=loader).parse(("p", "root"))

    assert doc.index.count() == 4
    leaf = doc.index.get_index("p/shared/leaf")
    assert doc.matrix[doc.index.get_index("p/left")][leaf] == 1
    assert doc.matrix[doc.index.get_index("p/right")][leaf] == 1
    assert loader.reads["p/shared/leaf.zon"] == 1
    assert doc.get_metadata_path(leaf) == "p/shared/leaf.hurdy"


def test_child_paths_use_parent_directory_chain() -> None:
    loader = MemoryLoader(
        {
            "root/top.zon": [("sub", "mid")],
            "root/sub/mid.zon": [("deeper", "leaf")],
            "root/sub/deeper/leaf.zon": [],
        }
    )
    doc = Graph(loader=loader).parse(("root", "top"))
    assert [path for _, path in doc.index.items()] == [
        "root/top",
        "root/sub/mid",
        "root/sub/deeper/leaf",
    ]


def test_sibling_prefix_survives_a_deep_subtree() -> None:
    loader = MemoryLoader(
        {
            "r/root.zon": [("x/y", "first"), ("z", "second")],
            "r/x/y/first.zon": [("w", "inner")],
            "r/x/y/w/inner.zon": [],
            "r/z/second.zon": [],
        }
    )
    doc = Graph(loader=loader).parse(("r", "root"))
    assert doc.index.get_index("r/z/second") is not None


def test_missing_descriptor_aborts_with_its_path() -> None:
    loader = MemoryLoader({"p/root.zon": [("lib", "gone")]})
    graph = Graph(loader=loader)
    with pytest.raises(EdgeFileLoadFailed) as excinfo:
        graph.parse(("p", "root"))
    assert excinfo.value.path == "p/lib/gone.zon"
    assert graph.document is None


def test_loader_os_errors_are_wrapped() -> None:
    def broken(edge_path: str) -> List[VertexRef]:
        raise PermissionError("denied")

    with pytest.raises(EdgeFileLoadFailed) as excinfo:
        Graph(loader=broken).parse(("p", "root"))
    assert excinfo.value.path == "p/root.zon"


def test_deep_chain_does_not_recurse() -> None:
    depth = 2000
    tree = {f"d/v{i}.zon": [(".", f"v{i + 1}")] for i in range(depth)}
    tree[f"d/v{depth}.zon"] = []
    doc = GraphBuilder(GraphDocument(), loader=MemoryLoader(tree)).parse(VertexRef("d", "v0"))
    assert doc.index.count() == depth + 1
    assert doc.matrix.edge_count() == depth


def test_max_depth_limit() -> None:
    tree = {f"d/v{i}.zon": [(".", f"v{i + 1}")] for i in range(5)}
    tree["d/v5.zon"] = []
    builder = GraphBuilder(GraphDocument(), loader=MemoryLoader(tree), max_depth=3)
    with pytest.raises(TraversalDepthExceeded):
        builder.parse(VertexRef("d", "v0"))


def test_suffixes_come_from_config(tmp_path: Path) -> None:
    config_file = tmp_path / "axon.yaml"
    config_file.write_text("graph:\n  edge_suffix: .edges\n  vertex_suffix: .meta\n", encoding="utf-8")
    loader = MemoryLoader({"p/root.edges": []})

    doc = Graph(Config(str(config_file)), loader=loader).parse(("p", "root"))
    assert doc.get_metadata_path(0) == "p/root.meta"


def test_loader_yaml_errors_are_wrapped() -> None:
    def strict(edge_path: str) -> List[VertexRef]:
        yaml.safe_load("edges: [unclosed")
        return []

    with pytest.raises(EdgeFileLoadFailed) as excinfo:
        Graph(loader=strict).parse(("p", "root"))
    assert excinfo.value.path == "p/root.zon"


def test_failed_reparse_clears_previous_document() -> None:
    loader = MemoryLoader({"p/ok.zon": []})
    graph = Graph(loader=loader)
    graph.parse(("p", "ok"))
    assert graph.document is not None

    with pytest.raises(EdgeFileLoadFailed):
        graph.parse(("p", "bad"))
    assert graph.document is None


def test_builder_is_single_use() -> None:
    builder = GraphBuilder(GraphDocument(), loader=MemoryLoader({"p/root.zon": []}))
    builder.parse(VertexRef("p", "root"))
    with pytest.raises(AxonError):
        builder.parse(VertexRef("p", "root"))
