from typing import List

import pytest

from behaviorgraph.compiler import compile_graph
from behaviorgraph.compiler.context import CompileContext
from behaviorgraph.config import CompilerSettings
from behaviorgraph.core import Connection, Graph, NodeInstance
from behaviorgraph.library import default_library


class GraphBuilder:
    """Builds a Graph with connections named by port instead of index."""

    def __init__(self, library):
        self.library = library
        self.nodes: List[NodeInstance] = []
        self.connections: List[Connection] = []

    def add(self, node_id, type_name, **fields):
        self.nodes.append(NodeInstance(id=node_id, type=type_name, **fields))
        return node_id

    def _type_of(self, node_id):
        for node in self.nodes:
            if node.id == node_id:
                return node.type
        raise KeyError(node_id)

    def connect(self, src, src_port, dst, dst_port):
        src_def = self.library.get(self._type_of(src))
        dst_def = self.library.get(self._type_of(dst))
        self.connections.append(
            Connection(src, src_def.output_index(src_port), dst, dst_def.input_index(dst_port))
        )
        return self

    def flow(self, *node_ids):
        """Chain ``flow`` outputs to ``flow`` inputs in the given order."""
        for a, b in zip(node_ids, node_ids[1:]):
            self.connect(a, "flow", b, "flow")
        return self

    def build(self) -> Graph:
        return Graph(nodes=self.nodes, connections=self.connections)


@pytest.fixture
def library():
    return default_library()


@pytest.fixture
def builder(library):
    return GraphBuilder(library)


@pytest.fixture
def make_builder(library):
    return lambda: GraphBuilder(library)


@pytest.fixture
def compile_(library):
    def _compile(graph, settings=None, module=None):
        return compile_graph(graph, library, module, settings)
    return _compile


@pytest.fixture
def context(library):
    def _context(graph, settings=None):
        return CompileContext(library, graph, settings or CompilerSettings())
    return _context


def method_body(source: str, signature: str) -> List[str]:
    """Lines between ``    <signature> {`` and its closing ``    }``."""
    lines = source.split("\n")
    start = lines.index(f"    {signature} {{")
    end = lines.index("    }", start)
    return lines[start + 1:end]


@pytest.fixture
def body():
    return method_body
