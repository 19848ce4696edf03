"""
Scope / group compilation.

A group node owns a nested Graph.  Reached by flow it compiles to an inline
``{ ... }`` block; as a method block (or a group with no flow connection) the
assembler turns its body into a class method.  Either way the nested graph is
compiled as its own scope: node ids, in-progress sets and the data cycle guard
do not leak between parent and child.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, List

from ..core.GraphPrimitives import Graph, NodeInstance

if TYPE_CHECKING:
    from .context import CompileContext

logger = logging.getLogger(__name__)

_EMPTY_GRAPH = Graph()


def group_label(node: NodeInstance) -> str:
    label = node.label if node.label else node.value
    if isinstance(label, str) and label.strip():
        return " ".join(label.split())
    return "Group"


def method_name(label: str, fallback: str = "group") -> str:
    """Identifier for a group turned into a class method."""
    words = re.findall(r"[A-Za-z0-9_$]+", label)
    if not words:
        return fallback
    name = words[0][:1].lower() + words[0][1:] + "".join(w[:1].upper() + w[1:] for w in words[1:])
    if name[0].isdigit():
        name = "_" + name
    return name


class GroupCompiler:
    def __init__(self, ctx: "CompileContext"):
        self.ctx = ctx

    def compile_group(self, node: NodeInstance, depth: int) -> str:
        """
        Inline block for a group reached by flow.

        The first line carries no indent (the sequencer adds it); the rest are
        indented for ``depth``.
        """
        indent = self.ctx.indent_at(depth)
        body = self.compile_body(node.children or _EMPTY_GRAPH, depth + 1)
        return "\n".join([f"// Group: {group_label(node)}", f"{indent}{{", *body, f"{indent}}}"])

    def compile_body(self, graph: Graph, depth: int) -> List[str]:
        ctx = self.ctx
        lines: List[str] = []

        with ctx.scoped(graph, depth):
            entries = [
                n for n in graph.nodes
                if ctx.definition(n).is_entry and ctx.definition(n).hook is None
            ]
            if entries:
                for entry in entries:
                    lines.extend(ctx.sequencer.compile_flow(entry, depth))
            else:
                for node in graph.nodes:
                    definition = ctx.definition(node)
                    if definition.is_flow_receiving and not graph.incoming(node.id, 0):
                        lines.extend(ctx.sequencer.compile_chain(node, depth))

        self.warn_unreached(graph, "group")

        if not lines:
            return [ctx.indent_at(depth) + "// Empty"]
        return lines

    def warn_unreached(self, graph: Graph, where: str) -> None:
        ctx = self.ctx
        for node in graph.nodes:
            definition = ctx.definition(node)
            if definition.is_flow_receiving and not ctx.was_visited(graph, node):
                logger.warning(
                    "%s: flow node %s (%s) is not reachable from any entry and was not emitted",
                    where, node.id, node.type,
                )
