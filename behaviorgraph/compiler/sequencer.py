"""
Flow sequencing: walk flow edges from an entry node and emit statements in
execution order.

Linear chains are followed iteratively.  Recursion happens only where the
output itself nests (branch bodies, wrapped blocks, groups), and each level
passes through the context's depth guard.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional, Set

from ..core.GraphPrimitives import NodeInstance
from ..core.NodeDefinition import NodeDefinition
from ..core.Types import FLOW_PORT
from ..errors import FlowCycleError, InvalidPortReference

if TYPE_CHECKING:
    from .context import CompileContext

logger = logging.getLogger(__name__)


class FlowSequencer:
    def __init__(self, ctx: "CompileContext"):
        self.ctx = ctx

    def compile_flow(self, entry: NodeInstance, depth: int) -> List[str]:
        """
        Statements reachable from ``entry``'s flow output, one indented line
        per list item.  The entry itself emits nothing.
        """
        ctx = self.ctx
        definition = ctx.definition(entry)
        with ctx.at_depth(depth, entry_id=entry.id):
            ctx.mark_visited(entry)
            first = self.successor(entry, definition, FLOW_PORT)
            if first is None:
                logger.debug("entry %s (%s) has no flow successor", entry.id, entry.type)
                return []
            return self._walk(first, {entry.id})

    def compile_chain(self, first: NodeInstance, depth: int) -> List[str]:
        """Statements of the chain that starts at ``first`` (inclusive)."""
        with self.ctx.at_depth(depth):
            return self._walk(first, set())

    def successor(self, node: NodeInstance, definition: NodeDefinition, port_name: str) -> Optional[NodeInstance]:
        index = definition.output_index(port_name)
        if index < 0:
            return None
        outgoing = self.ctx.graph.outgoing(node.id, index)
        if not outgoing:
            return None
        target = self.ctx.graph.node(outgoing[0].to_node)
        if target is None:
            raise InvalidPortReference(
                f"Flow output '{port_name}' of '{node.id}' leads to unknown node '{outgoing[0].to_node}'",
                [node.id],
            )
        return target

    # ── Walk ─────────────────────────────────────────────────────────────

    def _walk(self, node: NodeInstance, path: Set[str]) -> List[str]:
        ctx = self.ctx
        lines: List[str] = []
        current: Optional[NodeInstance] = node

        while current is not None:
            if current.id in path:
                raise FlowCycleError(
                    f"Flow path reaches '{current.id}' ({current.type}) a second time", [current.id]
                )
            path.add(current.id)
            ctx.mark_visited(current)
            definition = ctx.definition(current)

            with ctx.guard(current.id):
                self._declare(current, definition)
                hoisted, text = ctx.generate(current, definition)
                indent = ctx.indent
                lines.extend(indent + binding for binding in hoisted)

                nxt = self.successor(current, definition, FLOW_PORT)

                if definition.is_branch:
                    lines.extend(self._branches(current, definition, text, path))
                    current = nxt
                    continue

                if definition.wrap_flow_node and FLOW_PORT in definition.outputs and text:
                    lines.append(f"{indent}{text} {{")
                    if nxt is not None:
                        lines.extend(self._nested(nxt, set(path), ctx.depth + 1))
                    lines.append(f"{indent}}}")
                    break

                if text:
                    lines.append(indent + text)
                current = nxt

        return lines

    def _branches(self, node: NodeInstance, definition: NodeDefinition, header: str, path: Set[str]) -> List[str]:
        ctx = self.ctx
        indent = ctx.indent
        lines: List[str] = []

        for position, branch in enumerate(definition.branches):
            target = self.successor(node, definition, branch)
            if position and target is None:
                continue

            if position:
                head = definition.branch_headers.get(branch, "else")
                lines[-1] = f"{indent}}} {head} {{"
            else:
                lines.append(f"{indent}{header} {{")

            if target is not None:
                lines.extend(self._nested(target, set(path), ctx.depth + 1))
            lines.append(f"{indent}}}")

        return lines

    def _nested(self, first: NodeInstance, path: Set[str], depth: int) -> List[str]:
        with self.ctx.at_depth(depth):
            return self._walk(first, path)

    def _declare(self, node: NodeInstance, definition: NodeDefinition) -> None:
        if node.expose_property and definition.declare_property is not None:
            with self.ctx.unbound():
                self.ctx.expose(definition.declare_property(node, self.ctx))
