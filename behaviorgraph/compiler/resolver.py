"""
Port resolution: turn "the value on input port P of node N" into expression text.

Resolution is pull-based.  Nothing upstream is evaluated until a ``code_gen``
rule asks for it through ``ctx.get_input_value``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional, Tuple

from ..core.GraphPrimitives import NodeInstance
from ..core.NodeDefinition import NodeDefinition
from ..core.Types import FLOW_PORT, Literal
from ..errors import CyclicDataDependency, InvalidPortReference, MissingRequiredInput

if TYPE_CHECKING:
    from .context import CompileContext

logger = logging.getLogger(__name__)


def _unquote(text: str) -> str:
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "'\"":
        return text[1:-1]
    return text


class PortResolver:
    def __init__(self, ctx: "CompileContext"):
        self.ctx = ctx

    # ── Public ───────────────────────────────────────────────────────────

    def resolve(self, node: NodeInstance, port_name: str, literal: bool = True) -> str:
        """
        Expression text for ``node.port_name``.

        With an incoming data edge the upstream node is generated (or bound,
        see CompileContext.bind).  Without one the literal fallback applies.
        ``literal=False`` asks for the raw fallback text, unquoted.
        """
        definition = self.ctx.definition(node)
        index = self._data_input_index(node, definition, port_name)

        incoming = self.ctx.graph.incoming(node.id, index)
        if not incoming:
            return self.fallback(node, definition, port_name, literal)

        conn = incoming[0]
        src = self._node_or_raise(conn.from_node, node)
        src_def = self.ctx.definition(src)
        if conn.from_port >= len(src_def.outputs):
            raise InvalidPortReference(
                f"'{src.type}' has no output at index {conn.from_port}", [src.id, node.id]
            )
        return self.read_output(src, src_def, src_def.outputs[conn.from_port])

    def source(self, node: NodeInstance, port_name: str) -> Optional[Tuple[NodeInstance, NodeDefinition, str]]:
        """The (node, definition, output port) wired into ``port_name``, if any."""
        definition = self.ctx.definition(node)
        index = self._data_input_index(node, definition, port_name)
        incoming = self.ctx.graph.incoming(node.id, index)
        if not incoming:
            return None
        conn = incoming[0]
        src = self._node_or_raise(conn.from_node, node)
        src_def = self.ctx.definition(src)
        if conn.from_port >= len(src_def.outputs):
            raise InvalidPortReference(
                f"'{src.type}' has no output at index {conn.from_port}", [src.id, node.id]
            )
        return src, src_def, src_def.outputs[conn.from_port]

    def read_output(self, src: NodeInstance, src_def: NodeDefinition, port_name: str) -> str:
        if port_name in src_def.flow_outputs:
            raise InvalidPortReference(
                f"'{src.type}.{port_name}' is a flow output and carries no value", [src.id]
            )
        self._check_entry_scope(src, src_def, port_name)

        if src_def.direct_output:
            base = self._evaluate(src, src_def)
        else:
            base = self.ctx.bind(src, lambda: self._evaluate(src, src_def))

        if len(src_def.data_outputs) > 1:
            if src_def.multi_output_access is not None:
                return src_def.multi_output_access(base, port_name, src, self.ctx)
            return f"{base}.{port_name}"
        return base

    # ── Literal fallback ─────────────────────────────────────────────────

    def own_literal(self, node: NodeInstance, definition: NodeDefinition) -> Literal:
        raw = node.dropdown_value if definition.has_dropdown else node.value
        if raw is None:
            raw = definition.default_value
        return Literal.of(definition.literal_kind, raw, node.id)

    def fallback(self, node: NodeInstance, definition: NodeDefinition, port_name: str, literal: bool = True) -> str:
        if port_name in node.literals:
            value = Literal.infer(node.literals[port_name], node.id)
            return value.render() if literal else value.text()

        if definition.literal_backs(port_name):
            raw = node.dropdown_value if definition.has_dropdown else node.value
            if raw is not None or definition.default_value is not None:
                value = self.own_literal(node, definition)
                return value.render() if literal else value.text()

        if port_name in definition.defaults:
            text = definition.defaults[port_name]
            return text if literal else _unquote(text)

        raise MissingRequiredInput(
            f"Input '{port_name}' of '{node.type}' is not connected and has no literal or default",
            [node.id],
        )

    # ── Internals ────────────────────────────────────────────────────────

    def _data_input_index(self, node: NodeInstance, definition: NodeDefinition, port_name: str) -> int:
        index = definition.input_index(port_name)
        if index < 0 or port_name == FLOW_PORT:
            raise InvalidPortReference(
                f"'{node.type}' has no data input named '{port_name}'", [node.id]
            )
        return index

    def _node_or_raise(self, node_id: str, consumer: NodeInstance) -> NodeInstance:
        src = self.ctx.graph.node(node_id)
        if src is None:
            raise InvalidPortReference(
                f"Connection into '{consumer.id}' starts at unknown node '{node_id}'",
                [consumer.id],
            )
        return src

    def _check_entry_scope(self, src: NodeInstance, src_def: NodeDefinition, port_name: str) -> None:
        # Entry outputs (loop.deltaTime, draw.ctx) exist only inside their own hook body.
        if src_def.is_entry and src.id != self.ctx.scope.entry_id:
            raise InvalidPortReference(
                f"'{src.type}.{port_name}' is only available inside the flow that '{src.id}' starts",
                [src.id],
            )

    def _evaluate(self, src: NodeInstance, src_def: NodeDefinition) -> str:
        in_progress = self.ctx.scope.in_progress
        if src.id in in_progress:
            cycle = in_progress[in_progress.index(src.id):]
            raise CyclicDataDependency(
                f"Data dependency cycle: {' -> '.join(cycle + [src.id])}", cycle
            )

        in_progress.append(src.id)
        try:
            with self.ctx.guard(src.id):
                logger.debug("resolving %s (%s)", src.id, src.type)
                return src_def.code_gen(src, self.ctx)
        finally:
            in_progress.pop()
