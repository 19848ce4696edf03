"""
Structural checks run before any code is generated.

Everything here is a property of the graph alone (plus the library): node
types exist, connections point at declared ports, edge kinds line up, fan-in
and fan-out limits hold, and the data subgraph has no cycle.  Problems that
depend on which inputs are actually read (missing inputs, entry scope) are
reported later by the resolver.
"""

from __future__ import annotations

import logging
from collections import Counter, defaultdict
from typing import Dict, List, Set

from ..core.GraphPrimitives import Graph
from ..core.NodeDefinition import NodeLibrary
from ..core.Types import FLOW_PORT
from ..errors import ConnectionConflict, CyclicDataDependency, InvalidPortReference

logger = logging.getLogger(__name__)


def validate_graph(graph: Graph, library: NodeLibrary) -> None:
    """Raise the first CompileError found in ``graph`` or any nested group."""
    for node in graph.nodes:
        library.get(node.type, node.id)

    data_edges: Dict[str, List[str]] = defaultdict(list)
    data_fan_in: Counter = Counter()
    flow_fan_in: Counter = Counter()
    flow_fan_out: Counter = Counter()

    for conn in graph.connections:
        src = graph.node(conn.from_node)
        dst = graph.node(conn.to_node)
        if src is None or dst is None:
            missing = conn.from_node if src is None else conn.to_node
            raise InvalidPortReference(f"{conn!r} references unknown node '{missing}'", [missing])

        src_def = library.get(src.type, src.id)
        dst_def = library.get(dst.type, dst.id)

        if not 0 <= conn.from_port < len(src_def.outputs):
            raise InvalidPortReference(
                f"'{src.type}' has no output at index {conn.from_port}", [src.id]
            )
        if not 0 <= conn.to_port < len(dst_def.inputs):
            raise InvalidPortReference(
                f"'{dst.type}' has no input at index {conn.to_port}", [dst.id]
            )

        out_name = src_def.outputs[conn.from_port]
        in_name = dst_def.inputs[conn.to_port]

        if in_name == FLOW_PORT:
            if out_name not in src_def.flow_outputs:
                raise InvalidPortReference(
                    f"Data output '{src.type}.{out_name}' is wired into the flow input of '{dst.id}'",
                    [src.id, dst.id],
                )
            flow_fan_in[(dst.id, conn.to_port)] += 1
            flow_fan_out[(src.id, conn.from_port)] += 1
        else:
            if out_name in src_def.flow_outputs:
                raise InvalidPortReference(
                    f"Flow output '{src.type}.{out_name}' is wired into data input '{dst.type}.{in_name}'",
                    [src.id, dst.id],
                )
            data_fan_in[(dst.id, conn.to_port)] += 1
            data_edges[dst.id].append(src.id)

    for (node_id, port), count in data_fan_in.items():
        if count > 1:
            raise ConnectionConflict(
                f"Data input {port} of '{node_id}' has {count} incoming connections", [node_id]
            )
    for (node_id, port), count in flow_fan_in.items():
        if count > 1:
            raise ConnectionConflict(
                f"Flow input of '{node_id}' has {count} incoming connections", [node_id]
            )
    for (node_id, port), count in flow_fan_out.items():
        if count > 1:
            raise ConnectionConflict(
                f"Flow output {port} of '{node_id}' has {count} successors", [node_id]
            )

    _check_data_cycles(graph, data_edges)
    logger.debug("graph ok: %d nodes, %d connections", len(graph.nodes), len(graph.connections))

    for node in graph.nodes:
        if node.children is not None:
            validate_graph(node.children, library)


def _check_data_cycles(graph: Graph, upstream: Dict[str, List[str]]) -> None:
    # Iterative three-colour DFS over consumer -> producer edges.
    done: Set[str] = set()
    for root in graph.nodes:
        if root.id in done:
            continue
        on_stack: List[str] = [root.id]
        active: Set[str] = {root.id}
        iters = [iter(upstream.get(root.id, ()))]
        while iters:
            nxt = next(iters[-1], None)
            if nxt is None:
                iters.pop()
                finished = on_stack.pop()
                active.discard(finished)
                done.add(finished)
                continue
            if nxt in active:
                cycle = on_stack[on_stack.index(nxt):]
                raise CyclicDataDependency(
                    f"Data dependency cycle: {' -> '.join(cycle + [nxt])}", cycle
                )
            if nxt in done:
                continue
            on_stack.append(nxt)
            active.add(nxt)
            iters.append(iter(upstream.get(nxt, ())))
