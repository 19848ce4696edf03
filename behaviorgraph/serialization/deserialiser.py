"""
behaviorgraph — JSON Deserialiser
=================================
Converts a graph document (file, JSON text already parsed, or dict) into a
``Graph`` plus its ``ModuleInfo``.

Pipeline
--------
    graph.json  →  [schema.validate]              structural checks
    dict        →  [deserialiser.load_document]   Graph + ModuleInfo
    Graph       →  [compiler.compile_graph]       module source str

See behaviorgraph/serialization/schema.py for the document format.

Numeric ids are normalised to strings so ``"7"`` and ``7`` name the same
node.  Group children are read from the node itself (``nodes`` /
``connections``) or from its ``groupData`` object.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from ..compiler.assembler import ModuleInfo
from ..core.GraphPrimitives import Connection, Graph, NodeInstance

logger = logging.getLogger(__name__)


def _float(value: Any) -> float:
    return float(value) if isinstance(value, (int, float)) and not isinstance(value, bool) else 0.0


def _parse_node(entry: Dict[str, Any]) -> NodeInstance:
    holder = entry.get("groupData") if isinstance(entry.get("groupData"), dict) else entry
    children: Optional[Graph] = None
    if "nodes" in holder or "connections" in holder:
        children = document_to_graph(holder)

    return NodeInstance(
        id=str(entry["id"]),
        type=entry["type"],
        x=_float(entry.get("x")),
        y=_float(entry.get("y")),
        width=_float(entry.get("width")),
        height=_float(entry.get("height")),
        value=entry.get("value"),
        dropdown_value=entry.get("dropdownValue"),
        expose_property=bool(entry.get("exposeProperty", False)),
        group_name=entry.get("groupName"),
        selected_property=entry.get("selectedProperty"),
        label=entry.get("label"),
        literals=dict(entry.get("literals") or {}),
        children=children,
    )


def _parse_connection(entry: Dict[str, Any]) -> Connection:
    return Connection(
        from_node=str(entry["from"]),
        from_port=int(entry["fromPort"]),
        to_node=str(entry["to"]),
        to_port=int(entry["toPort"]),
    )


def document_to_graph(data: Dict[str, Any]) -> Graph:
    """Build the Graph described by ``data["nodes"]`` / ``data["connections"]``."""
    nodes = [_parse_node(n) for n in data.get("nodes", [])]
    connections = [_parse_connection(c) for c in data.get("connections", [])]
    return Graph(nodes=nodes, connections=connections)


def load_document(source: Union[str, Path, Dict[str, Any]]) -> Tuple[Graph, ModuleInfo]:
    """
    Args:
        source: One of
            - A file path (str or Path) to a JSON document.
            - A pre-parsed dict.

    Returns:
        (graph, module_info)
    """
    if isinstance(source, (str, Path)):
        path = Path(source)
        with path.open(encoding="utf-8") as fh:
            data = json.load(fh)
    else:
        data = source

    graph = document_to_graph(data)
    module = ModuleInfo.from_dict(data.get("module"))
    logger.debug("loaded %s: %d nodes, %d connections", module.class_name, len(graph.nodes), len(graph.connections))
    return graph, module


__all__ = ["document_to_graph", "load_document"]
