"""
behaviorgraph — Graph Document Schema + Validator
=================================================
Defines the JSON document the editor saves and provides a lightweight
validator that runs without any third-party JSON Schema library.

Document format
---------------

    {
      "module": {                               // optional
        "name":         "ScoreCounter",         // class name (str)
        "namespace":    "General",              // str
        "description":  "",                     // str
        "iconClass":    "fas fa-cube",          // str
        "color":        "#2c3f4eff",            // str
        "allowMultiple": true,                  // bool
        "drawInEditor":  false                  // bool
      },
      "nodes": [
        {
          "id":             "n1",               // unique within its graph (str or int, required)
          "type":           "setProperty",      // registered type name (str, required)
          "x": 120, "y": 40,                    // canvas position (number, optional, ignored)
          "value":          "score",            // the node's own literal (optional)
          "dropdownValue":  null,               // dropdown literal (str, optional)
          "exposeProperty": true,               // bool, optional
          "groupName":      "Stats",            // str, optional
          "selectedProperty": null,             // str, optional
          "label":          "Update score",     // str, optional
          "literals":       { "value": 0 },     // per-port literals (object, optional)
          "nodes": [...], "connections": [...]  // group children (optional; also under "groupData")
        }
      ],
      "connections": [
        { "from": "n2", "fromPort": 0, "to": "n1", "toPort": 2 }
      ]
    }
"""

from __future__ import annotations

import json
import warnings
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Set, Union

if TYPE_CHECKING:
    from ..core.NodeDefinition import NodeLibrary


# ── Validation helpers ────────────────────────────────────────────────────────

class SchemaError(ValueError):
    """Raised when a graph document fails structural validation."""


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise SchemaError(message)


def _require_keys(obj: Dict, keys: List[str], context: str) -> None:
    for key in keys:
        _require(key in obj, f"{context}: missing required field '{key}'")


def _is_id(value: Any) -> bool:
    return isinstance(value, str) or (isinstance(value, int) and not isinstance(value, bool))


def _is_port(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


_OPTIONAL_FIELDS = {
    "x": (int, float),
    "y": (int, float),
    "width": (int, float),
    "height": (int, float),
    "dropdownValue": (str,),
    "exposeProperty": (bool,),
    "groupName": (str,),
    "selectedProperty": (str,),
    "label": (str,),
    "literals": (dict,),
}

_MODULE_FIELDS = {
    "name": (str,),
    "namespace": (str,),
    "description": (str,),
    "iconClass": (str,),
    "icon": (str,),
    "color": (str,),
    "allowMultiple": (bool,),
    "drawInEditor": (bool,),
}


# ── Graph level ──────────────────────────────────────────────────────────────

def _validate_graph(
    nodes: Any,
    connections: Any,
    where: str,
    library: Optional["NodeLibrary"],
    strict: bool,
) -> None:
    _require(isinstance(nodes, list), f"{where}nodes must be a list")
    _require(isinstance(connections, list), f"{where}connections must be a list")

    node_ids: Set[str] = set()

    for i, node in enumerate(nodes):
        ctx = f"{where}nodes[{i}]"
        _require(isinstance(node, dict), f"{ctx}: each node must be a JSON object")
        _require_keys(node, ["id", "type"], ctx)
        _require(_is_id(node["id"]), f"{ctx}.id must be a string or an integer")
        _require(isinstance(node["type"], str), f"{ctx}.type must be a string")

        node_id = str(node["id"])
        _require(node_id not in node_ids, f"{ctx}: duplicate node id '{node_id}'")
        node_ids.add(node_id)

        for field, types in _OPTIONAL_FIELDS.items():
            if node.get(field) is not None:
                _require(
                    isinstance(node[field], types) and not (bool not in types and isinstance(node[field], bool)),
                    f"{ctx}.{field} has the wrong type",
                )

        if library is not None and node["type"] not in library:
            msg = f"{ctx}: unknown node type '{node['type']}'"
            if strict:
                raise SchemaError(msg)
            warnings.warn(msg + " (compilation will fail with UnknownNodeType)", stacklevel=3)

        children = node.get("groupData") if isinstance(node.get("groupData"), dict) else node
        if "nodes" in children or "connections" in children:
            _validate_graph(
                children.get("nodes", []),
                children.get("connections", []),
                f"{ctx}.",
                library,
                strict,
            )

    for i, conn in enumerate(connections):
        ctx = f"{where}connections[{i}]"
        _require(isinstance(conn, dict), f"{ctx}: each connection must be a JSON object")
        _require_keys(conn, ["from", "fromPort", "to", "toPort"], ctx)
        _require(_is_id(conn["from"]), f"{ctx}.from must be a string or an integer")
        _require(_is_id(conn["to"]), f"{ctx}.to must be a string or an integer")
        _require(_is_port(conn["fromPort"]), f"{ctx}.fromPort must be a non-negative integer")
        _require(_is_port(conn["toPort"]), f"{ctx}.toPort must be a non-negative integer")
        _require(
            str(conn["from"]) in node_ids,
            f"{ctx}: from node '{conn['from']}' not found in nodes",
        )
        _require(
            str(conn["to"]) in node_ids,
            f"{ctx}: to node '{conn['to']}' not found in nodes",
        )


# ── Public validator ─────────────────────────────────────────────────────────

def validate(
    data: Dict[str, Any],
    library: Optional["NodeLibrary"] = None,
    *,
    strict: bool = False,
) -> None:
    """
    Validate a parsed graph document.

    Args:
        data:    A pre-parsed dict (result of json.load / json.loads).
        library: When given, node types are checked against it.
        strict:  When True, raise SchemaError for unknown node types.
                 When False (default), unknown types produce a warning.

    Raises:
        SchemaError: On any structural violation.
    """
    _require(isinstance(data, dict), "graph JSON must be a JSON object at the top level")
    _require_keys(data, ["nodes", "connections"], "graph root")

    module = data.get("module")
    if module is not None:
        _require(isinstance(module, dict), "module must be an object")
        for field, types in _MODULE_FIELDS.items():
            if module.get(field) is not None:
                _require(isinstance(module[field], types), f"module.{field} has the wrong type")

    _validate_graph(data["nodes"], data["connections"], "", library, strict)


def validate_file(
    path: Union[str, Path],
    library: Optional["NodeLibrary"] = None,
    *,
    strict: bool = False,
) -> Dict[str, Any]:
    """
    Load and validate a graph document file.

    Returns:
        The parsed dict on success.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
        SchemaError: If the document structure is invalid.
    """
    path = Path(path)
    with path.open(encoding="utf-8") as fh:
        data = json.load(fh)
    validate(data, library, strict=strict)
    return data


__all__ = ["SchemaError", "validate", "validate_file"]
