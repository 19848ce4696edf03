from .GraphPrimitives import Connection, Graph, NodeInstance
from .NodeDefinition import ExposedProperty, NodeDefinition, NodeLibrary
from .Types import FLOW_PORT, Literal, LiteralKind, quote_js

__all__ = [
    "Connection",
    "Graph",
    "NodeInstance",
    "ExposedProperty",
    "NodeDefinition",
    "NodeLibrary",
    "FLOW_PORT",
    "Literal",
    "LiteralKind",
    "quote_js",
]
