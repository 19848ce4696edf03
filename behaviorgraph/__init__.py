"""
behaviorgraph
=============
Compiles visual node graphs into JavaScript behavior modules.

    import json
    from behaviorgraph import compile_document

    with open("score_counter.json") as fh:
        source = compile_document(json.load(fh))
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from .compiler import compile_graph
from .compiler.assembler import ModuleInfo
from .config import CompilerSettings
from .core import (
    Connection,
    ExposedProperty,
    Graph,
    Literal,
    LiteralKind,
    NodeDefinition,
    NodeInstance,
    NodeLibrary,
)
from .errors import (
    CompileError,
    ConnectionConflict,
    CyclicDataDependency,
    FlowCycleError,
    InvalidLiteral,
    InvalidPortReference,
    MaxDepthExceeded,
    MissingRequiredInput,
    UnknownNodeType,
)
from .library import default_library
from .serialization import SchemaError, load_document, validate

__version__ = "0.1.0"


def compile_document(
    data: Dict[str, Any],
    library: Optional[NodeLibrary] = None,
    settings: Optional[CompilerSettings] = None,
    *,
    strict: bool = False,
) -> str:
    """
    Validate, deserialise and compile a graph document in one call.

    Raises:
        SchemaError:  the document is malformed.
        CompileError: the graph cannot be compiled.
    """
    if library is None:
        library = default_library()
    validate(data, library, strict=strict)
    graph, module = load_document(data)
    return compile_graph(graph, library, module, settings)


__all__ = [
    "compile_document",
    "compile_graph",
    "default_library",
    "CompilerSettings",
    "ModuleInfo",
    "Connection",
    "ExposedProperty",
    "Graph",
    "Literal",
    "LiteralKind",
    "NodeDefinition",
    "NodeInstance",
    "NodeLibrary",
    "SchemaError",
    "CompileError",
    "ConnectionConflict",
    "CyclicDataDependency",
    "FlowCycleError",
    "InvalidLiteral",
    "InvalidPortReference",
    "MaxDepthExceeded",
    "MissingRequiredInput",
    "UnknownNodeType",
]
