"""
behaviorgraph Compiler — Graph to Behavior Module
=================================================
Compiles a node Graph into one self-contained JavaScript behavior module.

Pipeline:
    Graph      →  [validator]   structural checks (types, ports, fan-in, data cycles)
    Graph      →  [sequencer]   statements per lifecycle hook, in flow order
                     ↳ [resolver]  data inputs pulled on demand
                     ↳ [groups]    nested scopes, method bodies
    fragments  →  [assembler]   class text

Public API
----------
    from behaviorgraph.compiler import compile_graph
    from behaviorgraph.library import default_library

    source = compile_graph(graph, default_library())
    with open("ScoreCounter.js", "w") as f:
        f.write(source)
"""

from __future__ import annotations

from typing import Optional

from ..config import CompilerSettings
from ..core.GraphPrimitives import Graph
from ..core.NodeDefinition import NodeLibrary
from .assembler import ModuleAssembler, ModuleInfo
from .context import CompileContext
from .validator import validate_graph


def compile_graph(
    graph: Graph,
    library: NodeLibrary,
    module: Optional[ModuleInfo] = None,
    settings: Optional[CompilerSettings] = None,
) -> str:
    """
    Compile ``graph`` against ``library``.

    Args:
        graph:     The Graph to compile.  It is never modified.
        library:   Node definitions keyed by type.
        module:    Class name and static metadata (defaults to ModuleInfo()).
        settings:  Indentation, depth limit and memoization policy.

    Returns:
        The complete module source.

    Raises:
        CompileError: one of its subclasses; no partial output is produced.
    """
    return ModuleAssembler(library, settings).assemble(graph, module)


__all__ = [
    "compile_graph",
    "CompileContext",
    "ModuleAssembler",
    "ModuleInfo",
    "validate_graph",
]
