"""
behaviorgraph — Compile Errors
==============================
Every failure the compiler can report is a ``CompileError``.  A compile
either returns the complete module text or raises exactly one of these;
half-compiled output is never returned.

Each error carries the ids of the offending node(s) so an editor can
highlight them:

    try:
        source = compile_graph(graph)
    except CompileError as exc:
        print(exc.to_dict())
        # {"error": "FlowCycleError", "message": "...", "node_ids": ["n3", "n7"]}
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Tuple


class CompileError(Exception):
    """Base class for all structured compile-time errors."""

    def __init__(self, message: str, node_ids: Iterable[str] = ()):
        super().__init__(message)
        self.message = message
        self.node_ids: Tuple[str, ...] = tuple(str(n) for n in node_ids)

    @property
    def kind(self) -> str:
        return type(self).__name__

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.kind,
            "message": self.message,
            "node_ids": list(self.node_ids),
        }

    def __str__(self) -> str:
        if self.node_ids:
            return f"{self.message} (nodes: {', '.join(self.node_ids)})"
        return self.message


class UnknownNodeType(CompileError):
    """A node references a type absent from the supplied library."""


class MissingRequiredInput(CompileError):
    """A data input has neither a connection nor any literal fallback."""


class CyclicDataDependency(CompileError):
    """Resolving a data input re-entered a node already being resolved."""


class FlowCycleError(CompileError):
    """The same node was reached twice while following one flow path."""


class InvalidPortReference(CompileError):
    """A connection or code rule names a port the definition does not declare."""


class MaxDepthExceeded(CompileError):
    """Nesting or dependency depth went past ``CompilerSettings.max_depth``."""


class ConnectionConflict(CompileError):
    """A port carries more connections than its kind allows."""


class InvalidLiteral(CompileError):
    """A literal value cannot be read as the kind its node type declares."""


__all__ = [
    "CompileError",
    "UnknownNodeType",
    "MissingRequiredInput",
    "CyclicDataDependency",
    "FlowCycleError",
    "InvalidPortReference",
    "MaxDepthExceeded",
    "ConnectionConflict",
    "InvalidLiteral",
]
