"""
Compile context: the ``ctx`` object handed to every ``code_gen`` rule.

One CompileContext lives for exactly one compile.  It carries:

  - the explicit node library and settings,
  - a stack of scopes (graph being compiled, indent depth, current hook entry),
  - a stack of statement frames used by the memoization policy,
  - the depth guard,
  - the exposed properties collected so far.

What ``code_gen`` rules may use
-------------------------------
    ctx.indent                               indent string of the current statement
    ctx.get_input_value(node, port, literal) resolved expression for an input port
    ctx.generate_group_code(node)            compiled block for a group node
    ctx.source(node, port)                   (node, definition, port) feeding a port, or None
    ctx.own_literal(node)                    the node's own Literal

Memoization (per flow statement)
--------------------------------
Every flow statement is generated twice.  The counting pass records how often
each non-direct source node is read; the emitting pass binds every source read
more than once to a ``const _<type><n>`` temporary placed just before the
statement.  Frames are never shared between statements.
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, List, Optional, Set, Tuple

from ..config import CompilerSettings
from ..core.GraphPrimitives import Graph, NodeInstance
from ..core.NodeDefinition import ExposedProperty, NodeDefinition, NodeLibrary
from ..core.Types import Literal
from ..errors import MaxDepthExceeded
from .groups import GroupCompiler
from .resolver import PortResolver
from .sequencer import FlowSequencer

logger = logging.getLogger(__name__)

# Stand-in returned for repeated reads during the counting pass; the text is discarded.
_COUNTING_PLACEHOLDER = "_"

BINDING_TEMPLATE = "const {name} = {expr};"


@dataclass
class Scope:
    graph: Graph
    depth: int
    entry_id: Optional[str] = None
    in_progress: List[str] = field(default_factory=list)


@dataclass
class StatementFrame:
    counting: bool
    shared: Set[str] = field(default_factory=set)
    counts: Counter = field(default_factory=Counter)
    bindings: Dict[str, str] = field(default_factory=dict)
    hoisted: List[str] = field(default_factory=list)


def _binding_stem(type_name: str) -> str:
    return re.sub(r"[^A-Za-z0-9_]", "_", type_name)


class CompileContext:
    def __init__(
        self,
        library: NodeLibrary,
        graph: Graph,
        settings: Optional[CompilerSettings] = None,
    ):
        self.library = library
        self.settings = settings or CompilerSettings()

        self._scopes: List[Scope] = [Scope(graph=graph, depth=0)]
        self._frames: List[StatementFrame] = []
        self._nesting = 0
        self._temp_counter = 0

        self.exposed: List[ExposedProperty] = []
        self._exposed_names: Set[str] = set()
        self.visited: Set[Tuple[int, str]] = set()

        self.resolver = PortResolver(self)
        self.sequencer = FlowSequencer(self)
        self.groups = GroupCompiler(self)

    # ── Scope ────────────────────────────────────────────────────────────

    @property
    def scope(self) -> Scope:
        return self._scopes[-1]

    @property
    def graph(self) -> Graph:
        return self.scope.graph

    @property
    def depth(self) -> int:
        return self.scope.depth

    @property
    def indent(self) -> str:
        return self.settings.indent_unit * self.scope.depth

    def indent_at(self, depth: int) -> str:
        return self.settings.indent_unit * depth

    @contextmanager
    def scoped(self, graph: Graph, depth: int, entry_id: Optional[str] = None) -> Iterator[Scope]:
        """Compile inside ``graph`` (a nested group graph or the top level)."""
        self._scopes.append(Scope(graph=graph, depth=depth, entry_id=entry_id))
        try:
            yield self.scope
        finally:
            self._scopes.pop()

    @contextmanager
    def at_depth(self, depth: int, entry_id: Optional[str] = None) -> Iterator[Scope]:
        """Same graph, different indent depth (branch and block bodies)."""
        current = self.scope
        self._scopes.append(Scope(
            graph=current.graph,
            depth=depth,
            entry_id=entry_id if entry_id is not None else current.entry_id,
            in_progress=current.in_progress,
        ))
        try:
            yield self.scope
        finally:
            self._scopes.pop()

    # ── Depth guard ──────────────────────────────────────────────────────

    @contextmanager
    def guard(self, node_id: str) -> Iterator[None]:
        """
        Count one level of nesting for ``node_id``.

        Each level costs several interpreter frames, so a ``max_depth`` raised
        past what the recursion limit allows ends in RecursionError instead.
        That is reported as MaxDepthExceeded by the innermost guard able to
        build the error.
        """
        self._nesting += 1
        try:
            if self._nesting > self.settings.max_depth:
                raise MaxDepthExceeded(
                    f"Nesting deeper than {self.settings.max_depth} levels", [node_id]
                )
            yield
        except RecursionError as exc:
            raise MaxDepthExceeded(
                f"Nesting at '{node_id}' exceeds the interpreter recursion limit", [node_id]
            ) from exc
        finally:
            self._nesting -= 1

    # ── Library helpers ──────────────────────────────────────────────────

    def definition(self, node: NodeInstance) -> NodeDefinition:
        return self.library.get(node.type, node.id)

    def own_literal(self, node: NodeInstance) -> Literal:
        return self.resolver.own_literal(node, self.definition(node))

    # ── code_gen API ─────────────────────────────────────────────────────

    def get_input_value(self, node: NodeInstance, port_name: str, literal: bool = True) -> str:
        return self.resolver.resolve(node, port_name, literal)

    def source(self, node: NodeInstance, port_name: str) -> Optional[Tuple[NodeInstance, NodeDefinition, str]]:
        return self.resolver.source(node, port_name)

    def generate_group_code(self, node: NodeInstance) -> str:
        if self.counting:
            return ""
        return self.groups.compile_group(node, self.depth)

    # ── Statement frames (memoization) ───────────────────────────────────

    @property
    def counting(self) -> bool:
        return bool(self._frames) and self._frames[-1].counting

    @contextmanager
    def _frame(self, frame: StatementFrame) -> Iterator[StatementFrame]:
        self._frames.append(frame)
        try:
            yield frame
        finally:
            self._frames.pop()

    @contextmanager
    def unbound(self) -> Iterator[None]:
        """Resolve without memoization, whatever statement encloses the call."""
        with self._frame(StatementFrame(counting=False)):
            yield

    def generate(self, node: NodeInstance, definition: NodeDefinition) -> Tuple[List[str], str]:
        """
        Run ``code_gen`` for one flow statement.

        Returns ``(hoisted_bindings, statement_text)``.
        """
        if self.settings.memoize == "none":
            with self._frame(StatementFrame(counting=False)) as frame:
                return frame.hoisted, definition.code_gen(node, self)

        with self._frame(StatementFrame(counting=True)) as tally:
            definition.code_gen(node, self)
        shared = {key for key, count in tally.counts.items() if count > 1}

        with self._frame(StatementFrame(counting=False, shared=shared)) as frame:
            text = definition.code_gen(node, self)
        return frame.hoisted, text

    def bind(self, node: NodeInstance, evaluate: Callable[[], str]) -> str:
        """Evaluate a non-direct source, reusing a temporary if the statement reads it twice."""
        if not self._frames:
            return evaluate()

        frame = self._frames[-1]
        key = node.id

        if frame.counting:
            frame.counts[key] += 1
            if frame.counts[key] > 1:
                return _COUNTING_PLACEHOLDER
            return evaluate()

        if key not in frame.shared:
            return evaluate()
        if key in frame.bindings:
            return frame.bindings[key]

        expr = evaluate()
        self._temp_counter += 1
        name = f"_{_binding_stem(node.type)}{self._temp_counter}"
        frame.hoisted.append(BINDING_TEMPLATE.format(name=name, expr=expr))
        frame.bindings[key] = name
        logger.debug("bound %s (%s) to %s", node.id, node.type, name)
        return name

    # ── Exposed properties ───────────────────────────────────────────────

    def expose(self, prop: Optional[ExposedProperty]) -> None:
        if prop is None:
            return
        if prop.name in self._exposed_names:
            logger.warning(
                "property '%s' is exposed more than once; keeping the first declaration (node %s ignored)",
                prop.name, prop.node_id,
            )
            return
        self._exposed_names.add(prop.name)
        self.exposed.append(prop)

    def mark_visited(self, node: NodeInstance) -> None:
        self.visited.add((id(self.graph), node.id))

    def was_visited(self, graph: Graph, node: NodeInstance) -> bool:
        return (id(graph), node.id) in self.visited
