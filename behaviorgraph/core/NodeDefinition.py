"""
Node definitions and the library that holds them.

A NodeDefinition is pure data plus one code rule: the port shape of a node
type, a handful of flags that tell the compiler how to treat it, and
``code_gen(node, ctx) -> str``.  Dispatch is by type tag through a
NodeLibrary; definitions never inherit from one another.

The library is always passed explicitly to the compiler.  There is no
process-wide registry.
"""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass, field
from typing import (
    TYPE_CHECKING, Any, Callable, Dict, Iterable, Iterator, List, Mapping,
    Optional, Tuple,
)

from ..errors import UnknownNodeType
from .Types import FLOW_PORT, LiteralKind

if TYPE_CHECKING:
    from ..compiler.context import CompileContext
    from .GraphPrimitives import NodeInstance

CodeGen = Callable[["NodeInstance", "CompileContext"], str]
MultiOutputAccess = Callable[[str, str, "NodeInstance", "CompileContext"], str]


@dataclass(frozen=True)
class ExposedProperty:
    """A module field made editable and serialisable by the host runtime."""
    name: str
    kind: str          # "number" | "string" | "boolean" | "color" | "vector2" | ...
    default: str       # emittable default expression
    group: str = "General"
    node_id: Optional[str] = None


PropertyDeclarator = Callable[["NodeInstance", "CompileContext"], Optional[ExposedProperty]]


@dataclass(frozen=True)
class NodeDefinition:
    type: str
    code_gen: CodeGen
    inputs: Tuple[str, ...] = ()
    outputs: Tuple[str, ...] = ()
    label: str = ""
    category: str = ""

    # ── compilation semantics ──
    wrap_flow_node: bool = True
    direct_output: bool = False
    multi_output_access: Optional[MultiOutputAccess] = None
    is_group: bool = False
    hook: Optional[str] = None
    branches: Tuple[str, ...] = ()
    branch_headers: Mapping[str, str] = field(default_factory=dict)
    literal_kind: Optional[LiteralKind] = None
    # inputs backed by the node's own literal; None means every data input
    literal_ports: Optional[Tuple[str, ...]] = None
    defaults: Mapping[str, str] = field(default_factory=dict)
    value_kind: Optional[str] = None
    declare_property: Optional[PropertyDeclarator] = None

    # ── editor-only ──
    has_input: bool = False
    has_toggle: bool = False
    has_dropdown: bool = False
    has_color_picker: bool = False
    has_expose_checkbox: bool = False
    dropdown_options: Tuple[str, ...] = ()
    default_value: Any = None

    def __post_init__(self):
        object.__setattr__(self, "inputs", tuple(self.inputs))
        object.__setattr__(self, "outputs", tuple(self.outputs))
        object.__setattr__(self, "branches", tuple(self.branches))
        object.__setattr__(self, "dropdown_options", tuple(self.dropdown_options))
        if self.literal_ports is not None:
            object.__setattr__(self, "literal_ports", tuple(self.literal_ports))

        # Flow ports are declared first; the compiler relies on it.
        if FLOW_PORT in self.inputs[1:]:
            raise ValueError(f"'{self.type}': the flow input must be the first input")
        if FLOW_PORT in self.outputs[1:]:
            raise ValueError(f"'{self.type}': the flow output must be the first output")
        for branch in self.branches:
            if branch not in self.outputs:
                raise ValueError(f"'{self.type}': branch '{branch}' is not a declared output")

    # ── Port shape ───────────────────────────────────────────────────────

    @property
    def is_flow_receiving(self) -> bool:
        return self.inputs[:1] == (FLOW_PORT,)

    @property
    def flow_outputs(self) -> Tuple[str, ...]:
        return tuple(o for o in self.outputs if o == FLOW_PORT or o in self.branches)

    @property
    def data_outputs(self) -> Tuple[str, ...]:
        return tuple(o for o in self.outputs if o != FLOW_PORT and o not in self.branches)

    @property
    def is_flow_producing(self) -> bool:
        return bool(self.flow_outputs)

    @property
    def is_branch(self) -> bool:
        return bool(self.branches)

    @property
    def is_entry(self) -> bool:
        return self.is_flow_producing and not self.is_flow_receiving

    @property
    def has_literal(self) -> bool:
        return self.literal_kind is not None and (
            self.has_input or self.has_toggle or self.has_dropdown or self.has_color_picker
        )

    def literal_backs(self, port_name: str) -> bool:
        if not self.has_literal:
            return False
        return self.literal_ports is None or port_name in self.literal_ports

    def input_index(self, port_name: str) -> int:
        try:
            return self.inputs.index(port_name)
        except ValueError:
            return -1

    def output_index(self, port_name: str) -> int:
        try:
            return self.outputs.index(port_name)
        except ValueError:
            return -1

    def describe(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "label": self.label or self.type,
            "inputs": list(self.inputs),
            "outputs": list(self.outputs),
            "branches": list(self.branches),
            "hook": self.hook,
            "isGroup": self.is_group,
            "wrapFlowNode": self.wrap_flow_node,
            "directOutput": self.direct_output,
            "literalKind": self.literal_kind.value if self.literal_kind else None,
            "hasExposeCheckbox": self.has_expose_checkbox,
        }


class NodeLibrary:
    """Node definitions keyed by type, remembering the category of each."""

    def __init__(self, definitions: Iterable[NodeDefinition] = ()):
        self._definitions: Dict[str, NodeDefinition] = {}
        self._categories: "OrderedDict[str, List[str]]" = OrderedDict()
        for definition in definitions:
            self.register(definition)

    @classmethod
    def from_categories(cls, categories: Mapping[str, Iterable[NodeDefinition]]) -> "NodeLibrary":
        library = cls()
        for category, definitions in categories.items():
            for definition in definitions:
                library.register(definition, category=category)
        return library

    def register(self, definition: NodeDefinition, category: Optional[str] = None) -> NodeDefinition:
        if definition.type in self._definitions:
            raise ValueError(f"Node type '{definition.type}' is already registered")
        self._definitions[definition.type] = definition
        self._categories.setdefault(category or definition.category or "Other", []).append(definition.type)
        return definition

    def get(self, type_name: str, node_id: Optional[str] = None) -> NodeDefinition:
        definition = self._definitions.get(type_name)
        if definition is None:
            ids = [node_id] if node_id is not None else []
            raise UnknownNodeType(f"Unknown node type '{type_name}'", ids)
        return definition

    def categories(self) -> Dict[str, List[NodeDefinition]]:
        return {
            name: [self._definitions[t] for t in types]
            for name, types in self._categories.items()
        }

    def describe(self) -> Dict[str, List[Dict[str, Any]]]:
        return {
            name: [d.describe() for d in definitions]
            for name, definitions in self.categories().items()
        }

    def __contains__(self, type_name: str) -> bool:
        return type_name in self._definitions

    def __iter__(self) -> Iterator[NodeDefinition]:
        return iter(self._definitions.values())

    def __len__(self) -> int:
        return len(self._definitions)
