"""
behaviorgraph — Module Assembler
================================
Stitches the compiled hook bodies, methods and exposed properties into one
JavaScript class for the game runtime.

Canonical layout (always in this order)
---------------------------------------
    /** header comment */
    class <Name> extends Module {
        static allowMultiple / namespace / description / iconClass / color / drawInEditor

        constructor() {
            super("<Name>");
            <exposed-property fields, grouped>
            <exposeProperty registrations>
            <create hook body>
        }

        style(style) { ... }              only when properties are exposed
        start() { ... }
        loop(deltaTime) { ... }
        draw(ctx) { ... }
        onDestroy() { ... }
        <method blocks, node order>
        <flow-less group methods, node order>
        toJSON() / fromJSON(data)         only when properties are exposed
    }

    window.<Name> = <Name>;

The output contains no timestamps: the same graph and library always give
byte-identical text.
"""

from __future__ import annotations

import json
import logging
import re
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Set, Tuple

from ..config import CompilerSettings
from ..core.GraphPrimitives import Graph, NodeInstance
from ..core.NodeDefinition import ExposedProperty, NodeLibrary
from .context import CompileContext
from .groups import group_label, method_name
from .validator import validate_graph
from .writer import CodeWriter

logger = logging.getLogger(__name__)


# ── Module metadata ───────────────────────────────────────────────────────────

def class_identifier(name: str, fallback: str = "VisualModule") -> str:
    cleaned = re.sub(r"[^A-Za-z0-9_$]", "", name or "")
    if not cleaned:
        return fallback
    if cleaned[0].isdigit():
        cleaned = "_" + cleaned
    return cleaned


@dataclass(frozen=True)
class ModuleInfo:
    name: str = "VisualModule"
    namespace: str = "General"
    description: str = ""
    icon: str = "fas fa-cube"
    color: str = "#2c3f4eff"
    allow_multiple: bool = True
    draw_in_editor: bool = False

    @property
    def class_name(self) -> str:
        return class_identifier(self.name)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "ModuleInfo":
        if not data:
            return cls()
        defaults = cls()
        return cls(
            name=str(data.get("name") or defaults.name),
            namespace=str(data.get("namespace") or defaults.namespace),
            description=str(data.get("description") or ""),
            icon=str(data.get("iconClass") or data.get("icon") or defaults.icon),
            color=str(data.get("color") or defaults.color),
            allow_multiple=bool(data.get("allowMultiple", defaults.allow_multiple)),
            draw_in_editor=bool(data.get("drawInEditor", defaults.draw_in_editor)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "className": self.class_name,
            "namespace": self.namespace,
            "description": self.description,
            "iconClass": self.icon,
            "color": self.color,
            "allowMultiple": self.allow_multiple,
            "drawInEditor": self.draw_in_editor,
        }


# Lifecycle hooks with a method of their own, in output order.
HOOK_METHODS: Tuple[Tuple[str, str], ...] = (
    ("start", "start()"),
    ("loop", "loop(deltaTime)"),
    ("draw", "draw(ctx)"),
    ("destroy", "onDestroy()"),
)

_GROUP_STYLE = "{ backgroundColor: 'rgba(100,150,255,0.1)', borderRadius: '6px', padding: '8px' }"


# ── Property snippets ─────────────────────────────────────────────────────────

def _on_change(prop: ExposedProperty) -> str:
    if prop.kind == "vector2":
        return f"(val) => {{ this.{prop.name} = new Vector2(val.x, val.y); }}"
    return f"(val) => {{ this.{prop.name} = val; }}"


def _expose_options(prop: ExposedProperty) -> str:
    if prop.kind == "number":
        return f"{{ min: -999999, max: 999999, onChange: {_on_change(prop)} }}"
    return f"{{ onChange: {_on_change(prop)} }}"


def _grouped(props: List[ExposedProperty]) -> "OrderedDict[str, List[ExposedProperty]]":
    groups: "OrderedDict[str, List[ExposedProperty]]" = OrderedDict()
    for prop in props:
        groups.setdefault(prop.group or "General", []).append(prop)
    return groups


def _method_signature(node: NodeInstance) -> str:
    raw = node.value if isinstance(node.value, str) and node.value.strip() else "customMethod()"
    signature = raw.strip().rstrip("{").strip()
    if "(" not in signature:
        signature += "()"
    return signature


# ── Assembler ─────────────────────────────────────────────────────────────────

class ModuleAssembler:
    """
    Compile a whole graph into module source text.

        assembler = ModuleAssembler(default_library(), CompilerSettings())
        source = assembler.assemble(graph, ModuleInfo(name="ScoreCounter"))
    """

    def __init__(self, library: NodeLibrary, settings: Optional[CompilerSettings] = None):
        self.library = library
        self.settings = settings or CompilerSettings()

    def assemble(self, graph: Graph, module: Optional[ModuleInfo] = None) -> str:
        module = module or ModuleInfo()
        validate_graph(graph, self.library)

        ctx = CompileContext(self.library, graph, self.settings)
        logger.debug("assembling %s from %d nodes", module.class_name, len(graph))

        create_body = self._hook_body(ctx, graph, "create")
        hook_bodies = [(sig, self._hook_body(ctx, graph, hook)) for hook, sig in HOOK_METHODS]
        methods, method_nodes = self._methods(ctx, graph)
        self._declare_variables(ctx, graph)
        self._warn_unreached(ctx, graph, method_nodes)

        return self._render(module, ctx.exposed, create_body, hook_bodies, methods)

    # ── Collection ───────────────────────────────────────────────────────

    def _hook_body(self, ctx: CompileContext, graph: Graph, hook: str) -> List[str]:
        lines: List[str] = []
        for node in graph.nodes:
            if ctx.definition(node).hook == hook:
                lines.extend(ctx.sequencer.compile_flow(node, 2))
        return lines

    def _methods(self, ctx: CompileContext, graph: Graph) -> Tuple[List[Tuple[str, List[str]]], Set[str]]:
        blocks: List[Tuple[str, List[str]]] = []
        groups: List[Tuple[str, List[str]]] = []
        used_names: Set[str] = set()
        compiled: Set[str] = set()
        empty = Graph()

        for node in graph.nodes:
            definition = ctx.definition(node)
            if definition.hook == "method":
                blocks.append((_method_signature(node), ctx.groups.compile_body(node.children or empty, 2)))
                compiled.add(node.id)
            elif (definition.is_group and definition.hook is None
                  and definition.is_flow_receiving and not graph.incoming(node.id, 0)):
                name = method_name(group_label(node))
                base, suffix = name, 2
                while name in used_names:
                    name = f"{base}{suffix}"
                    suffix += 1
                used_names.add(name)
                groups.append((f"{name}()", ctx.groups.compile_body(node.children or empty, 2)))
                compiled.add(node.id)

        return blocks + groups, compiled

    def _declare_variables(self, ctx: CompileContext, graph: Graph) -> None:
        for node in graph.nodes:
            definition = ctx.definition(node)
            if node.expose_property and definition.declare_property and not definition.is_flow_receiving:
                ctx.expose(definition.declare_property(node, ctx))
            if node.children is not None:
                with ctx.scoped(node.children, 0):
                    self._declare_variables(ctx, node.children)

    def _warn_unreached(self, ctx: CompileContext, graph: Graph, compiled: Set[str]) -> None:
        for node in graph.nodes:
            if node.id in compiled:
                continue
            if ctx.definition(node).is_flow_receiving and not ctx.was_visited(graph, node):
                logger.warning(
                    "flow node %s (%s) is not reachable from any lifecycle hook and was not emitted",
                    node.id, node.type,
                )

    # ── Rendering ────────────────────────────────────────────────────────

    def _render(
        self,
        module: ModuleInfo,
        props: List[ExposedProperty],
        create_body: List[str],
        hook_bodies: List[Tuple[str, List[str]]],
        methods: List[Tuple[str, List[str]]],
    ) -> str:
        name = module.class_name
        w = CodeWriter(unit=self.settings.indent_unit)

        w.writeln("/**")
        w.writeln(f" * {name} - Visual Module")
        w.writeln(" * Generated by behaviorgraph")
        if module.description:
            w.writeln(f" * {module.description.replace('*/', '* /')}")
        w.writeln(" */")

        w.open(f"class {name} extends Module")
        w.writeln(f"static allowMultiple = {'true' if module.allow_multiple else 'false'};")
        w.writeln(f"static namespace = {json.dumps(module.namespace)};")
        w.writeln(f"static description = {json.dumps(module.description)};")
        w.writeln(f"static iconClass = {json.dumps(module.icon)};")
        w.writeln(f"static color = {json.dumps(module.color)};")
        w.writeln(f"static drawInEditor = {'true' if module.draw_in_editor else 'false'};")
        w.blank()

        self._constructor(w, name, props, create_body)

        if props:
            w.blank()
            self._style(w, props)

        for signature, body in hook_bodies:
            w.blank()
            w.open(signature)
            w.raw(body)
            w.close()

        for signature, body in methods:
            w.blank()
            w.open(signature)
            w.raw(body)
            w.close()

        if props:
            w.blank()
            self._serialisation(w, props)

        w.close()
        w.blank()
        w.writeln(f"window.{name} = {name};")
        return w.result() + "\n"

    def _constructor(self, w: CodeWriter, name: str, props: List[ExposedProperty], create_body: List[str]) -> None:
        w.open("constructor()")
        w.writeln(f"super({json.dumps(name)});")

        if props:
            for group, members in _grouped(props).items():
                w.blank()
                w.comment(group)
                for prop in members:
                    w.writeln(f"this.{prop.name} = {prop.default};")
            w.blank()
            for prop in props:
                w.writeln(
                    f"this.exposeProperty({json.dumps(prop.name)}, {json.dumps(prop.kind)}, "
                    f"{prop.default}, {_expose_options(prop)});"
                )

        if create_body:
            w.blank()
            w.raw(create_body)
        w.close()

    def _style(self, w: CodeWriter, props: List[ExposedProperty]) -> None:
        w.open("style(style)")
        for group, members in _grouped(props).items():
            w.writeln(f"style.startGroup({json.dumps(group)}, false, {_GROUP_STYLE});")
            for prop in members:
                w.writeln(
                    f"style.exposeProperty({json.dumps(prop.name)}, {json.dumps(prop.kind)}, "
                    f"this.{prop.name}, {_expose_options(prop)});"
                )
            w.writeln("style.endGroup();")
        w.close()

    def _serialisation(self, w: CodeWriter, props: List[ExposedProperty]) -> None:
        w.open("toJSON()")
        w.open("return")
        w.writeln("...super.toJSON(),")
        for prop in props:
            if prop.kind == "vector2":
                w.writeln(f"{prop.name}: {{ x: this.{prop.name}.x, y: this.{prop.name}.y }},")
            else:
                w.writeln(f"{prop.name}: this.{prop.name},")
        w.close("};")
        w.close()

        w.blank()
        w.open("fromJSON(data)")
        w.writeln("super.fromJSON(data);")
        w.writeln("if (!data) return;")
        for prop in props:
            if prop.kind == "vector2":
                w.writeln(
                    f"if (data.{prop.name} !== undefined) "
                    f"this.{prop.name} = new Vector2(data.{prop.name}.x, data.{prop.name}.y);"
                )
            else:
                w.writeln(f"if (data.{prop.name} !== undefined) this.{prop.name} = data.{prop.name};")
        w.close()
