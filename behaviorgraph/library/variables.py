"""Local variables, module properties and typed (inspector) variables."""

from __future__ import annotations

from ..core.NodeDefinition import ExposedProperty, NodeDefinition
from ..core.Types import LiteralKind, quote_js
from ._helpers import declare_set_property, identifier, property_name


def _declaration(keyword):
    def code_gen(node, ctx):
        name = identifier(ctx.get_input_value(node, "name", literal=False), "myVar")
        return f"{keyword} {name} = {ctx.get_input_value(node, 'value')};"
    return code_gen


def _get_variable(node, ctx):
    return identifier(ctx.get_input_value(node, "name", literal=False), "myVar")


def _set_variable(node, ctx):
    name = identifier(ctx.get_input_value(node, "name", literal=False), "myVar")
    return f"{name} = {ctx.get_input_value(node, 'value')};"


def _get_property(node, ctx):
    name = property_name(node, ctx)
    return f"(this.{name} !== undefined ? this.{name} : this.properties[{quote_js(name)}])"


def _set_property(node, ctx):
    name = property_name(node, ctx)
    value = ctx.get_input_value(node, "value")
    if node.expose_property:
        return f"this.{name} = {value};"
    return f"this.properties[{quote_js(name)}] = {value};"


# ── Typed variables ───────────────────────────────────────────────────────────

def _var_name(node) -> str:
    return identifier(node.group_name or "", "property")


def _vector_literal(node) -> str:
    value = node.value if isinstance(node.value, dict) else {}
    x, y = value.get("x", 0), value.get("y", 0)
    return f"new Vector2({x if isinstance(x, (int, float)) else 0}, {y if isinstance(y, (int, float)) else 0})"


def _var_default(node, ctx) -> str:
    kind = ctx.definition(node).value_kind
    if kind == "vector2":
        return _vector_literal(node)
    if kind == "asset":
        return "null"
    return ctx.own_literal(node).render()


def _typed_var(node, ctx):
    if node.expose_property:
        return f"this.{_var_name(node)}"
    return _var_default(node, ctx)


def _declare_var(node, ctx):
    default = _var_default(node, ctx)
    return ExposedProperty(_var_name(node), ctx.definition(node).value_kind, default, "General", node.id)


def _typed(type_name, label, kind, literal_kind=None, default=None, **widget):
    return NodeDefinition(
        type=type_name,
        label=label,
        outputs=("value",),
        direct_output=True,
        value_kind=kind,
        literal_kind=literal_kind,
        default_value=default,
        has_expose_checkbox=True,
        declare_property=_declare_var,
        code_gen=_typed_var,
        **widget,
    )


NODES = [
    NodeDefinition(
        type="const",
        label="Const",
        inputs=("flow", "name", "value"),
        outputs=("flow",),
        wrap_flow_node=False,
        has_input=True,
        literal_kind=LiteralKind.TEXT,
        literal_ports=("name",),
        defaults={"name": "''", "value": "null"},
        code_gen=_declaration("const"),
    ),
    NodeDefinition(
        type="let",
        label="Let",
        inputs=("flow", "name", "value"),
        outputs=("flow",),
        wrap_flow_node=False,
        has_input=True,
        literal_kind=LiteralKind.TEXT,
        literal_ports=("name",),
        defaults={"name": "''", "value": "null"},
        code_gen=_declaration("let"),
    ),
    NodeDefinition(
        type="var",
        label="Var",
        inputs=("flow", "name", "value"),
        outputs=("flow",),
        wrap_flow_node=False,
        has_input=True,
        literal_kind=LiteralKind.TEXT,
        literal_ports=("name",),
        defaults={"name": "''", "value": "null"},
        code_gen=_declaration("var"),
    ),
    NodeDefinition(
        type="getVariable",
        label="Get Variable",
        inputs=("name",),
        outputs=("value",),
        direct_output=True,
        has_input=True,
        literal_kind=LiteralKind.TEXT,
        defaults={"name": "''"},
        code_gen=_get_variable,
    ),
    NodeDefinition(
        type="setVariable",
        label="Set Variable",
        inputs=("flow", "name", "value"),
        outputs=("flow",),
        wrap_flow_node=False,
        has_input=True,
        literal_kind=LiteralKind.TEXT,
        literal_ports=("name",),
        defaults={"name": "''", "value": "null"},
        code_gen=_set_variable,
    ),
    NodeDefinition(
        type="getProperty",
        label="Get Property",
        inputs=("name",),
        outputs=("value",),
        direct_output=True,
        has_input=True,
        literal_kind=LiteralKind.TEXT,
        defaults={"name": "''"},
        code_gen=_get_property,
    ),
    NodeDefinition(
        type="setProperty",
        label="Set Property",
        inputs=("flow", "name", "value"),
        outputs=("flow",),
        wrap_flow_node=False,
        has_input=True,
        has_expose_checkbox=True,
        literal_kind=LiteralKind.TEXT,
        literal_ports=("name",),
        defaults={"name": "''", "value": "null"},
        declare_property=declare_set_property,
        code_gen=_set_property,
    ),
    _typed("numberVar", "Number Variable", "number", LiteralKind.NUMBER, 0, has_input=True),
    _typed("stringVar", "String Variable", "string", LiteralKind.TEXT, "", has_input=True),
    _typed("booleanVar", "Boolean Variable", "boolean", LiteralKind.BOOL, False, has_toggle=True),
    _typed("colorVar", "Color Variable", "color", LiteralKind.TEXT, "#ffffff", has_color_picker=True),
    _typed("vector2Var", "Vector2 Variable", "vector2"),
    # Asset references are picked in the inspector; the graph only declares the slot.
    _typed("assetVar", "Asset Variable", "asset"),
    _typed("scriptVar", "Script Variable", "script", LiteralKind.TEXT, "", has_input=True),
]
