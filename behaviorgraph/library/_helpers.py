"""Small building blocks shared by the catalogue modules."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Callable, Optional

from ..core.NodeDefinition import ExposedProperty

if TYPE_CHECKING:
    from ..compiler.context import CompileContext
    from ..core.GraphPrimitives import NodeInstance

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")
_NUMBER = re.compile(r"^-?\d+(\.\d+)?([eE][-+]?\d+)?$")
_OPERATOR_CHARS = frozenset("+-*/%<>=!&|?:,")

# Zero value per inspector kind, used when a property default is computed at runtime.
ZERO_VALUES = {
    "number": "0",
    "string": '""',
    "boolean": "false",
    "color": '"#ffffff"',
    "vector2": "new Vector2(0, 0)",
    "asset": "null",
    "script": '""',
}


def is_identifier(text: str) -> bool:
    return bool(_IDENTIFIER.match(text))


def identifier(raw: str, fallback: str) -> str:
    """Strip surrounding quotes and whitespace; fall back when not a valid identifier."""
    text = (raw or "").strip().strip("'\"").strip()
    return text if is_identifier(text) else fallback


def _wrapped(expr: str) -> bool:
    # True if one pair of parentheses encloses the whole expression.
    if not (expr.startswith("(") and expr.endswith(")")):
        return False
    depth = 0
    for i, ch in enumerate(expr):
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth == 0 and i != len(expr) - 1:
                return False
    return True


def needs_parens(expr: str) -> bool:
    """Whether ``expr`` has a top-level operator that could bind looser than its context."""
    expr = expr.strip()
    if not expr or _NUMBER.match(expr) or _wrapped(expr):
        return False

    depth = 0
    quote: Optional[str] = None
    escaped = False
    for ch in expr:
        if quote:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == quote:
                quote = None
            continue
        if ch in "'\"`":
            quote = ch
        elif ch in "([{":
            depth += 1
        elif ch in ")]}":
            depth -= 1
        elif depth == 0 and (ch.isspace() or ch in _OPERATOR_CHARS):
            return True
    return False


def operand(node: "NodeInstance", ctx: "CompileContext", port: str) -> str:
    expr = ctx.get_input_value(node, port)
    return f"({expr})" if needs_parens(expr) else expr


def binary(op: str, left: str = "a", right: str = "b") -> Callable[["NodeInstance", "CompileContext"], str]:
    def code_gen(node, ctx):
        return f"{operand(node, ctx, left)} {op} {operand(node, ctx, right)}"
    return code_gen


def call(template: str, *ports: str) -> Callable[["NodeInstance", "CompileContext"], str]:
    """``template`` is formatted with the resolved value of each named port."""
    def code_gen(node, ctx):
        return template.format(**{p: ctx.get_input_value(node, p) for p in ports})
    return code_gen


def constant(text: str) -> Callable[["NodeInstance", "CompileContext"], str]:
    return lambda node, ctx: text


def field_access(base: str, port: str, node, ctx) -> str:
    target = f"({base})" if needs_parens(base) else base
    return f"{target}.{port}"


def property_name(node: "NodeInstance", ctx: "CompileContext") -> str:
    return identifier(ctx.get_input_value(node, "name", literal=False), "property")


def declare_set_property(node: "NodeInstance", ctx: "CompileContext") -> ExposedProperty:
    """
    Field declaration for an exposed setProperty node.

    A literal value node on ``value`` gives both default and kind; any other
    source only gives the kind, with that kind's zero value as default.
    """
    name = property_name(node, ctx)
    group = node.group_name or "General"

    source = ctx.source(node, "value")
    if source is not None:
        src, src_def, _ = source
        kind = src_def.value_kind or "string"
        if src_def.direct_output and src_def.literal_kind is not None:
            return ExposedProperty(name, kind, ctx.own_literal(src).render(), group, node.id)
        return ExposedProperty(name, kind, ZERO_VALUES.get(kind, '""'), group, node.id)

    default = ctx.get_input_value(node, "value")
    kind = "number" if _NUMBER.match(default) else (
        "boolean" if default in ("true", "false") else "string"
    )
    return ExposedProperty(name, kind, default, group, node.id)
