"""Math nodes.  Binary operators parenthesise compound operands."""

from ..core.NodeDefinition import NodeDefinition
from ._helpers import binary, call, field_access, operand


def _random(node, ctx):
    low = operand(node, ctx, "min")
    high = operand(node, ctx, "max")
    return f"(Math.random() * ({high} - {low}) + {low})"


def _binary(type_name, label, op, b_default="0"):
    return NodeDefinition(
        type=type_name,
        label=label,
        inputs=("a", "b"),
        outputs=("result",),
        value_kind="number",
        defaults={"a": "0", "b": b_default},
        code_gen=binary(op),
    )


def _unary(type_name, label, fn, port="value"):
    return NodeDefinition(
        type=type_name,
        label=label,
        inputs=(port,),
        outputs=("result",),
        value_kind="number",
        defaults={port: "0"},
        code_gen=call(f"Math.{fn}({{{port}}})", port),
    )


NODES = [
    _binary("add", "Add", "+"),
    _binary("subtract", "Subtract", "-"),
    _binary("multiply", "Multiply", "*", b_default="1"),
    _binary("divide", "Divide", "/", b_default="1"),
    _binary("modulo", "Modulo", "%", b_default="1"),
    # Not direct: every evaluation draws a new number, so repeated reads are bound once.
    NodeDefinition(
        type="random",
        label="Random",
        inputs=("min", "max"),
        outputs=("result",),
        value_kind="number",
        defaults={"min": "0", "max": "1"},
        code_gen=_random,
    ),
    _unary("abs", "Abs", "abs"),
    _unary("sqrt", "Sqrt", "sqrt"),
    NodeDefinition(
        type="pow",
        label="Pow",
        inputs=("base", "exp"),
        outputs=("result",),
        value_kind="number",
        defaults={"base": "0", "exp": "1"},
        code_gen=call("Math.pow({base}, {exp})", "base", "exp"),
    ),
    _unary("sin", "Sin", "sin", "angle"),
    _unary("cos", "Cos", "cos", "angle"),
    NodeDefinition(
        type="vector2",
        label="Vector2",
        inputs=("x", "y"),
        outputs=("x", "y"),
        value_kind="vector2",
        defaults={"x": "0", "y": "0"},
        multi_output_access=field_access,
        code_gen=call("new Vector2({x}, {y})", "x", "y"),
    ),
]
