"""Branching, boolean logic and loops."""

from ..core.NodeDefinition import NodeDefinition
from ..core.Types import LiteralKind
from ..errors import InvalidLiteral
from ._helpers import binary, operand

COMPARE_OPERATORS = ("==", "!=", "===", "!==", ">", "<", ">=", "<=")


def _if(node, ctx):
    return f"if ({ctx.get_input_value(node, 'condition')})"


def _compare(node, ctx):
    op = node.dropdown_value or "=="
    if op not in COMPARE_OPERATORS:
        raise InvalidLiteral(f"{op!r} is not a comparison operator", [node.id])
    return f"{operand(node, ctx, 'a')} {op} {operand(node, ctx, 'b')}"


def _not(node, ctx):
    return f"!{operand(node, ctx, 'value')}"


def _return(node, ctx):
    return f"return {ctx.get_input_value(node, 'value')};"


def _repeat(node, ctx):
    return f"for (let i = 0; i < {ctx.get_input_value(node, 'count')}; i++)"


NODES = [
    NodeDefinition(
        type="if",
        label="If",
        inputs=("flow", "condition"),
        outputs=("true", "false"),
        branches=("true", "false"),
        branch_headers={"false": "else"},
        wrap_flow_node=False,
        defaults={"condition": "false"},
        code_gen=_if,
    ),
    NodeDefinition(
        type="compare",
        label="Compare",
        inputs=("a", "b"),
        outputs=("result",),
        has_dropdown=True,
        dropdown_options=COMPARE_OPERATORS,
        literal_kind=LiteralKind.ENUM,
        literal_ports=(),
        default_value="==",
        value_kind="boolean",
        defaults={"a": "0", "b": "0"},
        code_gen=_compare,
    ),
    NodeDefinition(
        type="and",
        label="And",
        inputs=("a", "b"),
        outputs=("result",),
        value_kind="boolean",
        defaults={"a": "false", "b": "false"},
        code_gen=binary("&&"),
    ),
    NodeDefinition(
        type="or",
        label="Or",
        inputs=("a", "b"),
        outputs=("result",),
        value_kind="boolean",
        defaults={"a": "false", "b": "false"},
        code_gen=binary("||"),
    ),
    NodeDefinition(
        type="not",
        label="Not",
        inputs=("value",),
        outputs=("result",),
        value_kind="boolean",
        defaults={"value": "false"},
        code_gen=_not,
    ),
    NodeDefinition(
        type="return",
        label="Return",
        inputs=("flow", "value"),
        wrap_flow_node=False,
        defaults={"value": "null"},
        code_gen=_return,
    ),
    NodeDefinition(
        type="repeat",
        label="Repeat",
        inputs=("flow", "count"),
        outputs=("flow",),
        defaults={"count": "1"},
        code_gen=_repeat,
    ),
]
