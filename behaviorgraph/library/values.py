"""Literal value nodes.  All are direct: their text is inlined wherever it is read."""

from ..core.NodeDefinition import NodeDefinition
from ..core.Types import LiteralKind
from ._helpers import constant


def _own_literal(node, ctx):
    return ctx.own_literal(node).render()


NODES = [
    NodeDefinition(
        type="number",
        label="Number",
        outputs=("value",),
        direct_output=True,
        has_input=True,
        literal_kind=LiteralKind.NUMBER,
        value_kind="number",
        default_value=0,
        code_gen=_own_literal,
    ),
    NodeDefinition(
        type="string",
        label="String",
        outputs=("value",),
        direct_output=True,
        has_input=True,
        literal_kind=LiteralKind.TEXT,
        value_kind="string",
        default_value="",
        code_gen=_own_literal,
    ),
    NodeDefinition(
        type="boolean",
        label="Boolean",
        outputs=("value",),
        direct_output=True,
        has_toggle=True,
        literal_kind=LiteralKind.BOOL,
        value_kind="boolean",
        default_value=False,
        code_gen=_own_literal,
    ),
    NodeDefinition(
        type="color",
        label="Color",
        outputs=("value",),
        direct_output=True,
        has_color_picker=True,
        literal_kind=LiteralKind.TEXT,
        value_kind="color",
        default_value="#ffffff",
        code_gen=_own_literal,
    ),
    NodeDefinition(type="null", label="Null", outputs=("value",), direct_output=True,
                   code_gen=constant("null")),
    NodeDefinition(type="undefined", label="Undefined", outputs=("value",), direct_output=True,
                   code_gen=constant("undefined")),
    NodeDefinition(type="infinity", label="Infinity", outputs=("value",), direct_output=True,
                   value_kind="number", code_gen=constant("Infinity")),
    NodeDefinition(type="negativeInfinity", label="-Infinity", outputs=("value",), direct_output=True,
                   value_kind="number", code_gen=constant("-Infinity")),
]
