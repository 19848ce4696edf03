"""Lifecycle entry nodes.  Each one opens the body of one class method."""

from ..core.NodeDefinition import NodeDefinition
from ..core.Types import LiteralKind
from ._helpers import constant

NODES = [
    NodeDefinition(
        type="start",
        label="On Start",
        outputs=("flow",),
        hook="start",
        code_gen=constant(""),
    ),
    # deltaTime / ctx are the method parameters, valid only inside their own hook.
    NodeDefinition(
        type="loop",
        label="On Loop",
        outputs=("flow", "deltaTime"),
        hook="loop",
        direct_output=True,
        value_kind="number",
        code_gen=constant("deltaTime"),
    ),
    NodeDefinition(
        type="draw",
        label="On Draw",
        outputs=("flow", "ctx"),
        hook="draw",
        direct_output=True,
        code_gen=constant("ctx"),
    ),
    NodeDefinition(
        type="onDestroy",
        label="On Destroy",
        outputs=("flow",),
        hook="destroy",
        code_gen=constant(""),
    ),
    NodeDefinition(
        type="create",
        label="On Create",
        outputs=("flow",),
        hook="create",
        code_gen=constant(""),
    ),
    NodeDefinition(
        type="method",
        label="Method",
        outputs=("flow",),
        hook="method",
        is_group=True,
        has_input=True,
        literal_kind=LiteralKind.TEXT,
        literal_ports=(),
        default_value="customMethod()",
        code_gen=constant(""),
    ),
]
