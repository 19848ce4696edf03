"""Groups, comments and the entry/exit markers inside a group."""

from ..core.NodeDefinition import NodeDefinition
from ..core.Types import LiteralKind
from ._helpers import constant


def _group(node, ctx):
    return ctx.generate_group_code(node)


def _comment(node, ctx):
    text = " ".join(str(node.value or "").split())
    return f"// {text or 'Comment'}"


NODES = [
    NodeDefinition(
        type="group",
        label="Group",
        inputs=("flow",),
        outputs=("flow",),
        wrap_flow_node=False,
        is_group=True,
        code_gen=_group,
    ),
    NodeDefinition(
        type="comment",
        label="Comment",
        inputs=("flow",),
        outputs=("flow",),
        wrap_flow_node=False,
        has_input=True,
        literal_kind=LiteralKind.TEXT,
        literal_ports=(),
        code_gen=_comment,
    ),
    NodeDefinition(
        type="groupInput",
        label="Group Input",
        outputs=("flow",),
        code_gen=constant(""),
    ),
    NodeDefinition(
        type="groupOutput",
        label="Group Output",
        inputs=("flow",),
        code_gen=constant(""),
    ),
]
