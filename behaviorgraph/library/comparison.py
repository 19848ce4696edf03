from ..core.NodeDefinition import NodeDefinition
from ._helpers import binary


def _comparison(type_name, label, op):
    return NodeDefinition(
        type=type_name,
        label=label,
        inputs=("a", "b"),
        outputs=("result",),
        value_kind="boolean",
        defaults={"a": "0", "b": "0"},
        code_gen=binary(op),
    )


NODES = [
    _comparison("equals", "Equals", "==="),
    _comparison("notEquals", "Not Equals", "!=="),
    _comparison("greaterThan", "Greater Than", ">"),
    _comparison("lessThan", "Less Than", "<"),
]
