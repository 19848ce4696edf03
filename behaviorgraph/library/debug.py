from ..core.NodeDefinition import NodeDefinition
from ._helpers import call


def _console(type_name, label, method):
    return NodeDefinition(
        type=type_name,
        label=label,
        inputs=("flow", "message"),
        outputs=("flow",),
        wrap_flow_node=False,
        defaults={"message": "''"},
        code_gen=call(f"console.{method}({{message}});", "message"),
    )


NODES = [
    _console("log", "Log", "log"),
    _console("warn", "Warn", "warn"),
    _console("error", "Error", "error"),
]
