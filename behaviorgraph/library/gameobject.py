"""Nodes that talk to the module's game object and the engine."""

from ..core.NodeDefinition import NodeDefinition
from ..core.Types import LiteralKind
from ._helpers import call, constant

_SCALE_FIELDS = {"scaleX": "x", "scaleY": "y"}


def _scale_access(base, port, node, ctx):
    return f"{base}.{_SCALE_FIELDS.get(port, port)}"


def _set_xy(target):
    def code_gen(node, ctx):
        x = ctx.get_input_value(node, "x")
        y = ctx.get_input_value(node, "y")
        return f"this.gameObject.{target}.x = {x};\n{ctx.indent}this.gameObject.{target}.y = {y};"
    return code_gen


def _statement(type_name, label, template, *ports, defaults=None):
    return NodeDefinition(
        type=type_name,
        label=label,
        inputs=("flow",) + ports,
        outputs=("flow",),
        wrap_flow_node=False,
        defaults=defaults or {},
        code_gen=call(template, *ports),
    )


NODES = [
    NodeDefinition(
        type="getPosition",
        label="Get Position",
        outputs=("x", "y"),
        direct_output=True,
        value_kind="vector2",
        code_gen=constant("this.gameObject.position"),
    ),
    NodeDefinition(
        type="setPosition",
        label="Set Position",
        inputs=("flow", "x", "y"),
        outputs=("flow",),
        wrap_flow_node=False,
        defaults={"x": "0", "y": "0"},
        code_gen=_set_xy("position"),
    ),
    NodeDefinition(
        type="getScale",
        label="Get Scale",
        outputs=("scaleX", "scaleY"),
        direct_output=True,
        value_kind="vector2",
        multi_output_access=_scale_access,
        code_gen=constant("this.gameObject.scale"),
    ),
    NodeDefinition(
        type="setScale",
        label="Set Scale",
        inputs=("flow", "x", "y"),
        outputs=("flow",),
        wrap_flow_node=False,
        defaults={"x": "1", "y": "1"},
        code_gen=_set_xy("scale"),
    ),
    NodeDefinition(
        type="getAngle",
        label="Get Angle",
        outputs=("angle",),
        direct_output=True,
        value_kind="number",
        code_gen=constant("this.gameObject.angle"),
    ),
    _statement("setAngle", "Set Angle", "this.gameObject.angle = {angle};", "angle",
               defaults={"angle": "0"}),
    NodeDefinition(
        type="getModule",
        label="Get Module",
        inputs=("name",),
        outputs=("module",),
        code_gen=call("this.gameObject.getModule({name})", "name"),
    ),
    NodeDefinition(
        type="require",
        label="Require",
        inputs=("flow", "name"),
        outputs=("flow",),
        wrap_flow_node=False,
        has_input=True,
        literal_kind=LiteralKind.TEXT,
        literal_ports=("name",),
        default_value="ModuleName",
        code_gen=call("require({name});", "name"),
    ),
    _statement("addModule", "Add Module", "this.gameObject.addModule({name});", "name"),
    _statement("removeModule", "Remove Module", "this.gameObject.removeModule({name});", "name"),
    NodeDefinition(
        type="findGameObject",
        label="Find GameObject",
        inputs=("name",),
        outputs=("gameObject",),
        code_gen=call("window.engine.findGameObject({name})", "name"),
    ),
    # Creates an object on every evaluation; repeated reads in one statement share it.
    NodeDefinition(
        type="instanceCreate",
        label="Instance Create",
        inputs=("x", "y", "name"),
        outputs=("instance",),
        defaults={"x": "0", "y": "0"},
        code_gen=call("this.instanceCreate({x}, {y}, {name})", "x", "y", "name"),
    ),
    _statement("instanceDestroy", "Instance Destroy", "{object}.destroy();", "object"),
    NodeDefinition(
        type="getName",
        label="Get Name",
        outputs=("name",),
        direct_output=True,
        value_kind="string",
        code_gen=constant("this.gameObject.name"),
    ),
    _statement("setName", "Set Name", "this.gameObject.name = {name};", "name",
               defaults={"name": "''"}),
]
