"""Keyboard, mouse and touch queries, plus switching input handling on and off."""

from ..core.NodeDefinition import NodeDefinition
from ..core.Types import LiteralKind, quote_js
from ..errors import InvalidLiteral
from ._helpers import call, constant, field_access, is_identifier

KEYS = (
    "a", "b", "c", "d", "e", "f", "g", "h", "i", "j", "k", "l", "m",
    "n", "o", "p", "q", "r", "s", "t", "u", "v", "w", "x", "y", "z",
    "space", "enter", "escape", "shift", "control", "alt", "tab",
    "up", "down", "left", "right",
)
MOUSE_BUTTONS = ("left", "middle", "right")


def _key_selector(node, ctx):
    key = ctx.own_literal(node).text()
    if not is_identifier(key):
        raise InvalidLiteral(f"{key!r} is not a key name", [node.id])
    return f"window.input.key.{key}"


def _mouse_button_selector(node, ctx):
    return quote_js(ctx.own_literal(node).text())


def _query(type_name, label, port, method, default):
    return NodeDefinition(
        type=type_name,
        label=label,
        inputs=(port,),
        outputs=("result",),
        direct_output=True,
        value_kind="boolean",
        defaults={port: default},
        code_gen=call(f"window.input.{method}({{{port}}})", port),
    )


def _read(type_name, label, output, expr, kind):
    return NodeDefinition(
        type=type_name,
        label=label,
        outputs=(output,),
        direct_output=True,
        value_kind=kind,
        code_gen=constant(expr),
    )


def _mouse_axis(type_name, label, axis):
    return NodeDefinition(
        type=type_name,
        label=label,
        inputs=("worldSpace",),
        outputs=("value",),
        direct_output=True,
        value_kind="number",
        defaults={"worldSpace": "false"},
        code_gen=call(f"window.input.getMousePosition({{worldSpace}}).{axis}", "worldSpace"),
    )


def _toggle(type_name, label, statement):
    return NodeDefinition(
        type=type_name,
        label=label,
        inputs=("flow",),
        outputs=("flow",),
        wrap_flow_node=False,
        code_gen=constant(statement),
    )


NODES = [
    NodeDefinition(
        type="keySelector",
        label="Key",
        outputs=("key",),
        direct_output=True,
        has_dropdown=True,
        dropdown_options=KEYS,
        literal_kind=LiteralKind.ENUM,
        default_value="a",
        code_gen=_key_selector,
    ),
    NodeDefinition(
        type="mouseButtonSelector",
        label="Mouse Button",
        outputs=("button",),
        direct_output=True,
        has_dropdown=True,
        dropdown_options=MOUSE_BUTTONS,
        literal_kind=LiteralKind.ENUM,
        default_value="left",
        code_gen=_mouse_button_selector,
    ),
    _query("keyDown", "Key Down", "key", "keyDown", "window.input.key.a"),
    _query("keyPressed", "Key Pressed", "key", "keyPressed", "window.input.key.a"),
    _query("keyReleased", "Key Released", "key", "keyReleased", "window.input.key.a"),
    _query("mouseDown", "Mouse Down", "button", "mouseDown", "'left'"),
    _query("mousePressed", "Mouse Pressed", "button", "mousePressed", "'left'"),
    _query("mouseReleased", "Mouse Released", "button", "mouseReleased", "'left'"),
    NodeDefinition(
        type="getMousePosition",
        label="Mouse Position",
        inputs=("worldSpace",),
        outputs=("x", "y"),
        direct_output=True,
        value_kind="vector2",
        defaults={"worldSpace": "false"},
        multi_output_access=field_access,
        code_gen=call("window.input.getMousePosition({worldSpace})", "worldSpace"),
    ),
    _mouse_axis("getMouseX", "Mouse X", "x"),
    _mouse_axis("getMouseY", "Mouse Y", "y"),
    NodeDefinition(
        type="didMouseMove",
        label="Mouse Moved",
        outputs=("moved",),
        direct_output=True,
        value_kind="boolean",
        code_gen=constant("window.input.didMouseMove()"),
    ),
    _read("getMouseWheelDelta", "Mouse Wheel", "value", "window.input.getMouseWheelDelta()", "number"),
    # Touch
    _read("getTouchCount", "Touch Count", "value", "window.input.getTouchCount()", "number"),
    _read("isTapped", "Is Tapped", "result", "window.input.isTapped()", "boolean"),
    _read("isLongPressed", "Is Long Pressed", "result", "window.input.isLongPressed()", "boolean"),
    _read("isPinching", "Is Pinching", "result", "window.input.isPinching()", "boolean"),
    _read("getPinchScale", "Pinch Scale", "value", "(window.input.getPinchData()?.scale || 1)", "number"),
    _read("getSwipeDirection", "Swipe Direction", "direction", "window.input.getSwipeDirection()", "string"),
    _toggle("enableInput", "Enable Input", "window.input.enable();"),
    _toggle("disableInput", "Disable Input", "window.input.disable();"),
]
