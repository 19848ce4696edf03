"""Canvas drawing statements.  They take the draw hook's ``ctx`` as an input."""

from ..core.NodeDefinition import NodeDefinition


def _draw(type_name, label, ports, body, defaults):
    def code_gen(node, ctx):
        values = {p: ctx.get_input_value(node, p) for p in ports}
        lines = [line.format(**values) for line in body]
        return f"\n{ctx.indent}".join(lines)

    return NodeDefinition(
        type=type_name,
        label=label,
        inputs=("flow",) + ports,
        outputs=("flow",),
        wrap_flow_node=False,
        defaults={"ctx": "ctx", **defaults},
        code_gen=code_gen,
    )


_RECT = {"x": "0", "y": "0", "width": "10", "height": "10", "color": "'#ffffff'"}

NODES = [
    _draw(
        "fillRect", "Fill Rect",
        ("ctx", "x", "y", "width", "height", "color"),
        ("{ctx}.fillStyle = {color};",
         "{ctx}.fillRect({x}, {y}, {width}, {height});"),
        _RECT,
    ),
    _draw(
        "strokeRect", "Stroke Rect",
        ("ctx", "x", "y", "width", "height", "color"),
        ("{ctx}.strokeStyle = {color};",
         "{ctx}.strokeRect({x}, {y}, {width}, {height});"),
        _RECT,
    ),
    _draw(
        "fillCircle", "Fill Circle",
        ("ctx", "x", "y", "radius", "color"),
        ("{ctx}.fillStyle = {color};",
         "{ctx}.beginPath();",
         "{ctx}.arc({x}, {y}, {radius}, 0, Math.PI * 2);",
         "{ctx}.fill();"),
        {"x": "0", "y": "0", "radius": "10", "color": "'#ffffff'"},
    ),
    _draw(
        "drawText", "Draw Text",
        ("ctx", "text", "x", "y", "color"),
        ("{ctx}.fillStyle = {color};",
         "{ctx}.fillText({text}, {x}, {y});"),
        {"text": "''", "x": "0", "y": "0", "color": "'#ffffff'"},
    ),
    _draw(
        "drawLine", "Draw Line",
        ("ctx", "x1", "y1", "x2", "y2", "color"),
        ("{ctx}.strokeStyle = {color};",
         "{ctx}.beginPath();",
         "{ctx}.moveTo({x1}, {y1});",
         "{ctx}.lineTo({x2}, {y2});",
         "{ctx}.stroke();"),
        {"x1": "0", "y1": "0", "x2": "10", "y2": "10", "color": "'#ffffff'"},
    ),
    _draw(
        "setLineWidth", "Set Line Width",
        ("ctx", "width"),
        ("{ctx}.lineWidth = {width};",),
        {"width": "1"},
    ),
]
