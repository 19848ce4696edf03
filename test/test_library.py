import pytest

from behaviorgraph.core import FLOW_PORT, NodeDefinition, NodeLibrary
from behaviorgraph.errors import InvalidLiteral, UnknownNodeType
from behaviorgraph.library import CATEGORIES, default_library
from behaviorgraph.library._helpers import identifier, needs_parens


EXPECTED = {
    "Events": ["start", "loop", "draw", "onDestroy", "create", "method"],
    "Variables": ["const", "let", "var", "getVariable", "setVariable", "getProperty",
                  "setProperty", "numberVar", "stringVar", "booleanVar", "colorVar", "vector2Var",
                  "assetVar", "scriptVar"],
    "Values": ["number", "string", "boolean", "color", "null", "undefined", "infinity",
               "negativeInfinity"],
    "Logic": ["if", "compare", "and", "or", "not", "return", "repeat"],
    "Math": ["add", "subtract", "multiply", "divide", "modulo", "random", "abs", "sqrt",
             "pow", "sin", "cos", "vector2"],
    "Comparison": ["equals", "notEquals", "greaterThan", "lessThan"],
    "GameObject": ["getPosition", "setPosition", "getScale", "setScale", "getAngle", "setAngle",
                   "getModule", "require", "addModule", "removeModule", "findGameObject", "instanceCreate",
                   "instanceDestroy", "getName", "setName"],
    "Drawing": ["fillRect", "strokeRect", "fillCircle", "drawText", "drawLine", "setLineWidth"],
    "Debug": ["log", "warn", "error"],
    "Input": ["keySelector", "mouseButtonSelector", "keyDown", "keyPressed", "keyReleased",
              "mouseDown", "mousePressed", "mouseReleased", "getMousePosition", "getMouseX", "getMouseY",
              "didMouseMove", "getMouseWheelDelta", "getTouchCount", "isTapped", "isLongPressed",
              "isPinching", "getPinchScale", "getSwipeDirection", "enableInput", "disableInput"],
    "Organization": ["group", "comment", "groupInput", "groupOutput"],
}


class TestDefaultLibrary:

    @pytest.fixture
    def library(self):
        return default_library()

    def test_catalogue(self, library):
        categories = library.categories()
        assert list(categories) == list(EXPECTED)
        for name, types in EXPECTED.items():
            assert [d.type for d in categories[name]] == types

    def test_fresh_library_each_call(self):
        first = default_library()
        first.register(NodeDefinition(type="extra", code_gen=lambda n, c: ""))
        assert "extra" not in default_library()

    def test_hooks(self, library):
        hooks = {d.type: d.hook for d in library if d.hook}
        assert hooks == {
            "start": "start", "loop": "loop", "draw": "draw",
            "onDestroy": "destroy", "create": "create", "method": "method",
        }

    def test_comparisons_have_a_single_result(self, library):
        for type_name in ("compare", "equals", "notEquals", "greaterThan", "lessThan"):
            definition = library.get(type_name)
            assert definition.inputs == ("a", "b")
            assert definition.outputs == ("result",)

    def test_branch_node(self, library):
        definition = library.get("if")
        assert definition.is_branch
        assert definition.flow_outputs == ("true", "false")
        assert definition.data_outputs == ()

    def test_flow_shape(self, library):
        log = library.get("log")
        assert log.is_flow_receiving and log.is_flow_producing
        assert not library.get("add").is_flow_receiving
        assert library.get("start").is_entry
        assert library.get("loop").data_outputs == ("deltaTime",)

    def test_unknown_type(self, library):
        with pytest.raises(UnknownNodeType) as exc_info:
            library.get("teleport", node_id="n9")
        assert exc_info.value.node_ids == ("n9",)

    def test_duplicate_registration(self, library):
        with pytest.raises(ValueError):
            library.register(library.get("add"))

    def test_describe(self, library):
        described = library.describe()
        add = next(d for d in described["Math"] if d["type"] == "add")
        assert add["inputs"] == ["a", "b"]
        assert add["outputs"] == ["result"]
        assert add["directOutput"] is False


class TestNodeDefinition:

    def test_flow_must_come_first(self):
        with pytest.raises(ValueError):
            NodeDefinition(type="bad", inputs=("a", FLOW_PORT), code_gen=lambda n, c: "")

    def test_branches_must_be_outputs(self):
        with pytest.raises(ValueError):
            NodeDefinition(type="bad", outputs=("yes",), branches=("yes", "no"), code_gen=lambda n, c: "")

    def test_from_categories(self):
        library = NodeLibrary.from_categories({
            "Custom": [NodeDefinition(type="ping", code_gen=lambda n, c: "ping()")],
        })
        assert list(library.categories()) == ["Custom"]
        assert len(library) == 1

    def test_ports_addressed_by_name_only(self):
        """Ports are looked up by name and index; no per-port accessor objects exist."""
        import behaviorgraph.core as core
        from behaviorgraph.compiler.writer import CodeWriter
        assert not hasattr(core.Types, "PortFunction")
        assert not hasattr(NodeDefinition, "input_function")
        assert not hasattr(NodeDefinition, "output_function")
        assert not hasattr(core.Graph, "all_incoming")
        assert not hasattr(CodeWriter, "extend")
        assert not hasattr(CodeWriter, "lines")


class TestCodeRules:

    def test_compare_operator(self, builder, context):
        builder.add("cmp", "compare", dropdown_value=">=", literals={"a": 1, "b": 2})
        builder.add("log", "log")
        builder.connect("cmp", "result", "log", "message")
        ctx = context(builder.build())
        assert ctx.get_input_value(ctx.graph.node("log"), "message") == "1 >= 2"

    def test_compare_rejects_unknown_operator(self, builder, context):
        builder.add("cmp", "compare", dropdown_value="; alert(1)")
        builder.add("log", "log")
        builder.connect("cmp", "result", "log", "message")
        ctx = context(builder.build())
        with pytest.raises(InvalidLiteral):
            ctx.get_input_value(ctx.graph.node("log"), "message")

    def test_key_selector(self, builder, context):
        builder.add("key", "keySelector", dropdown_value="space")
        builder.add("down", "keyDown")
        builder.add("log", "log")
        builder.connect("key", "key", "down", "key")
        builder.connect("down", "result", "log", "message")
        ctx = context(builder.build())
        assert ctx.get_input_value(ctx.graph.node("log"), "message") == \
            "window.input.keyDown(window.input.key.space)"

    def test_values(self, builder, context):
        builder.add("t", "boolean", value=True)
        builder.add("c", "color", value="#00ff00")
        builder.add("both", "and")
        builder.add("log", "log")
        builder.connect("t", "value", "both", "a")
        builder.connect("c", "value", "both", "b")
        builder.connect("both", "result", "log", "message")
        ctx = context(builder.build())
        assert ctx.get_input_value(ctx.graph.node("log"), "message") == "true && '#00ff00'"

    def test_get_property(self, builder, context):
        builder.add("p", "getProperty", value="hp")
        builder.add("log", "log")
        builder.connect("p", "value", "log", "message")
        ctx = context(builder.build())
        assert ctx.get_input_value(ctx.graph.node("log"), "message") == \
            "(this.hp !== undefined ? this.hp : this.properties['hp'])"

    def test_draw_statement_lines(self, builder, compile_, body):
        builder.add("d", "draw")
        builder.add("box", "fillRect", literals={"color": "red"})
        builder.flow("d", "box")
        builder.connect("d", "ctx", "box", "ctx")
        assert body(compile_(builder.build()), "draw(ctx)") == [
            "        ctx.fillStyle = 'red';",
            "        ctx.fillRect(0, 0, 10, 10);",
        ]

    def test_const_declaration(self, builder, compile_, body):
        builder.add("s", "start")
        builder.add("k", "const", value="limit", literals={"value": 10})
        builder.flow("s", "k")
        assert body(compile_(builder.build()), "start()") == ["        const limit = 10;"]

    def test_trig_and_power_ports(self, builder, context):
        builder.add("sine", "sin", literals={"angle": 1})
        builder.add("power", "pow", literals={"base": 2, "exp": 3})
        builder.add("sum", "add")
        builder.add("log", "log")
        builder.connect("sine", "result", "sum", "a")
        builder.connect("power", "result", "sum", "b")
        builder.connect("sum", "result", "log", "message")
        ctx = context(builder.build())
        assert ctx.get_input_value(ctx.graph.node("log"), "message") == "Math.sin(1) + Math.pow(2, 3)"

    def test_trig_angle_defaults_to_zero(self, builder, context):
        builder.add("cosine", "cos")
        builder.add("log", "log")
        builder.connect("cosine", "result", "log", "message")
        ctx = context(builder.build())
        assert ctx.get_input_value(ctx.graph.node("log"), "message") == "Math.cos(0)"

    def test_mouse_axis(self, builder, context):
        builder.add("mx", "getMouseX")
        builder.add("my", "getMouseY", literals={"worldSpace": True})
        builder.add("sum", "add")
        builder.add("log", "log")
        builder.connect("mx", "value", "sum", "a")
        builder.connect("my", "value", "sum", "b")
        builder.connect("sum", "result", "log", "message")
        ctx = context(builder.build())
        assert ctx.get_input_value(ctx.graph.node("log"), "message") == \
            "window.input.getMousePosition(false).x + window.input.getMousePosition(true).y"

    @pytest.mark.parametrize("type_name, port, expr", [
        ("getMouseWheelDelta", "value", "window.input.getMouseWheelDelta()"),
        ("getTouchCount", "value", "window.input.getTouchCount()"),
        ("isTapped", "result", "window.input.isTapped()"),
        ("isLongPressed", "result", "window.input.isLongPressed()"),
        ("isPinching", "result", "window.input.isPinching()"),
        ("getPinchScale", "value", "(window.input.getPinchData()?.scale || 1)"),
        ("getSwipeDirection", "direction", "window.input.getSwipeDirection()"),
    ])
    def test_pointer_reads(self, builder, context, type_name, port, expr):
        builder.add("read", type_name)
        builder.add("log", "log")
        builder.connect("read", port, "log", "message")
        ctx = context(builder.build())
        assert ctx.get_input_value(ctx.graph.node("log"), "message") == expr

    def test_input_toggles(self, builder, compile_, body):
        builder.add("s", "start")
        builder.add("off", "disableInput")
        builder.add("on", "enableInput")
        builder.flow("s", "off", "on")
        assert body(compile_(builder.build()), "start()") == [
            "        window.input.disable();",
            "        window.input.enable();",
        ]

    def test_require_statement(self, builder, compile_, body):
        builder.add("s", "start")
        builder.add("fallback", "require")
        builder.add("named", "require", value="Physics")
        builder.flow("s", "fallback", "named")
        assert body(compile_(builder.build()), "start()") == [
            "        require('ModuleName');",
            "        require('Physics');",
        ]

    def test_asset_and_script_variables(self, builder, compile_):
        builder.add("sprite", "assetVar", group_name="sprite", expose_property=True)
        builder.add("handler", "scriptVar", group_name="handler", expose_property=True)
        source = compile_(builder.build())
        assert "        this.sprite = null;" in source
        assert "        this.handler = '';" in source
        assert 'this.exposeProperty("sprite", "asset", null' in source
        assert 'this.exposeProperty("handler", "script", \'\'' in source

    def test_string_node_with_boolean_value(self, builder, context):
        builder.add("word", "string", value=True)
        builder.add("log", "log")
        builder.connect("word", "value", "log", "message")
        ctx = context(builder.build())
        assert ctx.get_input_value(ctx.graph.node("log"), "message") == "'true'"


class TestHelpers:

    @pytest.mark.parametrize("expr, wrapped", [
        ("5", False),
        ("-5", False),
        ("this.x", False),
        ("Math.pow(a, b)", False),
        ("(a + b)", False),
        ("a + b", True),
        ("'a b'", False),
        ("!done", True),
        ("(a) + (b)", True),
    ])
    def test_needs_parens(self, expr, wrapped):
        assert needs_parens(expr) is wrapped

    def test_identifier(self):
        assert identifier("'score'", "x") == "score"
        assert identifier("my score", "x") == "x"
        assert identifier("", "x") == "x"
