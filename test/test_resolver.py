import sys

import pytest

from behaviorgraph.config import CompilerSettings
from behaviorgraph.core import Graph, NodeInstance
from behaviorgraph.errors import (
    CyclicDataDependency,
    InvalidPortReference,
    MaxDepthExceeded,
    MissingRequiredInput,
)


class TestLiteralFallback:

    def test_port_literal_text_is_quoted(self, builder, context):
        """An unconnected text input with literal hello resolves to 'hello'."""
        builder.add("log", "log", literals={"message": "hello"})
        ctx = context(builder.build())
        node = ctx.graph.node("log")
        assert ctx.get_input_value(node, "message") == "'hello'"

    def test_port_literal_number_is_bare(self, builder, context):
        builder.add("sum", "add", literals={"a": 5})
        ctx = context(builder.build())
        assert ctx.get_input_value(ctx.graph.node("sum"), "a") == "5"

    def test_raw_text(self, builder, context):
        builder.add("log", "log", literals={"message": "hello"})
        ctx = context(builder.build())
        assert ctx.get_input_value(ctx.graph.node("log"), "message", literal=False) == "hello"

    def test_own_literal_backs_bound_name(self, builder, context):
        """A node's own value fills its name input, not its value input."""
        builder.add("c", "const", value="speed")
        ctx = context(builder.build())
        node = ctx.graph.node("c")
        assert ctx.get_input_value(node, "name", literal=False) == "speed"
        assert ctx.get_input_value(node, "value") == "null"

    def test_definition_default(self, builder, context):
        builder.add("sum", "add")
        ctx = context(builder.build())
        assert ctx.get_input_value(ctx.graph.node("sum"), "b") == "0"

    def test_missing_required_input(self, builder, context):
        builder.add("kill", "instanceDestroy")
        ctx = context(builder.build())
        with pytest.raises(MissingRequiredInput) as exc_info:
            ctx.get_input_value(ctx.graph.node("kill"), "object")
        assert exc_info.value.node_ids == ("kill",)

    def test_unknown_port_name(self, builder, context):
        builder.add("sum", "add")
        ctx = context(builder.build())
        with pytest.raises(InvalidPortReference):
            ctx.get_input_value(ctx.graph.node("sum"), "c")

    def test_flow_port_is_not_data(self, builder, context):
        builder.add("log", "log")
        ctx = context(builder.build())
        with pytest.raises(InvalidPortReference):
            ctx.get_input_value(ctx.graph.node("log"), "flow")


class TestConnectedInputs:

    def test_direct_source_inlined(self, builder, context):
        builder.add("five", "number", value=5)
        builder.add("sum", "add")
        builder.connect("five", "value", "sum", "a")
        ctx = context(builder.build())
        assert ctx.get_input_value(ctx.graph.node("sum"), "a") == "5"

    def test_nested_expression(self, builder, context):
        """5 + 3 feeding a multiply keeps its precedence."""
        builder.add("five", "number", value=5)
        builder.add("three", "number", value=3)
        builder.add("sum", "add")
        builder.add("twice", "multiply", literals={"b": 2})
        builder.connect("five", "value", "sum", "a")
        builder.connect("three", "value", "sum", "b")
        builder.connect("sum", "result", "twice", "a")
        builder.add("log", "log")
        builder.connect("twice", "result", "log", "message")
        ctx = context(builder.build())
        assert ctx.get_input_value(ctx.graph.node("log"), "message") == "(5 + 3) * 2"

    def test_multi_output_default_access(self, builder, context):
        """Requesting y from a two-output node selects y."""
        builder.add("mouse", "getMousePosition")
        builder.add("log", "log")
        builder.connect("mouse", "y", "log", "message")
        ctx = context(builder.build())
        assert ctx.get_input_value(ctx.graph.node("log"), "message") == \
            "window.input.getMousePosition(false).y"

    def test_multi_output_custom_access(self, builder, context):
        builder.add("scale", "getScale")
        builder.add("log", "log")
        builder.connect("scale", "scaleY", "log", "message")
        ctx = context(builder.build())
        assert ctx.get_input_value(ctx.graph.node("log"), "message") == "this.gameObject.scale.y"

    def test_source_lookup(self, builder, context):
        builder.add("five", "number", value=5)
        builder.add("sum", "add")
        builder.connect("five", "value", "sum", "a")
        ctx = context(builder.build())
        src, src_def, port = ctx.source(ctx.graph.node("sum"), "a")
        assert src.id == "five"
        assert src_def.type == "number"
        assert port == "value"
        assert ctx.source(ctx.graph.node("sum"), "b") is None


class TestGuards:

    def test_data_cycle(self, builder, context):
        """Resolution that re-enters a node raises CyclicDataDependency."""
        builder.add("p", "add")
        builder.add("q", "add")
        builder.connect("p", "result", "q", "a")
        builder.connect("q", "result", "p", "a")
        builder.add("log", "log")
        builder.connect("p", "result", "log", "message")
        ctx = context(builder.build())
        with pytest.raises(CyclicDataDependency) as exc_info:
            ctx.get_input_value(ctx.graph.node("log"), "message")
        assert set(exc_info.value.node_ids) == {"p", "q"}

    def test_depth_limit(self, builder, context):
        previous = builder.add("a0", "add")
        for i in range(1, 6):
            current = builder.add(f"a{i}", "add")
            builder.connect(previous, "result", current, "a")
            previous = current
        builder.add("log", "log")
        builder.connect(previous, "result", "log", "message")
        ctx = context(builder.build(), CompilerSettings(max_depth=3))
        with pytest.raises(MaxDepthExceeded):
            ctx.get_input_value(ctx.graph.node("log"), "message")

    def _add_chain(self, builder, length):
        builder.add("s", "start")
        builder.add("set", "setProperty", value="total")
        builder.flow("s", "set")
        previous = builder.add("a0", "add")
        for i in range(1, length):
            current = builder.add(f"a{i}", "add")
            builder.connect(previous, "result", current, "a")
            previous = current
        builder.connect(previous, "result", "set", "value")
        return builder.build()

    def test_long_chain_with_default_settings(self, builder, compile_):
        with pytest.raises(MaxDepthExceeded) as exc_info:
            compile_(self._add_chain(builder, 200))
        assert exc_info.value.node_ids[0].startswith("a")

    def test_chain_within_default_limit_compiles(self, builder, compile_, body):
        source = compile_(self._add_chain(builder, 40))
        assert body(source, "start()")[0].startswith("        this.properties['total'] = ")

    def test_recursion_limit_reported_as_depth_error(self, builder, compile_):
        """A raised max_depth still fails with a CompileError, not RecursionError."""
        graph = self._add_chain(builder, sys.getrecursionlimit())
        with pytest.raises(MaxDepthExceeded) as exc_info:
            compile_(graph, CompilerSettings(max_depth=10 ** 6))
        assert isinstance(exc_info.value.__cause__, RecursionError)

    def test_connection_from_unknown_node(self, context):
        from behaviorgraph.core import Connection
        graph = Graph(
            nodes=[NodeInstance(id="log", type="log")],
            connections=[Connection("ghost", 0, "log", 1)],
        )
        ctx = context(graph)
        with pytest.raises(InvalidPortReference):
            ctx.get_input_value(graph.node("log"), "message")
