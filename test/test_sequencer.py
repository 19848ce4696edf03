import pytest

from behaviorgraph.config import CompilerSettings
from behaviorgraph.core import NodeDefinition
from behaviorgraph.errors import FlowCycleError, InvalidPortReference


class TestFlowOrdering:

    def test_statements_follow_flow(self, builder, compile_, body):
        """A → B → C emits A's statement, then B's, then C's."""
        builder.add("s", "start")
        builder.add("a", "log", literals={"message": "A"})
        builder.add("b", "log", literals={"message": "B"})
        builder.add("c", "log", literals={"message": "C"})
        builder.flow("s", "a", "b", "c")
        source = compile_(builder.build())
        assert body(source, "start()") == [
            "        console.log('A');",
            "        console.log('B');",
            "        console.log('C');",
        ]

    def test_node_order_does_not_change_flow_order(self, make_builder, compile_, body):
        b = make_builder()
        b.add("c", "log", literals={"message": "C"})
        b.add("a", "log", literals={"message": "A"})
        b.add("s", "start")
        b.flow("s", "a", "c")
        assert body(compile_(b.build()), "start()") == [
            "        console.log('A');",
            "        console.log('C');",
        ]

    def test_empty_text_continues_walk(self, library, builder, compile_, body):
        """A node that emits nothing still passes the flow on."""
        library.register(NodeDefinition(
            type="marker", inputs=("flow",), outputs=("flow",), code_gen=lambda node, ctx: "",
        ))
        builder.add("s", "start")
        builder.add("x", "comment", value="first")
        builder.add("m", "marker")
        builder.add("y", "log", literals={"message": "after"})
        builder.flow("s", "x", "m", "y")
        assert body(compile_(builder.build()), "start()") == [
            "        // first",
            "        console.log('after');",
        ]

    def test_multi_line_statement_indented(self, builder, compile_, body):
        builder.add("s", "start")
        builder.add("move", "setPosition", literals={"x": 10, "y": 20})
        builder.flow("s", "move")
        assert body(compile_(builder.build()), "start()") == [
            "        this.gameObject.position.x = 10;",
            "        this.gameObject.position.y = 20;",
        ]


class TestBranches:

    def test_each_branch_in_its_own_block(self, builder, compile_, body):
        builder.add("s", "start")
        builder.add("check", "if", literals={"condition": True})
        builder.add("t", "log", literals={"message": "T"})
        builder.add("f", "log", literals={"message": "F"})
        builder.flow("s", "check")
        builder.connect("check", "true", "t", "flow")
        builder.connect("check", "false", "f", "flow")
        assert body(compile_(builder.build()), "start()") == [
            "        if (true) {",
            "            console.log('T');",
            "        } else {",
            "            console.log('F');",
            "        }",
        ]

    def test_unconnected_false_branch_omitted(self, builder, compile_, body):
        builder.add("s", "start")
        builder.add("check", "if")
        builder.add("t", "log", literals={"message": "T"})
        builder.flow("s", "check")
        builder.connect("check", "true", "t", "flow")
        lines = body(compile_(builder.build()), "start()")
        assert lines == [
            "        if (false) {",
            "            console.log('T');",
            "        }",
        ]
        assert not any("else" in line for line in lines)

    def test_empty_true_branch_still_emitted(self, builder, compile_, body):
        builder.add("s", "start")
        builder.add("check", "if")
        builder.add("f", "log", literals={"message": "F"})
        builder.flow("s", "check")
        builder.connect("check", "false", "f", "flow")
        assert body(compile_(builder.build()), "start()") == [
            "        if (false) {",
            "        } else {",
            "            console.log('F');",
            "        }",
        ]

    def test_condition_from_comparison(self, builder, compile_, body):
        builder.add("s", "start")
        builder.add("check", "if")
        builder.add("cmp", "greaterThan", literals={"b": 10})
        builder.add("angle", "getAngle")
        builder.add("t", "log", literals={"message": "big"})
        builder.flow("s", "check")
        builder.connect("cmp", "result", "check", "condition")
        builder.connect("angle", "angle", "cmp", "a")
        builder.connect("check", "true", "t", "flow")
        assert body(compile_(builder.build()), "start()")[0] == \
            "        if (this.gameObject.angle > 10) {"


class TestWrappedBlocks:

    def test_repeat_wraps_downstream_chain(self, builder, compile_, body):
        builder.add("s", "start")
        builder.add("rep", "repeat", literals={"count": 3})
        builder.add("a", "log", literals={"message": "tick"})
        builder.add("b", "log", literals={"message": "tock"})
        builder.flow("s", "rep", "a", "b")
        assert body(compile_(builder.build()), "start()") == [
            "        for (let i = 0; i < 3; i++) {",
            "            console.log('tick');",
            "            console.log('tock');",
            "        }",
        ]


class TestEntryScope:

    def test_delta_time_inside_loop(self, builder, compile_, body):
        builder.add("tick", "loop")
        builder.add("log", "log")
        builder.flow("tick", "log")
        builder.connect("tick", "deltaTime", "log", "message")
        assert body(compile_(builder.build()), "loop(deltaTime)") == ["        console.log(deltaTime);"]

    def test_delta_time_outside_loop_rejected(self, builder, compile_):
        builder.add("s", "start")
        builder.add("tick", "loop")
        builder.add("log", "log")
        builder.flow("s", "log")
        builder.connect("tick", "deltaTime", "log", "message")
        with pytest.raises(InvalidPortReference) as exc_info:
            compile_(builder.build())
        assert exc_info.value.node_ids == ("tick",)


class TestMemoization:

    def _random_twice(self, builder):
        builder.add("s", "start")
        builder.add("rnd", "random")
        builder.add("sum", "add")
        builder.add("log", "log")
        builder.flow("s", "log")
        builder.connect("rnd", "result", "sum", "a")
        builder.connect("rnd", "result", "sum", "b")
        builder.connect("sum", "result", "log", "message")
        return builder.build()

    def test_shared_source_bound_once(self, builder, compile_, body):
        """A non-direct source read twice in one statement is evaluated once."""
        assert body(compile_(self._random_twice(builder)), "start()") == [
            "        const _random1 = (Math.random() * (1 - 0) + 0);",
            "        console.log(_random1 + _random1);",
        ]

    def test_memoization_disabled(self, builder, compile_, body):
        settings = CompilerSettings(memoize="none")
        assert body(compile_(self._random_twice(builder), settings), "start()") == [
            "        console.log((Math.random() * (1 - 0) + 0) + (Math.random() * (1 - 0) + 0));",
        ]

    def test_no_binding_across_statements(self, builder, compile_, body):
        builder.add("s", "start")
        builder.add("rnd", "random")
        builder.add("a", "log")
        builder.add("b", "log")
        builder.flow("s", "a", "b")
        builder.connect("rnd", "result", "a", "message")
        builder.connect("rnd", "result", "b", "message")
        assert body(compile_(builder.build()), "start()") == [
            "        console.log((Math.random() * (1 - 0) + 0));",
            "        console.log((Math.random() * (1 - 0) + 0));",
        ]

    def test_composite_source_bound_once(self, builder, compile_, body):
        builder.add("s", "start")
        builder.add("vec", "vector2", literals={"x": 1, "y": 2})
        builder.add("move", "setPosition")
        builder.flow("s", "move")
        builder.connect("vec", "x", "move", "x")
        builder.connect("vec", "y", "move", "y")
        assert body(compile_(builder.build()), "start()") == [
            "        const _vector21 = new Vector2(1, 2);",
            "        this.gameObject.position.x = _vector21.x;",
            "        this.gameObject.position.y = _vector21.y;",
        ]


class TestFlowCycles:

    def test_revisit_on_one_path(self, builder, context):
        """Walking a flow loop raises instead of recursing forever."""
        builder.add("a", "log", literals={"message": "A"})
        builder.add("b", "log", literals={"message": "B"})
        builder.flow("a", "b", "a")
        ctx = context(builder.build())
        with pytest.raises(FlowCycleError) as exc_info:
            ctx.sequencer.compile_chain(ctx.graph.node("a"), 0)
        assert exc_info.value.node_ids == ("a",)
