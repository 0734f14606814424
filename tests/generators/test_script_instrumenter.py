"""Tests for script instrumenter"""

import pytest
from svelte2js.core.context import CompilationContext, CompilerOptions
from svelte2js.core.reactivity_logger import DecisionKind

try:
    from svelte2js.analyzers.reactivity import analyze
    from svelte2js.core.js_parser import node_to_dict
    from svelte2js.generators.js_printer import JsPrinter
    from svelte2js.generators.script_instrumenter import Rewrite, ScriptInstrumenter, shallow_copy
    from svelte2js.parser.template_parser import parse
except ImportError:
    pytest.skip("esprima not installed", allow_module_level=True)


def instrument(text, context=None):
    """Parse, analyze and instrument a component; returns (input, output, context)"""
    context = context or CompilationContext()
    ast = parse(text)
    analysis = analyze(ast, context)
    output = ScriptInstrumenter(analysis, context).instrument(ast.program)
    return ast.program, output, context


def printed(program):
    return JsPrinter().generate(program)


class TestScriptInstrumenter:
    """Test suite for ScriptInstrumenter"""

    def test_update_expression(self):
        """Test x++ is followed by a notification"""
        _, output, _ = instrument("<script>let count = 0; count++;</script><p>{count}</p>")
        assert printed(output) == 'let count = 0;\ncount++, lifecycle.update(["count"]);'

    def test_update_inside_expression(self):
        """Test a nested increment is parenthesized as a sequence"""
        _, output, _ = instrument(
            "<script>let n = 0; function f() { let x = n--; }</script><p>{n}</p>"
        )
        assert 'let x = (n--, lifecycle.update(["n"]));' in printed(output)

    def test_block_assignment(self):
        """Test the first assignment of a block is followed by a notification"""
        _, output, _ = instrument(
            "<script>let count = 0; function increment() { count += 1; log(count); }</script>"
            "<button on:click={increment}>{count}</button>"
        )
        assert printed(output) == (
            "let count = 0;\n"
            "function increment() {\n"
            '  count += 1, lifecycle.update(["count"]);\n'
            "  log(count);\n"
            "}"
        )

    def test_not_in_template(self):
        """Test mutations of variables the markup never shows stay untouched"""
        source = "<script>let hidden = 0; hidden++;</script><p>static</p>"
        program, output, context = instrument(source)
        assert output is program
        assert "lifecycle" not in printed(output)
        assert context.logger.symbols_of(DecisionKind.NOT_IN_TEMPLATE) == ["hidden"]

    def test_shadowed_not_instrumented(self):
        """Test a local increment is not a mutation site"""
        _, output, _ = instrument(
            "<script>let a = 0; function f() { let a = 1; a++; }</script><p>{a}</p>"
        )
        assert "lifecycle" not in printed(output)

    def test_replaced_subtree_not_descended(self):
        """Test statements after the instrumented one are left as written"""
        _, output, _ = instrument(
            "<script>let a = 0; function f() { a = 1; a++; }</script><p>{a}</p>"
        )
        text = printed(output)
        assert text.count("lifecycle.update") == 1
        assert "  a++;" in text

    def test_input_tree_untouched(self):
        """Test instrumentation produces a new tree"""
        source = "<script>let count = 0; function inc() { count++; }</script><p>{count}</p>"
        ast = parse(source)
        before = node_to_dict(ast.program)
        context = CompilationContext()
        analysis = analyze(ast, context)
        output = ScriptInstrumenter(analysis, context).instrument(ast.program)
        assert output is not ast.program
        assert node_to_dict(ast.program) == before
        assert "lifecycle" not in printed(ast.program)

    def test_structural_sharing(self):
        """Test unchanged statements are shared with the input"""
        program, output, _ = instrument(
            "<script>let count = 0; const label = 'x'; count++;</script><p>{count}</p>"
        )
        assert output.body[0] is program.body[0]
        assert output.body[1] is program.body[1]
        assert output.body[2] is not program.body[2]

    def test_custom_runtime_name(self):
        """Test the runtime object name option"""
        context = CompilationContext(options=CompilerOptions(runtime_name="component"))
        _, output, _ = instrument("<script>let c = 0; c++;</script><p>{c}</p>", context)
        assert 'component.update(["c"])' in printed(output)

    def test_instrumented_logged(self):
        """Test instrumented sites are logged"""
        _, _, context = instrument("<script>let c = 0; c++; c--;</script><p>{c}</p>")
        assert context.logger.symbols_of(DecisionKind.INSTRUMENTED) == ["c", "c"]

    def test_notify_call(self):
        """Test the hook call shape"""
        context = CompilationContext()
        ast = parse("<p>x</p>")
        instrumenter = ScriptInstrumenter(analyze(ast, context), context)
        assert JsPrinter().expression(instrumenter.notify_call("x")) == 'lifecycle.update(["x"])'


class TestRewriteHelpers:
    """Test suite for Rewrite and shallow_copy"""

    def test_rewrite_defaults_to_terminal(self):
        """Test rewrites do not descend unless asked"""
        assert Rewrite(node=None).descend is False

    def test_shallow_copy(self):
        """Test a copy shares children but not identity"""
        program = parse("<script>let a = 1;</script>").program
        clone = shallow_copy(program)
        assert clone is not program
        assert clone.body is program.body
        assert clone.type == "Program"
