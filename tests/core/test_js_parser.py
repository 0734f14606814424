"""Tests for the embedded JavaScript sub-parser"""

import json

import pytest
from svelte2js.core.errors import CompileError, ExpressionSyntaxError

try:
    from svelte2js.core.js_parser import is_node, node_to_dict, parse_expression, parse_program
except ImportError:
    pytest.skip("esprima not installed", allow_module_level=True)


class TestParseProgram:
    """Test suite for parse_program"""

    def test_program(self):
        """Test parsing a script body"""
        program = parse_program("let count = 0;\nfunction inc() { count++; }")
        assert program.type == "Program"
        assert [stmt.type for stmt in program.body] == ["VariableDeclaration", "FunctionDeclaration"]

    def test_empty_program(self):
        """Test an empty script is an empty Program"""
        assert parse_program("").body == []

    def test_locations(self):
        """Test line info is attached when requested"""
        program = parse_program("let a = 1;\nlet b = 2;", locations=True)
        assert program.body[1].loc.start.line == 2

    def test_no_locations_by_default(self):
        """Test location info is absent by default"""
        program = parse_program("let a = 1;")
        assert getattr(program.body[0], "loc", None) is None

    def test_syntax_error(self):
        """Test esprima errors become ExpressionSyntaxError"""
        with pytest.raises(ExpressionSyntaxError) as exc_info:
            parse_program("let = ;")
        error = exc_info.value
        assert isinstance(error, CompileError)
        assert error.source == "let = ;"
        assert error.line == 1
        assert "Syntax error" in str(error)


class TestParseExpression:
    """Test suite for parse_expression"""

    def test_identifier(self):
        """Test parsing a bare identifier"""
        node = parse_expression("count")
        assert node.type == "Identifier"
        assert node.name == "count"

    def test_binary(self):
        """Test parsing a compound expression"""
        node = parse_expression("count * 2")
        assert node.type == "BinaryExpression"
        assert node.operator == "*"

    def test_surrounding_whitespace(self):
        """Test whitespace around the expression is accepted"""
        assert parse_expression("  name  ").name == "name"

    def test_empty_rejected(self):
        """Test an empty slice is not an expression"""
        with pytest.raises(ExpressionSyntaxError, match="expected a single expression"):
            parse_expression("")

    def test_statement_rejected(self):
        """Test a declaration is not an expression"""
        with pytest.raises(ExpressionSyntaxError):
            parse_expression("let x = 1")

    def test_two_statements_rejected(self):
        """Test more than one statement is rejected"""
        with pytest.raises(ExpressionSyntaxError):
            parse_expression("a; b")

    def test_malformed(self):
        """Test malformed expression text"""
        with pytest.raises(ExpressionSyntaxError):
            parse_expression("count +")


class TestNodeHelpers:
    """Test suite for is_node and node_to_dict"""

    def test_is_node(self):
        """Test node detection"""
        assert is_node(parse_expression("x"))
        assert not is_node("x")
        assert not is_node(None)
        assert not is_node({"type": "Identifier"})

    def test_node_to_dict(self):
        """Test serialization of a node tree"""
        data = node_to_dict(parse_expression("a + 1"))
        assert data["type"] == "BinaryExpression"
        assert data["left"]["type"] == "Identifier"
        assert data["left"]["name"] == "a"
        assert data["right"]["raw"] == "1"

    def test_node_to_dict_is_json(self):
        """Test serialized data is JSON-encodable, locations included"""
        program = parse_program("let [a, b] = [1, 2];", locations=True)
        text = json.dumps(node_to_dict(program))
        assert '"ArrayPattern"' in text
