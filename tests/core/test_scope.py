"""Tests for scope tree"""

import pytest
from svelte2js.core.scope import Scope, Symbol, find_owner


class TestScope:
    """Test suite for Scope"""

    def test_root_scope(self):
        """Test root scope is function-like and has depth 0"""
        root = Scope()
        assert root.parent is None
        assert root.is_function
        assert root.get_depth() == 0

    def test_child_registered_on_parent(self):
        """Test child scopes are linked both ways"""
        root = Scope()
        child = Scope(root)
        assert child.parent is root
        assert root.children == [child]
        assert child.get_depth() == 1

    def test_declare_and_has(self):
        """Test declaring a name"""
        scope = Scope()
        symbol = scope.declare("count", "let")
        assert isinstance(symbol, Symbol)
        assert symbol.name == "count"
        assert symbol.kind == "let"
        assert scope.has("count")
        assert not scope.has("other")

    def test_redeclaration_keeps_first(self):
        """Test redeclaring a name keeps the original symbol"""
        scope = Scope()
        first = scope.declare("x", "var")
        second = scope.declare("x", "function")
        assert first is second
        assert scope.symbols["x"].kind == "var"

    def test_has_is_local(self):
        """Test has ignores names declared in enclosing scopes"""
        root = Scope()
        root.declare("count", "let")
        inner = Scope(Scope(root))
        assert root.has("count")
        assert not inner.has("count")

    def test_shadowing(self):
        """Test inner declaration shadows outer one"""
        root = Scope()
        root.declare("x", "let")
        inner = Scope(root)
        inner.declare("x", "const")
        assert find_owner(inner, "x") is inner
        assert find_owner(Scope(inner), "x").symbols["x"].kind == "const"
        assert find_owner(root, "x").symbols["x"].kind == "let"

    def test_function_scope(self):
        """Test function_scope finds the nearest function-like scope"""
        root = Scope()
        fn = Scope(root, is_function=True)
        block = Scope(Scope(fn))
        assert block.function_scope() is fn
        assert Scope(root).function_scope() is root

    def test_names_in_declaration_order(self):
        """Test names iterates in declaration order"""
        scope = Scope()
        for name in ("b", "a", "c"):
            scope.declare(name, "let")
        assert list(scope.names()) == ["b", "a", "c"]


class TestFindOwner:
    """Test suite for find_owner"""

    @pytest.fixture
    def tree(self):
        """Root declaring count, a function declaring local, a block below it"""
        root = Scope()
        root.declare("count", "let")
        fn = Scope(root, is_function=True)
        fn.declare("local", "let")
        block = Scope(fn)
        return root, fn, block

    def test_owner_is_declaring_scope(self, tree):
        """Test the nearest declaring scope is returned"""
        root, fn, block = tree
        assert find_owner(block, "count") is root
        assert find_owner(block, "local") is fn

    def test_undeclared_name(self, tree):
        """Test undeclared names have no owner"""
        _, _, block = tree
        assert find_owner(block, "window") is None

    def test_none_inputs(self, tree):
        """Test None scope or name resolves to None"""
        root, _, _ = tree
        assert find_owner(None, "count") is None
        assert find_owner(root, None) is None
