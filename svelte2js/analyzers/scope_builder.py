"""Scope builder for Svelte2JS compiler

Walks the script Program once and builds the scope tree used by the
reactivity analyzer and the script instrumenter.

Scoping rules:
- Program -> root scope (function-like)
- Functions -> function scope mapped to the function node; params and
  the name of a named function expression live there, and the body
  block shares it
- Other blocks, for/for-in/for-of, switch and catch -> block scope
- var hoists to the nearest function scope; let/const/class bind in the
  current scope; function declarations bind in the enclosing scope
"""

from typing import Any, Dict, List, Tuple

from svelte2js.core.ast_visitor import ASTVisitor
from svelte2js.core.scope import Scope


def pattern_names(pattern: Any) -> List[str]:
    """Collect identifiers bound by a binding pattern

    Args:
        pattern: Identifier, ObjectPattern, ArrayPattern, RestElement or AssignmentPattern

    Returns:
        Bound names in source order
    """
    if pattern is None:
        return []
    if pattern.type == "Identifier":
        return [pattern.name]
    if pattern.type == "ObjectPattern":
        names = []
        for prop in pattern.properties:
            target = prop.argument if prop.type == "RestElement" else prop.value
            names.extend(pattern_names(target))
        return names
    if pattern.type == "ArrayPattern":
        names = []
        for element in pattern.elements:
            names.extend(pattern_names(element))
        return names
    if pattern.type == "RestElement":
        return pattern_names(pattern.argument)
    if pattern.type == "AssignmentPattern":
        return pattern_names(pattern.left)
    return []


class ScopeBuilder(ASTVisitor):
    """Builds a parent-linked scope tree from an ESTree Program"""

    def __init__(self) -> None:
        super().__init__()
        self.root_scope = Scope(is_function=True)
        self.current = self.root_scope
        self.node_to_scope: Dict[int, Scope] = {}

    def build(self, program: Any) -> Tuple[Scope, Dict[int, Scope]]:
        """Build scopes for a Program

        Args:
            program: ESTree Program node

        Returns:
            Tuple of (root scope, scopes keyed by id() of their opening node)
        """
        self.node_to_scope[id(program)] = self.root_scope
        self.generic_visit(program)
        return self.root_scope, self.node_to_scope

    def _push(self, node: Any, is_function: bool = False) -> Scope:
        scope = Scope(self.current, is_function=is_function)
        self.node_to_scope[id(node)] = scope
        self.current = scope
        return scope

    def _pop(self) -> None:
        self.current = self.current.parent

    def _declare_pattern(self, scope: Scope, pattern: Any, kind: str) -> None:
        for name in pattern_names(pattern):
            scope.declare(name, kind)

    def visit_VariableDeclaration(self, node: Any) -> None:
        target = self.current.function_scope() if node.kind == "var" else self.current
        for declarator in node.declarations:
            self._declare_pattern(target, declarator.id, node.kind)
        self.generic_visit(node)

    def visit_ClassDeclaration(self, node: Any) -> None:
        if node.id is not None:
            self.current.declare(node.id.name, "class")
        self.generic_visit(node)

    def visit_FunctionDeclaration(self, node: Any) -> None:
        if node.id is not None:
            self.current.declare(node.id.name, "function")
        self._visit_function(node)

    def visit_FunctionExpression(self, node: Any) -> None:
        self._visit_function(node)

    def visit_ArrowFunctionExpression(self, node: Any) -> None:
        self._visit_function(node)

    def _visit_function(self, node: Any) -> None:
        scope = self._push(node, is_function=True)
        if node.type == "FunctionExpression" and node.id is not None:
            scope.declare(node.id.name, "function")
        for param in node.params:
            self._declare_pattern(scope, param, "param")
        for param in node.params:
            self.visit(param)

        if node.body.type == "BlockStatement":
            for statement in node.body.body:
                self.visit(statement)
        else:
            self.visit(node.body)
        self._pop()

    def visit_BlockStatement(self, node: Any) -> None:
        self._push(node)
        self.generic_visit(node)
        self._pop()

    def visit_ForStatement(self, node: Any) -> None:
        self.visit_BlockStatement(node)

    def visit_ForInStatement(self, node: Any) -> None:
        self.visit_BlockStatement(node)

    def visit_ForOfStatement(self, node: Any) -> None:
        self.visit_BlockStatement(node)

    def visit_SwitchStatement(self, node: Any) -> None:
        self.visit_BlockStatement(node)

    def visit_CatchClause(self, node: Any) -> None:
        scope = self._push(node)
        self._declare_pattern(scope, node.param, "catch")
        self.generic_visit(node)
        self._pop()


def build_scopes(program: Any) -> Tuple[Scope, Dict[int, Scope]]:
    """Build the scope tree for a script Program

    Args:
        program: ESTree Program node

    Returns:
        Tuple of (root scope, scopes keyed by id() of their opening node)
    """
    return ScopeBuilder().build(program)
