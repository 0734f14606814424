"""AST visitor base classes for Svelte2JS compiler

Provides a visitor pattern for traversing ESTree nodes produced by
esprima. Dispatch is on the ESTree ``type`` string because several
esprima node classes share one type (e.g. StaticMemberExpression and
ComputedMemberExpression are both MemberExpression).
"""

from abc import ABC
from typing import Any, Dict, List, Optional

from svelte2js.core.js_parser import is_node
from svelte2js.core.scope import Scope

def get_children(node: Any) -> List[Any]:
    """Get all child nodes of a node in field order

    Args:
        node: ESTree node

    Returns:
        List of child nodes
    """
    children = []
    if hasattr(node, "__dict__"):
        for value in vars(node).values():
            if isinstance(value, list):
                children.extend(item for item in value if is_node(item))
            elif is_node(value):
                children.append(value)
    return children


class ASTVisitor(ABC):
    """Base visitor for ESTree traversal

    Override visit_<Type> methods to handle specific node types.
    Call self.generic_visit(node) to continue traversal.
    """

    def visit(self, node: Any) -> Any:
        """Visit a node using double-dispatch on its ESTree type

        Args:
            node: ESTree node to visit

        Returns:
            Result from visit method (often None)
        """
        method = getattr(self, f"visit_{node.type}", self.generic_visit)
        return method(node)

    def generic_visit(self, node: Any) -> None:
        """Default visitor - visit all child nodes

        Args:
            node: ESTree node
        """
        for child in get_children(node):
            self.visit(child)


class ScopeTrackingVisitor(ASTVisitor):
    """Visitor that follows the scope tree while walking

    On entry to a node present in the node-to-scope map the current
    scope switches to the mapped scope; on exit it reverts to that
    scope's parent. Subclasses implement enter(node).
    """

    def __init__(self, root_scope: Scope, node_to_scope: Dict[int, Scope]) -> None:
        """Initialize visitor

        Args:
            root_scope: Scope of the Program node
            node_to_scope: Scopes keyed by id() of the node opening them
        """
        super().__init__()
        self.root_scope = root_scope
        self.node_to_scope = node_to_scope
        self.current_scope: Optional[Scope] = root_scope

    def visit(self, node: Any) -> Any:
        scope = self.node_to_scope.get(id(node))
        if scope is not None:
            self.current_scope = scope
        try:
            if self.enter(node) is not False:
                super().visit(node)
        finally:
            if scope is not None:
                self.current_scope = scope.parent

    def enter(self, node: Any) -> Optional[bool]:
        """Hook called on entry to every node

        Returns:
            False to skip the node's children
        """
        return None
