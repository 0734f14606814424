"""Reactivity analyzer for Svelte2JS compiler

Classifies the variables of a component:
- declared_variables: names declared directly in the script's root scope
- will_change: names mutated by a top-level-reachable mutation site
- will_use_in_template: names referenced by markup expressions
- referenced_names: every variable name the script or markup mentions,
  which generated code must not redeclare or shadow

Mutation sites have two shapes, shared with the script instrumenter:
1. x++ / x-- whose identifier is owned by the root scope
2. A block whose first statement is an assignment; here any declaring
   scope counts, not only the root scope
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Set

from svelte2js.analyzers.scope_builder import build_scopes
from svelte2js.core.ast_visitor import ASTVisitor, ScopeTrackingVisitor
from svelte2js.core.context import CompilationContext
from svelte2js.core.errors import MalformedReactiveShape
from svelte2js.core.fragments import ComponentAST, Element, Expression, ExpressionValue, Fragment
from svelte2js.core.reactivity_logger import DecisionKind
from svelte2js.core.scope import Scope, find_owner


@dataclass
class AnalysisResult:
    """Variable classification for one component"""
    declared_variables: Set[str] = field(default_factory=set)
    will_change: Set[str] = field(default_factory=set)
    will_use_in_template: Set[str] = field(default_factory=set)
    referenced_names: Set[str] = field(default_factory=set)
    root_scope: Scope = field(default_factory=lambda: Scope(is_function=True))
    node_to_scope: Dict[int, Scope] = field(default_factory=dict)


def node_line(node: Any) -> Optional[int]:
    """Source line of a node when locations were requested"""
    loc = getattr(node, "loc", None)
    return loc.start.line if loc is not None else None


def mutation_target(node: Any, current_scope: Optional[Scope], root_scope: Scope) -> Optional[str]:
    """Identify the variable mutated at a top-level mutation site

    Args:
        node: ESTree node being visited
        current_scope: Scope active at the node
        root_scope: Scope of the Program

    Returns:
        Mutated identifier, or None if the node is not a mutation site

    Raises:
        MalformedReactiveShape: If a block starts with an assignment to a non-identifier
    """
    if node.type == "UpdateExpression":
        argument = node.argument
        if argument.type == "Identifier" and find_owner(current_scope, argument.name) is root_scope:
            return argument.name
        return None

    if node.type == "BlockStatement" and node.body:
        first = node.body[0]
        if first.type != "ExpressionStatement" or first.expression.type != "AssignmentExpression":
            return None
        left = first.expression.left
        if left.type != "Identifier":
            raise MalformedReactiveShape(
                f"block assignment target must be an identifier, got {left.type}"
            )
        if find_owner(current_scope, left.name) is not None:
            return left.name
    return None


class ReferenceCollector(ASTVisitor):
    """Collects identifier names, skipping non-computed property keys"""

    def __init__(self) -> None:
        super().__init__()
        self.names: Set[str] = set()

    def visit_Identifier(self, node: Any) -> None:
        self.names.add(node.name)

    def visit_MemberExpression(self, node: Any) -> None:
        self.visit(node.object)
        if node.computed:
            self.visit(node.property)

    def visit_Property(self, node: Any) -> None:
        if node.computed:
            self.visit(node.key)
        self.visit(node.value)

    def visit_MethodDefinition(self, node: Any) -> None:
        self.visit_Property(node)


class MutationCollector(ScopeTrackingVisitor):
    """Collects top-level mutation targets from the script"""

    def __init__(self, root_scope: Scope, node_to_scope: Dict[int, Scope],
                 context: CompilationContext) -> None:
        super().__init__(root_scope, node_to_scope)
        self.context = context
        self.will_change: Set[str] = set()

    def enter(self, node: Any) -> None:
        target = mutation_target(node, self.current_scope, self.root_scope)
        if target is not None:
            self.will_change.add(target)
            self.context.logger.log(
                DecisionKind.MUTATION_DETECTED, target,
                f"{node.type} mutates '{target}'", node_line(node),
            )


class ReactivityAnalyzer:
    """Produces the AnalysisResult for a parsed component"""

    def __init__(self, context: Optional[CompilationContext] = None) -> None:
        """Initialize analyzer

        Args:
            context: Compilation context (a fresh one when omitted)
        """
        self.context = context or CompilationContext()

    def analyze(self, ast: ComponentAST) -> AnalysisResult:
        """Analyze a component

        Args:
            ast: Parsed component

        Returns:
            Analysis result

        Raises:
            MalformedReactiveShape: If a block-form mutation has a non-identifier target
        """
        result = AnalysisResult()
        program = ast.program

        if program is not None:
            result.root_scope, result.node_to_scope = build_scopes(program)
            result.declared_variables = set(result.root_scope.names())

            collector = MutationCollector(result.root_scope, result.node_to_scope, self.context)
            collector.visit(program)
            result.will_change = collector.will_change

        self._collect_template_references(ast.html, result.will_use_in_template)
        result.referenced_names = self._collect_all_references(ast)
        return result

    def _collect_all_references(self, ast: ComponentAST) -> Set[str]:
        collector = ReferenceCollector()
        if ast.program is not None:
            collector.visit(ast.program)
        for tree in _markup_trees(ast.html):
            collector.visit(tree)
        return collector.names

    def _collect_template_references(self, fragments: List[Fragment], names: Set[str]) -> None:
        """Record the immediate identifier of every markup expression

        Only a bare identifier is recorded; names nested inside larger
        expressions are not.
        """
        for fragment in fragments:
            if isinstance(fragment, Element):
                for attribute in fragment.attributes:
                    if isinstance(attribute.value, ExpressionValue) and attribute.value.identifier:
                        names.add(attribute.value.identifier)
                self._collect_template_references(fragment.children, names)
            elif isinstance(fragment, Expression) and fragment.identifier:
                names.add(fragment.identifier)


def _markup_trees(fragments: List[Fragment]) -> Iterator[Any]:
    """Expression trees of the markup, attributes before children"""
    for fragment in fragments:
        if isinstance(fragment, Element):
            for attribute in fragment.attributes:
                if isinstance(attribute.value, ExpressionValue) and attribute.value.tree is not None:
                    yield attribute.value.tree
            yield from _markup_trees(fragment.children)
        elif isinstance(fragment, Expression):
            yield fragment.tree


def analyze(ast: ComponentAST, context: Optional[CompilationContext] = None) -> AnalysisResult:
    """Analyze a component with a fresh analyzer"""
    return ReactivityAnalyzer(context).analyze(ast)
