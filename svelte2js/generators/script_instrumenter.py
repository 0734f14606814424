"""Script instrumenter for Svelte2JS compiler

Pass B of code generation. Rewrites the component script so that every
top-level mutation of a variable shown in the markup notifies the
lifecycle object:

    count++            ->  (count++, lifecycle.update(["count"]))
    { count = n; ... } ->  { count = n, lifecycle.update(["count"]); ... }

The transform is pure: unchanged subtrees are shared with the input,
changed paths are copied, and the input tree is never mutated. A
rewritten node is not descended into.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional

from svelte2js.analyzers.reactivity import AnalysisResult, mutation_target, node_line
from svelte2js.core.context import CompilationContext
from svelte2js.core.js_parser import is_node, nodes, parse_expression
from svelte2js.core.reactivity_logger import DecisionKind
from svelte2js.core.scope import Scope


@dataclass(frozen=True)
class Rewrite:
    """Replacement for a node; descend=False keeps the walk out of it"""
    node: Any
    descend: bool = False


def shallow_copy(node: Any) -> Any:
    """Copy an ESTree node without copying its children"""
    clone = object.__new__(type(node))
    clone.__dict__.update(vars(node))
    return clone


class ScriptInstrumenter:
    """Injects change notifications into the component script"""

    def __init__(self, analysis: AnalysisResult, context: CompilationContext) -> None:
        """Initialize instrumenter

        Args:
            analysis: Reactivity analysis of the component
            context: Compilation context
        """
        self.analysis = analysis
        self.context = context
        self.current_scope: Optional[Scope] = analysis.root_scope

    def instrument(self, program: Any) -> Any:
        """Produce an instrumented copy of a Program

        Args:
            program: ESTree Program of the component script

        Returns:
            New Program (the input when nothing needed instrumenting)
        """
        self.current_scope = self.analysis.root_scope
        return self.transform(program)

    def transform(self, node: Any) -> Any:
        """Transform a node, tracking the scope active at it"""
        scope = self.analysis.node_to_scope.get(id(node))
        if scope is not None:
            self.current_scope = scope
        try:
            rewrite = self.rewrite(node)
            if rewrite is None:
                return self._transform_children(node)
            if rewrite.descend:
                return self._transform_children(rewrite.node)
            return rewrite.node
        finally:
            if scope is not None:
                self.current_scope = scope.parent

    def _transform_children(self, node: Any) -> Any:
        changes: Dict[str, Any] = {}
        for key, value in vars(node).items():
            if isinstance(value, list):
                items = [self.transform(item) if is_node(item) else item for item in value]
                if any(new is not old for new, old in zip(items, value)):
                    changes[key] = items
            elif is_node(value):
                new_value = self.transform(value)
                if new_value is not value:
                    changes[key] = new_value
        if not changes:
            return node
        clone = shallow_copy(node)
        for key, value in changes.items():
            setattr(clone, key, value)
        return clone

    def rewrite(self, node: Any) -> Optional[Rewrite]:
        """Decide the replacement of a node

        Returns:
            Rewrite for an instrumented mutation site, None to keep the node
        """
        target = mutation_target(node, self.current_scope, self.analysis.root_scope)
        if target is None:
            return None

        logger = self.context.logger
        if target not in self.analysis.will_use_in_template:
            logger.log(DecisionKind.NOT_IN_TEMPLATE, target,
                       "variable is not referenced by the markup", node_line(node))
            return None
        logger.log(DecisionKind.INSTRUMENTED, target,
                   f"{node.type} notifies the lifecycle object", node_line(node))

        notify = self.notify_call(target)
        if node.type == "UpdateExpression":
            return Rewrite(nodes.SequenceExpression([node, notify]))

        first, rest = node.body[0], node.body[1:]
        statement = nodes.ExpressionStatement(nodes.SequenceExpression([first.expression, notify]))
        block = shallow_copy(node)
        block.body = [statement] + list(rest)
        return Rewrite(block)

    def notify_call(self, name: str) -> Any:
        """Build the runtime hook call, e.g. lifecycle.update(["count"])"""
        runtime = self.context.options.runtime_name
        return parse_expression(f"{runtime}.update({json.dumps([name])})")
