"""Embedded JavaScript sub-parser for Svelte2JS compiler

Turns slices of component text (the script block, markup expressions,
expression-valued attributes) into ESTree nodes using esprima.
Esprima errors are re-raised as ExpressionSyntaxError so callers only
deal with compiler error types.
"""

from typing import Any, Dict

from svelte2js.core.errors import ExpressionSyntaxError

try:
    import esprima
    from esprima import nodes
    from esprima.error_handler import Error as EsprimaError
except ImportError:
    raise ImportError("esprima is required. Install with: pip install esprima")


def parse_program(source: str, locations: bool = False) -> nodes.Node:
    """Parse a script body into an ESTree Program

    Args:
        source: JavaScript program text
        locations: If True, attach range and loc info to every node

    Returns:
        Program node

    Raises:
        ExpressionSyntaxError: If the text is not valid JavaScript
    """
    options = {"range": True, "loc": True} if locations else None
    try:
        return esprima.parseScript(source, options)
    except EsprimaError as e:
        raise ExpressionSyntaxError(
            getattr(e, "description", None) or str(e),
            source,
            getattr(e, "lineNumber", None),
            getattr(e, "column", None),
        ) from e


def parse_expression(source: str) -> nodes.Node:
    """Parse text holding exactly one JavaScript expression

    Args:
        source: Expression text (e.g. "count * 2")

    Returns:
        Expression node

    Raises:
        ExpressionSyntaxError: If the text is malformed or is not a single expression
    """
    program = parse_program(source)
    if len(program.body) != 1 or program.body[0].type != "ExpressionStatement":
        raise ExpressionSyntaxError("expected a single expression", source)
    return program.body[0].expression


def is_node(value: Any) -> bool:
    """Check if a value is an ESTree node"""
    return isinstance(value, nodes.Node)


def node_to_dict(value: Any) -> Any:
    """Convert an ESTree node (or any value inside one) to JSON-able data

    Args:
        value: Node, list, location object or primitive

    Returns:
        Plain dicts, lists and primitives
    """
    if isinstance(value, list):
        return [node_to_dict(item) for item in value]
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if hasattr(value, "__dict__"):
        result: Dict[str, Any] = {}
        for key, item in vars(value).items():
            if key.startswith("_"):
                continue
            result[key] = node_to_dict(item)
        return result
    return str(value)
