"""Scope tree for Svelte2JS compiler

Models JavaScript lexical scoping for the component script:
- The program is the root scope and holds top-level declarations
- Functions open a function scope (target of var hoisting)
- Blocks, loops, switch and catch open block scopes (let/const/class)
- Scopes are parent-linked; owner lookup walks up the links
"""

from typing import Dict, Iterator, List, Optional


class Symbol:
    """A name declared in a scope"""

    def __init__(self, name: str, kind: str, scope_id: int) -> None:
        """Initialize symbol

        Args:
            name: Declared identifier
            kind: Declaration kind (var, let, const, function, class, param, catch)
            scope_id: Scope where symbol is declared
        """
        self.name = name
        self.kind = kind
        self.scope_id = scope_id

    def __repr__(self) -> str:
        return f"Symbol(name={self.name!r}, kind={self.kind!r}, scope_id={self.scope_id})"


class Scope:
    """Represents a lexical scope"""

    def __init__(self, parent: Optional["Scope"] = None, is_function: bool = False) -> None:
        """Initialize scope

        Args:
            parent: Parent scope (None for the root scope)
            is_function: True for the root scope and function scopes
        """
        self.parent = parent
        self.is_function = is_function or parent is None
        self.symbols: Dict[str, Symbol] = {}
        self.children: List["Scope"] = []
        if parent is not None:
            parent.children.append(self)

    def declare(self, name: str, kind: str) -> Symbol:
        """Declare a name in this scope

        Redeclaration keeps the first symbol, matching var semantics.

        Args:
            name: Identifier
            kind: Declaration kind

        Returns:
            Declared symbol
        """
        if name not in self.symbols:
            self.symbols[name] = Symbol(name, kind, id(self))
        return self.symbols[name]

    def has(self, name: str) -> bool:
        """Check if name is declared directly in this scope"""
        return name in self.symbols

    def function_scope(self) -> "Scope":
        """Nearest enclosing function scope (var hoisting target)"""
        current = self
        while not current.is_function:
            current = current.parent
        return current

    def names(self) -> Iterator[str]:
        """Iterate over names declared directly in this scope"""
        return iter(self.symbols)

    def get_depth(self) -> int:
        """Get nesting depth of this scope

        Returns:
            Depth (0 for root scope)
        """
        depth = 0
        current = self
        while current.parent:
            depth += 1
            current = current.parent
        return depth

    def __repr__(self) -> str:
        return f"Scope(depth={self.get_depth()}, names={sorted(self.symbols)})"


def find_owner(scope: Optional[Scope], name: Optional[str]) -> Optional[Scope]:
    """Find the nearest scope that declares a name

    Args:
        scope: Scope to start from
        name: Identifier to resolve

    Returns:
        Declaring scope, or None if the name is undeclared
    """
    if name is None:
        return None
    current = scope
    while current is not None:
        if name in current.symbols:
            return current
        current = current.parent
    return None
