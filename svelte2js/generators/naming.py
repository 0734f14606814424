"""Naming scheme for Svelte2JS compiler

Implements the synthetic variable naming convention of generated modules:
- Elements: <tag>_<n>
- Text and expression nodes: txt_<n>
- n comes from one counter shared by every node of a component, so names
  are unique and depend only on traversal order
- Names already used by the component (reserved) are never issued; the
  counter skips past them

Also provides JavaScript identifier validation and string quoting.
"""

import json
import re
from typing import Iterable, Optional, Set


class NamingScheme:
    """Generates synthetic JavaScript identifiers for DOM nodes"""

    TEXT_PREFIX = "txt"

    JS_KEYWORDS = {
        'await', 'break', 'case', 'catch', 'class', 'const', 'continue',
        'debugger', 'default', 'delete', 'do', 'else', 'enum', 'export',
        'extends', 'false', 'finally', 'for', 'function', 'if', 'implements',
        'import', 'in', 'instanceof', 'interface', 'let', 'new', 'null',
        'package', 'private', 'protected', 'public', 'return', 'static',
        'super', 'switch', 'this', 'throw', 'true', 'try', 'typeof', 'var',
        'void', 'while', 'with', 'yield',
    }

    _IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")

    def __init__(self, start: int = 1, reserved: Optional[Iterable[str]] = None) -> None:
        """Initialize naming scheme

        Args:
            start: First counter value
            reserved: Names the generated code must not declare
        """
        self._counter = start
        self.used: Set[str] = set(reserved or ())

    def _numbered(self, prefix: str) -> str:
        while True:
            name = f"{prefix}_{self._counter}"
            self._counter += 1
            if name not in self.used:
                self.used.add(name)
                return name

    def element_name(self, tag: str) -> str:
        """Next synthetic name for an element (e.g. "button_1")"""
        return self._numbered(tag)

    def text_name(self) -> str:
        """Next synthetic name for a text node (e.g. "txt_2")"""
        return self._numbered(self.TEXT_PREFIX)

    def free_name(self, base: str) -> str:
        """Claim base, or base_2, base_3 ... when it is already used

        Does not advance the node counter.
        """
        name = base
        suffix = 2
        while name in self.used:
            name = f"{base}_{suffix}"
            suffix += 1
        self.used.add(name)
        return name

    @staticmethod
    def is_valid_identifier(name: str) -> bool:
        """Check if a string is a usable JavaScript identifier

        Args:
            name: String to check

        Returns:
            True if name is an identifier and not a reserved word
        """
        return bool(NamingScheme._IDENTIFIER.match(name)) and name not in NamingScheme.JS_KEYWORDS

    @staticmethod
    def string_literal(text: str) -> str:
        """Quote text as a JavaScript string literal"""
        return json.dumps(text)
