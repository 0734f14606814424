"""Markup data model for Svelte2JS compiler

Fragments are the nodes of the markup tree produced by the template
parser. Script and style blocks are hoisted out of the fragment tree
onto the ComponentAST root.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from svelte2js.core.js_parser import node_to_dict


@dataclass
class QuotedValue:
    """Attribute value written as name="text" """
    text: str

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "QuotedValue", "text": self.text}


@dataclass
class ExpressionValue:
    """Attribute value written as name={...}

    Exactly one of tree and literal is set: a raw value wrapped in quotes
    is kept as a literal string, anything else is parsed.
    """
    tree: Any = None
    literal: Optional[str] = None

    @property
    def identifier(self) -> Optional[str]:
        """Name carried by the expression when it is a bare identifier"""
        if self.tree is not None and self.tree.type == "Identifier":
            return self.tree.name
        return None

    def to_dict(self) -> Dict[str, Any]:
        if self.tree is None:
            return {"type": "ExpressionValue", "literal": self.literal}
        return {"type": "ExpressionValue", "expression": node_to_dict(self.tree)}


AttributeValue = Union[QuotedValue, ExpressionValue]


@dataclass
class Attribute:
    """Element attribute"""
    name: str
    value: AttributeValue

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "Attribute", "name": self.name, "value": self.value.to_dict()}


@dataclass
class Text:
    """Literal text between tags"""
    value: str

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "Text", "value": self.value}


@dataclass
class Expression:
    """Markup interpolation {expression}"""
    source_text: str
    tree: Any

    @property
    def identifier(self) -> Optional[str]:
        """Name carried by the expression when it is a bare identifier"""
        if self.tree.type == "Identifier":
            return self.tree.name
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "Expression",
            "source": self.source_text,
            "expression": node_to_dict(self.tree),
        }


@dataclass
class Element:
    """HTML element with attributes and child fragments"""
    name: str
    attributes: List[Attribute] = field(default_factory=list)
    children: List["Fragment"] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "Element",
            "name": self.name,
            "attributes": [a.to_dict() for a in self.attributes],
            "children": [c.to_dict() for c in self.children],
        }


Fragment = Union[Element, Text, Expression]


@dataclass
class ScriptBlock:
    """The component's <script> block"""
    tree: Any
    source: str = ""


@dataclass
class StyleBlock:
    """The component's <style> block, kept verbatim"""
    raw_text: str


@dataclass
class ComponentAST:
    """Root of a parsed component"""
    script: Optional[ScriptBlock] = None
    html: List[Fragment] = field(default_factory=list)
    style: Optional[StyleBlock] = None

    @property
    def program(self) -> Any:
        """ESTree Program of the script block, or None"""
        return self.script.tree if self.script else None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for the inspection artifact"""
        return {
            "html": [f.to_dict() for f in self.html],
            "script": node_to_dict(self.script.tree) if self.script else None,
            "style": {"code": self.style.raw_text} if self.style else None,
        }
