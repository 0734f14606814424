"""Template parser for Svelte2JS compiler

Recursive-descent scanner over the raw component text. A single cursor
owned by the parser instance drives every parse_* method; each method
either consumes input and returns a node or leaves the cursor alone.

Block and expression bodies end at the first occurrence of their
closing delimiter. There is no nesting awareness: a "</script>" inside a
string in the script, or a "}" inside an object literal in markup, ends
the body early.
"""

import re
from typing import Callable, List, Optional

from svelte2js.core.errors import ParseError
from svelte2js.core.fragments import (
    Attribute,
    ComponentAST,
    Element,
    Expression,
    ExpressionValue,
    Fragment,
    QuotedValue,
    ScriptBlock,
    StyleBlock,
    Text,
)
from svelte2js.core.js_parser import parse_expression, parse_program

SCRIPT_OPEN = "<script>"
SCRIPT_CLOSE = "</script>"
STYLE_OPEN = "<style>"
STYLE_CLOSE = "</style>"

SELF_CLOSING_TAGS = frozenset({
    "area", "base", "br", "col", "command", "embed", "hr", "img",
    "input", "keygen", "link", "meta", "param", "source", "track", "wbr",
})

TAG_NAME = re.compile(r"[a-z]*")
ATTRIBUTE_NAME = re.compile(r"[^=\s>]*")
TEXT_CONTENT = re.compile(r"[^<{]*")
WHITESPACE = re.compile(r"\s*")


class TemplateParser:
    """Parses component text into a ComponentAST

    Not reentrant: construct one parser per input.

    Example:
        ast = TemplateParser("<p>{name}</p>").parse()
    """

    def __init__(self, text: str, locations: bool = False) -> None:
        """Initialize parser

        Args:
            text: Full component source
            locations: Attach line/column info to script nodes
        """
        self.text = text
        self.index = 0
        self.locations = locations
        self._script: Optional[ScriptBlock] = None
        self._style: Optional[StyleBlock] = None

    def parse(self) -> ComponentAST:
        """Parse the whole component

        Returns:
            Component AST with script and style hoisted out of the markup

        Raises:
            ParseError: If an expected delimiter is missing
            ExpressionSyntaxError: If embedded JavaScript is malformed
        """
        self.index = 0
        self._script = None
        self._style = None
        html = self.parse_fragments(lambda: not self.at_end())
        return ComponentAST(script=self._script, html=html, style=self._style)

    def parse_fragments(self, condition: Callable[[], bool]) -> List[Fragment]:
        """Parse fragments while condition holds, dropping empty results"""
        fragments = []
        while condition():
            fragment = self.parse_fragment()
            if fragment is not None:
                fragments.append(fragment)
        return fragments

    def parse_fragment(self) -> Optional[Fragment]:
        """Parse one fragment at the cursor

        Tries Script, Element, Expression, Text, Style in that order.
        Script and style blocks are hoisted onto the AST root, so a
        matched block yields None.
        """
        if self.matches(SCRIPT_OPEN):
            self.parse_script()
            return None
        if self.matches("<") and not self.matches(STYLE_OPEN):
            return self.parse_element()
        if self.matches("{"):
            return self.parse_expression()
        text = self.parse_text_content()
        if text is not None:
            return text
        if self.matches(STYLE_OPEN):
            self.parse_style()
        return None

    def parse_element(self) -> Element:
        """Parse <name attrs>children</name> or a void element"""
        self.advance("<")
        name = self.read_while(TAG_NAME)
        if not name:
            raise self.error("expecting tag name")
        attributes = self.parse_attribute_list()
        self.advance(">")

        if name in SELF_CLOSING_TAGS:
            return Element(name=name, attributes=attributes, children=[])

        end_tag = f"</{name}>"
        children = self.parse_fragments(
            lambda: not self.matches(end_tag) and not self.at_end()
        )
        self.advance(end_tag)
        return Element(name=name, attributes=attributes, children=children)

    def parse_script(self) -> None:
        """Parse the <script> block into the component's Program"""
        if self._script is not None:
            raise self.error("only one <script> block is allowed")
        body = self._read_block(SCRIPT_OPEN, SCRIPT_CLOSE)
        self._script = ScriptBlock(tree=parse_program(body, self.locations), source=body)

    def parse_style(self) -> None:
        """Parse the <style> block, keeping its text verbatim"""
        if self._style is not None:
            raise self.error("only one <style> block is allowed")
        self._style = StyleBlock(raw_text=self._read_block(STYLE_OPEN, STYLE_CLOSE))

    def _read_block(self, open_tag: str, close_tag: str) -> str:
        self.advance(open_tag)
        return self._read_until(close_tag)

    def parse_attribute_list(self) -> List[Attribute]:
        """Parse attributes up to (not including) the closing >"""
        attributes = []
        self.skip_whitespace()
        while not self.matches(">"):
            if self.matches("/>"):
                self.advance("/")
                break
            attributes.append(self.parse_attribute())
            self.skip_whitespace()
        return attributes

    def parse_attribute(self) -> Attribute:
        """Parse one quoted, expression or bare attribute"""
        name = self.read_while(ATTRIBUTE_NAME)
        if not name:
            raise self.error("expecting >")
        if self.matches('="'):
            return self.parse_quoted_attribute(name)
        if self.matches("="):
            return self.parse_expression_attribute(name)
        return Attribute(name=name, value=QuotedValue(""))

    def parse_quoted_attribute(self, name: str) -> Attribute:
        """Parse ="value" after an attribute name"""
        self.advance('="')
        value = self._read_until('"')
        return Attribute(name=name, value=QuotedValue(value))

    def parse_expression_attribute(self, name: str) -> Attribute:
        """Parse ={expression} after an attribute name

        A raw value starting with a quote is a string literal with the
        outer quotes stripped.
        """
        self.advance("={")
        raw = self._read_until("}")
        if raw.startswith(('"', "'")):
            return Attribute(name=name, value=ExpressionValue(literal=raw[1:-1]))
        return Attribute(name=name, value=ExpressionValue(tree=parse_expression(raw)))

    def parse_expression(self) -> Expression:
        """Parse a markup {expression}"""
        self.advance("{")
        source = self._read_until("}")
        return Expression(source_text=source, tree=parse_expression(source))

    def parse_text_content(self) -> Optional[Text]:
        """Parse text up to the next < or {; whitespace-only text yields None"""
        text = self.read_while(TEXT_CONTENT)
        if text.strip() == "":
            return None
        return Text(value=text)

    # Cursor helpers

    def _read_until(self, delimiter: str) -> str:
        """Read up to the first occurrence of delimiter and consume it"""
        end = self.text.find(delimiter, self.index)
        if end == -1:
            raise self.error(f"expecting {delimiter}")
        value = self.text[self.index:end]
        self.index = end
        self.advance(delimiter)
        return value

    def matches(self, string: str) -> bool:
        """Check if the text at the cursor starts with string"""
        return self.text.startswith(string, self.index)

    def advance(self, string: str) -> None:
        """Consume string at the cursor

        Raises:
            ParseError: If the text at the cursor is not string
        """
        if not self.matches(string):
            raise self.error(f"expecting {string}")
        self.index += len(string)

    def read_while(self, pattern: "re.Pattern[str]") -> str:
        """Consume the longest run at the cursor matching pattern"""
        match = pattern.match(self.text, self.index)
        self.index = match.end()
        return match.group(0)

    def skip_whitespace(self) -> None:
        self.read_while(WHITESPACE)

    def at_end(self) -> bool:
        return self.index >= len(self.text)

    def error(self, message: str) -> ParseError:
        """Build a ParseError located at the cursor"""
        consumed = self.text[:self.index]
        line = consumed.count("\n") + 1
        column = self.index - (consumed.rfind("\n") + 1) + 1
        return ParseError(message, self.index, line, column)


def parse(text: str, locations: bool = False) -> ComponentAST:
    """Parse component text

    Args:
        text: Component source
        locations: Attach line/column info to script nodes

    Returns:
        Component AST
    """
    return TemplateParser(text, locations).parse()
