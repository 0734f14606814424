"""Error types for Svelte2JS compiler

Every error is terminal for a compilation run: the first one raised
aborts the pipeline and no partial output is produced.
"""

from typing import Optional


class CompileError(Exception):
    """Base class for all compiler errors"""


class ParseError(CompileError):
    """Expected delimiter or token absent at the parser cursor"""

    def __init__(
        self,
        message: str,
        position: int = 0,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ) -> None:
        """Initialize parse error

        Args:
            message: Description of what was expected
            position: Cursor offset into the component text
            line: 1-based line of the cursor
            column: 1-based column of the cursor
        """
        self.message = message
        self.position = position
        self.line = line
        self.column = column
        location = f" (line {line}, column {column})" if line is not None else ""
        super().__init__(f"Parse error: {message}{location}")


class ExpressionSyntaxError(CompileError):
    """Embedded JavaScript text could not be parsed"""

    def __init__(
        self,
        description: str,
        source: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ) -> None:
        """Initialize expression syntax error

        Args:
            description: Parser error description
            source: JavaScript text that failed to parse
            line: Line inside the embedded text
            column: Column inside the embedded text
        """
        self.description = description
        self.source = source
        self.line = line
        self.column = column
        location = f" at {line}:{column}" if line is not None else ""
        super().__init__(f"Syntax error{location}: {description}")


class MalformedReactiveShape(CompileError):
    """Block-form mutation whose assignment target is not an identifier"""


class InvalidEventHandler(CompileError):
    """Event binding whose value is not a bare identifier"""


class NameConflict(CompileError):
    """Component declares a name the generated module must own"""
