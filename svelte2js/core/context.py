"""Compilation context for Svelte2JS compiler

Maintains state shared by the pipeline stages of one compilation run:
- Compiler options
- Reactivity decision logging
- Source file information
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from svelte2js.core.reactivity_logger import ReactivityLogger


@dataclass
class CompilerOptions:
    """User-configurable compiler settings"""
    event_prefix: str = "on:"
    runtime_name: str = "lifecycle"
    component_name: Optional[str] = None
    counter_start: int = 1
    locations: bool = False


class CompilationContext:
    """Context for one compilation run"""

    def __init__(self, source_path: Optional[Path] = None,
                 options: Optional[CompilerOptions] = None) -> None:
        """Initialize compilation context

        Args:
            source_path: Component file being compiled (None for in-memory text)
            options: Compiler options (defaults when omitted)
        """
        self.source_path = source_path
        self.options = options or CompilerOptions()
        self.logger = ReactivityLogger()

    @property
    def component_name(self) -> str:
        """Name of the generated factory function

        Returns:
            Explicit option, else the capitalized file stem, else "Component"
        """
        if self.options.component_name:
            return self.options.component_name
        if self.source_path is not None:
            stem = "".join(c if c.isalnum() or c == "_" else "_" for c in self.source_path.stem)
            if stem and not stem[0].isdigit():
                return stem[0].upper() + stem[1:]
        return "Component"
