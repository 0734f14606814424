"""Code generators for Svelte2JS compiler

Modules:
- DomGenerator: Pass A, create/update/destroy instruction lists
- ScriptInstrumenter: Pass B, change notifications in the script
- ModuleEmitter: Pass C, assembles the ES module
- JsPrinter: ESTree to JavaScript source
- NamingScheme: Synthetic variable names
"""

from svelte2js.generators.naming import NamingScheme
from svelte2js.generators.js_printer import JsPrinter, Precedence
from svelte2js.generators.dom_generator import (
    DomGenerator, GeneratedCode, GuardedInstruction, Instruction
)
from svelte2js.generators.script_instrumenter import Rewrite, ScriptInstrumenter
from svelte2js.generators.module_emitter import ModuleEmitter, generate

__all__ = [
    'NamingScheme',
    'JsPrinter',
    'Precedence',
    'DomGenerator',
    'GeneratedCode',
    'GuardedInstruction',
    'Instruction',
    'Rewrite',
    'ScriptInstrumenter',
    'ModuleEmitter',
    'generate',
]
