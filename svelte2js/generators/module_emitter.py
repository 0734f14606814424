"""Module emitter for Svelte2JS compiler

Pass C of code generation. Combines the DOM instructions and the
instrumented script into one ES module:

    export default function App() {
      let button_1;
      <instrumented script>
      let target;
      const lifecycle = {
        create(mountTarget) { ... },
        update(changed) { ... },
        destroy() { ... },
      };
      return lifecycle;
    }
"""

from typing import List, Optional

from svelte2js.analyzers.reactivity import AnalysisResult
from svelte2js.core.context import CompilationContext
from svelte2js.core.errors import NameConflict
from svelte2js.core.fragments import ComponentAST
from svelte2js.generators.dom_generator import DomGenerator, GeneratedCode, Instruction
from svelte2js.generators.js_printer import JsPrinter
from svelte2js.generators.naming import NamingScheme
from svelte2js.generators.script_instrumenter import ScriptInstrumenter

INDENT = "  "


class ModuleEmitter:
    """Emits the complete JavaScript module of a component"""

    def __init__(self, context: Optional[CompilationContext] = None) -> None:
        """Initialize module emitter

        Args:
            context: Compilation context (a fresh one when omitted)
        """
        self.context = context or CompilationContext()
        self.printer = JsPrinter(INDENT)

    def generate(self, ast: ComponentAST, analysis: AnalysisResult) -> str:
        """Generate module source

        Args:
            ast: Parsed component
            analysis: Reactivity analysis of the component

        Returns:
            Module source text, identical for identical inputs

        Raises:
            NameConflict: If the component declares or references the runtime name
        """
        runtime = self.context.options.runtime_name
        if runtime in analysis.declared_variables or runtime in analysis.referenced_names:
            raise NameConflict(
                f"'{runtime}' is the lifecycle object name; rename the variable "
                f"or pick another name with --runtime-name"
            )
        code = DomGenerator(analysis, self.context).generate(ast.html)
        script = None
        if ast.program is not None:
            script = ScriptInstrumenter(analysis, self.context).instrument(ast.program)
        return self.assemble(code, script)

    def assemble(self, code: GeneratedCode, script=None) -> str:
        """Assemble instruction lists and script into the factory function

        Args:
            code: Instruction lists from the DOM generator
            script: Instrumented Program, or None

        Returns:
            Module source text
        """
        runtime = self.context.options.runtime_name
        lines = []

        if self.context.source_path is not None:
            lines.append(f"// Auto-generated from {self.context.source_path.name}")
        lines.append("// Svelte2JS Compiler")
        lines.append("")
        lines.append(f"export default function {self.context.component_name}() {{")

        for variable in code.variables:
            lines.append(f"{INDENT}let {variable};")

        if script is not None and script.body:
            lines.append(self.printer.program(script, level=1))

        lines.append(f"{INDENT}let {code.root};")
        lines.append(f"{INDENT}const {runtime} = {{")
        lines.append(f"{INDENT * 2}create({code.mount_param}) {{")
        lines.append(f"{INDENT * 3}{code.root} = {code.mount_param};")
        lines.extend(self._block(code.create, 3))
        lines.append(f"{INDENT * 2}}},")

        lines.append(f"{INDENT * 2}update({code.changed_param}) {{")
        for guarded in code.update:
            guard = NamingScheme.string_literal(guarded.guard)
            lines.append(f"{INDENT * 3}if ({code.changed_param}.includes({guard})) {{")
            lines.extend(self._block([guarded.instruction], 4))
            lines.append(f"{INDENT * 3}}}")
        lines.append(f"{INDENT * 2}}},")

        lines.append(f"{INDENT * 2}destroy() {{")
        lines.extend(self._block(code.destroy, 3))
        lines.append(f"{INDENT * 2}}},")
        lines.append(f"{INDENT}}};")
        lines.append(f"{INDENT}return {runtime};")
        lines.append("}")

        return "\n".join(lines) + "\n"

    def _block(self, instructions: List[Instruction], level: int) -> List[str]:
        return [INDENT * level + self.render(instruction) for instruction in instructions]

    def render(self, instruction: Instruction) -> str:
        """Render one instruction as a JavaScript statement"""
        method = getattr(self, f"_render_{instruction.__class__.__name__}")
        return method(instruction)

    def _render_CreateElement(self, ins) -> str:
        return f"{ins.variable} = document.createElement({NamingScheme.string_literal(ins.tag)});"

    def _render_CreateText(self, ins) -> str:
        return f"{ins.variable} = document.createTextNode({NamingScheme.string_literal(ins.text)});"

    def _render_CreateTextFromExpression(self, ins) -> str:
        return f"{ins.variable} = document.createTextNode({ins.source});"

    def _render_AppendChild(self, ins) -> str:
        return f"{ins.parent}.appendChild({ins.child});"

    def _render_RemoveChild(self, ins) -> str:
        return f"{ins.parent}.removeChild({ins.child});"

    def _render_AddEventListener(self, ins) -> str:
        return f"{ins.target}.addEventListener({NamingScheme.string_literal(ins.event)}, {ins.handler});"

    def _render_RemoveEventListener(self, ins) -> str:
        return f"{ins.target}.removeEventListener({NamingScheme.string_literal(ins.event)}, {ins.handler});"

    def _render_SetTextData(self, ins) -> str:
        return f"{ins.variable}.data = {ins.source};"


def generate(ast: ComponentAST, analysis: AnalysisResult,
             context: Optional[CompilationContext] = None) -> str:
    """Generate module source for an analyzed component

    Args:
        ast: Parsed component
        analysis: Reactivity analysis of the component
        context: Compilation context

    Returns:
        Module source text
    """
    return ModuleEmitter(context).generate(ast, analysis)
