"""Main CLI entry point for Svelte2JS compiler"""

import sys
import json
import argparse
import traceback
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from svelte2js.analyzers.reactivity import AnalysisResult, ReactivityAnalyzer
from svelte2js.core.context import CompilationContext, CompilerOptions
from svelte2js.core.errors import CompileError
from svelte2js.core.fragments import ComponentAST
from svelte2js.generators.module_emitter import ModuleEmitter
from svelte2js.generators.naming import NamingScheme
from svelte2js.parser.template_parser import TemplateParser


@dataclass
class CompileResult:
    """Artifacts of one compilation run"""
    js: str
    css: Optional[str]
    ast: ComponentAST
    analysis: AnalysisResult
    context: CompilationContext

    def ast_json(self) -> str:
        """Serialize the parsed component for inspection"""
        return json.dumps(self.ast.to_dict(), indent=2)


def compile_source(source: str, context: Optional[CompilationContext] = None) -> CompileResult:
    """Compile component text

    Args:
        source: Component source text
        context: Compilation context (defaults when omitted)

    Returns:
        Compile result with module source, style text and AST

    Raises:
        CompileError: On the first parse, syntax or shape error
    """
    context = context or CompilationContext()
    ast = TemplateParser(source, locations=context.options.locations).parse()
    analysis = ReactivityAnalyzer(context).analyze(ast)
    js = ModuleEmitter(context).generate(ast, analysis)
    css = ast.style.raw_text if ast.style is not None else None
    return CompileResult(js=js, css=css, ast=ast, analysis=analysis, context=context)


def compile_file(input_file: Path, options: Optional[CompilerOptions] = None) -> CompileResult:
    """Compile a component file

    Args:
        input_file: Path to the component source
        options: Compiler options

    Returns:
        Compile result

    Raises:
        FileNotFoundError: If input_file doesn't exist
        CompileError: On the first parse, syntax or shape error
    """
    if not input_file.exists():
        raise FileNotFoundError(f"Input file not found: {input_file}")

    with open(input_file, 'r', encoding='utf-8') as f:
        source = f.read()

    context = CompilationContext(input_file, options)
    return compile_source(source, context)


def write_outputs(result: CompileResult, output_dir: Path, output_name: str,
                  write_ast: bool = True) -> Dict[str, Path]:
    """Write compilation artifacts

    Args:
        result: Compile result
        output_dir: Directory for the artifacts
        output_name: Base file name of the artifacts
        write_ast: Also write the AST inspection file

    Returns:
        Dict of artifact kind ('js', 'css', 'ast') to written path
    """
    written: Dict[str, Path] = {}

    js_file = output_dir / f"{output_name}.js"
    js_file.write_text(result.js, encoding='utf-8')
    written['js'] = js_file

    if result.css is not None:
        css_file = output_dir / f"{output_name}.css"
        css_file.write_text(result.css, encoding='utf-8')
        written['css'] = css_file

    if write_ast:
        ast_file = output_dir / f"{output_name}.ast.json"
        ast_file.write_text(result.ast_json(), encoding='utf-8')
        written['ast'] = ast_file

    return written


def _identifier(value: str) -> str:
    """argparse type for options that become JavaScript identifiers"""
    if not NamingScheme.is_valid_identifier(value):
        raise argparse.ArgumentTypeError(f"not a valid JavaScript identifier: {value!r}")
    return value


def create_parser() -> argparse.ArgumentParser:
    """Create the command line parser"""
    parser = argparse.ArgumentParser(
        description='Svelte2JS Compiler - Convert single-file components to JavaScript modules',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  svelte2js App.svelte
  svelte2js App.svelte -o app --output-dir build/
  svelte2js App.svelte --event-prefix on: --runtime-name component
        """
    )

    parser.add_argument('input', type=Path, help='Input component file')
    parser.add_argument(
        '-o', '--output', type=str,
        help='Custom output name (default: input filename)'
    )
    parser.add_argument(
        '--output-dir', type=Path, default=Path.cwd(),
        help='Output directory (default: current directory)'
    )
    parser.add_argument(
        '--event-prefix', type=str, default='on:',
        help='Attribute prefix marking event bindings (default: on:)'
    )
    parser.add_argument(
        '--runtime-name', type=_identifier, default='lifecycle',
        help='Name of the lifecycle object in generated code (default: lifecycle)'
    )
    parser.add_argument(
        '--component-name', type=_identifier,
        help='Name of the exported factory (default: capitalized input filename)'
    )
    parser.add_argument(
        '--no-ast', action='store_true',
        help='Do not write the AST inspection file'
    )
    parser.add_argument(
        '--verbose', '-v', action='store_true',
        help='Print the reactivity summary'
    )
    return parser


def main(argv: Optional[Any] = None) -> None:
    """Main CLI entry point"""
    args = create_parser().parse_args(argv)

    input_file = Path(args.input)
    if not input_file.exists():
        print(f"Error: Input file not found: {input_file}", file=sys.stderr)
        sys.exit(1)

    output_dir = args.output_dir
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        print(f"Error: Cannot create output directory {output_dir}: {e}", file=sys.stderr)
        sys.exit(1)

    options = CompilerOptions(
        event_prefix=args.event_prefix,
        runtime_name=args.runtime_name,
        component_name=args.component_name,
        locations=args.verbose,
    )

    try:
        result = compile_file(input_file, options)
    except CompileError as e:
        print(f"Error: {input_file}: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception:
        print(f"Error compiling {input_file}:", file=sys.stderr)
        traceback.print_exc()
        sys.exit(1)

    output_name = args.output if args.output else input_file.stem
    for path in write_outputs(result, output_dir, output_name, write_ast=not args.no_ast).values():
        print(f"Generated: {path}")

    if args.verbose:
        print("\n" + result.context.logger.print_summary(), file=sys.stderr)


if __name__ == "__main__":
    main()
