"""Test CLI main module"""

import json
import subprocess
import sys
from pathlib import Path

import pytest
from svelte2js.core.context import CompilationContext, CompilerOptions
from svelte2js.core.errors import ParseError

try:
    from svelte2js.cli.main import compile_file, compile_source, create_parser, main, write_outputs
except ImportError:
    pytest.skip("esprima not installed", allow_module_level=True)


PROJECT_ROOT = Path(__file__).resolve().parents[2]

COUNTER = """\
<script>
  let count = 0;
  function increment() { count += 1 }
</script>

<button on:click={increment}>{count}</button>

<style>
  button { font-size: 2em; }
</style>
"""


@pytest.fixture
def component(tmp_path):
    """Counter component written to disk"""
    path = tmp_path / "counter.svelte"
    path.write_text(COUNTER, encoding="utf-8")
    return path


def run_cli(*args):
    return subprocess.run(
        [sys.executable, "-m", "svelte2js.cli.main", *map(str, args)],
        capture_output=True,
        text=True,
        cwd=PROJECT_ROOT,
    )


class TestCompileFunctions:
    """Test suite for the compile entry points"""

    def test_compile_source(self):
        """Test compiling in-memory text"""
        result = compile_source(COUNTER)
        assert "export default function Component() {" in result.js
        assert result.css == "\n  button { font-size: 2em; }\n"
        assert "count" in result.analysis.will_change
        assert result.context.component_name == "Component"

    def test_compile_source_without_style(self):
        """Test css is None when there is no style block"""
        assert compile_source("<p>x</p>").css is None

    def test_compile_file(self, component):
        """Test compiling a file names the factory after it"""
        result = compile_file(component)
        assert "// Auto-generated from counter.svelte" in result.js
        assert "export default function Counter() {" in result.js
        assert 'lifecycle.update(["count"])' in result.js

    def test_compile_file_options(self, component):
        """Test options reach the generated code"""
        options = CompilerOptions(runtime_name="rt", component_name="Clicker")
        result = compile_file(component, options)
        assert "export default function Clicker() {" in result.js
        assert "return rt;" in result.js

    def test_missing_file_raises_error(self, tmp_path):
        """Test that missing file raises error"""
        with pytest.raises(FileNotFoundError):
            compile_file(tmp_path / "nonexistent.svelte")

    def test_compile_error_propagates(self):
        """Test parse errors surface unchanged"""
        with pytest.raises(ParseError):
            compile_source("<p>unclosed", CompilationContext())

    def test_ast_json(self):
        """Test the inspection artifact"""
        data = json.loads(compile_source(COUNTER).ast_json())
        assert data["html"][0]["name"] == "button"
        assert data["script"]["type"] == "Program"
        assert data["style"]["code"].strip() == "button { font-size: 2em; }"


class TestWriteOutputs:
    """Test suite for write_outputs"""

    def test_all_artifacts(self, component, tmp_path):
        """Test js, css and ast files are written"""
        out = tmp_path / "out"
        out.mkdir()
        written = write_outputs(compile_file(component), out, "counter")
        assert set(written) == {"js", "css", "ast"}
        assert (out / "counter.js").read_text(encoding="utf-8").startswith("// Auto-generated")
        assert (out / "counter.css").read_text(encoding="utf-8") == "\n  button { font-size: 2em; }\n"
        json.loads((out / "counter.ast.json").read_text(encoding="utf-8"))

    def test_no_css_without_style(self, tmp_path):
        """Test no stylesheet is written when there is no style block"""
        written = write_outputs(compile_source("<p>x</p>"), tmp_path, "plain", write_ast=False)
        assert set(written) == {"js"}
        assert not (tmp_path / "plain.css").exists()
        assert not (tmp_path / "plain.ast.json").exists()


class TestCliMain:
    """Test suite for CLI main"""

    def test_parser_defaults(self):
        """Test argument defaults"""
        args = create_parser().parse_args(["App.svelte"])
        assert args.event_prefix == "on:"
        assert args.runtime_name == "lifecycle"
        assert args.component_name is None
        assert not args.no_ast
        assert not args.verbose

    def test_parser_rejects_bad_identifier(self):
        """Test identifier options are validated"""
        with pytest.raises(SystemExit):
            create_parser().parse_args(["App.svelte", "--runtime-name", "not-valid"])

    def test_main_writes_files(self, component, tmp_path, capsys):
        """Test main writes artifacts and reports them"""
        out = tmp_path / "build"
        main([str(component), "--output-dir", str(out), "-o", "app"])
        captured = capsys.readouterr()
        assert "Generated:" in captured.out
        assert (out / "app.js").exists()
        assert (out / "app.css").exists()
        assert (out / "app.ast.json").exists()

    def test_main_verbose(self, component, tmp_path, capsys):
        """Test verbose mode prints the reactivity summary"""
        main([str(component), "--output-dir", str(tmp_path), "--no-ast", "--verbose"])
        captured = capsys.readouterr()
        assert "=== Reactivity Summary ===" in captured.err
        assert "Instrumented: count" in captured.err
        assert not (tmp_path / "counter.ast.json").exists()

    def test_main_missing_file(self, tmp_path, capsys):
        """Test a missing input exits with status 1"""
        with pytest.raises(SystemExit) as exc_info:
            main([str(tmp_path / "missing.svelte")])
        assert exc_info.value.code == 1
        assert "Input file not found" in capsys.readouterr().err

    def test_main_compile_error(self, tmp_path, capsys):
        """Test a compile error exits with status 1 and no output"""
        bad = tmp_path / "bad.svelte"
        bad.write_text("<div><p>x</div>", encoding="utf-8")
        with pytest.raises(SystemExit) as exc_info:
            main([str(bad), "--output-dir", str(tmp_path)])
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err
        assert not (tmp_path / "bad.js").exists()

    def test_module_invocation(self, component, tmp_path):
        """Test running the CLI as a module"""
        result = run_cli(component, "--output-dir", tmp_path)
        assert result.returncode == 0, result.stderr
        assert "Generated:" in result.stdout
        js = (tmp_path / "counter.js").read_text(encoding="utf-8")
        assert "export default function Counter() {" in js

    def test_module_invocation_error(self, tmp_path):
        """Test the module exits non-zero on invalid input"""
        bad = tmp_path / "bad.svelte"
        bad.write_text("<button on:click={() => go()}></button>", encoding="utf-8")
        result = run_cli(bad, "--output-dir", tmp_path)
        assert result.returncode == 1
        assert "Error:" in result.stderr
