"""
CLI Tests
=========

Tests for the goannotate and gocompile command-line tools, driven through
click's CliRunner. The Go compiler is replaced with a fake.
"""

import json
import subprocess
from pathlib import Path

from click.testing import CliRunner

from golisting.cli.errors import ExitCode
from golisting.cli.goannotate import main as goannotate
from golisting.cli.gocompile import main as gocompile


# =============================================================================
# goannotate
# =============================================================================

class TestGoAnnotateCLI:
    """Tests for the goannotate CLI tool."""

    def test_help(self):
        result = CliRunner().invoke(goannotate, ["--help"])

        assert result.exit_code == 0
        assert "Annotate a Go compiler assembly listing" in result.output

    def test_version(self):
        result = CliRunner().invoke(goannotate, ["--version"])

        assert result.exit_code == 0
        assert "1.0.0" in result.output

    def test_annotate_file(self, tmp_path, amd64_listing, amd64_expected):
        listing = tmp_path / "example.S"
        listing.write_text(amd64_listing, encoding="utf-8")
        output = tmp_path / "example.asm"

        result = CliRunner().invoke(goannotate, [str(listing), "-o", str(output)])

        assert result.exit_code == 0
        assert output.read_text(encoding="utf-8") == amd64_expected + "\n"

    def test_annotate_stdin(self, amd64_listing):
        result = CliRunner().invoke(goannotate, ["-"], input=amd64_listing)

        assert result.exit_code == 0
        assert "\tJMP\tmain_compute_pc10" in result.output

    def test_diagnostics(self, tmp_path):
        listing = tmp_path / "broken.S"
        listing.write_text("./example.go:5:2: undefined: x\n", encoding="utf-8")
        output = tmp_path / "broken.asm"

        result = CliRunner().invoke(
            goannotate, [str(listing), "--diagnostics", "-o", str(output)]
        )

        assert result.exit_code == 0
        assert "<source>:5:2: undefined: x" in result.output
        assert output.read_text(encoding="utf-8") == ""

    def test_missing_file(self, tmp_path):
        result = CliRunner().invoke(goannotate, [str(tmp_path / "nope.S")])

        assert result.exit_code == ExitCode.INVALID_ARGS


# =============================================================================
# gocompile
# =============================================================================

class TestGoCompileCLI:
    """Tests for the gocompile CLI tool."""

    def _source(self, tmp_path) -> Path:
        source = tmp_path / "hello.go"
        source.write_text("package main\n\nfunc main() {}\n", encoding="utf-8")
        return source

    def test_help(self):
        result = CliRunner().invoke(gocompile, ["--help"])

        assert result.exit_code == 0
        assert "Compile Go source" in result.output

    def test_compile_to_file(self, tmp_path, monkeypatch, amd64_listing, amd64_expected):
        calls = []

        def fake_run(cmd, **kwargs):
            calls.append((cmd, kwargs))
            return subprocess.CompletedProcess(cmd, 0, "", amd64_listing)

        monkeypatch.setattr(subprocess, "run", fake_run)
        output = tmp_path / "hello.asm"

        result = CliRunner().invoke(gocompile, [
            str(self._source(tmp_path)),
            "-o", str(output),
            "--goarch", "arm64",
            "--", "-N", "-l",
        ])

        assert result.exit_code == 0, result.output
        assert output.read_text(encoding="utf-8") == amd64_expected + "\n"
        cmd, kwargs = calls[0]
        assert "-gcflags=-S -N -l" in cmd
        assert kwargs["env"]["GOARCH"] == "arm64"

    def test_env_defaults(self, tmp_path, monkeypatch):
        calls = []

        def fake_run(cmd, **kwargs):
            calls.append((cmd, kwargs))
            return subprocess.CompletedProcess(cmd, 0, "", "")

        monkeypatch.setattr(subprocess, "run", fake_run)
        monkeypatch.setenv("GOLISTING_GO", "/opt/go/bin/go")
        monkeypatch.setenv("GOLISTING_GOOS", "plan9")

        result = CliRunner().invoke(gocompile, [str(self._source(tmp_path))])

        assert result.exit_code == 0, result.output
        cmd, kwargs = calls[0]
        assert cmd[0] == "/opt/go/bin/go"
        assert kwargs["env"]["GOOS"] == "plan9"

    def test_compile_error(self, tmp_path, monkeypatch):
        def fake_run(cmd, **kwargs):
            return subprocess.CompletedProcess(
                cmd, 1, "", "./example.go:3:14: undefined: y\n"
            )

        monkeypatch.setattr(subprocess, "run", fake_run)

        result = CliRunner().invoke(gocompile, [str(self._source(tmp_path))])

        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "<source>:3:14: undefined: y" in result.output
        assert "exit status 1" in result.output

    def test_compiler_missing(self, tmp_path, monkeypatch):
        def fake_run(cmd, **kwargs):
            raise FileNotFoundError(cmd[0])

        monkeypatch.setattr(subprocess, "run", fake_run)

        result = CliRunner().invoke(
            gocompile, [str(self._source(tmp_path)), "--go", "nogo"]
        )

        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "not found" in result.output

    def test_binary_requires_output(self, tmp_path):
        result = CliRunner().invoke(gocompile, [str(self._source(tmp_path)), "--binary"])

        assert result.exit_code == ExitCode.INVALID_ARGS

    def test_invalid_timeout(self, tmp_path):
        result = CliRunner().invoke(
            gocompile, [str(self._source(tmp_path)), "--timeout", "0"]
        )

        assert result.exit_code == ExitCode.INVALID_ARGS
        assert "timeout must be positive" in result.output

    def test_json_output(self, tmp_path, monkeypatch, amd64_listing, amd64_expected):
        def fake_run(cmd, **kwargs):
            return subprocess.CompletedProcess(cmd, 0, "", amd64_listing)

        monkeypatch.setattr(subprocess, "run", fake_run)
        output = tmp_path / "hello.json"

        result = CliRunner().invoke(
            gocompile, [str(self._source(tmp_path)), "--json", "-o", str(output)]
        )

        assert result.exit_code == 0, result.output
        document = json.loads(output.read_text(encoding="utf-8"))
        assert document["asm"] == amd64_expected
        assert document["diagnostics"] == []
        assert document["return_code"] == 0

    def test_json_output_on_failure(self, tmp_path, monkeypatch):
        def fake_run(cmd, **kwargs):
            return subprocess.CompletedProcess(
                cmd, 1, "", "./example.go:3:14: undefined: y\n"
            )

        monkeypatch.setattr(subprocess, "run", fake_run)
        output = tmp_path / "hello.json"

        result = CliRunner().invoke(
            gocompile, [str(self._source(tmp_path)), "--json", "-o", str(output)]
        )

        assert result.exit_code == ExitCode.BUILD_ERROR
        document = json.loads(output.read_text(encoding="utf-8"))
        assert document["return_code"] == 1
        assert document["diagnostics"][0]["tag"] == {
            "line": 3, "column": 14, "text": "undefined: y",
        }

    def test_json_and_binary_conflict(self, tmp_path):
        result = CliRunner().invoke(gocompile, [
            str(self._source(tmp_path)), "--json", "--binary", "-o", str(tmp_path / "out"),
        ])

        assert result.exit_code == ExitCode.INVALID_ARGS
