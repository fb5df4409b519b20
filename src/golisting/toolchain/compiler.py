"""
Go Compiler Driver
==================

Runs the Go compiler on a source snippet and turns its raw output into an
annotated listing plus parsed diagnostics.

Compilation Pipeline
--------------------
1. **Arguments**: ``go build -o OUT -gcflags=-S <user flags> example.go``
   (or ``go tool 6g -g -o OUT -S`` for the legacy toolchain)
2. **Invocation**: the compiler runs in a temporary directory with GOROOT,
   GOARCH and GOOS injected from the configuration
3. **Stream selection**: modern compilers print the listing to stderr, the
   legacy one to stdout
4. **Post-processing**: the selected stream is annotated and its diagnostic
   lines extracted and parsed

Usage:
    >>> from golisting.toolchain import GoCompiler, ToolchainConfig
    >>> compiler = GoCompiler(ToolchainConfig.from_env())
    >>> result = compiler.compile(source)
    >>> print(result.asm)
"""

import logging
import subprocess
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from golisting.annotator import annotate
from golisting.diagnostics import (
    SOURCE_PLACEHOLDER,
    DiagnosticLine,
    extract_diagnostics,
    parse_diagnostics,
)
from golisting.errors import CompilationTimeoutError, CompilerNotFoundError
from golisting.toolchain.config import ToolchainConfig

logger = logging.getLogger(__name__)


@dataclass
class CompilationResult:
    """
    Result of compiling one source file.

    Attributes:
        asm: Annotated listing ("" when none was produced)
        diagnostics: Parsed diagnostic records
        stdout: Diagnostic text shown to the user
        stderr: Always empty after post-processing; its content, if it held
                the listing, has been consumed
        return_code: Compiler exit status
        command: Command line that was run
        binary: Output file contents when binary output was requested
    """
    asm: str = ""
    diagnostics: List[DiagnosticLine] = field(default_factory=list)
    stdout: str = ""
    stderr: str = ""
    return_code: int = 0
    command: List[str] = field(default_factory=list)
    binary: Optional[bytes] = None

    @property
    def success(self) -> bool:
        return self.return_code == 0

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "asm": self.asm,
            "diagnostics": [d.to_dict() for d in self.diagnostics],
            "return_code": self.return_code,
            "command": list(self.command),
        }


class GoCompiler:
    """
    Driver for one configured Go compiler.

    Attributes:
        config: Toolchain configuration
    """

    def __init__(self, config: Optional[ToolchainConfig] = None):
        self.config = config or ToolchainConfig()

    # -------------------------------------------------------------------------
    # Argument assembly
    # -------------------------------------------------------------------------

    def options_for_filter(
        self,
        output_filename: str,
        user_options: Sequence[str] = (),
        binary: bool = False,
    ) -> List[str]:
        """
        Build the compiler subcommand and flags.

        User options are folded into ``-gcflags`` for modern compilers so
        they reach the compiler rather than ``go build``.
        """
        if self.config.is_legacy:
            return ["tool", "6g", "-g", "-o", output_filename, "-S"]

        if binary:
            return ["build", "-o", output_filename, "-gcflags=" + " ".join(user_options)]
        return ["build", "-o", output_filename, "-gcflags=-S " + " ".join(user_options)]

    def filter_user_options(self, user_options: Sequence[str]) -> List[str]:
        """User options passed as separate arguments (legacy compiler only)."""
        if self.config.is_legacy:
            return list(user_options)
        return []

    def build_command(
        self,
        output_filename: str,
        user_options: Sequence[str] = (),
        binary: bool = False,
    ) -> List[str]:
        """Full command line, executable first and input file last."""
        return [
            self.config.executable,
            *self.options_for_filter(output_filename, user_options, binary),
            *self.filter_user_options(user_options),
            self.config.compile_filename,
        ]

    # -------------------------------------------------------------------------
    # Post-processing
    # -------------------------------------------------------------------------

    def select_listing_stream(self, stdout: str, stderr: str) -> str:
        """Return the stream that carries the ``-S`` listing."""
        if self.config.is_legacy:
            return stdout
        return stderr

    def post_process(
        self,
        stdout: str,
        stderr: str,
        return_code: int = 0,
        input_filename: Optional[str] = None,
    ) -> CompilationResult:
        """
        Turn raw compiler output into a CompilationResult.

        Args:
            stdout: Captured standard output
            stderr: Captured standard error
            return_code: Compiler exit status
            input_filename: Absolute path of the compiled file; replaced by
                            the source placeholder in diagnostics

        Returns:
            Result with annotated listing and parsed diagnostics
        """
        lines = self.select_listing_stream(stdout, stderr).splitlines()
        logging_text = extract_diagnostics(lines, self.config.source_path)
        if input_filename:
            logging_text = logging_text.replace(input_filename, SOURCE_PLACEHOLDER)
        diagnostics = parse_diagnostics(logging_text, input_filename)

        if diagnostics:
            logger.debug(f"Compiler reported {len(diagnostics)} diagnostics")

        return CompilationResult(
            asm=annotate(lines),
            diagnostics=diagnostics,
            stdout=logging_text,
            stderr="",
            return_code=return_code,
        )

    # -------------------------------------------------------------------------
    # Invocation
    # -------------------------------------------------------------------------

    def compile(
        self,
        source: str,
        user_options: Sequence[str] = (),
        binary: bool = False,
    ) -> CompilationResult:
        """
        Compile Go source and annotate the listing.

        A compiler that exits with an error is not an exception; check
        ``result.success`` and ``result.diagnostics``.

        Args:
            source: Go source text
            user_options: Extra compiler flags
            binary: Request a binary instead of an assembly listing

        Returns:
            The compilation result

        Raises:
            CompilerNotFoundError: The go executable could not be run
            CompilationTimeoutError: The compiler exceeded the timeout
        """
        output_filename = "output" if binary else "output.s"
        cmd = self.build_command(output_filename, user_options, binary)

        with tempfile.TemporaryDirectory(prefix="golisting-") as tmp:
            workdir = Path(tmp)
            (workdir / self.config.compile_filename).write_text(source, encoding="utf-8")

            logger.debug(f"Running {' '.join(cmd)} in {workdir}")
            try:
                completed = subprocess.run(
                    cmd,
                    capture_output=True,
                    text=True,
                    cwd=str(workdir),
                    env=self.config.exec_env(),
                    timeout=self.config.timeout,
                )
            except subprocess.TimeoutExpired as e:
                raise CompilationTimeoutError(
                    self.config.timeout,
                    command=cmd,
                    stdout=_decode(e.stdout),
                    stderr=_decode(e.stderr),
                ) from e
            except FileNotFoundError as e:
                raise CompilerNotFoundError(
                    f"'{self.config.executable}' not found - is Go installed?",
                    command=cmd,
                ) from e

            result = self.post_process(
                completed.stdout,
                completed.stderr,
                completed.returncode,
                input_filename=str(workdir / self.config.compile_filename),
            )
            result.command = cmd

            output_path = workdir / output_filename
            if binary and output_path.exists():
                result.binary = output_path.read_bytes()

        if not result.success:
            logger.debug(f"Compiler exited with status {result.return_code}")
        return result


def _decode(data) -> Optional[str]:
    # TimeoutExpired carries bytes even when text=True was requested
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="replace")
    return data
