"""
golisting Error Hierarchy
=========================

Exceptions raised by the toolchain layer. The annotator itself never
raises: lines it does not recognize are dropped.

Exception Hierarchy
-------------------
GoListingError (base)
├── ConfigError - invalid toolchain configuration
└── ToolchainError - the Go compiler could not be run to completion
    ├── CompilerNotFoundError - executable missing
    └── CompilationTimeoutError - compiler exceeded its time limit

A compiler that runs and reports errors is not an exception; the
diagnostics are returned in the compilation result.
"""

from typing import Optional, Sequence


class GoListingError(Exception):
    """
    Base exception for all golisting errors.

        try:
            result = GoCompiler(config).compile(source)
        except GoListingError as e:
            print(f"Error: {e}")
    """
    pass


class ConfigError(GoListingError):
    """Toolchain configuration is invalid (e.g. non-positive timeout)."""
    pass


class ToolchainError(GoListingError):
    """
    The compiler process failed to run to completion.

    Attributes:
        message: Error description
        command: Command line that was executed
        stdout: Captured standard output, if any
        stderr: Captured standard error, if any
        return_code: Process exit status, if it exited
    """

    def __init__(
        self,
        message: str,
        command: Optional[Sequence[str]] = None,
        stdout: Optional[str] = None,
        stderr: Optional[str] = None,
        return_code: Optional[int] = None,
    ):
        self.message = message
        self.command = list(command) if command else []
        self.stdout = stdout
        self.stderr = stderr
        self.return_code = return_code
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = [self.message]
        if self.command:
            parts.append(f"command: {' '.join(self.command)}")
        if self.return_code is not None:
            parts.append(f"exit status: {self.return_code}")
        return "\n".join(parts)


class CompilerNotFoundError(ToolchainError):
    """The Go executable could not be found."""
    pass


class CompilationTimeoutError(ToolchainError):
    """The compiler did not finish within the configured timeout."""

    def __init__(
        self,
        timeout: float,
        command: Optional[Sequence[str]] = None,
        stdout: Optional[str] = None,
        stderr: Optional[str] = None,
    ):
        self.timeout = timeout
        super().__init__(
            f"compilation timed out after {timeout:g}s",
            command=command,
            stdout=stdout,
            stderr=stderr,
        )
