"""
Toolchain Configuration
=======================

Settings for invoking the Go compiler. Configuration can come from:
- Default values (defined here)
- Environment variables (``ToolchainConfig.from_env``)
- Command-line options (the CLI overrides individual fields)

GOROOT, GOARCH and GOOS are only injected into the compiler's environment
when explicitly configured; otherwise the compiler inherits whatever the
calling environment provides.
"""

from dataclasses import dataclass
from typing import Dict, Mapping, Optional
import logging
import os

from golisting.errors import ConfigError

logger = logging.getLogger(__name__)

# Compiler id of the pre-1.5 toolchain, driven via ``go tool 6g``.
LEGACY_COMPILER_ID = "6g141"


@dataclass
class ToolchainConfig:
    """
    Configuration for one Go compiler.

    Attributes:
        compiler_id: Identity of the compiler; selects legacy behaviour
        executable: The ``go`` command to run
        goroot: Override for GOROOT (None = inherit)
        goarch: Override for GOARCH (None = inherit)
        goos: Override for GOOS (None = inherit)
        timeout: Seconds before the compiler is killed
        compile_filename: Name the source is written under
    """
    compiler_id: str = "gl"
    executable: str = "go"
    goroot: Optional[str] = None
    goarch: Optional[str] = None
    goos: Optional[str] = None
    timeout: float = 60.0
    compile_filename: str = "example.go"

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            raise ConfigError(f"timeout must be positive, got {self.timeout}")
        if not self.compile_filename.endswith(".go"):
            raise ConfigError(
                f"compile filename must end in .go, got '{self.compile_filename}'"
            )

    @property
    def is_legacy(self) -> bool:
        """True for the old 6g toolchain, which prints the listing to stdout."""
        return self.compiler_id == LEGACY_COMPILER_ID

    @property
    def source_path(self) -> str:
        """The input path as it appears in compiler diagnostics."""
        return f"./{self.compile_filename}"

    def exec_env(self, base: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
        """
        Build the environment for the compiler process.

        Args:
            base: Starting environment (default: ``os.environ``)

        Returns:
            A new dict with configured overrides applied
        """
        env = dict(os.environ if base is None else base)
        if self.goroot:
            env["GOROOT"] = self.goroot
        if self.goarch:
            env["GOARCH"] = self.goarch
        if self.goos:
            env["GOOS"] = self.goos
        return env

    # ═══════════════════════════════════════════════════════════════════════════
    # FACTORY METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ToolchainConfig":
        """
        Create ToolchainConfig from environment variables.

        Environment variables (all optional):
            GOLISTING_COMPILER_ID: Compiler identity (e.g. "6g141")
            GOLISTING_GO: Path to the go executable
            GOLISTING_GOROOT: GOROOT for the compiler
            GOLISTING_GOARCH: Target architecture
            GOLISTING_GOOS: Target operating system
            GOLISTING_TIMEOUT: Timeout in seconds

        Args:
            environ: Mapping to read from (default: ``os.environ``)

        Returns:
            ToolchainConfig with values from the environment
        """
        environ = os.environ if environ is None else environ
        config = cls()

        if compiler_id := environ.get("GOLISTING_COMPILER_ID"):
            config.compiler_id = compiler_id

        if executable := environ.get("GOLISTING_GO"):
            config.executable = executable

        if goroot := environ.get("GOLISTING_GOROOT"):
            config.goroot = goroot

        if goarch := environ.get("GOLISTING_GOARCH"):
            config.goarch = goarch

        if goos := environ.get("GOLISTING_GOOS"):
            config.goos = goos

        if timeout := environ.get("GOLISTING_TIMEOUT"):
            try:
                value = float(timeout)
            except ValueError:
                logger.warning(f"Ignoring invalid GOLISTING_TIMEOUT '{timeout}'")
            else:
                if value > 0:
                    config.timeout = value
                else:
                    logger.warning(f"Ignoring non-positive GOLISTING_TIMEOUT '{timeout}'")

        return config
