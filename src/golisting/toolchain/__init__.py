"""
Go Toolchain Package
====================

Configuration and invocation of the Go compiler.

Usage:
    from golisting.toolchain import GoCompiler, ToolchainConfig

    result = GoCompiler(ToolchainConfig.from_env()).compile(source)
"""

from .config import LEGACY_COMPILER_ID, ToolchainConfig
from .compiler import CompilationResult, GoCompiler

__all__ = [
    "LEGACY_COMPILER_ID",
    "ToolchainConfig",
    "CompilationResult",
    "GoCompiler",
]
