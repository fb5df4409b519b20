"""
golisting - Annotated Assembly Listings for the Go Compiler
===========================================================

This package turns the raw assembly listing printed by
``go build -gcflags=-S`` into a normalized pseudo-assembly listing suitable
for display: jump targets become symbolic labels, unreferenced labels are
removed, and ``.file``/``.loc`` directives mark source positions.

Main Components
---------------
- **annotator**: the listing annotator and jump resolver
- **diagnostics**: extraction and parsing of compiler errors and warnings
- **toolchain**: Go compiler configuration and invocation

Quick Start
-----------
Annotate a captured listing:
    >>> from golisting import annotate
    >>> print(annotate(raw.splitlines()))

Compile and annotate:
    >>> from golisting import GoCompiler, ToolchainConfig
    >>> result = GoCompiler(ToolchainConfig(goarch="arm64")).compile(source)
    >>> print(result.asm)

Or use the command-line tools:
    $ goannotate listing.S
    $ gocompile hello.go --goarch arm64
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from golisting.errors import (
    GoListingError,
    ConfigError,
    ToolchainError,
    CompilerNotFoundError,
    CompilationTimeoutError,
)

from golisting.annotator import (
    AnnotationPass,
    annotate,
    annotate_text,
    is_jump_mnemonic,
    resolve_jump,
)

from golisting.diagnostics import (
    DiagnosticLine,
    DiagnosticTag,
    extract_diagnostics,
    parse_diagnostics,
)

from golisting.toolchain import (
    CompilationResult,
    GoCompiler,
    ToolchainConfig,
)

__all__ = [
    # Version info
    "__version__",
    # Annotator
    "AnnotationPass",
    "annotate",
    "annotate_text",
    "is_jump_mnemonic",
    "resolve_jump",
    # Diagnostics
    "DiagnosticLine",
    "DiagnosticTag",
    "extract_diagnostics",
    "parse_diagnostics",
    # Toolchain
    "CompilationResult",
    "GoCompiler",
    "ToolchainConfig",
    # Exception hierarchy
    "GoListingError",
    "ConfigError",
    "ToolchainError",
    "CompilerNotFoundError",
    "CompilationTimeoutError",
]
