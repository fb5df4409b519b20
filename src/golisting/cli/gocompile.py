"""
gocompile - Go Compile-and-Annotate Command-Line Interface
==========================================================

Compiles a Go source file with the assembly listing enabled and prints
the annotated listing. Compiler diagnostics go to stderr.

Usage Examples
--------------
Basic:
    $ gocompile hello.go

Cross-compile for arm64:
    $ gocompile hello.go --goarch arm64

Pass compiler flags (disable optimizations and inlining):
    $ gocompile hello.go -- -N -l

Environment variables GOLISTING_GO, GOLISTING_GOROOT, GOLISTING_GOARCH,
GOLISTING_GOOS, GOLISTING_COMPILER_ID and GOLISTING_TIMEOUT provide
defaults; command-line options override them.
"""

import json
import sys
from pathlib import Path
from typing import Optional

import click

from golisting import __version__
from golisting.cli.errors import ExitCode, configure_logging, handle_cli_exception
from golisting.toolchain import GoCompiler, ToolchainConfig


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.argument("gcflags", nargs=-1, type=click.UNPROCESSED)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output file (default: stdout; binary output requires this)",
)
@click.option(
    "--binary",
    is_flag=True,
    help="Build a binary instead of an assembly listing",
)
@click.option("--go", "executable", default=None, help="go executable to run")
@click.option("--compiler-id", default=None, help="Compiler identity (6g141 = legacy 6g)")
@click.option("--goroot", default=None, help="GOROOT for the compiler")
@click.option("--goarch", default=None, help="Target architecture (GOARCH)")
@click.option("--goos", default=None, help="Target operating system (GOOS)")
@click.option(
    "--timeout",
    type=float,
    default=None,
    help="Seconds before the compiler is killed",
)
@click.option(
    "--json", "as_json",
    is_flag=True,
    help="Write the listing and parsed diagnostics as JSON",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="gocompile")
def main(
    input_file: Path,
    gcflags: tuple[str, ...],
    output: Optional[Path],
    binary: bool,
    executable: Optional[str],
    compiler_id: Optional[str],
    goroot: Optional[str],
    goarch: Optional[str],
    goos: Optional[str],
    timeout: Optional[float],
    as_json: bool,
    verbose: bool,
) -> None:
    """
    Compile Go source and print its annotated assembly listing.

    INPUT_FILE is the Go source file. Arguments after "--" are passed to
    the compiler via -gcflags.

    \b
    Examples:
        gocompile hello.go                  # Listing to stdout
        gocompile hello.go -o hello.asm     # Listing to file
        gocompile hello.go --goarch arm64   # Cross-compile
        gocompile hello.go -- -N -l         # No optimization
        gocompile hello.go --json           # Machine-readable result
    """
    configure_logging(verbose)

    if binary and output is None:
        click.echo("Error: --binary requires --output", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    if binary and as_json:
        click.echo("Error: --binary and --json are mutually exclusive", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    try:
        config = ToolchainConfig.from_env()
        if executable:
            config.executable = executable
        if compiler_id:
            config.compiler_id = compiler_id
        if goroot:
            config.goroot = goroot
        if goarch:
            config.goarch = goarch
        if goos:
            config.goos = goos
        if timeout is not None:
            # Re-validate through the constructor
            config = ToolchainConfig(**{**vars(config), "timeout": timeout})

        if verbose:
            click.echo(f"Compiling {input_file}...", err=True)
            click.echo(f"Compiler: {config.executable} ({config.compiler_id})", err=True)
            if gcflags:
                click.echo(f"Compiler flags: {' '.join(gcflags)}", err=True)

        source = input_file.read_text(encoding="utf-8")
        result = GoCompiler(config).compile(source, list(gcflags), binary=binary)

        if as_json:
            document = json.dumps(result.to_dict(), indent=2) + "\n"
            if output:
                output.write_text(document, encoding="utf-8")
            else:
                click.echo(document, nl=False)
            if not result.success:
                sys.exit(ExitCode.BUILD_ERROR)
            return

        if result.stdout:
            click.echo(result.stdout, err=True)

        if not result.success:
            click.echo(
                f"Compilation failed (exit status {result.return_code})", err=True
            )
            sys.exit(ExitCode.BUILD_ERROR)

        if binary:
            output.write_bytes(result.binary or b"")
        else:
            listing = result.asm + "\n" if result.asm else ""
            if output:
                output.write_text(listing, encoding="utf-8")
            else:
                click.echo(listing, nl=False)

        if verbose and output:
            click.echo(f"Output written to: {output}", err=True)

    except Exception as e:
        handle_cli_exception(e, verbose, error_type="Compilation")


if __name__ == "__main__":
    main()
