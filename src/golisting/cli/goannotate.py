"""
goannotate - Go Listing Annotator Command-Line Interface
========================================================

Annotates a listing previously captured from ``go build -gcflags=-S``.

Usage Examples
--------------
Annotate a saved listing:
    $ go build -gcflags=-S example.go 2> example.S
    $ goannotate example.S

From a pipe:
    $ go build -gcflags=-S example.go 2>&1 | goannotate -

Write to a file and show compiler diagnostics:
    $ goannotate example.S -o example.asm --diagnostics
"""

from pathlib import Path
from typing import Optional

import click

from golisting import __version__
from golisting.annotator import annotate
from golisting.cli.errors import configure_logging, handle_cli_exception
from golisting.diagnostics import extract_diagnostics


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.File("r", encoding="utf-8"),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output file (default: stdout)",
)
@click.option(
    "-d", "--diagnostics",
    is_flag=True,
    help="Print compiler diagnostics found in the input to stderr",
)
@click.option(
    "--source-path",
    default="./example.go",
    show_default=True,
    help="Path of the compiled file, replaced by <source> in diagnostics",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="goannotate")
def main(
    input_file,
    output: Optional[Path],
    diagnostics: bool,
    source_path: str,
    verbose: bool,
) -> None:
    """
    Annotate a Go compiler assembly listing.

    INPUT_FILE is the captured -S output ("-" for stdin). Jump targets are
    rewritten to labels, unused labels removed and .file/.loc directives
    added.
    """
    configure_logging(verbose)

    try:
        lines = input_file.read().splitlines()
        if verbose:
            click.echo(f"Read {len(lines)} lines from {input_file.name}", err=True)

        listing = annotate(lines)

        if diagnostics:
            logging_text = extract_diagnostics(lines, source_path)
            if logging_text:
                click.echo(logging_text, err=True)

        result = listing + "\n" if listing else ""
        if output:
            output.write_text(result, encoding="utf-8")
            if verbose:
                click.echo(f"Output written to: {output}", err=True)
        else:
            click.echo(result, nl=False)

    except Exception as e:
        handle_cli_exception(e, verbose)


if __name__ == "__main__":
    main()
