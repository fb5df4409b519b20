"""
golisting Command-Line Interface
================================

This package provides command-line tools:

- **goannotate**: annotate a saved ``go build -gcflags=-S`` listing
- **gocompile**: compile Go source and print the annotated listing

Each tool is implemented as a Click-based CLI application with
consistent error reporting and exit codes.
"""

__all__ = ["goannotate", "gocompile"]
