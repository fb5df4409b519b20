"""
Go Listing Annotator Package
============================

Converts the Go compiler's ``-S`` listing into labelled pseudo-assembly.

Usage:
    from golisting.annotator import annotate

    listing = annotate(raw_output.splitlines())
"""

from .annotator import AnnotationPass, Fragment, annotate, annotate_text
from .grammar import (
    FullLocationMatch,
    NoMatch,
    ParsedInstruction,
    UnknownLocationMatch,
    classify_line,
    find_function_marker,
    normalize_function_name,
)
from .jumps import JUMP_PREFIXES, is_jump_mnemonic, label_name, resolve_jump

__all__ = [
    "AnnotationPass",
    "Fragment",
    "annotate",
    "annotate_text",
    "FullLocationMatch",
    "UnknownLocationMatch",
    "NoMatch",
    "ParsedInstruction",
    "classify_line",
    "find_function_marker",
    "normalize_function_name",
    "JUMP_PREFIXES",
    "is_jump_mnemonic",
    "label_name",
    "resolve_jump",
]
