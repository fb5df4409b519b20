"""
Go Assembly Listing Grammars
============================

Line grammars for the listing printed by the Go compiler backend when
invoked with ``-gcflags=-S``. A typical line looks like:

    0x0012 00018 (main.go:7)	JMP	42

The leading hex address is optional, the decimal program counter is not.
The location in parentheses is either ``file:line`` or the literal
``<unknown line number>`` for synthesized instructions.

Each grammar is tried in order and the result is one of three variants:

- FullLocationMatch: program counter, file, line, mnemonic, operands
- UnknownLocationMatch: program counter, mnemonic, operands
- NoMatch: the line is not an instruction line

Callers dispatch on the variant with ``match``/``case``.

Function Markers
----------------
Every function body starts with a ``TEXT`` pseudo-instruction naming the
symbol, e.g. ``TEXT main.(*T).String(SB), ABIInternal, $24-16``. The name is
normalized into something usable inside label identifiers by collapsing
runs of ``(``, ``)``, ``*`` and ``.`` into a single underscore.
"""

import re
from dataclasses import dataclass
from typing import Optional, Union


# =============================================================================
# Patterns
# =============================================================================

# Optional address, then the program counter. The address must be followed
# by whitespace so a zero-padded counter is never split in two. Digits are
# ASCII only.
_PREFIX = r"^\s*(?:(0[Xx]?[0-9A-Za-z]+)\s+)?(\d+)\s*"

FULL_LOCATION_PATTERN = re.compile(
    _PREFIX + r"\(([^:]+):(\d+)\)\s*([A-Z]+)(.*)",
    re.ASCII,
)

UNKNOWN_LOCATION_PATTERN = re.compile(
    _PREFIX + r"\(<unknown line number>\)\s*([A-Z]+)(.*)",
    re.ASCII,
)

FUNCTION_MARKER_PATTERN = re.compile(r'TEXT\s+[".]*(\S+)\(SB\)', re.ASCII)

_NAME_SEPARATORS = re.compile(r"[()*.]+")


# =============================================================================
# Match Results
# =============================================================================

@dataclass(frozen=True)
class ParsedInstruction:
    """
    One instruction line decomposed into its fields.

    Attributes:
        pc: Program counter digits as printed (zero-padded, may be empty)
        mnemonic: Uppercase instruction token
        operands: Everything after the mnemonic, verbatim
        file: Source file name, or None for unknown locations
        source_line: Source line number as text, or None
    """
    pc: str
    mnemonic: str
    operands: str
    file: Optional[str] = None
    source_line: Optional[str] = None


@dataclass(frozen=True)
class FullLocationMatch:
    """Line carried a ``(file:line)`` location."""
    instruction: ParsedInstruction


@dataclass(frozen=True)
class UnknownLocationMatch:
    """Line carried ``(<unknown line number>)``."""
    instruction: ParsedInstruction


@dataclass(frozen=True)
class NoMatch:
    """Line is not an instruction line."""
    line: str


LineMatch = Union[FullLocationMatch, UnknownLocationMatch, NoMatch]


# =============================================================================
# Grammars
# =============================================================================

def _full_location(line: str) -> Optional[LineMatch]:
    m = FULL_LOCATION_PATTERN.match(line)
    if not m:
        return None
    return FullLocationMatch(ParsedInstruction(
        pc=m.group(2),
        file=m.group(3),
        source_line=m.group(4),
        mnemonic=m.group(5),
        operands=m.group(6),
    ))


def _unknown_location(line: str) -> Optional[LineMatch]:
    m = UNKNOWN_LOCATION_PATTERN.match(line)
    if not m:
        return None
    return UnknownLocationMatch(ParsedInstruction(
        pc=m.group(2),
        mnemonic=m.group(3),
        operands=m.group(4),
    ))


# Tried in order; the first grammar that accepts the line wins.
GRAMMARS = (
    ("full-location", _full_location),
    ("unknown-location", _unknown_location),
)


def classify_line(line: str) -> LineMatch:
    """
    Classify a raw listing line against the ordered grammars.

    Args:
        line: One line of compiler output

    Returns:
        FullLocationMatch, UnknownLocationMatch, or NoMatch
    """
    for _name, grammar in GRAMMARS:
        result = grammar(line)
        if result is not None:
            return result
    return NoMatch(line)


# =============================================================================
# Function Markers
# =============================================================================

def normalize_function_name(name: str) -> str:
    """
    Make a Go symbol name usable as a label prefix.

    >>> normalize_function_name("main.(*T).String")
    'main_T_String'
    """
    return _NAME_SEPARATORS.sub("_", name)


def find_function_marker(line: str) -> Optional[str]:
    """Return the normalized function name defined on this line, if any."""
    m = FUNCTION_MARKER_PATTERN.search(line)
    if not m:
        return None
    return normalize_function_name(m.group(1))
