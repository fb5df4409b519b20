"""
Compiler Diagnostics
====================

The Go compiler writes its errors and warnings to the same stream as the
``-S`` listing:

    ./example.go:5:2: undefined: fmt.Printl
    ./example.go:9:1: missing return

This module pulls those lines out of the raw output, replaces the
temporary input path with a stable placeholder, and parses the result into
records a viewer can attach to source lines.

    Raw lines → extract_diagnostics() → text → parse_diagnostics() → records
"""

import logging
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional

logger = logging.getLogger(__name__)

# Placeholder substituted for the compiled file's path.
SOURCE_PLACEHOLDER = "<source>"

# path:line: message  or  path:line:column: message
DIAGNOSTIC_LINE_PATTERN = re.compile(r"^[^:]+:\d+:(\d+:)?\s.*", re.ASCII)

_ANSI_COLOURS = re.compile(r"\x1B\[[\d;]*[mK]", re.ASCII)

_SOURCE_TAG_PATTERN = re.compile(
    r"^\s*" + re.escape(SOURCE_PLACEHOLDER) + r"[(:](\d+)(:?,?(\d+):?)?[):]*\s*(.*)",
    re.ASCII,
)

_FILE_TAG_PATTERN = re.compile(
    r"^\s*([^:]+)[(:](\d+)(:?,?(\d+):?)?[):]*\s*(.*)",
    re.ASCII,
)


# =============================================================================
# Records
# =============================================================================

@dataclass(frozen=True)
class DiagnosticTag:
    """
    Location and message parsed from a diagnostic line.

    Attributes:
        line: 1-based source line
        column: 1-based column, or 0 when the compiler gave none
        text: Message text without the location prefix
        file: File name when the diagnostic is about another file; None for
              the compiled source
    """
    line: int
    column: int
    text: str
    file: Optional[str] = None


@dataclass(frozen=True)
class DiagnosticLine:
    """
    One line of compiler diagnostics.

    Attributes:
        text: The line as displayed (placeholder substituted)
        tag: Parsed location, or None if the line had none
        severity: "error" or "warning"
    """
    text: str
    tag: Optional[DiagnosticTag] = None
    severity: str = "error"

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        result = {"text": self.text, "severity": self.severity}
        if self.tag is not None:
            tag = {
                "line": self.tag.line,
                "column": self.tag.column,
                "text": self.tag.text,
            }
            if self.tag.file is not None:
                tag["file"] = self.tag.file
            result["tag"] = tag
        return result


# =============================================================================
# Extraction
# =============================================================================

def extract_diagnostics(
    lines: Iterable[str],
    source_path: str,
    placeholder: str = SOURCE_PLACEHOLDER,
) -> str:
    """
    Select diagnostic lines from raw compiler output.

    Args:
        lines: Raw output lines (the same stream the listing came from)
        source_path: Path of the compiled file as the compiler prints it,
                     e.g. ``./example.go``
        placeholder: Replacement for every occurrence of ``source_path``

    Returns:
        Matching lines with the path replaced, newline-separated
    """
    selected = [
        line.replace(source_path, placeholder) if source_path else line
        for line in lines
        if DIAGNOSTIC_LINE_PATTERN.match(line)
    ]
    logger.debug(f"Extracted {len(selected)} diagnostic lines")
    return "\n".join(selected)


# =============================================================================
# Parsing
# =============================================================================

def _severity(message: str) -> str:
    if message.lower().startswith("warning"):
        return "warning"
    return "error"


def parse_diagnostic_line(line: str) -> DiagnosticLine:
    """Parse a single diagnostic line into a record."""
    plain = _ANSI_COLOURS.sub("", line)

    match = _SOURCE_TAG_PATTERN.match(plain)
    if match:
        message = match.group(4).strip()
        tag = DiagnosticTag(
            line=int(match.group(1)),
            column=int(match.group(3) or 0),
            text=message,
        )
        return DiagnosticLine(line, tag, _severity(message))

    match = _FILE_TAG_PATTERN.match(plain)
    if match:
        message = match.group(5).strip()
        tag = DiagnosticTag(
            line=int(match.group(2)),
            column=int(match.group(4) or 0),
            text=message,
            file=match.group(1).strip(),
        )
        return DiagnosticLine(line, tag, _severity(message))

    return DiagnosticLine(line, None, _severity(plain))


def parse_diagnostics(
    text: str,
    input_filename: Optional[str] = None,
) -> List[DiagnosticLine]:
    """
    Parse extracted diagnostics into records.

    Args:
        text: Newline-separated diagnostics
        input_filename: If given, occurrences are replaced with the source
                        placeholder before parsing

    Returns:
        One record per non-empty line
    """
    records = []
    for line in text.splitlines():
        if not line.strip():
            continue
        if input_filename:
            line = line.replace(input_filename, SOURCE_PLACEHOLDER)
        records.append(parse_diagnostic_line(line))
    return records
