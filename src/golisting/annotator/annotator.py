"""
Go Listing Annotator
====================

Turns the raw ``-S`` listing printed by the Go compiler into a normalized
pseudo-assembly listing:

    Raw lines → classify → labels / directives / instruction → prune → text

For every instruction line the annotator may emit, in this order:

1. a pseudo-label declaration for the line's program counter
   (``main_compute_pc12:``)
2. a ``.file`` directive when the source file changes
3. a ``.loc`` directive when the source line changes
4. the instruction itself, with jump targets rewritten to pseudo-labels

Labels are declared for every counter but only kept if some jump refers to
them. Because a jump may refer to a counter that appears later in the
listing, pruning happens after the whole listing has been processed.

Lines that are not instruction lines are dropped silently. The compiler's
output format varies between Go versions and architectures, so an
unrecognized line is never an error.

Function Names and Collisions
-----------------------------
Labels are namespaced by the enclosing function, taken from its ``TEXT``
marker. Two different Go symbols can normalize to the same name (for
example ``main.(*T).M`` and ``main.T.M``); the second one gets a ``_1``
suffix on all its labels, the third ``_2``, and so on.

Usage:
    >>> from golisting.annotator import annotate
    >>> print(annotate(listing.splitlines()))
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set

from golisting.annotator.grammar import (
    FullLocationMatch,
    NoMatch,
    ParsedInstruction,
    UnknownLocationMatch,
    classify_line,
    find_function_marker,
)
from golisting.annotator.jumps import label_name, resolve_jump

logger = logging.getLogger(__name__)

# Counters are printed zero-padded to five digits.
_PC_PADDING = re.compile(r"^0{0,4}")


# =============================================================================
# Output Fragments
# =============================================================================

@dataclass(frozen=True)
class Fragment:
    """
    One line of annotated output.

    Attributes:
        text: The output line
        label: For label declarations, the identifier declared; None otherwise
    """
    text: str
    label: Optional[str] = None


# =============================================================================
# Pass State
# =============================================================================

@dataclass
class DebugCursor:
    """Last file and line for which directives were emitted."""
    file: Optional[str] = None
    line: Optional[str] = None
    file_index: int = 0


@dataclass
class AnnotationPass:
    """
    State for a single annotation of one listing.

    A new instance must be used for every listing. Label names and
    collision suffixes depend on everything seen earlier in the pass, so
    sharing an instance between listings corrupts both.

    Attributes:
        function: Current normalized function name ("" before any TEXT)
        collisions: Times each normalized name has been redefined
        labels: Declared label identifiers
        used_labels: Label identifiers referenced by jumps
        cursor: Debug directive state
        fragments: Accumulated output, unpruned
        dropped: Count of lines that matched no grammar
    """
    function: str = ""
    collisions: Dict[str, int] = field(default_factory=dict)
    labels: Set[str] = field(default_factory=set)
    used_labels: Set[str] = field(default_factory=set)
    cursor: DebugCursor = field(default_factory=DebugCursor)
    fragments: List[Fragment] = field(default_factory=list)
    dropped: int = 0

    @property
    def collision_count(self) -> int:
        return self.collisions.get(self.function, 0)

    # -------------------------------------------------------------------------
    # Per-line processing
    # -------------------------------------------------------------------------

    def feed(self, line: str) -> None:
        """Process one raw line, appending its fragments."""
        match classify_line(line):
            case FullLocationMatch(instruction) | UnknownLocationMatch(instruction):
                self._feed_instruction(line, instruction)
            case NoMatch():
                self.dropped += 1

    def _feed_instruction(self, line: str, instruction: ParsedInstruction) -> None:
        function = find_function_marker(line)
        if function is not None:
            self._enter_function(function)

        self._declare_label(instruction)
        self._emit_directives(instruction)

        operands = resolve_jump(
            self.function,
            self.collision_count,
            instruction.mnemonic,
            instruction.operands,
            self.used_labels,
        )
        self.fragments.append(Fragment(f"\t{instruction.mnemonic}{operands}"))

    def _enter_function(self, function: str) -> None:
        if function in self.collisions:
            self.collisions[function] += 1
            logger.debug(
                f"Function name '{function}' seen again, "
                f"labels suffixed _{self.collisions[function]}"
            )
        else:
            self.collisions[function] = 0
        self.function = function

    def _declare_label(self, instruction: ParsedInstruction) -> None:
        if not instruction.pc:
            return
        pc = _PC_PADDING.sub("", instruction.pc, count=1)
        label = label_name(self.function, pc, self.collision_count)
        if label in self.labels:
            return
        self.labels.add(label)
        self.fragments.append(Fragment(f"{label}:", label=label))

    def _emit_directives(self, instruction: ParsedInstruction) -> None:
        cursor = self.cursor
        if instruction.file and instruction.file != cursor.file:
            cursor.file_index += 1
            cursor.file = instruction.file
            self.fragments.append(
                Fragment(f'\t.file {cursor.file_index} "{instruction.file}"')
            )
        if instruction.source_line and instruction.source_line != cursor.line:
            cursor.line = instruction.source_line
            self.fragments.append(
                Fragment(f"\t.loc {cursor.file_index} {instruction.source_line} 0")
            )

    # -------------------------------------------------------------------------
    # Result
    # -------------------------------------------------------------------------

    def render(self) -> str:
        """Drop unreferenced labels and join the remaining fragments."""
        kept = [
            fragment.text
            for fragment in self.fragments
            if fragment.label is None or fragment.label in self.used_labels
        ]
        logger.debug(
            f"Annotated listing: {len(kept)} lines kept, "
            f"{len(self.fragments) - len(kept)} unused labels pruned, "
            f"{self.dropped} input lines dropped"
        )
        return "\n".join(kept)


# =============================================================================
# Public API
# =============================================================================

def annotate(lines: Iterable[str]) -> str:
    """
    Annotate a Go ``-S`` listing.

    Args:
        lines: Raw listing lines, in output order

    Returns:
        The normalized listing, newline-separated. Empty if no line was
        recognized.
    """
    annotation = AnnotationPass()
    for line in lines:
        annotation.feed(line)
    return annotation.render()


def annotate_text(text: str) -> str:
    """Annotate a listing held in a single string."""
    return annotate(text.splitlines())
