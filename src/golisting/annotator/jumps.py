"""
Jump Target Resolution
======================

The Go backend prints branch targets as raw program counters:

    0x0004 00004 (main.go:4)	JMP	12

This module decides whether an instruction transfers control and, if so,
replaces the trailing counter with the pseudo-label the annotator declares
for that counter (``main_compute_pc12``).

Whether a trailing decimal is a target or an ordinary immediate is decided
by mnemonic prefix alone. Every control-transfer mnemonic the Go assembler
defines (src/cmd/asm/internal/arch) starts with one of the prefixes in
JUMP_PREFIXES, and no other mnemonic does.
"""

import re
from typing import MutableSet


# =============================================================================
# Jump Prefix Table
# =============================================================================

# Lowercase, matched case-insensitively against the start of the mnemonic.
JUMP_PREFIXES = (
    "j",        # x86: JMP, JEQ, JNE, ...
    "b",        # x86/arm: B, BNE, BEQ, ...
    "cb",       # arm64: CBZ, CBNZ
    "tb",       # arm64: TBZ, TBNZ
    "cmpb",     # s390x: CMPBEQ, CMPBNE, ...
    "cmpub",    # s390x: CMPUBGT, CMPUBLE, ...
)

# Whitespace, digits, at most one trailing whitespace character, end.
TRAILING_TARGET_PATTERN = re.compile(r"(\s+)(\d+)(\s?)$", re.ASCII)


def is_jump_mnemonic(mnemonic: str) -> bool:
    """True if the mnemonic starts with a known jump prefix."""
    return mnemonic.lower().startswith(JUMP_PREFIXES)


def label_name(function: str, pc: str, collisions: int = 0) -> str:
    """
    Build a pseudo-label identifier.

    Args:
        function: Normalized function name
        pc: Program counter digits
        collisions: Collision count of the function name (0 = no suffix)
    """
    label = f"{function}_pc{pc}"
    if collisions > 0:
        label += f"_{collisions}"
    return label


def resolve_jump(
    function: str,
    collisions: int,
    mnemonic: str,
    operands: str,
    used_labels: MutableSet[str],
) -> str:
    """
    Rewrite a jump's numeric target into a label reference.

    Operands without a trailing decimal, and instructions that are not
    jumps, are returned unchanged. Otherwise the digits are replaced in
    place (everything around them is kept byte for byte) and the label is
    added to ``used_labels``.

    Args:
        function: Normalized name of the enclosing function
        collisions: Collision count for that name
        mnemonic: Instruction mnemonic
        operands: Operand text following the mnemonic
        used_labels: Receives the referenced label identifier

    Returns:
        The operand text, rewritten if it was a jump target

    Example:
        >>> used = set()
        >>> resolve_jump("main_f", 0, "JMP", "\\t12", used)
        '\\tmain_f_pc12'
        >>> used
        {'main_f_pc12'}
    """
    match = TRAILING_TARGET_PATTERN.search(operands)
    if not match:
        return operands

    if not is_jump_mnemonic(mnemonic):
        return operands

    label = label_name(function, match.group(2), collisions)
    used_labels.add(label)
    return operands[:match.start(2)] + label + operands[match.end(2):]
