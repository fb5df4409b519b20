"""
Shared Test Configuration
=========================

Fixtures used across the golisting test suite:

- Sample listings captured from the Go compiler
- Isolation from GOLISTING_* environment variables
"""

import pytest


# Listing printed by `go build -gcflags=-S` (Go 1.21, amd64) for:
#
#     func compute(n int) int {
#         for i := 0; i < 10; i++ {
#             n += i
#         }
#         return n
#     }
AMD64_LISTING = """\
# command-line-arguments
main.compute STEXT nosplit size=17 args=0x8 locals=0x0 funcid=0x0 align=0x0
\t0x0000 00000 (./example.go:3)\tTEXT\tmain.compute(SB), NOSPLIT|ABIInternal, $0-8
\t0x0000 00000 (./example.go:3)\tFUNCDATA\t$0, gclocals·g2BeySu+wFnoycgXfElmcg==(SB)
\t0x0000 00000 (./example.go:4)\tXORL\tCX, CX
\t0x0002 00002 (./example.go:4)\tJMP\t10
\t0x0004 00004 (./example.go:5)\tADDQ\tCX, AX
\t0x0007 00007 (./example.go:4)\tINCQ\tCX
\t0x000a 00010 (./example.go:4)\tCMPQ\tCX, $10
\t0x000e 00014 (./example.go:4)\tJLT\t4
\t0x0010 00016 (./example.go:7)\tRET
\t0x0000 31 c9 eb 06 48 01 c8 48 ff c1 48 83 f9 0a 7c f4  1...H..H..H...|.
\t0x0010 c3                                               .
"""

AMD64_EXPECTED = """\
\t.file 1 "./example.go"
\t.loc 1 3 0
\tTEXT\tmain.compute(SB), NOSPLIT|ABIInternal, $0-8
\tFUNCDATA\t$0, gclocals·g2BeySu+wFnoycgXfElmcg==(SB)
\t.loc 1 4 0
\tXORL\tCX, CX
\tJMP\tmain_compute_pc10
main_compute_pc4:
\t.loc 1 5 0
\tADDQ\tCX, AX
\t.loc 1 4 0
\tINCQ\tCX
main_compute_pc10:
\tCMPQ\tCX, $10
\tJLT\tmain_compute_pc4
\t.loc 1 7 0
\tRET"""


@pytest.fixture
def amd64_listing() -> str:
    """Raw -S output for a small loop."""
    return AMD64_LISTING


@pytest.fixture
def amd64_expected() -> str:
    """Annotated form of amd64_listing."""
    return AMD64_EXPECTED


@pytest.fixture
def worked_listing() -> list[str]:
    """Minimal listing without hex addresses."""
    return [
        "00000 (src.go:3) TEXT main.compute(SB), $0-0",
        "00000 (src.go:3) MOVQ $1, AX",
        "00004 (src.go:4) JMP 12",
        "00008 (src.go:5) ADDQ $1, AX",
        "00012 (src.go:6) RET",
    ]


@pytest.fixture(autouse=True)
def clean_golisting_env(monkeypatch):
    """Keep the developer's GOLISTING_* settings out of the tests."""
    for name in (
        "GOLISTING_COMPILER_ID",
        "GOLISTING_GO",
        "GOLISTING_GOROOT",
        "GOLISTING_GOARCH",
        "GOLISTING_GOOS",
        "GOLISTING_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)
