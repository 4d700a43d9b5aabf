"""globforge glob pattern compiler and matcher."""

from collections.abc import Sequence

from .engine.compiler import compile, dispose
from .engine.errors import (
    AllocationError,
    CompileError,
    ExpectedError,
    GlobError,
    UnexpectedEndError,
)
from .engine.matcher import filter_matches, is_match, match_all, match_prefix
from .engine.models import MatchOptions, NegationMode, Pattern
from .engine.nodes import Group, Literal, Node, Range, Symbol

__version__ = "0.1.0"


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point mirroring :func:`globforge.cli.main`."""

    from .cli import main as cli_main

    return cli_main(argv)


__all__ = [
    "AllocationError",
    "CompileError",
    "ExpectedError",
    "GlobError",
    "Group",
    "Literal",
    "MatchOptions",
    "NegationMode",
    "Node",
    "Pattern",
    "Range",
    "Symbol",
    "UnexpectedEndError",
    "compile",
    "dispose",
    "filter_matches",
    "is_match",
    "main",
    "match_all",
    "match_prefix",
]
