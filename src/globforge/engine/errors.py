"""Exceptions raised while compiling or matching glob patterns."""
from __future__ import annotations


class GlobError(Exception):
    """Base class for every error raised by globforge."""


class CompileError(GlobError):
    """The pattern text is not valid glob syntax."""

    def __init__(self, message: str, index: int) -> None:
        super().__init__(f"{message} at index {index}")
        self.index = index


class ExpectedError(CompileError):
    def __init__(self, expected: str, got: str | None, index: int) -> None:
        found = "end of pattern" if got is None else repr(got)
        super().__init__(f"expected {expected!r} but found {found}", index)
        self.expected = expected
        self.got = got


class UnexpectedEndError(CompileError):
    def __init__(self, index: int) -> None:
        super().__init__("unexpected end of pattern", index)


class AllocationError(GlobError):
    """Memory ran out while compiling a pattern or matching input."""
