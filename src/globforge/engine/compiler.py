"""Glob pattern compiler.

Turns pattern text into a flat tuple of nodes (see :mod:`.nodes`)::

    foo/*/*.bar  ->  Literal('foo') SLASH ANY_TEXT SLASH ANY_TEXT Literal('.bar')

Grammar, longest match first at each position:

    /          SLASH
    \\x        x literally when x is one of  / \\ * ? { } [ ] , ! -
    \\         SLASH when followed by any other rune
    **         GLOBSTAR
    *          ANY_TEXT
    ?          ANY_CHAR
    {a,b,...}  Group of sub-patterns, each parsed with this same grammar
    [...]      Group of single runes and x-y ranges, [!...] negated
    other      Literal run
"""
from __future__ import annotations

import logging

from .errors import AllocationError, ExpectedError, UnexpectedEndError
from .models import Pattern
from .nodes import Group, Literal, Node, Range, Symbol

logger = logging.getLogger(__name__)

ESCAPE = "\\"
ESCAPABLE = frozenset("/\\*?{}[],!-")
# Runes that end a literal run at any nesting depth.
_OPERATORS = frozenset("/\\*?{[")
_BRACE_TERMINATORS = frozenset(",}")
_NO_TERMINATORS: frozenset[str] = frozenset()


class PatternParser:
    """Single-use recursive descent parser over the runes of one pattern."""

    def __init__(self, pattern: str) -> None:
        self.runes = pattern
        self.pos = 0

    # ========= PUBLIC ==============
    def parse(self) -> tuple[Node, ...]:
        return self.parse_sequence(_NO_TERMINATORS)

    # ========= Grammar ==========
    # sequence := { token }   (stops before a terminator rune)
    def parse_sequence(self, terminators: frozenset[str]) -> tuple[Node, ...]:
        nodes: list[Node] = []
        while not self.at_end() and self.peek() not in terminators:
            nodes.append(self.parse_token(terminators))
        return tuple(nodes)

    def parse_token(self, terminators: frozenset[str]) -> Node:
        ch = self.peek()
        if ch == "/":
            self.next()
            return Symbol.SLASH
        if ch == ESCAPE:
            after = self.peek(1)
            if after is None:
                raise UnexpectedEndError(self.pos + 1)
            if after not in ESCAPABLE:
                self.next()
                return Symbol.SLASH
            return self.parse_literal(terminators)
        if ch == "*":
            self.next()
            if self.peek() == "*":
                self.next()
                return Symbol.GLOBSTAR
            return Symbol.ANY_TEXT
        if ch == "?":
            self.next()
            return Symbol.ANY_CHAR
        if ch == "{":
            return self.parse_braces()
        if ch == "[":
            return self.parse_brackets()
        return self.parse_literal(terminators)

    # literal := { rune | '\' escapable }
    def parse_literal(self, terminators: frozenset[str]) -> Literal:
        buf: list[str] = []
        while not self.at_end():
            ch = self.peek()
            if ch == ESCAPE:
                after = self.peek(1)
                if after is None:
                    raise UnexpectedEndError(self.pos + 1)
                if after not in ESCAPABLE:
                    # a bare backslash is a separator, handled by parse_token
                    break
                self.pos += 2
                buf.append(after)
                continue
            if ch in _OPERATORS or ch in terminators:
                break
            buf.append(ch)
            self.next()
        return Literal("".join(buf))

    # braces := '{' sequence { ',' sequence } '}'
    def parse_braces(self) -> Group:
        self.expect("{")
        if self.peek() == "}":
            raise ExpectedError("pattern", "}", self.pos)
        alternatives: list[tuple[Node, ...]] = []
        while True:
            alternatives.append(self.parse_sequence(_BRACE_TERMINATORS))
            ch = self.peek()
            if ch == ",":
                self.next()
                continue
            self.expect("}")
            return Group(tuple(alternatives), negate=False)

    # brackets := '[' [ '!' ] member { member } ']'
    # member   := rune [ '-' rune ]
    def parse_brackets(self) -> Group:
        self.expect("[")
        negate = False
        if self.peek() == "!":
            self.next()
            negate = True
        alternatives: list[tuple[Node, ...]] = []
        while self.peek() != "]":
            low = self.class_rune()
            if self.peek() == "-" and self.peek(1) not in (None, "]"):
                self.next()
                high = self.class_rune()
                if high < low:
                    raise ExpectedError(f"range end >= {low!r}", high, self.pos - 1)
                alternatives.append((Range(low, high),))
            else:
                alternatives.append((Literal(low),))
        if not alternatives:
            raise ExpectedError("character class member", "]", self.pos)
        self.expect("]")
        return Group(tuple(alternatives), negate=negate)

    def class_rune(self) -> str:
        ch = self.peek()
        if ch is None:
            raise ExpectedError("]", None, self.pos)
        self.next()
        if ch == ESCAPE:
            ch = self.peek()
            if ch is None:
                raise UnexpectedEndError(self.pos)
            self.next()
        return ch

    # ========= Helpers ==========

    def at_end(self) -> bool:
        return self.pos >= len(self.runes)

    def peek(self, offset: int = 0) -> str | None:
        index = self.pos + offset
        if index < len(self.runes):
            return self.runes[index]
        return None

    def next(self) -> str:
        ch = self.runes[self.pos]
        self.pos += 1
        return ch

    def expect(self, ch: str) -> str:
        found = self.peek()
        if found != ch:
            raise ExpectedError(ch, found, self.pos)
        return self.next()


def compile(pattern: str | bytes) -> Pattern:  # noqa: A001
    """Compile *pattern* into a reusable :class:`Pattern`.

    Raises :class:`~.errors.CompileError` for malformed syntax and
    :class:`~.errors.AllocationError` if memory or the parser stack runs out.
    """
    if isinstance(pattern, bytes):
        pattern = pattern.decode("utf-8")
    try:
        nodes = PatternParser(pattern).parse()
    except MemoryError as exc:
        raise AllocationError(f"out of memory compiling {pattern[:64]!r}") from exc
    except RecursionError as exc:
        raise AllocationError(f"groups nested too deeply in {pattern[:64]!r}") from exc
    logger.debug("compiled %r into %d node(s)", pattern, len(nodes))
    return Pattern._compiled(pattern, nodes)


def dispose(pattern: Pattern) -> None:
    pattern.dispose()
