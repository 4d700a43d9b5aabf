"""Tests for :mod:`globforge.engine.compiler`."""

import sys

import pytest

from globforge.engine.compiler import compile, dispose
from globforge.engine.errors import (
    AllocationError,
    CompileError,
    ExpectedError,
    UnexpectedEndError,
)
from globforge.engine.nodes import Group, Literal, Range, Symbol


def _nodes(pattern: str) -> list:
    return list(compile(pattern).nodes)


def test_empty_pattern_has_no_nodes() -> None:
    assert _nodes("") == []


@pytest.mark.parametrize(
    "pattern,expected",
    [
        ("foo/bar", [Literal("foo"), Symbol.SLASH, Literal("bar")]),
        (
            "foo/*/*.bar",
            [Literal("foo"), Symbol.SLASH, Symbol.ANY_TEXT, Symbol.SLASH, Symbol.ANY_TEXT, Literal(".bar")],
        ),
        ("foo/**/bar", [Literal("foo"), Symbol.SLASH, Symbol.GLOBSTAR, Symbol.SLASH, Literal("bar")]),
        ("?at", [Symbol.ANY_CHAR, Literal("at")]),
        ("***", [Symbol.GLOBSTAR, Symbol.ANY_TEXT]),
        ("a,b}]", [Literal("a,b}]")]),
        ("日本/*", [Literal("日本"), Symbol.SLASH, Symbol.ANY_TEXT]),
    ],
)
def test_symbols_and_literals(pattern: str, expected: list) -> None:
    assert _nodes(pattern) == expected


def test_braces_split_on_commas() -> None:
    assert _nodes("{foo,bar}") == [
        Group(((Literal("foo"),), (Literal("bar"),)), negate=False)
    ]


def test_brace_alternatives_are_sub_patterns() -> None:
    assert _nodes("{*.py,src/**}") == [
        Group(
            (
                (Symbol.ANY_TEXT, Literal(".py")),
                (Literal("src"), Symbol.SLASH, Symbol.GLOBSTAR),
            )
        )
    ]


def test_nested_braces() -> None:
    inner = Group(((Literal("b"),), (Literal("c"),)))
    assert _nodes("{a,{b,c}d}") == [Group(((Literal("a"),), (inner, Literal("d"))))]


def test_empty_brace_alternative_is_allowed() -> None:
    assert _nodes("x{a,}") == [Literal("x"), Group(((Literal("a"),), ()))]


def test_bracket_class_with_range() -> None:
    assert _nodes("[ab0-9]") == [
        Group(((Literal("a"),), (Literal("b"),), (Range("0", "9"),)), negate=False)
    ]


def test_negated_bracket_class() -> None:
    assert _nodes("[!c]at") == [Group(((Literal("c"),),), negate=True), Literal("at")]


@pytest.mark.parametrize(
    "pattern,members",
    [
        ("[a-]", [Literal("a"), Literal("-")]),
        ("[-a]", [Literal("-"), Literal("a")]),
        ("[\\]]", [Literal("]")]),
        ("[\\!x]", [Literal("!"), Literal("x")]),
        ("[a\\-z]", [Literal("a"), Literal("-"), Literal("z")]),
        ("[/]", [Literal("/")]),
        ("[α-ω]", [Range("α", "ω")]),
    ],
)
def test_bracket_members(pattern: str, members: list) -> None:
    (group,) = _nodes(pattern)
    assert group.negate is False
    assert [alt[0] for alt in group.patterns] == members


@pytest.mark.parametrize(
    "pattern,expected",
    [
        ("\\*foo", [Literal("*foo")]),
        ("foo\\*", [Literal("foo*")]),
        ("a\\\\b", [Literal("a\\b")]),
        ("\\{a\\,b\\}", [Literal("{a,b}")]),
        ("{a\\,b,c}", [Group(((Literal("a,b"),), (Literal("c"),)))]),
        ("foo\\bar", [Literal("foo"), Symbol.SLASH, Literal("bar")]),
        ("\\x", [Symbol.SLASH, Literal("x")]),
    ],
)
def test_escapes(pattern: str, expected: list) -> None:
    assert _nodes(pattern) == expected


@pytest.mark.parametrize(
    "pattern,expected,got,index",
    [
        ("{foo", "}", None, 4),
        ("{a,b", "}", None, 4),
        ("[ab", "]", None, 3),
        ("[", "]", None, 1),
        ("[a-", "]", None, 3),
        ("{}", "pattern", "}", 1),
        ("[]", "character class member", "]", 1),
        ("[!]", "character class member", "]", 2),
    ],
)
def test_expected_errors(pattern: str, expected: str, got: str | None, index: int) -> None:
    with pytest.raises(ExpectedError) as info:
        compile(pattern)
    assert info.value.expected == expected
    assert info.value.got == got
    assert info.value.index == index


def test_inverted_range_is_rejected() -> None:
    with pytest.raises(ExpectedError) as info:
        compile("[z-a]")
    assert info.value.got == "a"


@pytest.mark.parametrize("pattern", ["\\", "foo\\", "[a\\", "{a\\"])
def test_dangling_escape(pattern: str) -> None:
    with pytest.raises(UnexpectedEndError):
        compile(pattern)


def test_compile_errors_share_a_base_class() -> None:
    for pattern in ("{", "\\"):
        with pytest.raises(CompileError):
            compile(pattern)


def test_compile_accepts_bytes() -> None:
    assert compile(b"foo/*").nodes == (Literal("foo"), Symbol.SLASH, Symbol.ANY_TEXT)


def test_compile_is_deterministic_across_dispose() -> None:
    first = compile("src/{a,b}/[!x]*")
    nodes = first.nodes
    dispose(first)
    assert first.disposed
    second = compile("src/{a,b}/[!x]*")
    assert second.nodes == nodes


def test_memory_error_becomes_allocation_error(monkeypatch: pytest.MonkeyPatch) -> None:
    from globforge.engine import compiler

    def _boom(self: compiler.PatternParser) -> tuple:
        raise MemoryError

    monkeypatch.setattr(compiler.PatternParser, "parse", _boom)
    with pytest.raises(AllocationError) as info:
        compile("foo")
    assert isinstance(info.value.__cause__, MemoryError)


def test_deeply_nested_braces_become_allocation_error() -> None:
    depth = sys.getrecursionlimit()
    with pytest.raises(AllocationError) as info:
        compile("{" * depth + "a" + "}" * depth)
    assert isinstance(info.value.__cause__, RecursionError)
