"""Node types making up a compiled glob pattern."""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Union

SEPARATORS = frozenset("/\\")


class Symbol(enum.Enum):
    SLASH = "/"
    GLOBSTAR = "**"
    ANY_CHAR = "?"
    ANY_TEXT = "*"

    def __repr__(self) -> str:
        return f"Symbol.{self.name}"


@dataclass(frozen=True)
class Literal:
    """Exact rune sequence that must appear at the cursor."""

    text: str

    def __post_init__(self) -> None:
        if not self.text:
            raise ValueError("Literal text must not be empty")


@dataclass(frozen=True)
class Range:
    """Inclusive code-point interval matching a single rune."""

    low: str
    high: str

    def __post_init__(self) -> None:
        if len(self.low) != 1 or len(self.high) != 1:
            raise ValueError("Range bounds must be single characters")
        if self.low > self.high:
            raise ValueError(f"Range {self.low!r}-{self.high!r} is inverted")

    def contains(self, ch: str) -> bool:
        return self.low <= ch <= self.high


@dataclass(frozen=True)
class Group:
    """Ordered alternatives; ``{a,b}`` and ``[...]`` both compile to this.

    Each alternative is itself a node sequence. For bracket classes every
    alternative holds exactly one single-rune :class:`Literal` or one
    :class:`Range`.
    """

    patterns: tuple[tuple[Node, ...], ...]
    negate: bool = False

    def __post_init__(self) -> None:
        if not self.patterns:
            raise ValueError("Group requires at least one alternative")


Node = Union[Symbol, Literal, Range, Group]


def node_to_json(node: Node) -> dict[str, object]:
    if isinstance(node, Symbol):
        return {"kind": "symbol", "symbol": node.name}
    if isinstance(node, Literal):
        return {"kind": "literal", "text": node.text}
    if isinstance(node, Range):
        return {"kind": "range", "low": node.low, "high": node.high}
    return {
        "kind": "group",
        "negate": node.negate,
        "patterns": [[node_to_json(child) for child in alt] for alt in node.patterns],
    }


def describe(nodes: tuple[Node, ...]) -> str:
    """Render a node sequence on one line, e.g. ``Literal('a') SLASH ANY_TEXT``."""
    parts: list[str] = []
    for node in nodes:
        if isinstance(node, Symbol):
            parts.append(node.name)
        elif isinstance(node, Literal):
            parts.append(f"Literal({node.text!r})")
        elif isinstance(node, Range):
            parts.append(f"Range({node.low!r}, {node.high!r})")
        else:
            alts = " | ".join(describe(alt) for alt in node.patterns)
            prefix = "!" if node.negate else ""
            parts.append(f"{prefix}Group({alts})")
    return " ".join(parts)
