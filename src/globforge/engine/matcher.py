"""Backtracking matcher over compiled glob patterns."""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .compiler import compile
from .errors import AllocationError
from .models import DEFAULT_OPTIONS, MatchOptions, NegationMode, Pattern
from .nodes import SEPARATORS, Group, Literal, Node, Range, Symbol


@dataclass(frozen=True)
class _Frame:
    """Where to resume once a group alternative has been fully matched."""

    nodes: tuple[Node, ...]
    index: int
    parent: _Frame | None


class _Matcher:
    """Per-call matching state over one decoded input."""

    def __init__(self, runes: str, options: MatchOptions) -> None:
        self.runes = runes
        self.options = options

    def run(self, nodes: tuple[Node, ...]) -> int | None:
        end = len(self.runes) if self.options.anchored else None
        return self.match(nodes, 0, 0, None, end)

    def match(
        self,
        nodes: tuple[Node, ...],
        index: int,
        pos: int,
        frame: _Frame | None,
        end: int | None,
    ) -> int | None:
        """Match ``nodes[index:]`` and then everything *frame* resumes.

        Returns the cursor position after the first successful path, or None.
        When *end* is set a path only succeeds if it stops exactly there.
        """
        runes = self.runes
        size = len(runes)
        while True:
            if index == len(nodes):
                if frame is None:
                    if end is not None and pos != end:
                        return None
                    return pos
                nodes, index, frame = frame.nodes, frame.index, frame.parent
                continue

            node = nodes[index]
            if node is Symbol.SLASH:
                if pos >= size or runes[pos] not in SEPARATORS:
                    return None
                pos += 1
            elif node is Symbol.ANY_CHAR:
                if pos >= size or runes[pos] in SEPARATORS:
                    return None
                pos += 1
            elif node is Symbol.ANY_TEXT:
                return self._any_text(nodes, index + 1, pos, frame, end)
            elif node is Symbol.GLOBSTAR:
                return self._globstar(nodes, index + 1, pos, frame, end)
            elif isinstance(node, Literal):
                if not runes.startswith(node.text, pos):
                    return None
                pos += len(node.text)
            elif isinstance(node, Range):
                if pos >= size or not node.contains(runes[pos]):
                    return None
                pos += 1
            elif isinstance(node, Group):
                after = _Frame(nodes, index + 1, frame)
                if node.negate:
                    return self._negated(node, pos, after, end)
                for alternative in node.patterns:
                    found = self.match(alternative, 0, pos, after, end)
                    if found is not None:
                        return found
                return None
            else:  # pragma: no cover - Node is a closed union
                raise TypeError(f"unknown node {node!r}")
            index += 1

    def _segment_end(self, pos: int) -> int:
        runes = self.runes
        while pos < len(runes) and runes[pos] not in SEPARATORS:
            pos += 1
        return pos

    def _any_text(
        self, nodes: tuple[Node, ...], index: int, pos: int, frame: _Frame | None, end: int | None
    ) -> int | None:
        # shortest expansion first, never past the end of the segment
        for stop in range(pos, self._segment_end(pos) + 1):
            found = self.match(nodes, index, stop, frame, end)
            if found is not None:
                return found
        return None

    def _globstar(
        self, nodes: tuple[Node, ...], index: int, pos: int, frame: _Frame | None, end: int | None
    ) -> int | None:
        found = self.match(nodes, index, pos, frame, end)
        if found is not None:
            return found
        runes = self.runes
        for stop in range(pos + 1, len(runes)):
            if runes[stop] in SEPARATORS:
                found = self.match(nodes, index, stop, frame, end)
                if found is not None:
                    return found
        if end is not None and end > pos:
            # anchored: the globstar may also run to the end of the input
            return self.match(nodes, index, end, frame, end)
        return None

    def _negated(self, group: Group, pos: int, after: _Frame, end: int | None) -> int | None:
        if self.options.negation is NegationMode.SHORT_CIRCUIT:
            for alternative in group.patterns:
                if self.match(alternative, 0, pos, None, None) is not None:
                    return None
            return pos
        if pos >= len(self.runes):
            return None
        for alternative in group.patterns:
            if self.match(alternative, 0, pos, None, pos + 1) is not None:
                return None
        return self.match(after.nodes, after.index, pos + 1, after.parent, end)


def _decode(text: str | bytes) -> str:
    if isinstance(text, bytes):
        return text.decode("utf-8")
    return text


def match_prefix(
    pattern: Pattern | str, text: str | bytes, options: MatchOptions | None = None
) -> int | None:
    """Return how many runes of *text* the first successful path consumed.

    ``None`` means no match. A pattern given as text is compiled for this
    call only and disposed afterwards.
    """
    if not isinstance(pattern, Pattern):
        with compile(pattern) as compiled:
            return match_prefix(compiled, text, options)
    nodes = pattern.nodes
    try:
        return _Matcher(_decode(text), options or DEFAULT_OPTIONS).run(nodes)
    except MemoryError as exc:
        raise AllocationError(f"out of memory matching {pattern.source!r}") from exc
    except RecursionError as exc:
        raise AllocationError(f"backtracking stack exhausted matching {pattern.source!r}") from exc


def is_match(
    pattern: Pattern | str, text: str | bytes, options: MatchOptions | None = None
) -> bool:
    return match_prefix(pattern, text, options) is not None


def match_all(
    texts: Sequence[str], pattern: Pattern | str, options: MatchOptions | None = None
) -> list[bool]:
    if not isinstance(pattern, Pattern):
        with compile(pattern) as compiled:
            return match_all(texts, compiled, options)
    return [is_match(pattern, text, options) for text in texts]


def filter_matches(
    texts: Sequence[str],
    pattern: Pattern | str,
    invert: bool = False,
    options: MatchOptions | None = None,
) -> list[str]:
    flags = match_all(texts, pattern, options)
    return [text for text, flag in zip(texts, flags) if flag is not invert]
