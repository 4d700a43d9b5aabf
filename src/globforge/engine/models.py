"""Options and the compiled pattern container."""
from __future__ import annotations

import enum
from dataclasses import dataclass

from .nodes import Node, describe


class NegationMode(str, enum.Enum):
    """How a negated bracket class such as ``[!c]`` behaves.

    CONSUME: match exactly one rune that no alternative matches, then carry
    on with the rest of the pattern.
    SHORT_CIRCUIT: legacy behaviour; report success immediately, without
    consuming a rune or looking at later nodes, whenever no alternative
    matches at the cursor.
    """
    CONSUME = "consume"
    SHORT_CIRCUIT = "short-circuit"


@dataclass(frozen=True)
class MatchOptions:
    """Knobs for a single match call.

    anchored: require the whole input to be consumed. By default a match
    succeeds once every node is satisfied, whatever input remains.
    """
    anchored: bool = False
    negation: NegationMode = NegationMode.CONSUME


DEFAULT_OPTIONS = MatchOptions()


class Pattern:
    """A compiled glob pattern.

    Only :func:`globforge.compile` builds these, so every instance holds a
    node sequence that parsed successfully. The sequence is never modified
    after compilation and a pattern can be shared between threads.
    ``dispose`` drops it; a disposed pattern can no longer be matched.
    """
    __slots__ = ("source", "_nodes")

    def __init__(self, *args: object, **kwargs: object) -> None:
        raise TypeError("Pattern instances are created by globforge.compile()")

    @classmethod
    def _compiled(cls, source: str, nodes: tuple[Node, ...]) -> Pattern:
        pattern = object.__new__(cls)
        pattern.source = source
        pattern._nodes = nodes
        return pattern

    def __repr__(self) -> str:
        state = " disposed" if self._nodes is None else ""
        return f"<Pattern {self.source!r}{state}>"

    @property
    def nodes(self) -> tuple[Node, ...]:
        if self._nodes is None:
            raise ValueError(f"pattern {self.source!r} has been disposed")
        return self._nodes

    @property
    def disposed(self) -> bool:
        return self._nodes is None

    def dispose(self) -> None:
        self._nodes = None

    def __enter__(self) -> Pattern:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.dispose()

    def __len__(self) -> int:
        return len(self.nodes)

    def __str__(self) -> str:
        return describe(self.nodes)

    def is_match(self, text: str | bytes, options: MatchOptions | None = None) -> bool:
        from .matcher import is_match

        return is_match(self, text, options)
