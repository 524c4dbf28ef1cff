"""Grammar primitives — the mismatch error, token helpers, ordered alternatives.

Every rule in the domain layer has the same shape::

    rule(text: str, pos: int) -> tuple[value, new_pos]

and raises :class:`GrammarMismatch` when it does not match at *pos*.
Rules never mutate anything, so they can be combined freely and called
concurrently.

INVARIANT: ``first_match`` tries alternatives strictly in the order given.
Reordering a rule list changes which ambiguous inputs succeed.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")

Rule = Callable[[str, int], tuple[T, int]]

_SPACES = re.compile(r"\s*")
_DIGITS = re.compile(r"[0-9]+")


class GrammarMismatch(ValueError):
    """The single parse error kind: input did not match the grammar.

    Attributes:
        text: The full input being parsed.
        position: Offset into *text* where matching failed.
        expected: Human-readable name of what was expected at *position*.
        rule: Name of the top-level alternative that produced the error,
            when known.
    """

    def __init__(
        self,
        text: str,
        position: int,
        expected: str,
        *,
        rule: str | None = None,
    ) -> None:
        self.text = text
        self.position = position
        self.expected = expected
        self.rule = rule
        super().__init__(self._describe())

    @property
    def remaining(self) -> str:
        """The unconsumed input suffix."""
        return self.text[self.position :]

    def _describe(self) -> str:
        where = f"at position {self.position}"
        if self.remaining:
            where += f" ({self.remaining!r})"
        else:
            where += " (end of input)"
        prefix = f"{self.rule}: " if self.rule else ""
        return f"{prefix}expected {self.expected} {where}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "position": self.position,
            "remaining": self.remaining,
            "expected": self.expected,
            "rule": self.rule,
        }


# ---------------------------------------------------------------------------
# Three-way parse result
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Full(Generic[T]):
    """The entire input was consumed."""

    value: T


@dataclass(frozen=True)
class Partial(Generic[T]):
    """A valid value was parsed but *remaining* input was left over."""

    value: T
    remaining: str


@dataclass(frozen=True)
class Failed:
    """No rule matched."""

    error: GrammarMismatch


ParseResult = Full[T] | Partial[T] | Failed


def run_rule(rule: Rule[T], text: str) -> ParseResult[T]:
    """Apply *rule* at the start of *text* and classify the outcome."""
    try:
        value, pos = rule(text, 0)
    except GrammarMismatch as exc:
        return Failed(exc)
    if pos == len(text):
        return Full(value)
    return Partial(value, text[pos:])


# ---------------------------------------------------------------------------
# Token helpers
# ---------------------------------------------------------------------------


def space0(text: str, pos: int) -> int:
    """Skip zero or more whitespace characters."""
    return _SPACES.match(text, pos).end()  # type: ignore[union-attr]


def space1(text: str, pos: int) -> int:
    """Skip one or more whitespace characters."""
    end = space0(text, pos)
    if end == pos:
        raise GrammarMismatch(text, pos, "whitespace")
    return end


def tag(text: str, pos: int, literal: str) -> int:
    """Match *literal* exactly at *pos*."""
    if not text.startswith(literal, pos):
        raise GrammarMismatch(text, pos, repr(literal))
    return pos + len(literal)


def digits(text: str, pos: int) -> tuple[int, int]:
    """Match one or more ASCII digits as a non-negative integer."""
    match = _DIGITS.match(text, pos)
    if match is None:
        raise GrammarMismatch(text, pos, "digits")
    try:
        value = int(match.group())
    except ValueError as exc:  # beyond the interpreter's int-parsing digit limit
        raise GrammarMismatch(text, pos, "a shorter number") from exc
    return value, match.end()


def first_match(
    text: str,
    pos: int,
    alternatives: Sequence[tuple[str, Rule[T]]],
) -> tuple[T, int]:
    """Try each named alternative in order; the first success wins.

    When every alternative fails, re-raise the mismatch that got furthest
    into the input, tagged with the name of the alternative that produced it.
    Ties go to the earlier alternative.
    """
    furthest: GrammarMismatch | None = None
    furthest_rule = ""
    for name, rule in alternatives:
        try:
            return rule(text, pos)
        except GrammarMismatch as exc:
            if furthest is None or exc.position > furthest.position:
                furthest = exc
                furthest_rule = name
    if furthest is None:
        raise GrammarMismatch(text, pos, "input")
    raise GrammarMismatch(text, furthest.position, furthest.expected, rule=furthest_rule)
