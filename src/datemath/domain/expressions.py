"""Top-level expression grammar and the four expression shapes.

Rules are tried in this exact priority; the first success wins:

1. anchor + one or more signed operations   ``Jan 2, 2021 + 15 weeks``
2. anchor - anchor                          ``Mar 31, 2021 - Mar 24, 2021``
3. relative expression                      ``2 weeks and 3 days ago``
4. bare anchor                              ``tomorrow``
5. period + zero or more signed operations  ``1 day + 2 months``

Rule 1 precedes rule 2 so that ``<date> - 3 days`` is a subtraction, and
rule 2 precedes rule 4 so that a difference is not read as a lone anchor
with unparsed trailing text.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from functools import partial
from typing import Any

from datemath.domain.anchors import Anchor, parse_anchor
from datemath.domain.grammar import ParseResult, first_match, run_rule, space0, tag
from datemath.domain.periods import (
    Period,
    PeriodOp,
    parse_period,
    parse_period_op,
    parse_period_ops,
)
from datemath.domain.sentences import parse_relative


@dataclass(frozen=True)
class PeriodChain:
    """A period, then signed operations, relative to the reference date."""

    base: Period
    rest: tuple[PeriodOp, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "shape": "period_chain",
            "base": self.base.to_dict(),
            "operations": [op.to_dict() for op in self.rest],
        }


@dataclass(frozen=True)
class AnchorOnly:
    """A single anchor date."""

    anchor: Anchor

    def to_dict(self) -> dict[str, Any]:
        return {"shape": "anchor", "anchor": self.anchor.to_dict()}


@dataclass(frozen=True)
class AnchorWithChain:
    """An anchor date followed by one or more signed operations."""

    anchor: Anchor
    first: PeriodOp
    rest: tuple[PeriodOp, ...] = ()

    @property
    def operations(self) -> tuple[PeriodOp, ...]:
        return (self.first, *self.rest)

    def to_dict(self) -> dict[str, Any]:
        return {
            "shape": "anchor_with_operations",
            "anchor": self.anchor.to_dict(),
            "operations": [op.to_dict() for op in self.operations],
        }


@dataclass(frozen=True)
class AnchorDiff:
    """The unsigned number of days between two anchors."""

    start: Anchor
    end: Anchor

    def to_dict(self) -> dict[str, Any]:
        return {
            "shape": "difference",
            "start": self.start.to_dict(),
            "end": self.end.to_dict(),
        }


Expression = PeriodChain | AnchorOnly | AnchorWithChain | AnchorDiff


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------


def _anchor_with_operations(text: str, pos: int, *, reference: date) -> tuple[Expression, int]:
    anchor, pos = parse_anchor(text, pos, reference=reference)
    first, pos = parse_period_op(text, pos)
    rest, pos = parse_period_ops(text, pos)
    return AnchorWithChain(anchor, first, rest), pos


def _difference(text: str, pos: int, *, reference: date) -> tuple[Expression, int]:
    start, pos = parse_anchor(text, pos, reference=reference)
    pos = space0(text, tag(text, space0(text, pos), "-"))
    end, pos = parse_anchor(text, pos, reference=reference)
    return AnchorDiff(start, end), pos


def _relative(text: str, pos: int, *, reference: date) -> tuple[Expression, int]:
    (anchor, first, rest), pos = parse_relative(text, pos, reference=reference)
    return AnchorWithChain(anchor, first, rest), pos


def _anchor(text: str, pos: int, *, reference: date) -> tuple[Expression, int]:
    anchor, pos = parse_anchor(text, pos, reference=reference)
    return AnchorOnly(anchor), pos


def _period_chain(text: str, pos: int) -> tuple[Expression, int]:
    base, pos = parse_period(text, pos)
    rest, pos = parse_period_ops(text, pos)
    return PeriodChain(base, rest), pos


def expression_rules(reference: date) -> tuple[tuple[str, Any], ...]:
    """The ordered top-level alternatives, bound to *reference*."""
    return (
        ("anchor with operations", partial(_anchor_with_operations, reference=reference)),
        ("date difference", partial(_difference, reference=reference)),
        ("relative expression", partial(_relative, reference=reference)),
        ("anchor", partial(_anchor, reference=reference)),
        ("period chain", _period_chain),
    )


def parse_expression(text: str, *, reference: date | None = None) -> ParseResult[Expression]:
    """Parse *text* into an expression.

    Args:
        text: The expression, e.g. ``"2 weeks and 1 day ago"``.
        reference: Reference date used to fill in the year of partial
            literal dates such as ``"January 15"``. Defaults to the local
            date; pass it explicitly for deterministic results.

    Returns:
        ``Full`` when all input was consumed, ``Partial`` when an
        expression was parsed but input remains, ``Failed`` otherwise.
    """
    rules = expression_rules(reference or date.today())
    return run_rule(lambda source, pos: first_match(source, pos, rules), text)
