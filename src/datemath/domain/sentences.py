"""Sentence and relative-expression grammar.

Sentences are English lists of periods, tried in order:

- ``1 year, 2 months, and 3 days`` — two or more comma-terminated
  periods, then ``and`` and a final period.
- ``2 weeks and 3 days`` — exactly two periods joined by ``and``.
- ``3 days`` — a single period.

A relative expression is a sentence followed by one trailing phrase that
fixes both the anchor and the direction of every period in the sentence::

    <sentence> ago              -> today, subtract
    <sentence> from <anchor>    -> anchor, add     ("from now" == from today)
    <sentence> after <anchor>   -> anchor, add
    <sentence> before <anchor>  -> anchor, subtract
"""

from __future__ import annotations

from datetime import date

from datemath.domain.anchors import TODAY, Anchor, parse_anchor
from datemath.domain.grammar import GrammarMismatch, first_match, space1, tag
from datemath.domain.periods import Period, PeriodOp, Sign, parse_period

Sentence = tuple[Period, tuple[Period, ...]]

# (phrase, sign, takes an anchor)
TRAILERS: tuple[tuple[str, Sign, bool], ...] = (
    (" ago", Sign.SUBTRACT, False),
    (" from ", Sign.ADD, True),
    (" after ", Sign.ADD, True),
    (" before ", Sign.SUBTRACT, True),
)


def _conjunction(text: str, pos: int) -> int:
    pos = space1(text, pos)
    pos = tag(text, pos, "and")
    return space1(text, pos)


def _period_and_comma(text: str, pos: int) -> tuple[Period, int]:
    period, pos = parse_period(text, pos)
    return period, tag(text, pos, ",")


def _comma_list(text: str, pos: int) -> tuple[Sentence, int]:
    first, pos = _period_and_comma(text, pos)
    periods = [first]
    while True:
        try:
            period, end = _period_and_comma(text, space1(text, pos))
        except GrammarMismatch:
            break
        periods.append(period)
        pos = end
    if len(periods) < 2:
        raise GrammarMismatch(text, pos, "another comma-separated period")
    pos = _conjunction(text, pos)
    last, pos = parse_period(text, pos)
    return (periods[0], (*periods[1:], last)), pos


def _pair(text: str, pos: int) -> tuple[Sentence, int]:
    first, pos = parse_period(text, pos)
    pos = _conjunction(text, pos)
    second, pos = parse_period(text, pos)
    return (first, (second,)), pos


def _single(text: str, pos: int) -> tuple[Sentence, int]:
    period, pos = parse_period(text, pos)
    return (period, ()), pos


SENTENCE_FORMS = (
    ("comma list", _comma_list),
    ("pair", _pair),
    ("single period", _single),
)


def parse_sentence(text: str, pos: int) -> tuple[Sentence, int]:
    """Match a period sentence as ``(base, rest)``."""
    return first_match(text, pos, SENTENCE_FORMS)


def parse_relative(
    text: str,
    pos: int,
    *,
    reference: date,
) -> tuple[tuple[Anchor, PeriodOp, tuple[PeriodOp, ...]], int]:
    """Match ``<sentence> ago|from|after|before ...``.

    Returns the anchor, the first signed operation and the remaining ones,
    all carrying the direction the trailing phrase implies.
    """
    (base, rest), pos = parse_sentence(text, pos)
    for phrase, sign, takes_anchor in TRAILERS:
        if not text.startswith(phrase, pos):
            continue
        pos += len(phrase)
        anchor = TODAY
        if takes_anchor:
            anchor, pos = parse_anchor(text, pos, reference=reference)
        first = PeriodOp(sign, base)
        return (anchor, first, tuple(PeriodOp(sign, period) for period in rest)), pos
    raise GrammarMismatch(text, pos, "'ago', 'from', 'after' or 'before'")
