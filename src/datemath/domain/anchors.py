"""Anchor dates — keyword dates and literal calendar dates.

An anchor is the calendar point an expression is measured from. Keyword
anchors (``today``, ``now``, ``yesterday``, ``tomorrow``) stay symbolic
until evaluation supplies a reference date; literal anchors are concrete
as soon as they are parsed.

Literal formats, tried in order (first success wins):

1. ``YYYY-MM-DD`` — one or two digit month/day.
2. ``Mon D, YYYY`` / ``Month D, YYYY``.
3. ``Month D`` — the year comes from the reference date.
4. ``MM/DD/YYYY``.

INVARIANT: the ISO form is matched on its own, greedily, before anything
splits the input on ``-``. All other formats are matched against the text
up to the next ``+``/``-`` (or the end of input).
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, timedelta
from enum import StrEnum
from typing import Any, Self

from datemath.domain.grammar import GrammarMismatch

_MONTHS: dict[str, int] = {
    "jan": 1,
    "january": 1,
    "feb": 2,
    "february": 2,
    "mar": 3,
    "march": 3,
    "apr": 4,
    "april": 4,
    "may": 5,
    "jun": 6,
    "june": 6,
    "jul": 7,
    "july": 7,
    "aug": 8,
    "august": 8,
    "sep": 9,
    "september": 9,
    "oct": 10,
    "october": 10,
    "nov": 11,
    "november": 11,
    "dec": 12,
    "december": 12,
}

_ISO_DATE = re.compile(r"\s*([0-9]{4})-([0-9]{1,2})-([0-9]{1,2})(?![0-9])")
_MONTH_DAY_YEAR = re.compile(r"([A-Za-z]+)\s+([0-9]{1,2}),\s*([0-9]{4})")
_MONTH_DAY = re.compile(r"([A-Za-z]+)\s+([0-9]{1,2})")
_NUMERIC_DATE = re.compile(r"([0-9]{1,2})/([0-9]{1,2})/([0-9]{4})")
_OPERATOR = re.compile(r"[+-]")


class AnchorKind(StrEnum):
    """How an anchor resolves against the reference date."""

    TODAY = "today"
    YESTERDAY = "yesterday"
    TOMORROW = "tomorrow"
    LITERAL = "literal"


_KEYWORD_OFFSETS: dict[AnchorKind, int] = {
    AnchorKind.TODAY: 0,
    AnchorKind.YESTERDAY: -1,
    AnchorKind.TOMORROW: 1,
}


@dataclass(frozen=True)
class Anchor:
    """A calendar reference point, symbolic or literal."""

    kind: AnchorKind
    value: date | None = None

    def __post_init__(self) -> None:
        if (self.kind is AnchorKind.LITERAL) != (self.value is not None):
            msg = f"Anchor {self.kind!s} cannot have value {self.value!r}"
            raise ValueError(msg)

    @classmethod
    def literal(cls, value: date) -> Self:
        return cls(AnchorKind.LITERAL, value)

    def resolve(self, today: date) -> date:
        """Concrete date for this anchor given the reference *today*."""
        if self.value is not None:
            return self.value
        return today + timedelta(days=_KEYWORD_OFFSETS[self.kind])

    def __str__(self) -> str:
        if self.value is not None:
            return self.value.isoformat()
        return str(self.kind)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"kind": str(self.kind)}
        if self.value is not None:
            data["date"] = self.value.isoformat()
        return data


TODAY = Anchor(AnchorKind.TODAY)
YESTERDAY = Anchor(AnchorKind.YESTERDAY)
TOMORROW = Anchor(AnchorKind.TOMORROW)

# "now" is an alias of "today".
KEYWORDS: tuple[tuple[str, Anchor], ...] = (
    ("today", TODAY),
    ("now", TODAY),
    ("yesterday", YESTERDAY),
    ("tomorrow", TOMORROW),
)


# ---------------------------------------------------------------------------
# Literal date formats
# ---------------------------------------------------------------------------


def _month_number(name: str) -> int | None:
    return _MONTHS.get(name.lower())


def _from_month_day_year(match: re.Match[str], reference: date) -> tuple[int, int, int] | None:
    month = _month_number(match.group(1))
    if month is None:
        return None
    return int(match.group(3)), month, int(match.group(2))


def _from_month_day(match: re.Match[str], reference: date) -> tuple[int, int, int] | None:
    month = _month_number(match.group(1))
    if month is None:
        return None
    return reference.year, month, int(match.group(2))


def _from_numeric(match: re.Match[str], reference: date) -> tuple[int, int, int] | None:
    return int(match.group(3)), int(match.group(1)), int(match.group(2))


_FieldBuilder = Callable[[re.Match[str], date], tuple[int, int, int] | None]

DATE_FORMATS: tuple[tuple[str, re.Pattern[str], _FieldBuilder], ...] = (
    ("month day, year", _MONTH_DAY_YEAR, _from_month_day_year),
    ("month day", _MONTH_DAY, _from_month_day),
    ("mm/dd/yyyy", _NUMERIC_DATE, _from_numeric),
)


def _calendar_date(text: str, pos: int, fields: tuple[int, int, int]) -> date:
    year, month, day = fields
    try:
        return date(year, month, day)
    except ValueError as exc:
        raise GrammarMismatch(text, pos, "a valid calendar date") from exc


def parse_literal(text: str, pos: int, *, reference: date) -> tuple[date, int]:
    """Match one literal calendar date at *pos*.

    Digits that match a format but do not form a real date (month 20,
    day 32, Feb 30) fail here rather than being clamped.
    """
    iso = _ISO_DATE.match(text, pos)
    if iso is not None:
        fields = (int(iso.group(1)), int(iso.group(2)), int(iso.group(3)))
        return _calendar_date(text, pos, fields), iso.end()

    operator = _OPERATOR.search(text, pos)
    segment = text[pos : operator.start() if operator else len(text)]
    candidate = segment.strip()
    # Surrounding whitespace is left unconsumed, as after a keyword anchor.
    end = pos + (len(segment) - len(segment.lstrip())) + len(candidate)
    for _name, pattern, builder in DATE_FORMATS:
        match = pattern.fullmatch(candidate)
        if match is None:
            continue
        fields = builder(match, reference)
        if fields is None:
            continue
        return _calendar_date(text, pos, fields), end
    raise GrammarMismatch(text, pos, "a date")


def parse_anchor(text: str, pos: int, *, reference: date) -> tuple[Anchor, int]:
    """Match a keyword anchor, falling back to a literal date."""
    for keyword, anchor in KEYWORDS:
        if text.startswith(keyword, pos):
            return anchor, pos + len(keyword)
    value, end = parse_literal(text, pos, reference=reference)
    return Anchor.literal(value), end


def parse_literal_date(text: str, *, reference: date) -> date:
    """Parse *text* as exactly one literal date, nothing more.

    This is the contract for overriding the reference date from the
    environment: the same formats as anchor literals, no keywords.
    """
    value, end = parse_literal(text, 0, reference=reference)
    if text[end:].strip():
        raise GrammarMismatch(text, end, "end of input")
    return value
